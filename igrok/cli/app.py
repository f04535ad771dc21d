"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from igrok import __version__
from igrok.core.pipeline import PlaybackPipeline
from igrok.exceptions import ConfigurationError, IgrokError, NoIdentifierError
from igrok.storage.config_manager import ConfigManager
from igrok.utils.dependencies import check_dependencies, find_missing_tools
from igrok.utils.path import create_dir, validate_youtube_url
from igrok.utils.structured_logger import create_structured_logger

from .formatters import (
    print_banner,
    print_config,
    print_summary_panel,
    print_tool_table,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            show_time=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("igrok")

app = typer.Typer(
    name="igrok",
    help="Play YouTube audio with real-time visualization.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "igrok"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """igrok: play YouTube audio with real-time visualization."""
    if version:
        console.print(f"[bold]igrok[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("igrok").setLevel(log_level)

    if show_config:
        config_manager = ConfigManager(CONFIG_FILE)
        print_config(CONFIG_FILE, config_manager.get_config_as_dict())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _prompt_for_url() -> str:
    """Asks for a URL interactively."""
    try:
        url = console.input("[bold yellow] Enter URL: [/bold yellow]")
    except EOFError:
        url = ""
    url = url.strip()
    if not url:
        raise NoIdentifierError("No URL provided")
    return url


@app.command()
def play(
    url: str | None = typer.Argument(
        None, help="YouTube video or playlist URL. Prompted for when omitted."
    ),
    output: str | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Output directory for downloads (default ~/Music/youtube-dl).",
    ),
    no_viz: bool = typer.Option(
        False, "--no-viz", help="Skip the cava visualization."
    ),
    audio_format: str | None = typer.Option(
        None, "-f", "--format", help="Audio format to extract: mp3, m4a or opus."
    ),
    json_log: bool | None = typer.Option(
        None,
        "--json-log/--no-json-log",
        help="Write a JSON-lines event log to the config directory.",
    ),
):
    """Download a video or playlist and play it."""
    cli_options = {
        key: value
        for key, value in {
            "output_dir": output,
            "audio_format": audio_format,
            "json_log": json_log,
        }.items()
        if value is not None
    }
    if no_viz:
        cli_options["visualizer"] = False

    config = ConfigManager(CONFIG_FILE).load_config(cli_options)
    try:
        create_dir(config.output_dir)
    except OSError as e:
        raise ConfigurationError(f"Failed to create output directory: {e}") from e

    print_banner(console)

    console.print("[bold cyan]Checking dependencies...[/bold cyan]")
    check_dependencies(config.tools)
    console.print()

    if url is None:
        url = _prompt_for_url()
    url = validate_youtube_url(url)
    console.print("[green]✓[/green] URL validated")

    console.print("\n[bold cyan] Loading audio...[/bold cyan]")
    structured, events = create_structured_logger(
        CONFIG_DIR / "logs", enable_json=config.json_log
    )
    with structured:
        if structured.log_path:
            log.debug(f"Writing event log to {structured.log_path}")
        pipeline = PlaybackPipeline(
            config, events=events if config.json_log else None, console=console
        )
        stats = asyncio.run(pipeline.run(url))

    print_summary_panel(stats)


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Write a configuration file with the default settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    ConfigManager(CONFIG_FILE).save_new_config()
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command()
def diagnose():
    """Check the configuration and the external tools."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    issues_found = False

    if CONFIG_FILE.is_file():
        console.print(f"[green]✓[/] Config file exists at: [dim]{CONFIG_FILE}[/dim]")
    else:
        console.print("[yellow]○[/] No config file, using built-in defaults.")

    try:
        config = ConfigManager(CONFIG_FILE).load_config()
        console.print("[green]✓[/] Configuration is valid.")
    except IgrokError as e:
        console.print(f"[red]✗ Configuration validation failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    tools = [config.downloader, config.player, config.visualizer_command]
    missing = find_missing_tools(tools)
    print_tool_table(config, missing)
    if any(cmd in missing for cmd in config.tools):
        issues_found = True

    console.print()
    if not issues_found:
        console.print(
            "[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n"
        )
    else:
        console.print(
            "[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
        raise typer.Exit(code=1)
