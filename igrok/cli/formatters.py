"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from igrok.models.config import PlayerConfig
from igrok.models.stats import PlaybackStats
from igrok.utils.formatting import format_duration


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "DependencyMissingError": [
            "• Install the missing tool with your package manager.",
            "• Use --no-viz to run without the cava visualizer.",
        ],
        "NoIdentifierError": [
            "• Pass a URL: `igrok play <URL>`.",
        ],
        "InvalidIdentifierError": [
            "• Only youtube.com, youtu.be and music.youtube.com URLs are supported.",
            "• Quote the URL so your shell does not split it at '&'.",
        ],
        "AcquisitionError": [
            "• Check your internet connection.",
            "• The video may be private, removed, or region-locked.",
            "• Update yt-dlp: YouTube changes frequently break older versions.",
        ],
        "NoMediaFoundError": [
            "• yt-dlp finished but no mp3/m4a/opus file appeared.",
            "• Make sure ffmpeg is installed for audio extraction.",
        ],
        "PrimaryLaunchError": [
            "• Make sure mpv is installed and on your PATH.",
        ],
        "PlaybackInterruptedError": [
            "• Playback was stopped before the file finished.",
            "• Remaining files in the queue were not played.",
        ],
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Run `igrok init --force` to restore the defaults.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_banner(console: Console):
    console.print()
    console.print(
        Panel(
            Text("Igrok", justify="center", style="bold"),
            border_style="cyan",
            box=box.DOUBLE,
            width=42,
        )
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        content += f"{key} = {value}\n"

    source = str(config_path) if config_path.is_file() else "built-in defaults"
    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{source}[/dim])",
            border_style="cyan",
        )
    )


def print_tool_table(config: PlayerConfig, missing: list[str]):
    """Displays which external tools were found on PATH."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    roles = {
        config.downloader: "Downloader",
        config.player: "Player",
        config.visualizer_command: "Visualizer",
    }
    for cmd, role in roles.items():
        if cmd in missing:
            status = "[red]✗ Not found[/red]"
        elif cmd == config.visualizer_command and not config.visualizer:
            status = "[dim]– Disabled[/dim]"
        else:
            status = "[green]✓ Installed[/green]"
        table.add_row(f"{role}:", f"{cmd}  {status}")

    console.print(Panel(table, title="[bold]External Tools[/bold]", border_style="cyan"))


def print_summary_panel(stats: PlaybackStats):
    """Displays the final summary of a fully successful run."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("✓ Played:", f"[bold green]{stats.files_played}[/bold green]")
    if stats.audio_duration_s > 0:
        stats_table.add_row(
            "Audio Length:", f"[cyan]{format_duration(stats.audio_duration_s)}[/cyan]"
        )
    stats_table.add_row(
        "Time Elapsed:", f"[blue]{format_duration(stats.elapsed_s)}[/blue]"
    )
    if stats.visualizer_failures > 0:
        stats_table.add_row(
            "⚠ No Visualizer:", f"[yellow]{stats.visualizer_failures}[/yellow]"
        )

    console.print()
    console.print(
        Panel(
            stats_table,
            title="🎵 [bold]Playback complete![/bold]",
            border_style="green",
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()
