"""
The main orchestrator for turning a URL into played audio: download, locate
the resulting files, then play them.
"""

import contextlib
import logging

from rich.console import Console

from igrok.exceptions import AcquisitionError
from igrok.media.acquisition import Acquirer
from igrok.media.discovery import DiscoveredFileSet, discover
from igrok.models.config import PlayerConfig
from igrok.models.stats import PlaybackStats
from igrok.process import Launcher, ProcessLauncher
from igrok.utils.structured_logger import PlaybackEventLogger

from .orchestrator import PlaybackOrchestrator

log = logging.getLogger(__name__)


class PlaybackPipeline:
    """Coordinates acquisition, discovery and playback for a single URL."""

    def __init__(
        self,
        config: PlayerConfig,
        launcher: Launcher | None = None,
        events: PlaybackEventLogger | None = None,
        console: Console | None = None,
    ):
        self.config = config
        self.launcher = launcher or ProcessLauncher()
        self.events = events
        self.console = console
        self.acquirer = Acquirer(self.launcher, config)
        self.orchestrator = PlaybackOrchestrator(self.launcher, config, events=events)

    async def fetch(self, url: str) -> DiscoveredFileSet:
        """
        Downloads the URL into the output directory and returns the newest
        audio files found there.

        Raises:
            AcquisitionError: If the downloader fails. Discovery is skipped.
            DiscoveryError: If no audio files can be found afterwards.
        """
        target_dir = self.config.output_dir
        if self.events:
            self.events.acquisition_started(url, target_dir)

        spinner = (
            self.console.status("[green]Fetching metadata...[/green]", spinner="dots")
            if self.console
            else contextlib.nullcontext()
        )
        with spinner:
            try:
                await self.acquirer.acquire(url, target_dir)
            except AcquisitionError as e:
                if self.events:
                    self.events.acquisition_failed(url, str(e), e.returncode)
                raise

        files = discover(target_dir, limit=self.config.max_files)
        if self.events:
            self.events.files_discovered(files.paths)
        log.info(f"[green]✓[/green] Downloaded {len(files)} file(s)")
        return files

    async def run(self, url: str) -> PlaybackStats:
        """Fetches and plays everything for `url`. Any failure aborts the run."""
        files = await self.fetch(url)
        stats = await self.orchestrator.play_all(files)
        if self.events:
            self.events.run_completed(stats.files_played, stats.elapsed_s)
        return stats
