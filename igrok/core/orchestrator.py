"""
Plays a discovered set of files one after another.
"""

import logging

from rich.markup import escape

from igrok.exceptions import PlaybackError
from igrok.media.discovery import DiscoveredFileSet, MediaFile
from igrok.media.info import probe_duration
from igrok.models.config import PlayerConfig
from igrok.models.stats import PlaybackStats
from igrok.process import Launcher
from igrok.utils.formatting import format_duration, format_track_position
from igrok.utils.structured_logger import PlaybackEventLogger

from .session import PlaybackSession

log = logging.getLogger(__name__)


class PlaybackOrchestrator:
    """
    Runs one PlaybackSession per file, strictly in order. The first failed
    session aborts the run; later files are never started.
    """

    def __init__(
        self,
        launcher: Launcher,
        config: PlayerConfig,
        events: PlaybackEventLogger | None = None,
    ):
        self.launcher = launcher
        self.config = config
        self.events = events

    def create_session(self, media_file: MediaFile) -> PlaybackSession:
        return PlaybackSession(
            media_file,
            self.launcher,
            self.config,
            enable_companion=self.config.visualizer,
            events=self.events,
        )

    async def play_all(self, files: DiscoveredFileSet) -> PlaybackStats:
        """
        Plays every file in order.

        Returns:
            Statistics for the run, which only exist when every file played.

        Raises:
            PlaybackError: From the first session that failed.
        """
        stats = PlaybackStats(files_total=len(files))
        log.info("[bold green]Starting playback...[/bold green]")

        for index, media_file in enumerate(files, start=1):
            duration = probe_duration(media_file.path)
            length = f" [dim]({format_duration(duration)})[/dim]" if duration else ""
            log.info(
                f"[bold green]▶[/bold green] [bold]{escape(media_file.name)}[/bold] "
                f"{escape(format_track_position(index, len(files)))}{length}"
            )
            if self.events:
                self.events.playback_started(media_file.path, index, len(files))

            session = self.create_session(media_file)
            try:
                await session.run()
            except PlaybackError as e:
                if self.events:
                    self.events.playback_failed(media_file.path, str(e))
                raise

            if session.companion_error:
                stats.visualizer_failures += 1
            stats.record_played(duration)
            if self.events:
                self.events.playback_completed(media_file.path, duration or 0.0)

        return stats
