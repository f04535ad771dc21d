"""
Fetches audio from YouTube by driving the yt-dlp command-line tool.
"""

import logging
from pathlib import Path

from igrok.exceptions import AcquisitionError, ProcessLaunchError
from igrok.models.config import PlayerConfig
from igrok.process import Launcher, ProcessHandle

log = logging.getLogger(__name__)

OUTPUT_TEMPLATE = "%(title)s.%(ext)s"


class Acquirer:
    """
    Downloads and converts the audio of a video or playlist into a directory.

    The acquirer only reports success or failure. It never returns the
    produced paths; callers scan the directory afterwards.
    """

    def __init__(self, launcher: Launcher, config: PlayerConfig):
        self.launcher = launcher
        self.config = config

    def build_args(self, url: str, target_dir: Path) -> list[str]:
        """Builds the downloader argument list for one URL."""
        output_template = str(target_dir / OUTPUT_TEMPLATE)
        return [
            "-q",
            "-x",
            "--audio-format",
            self.config.audio_format,
            "--audio-quality",
            str(self.config.audio_quality),
            "-o",
            output_template,
            "--print",
            "after_move:filepath",
            url,
        ]

    async def acquire(self, url: str, target_dir: Path) -> None:
        """
        Runs the downloader to completion.

        Raises:
            AcquisitionError: If the downloader cannot start or exits non-zero.
        """
        args = self.build_args(url, target_dir)
        try:
            handle = await self.launcher.launch(
                self.config.downloader, args, silent=True, capture_output=True
            )
        except ProcessLaunchError as e:
            raise AcquisitionError(f"Loading failed: {e}") from e

        try:
            returncode = await handle.wait()
        except BaseException:
            await self._stop(handle)
            raise
        if returncode != 0:
            raise AcquisitionError(
                f"Loading failed ({self.config.downloader} exited with {returncode})",
                returncode=returncode,
            )

        # The downloader's own report is informational only.
        for line in getattr(handle, "output", "").splitlines():
            if line.strip():
                log.debug(f"Downloader reported: {line.strip()}")

    async def _stop(self, handle: ProcessHandle) -> None:
        """Kills and reaps a downloader that was abandoned mid-run."""
        if not handle.is_running:
            return
        log.debug(f"Stopping '{handle.name}'")
        try:
            handle.kill()
            await handle.wait()
        except (ProcessLookupError, OSError) as e:
            log.debug(f"Could not stop '{handle.name}': {e}")
