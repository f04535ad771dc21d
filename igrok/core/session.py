"""
Plays a single file with the media player, optionally accompanied by the
visualizer, and guarantees both processes are gone when the session ends.
"""

import asyncio
import logging
from enum import Enum

from igrok.exceptions import (
    PlaybackInterruptedError,
    PrimaryLaunchError,
    ProcessLaunchError,
)
from igrok.media.discovery import MediaFile
from igrok.models.config import PlayerConfig
from igrok.process import Launcher, ProcessHandle
from igrok.utils.structured_logger import PlaybackEventLogger

log = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    PRIMARY_STARTED = "primary_started"
    COMPANION_ATTEMPTED = "companion_attempted"
    PRIMARY_AWAITED = "primary_awaited"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.SUCCEEDED, SessionState.FAILED)


_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset({SessionState.PRIMARY_STARTED, SessionState.FAILED}),
    SessionState.PRIMARY_STARTED: frozenset(
        {
            SessionState.COMPANION_ATTEMPTED,
            SessionState.PRIMARY_AWAITED,
            SessionState.FAILED,
        }
    ),
    SessionState.COMPANION_ATTEMPTED: frozenset(
        {SessionState.PRIMARY_AWAITED, SessionState.FAILED}
    ),
    SessionState.PRIMARY_AWAITED: frozenset(
        {SessionState.SUCCEEDED, SessionState.FAILED}
    ),
    SessionState.SUCCEEDED: frozenset(),
    SessionState.FAILED: frozenset(),
}


class PlaybackSession:
    """
    Runs the player (and the visualizer, when enabled) for one file.

    Lifecycle:
        IDLE -> PRIMARY_STARTED -> [COMPANION_ATTEMPTED] -> PRIMARY_AWAITED
             -> SUCCEEDED | FAILED

    A visualizer that fails to start is only a warning. A visualizer that did
    start is killed as soon as the player exits, whatever the player's status.
    """

    def __init__(
        self,
        media_file: MediaFile,
        launcher: Launcher,
        config: PlayerConfig,
        enable_companion: bool | None = None,
        events: PlaybackEventLogger | None = None,
    ):
        self.media_file = media_file
        self.launcher = launcher
        self.config = config
        self.enable_companion = (
            config.visualizer if enable_companion is None else enable_companion
        )
        self.events = events

        self.state = SessionState.IDLE
        self.history: list[SessionState] = [SessionState.IDLE]
        self.primary: ProcessHandle | None = None
        self.companion: ProcessHandle | None = None
        self.companion_error: str | None = None
        self.returncode: int | None = None

    def build_player_args(self) -> list[str]:
        """Player flags: quiet, audio only, fixed volume, file last."""
        return [
            "--really-quiet",
            "--no-video",
            f"--volume={self.config.volume}",
            str(self.media_file.path),
        ]

    async def run(self) -> None:
        """
        Plays the file to completion.

        Raises:
            PrimaryLaunchError: If the player cannot be started.
            PlaybackInterruptedError: If the player exits with a non-zero status.
        """
        if self.state is not SessionState.IDLE:
            raise RuntimeError("A playback session can only be run once.")

        try:
            await self._start_primary()
            if self.enable_companion:
                await self._start_companion()
            self.returncode = await self.primary.wait()
            self._transition(SessionState.PRIMARY_AWAITED)
        except BaseException:
            # Launch failure or cancellation: nothing may outlive the session.
            await self._teardown()
            self._transition(SessionState.FAILED)
            raise

        await self._teardown()

        if self.returncode != 0:
            self._transition(SessionState.FAILED)
            raise PlaybackInterruptedError(
                f"Playback interrupted ({self.config.player} exited with "
                f"{self.returncode})",
                returncode=self.returncode,
            )
        self._transition(SessionState.SUCCEEDED)

    async def _start_primary(self) -> None:
        try:
            self.primary = await self.launcher.launch(
                self.config.player, self.build_player_args()
            )
        except ProcessLaunchError as e:
            raise PrimaryLaunchError(f"Failed to start {self.config.player}: {e}") from e
        self._transition(SessionState.PRIMARY_STARTED)

    async def _start_companion(self) -> None:
        # Give the player time to claim the audio device first.
        await asyncio.sleep(self.config.companion_delay)
        try:
            self.companion = await self.launcher.launch(self.config.visualizer_command)
        except ProcessLaunchError as e:
            self.companion_error = str(e)
            log.warning(
                f"[yellow]   {self.config.visualizer_command} failed to start[/yellow]"
            )
            log.debug(f"Visualizer launch error: {e}")
            if self.events:
                self.events.companion_failed(self.media_file.path, str(e))
        else:
            log.info(
                "[dim]   Visualization active (press 'q' in "
                f"{self.config.player} to stop)[/dim]"
            )
        self._transition(SessionState.COMPANION_ATTEMPTED)

    async def _teardown(self) -> None:
        """Kills and reaps the visualizer, and the player if it is still running."""
        await self._stop(self.companion)
        await self._stop(self.primary)

    async def _stop(self, handle: ProcessHandle | None) -> None:
        if handle is None or not handle.is_running:
            return
        try:
            handle.kill()
        except (ProcessLookupError, OSError) as e:
            log.debug(f"Could not kill '{handle.name}': {e}")
        try:
            await handle.wait()
        except (ProcessLookupError, OSError) as e:
            log.debug(f"Could not reap '{handle.name}': {e}")

    def _transition(self, new_state: SessionState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Invalid session transition {self.state.value} -> {new_state.value}"
            )
        log.debug(
            f"Session '{self.media_file.name}': "
            f"{self.state.value} -> {new_state.value}"
        )
        self.state = new_state
        self.history.append(new_state)
