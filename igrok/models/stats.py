"""
Dataclass for tracking playback session statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class PlaybackStats:
    """Tracks statistics for a playback run."""

    files_total: int = 0
    files_played: int = 0
    audio_duration_s: float = 0.0
    visualizer_failures: int = 0
    _start_time: float = field(default=0.0, repr=False)

    def __post_init__(self):
        self._start_time = time.monotonic()

    def record_played(self, duration_s: float | None) -> None:
        """Counts a file that played to completion."""
        self.files_played += 1
        if duration_s:
            self.audio_duration_s += duration_s

    @property
    def elapsed_s(self) -> float:
        return time.monotonic() - self._start_time
