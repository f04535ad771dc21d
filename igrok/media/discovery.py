"""
Locates the audio files a download produced by scanning the output directory.

The scan is a recency heuristic: the newest matching files are assumed to be
the ones just downloaded. Pre-existing files that were touched more recently
than the new ones will be picked up as well.
"""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from igrok.exceptions import DiscoveryError, NoMediaFoundError
from igrok.models.config import MAX_FILES_LIMIT, SUPPORTED_AUDIO_FORMATS

log = logging.getLogger(__name__)

AUDIO_EXTENSIONS = frozenset(f".{ext}" for ext in SUPPORTED_AUDIO_FORMATS)

# Sort key for files whose modification time cannot be read
UNKNOWN_MTIME = float("-inf")


@dataclass(frozen=True)
class MediaFile:
    """A local audio file and its last-modified time."""

    path: Path
    modified: float

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class DiscoveredFileSet:
    """A non-empty, most-recent-first sequence of media files."""

    files: tuple[MediaFile, ...]

    def __post_init__(self):
        if not self.files:
            raise ValueError("A discovered file set cannot be empty.")

    def __iter__(self) -> Iterator[MediaFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def __getitem__(self, index: int) -> MediaFile:
        return self.files[index]

    @property
    def paths(self) -> list[Path]:
        return [f.path for f in self.files]


def is_audio_file(path: Path) -> bool:
    """Checks the extension only; file contents are never inspected."""
    return path.suffix.lower() in AUDIO_EXTENSIONS


def _modified_time(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except OSError as e:
        log.debug(f"Could not read modification time of '{path}': {e}")
        return UNKNOWN_MTIME


def discover(target_dir: Path, limit: int = MAX_FILES_LIMIT) -> DiscoveredFileSet:
    """
    Finds the most recently modified audio files in `target_dir`.

    Args:
        target_dir: Directory to scan (not recursively).
        limit: Maximum number of files to return.

    Returns:
        Up to `limit` files, most recently modified first.

    Raises:
        DiscoveryError: If the directory cannot be read.
        NoMediaFoundError: If no audio files are present.
    """
    try:
        with os.scandir(target_dir) as entries:
            candidates = [
                Path(entry.path)
                for entry in entries
                if entry.is_file() and is_audio_file(Path(entry.name))
            ]
    except OSError as e:
        raise DiscoveryError(f"Could not read '{target_dir}': {e}") from e

    media = [MediaFile(path, _modified_time(path)) for path in candidates]
    media.sort(key=lambda m: m.modified)
    media.reverse()
    media = media[:limit]

    if not media:
        raise NoMediaFoundError("No files were Loaded")

    log.debug(f"Discovered {len(media)} file(s) in '{target_dir}'.")
    return DiscoveredFileSet(tuple(media))
