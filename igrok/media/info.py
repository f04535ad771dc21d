"""
Reads basic stream information from audio files for display purposes.
"""

import logging
from pathlib import Path

from mutagen import File as MutagenFile
from mutagen import MutagenError

log = logging.getLogger(__name__)


def probe_duration(path: Path) -> float | None:
    """
    Returns the length of an audio file in seconds.

    Args:
        path: Path to an mp3, m4a or opus file.

    Returns:
        The duration, or None when mutagen cannot parse the file.
    """
    try:
        audio = MutagenFile(path)
    except (MutagenError, OSError) as e:
        log.debug(f"Could not read stream info for '{path}': {e}")
        return None

    if audio is None or audio.info is None:
        return None
    length = getattr(audio.info, "length", 0) or 0
    return float(length) if length > 0 else None
