"""
Utilities for handling file paths and URL validation.
"""

import re
from pathlib import Path

from igrok.exceptions import InvalidIdentifierError

YOUTUBE_URL_PATTERN = re.compile(
    r"^(https?://)?(www\.)?(youtube\.com|youtu\.be|music\.youtube\.com)/.+"
)


def is_youtube_url(url: str) -> bool:
    """Checks whether a string looks like a YouTube video or playlist URL."""
    return bool(YOUTUBE_URL_PATTERN.match(url.strip()))


def validate_youtube_url(url: str) -> str:
    """
    Returns the stripped URL if it is a YouTube URL.

    Raises:
        InvalidIdentifierError: If the URL is not recognized.
    """
    url = url.strip()
    if not is_youtube_url(url):
        raise InvalidIdentifierError(f"Invalid YouTube URL: {url}")
    return url


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)
