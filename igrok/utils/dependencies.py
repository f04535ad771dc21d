"""
Pre-flight checks for the external tools the application shells out to.
"""

import logging
import shutil
from collections.abc import Iterable

from igrok.exceptions import DependencyMissingError

log = logging.getLogger(__name__)


def find_missing_tools(commands: Iterable[str]) -> list[str]:
    """Returns the commands that cannot be found on PATH, in input order."""
    missing = []
    for cmd in commands:
        location = shutil.which(cmd)
        if location:
            log.debug(f"Found '{cmd}' at {location}")
        else:
            missing.append(cmd)
    return missing


def check_dependencies(commands: Iterable[str]) -> None:
    """
    Verifies that every command is installed.

    Raises:
        DependencyMissingError: For the first command that is missing.
    """
    missing = find_missing_tools(commands)
    if missing:
        cmd = missing[0]
        raise DependencyMissingError(
            f"{cmd} is not installed. Install it with: sudo pacman -S {cmd}"
        )
