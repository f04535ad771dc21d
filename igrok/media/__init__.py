"""
Media Layer.

This package is responsible for fetching audio with the downloader, finding
the resulting files on disk, and reading their stream information.
"""

from .acquisition import Acquirer
from .discovery import DiscoveredFileSet, MediaFile, discover
from .info import probe_duration

__all__ = ["Acquirer", "DiscoveredFileSet", "MediaFile", "discover", "probe_duration"]
