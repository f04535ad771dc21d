"""
Data Models Layer.

This package contains the Pydantic configuration model and the statistics
dataclass used throughout the application.
"""

from .config import PlayerConfig
from .stats import PlaybackStats

__all__ = ["PlayerConfig", "PlaybackStats"]
