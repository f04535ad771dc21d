"""
Data Persistence Layer.

This package is responsible for the on-disk INI configuration file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
