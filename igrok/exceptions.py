"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class IgrokError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(IgrokError):
    """Raised for issues related to configuration loading or validation."""


class DependencyMissingError(IgrokError):
    """Raised when a required external tool is not installed."""


class NoIdentifierError(IgrokError):
    """Raised when no URL was given on the command line or at the prompt."""


class InvalidIdentifierError(IgrokError):
    """Raised when the provided URL is not a recognized YouTube URL."""


class ProcessLaunchError(IgrokError):
    """Raised when an external executable cannot be started at all."""


class AcquisitionError(IgrokError):
    """Raised when the downloader fails to fetch the requested audio."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class DiscoveryError(IgrokError):
    """Raised when the output directory cannot be scanned for audio files."""


class NoMediaFoundError(DiscoveryError):
    """Raised when the output directory holds no playable audio files."""


class PlaybackError(IgrokError):
    """Base exception for failures while playing a file."""


class PrimaryLaunchError(PlaybackError):
    """Raised when the media player could not be started."""


class PlaybackInterruptedError(PlaybackError):
    """
    Raised when the media player exits with a non-zero status, e.g. because it
    was stopped with Ctrl+C.
    """

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode
