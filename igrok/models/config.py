"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pathvalidate import ValidationError as PathValidationError
from pathvalidate import validate_filepath
from pydantic import BaseModel, Field, field_validator

DEFAULT_OUTPUT_DIR = "~/Music/youtube-dl"

# Container formats the downloader may produce and discovery will pick up
SUPPORTED_AUDIO_FORMATS = ("mp3", "m4a", "opus")

# Upper bound on how many files a single run will play
MAX_FILES_LIMIT = 10


class PlayerConfig(BaseModel):
    """A validated configuration model for the application."""

    # Output
    output_dir: Path = Field(Path(DEFAULT_OUTPUT_DIR), validate_default=True)

    # Download Settings
    audio_format: str = "mp3"
    audio_quality: int = 0

    # Playback Settings
    visualizer: bool = True
    volume: int = 100
    # Seconds to let the player open the audio device before the visualizer
    # attaches. A heuristic, not a readiness guarantee.
    companion_delay: float = 0.5
    max_files: int = MAX_FILES_LIMIT

    # External tools
    downloader: str = "yt-dlp"
    player: str = "mpv"
    visualizer_command: str = "cava"

    # Logging
    json_log: bool = False

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("output_dir", mode="before")
    @classmethod
    def validate_output_dir(cls, v: str | Path) -> Path:
        """Expands '~' and rejects paths that cannot exist on this platform."""
        if not str(v).strip():
            raise ValueError("Output directory cannot be empty.")
        path = Path(str(v).strip()).expanduser()
        try:
            validate_filepath(str(path), platform="auto")
        except PathValidationError as e:
            raise ValueError(f"Invalid output directory '{path}': {e}") from e
        return path

    @field_validator("audio_format")
    @classmethod
    def validate_audio_format(cls, v: str) -> str:
        """Ensures the downloader produces a format that will be discovered."""
        v = v.lower()
        if v not in SUPPORTED_AUDIO_FORMATS:
            raise ValueError(
                f"Audio format must be one of {', '.join(SUPPORTED_AUDIO_FORMATS)}."
            )
        return v

    @field_validator("audio_quality")
    @classmethod
    def validate_audio_quality(cls, v: int) -> int:
        """yt-dlp VBR quality: 0 is best, 10 is worst."""
        if v < 0 or v > 10:
            raise ValueError("Audio quality must be between 0 (best) and 10 (worst).")
        return v

    @field_validator("volume")
    @classmethod
    def validate_volume(cls, v: int) -> int:
        if v < 0 or v > 100:
            raise ValueError("Volume must be between 0 and 100.")
        return v

    @field_validator("companion_delay")
    @classmethod
    def validate_companion_delay(cls, v: float) -> float:
        if v < 0 or v > 10:
            raise ValueError("Visualizer delay must be between 0 and 10 seconds.")
        return v

    @field_validator("max_files")
    @classmethod
    def validate_max_files(cls, v: int) -> int:
        if v < 1 or v > MAX_FILES_LIMIT:
            raise ValueError(f"Max files must be between 1 and {MAX_FILES_LIMIT}.")
        return v

    @field_validator("downloader", "player", "visualizer_command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        if not v:
            raise ValueError("Executable name cannot be empty.")
        return v

    @property
    def tools(self) -> list[str]:
        """External executables this configuration needs on PATH."""
        required = [self.downloader, self.player]
        if self.visualizer:
            required.append(self.visualizer_command)
        return required

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
