"""
Structured logging system for better log analysis and debugging.
Writes JSON-lines event logs with per-run context.
"""

import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class StructuredLogger:
    """
    Logger that writes machine-parseable JSON-lines logs.

    Usage:
        logger = StructuredLogger("igrok", log_dir=Path("logs"))
        logger.info("playback_completed", file="song.mp3", returncode=0)
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        enable_json: bool = True,
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            log_dir: Directory for JSON log files (None = disabled)
            enable_json: Enable JSON file logging
        """
        self.name = name
        self.log_dir = log_dir
        self.enable_json = enable_json and log_dir is not None
        self.log_path: Path | None = None

        self._json_file = None
        if self.enable_json:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_path = log_dir / f"igrok_{timestamp}.jsonl"
            self._json_file = open(self.log_path, "a", encoding="utf-8")  # noqa: SIM115

        # Run context (added to all log entries)
        self._session_context: dict[str, Any] = {
            "session_id": f"{int(time.time())}_{id(self)}",
            "start_time": datetime.now().isoformat(),
        }

    def set_session_context(self, **kwargs) -> None:
        """Set run-level context that appears in all logs."""
        self._session_context.update(kwargs)

    def _write_json(self, level: str, event: str, **context) -> None:
        """Write structured log entry to JSON file."""
        if not self._json_file or self._json_file.closed:
            return

        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "event": event,
            **self._session_context,
            **context,
        }

        try:
            self._json_file.write(json.dumps(entry, default=str) + "\n")
            self._json_file.flush()
        except (OSError, TypeError, ValueError) as e:
            # Fallback to stderr if JSON logging fails
            print(f"JSON logging failed: {e}", file=sys.stderr)

    def _log(self, level: int, event: str, **context) -> None:
        if self.enable_json:
            self._write_json(logging.getLevelName(level), event, **context)

    def info(self, event: str, **context) -> None:
        """Log info event."""
        self._log(logging.INFO, event, **context)

    def warning(self, event: str, **context) -> None:
        """Log warning event."""
        self._log(logging.WARNING, event, **context)

    def error(self, event: str, **context) -> None:
        """Log error event."""
        self._log(logging.ERROR, event, **context)

    def close(self) -> None:
        """Close JSON log file."""
        if self._json_file and not self._json_file.closed:
            self._json_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class PlaybackEventLogger:
    """Specialized logger for acquisition and playback events."""

    def __init__(self, logger: StructuredLogger):
        self.logger = logger

    def acquisition_started(self, url: str, output_dir: Path):
        # Every later event of this run carries the URL
        self.logger.set_session_context(url=url)
        self.logger.info("acquisition_started", output_dir=str(output_dir))

    def acquisition_failed(self, url: str, error: str, returncode: int | None):
        self.logger.error(
            "acquisition_failed", url=url, error=error, returncode=returncode
        )

    def files_discovered(self, files: list[Path]):
        self.logger.info(
            "files_discovered", count=len(files), files=[str(p) for p in files]
        )

    def playback_started(self, path: Path, index: int, total: int):
        self.logger.info("playback_started", file=str(path), index=index, total=total)

    def playback_completed(self, path: Path, duration_s: float):
        self.logger.info(
            "playback_completed", file=str(path), duration_s=round(duration_s, 2)
        )

    def playback_failed(self, path: Path, error: str):
        self.logger.error("playback_failed", file=str(path), error=error)

    def companion_failed(self, path: Path, error: str):
        self.logger.warning("companion_failed", file=str(path), error=error)

    def run_completed(self, files_played: int, duration_s: float):
        self.logger.info(
            "run_completed", files_played=files_played, duration_s=round(duration_s, 2)
        )


def create_structured_logger(
    log_dir: Path | None = None, enable_json: bool = False
) -> tuple[StructuredLogger, PlaybackEventLogger]:
    """
    Create the structured loggers. Events only go to the JSON file; the
    console already shows the human-readable equivalents.

    Returns:
        Tuple of (base_logger, playback_logger)
    """
    base = StructuredLogger("igrok.events", log_dir=log_dir, enable_json=enable_json)
    return base, PlaybackEventLogger(base)
