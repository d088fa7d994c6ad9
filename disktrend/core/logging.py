"""JSONL logging for check runs."""

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any


DEFAULT_CHECK_NAME = "disk_trend"


def get_log_path(base_path: Path, check_name: str = DEFAULT_CHECK_NAME) -> Path:
    """
    Get the log file path for a check run.

    Args:
        base_path: Base directory for logs
        check_name: Name of the check

    Returns:
        Path to the log file: {base}/{date}/{check}.jsonl
    """
    today = date.today().isoformat()
    return Path(base_path) / today / f"{check_name}.jsonl"


class CheckLogger:
    """
    JSONL logger for check runs.

    Writes structured log entries to a JSONL file. The file is opened
    lazily on the first entry.
    """

    def __init__(self, log_path: Path, check_name: str = DEFAULT_CHECK_NAME):
        """
        Initialize logger.

        Args:
            log_path: Path to log file
            check_name: Name recorded in every entry
        """
        self.check_name = check_name
        self.log_path = Path(log_path)
        self._file = None

    @classmethod
    def in_directory(cls, base_path: Path, check_name: str = DEFAULT_CHECK_NAME) -> "CheckLogger":
        """Create a logger writing to today's file under base_path."""
        return cls(get_log_path(base_path, check_name), check_name=check_name)

    def open(self) -> "CheckLogger":
        """
        Open the log file now instead of on the first entry.

        Raises:
            OSError: If the log directory or file cannot be created
        """
        if self._file is None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, "a")
        return self

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        self.open()
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "check": self.check_name,
            "message": message,
            **extra,
        }
        self._file.write(json.dumps(entry, default=str) + "\n")
        self._file.flush()

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "CheckLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
