"""Per-mount sample history persistence."""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from disktrend.forecast.samples import History, HistoryFormatError, format_history, parse_history

if TYPE_CHECKING:
    from disktrend.core.context import Context
    from disktrend.core.logging import CheckLogger


HISTORY_SUFFIX = ".history"


class StoreError(Exception):
    """History could not be read or written."""

    pass


class SampleStore(Protocol):
    """Key-value store of histories keyed by mount identifier."""

    def load(self, key: str) -> History:
        ...

    def save(self, key: str, history: History) -> None:
        ...


class MemorySampleStore:
    """Dict-backed store, for tests and one-shot runs."""

    def __init__(self, records: dict[str, History] | None = None):
        self.records: dict[str, History] = {k: list(v) for k, v in (records or {}).items()}

    def load(self, key: str) -> History:
        return list(self.records.get(key, []))

    def save(self, key: str, history: History) -> None:
        self.records[key] = list(history)


class FileSampleStore:
    """
    One text file per mount under a data directory.

    Each file holds one "timestamp,used_kb,total_kb" line per sample,
    oldest first. A save replaces the whole file.
    """

    def __init__(
        self,
        data_dir: str | Path,
        context: "Context | None" = None,
        logger: "CheckLogger | None" = None,
    ):
        if context is None:
            from disktrend.core.context import Context
            context = Context()
        self.data_dir = Path(data_dir)
        self.context = context
        self.logger = logger

    def path_for(self, key: str) -> Path:
        """File holding the history for key."""
        return self.data_dir / f"{key}{HISTORY_SUFFIX}"

    def load(self, key: str) -> History:
        """
        Load the history stored under key.

        Returns:
            Stored samples, or an empty history if there is no record
            or the record is corrupt

        Raises:
            StoreError: If the record exists but cannot be read
        """
        path = self.path_for(key)
        try:
            content = self.context.read_file(str(path))
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as e:
            self._discard(path, e)
            return []
        except OSError as e:
            raise StoreError(f"Cannot read history {path}: {e}") from e

        try:
            return parse_history(content)
        except HistoryFormatError as e:
            self._discard(path, e)
            return []

    def _discard(self, path: Path, error: Exception) -> None:
        if self.logger is not None:
            self.logger.warning("Discarding corrupt history", path=str(path), error=str(error))

    def save(self, key: str, history: History) -> None:
        """
        Replace the history stored under key.

        Raises:
            StoreError: If the data directory or file cannot be written
        """
        path = self.path_for(key)
        try:
            self.context.makedirs(str(self.data_dir))
            self.context.write_file(str(path), format_history(history))
        except OSError as e:
            raise StoreError(f"Cannot write history {path}: {e}") from e
