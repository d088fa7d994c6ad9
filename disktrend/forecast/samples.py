"""Usage samples, histories and their on-disk line format."""

from dataclasses import dataclass
from urllib.parse import quote, unquote


class HistoryFormatError(Exception):
    """A stored history record could not be parsed."""

    pass


@dataclass(frozen=True)
class Sample:
    """One usage observation of a mount point."""

    timestamp: int
    used: int
    total: int

    def to_line(self) -> str:
        return f"{self.timestamp},{self.used},{self.total}"


# Samples of one mount, oldest first, in append order
History = list[Sample]

# Reserved key for "/"; quote() below never emits a literal "@"
ROOT_KEY = "@root"


def mount_id(path: str) -> str:
    """
    Derive a filesystem-safe storage key from a mount path.

    "/" maps to ROOT_KEY. Other paths lose their leading slash and are
    percent-encoded, so "/var/log" becomes "var%2Flog". The mapping is
    injective.
    """
    if path == "/":
        return ROOT_KEY
    return quote(path[1:] if path.startswith("/") else path, safe="")


def mount_path(key: str) -> str:
    """Inverse of mount_id."""
    if key == ROOT_KEY:
        return "/"
    return "/" + unquote(key)


def parse_line(line: str) -> Sample:
    """
    Parse one "timestamp,used_kb,total_kb" line.

    Raises:
        HistoryFormatError: If the line has the wrong shape or values
    """
    fields = line.strip().split(",")
    if len(fields) != 3:
        raise HistoryFormatError(f"Expected 3 fields, got {len(fields)}: {line!r}")
    try:
        timestamp, used, total = (int(f) for f in fields)
    except ValueError:
        raise HistoryFormatError(f"Non-integer field in {line!r}")
    if timestamp < 0 or used < 0 or total < 0:
        raise HistoryFormatError(f"Negative value in {line!r}")
    return Sample(timestamp=timestamp, used=used, total=total)


def parse_history(content: str) -> History:
    """Parse a stored record; blank lines are ignored."""
    return [parse_line(line) for line in content.splitlines() if line.strip()]


def format_history(history: History) -> str:
    """Render a history as newline-terminated lines, oldest first."""
    return "".join(sample.to_line() + "\n" for sample in history)
