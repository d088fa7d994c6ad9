"""Structured output helper for check results."""

import json
from typing import Any


class Output:
    """
    Helper for check output.

    Collects a status, a one-line summary, performance data and any
    structured data, then prints them once as a plugin status line or
    as a JSON document.
    """

    def __init__(self):
        self.data: dict[str, Any] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.status: str | None = None
        self.perfdata: str = ""
        self._summary: str | None = None
        self._printed: bool = False

    def emit(self, data: dict[str, Any]) -> None:
        """Store structured output data."""
        self.data.update(data)

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Record a warning message."""
        self.warnings.append(message)

    def set_status(self, status: str) -> None:
        """Set the overall status (OK, CRITICAL, UNKNOWN)."""
        self.status = status

    def set_summary(self, summary: str) -> None:
        """Set a one-line summary."""
        self._summary = summary

    def set_perfdata(self, perfdata: str) -> None:
        """Set the performance data section."""
        self.perfdata = perfdata

    @property
    def summary(self) -> str:
        """Get summary or generate from errors/warnings."""
        if self._summary:
            return self._summary
        if self.errors:
            return self.errors[0]
        if self.warnings:
            return self.warnings[0]
        return "ok"

    @property
    def line(self) -> str:
        """Single status line: 'STATUS: summary | perfdata'."""
        status = self.status or ("UNKNOWN" if self.errors else "OK")
        text = f"{status}: {self.summary}"
        if self.perfdata:
            text += f" | {self.perfdata}"
        return text

    def to_json(self) -> str:
        """Return status, summary, perfdata and data as JSON string."""
        document: dict[str, Any] = {
            "status": self.status or ("UNKNOWN" if self.errors else "OK"),
            "summary": self.summary,
            "perfdata": self.perfdata,
        }
        document.update(self.data)
        if self.errors:
            document["errors"] = self.errors
        if self.warnings:
            document["warnings"] = self.warnings
        return json.dumps(document, indent=2, default=str)

    def render(self, format: str = "plain") -> None:
        """Print output in the specified format.

        Args:
            format: Output format - "json" or "plain"
        """
        if self._printed:
            return
        self._printed = True

        if format == "json":
            print(self.to_json())
        else:
            print(self.line)
