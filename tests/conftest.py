"""Shared test fixtures."""

import json
import subprocess
import sys
from fnmatch import fnmatch
from pathlib import Path

import pytest

# Add project root to path for package imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from disktrend.core.logging import get_log_path  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Fixed clock used across tests
NOW = 1_700_000_000


class MockContext:
    """Mock Context for testing without real system access."""

    def __init__(
        self,
        tools_available: list[str] | None = None,
        command_outputs: dict[tuple, str | Exception | subprocess.CompletedProcess] | None = None,
        file_contents: dict[str, str] | None = None,
        read_errors: dict[str, Exception] | None = None,
        write_errors: dict[str, Exception] | None = None,
        now: int = NOW,
    ):
        self.tools_available = set(tools_available or [])
        self.command_outputs = command_outputs or {}
        self.file_contents = file_contents or {}
        self.read_errors = read_errors or {}
        self.write_errors = write_errors or {}
        self.clock = now
        self.commands_run: list[list[str]] = []
        self.dirs_made: list[str] = []

    def check_tool(self, name: str) -> bool:
        """Check if tool is in mocked available list."""
        return name in self.tools_available

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """Return mocked command output."""
        self.commands_run.append(cmd)
        key = tuple(cmd)
        if key not in self.command_outputs:
            raise KeyError(f"No mock output for command: {cmd}")

        output = self.command_outputs[key]
        if isinstance(output, Exception):
            raise output
        if isinstance(output, subprocess.CompletedProcess):
            if check and output.returncode != 0:
                raise subprocess.CalledProcessError(
                    output.returncode, cmd, output.stdout, output.stderr
                )
            return output

        return subprocess.CompletedProcess(
            cmd,
            returncode=0,
            stdout=output,
            stderr="",
        )

    def read_file(self, path: str) -> str:
        """Return mocked file content."""
        if path in self.read_errors:
            raise self.read_errors[path]
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        return self.file_contents[path]

    def write_file(self, path: str, content: str) -> None:
        """Store content in the mocked file map."""
        for pattern, error in self.write_errors.items():
            if fnmatch(path, pattern):
                raise error
        self.file_contents[path] = content

    def makedirs(self, path: str) -> None:
        """Record directory creation."""
        self.dirs_made.append(path)

    def now(self) -> int:
        """Return the mocked clock."""
        return self.clock


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()


LOG_LEVELS = {"debug": 0, "info": 1, "warning": 2, "error": 3}


def query_logs(base_path: Path, min_level: str = "debug") -> list[dict]:
    """Read today's disk_trend.jsonl entries at or above min_level."""
    log_file = get_log_path(base_path)
    if not log_file.exists():
        return []

    threshold = LOG_LEVELS[min_level]
    entries = [json.loads(line) for line in log_file.read_text().splitlines() if line.strip()]
    return [e for e in entries if LOG_LEVELS[e["level"]] >= threshold]
