"""Execution context for testability."""

import shutil
import subprocess
import time
from pathlib import Path


class Context:
    """
    Wraps external calls for testability.

    In production: executes real commands and touches the real filesystem
    In tests: can be replaced with MockContext
    """

    def check_tool(self, name: str) -> bool:
        """Check if a tool exists in PATH."""
        return shutil.which(name) is not None

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        timeout: int | None = 60,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """
        Run a command and return result.

        Args:
            cmd: Command and arguments as list
            check: Raise on non-zero exit code
            timeout: Timeout in seconds
            **kwargs: Additional subprocess.run arguments

        Returns:
            CompletedProcess with stdout, stderr, returncode
        """
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=check,
            timeout=timeout,
            **kwargs,
        )

    def read_file(self, path: str) -> str:
        """Read file contents."""
        return Path(path).read_text()

    def write_file(self, path: str, content: str) -> None:
        """Replace file contents."""
        Path(path).write_text(content)

    def makedirs(self, path: str) -> None:
        """Create a directory and any missing parents."""
        Path(path).mkdir(parents=True, exist_ok=True)

    def now(self) -> int:
        """Current time in whole seconds since the epoch."""
        return int(time.time())
