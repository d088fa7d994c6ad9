"""Process utilities."""

import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from disktrend.core.context import Context


class CommandError(Exception):
    """Error running a command."""

    pass


def run_command(
    cmd: list[str],
    context: "Context | None" = None,
    check: bool = False,
    timeout: int | None = 60,
) -> str:
    """
    Run a command and return its output.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)
        check: Raise on non-zero exit
        timeout: Timeout in seconds

    Returns:
        Command stdout

    Raises:
        CommandError: If the command cannot be started, times out,
            or exits non-zero while check=True
    """
    if context is None:
        from disktrend.core.context import Context
        context = Context()

    try:
        result = context.run(cmd, check=check, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"Command timed out after {timeout}s: {' '.join(cmd)}") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit code {e.returncode}"
        raise CommandError(f"Command failed: {' '.join(cmd)}: {detail}") from e
    except OSError as e:
        raise CommandError(f"Command failed: {' '.join(cmd)}: {e}") from e

    return result.stdout


def check_tool(
    name: str,
    context: "Context | None" = None,
    required: bool = False,
) -> bool:
    """
    Check if a tool exists in PATH.

    Args:
        name: Tool name to check
        context: Execution context (for testing)
        required: Raise if tool is missing

    Returns:
        True if tool exists

    Raises:
        CommandError: If required=True and tool is missing
    """
    if context is None:
        from disktrend.core.context import Context
        context = Context()

    exists = context.check_tool(name)

    if required and not exists:
        raise CommandError(f"Required tool not found: {name}")

    return exists
