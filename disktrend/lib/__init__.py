"""Shared utility library for disktrend."""

from disktrend.lib.filesystem import MountUsage, list_mounts, parse_df, parse_exclude
from disktrend.lib.process import CommandError, check_tool, run_command

__all__ = [
    "CommandError",
    "MountUsage",
    "check_tool",
    "list_mounts",
    "parse_df",
    "parse_exclude",
    "run_command",
]
