"""Filesystem enumeration via df."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from disktrend.forecast.samples import Sample
from disktrend.lib.process import CommandError, check_tool, run_command

if TYPE_CHECKING:
    from disktrend.core.context import Context


@dataclass(frozen=True)
class MountUsage:
    """Current usage of one mounted filesystem, in 1 KiB blocks."""

    device: str
    mountpoint: str
    used_kb: int
    total_kb: int

    def sample(self, now: int) -> Sample:
        """Snapshot this usage as a history sample taken at now."""
        return Sample(timestamp=now, used=self.used_kb, total=self.total_kb)


def parse_exclude(value: str | list[str] | None) -> list[str]:
    """
    Normalize an exclude setting to a list of filesystem types.

    Accepts the pipe-delimited CLI form ("tmpfs|devtmpfs") or a YAML list.
    """
    if not value:
        return []
    if isinstance(value, str):
        value = value.split("|")
    return [t.strip() for t in value if t and t.strip()]


def build_df_command(exclude_types: list[str]) -> list[str]:
    """Build the df invocation: POSIX format, 1 KiB blocks, types excluded."""
    cmd = ["df", "-P", "-k"]
    for fstype in exclude_types:
        cmd.extend(["-x", fstype])
    return cmd


def parse_df(content: str) -> list[MountUsage]:
    """
    Parse `df -P -k` output.

    Args:
        content: Raw df stdout including header line

    Returns:
        MountUsage per row, in the order df reported them
    """
    mounts = []
    lines = content.strip().split("\n")

    for line in lines[1:]:  # Skip header
        parts = line.split()
        if len(parts) < 6:
            continue
        try:
            total_kb = int(parts[1])
            used_kb = int(parts[2])
        except ValueError:
            continue
        mounts.append(MountUsage(
            device=parts[0],
            mountpoint=" ".join(parts[5:]),
            used_kb=used_kb,
            total_kb=total_kb,
        ))

    return mounts


def list_mounts(
    exclude_types: list[str],
    context: "Context | None" = None,
) -> list[MountUsage]:
    """
    Enumerate mounted filesystems and their usage.

    Args:
        exclude_types: Filesystem types to leave out
        context: Execution context (for testing)

    Returns:
        List of MountUsage in df order

    Raises:
        CommandError: If df is missing, fails, or prints nothing usable
    """
    check_tool("df", context=context, required=True)

    # df exits non-zero when a single mount is unreadable; keep the rest
    stdout = run_command(build_df_command(exclude_types), context=context)
    if not stdout.strip():
        raise CommandError("df produced no output")

    return parse_df(stdout)
