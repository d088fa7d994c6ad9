"""Turn a projection into a per-mount verdict."""

import math
from dataclasses import dataclass

from disktrend.forecast.projector import (
    InsufficientData,
    InsufficientTimeSpan,
    NoGrowth,
    NoSignificantChange,
    ProjectedFullAt,
    ProjectionResult,
)

OK = "OK"
CRITICAL = "CRITICAL"
UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Verdict:
    """Alert state of one mount point."""

    state: str
    mountpoint: str
    reason: str
    hours: float = math.nan

    @property
    def has_projection(self) -> bool:
        return not math.isnan(self.hours)

    def summary_fragment(self) -> str:
        return f"{self.mountpoint}: {self.reason}"

    def perf_fragment(self) -> str:
        if not self.has_projection:
            return f"{self.mountpoint}=NaN"
        return f"{self.mountpoint}={self.hours:.2f} hours"


def describe(result: ProjectionResult) -> str:
    """Reason text for outcomes that carry no projection."""
    if isinstance(result, InsufficientData):
        return f"not enough data ({result.samples} sample{'s' if result.samples != 1 else ''})"
    if isinstance(result, InsufficientTimeSpan):
        return "samples too close in time"
    if isinstance(result, NoSignificantChange):
        return "no significant change"
    if isinstance(result, NoGrowth):
        return "usage not growing"
    raise TypeError(f"No description for {type(result).__name__}")


def evaluate(
    result: ProjectionResult,
    now: int,
    threshold_seconds: float,
    mountpoint: str = "",
) -> Verdict:
    """
    Classify a projection against the alert threshold.

    Args:
        result: Output of project()
        now: Current time in epoch seconds
        threshold_seconds: Alert when the disk fills sooner than this
        mountpoint: Mount the verdict is for

    Returns:
        CRITICAL if projected full sooner than the threshold, else OK
    """
    if not isinstance(result, ProjectedFullAt):
        return Verdict(state=OK, mountpoint=mountpoint, reason=describe(result))

    seconds_until_full = result.timestamp - now
    hours = seconds_until_full / 3600

    if seconds_until_full < threshold_seconds:
        return Verdict(
            state=CRITICAL,
            mountpoint=mountpoint,
            reason=f"full in {hours:.2f} hours (threshold {threshold_seconds / 3600:g} hours)",
            hours=hours,
        )

    return Verdict(
        state=OK,
        mountpoint=mountpoint,
        reason=f"full in {hours:.2f} hours",
        hours=hours,
    )


def unknown_verdict(mountpoint: str, reason: str) -> Verdict:
    """Verdict for a mount whose history could not be processed."""
    return Verdict(state=UNKNOWN, mountpoint=mountpoint, reason=reason)
