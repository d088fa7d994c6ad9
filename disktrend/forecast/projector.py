"""Two-point linear projection of when a disk fills up."""

from dataclasses import dataclass

from disktrend.forecast.samples import History


@dataclass(frozen=True)
class InsufficientData:
    """Fewer than two samples."""

    samples: int


@dataclass(frozen=True)
class InsufficientTimeSpan:
    """Oldest and newest sample share a timestamp."""

    timestamp: int


@dataclass(frozen=True)
class NoSignificantChange:
    """Usage moved less than the fluctuation threshold."""

    usage_delta: int


@dataclass(frozen=True)
class NoGrowth:
    """Usage is flat or shrinking."""

    rate: float


@dataclass(frozen=True)
class ProjectedFullAt:
    """Usage is growing; the disk reaches capacity at timestamp."""

    timestamp: float
    rate: float


ProjectionResult = InsufficientData | InsufficientTimeSpan | NoSignificantChange | NoGrowth | ProjectedFullAt


def project(history: History, now: int, fluctuation_kb: float) -> ProjectionResult:
    """
    Project when the disk will be full.

    Only the chronological endpoints of the history are used, not a
    regression over every sample. The rate is computed in floating point
    (KB per second) and the projection is anchored on the newest sample.

    Args:
        history: Pruned samples, oldest first
        now: Current time in epoch seconds
        fluctuation_kb: Minimum absolute usage change treated as a trend

    Returns:
        One of the ProjectionResult variants
    """
    if len(history) < 2:
        return InsufficientData(samples=len(history))

    first = history[0]
    last = history[-1]

    if first.timestamp == last.timestamp:
        return InsufficientTimeSpan(timestamp=last.timestamp)

    usage_delta = last.used - first.used
    time_delta = last.timestamp - first.timestamp

    if abs(usage_delta) < fluctuation_kb:
        return NoSignificantChange(usage_delta=usage_delta)

    rate = usage_delta / time_delta
    if rate <= 0:
        return NoGrowth(rate=rate)

    remaining = last.total - last.used
    return ProjectedFullAt(timestamp=last.timestamp + remaining / rate, rate=rate)
