"""Tests for the trend projector."""

import pytest

from disktrend.forecast.projector import (
    InsufficientData,
    InsufficientTimeSpan,
    NoGrowth,
    NoSignificantChange,
    ProjectedFullAt,
    project,
)
from disktrend.forecast.samples import Sample


T0 = 1_700_000_000
ONE_MB = 1024


class TestInsufficientHistory:
    """Histories too short to project from."""

    def test_empty_history(self):
        """Empty history is insufficient data."""
        assert project([], T0, ONE_MB) == InsufficientData(samples=0)

    def test_single_sample(self):
        """A single sample is insufficient data."""
        history = [Sample(T0, 1000, 10000)]

        assert project(history, T0, ONE_MB) == InsufficientData(samples=1)

    def test_same_timestamp_endpoints(self):
        """Endpoints sharing a timestamp give no time span."""
        history = [Sample(T0, 1000, 10000), Sample(T0, 9000, 10000)]

        assert isinstance(project(history, T0, ONE_MB), InsufficientTimeSpan)

    def test_same_timestamp_checked_before_noise(self):
        """Time span check happens even when the change is tiny."""
        history = [Sample(T0, 1000, 10000), Sample(T0 + 60, 1000, 10000), Sample(T0, 1000, 10000)]

        assert isinstance(project(history, T0, ONE_MB), InsufficientTimeSpan)


class TestNoiseFilter:
    """Fluctuation threshold behaviour."""

    def test_growth_below_threshold(self):
        """500 KB growth under a 1 MB floor is not significant."""
        history = [Sample(T0, 1000, 10000), Sample(T0 + 3600, 1500, 10000)]

        assert project(history, T0 + 3600, ONE_MB) == NoSignificantChange(usage_delta=500)

    def test_shrink_below_threshold(self):
        """Shrinkage under the floor is treated the same as growth."""
        history = [Sample(T0, 1500, 10000), Sample(T0 + 3600, 1000, 10000)]

        assert project(history, T0 + 3600, ONE_MB) == NoSignificantChange(usage_delta=-500)

    def test_exactly_threshold_is_significant(self):
        """A change equal to the floor passes the filter."""
        history = [Sample(T0, 1000, 100000), Sample(T0 + 3600, 1000 + ONE_MB, 100000)]

        assert isinstance(project(history, T0 + 3600, ONE_MB), ProjectedFullAt)

    def test_zero_threshold_lets_flat_usage_through(self):
        """With no noise floor, flat usage reports no growth."""
        history = [Sample(T0, 1000, 10000), Sample(T0 + 3600, 1000, 10000)]

        assert project(history, T0 + 3600, 0) == NoGrowth(rate=0.0)


class TestGrowth:
    """Rate and projection arithmetic."""

    def test_shrinking_usage(self):
        """Falling usage is no growth."""
        history = [Sample(T0, 5000, 10000), Sample(T0 + 3600, 4000, 10000)]

        result = project(history, T0 + 3600, ONE_MB)

        assert isinstance(result, NoGrowth)
        assert result.rate < 0

    def test_projects_full_time(self):
        """2000 KB/hour with 7000 KB left fills in 3.5 hours."""
        history = [Sample(T0, 1000, 10000), Sample(T0 + 3600, 3000, 10000)]

        result = project(history, T0 + 3600, ONE_MB)

        assert isinstance(result, ProjectedFullAt)
        assert result.rate == pytest.approx(2000 / 3600)
        assert result.timestamp == pytest.approx(T0 + 3600 + 12600)

    def test_uses_chronological_endpoints_only(self):
        """Intermediate samples, even extreme ones, do not affect the rate."""
        history = [
            Sample(T0, 1000, 10000),
            Sample(T0 + 1800, 9999, 10000),
            Sample(T0 + 2700, 0, 10000),
            Sample(T0 + 3600, 3000, 10000),
        ]

        result = project(history, T0 + 3600, ONE_MB)

        assert result.rate == pytest.approx(2000 / 3600)

    def test_rate_is_not_truncated(self):
        """Slow growth keeps its fractional rate."""
        history = [Sample(T0, 0, 10_000_000), Sample(T0 + 86400, 43200, 10_000_000)]

        result = project(history, T0 + 86400, ONE_MB)

        assert isinstance(result, ProjectedFullAt)
        assert result.rate == pytest.approx(0.5)

    def test_projection_anchored_on_newest_sample(self):
        """Projection is relative to the last sample, not to now."""
        history = [Sample(T0, 1000, 10000), Sample(T0 + 3600, 3000, 10000)]

        early = project(history, T0 + 3600, ONE_MB)
        late = project(history, T0 + 7200, ONE_MB)

        assert early == late

    def test_full_disk_projects_to_last_sample(self):
        """A full disk with growth is projected full at the last sample."""
        history = [Sample(T0, 5000, 10000), Sample(T0 + 3600, 10000, 10000)]

        result = project(history, T0 + 3600, ONE_MB)

        assert result.timestamp == pytest.approx(T0 + 3600)
