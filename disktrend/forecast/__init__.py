"""Trend projection engine."""

from disktrend.forecast.check import CheckConfig, CheckResult, exit_code, run_check
from disktrend.forecast.evaluator import CRITICAL, OK, UNKNOWN, Verdict, evaluate
from disktrend.forecast.projector import (
    InsufficientData,
    InsufficientTimeSpan,
    NoGrowth,
    NoSignificantChange,
    ProjectedFullAt,
    ProjectionResult,
    project,
)
from disktrend.forecast.retention import RETENTION_SECONDS, prune
from disktrend.forecast.samples import History, HistoryFormatError, Sample, mount_id, mount_path
from disktrend.forecast.store import FileSampleStore, MemorySampleStore, SampleStore, StoreError

__all__ = [
    "CRITICAL",
    "CheckConfig",
    "CheckResult",
    "FileSampleStore",
    "History",
    "HistoryFormatError",
    "InsufficientData",
    "InsufficientTimeSpan",
    "MemorySampleStore",
    "NoGrowth",
    "NoSignificantChange",
    "OK",
    "ProjectedFullAt",
    "ProjectionResult",
    "RETENTION_SECONDS",
    "Sample",
    "SampleStore",
    "StoreError",
    "UNKNOWN",
    "Verdict",
    "evaluate",
    "exit_code",
    "mount_id",
    "mount_path",
    "project",
    "prune",
    "run_check",
]
