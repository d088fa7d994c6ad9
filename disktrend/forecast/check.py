"""Check orchestration: sample, persist, project and classify every mount."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from disktrend.forecast.evaluator import CRITICAL, OK, UNKNOWN, Verdict, evaluate, unknown_verdict
from disktrend.forecast.projector import ProjectedFullAt, ProjectionResult, project
from disktrend.forecast.retention import RETENTION_DAYS, prune
from disktrend.forecast.samples import mount_id
from disktrend.forecast.store import SampleStore, StoreError

if TYPE_CHECKING:
    from disktrend.core.logging import CheckLogger
    from disktrend.lib.filesystem import MountUsage


EXIT_CODES = {OK: 0, CRITICAL: 2, UNKNOWN: 3}


def exit_code(status: str) -> int:
    """Plugin exit code for an overall status."""
    return EXIT_CODES.get(status, EXIT_CODES[UNKNOWN])


@dataclass(frozen=True)
class CheckConfig:
    """Thresholds for one check run."""

    threshold_hours: float = 12.0
    fluctuation_mb: float = 1.0
    retention_days: float = RETENTION_DAYS

    @property
    def threshold_seconds(self) -> float:
        return self.threshold_hours * 3600

    @property
    def fluctuation_kb(self) -> float:
        return self.fluctuation_mb * 1024

    @property
    def retention_seconds(self) -> int:
        return int(self.retention_days * 24 * 3600)

    @classmethod
    def from_mapping(cls, config: dict[str, Any]) -> "CheckConfig":
        """Build from a loaded config mapping (see disktrend.core.config)."""
        return cls(
            threshold_hours=float(config["time"]),
            fluctuation_mb=float(config["fluctuation_threshold"]),
            retention_days=float(config["retention_days"]),
        )


@dataclass(frozen=True)
class MountCheck:
    """Everything computed for one mount during a run."""

    verdict: Verdict
    projection: ProjectionResult | None
    samples: int

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "mountpoint": self.verdict.mountpoint,
            "state": self.verdict.state,
            "reason": self.verdict.reason,
            "hours_until_full": round(self.verdict.hours, 2) if self.verdict.has_projection else None,
            "samples": self.samples,
        }
        if isinstance(self.projection, ProjectedFullAt):
            data["rate_kb_per_hour"] = round(self.projection.rate * 3600, 2)
        return data


@dataclass
class CheckResult:
    """Aggregated outcome of a run over all mounts."""

    status: str
    summary: str
    perfdata: str
    mounts: list[MountCheck] = field(default_factory=list)

    @property
    def verdicts(self) -> list[Verdict]:
        return [m.verdict for m in self.mounts]

    @property
    def exit_code(self) -> int:
        return exit_code(self.status)

    @property
    def line(self) -> str:
        text = f"{self.status}: {self.summary}"
        if self.perfdata:
            text += f" | {self.perfdata}"
        return text


def aggregate_status(verdicts: list[Verdict]) -> str:
    """CRITICAL beats UNKNOWN beats OK."""
    states = {v.state for v in verdicts}
    if CRITICAL in states:
        return CRITICAL
    if UNKNOWN in states:
        return UNKNOWN
    return OK


def check_mount(
    mount: "MountUsage",
    now: int,
    config: CheckConfig,
    store: SampleStore,
    logger: "CheckLogger | None" = None,
) -> MountCheck:
    """
    Update one mount's history and classify its trend.

    The pruned history, including the new sample, is saved before the
    projection runs. Store failures become an UNKNOWN verdict.
    """
    key = mount_id(mount.mountpoint)
    try:
        history = store.load(key)
        history.append(mount.sample(now))
        history = prune(history, now, config.retention_seconds)
        store.save(key, history)
    except StoreError as e:
        if logger is not None:
            logger.error("History unavailable", mountpoint=mount.mountpoint, error=str(e))
        return MountCheck(
            verdict=unknown_verdict(mount.mountpoint, f"history unavailable ({e})"),
            projection=None,
            samples=0,
        )

    projection = project(history, now, config.fluctuation_kb)
    verdict = evaluate(projection, now, config.threshold_seconds, mount.mountpoint)

    if logger is not None:
        logger.debug(
            "Mount evaluated",
            mountpoint=mount.mountpoint,
            samples=len(history),
            projection=type(projection).__name__,
            state=verdict.state,
        )

    return MountCheck(verdict=verdict, projection=projection, samples=len(history))


def run_check(
    mounts: list["MountUsage"],
    now: int,
    config: CheckConfig,
    store: SampleStore,
    logger: "CheckLogger | None" = None,
) -> CheckResult:
    """
    Run the check over every mount, in the order given.

    Args:
        mounts: Current usage per mount, from the enumeration source
        now: Current time in epoch seconds
        config: Thresholds
        store: History persistence
        logger: Optional run log

    Returns:
        CheckResult with overall status, summary and perfdata
    """
    checks = [check_mount(m, now, config, store, logger) for m in mounts]

    if not checks:
        return CheckResult(status=UNKNOWN, summary="no filesystems to check", perfdata="")

    verdicts = [c.verdict for c in checks]
    status = aggregate_status(verdicts)
    result = CheckResult(
        status=status,
        summary="; ".join(v.summary_fragment() for v in verdicts),
        perfdata="; ".join(v.perf_fragment() for v in verdicts),
        mounts=checks,
    )

    if logger is not None:
        logger.info(
            "Check complete",
            status=status,
            mounts=len(checks),
            critical=sum(1 for v in verdicts if v.state == CRITICAL),
            unknown=sum(1 for v in verdicts if v.state == UNKNOWN),
        )

    return result
