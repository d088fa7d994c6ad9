"""Command-line interface for the disk trend check."""

import argparse
import math
import sys
from pathlib import Path
from typing import Any

from disktrend import __version__
from disktrend.core.config import ConfigError, load_config
from disktrend.core.context import Context
from disktrend.core.logging import CheckLogger
from disktrend.core.output import Output
from disktrend.forecast.check import EXIT_CODES, CheckConfig, CheckResult, run_check
from disktrend.forecast.evaluator import UNKNOWN
from disktrend.forecast.store import FileSampleStore
from disktrend.lib.filesystem import list_mounts, parse_exclude
from disktrend.lib.process import CommandError

EXIT_UNKNOWN = EXIT_CODES[UNKNOWN]


class UsageError(Exception):
    """Malformed command-line input."""

    pass


class CheckArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str) -> None:
        raise UsageError(message)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = CheckArgumentParser(
        prog="check_disk_trend",
        description="Alert when disks are projected to fill up within a time window",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Alert if any disk fills within 12 hours
  %(prog)s -t 48                    # Alert if any disk fills within 2 days
  %(prog)s -x 'tmpfs|nfs'           # Skip tmpfs and nfs mounts
  %(prog)s -m / -m /var             # Only check / and /var
  %(prog)s --format json            # JSON output for scripts

Each run appends one sample per mount to its history under --data-dir.
Schedule it at a fixed interval; projections need at least two samples.

Exit codes:
  0 - OK
  2 - CRITICAL (a disk is projected to fill within the threshold)
  3 - UNKNOWN (bad arguments, config errors, df failure)
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"check_disk_trend {__version__}",
    )
    parser.add_argument(
        "-t", "--time",
        type=float,
        metavar="HOURS",
        help="Critical if projected full within HOURS (default: 12)",
    )
    parser.add_argument(
        "-x", "--exclude",
        metavar="FSTYPES",
        help="Pipe-delimited filesystem types to skip (default: common pseudo filesystems)",
    )
    parser.add_argument(
        "--data-dir",
        metavar="DIRECTORY",
        help="Directory holding per-mount history (default: /tmp/disktrend)",
    )
    parser.add_argument(
        "--fluctuation-threshold",
        type=float,
        metavar="MB",
        help="Ignore usage changes smaller than MB (default: 1)",
    )
    parser.add_argument(
        "-m", "--mount",
        action="append",
        dest="mounts",
        metavar="PATH",
        help="Only check this mount point (can be specified multiple times)",
    )
    parser.add_argument(
        "--format",
        choices=["plain", "json"],
        default="plain",
        help="Output format (default: plain)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print per-mount trend details to stderr",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="YAML config file",
    )
    parser.add_argument(
        "--log-dir",
        metavar="DIRECTORY",
        help="Write a JSONL run log under DIRECTORY",
    )
    return parser


def resolve_settings(args: argparse.Namespace, config: dict[str, Any]) -> dict[str, Any]:
    """Overlay command-line values on the loaded config."""
    settings = dict(config)
    overrides = {
        "time": args.time,
        "exclude": args.exclude,
        "data_dir": args.data_dir,
        "fluctuation_threshold": args.fluctuation_threshold,
        "log_dir": args.log_dir,
    }
    for key, value in overrides.items():
        if value is not None:
            settings[key] = value
    return settings


def build_check_config(settings: dict[str, Any]) -> CheckConfig:
    """
    Validate thresholds and build a CheckConfig.

    Raises:
        UsageError: If a threshold is missing, non-numeric or out of range
    """
    try:
        check_config = CheckConfig.from_mapping(settings)
    except (TypeError, ValueError) as e:
        raise UsageError(f"invalid threshold value: {e}")

    if not math.isfinite(check_config.threshold_hours):
        raise UsageError("--time must be a finite number")
    if not math.isfinite(check_config.fluctuation_mb):
        raise UsageError("--fluctuation-threshold must be a finite number")
    if not math.isfinite(check_config.retention_days):
        raise UsageError("retention_days must be a finite number")
    if check_config.threshold_hours <= 0:
        raise UsageError("--time must be greater than 0")
    if check_config.fluctuation_mb < 0:
        raise UsageError("--fluctuation-threshold must not be negative")
    if check_config.retention_days <= 0:
        raise UsageError("retention_days must be greater than 0")

    return check_config


def print_details(result: CheckResult, stream=None) -> None:
    """Verbose per-mount trend details (stderr by default)."""
    if stream is None:
        stream = sys.stderr
    for mount in result.mounts:
        details = mount.to_dict()
        rate = details.get("rate_kb_per_hour")
        line = f"{details['mountpoint']}: {details['samples']} sample(s), {details['state']}, {details['reason']}"
        if rate is not None:
            line += f", growing {rate} KB/h"
        print(line, file=stream)


def main(argv: list[str] | None = None, context: Context | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    output = Output()

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        output.error(str(e))
        output.render()
        return EXIT_UNKNOWN

    if context is None:
        context = Context()

    try:
        settings = resolve_settings(args, load_config(args.config))
        check_config = build_check_config(settings)
    except (ConfigError, UsageError) as e:
        output.error(str(e))
        output.render(args.format)
        return EXIT_UNKNOWN

    logger = None
    if settings["log_dir"]:
        logger = CheckLogger.in_directory(Path(settings["log_dir"]))
        try:
            logger.open()
        except OSError as e:
            output.error(f"cannot open log {logger.log_path}: {e}")
            output.render(args.format)
            return EXIT_UNKNOWN

    try:
        return _run(args, settings, check_config, context, output, logger)
    finally:
        if logger is not None:
            logger.close()


def _run(
    args: argparse.Namespace,
    settings: dict[str, Any],
    check_config: CheckConfig,
    context: Context,
    output: Output,
    logger: CheckLogger | None,
) -> int:
    try:
        mounts = list_mounts(parse_exclude(settings["exclude"]), context=context)
    except CommandError as e:
        if logger is not None:
            logger.error("Filesystem enumeration failed", error=str(e))
        output.error(f"unable to list filesystems: {e}")
        output.render(args.format)
        return EXIT_UNKNOWN

    if args.mounts:
        known = {m.mountpoint for m in mounts}
        missing = [p for p in args.mounts if p not in known]
        if missing:
            output.error(f"mount point not found: {', '.join(missing)}")
            output.render(args.format)
            return EXIT_UNKNOWN
        mounts = [m for m in mounts if m.mountpoint in args.mounts]

    now = context.now()
    store = FileSampleStore(settings["data_dir"], context=context, logger=logger)
    result = run_check(mounts, now, check_config, store, logger=logger)

    if args.verbose:
        print_details(result)

    output.set_status(result.status)
    output.set_summary(result.summary)
    output.set_perfdata(result.perfdata)
    output.emit({
        "timestamp": now,
        "threshold_hours": check_config.threshold_hours,
        "mounts": [m.to_dict() for m in result.mounts],
    })
    output.render(args.format)

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
