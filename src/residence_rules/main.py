from __future__ import annotations

import argparse
import importlib
import signal
import threading
from typing import Optional, Sequence

import structlog
from dotenv import load_dotenv

from .common.clock import parse_iso_date, parse_time_of_day
from .common.logging import configure_logging
from .config import get_settings_module
from .container import build_container
from .core.exceptions import PersistenceError
from .scheduler.daily import DailyScheduler

log = structlog.get_logger(__name__)


def _load_settings():
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json=bool(getattr(settings, "LOG_JSON", False)))
    log.debug("settings_loaded", settings=settings_module)
    return settings


def _build(settings):
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        sender_name=getattr(settings, "NOTIFICATION_SENDER", None),
    )


def run_reconcile(args: argparse.Namespace) -> int:
    settings = _load_settings()
    container = _build(settings)
    today = args.date or container.clock.today()

    try:
        report = container.reconciler.reconcile(today)
    except PersistenceError:
        print("Reconciliation failed: database error (see logs).")
        return 1

    print(f"{today.isoformat()}: marked {report.marked_absent_count} of {report.active_count} residents absent")
    if not report.complete:
        print(f"{len(report.failed_resident_ids)} residents failed; rerun to retry them.")
        return 2
    return 0


def run_scheduler(args: argparse.Namespace) -> int:
    settings = _load_settings()
    container = _build(settings)

    scheduler = DailyScheduler(
        container.reconciler.reconcile,
        clock=container.clock,
        run_at=parse_time_of_day(getattr(settings, "RECONCILE_AT", "23:00")),
        name="attendance_reconcile",
    )

    stop = threading.Event()
    signal.signal(signal.SIGINT, lambda *_: stop.set())
    signal.signal(signal.SIGTERM, lambda *_: stop.set())

    scheduler.run_forever(stop, poll_seconds=float(getattr(settings, "SCHEDULER_POLL_SECONDS", 30)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="residence-rules", description="Residence operational rules engine")
    sub = parser.add_subparsers(dest="command", required=True)

    reconcile = sub.add_parser("reconcile", help="Mark residents without attendance as absent (one shot)")
    reconcile.add_argument("--date", type=parse_iso_date, help="Day to reconcile (YYYY-MM-DD), defaults to today")
    reconcile.set_defaults(func=run_reconcile)

    scheduler = sub.add_parser("scheduler", help="Run the nightly reconciliation loop")
    scheduler.set_defaults(func=run_scheduler)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
