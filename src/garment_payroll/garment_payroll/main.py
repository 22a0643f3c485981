from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from config import get_settings_module

from .common.log import configure_logging
from .container import Container, build_container
from .core.enums import Period
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_container() -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    logger.debug(
        "[payroll-engine] settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    container = build_container(
        db_config=db_config,
        rule_style=getattr(settings, "PAYROLL_RULE_STYLE", "general_factory"),
        batch_size=int(getattr(settings, "RECALC_BATCH_SIZE", 5)),
        wage_fallback_to_latest=bool(getattr(settings, "WAGE_FALLBACK_TO_LATEST", True)),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn, schema_path=SCHEMA_PATH)
        logger.debug("[payroll-engine] schema ready (tables=%s)", len(list_tables(container.conn)))

    return container


def _parse_period(value: Optional[str]) -> Optional[Period]:
    if not value:
        return None
    return Period.PERIOD_1 if value.strip() in {"1", Period.PERIOD_1.value} else Period.PERIOD_2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="garment-payroll", description="Monthly payroll batch runner")
    sub = parser.add_subparsers(dest="command", required=True)

    recalc = sub.add_parser("recalc", help="Recalculate both periods for every employee of a month")
    recalc.add_argument("month", help='Month label as stored, e.g. "Oktober 2025"')
    recalc.add_argument("--company", default=None)

    cash = sub.add_parser("cash", help="Plan cash denominations for stored net salaries")
    cash.add_argument("month")
    cash.add_argument("--period", choices=["1", "2"], default=None)
    cash.add_argument("--company", default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    container = create_container()
    service = container.payroll_service

    if args.command == "recalc":
        report = service.recalculate_month(month=args.month, company=args.company)
        print(f"Employees: {report.employees}  Records: {len(report.records)}  Failures: {len(report.failures)}")
        for record in report.records_with_warnings:
            codes = ", ".join(w.value for w in record.warnings)
            print(f"  WARN {record.employee_code} {record.company} {record.period.value}: {codes}")
        for failure in report.failures:
            where = f" {failure.period.value}" if failure.period else ""
            print(f"  FAIL {failure.employee_code}{where}: {failure.error}")
        return 0 if report.ok else 1

    requirement = service.cash_requirement(
        month=args.month, period=_parse_period(args.period), company=args.company
    )
    for denom, count in requirement.counts.items():
        print(f"{denom:>8,} x {count:>5} = {requirement.subtotal(denom):>15,}")
    print(f"{'TOTAL':>25} = {requirement.total:>15,}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
