from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from allocplan.core.departments import employees_in_department, filter_allocations_by_employees
from allocplan.data.allocation_io import read_allocations
from allocplan.data.org_io import read_departments, read_employees
from allocplan.data.excel_io import coerce_date
from allocplan.logging_conf import configure_logging
from allocplan.settings import Settings
from allocplan.views.calendar import build_month
from allocplan.views.weeks import build_trailing_weeks

logger = logging.getLogger(__name__)


def _date_arg(value: str) -> date:
    try:
        return coerce_date(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_arg_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="allocplan", description="Employee allocation calendar and weekly views")
    parser.add_argument("--log-level", type=str, default=settings.log_level)

    sub = parser.add_subparsers(dest="command", required=True)

    scope = argparse.ArgumentParser(add_help=False)
    scope.add_argument("--employee", action="append", default=None, help="Only these employee ids (repeatable)")
    scope.add_argument("--department", default=None, help="Only employees of this department and its sub-departments")
    scope.add_argument("--departments", default=None, help="Department export (id, name, parent_department_id)")
    scope.add_argument("--employees", default=None, help="Employee export (id, name, department_id, is_active)")

    month = sub.add_parser("month", parents=[scope], help="Per-day employee totals for one month")
    month.add_argument("file", help="Allocation export (.xlsx or .csv)")
    month.add_argument("--date", type=_date_arg, default=None, help="Any day of the month (default: today)")

    weeks = sub.add_parser("weeks", parents=[scope], help="Allocations per trailing week")
    weeks.add_argument("file", help="Allocation export (.xlsx or .csv)")
    weeks.add_argument("--now", type=_date_arg, default=None, help="Reference day (default: today)")
    weeks.add_argument("--weeks", type=int, default=settings.trailing_weeks)
    return parser


def _department_employee_ids(args: argparse.Namespace) -> list[str]:
    if not args.departments or not args.employees:
        raise ValueError("--department needs both --departments and --employees files")
    departments = read_departments(args.departments)
    employees = read_employees(args.employees)
    if not any(d.id == args.department for d in departments):
        raise ValueError(f"Unknown department: {args.department!r}")
    return [e.id for e in employees_in_department(employees, departments, args.department)]


def run(args: argparse.Namespace, settings: Settings) -> dict:
    allocations, errors = read_allocations(args.file)
    if args.employee:
        allocations = filter_allocations_by_employees(allocations, args.employee)
    if args.department:
        allocations = filter_allocations_by_employees(allocations, _department_employee_ids(args))

    if args.command == "month":
        result = build_month(allocations, args.date or date.today(), week_start=settings.week_start).to_dict()
    else:
        windows = build_trailing_weeks(allocations, args.now or date.today(), args.weeks, week_start=settings.week_start)
        result = {"weeks": [w.to_dict() for w in windows]}

    result["skipped_rows"] = errors
    return result


def main(argv: list[str] | None = None) -> int:
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"allocplan: {e}", file=sys.stderr)
        return 2

    args = build_arg_parser(settings).parse_args(argv)
    configure_logging(args.log_level)

    try:
        result = run(args, settings)
    except (ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        print(f"allocplan: {e}", file=sys.stderr)
        return 2

    json.dump(result, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
