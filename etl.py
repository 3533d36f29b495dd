from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from config import (
    DEFAULT_FORMAT,
    DEFAULT_SORT_KEY,
    FORMAT_ALIASES,
    LOG_LEVEL,
    REPORT_FORMATS,
    SORT_KEYS,
)
from core import aggregate_by_department, render_text_report, sort_employees
from io_ops import load_employees, write_report

logger = logging.getLogger(__name__)


def run_pipeline(
    input_path: str | Path,
    output_path: str | Path,
    *,
    sort_key: str | None = DEFAULT_SORT_KEY,
    fmt: str = DEFAULT_FORMAT,
    echo: bool = True,
) -> dict:
    """
    Load -> sort -> aggregate -> report, in one pass.
    Returns a run summary; `exit_code` is 0 only when the report file was written.
    """
    fmt = FORMAT_ALIASES.get(fmt, fmt)
    summary = {
        "loaded": 0,
        "skipped": 0,
        "departments": 0,
        "output_path": str(output_path),
        "format": fmt,
        "written": False,
        "exit_code": 1,
    }

    # -------- Extract --------
    try:
        result = load_employees(input_path)
    except (OSError, ValueError) as exc:
        logger.error("Could not read %s: %s", input_path, exc)
        return summary

    summary["loaded"] = len(result.employees)
    summary["skipped"] = result.skipped_count
    if not result.found:
        return summary

    # -------- Transform --------
    employees = sort_employees(result.employees, sort_key)
    agg = aggregate_by_department(employees)
    summary["departments"] = len(agg)

    # -------- Report --------
    if echo:
        print(render_text_report(agg), end="")

    summary["written"] = write_report(agg, output_path, fmt, skipped=result.skipped)
    summary["exit_code"] = 0 if summary["written"] else 1
    return summary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="etl.py",
        description="Summarize employee salaries by department.",
    )
    parser.add_argument("input_file", nargs="?", help="Employee file: name, age, department, salary per line")
    parser.add_argument("output_file", nargs="?", help="Where to write the report")
    parser.add_argument(
        "--sort-key",
        default=DEFAULT_SORT_KEY,
        help=f"Sort employees before aggregating ({', '.join(SORT_KEYS)})",
    )
    parser.add_argument(
        "--format",
        dest="fmt",
        choices=list(REPORT_FORMATS) + sorted(FORMAT_ALIASES),
        default=DEFAULT_FORMAT,
        help="Report file format",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print the text report to stdout")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args, extra = parser.parse_known_args(argv)
    if extra or args.input_file is None or args.output_file is None:
        parser.print_usage(sys.stdout)
        return 2

    level = getattr(logging, str(args.log_level).upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s", stream=sys.stdout)

    logger.info("Running employee report pipeline...")
    summary = run_pipeline(
        args.input_file,
        args.output_file,
        sort_key=args.sort_key,
        fmt=args.fmt,
        echo=not args.quiet,
    )
    logger.info(
        "Done: loaded=%d skipped=%d departments=%d written=%s",
        summary["loaded"],
        summary["skipped"],
        summary["departments"],
        summary["written"],
    )
    return summary["exit_code"]


if __name__ == "__main__":
    raise SystemExit(main())
