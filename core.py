from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Iterable

import numpy as np
import pandas as pd

from config import (
    AGGREGATE_COLUMNS,
    EMPLOYEE_COLUMNS,
    EXPECTED_FIELDS,
    FIELD_SEPARATOR,
    JSON_INDENT,
    REPORT_LABELS,
    RULE_WIDTH,
    SORT_KEYS,
)

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")
INT64_MAX = int(np.iinfo("int64").max)


class InvalidRecordError(ValueError):
    """Raised when one input line cannot become an Employee."""


@dataclass(frozen=True)
class Employee:
    name: str
    age: int
    department: str
    salary: int


@dataclass(frozen=True)
class SkippedLine:
    line_number: int
    raw: str
    reason: str


# ---------- small utils ----------
def _parse_positive_int(raw: str, field: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise InvalidRecordError(f"{field} is not an integer: {raw!r}")
    value = int(raw)
    if value <= 0:
        raise InvalidRecordError(f"{field} must be positive, got {value}")
    if value > INT64_MAX:
        raise InvalidRecordError(f"{field} is too large, got {value}")
    return value


def format_currency(value) -> str:
    return f"${float(value):.2f}"


# --------------------
# Parse / validate
# --------------------
def parse_employee_line(line: str) -> Employee:
    """
    Parse one `name, age, department, salary` line into an Employee.
    Fields are split on the separator and stripped, so both "a, 1, b, 2"
    and "a,1,b,2" are accepted. Raises InvalidRecordError with the reason.
    """
    fields = [f.strip() for f in line.strip().split(FIELD_SEPARATOR)]
    if len(fields) != EXPECTED_FIELDS:
        raise InvalidRecordError(f"expected {EXPECTED_FIELDS} fields, got {len(fields)}")

    name, age_raw, department, salary_raw = fields
    if not name:
        raise InvalidRecordError("name is empty")
    if not department:
        raise InvalidRecordError("department is empty")

    age = _parse_positive_int(age_raw, "age")
    salary = _parse_positive_int(salary_raw, "salary")
    return Employee(name=name, age=age, department=department, salary=salary)


def build_employee_frame(records: Iterable[Employee]) -> pd.DataFrame:
    """Validated records -> DataFrame in the given order, one row per Employee."""
    df = pd.DataFrame([asdict(r) for r in records], columns=EMPLOYEE_COLUMNS)
    return df.astype({"name": "object", "age": "int64", "department": "object", "salary": "int64"})


# --------------------
# Sort
# --------------------
def sort_employees(df: pd.DataFrame, key: str | None) -> pd.DataFrame:
    """
    Return `df` ordered ascending by `key` (stable).
    `None` means no sort. An unknown key is logged and `df` comes back unchanged.
    """
    if key is None:
        return df
    if key not in SORT_KEYS:
        logger.error("Invalid sort key %r; expected one of %s. Leaving order unchanged.", key, ", ".join(SORT_KEYS))
        return df
    return df.sort_values(key, kind="mergesort").reset_index(drop=True)


# --------------------
# Aggregate
# --------------------
def aggregate_by_department(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-department salary figures, indexed by department in first-appearance order.

    Returns DataFrame with columns:
      - 'average_salary' (float)
      - 'total_salary'
      - 'highest_salary'
      - 'lowest_salary'
    """
    if df is None or df.empty:
        return pd.DataFrame(columns=AGGREGATE_COLUMNS, index=pd.Index([], name="department"))

    grouped = df.groupby("department", sort=False)["salary"]
    agg = grouped.agg(highest_salary="max", lowest_salary="min", count="size")

    # Python ints so department totals cannot wrap past int64
    totals: dict = {}
    for dept, salary in zip(df["department"], df["salary"]):
        totals[dept] = totals.get(dept, 0) + int(salary)
    total_list = [totals[d] for d in agg.index]

    if max(total_list) <= INT64_MAX:
        agg["total_salary"] = pd.Series(total_list, index=agg.index, dtype="int64")
    else:
        logger.warning("Department totals exceed int64; keeping exact totals as Python ints")
        agg["total_salary"] = pd.Series(total_list, index=agg.index, dtype=object)
    agg["average_salary"] = [total / int(n) for total, n in zip(total_list, agg["count"])]
    return agg.loc[:, AGGREGATE_COLUMNS]


def aggregates_to_dict(agg: pd.DataFrame) -> dict[str, dict[str, float | int]]:
    """Plain {department: {figure: value}} mapping with native numbers, row order kept."""
    out: dict[str, dict[str, float | int]] = {}
    for row in agg.itertuples():
        out[str(row.Index)] = {
            "average_salary": float(row.average_salary),
            "total_salary": int(row.total_salary),
            "highest_salary": int(row.highest_salary),
            "lowest_salary": int(row.lowest_salary),
        }
    return out


# --------------------
# Render
# --------------------
def render_text_report(agg: pd.DataFrame) -> str:
    figures_by_dept = aggregates_to_dict(agg)
    if not figures_by_dept:
        return "No department data.\n"

    rule = "-" * RULE_WIDTH
    blocks = []
    for department, figures in figures_by_dept.items():
        lines = [f"Department: {department}", rule]
        lines += [f"{REPORT_LABELS[col]}: {format_currency(figures[col])}" for col in AGGREGATE_COLUMNS]
        lines.append(rule)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


def render_json_report(agg: pd.DataFrame) -> str:
    return json.dumps(aggregates_to_dict(agg), indent=JSON_INDENT) + "\n"


def render_report(agg: pd.DataFrame, fmt: str) -> str:
    if fmt == "text":
        return render_text_report(agg)
    if fmt == "json":
        return render_json_report(agg)
    raise ValueError(f"No text rendering for report format: {fmt!r}")


__all__ = [
    "InvalidRecordError",
    "Employee",
    "SkippedLine",
    "format_currency",
    "parse_employee_line",
    "build_employee_frame",
    "sort_employees",
    "aggregate_by_department",
    "aggregates_to_dict",
    "render_text_report",
    "render_json_report",
    "render_report",
]
