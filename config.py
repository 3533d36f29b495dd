from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load from current working dir first, then fall back to the .env
# that sits next to this file so it works regardless of where you run.
load_dotenv()
_env_nearby = Path(__file__).resolve().parent / ".env"
if _env_nearby.exists():
    load_dotenv(_env_nearby)


# === Input format ===
FIELD_SEPARATOR = ","
EXPECTED_FIELDS = 4
EMPLOYEE_COLUMNS = ["name", "age", "department", "salary"]

# === Pipeline options ===
SORT_KEYS = ("name", "age", "salary")
REPORT_FORMATS = ("text", "json", "excel")
FORMAT_ALIASES = {"structured": "json"}

# === Report layout ===
AGGREGATE_COLUMNS = ["average_salary", "total_salary", "highest_salary", "lowest_salary"]
REPORT_LABELS = {
    "average_salary": "Average Salary",
    "total_salary": "Total Salary",
    "highest_salary": "Highest Salary",
    "lowest_salary": "Lowest Salary",
}
RULE_WIDTH = 40
JSON_INDENT = 4
SKIPPED_SHEET = "Skipped"


def choice_from_env(var: str, choices, default: str | None = None) -> str | None:
    """
    Read `var` from the environment and return it when it is one of `choices`.
    Missing, empty or unknown values fall back to `default`.
    """
    raw = (os.getenv(var) or "").strip().lower()
    raw = FORMAT_ALIASES.get(raw, raw)
    return raw if raw in choices else default


# === Defaults (overridable from .env) ===
# Example .env lines:
#   EMPLOYEE_REPORT_SORT_KEY=salary
#   EMPLOYEE_REPORT_FORMAT=json
DEFAULT_SORT_KEY: str | None = choice_from_env("EMPLOYEE_REPORT_SORT_KEY", SORT_KEYS)
DEFAULT_FORMAT: str = choice_from_env("EMPLOYEE_REPORT_FORMAT", REPORT_FORMATS, "text")
LOG_LEVEL: str = (os.getenv("EMPLOYEE_REPORT_LOG_LEVEL") or "INFO").strip().upper()


__all__ = [
    "FIELD_SEPARATOR",
    "EXPECTED_FIELDS",
    "EMPLOYEE_COLUMNS",
    "SORT_KEYS",
    "REPORT_FORMATS",
    "FORMAT_ALIASES",
    "AGGREGATE_COLUMNS",
    "REPORT_LABELS",
    "RULE_WIDTH",
    "JSON_INDENT",
    "SKIPPED_SHEET",
    "DEFAULT_SORT_KEY",
    "DEFAULT_FORMAT",
    "LOG_LEVEL",
    "choice_from_env",
]
