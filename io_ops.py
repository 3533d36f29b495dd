from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Font
from openpyxl.utils.exceptions import IllegalCharacterError

from config import AGGREGATE_COLUMNS, FORMAT_ALIASES, REPORT_FORMATS, SKIPPED_SHEET
from core import (
    InvalidRecordError,
    SkippedLine,
    build_employee_frame,
    parse_employee_line,
    render_report,
)

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    employees: pd.DataFrame
    skipped: list[SkippedLine] = field(default_factory=list)
    found: bool = True

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


# ---------- Extract ----------
def load_employees(path: str | Path) -> LoadResult:
    """
    Read the employee file and keep only lines that pass validation, in file order.

    - blank lines are ignored
    - malformed/invalid lines are logged, recorded in `skipped`, and loading continues
    - a missing file logs an error and returns an empty result with found=False
    - any other OSError propagates to the caller
    """
    path = Path(path)
    records = []
    skipped: list[SkippedLine] = []
    try:
        with open(path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                text = line.strip()
                if not text:
                    continue
                try:
                    records.append(parse_employee_line(text))
                except InvalidRecordError as e:
                    logger.warning("Skipping line %d (%s): %s", line_number, e, text)
                    skipped.append(SkippedLine(line_number=line_number, raw=text, reason=str(e)))
    except FileNotFoundError:
        logger.error("Input file not found: %s", path)
        return LoadResult(employees=build_employee_frame([]), skipped=[], found=False)

    employees = build_employee_frame(records)
    logger.info("Loaded %d employees from %s (%d skipped)", len(employees), path, len(skipped))
    return LoadResult(employees=employees, skipped=skipped)


# ---------- Load (report files) ----------
def save_excel_report(
    agg: pd.DataFrame,
    output_path: str | Path,
    skipped: list[SkippedLine] | None = None,
    column_widths: dict | None = None,
) -> dict:
    """
    Save the department figures to an .xlsx workbook, then apply formatting:
      - Freeze header row, bold header
      - Two-decimal number format on the salary columns
      - Set column widths
      - Name the figures sheet after today's date (YYYY-MM-DD)
      - Optional second sheet listing skipped input lines
    Returns a summary dict.
    """
    if column_widths is None:
        column_widths = {
            "department": 20,
            "average_salary": 18,
            "total_salary": 18,
            "highest_salary": 18,
            "lowest_salary": 18,
            "line_number": 12,
            "raw": 40,
            "reason": 40,
        }

    sheet_name = datetime.today().strftime("%Y-%m-%d")
    out = agg.reset_index().rename(columns={"index": "department"})
    skipped_df = None
    if skipped is not None:
        skipped_df = pd.DataFrame([asdict(s) for s in skipped], columns=["line_number", "raw", "reason"])

    with pd.ExcelWriter(str(output_path), engine="openpyxl") as writer:
        out.to_excel(writer, sheet_name=sheet_name, index=False)
        if skipped_df is not None:
            skipped_df.to_excel(writer, sheet_name=SKIPPED_SHEET, index=False)

        bold = Font(bold=True)
        center_align = Alignment(horizontal="center", vertical="center")
        for ws in writer.sheets.values():
            ws.freeze_panes = "A2"
            col_map: dict[str, int] = {}
            for idx, cell in enumerate(ws[1], 1):
                col_map[cell.value] = idx
                cell.font = bold
                cell.alignment = center_align

            for name in AGGREGATE_COLUMNS:
                if name in col_map:
                    idx = col_map[name]
                    for (cell,) in ws.iter_rows(min_row=2, max_row=ws.max_row, min_col=idx, max_col=idx):
                        cell.number_format = "0.00"

            for name, width in column_widths.items():
                if name in col_map:
                    letter = ws.cell(row=1, column=col_map[name]).column_letter
                    ws.column_dimensions[letter].width = width

    return {
        "output_path": str(output_path),
        "sheet": sheet_name,
        "departments": int(len(out)),
        "skipped_rows": 0 if skipped_df is None else int(len(skipped_df)),
    }


def write_report(
    agg: pd.DataFrame,
    output_path: str | Path,
    fmt: str = "text",
    skipped: list[SkippedLine] | None = None,
) -> bool:
    """
    Write the report in `fmt` ('text', 'json' or 'excel') to `output_path`.
    Write failures are logged and reported as False; they never raise.
    """
    fmt = FORMAT_ALIASES.get(fmt, fmt)
    if fmt not in REPORT_FORMATS:
        raise ValueError(f"Unknown report format: {fmt!r}; expected one of {', '.join(REPORT_FORMATS)}")

    output_path = str(output_path)
    try:
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        if fmt == "excel":
            save_excel_report(agg, output_path, skipped=skipped)
        else:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(render_report(agg, fmt))
    except (OSError, ValueError, IllegalCharacterError) as exc:
        logger.error("Could not write %s report to %s: %s", fmt, output_path, exc)
        # drop a half-written workbook
        if fmt == "excel" and os.path.isfile(output_path):
            try:
                os.remove(output_path)
            except OSError:
                pass
        return False

    logger.info("Wrote %s report for %d departments to %s", fmt, len(agg), output_path)
    return True


__all__ = ["LoadResult", "load_employees", "save_excel_report", "write_report"]
