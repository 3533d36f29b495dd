from __future__ import annotations

from pathlib import Path
import json
import sys

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from etl import main, run_pipeline  # noqa: E402
from io_ops import load_employees  # noqa: E402


FIX = Path(__file__).resolve().parent / "fixtures"
SAMPLE = FIX / "employees.txt"


def test_run_pipeline_sample_end_to_end(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "report.json"
    summary = run_pipeline(SAMPLE, out, sort_key="salary", fmt="json")

    assert summary["exit_code"] == 0
    assert summary["loaded"] == 6
    assert summary["skipped"] == 1
    assert summary["departments"] == 3
    assert summary["written"] is True

    data = json.loads(out.read_text(encoding="utf-8"))
    # sorted by salary first, so departments appear in order of their lowest earner
    assert list(data) == ["Finance", "IT", "HR"]
    assert data["IT"] == {
        "average_salary": 52500.0,
        "total_salary": 105000,
        "highest_salary": 55000,
        "lowest_salary": 50000,
    }
    assert data["HR"]["average_salary"] == 65000.0

    printed = capsys.readouterr().out
    assert "Department: Finance" in printed
    assert "Average Salary: $47500.00" in printed


def test_run_pipeline_missing_input_skips_downstream(tmp_path: Path) -> None:
    out = tmp_path / "report.txt"
    summary = run_pipeline(tmp_path / "missing.txt", out, echo=False)

    assert summary["exit_code"] == 1
    assert summary["loaded"] == 0
    assert summary["written"] is False
    assert not out.exists()


def test_run_pipeline_unreadable_input_is_reported(tmp_path: Path) -> None:
    summary = run_pipeline(tmp_path, tmp_path / "report.txt", echo=False)
    assert summary["exit_code"] == 1
    assert summary["written"] is False


def test_run_pipeline_invalid_sort_key_still_reports(tmp_path: Path) -> None:
    out = tmp_path / "report.txt"
    summary = run_pipeline(SAMPLE, out, sort_key="department", fmt="text", echo=False)

    assert summary["exit_code"] == 0
    text = out.read_text(encoding="utf-8")
    assert text.index("Department: IT") < text.index("Department: HR") < text.index("Department: Finance")


def test_main_wrong_argument_count_prints_usage(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(SAMPLE)]) == 2
    assert main([]) == 2
    assert main([str(SAMPLE), str(tmp_path / "a.txt"), "extra"]) == 2
    assert "usage:" in capsys.readouterr().out
    assert not (tmp_path / "a.txt").exists()


def test_main_writes_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "report.txt"
    code = main([str(SAMPLE), str(out), "--sort-key", "name", "--format", "text", "--quiet"])

    assert code == 0
    text = out.read_text(encoding="utf-8")
    assert text.count("-" * 40) == 6
    assert "Highest Salary: $70000.00" in text
    assert "Department:" not in capsys.readouterr().out


def test_run_pipeline_non_utf8_input_is_reported(tmp_path: Path) -> None:
    src = tmp_path / "latin1.txt"
    src.write_bytes("José, 30, IT, 50000\n".encode("latin-1"))
    out = tmp_path / "report.txt"

    with pytest.raises(UnicodeDecodeError):
        load_employees(src)
    summary = run_pipeline(src, out, echo=False)

    assert summary["exit_code"] == 1
    assert summary["written"] is False
    assert not out.exists()


def test_run_pipeline_oversized_salary_is_skipped(tmp_path: Path) -> None:
    src = tmp_path / "big.txt"
    src.write_text("Big, 40, IT, 99999999999999999999\nJohn, 30, IT, 50000\n", encoding="utf-8")
    out = tmp_path / "report.json"

    summary = run_pipeline(src, out, fmt="json", echo=False)

    assert summary["exit_code"] == 0
    assert summary["loaded"] == 1
    assert summary["skipped"] == 1
    assert json.loads(out.read_text(encoding="utf-8"))["IT"]["total_salary"] == 50000


def test_run_pipeline_excel_with_control_character_does_not_raise(tmp_path: Path) -> None:
    src = tmp_path / "ctrl.txt"
    src.write_text("A, 30, I\x01T, 5000\n", encoding="utf-8")

    summary = run_pipeline(src, tmp_path / "report.xlsx", fmt="excel", echo=False)

    assert summary["exit_code"] == 1
    assert summary["written"] is False
