from __future__ import annotations

import pandas as pd


def level1_parse_line(line: str) -> dict | None:
    """
    Level 1
    Goal: parse 'name, age, department, salary' into a dict.
    Rules:
      - split on ',' and strip each field
      - exactly 4 fields, non-empty name and department
      - age and salary are integers > 0
      - return None for anything that breaks a rule
    """
    fields = [f.strip() for f in line.split(",")]
    if len(fields) != 4:
        return None
    name, age, department, salary = fields
    if not name or not department:
        return None
    try:
        age_i, salary_i = int(age), int(salary)
    except ValueError:
        return None
    if age_i <= 0 or salary_i <= 0:
        return None
    return {"name": name, "age": age_i, "department": department, "salary": salary_i}


def level2_sort_records(records: list[dict], key: str) -> list[dict]:
    """
    Level 2
    Return a new list sorted ascending by key ('name', 'age' or 'salary').
    Ties keep their original order. Any other key returns `records` unchanged.
    """
    if key not in ("name", "age", "salary"):
        return records
    return sorted(records, key=lambda r: r[key])


def level3_department_summary(df: pd.DataFrame) -> pd.DataFrame:
    """
    Level 3
    Input columns: name, age, department, salary
    Output columns: department, average_salary, total_salary, highest_salary, lowest_salary
    One row per department, in order of first appearance.
    """
    return df.groupby("department", as_index=False, sort=False).agg(
        average_salary=("salary", "mean"),
        total_salary=("salary", "sum"),
        highest_salary=("salary", "max"),
        lowest_salary=("salary", "min"),
    )


def level4_format_block(department: str, figures: dict) -> str:
    """
    Level 4
    Lines:
      Department: <department>
      ---------------------------------------- (40 dashes)
      Average Salary: $<2 decimals>
      Total Salary: $<2 decimals>
      Highest Salary: $<2 decimals>
      Lowest Salary: $<2 decimals>
      ----------------------------------------
    """
    rule = "-" * 40
    labels = [
        ("Average Salary", "average_salary"),
        ("Total Salary", "total_salary"),
        ("Highest Salary", "highest_salary"),
        ("Lowest Salary", "lowest_salary"),
    ]
    lines = [f"Department: {department}", rule]
    lines += [f"{label}: ${float(figures[k]):.2f}" for label, k in labels]
    lines.append(rule)
    return "\n".join(lines)


def level5_structured_report(summary: pd.DataFrame) -> dict:
    """
    Level 5
    Input: output of level3_department_summary
    Output: {department: {average_salary: float, total_salary: int, highest_salary: int, lowest_salary: int}}
    Plain Python numbers only, departments in input row order.
    """
    out = {}
    for _, r in summary.iterrows():
        out[str(r["department"])] = {
            "average_salary": float(r["average_salary"]),
            "total_salary": int(r["total_salary"]),
            "highest_salary": int(r["highest_salary"]),
            "lowest_salary": int(r["lowest_salary"]),
        }
    return out
