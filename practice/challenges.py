from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Challenge:
    level: int
    title: str
    goal: str
    target: str
    why_it_matters: str
    test_node: str


CHALLENGES: list[Challenge] = [
    Challenge(
        level=1,
        title="Parse And Validate A Line",
        goal="Turn one 'name, age, department, salary' line into a record, or reject it.",
        target="practice/student_tasks.py -> level1_parse_line",
        why_it_matters="Validation at the boundary keeps every later stage free of bad rows.",
        test_node="practice/tests/test_mentor_levels.py::test_level1_parse_line",
    ),
    Challenge(
        level=2,
        title="Sort With A Safe Fallback",
        goal="Sort records by name, age or salary; leave the order alone for an unknown key.",
        target="practice/student_tasks.py -> level2_sort_records",
        why_it_matters="A bad option should degrade the report, not kill the run.",
        test_node="practice/tests/test_mentor_levels.py::test_level2_sort_records",
    ),
    Challenge(
        level=3,
        title="Department Salary Summary",
        goal="Group by department and compute average, total, highest and lowest salary.",
        target="practice/student_tasks.py -> level3_department_summary",
        why_it_matters="This groupby is the heart of the report; every figure comes from it.",
        test_node="practice/tests/test_mentor_levels.py::test_level3_department_summary",
    ),
    Challenge(
        level=4,
        title="Text Report Block",
        goal="Render one department as a ruled block of four two-decimal currency lines.",
        target="practice/student_tasks.py -> level4_format_block",
        why_it_matters="Readers compare these numbers by eye; the layout must never drift.",
        test_node="practice/tests/test_mentor_levels.py::test_level4_format_block",
    ),
    Challenge(
        level=5,
        title="Structured Report",
        goal="Convert the summary into a JSON-ready dict with native numbers, order preserved.",
        target="practice/student_tasks.py -> level5_structured_report",
        why_it_matters="Downstream tools read the JSON; numpy scalars there break json.dumps.",
        test_node="practice/tests/test_mentor_levels.py::test_level5_structured_report",
    ),
]
