from __future__ import annotations

import argparse
import inspect
import json
import subprocess
import sys
from datetime import datetime
from pathlib import Path

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from practice import student_tasks
from practice.challenges import CHALLENGES, Challenge


ROOT = Path(__file__).resolve().parents[1]
PRACTICE_DIR = ROOT / "practice"
PROGRESS_FILE = PRACTICE_DIR / ".mentor_progress.json"


def _load_progress(path: Path | None = None) -> dict:
    """Progress is {"passed": {"<level>": "<iso timestamp>"}}; unreadable files start fresh."""
    path = path or PROGRESS_FILE
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            data = {}
        if isinstance(data, dict) and isinstance(data.get("passed"), dict):
            return data
    return {"passed": {}}


def _save_progress(progress: dict, path: Path | None = None) -> None:
    path = path or PROGRESS_FILE
    path.write_text(json.dumps(progress, indent=2, sort_keys=True), encoding="utf-8")


def _passed_levels(progress: dict) -> set[int]:
    return {int(k) for k in progress.get("passed", {})}


def _next_level(progress: dict) -> int:
    passed = _passed_levels(progress)
    for c in CHALLENGES:
        if c.level not in passed:
            return c.level
    return CHALLENGES[-1].level


def _challenge_by_level(level: int) -> Challenge:
    for c in CHALLENGES:
        if c.level == level:
            return c
    raise ValueError(f"Unknown level: {level}")


def _target_function(c: Challenge):
    name = c.target.split("->")[-1].strip()
    return getattr(student_tasks, name)


def cmd_next() -> int:
    c = _challenge_by_level(_next_level(_load_progress()))
    print(f"Level {c.level}: {c.title}")
    print(f"Goal: {c.goal}")
    print(f"Target: {c.target}")
    print(f"Why: {c.why_it_matters}")
    print("")
    print("When done, run:")
    print(f"python practice/mentor_cli.py check --level {c.level}")
    return 0


def cmd_show(level: int) -> int:
    c = _challenge_by_level(level)
    func = _target_function(c)
    print(f"Level {c.level}: {c.title}")
    print(f"def {func.__name__}{inspect.signature(func)}")
    print(inspect.getdoc(func) or "(no contract written)")
    return 0


def _run_test_node(test_node: str) -> tuple[int, str]:
    cmd = [sys.executable, "-m", "pytest", "-q", test_node]
    proc = subprocess.run(
        cmd,
        cwd=str(ROOT),
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        check=False,
    )
    return proc.returncode, proc.stdout


def cmd_check(level: int) -> int:
    c = _challenge_by_level(level)
    code, out = _run_test_node(c.test_node)

    print(f"[Level {level}] {c.title}")
    if code == 0:
        progress = _load_progress()
        progress["passed"][str(level)] = datetime.now().isoformat(timespec="seconds")
        _save_progress(progress)
        print("Result: PASS")
        remaining = [x for x in CHALLENGES if x.level not in _passed_levels(progress)]
        if remaining:
            print(f"Next up: Level {remaining[0].level} - {remaining[0].title}")
        else:
            print("Track complete: the whole pipeline is yours.")
    else:
        print("Result: FAIL")
        print(f"- Re-read the contract: python practice/mentor_cli.py show --level {level}")
        print(f"- Reproduce locally: {sys.executable} -m pytest -q {c.test_node}")
        print("")
    print("---- pytest output ----")
    print(out.strip())
    return code


def cmd_status() -> int:
    progress = _load_progress()
    passed = _passed_levels(progress)
    print(f"Passed: {len(passed)}/{len(CHALLENGES)}")
    upcoming = _next_level(progress)
    for c in CHALLENGES:
        if c.level in passed:
            flag = f"PASS ({progress['passed'][str(c.level)]})"
        elif c.level == upcoming:
            flag = "OPEN"
        else:
            flag = "LOCKED"
        print(f"Level {c.level}: {flag} - {c.title}")
    return 0


def cmd_reset() -> int:
    if PROGRESS_FILE.exists():
        PROGRESS_FILE.unlink()
    print("Progress cleared.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Mentor practice CLI for the employee report pipeline")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("next", help="Show the next challenge")
    sub.add_parser("status", help="Show progress")
    sub.add_parser("reset", help="Forget all passed levels")

    p_show = sub.add_parser("show", help="Print the contract of a level's function")
    p_show.add_argument("--level", type=int, required=True)

    p_check = sub.add_parser("check", help="Run tests for a challenge level")
    p_check.add_argument("--level", type=int, required=True)

    args = parser.parse_args(argv)

    if args.cmd == "next":
        return cmd_next()
    if args.cmd == "status":
        return cmd_status()
    if args.cmd == "reset":
        return cmd_reset()
    if args.cmd == "show":
        return cmd_show(args.level)
    if args.cmd == "check":
        return cmd_check(args.level)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
