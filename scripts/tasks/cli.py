"""Command line interface for the project task tracker."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv

from findmygym.core.config import get_settings

from .runner import run_phase_tests
from .store import (
    SUBTASK_STATUSES,
    TrackerDoc,
    find_phase,
    find_task,
    load_tracker,
    next_subtask,
    phase_progress,
    save_tracker,
    update_subtask,
)

_ICONS = {"done": "[x]", "in_progress": "[~]", "skipped": "[-]"}


def _icon(status: str | None) -> str:
    return _ICONS.get(status or "", "[ ]")


def _bar(percent: int, width: int = 20) -> str:
    filled = percent * width // 100
    return "#" * filled + "." * (width - filled)


def cmd_summary(doc: TrackerDoc) -> None:
    print(f"{doc.get('project', 'Task tracker')} {doc.get('version', '')}".rstrip())
    total = done = 0
    for p in phase_progress(doc):
        total += p.total
        done += p.done
        print(
            f"{_icon(p.status)} {p.phase_id} | {p.name:<35} | {_bar(p.percent)} {p.percent}% "
            f"({p.done}/{p.total}) | Sprint {p.sprint} | {p.estimated_days}d"
        )
    print(f"\nOverall progress: {done}/{total} subtasks complete")


def _print_task(phase: dict, task: dict) -> None:
    print(f"\n{task['id']}: {task.get('name', '')}")
    print(f"   Phase: {phase.get('name', '')}")
    print(f"   Status: {task.get('status', 'pending')}\n")
    for sub in task.get("subtasks", []):
        test = sub.get("test") or {}
        print(f"   {_icon(sub.get('status'))} {sub['id']}: {sub.get('name', '')}")
        print(f"      Test: [{test.get('type')}] {test.get('description', '')}")


def cmd_phase(doc: TrackerDoc, phase_id: str) -> None:
    phase = find_phase(doc, phase_id)
    if phase is None:
        print(f"Phase {phase_id} not found.")
        return
    print(f"\n{phase['id']}: {phase.get('name', '')}")
    print(
        f"   Sprint: {phase.get('sprint')} | Priority: {phase.get('priority')} "
        f"| Days: {phase.get('estimated_days')}"
    )
    print(f"   Depends on: {', '.join(phase.get('depends_on') or []) or 'none'}")
    for task in phase.get("tasks", []):
        _print_task(phase, task)


def cmd_task(doc: TrackerDoc, task_id: str) -> None:
    found = find_task(doc, task_id)
    if found is None:
        print(f"Task {task_id} not found.")
        return
    _print_task(*found)


def cmd_next(doc: TrackerDoc) -> None:
    found = next_subtask(doc)
    if found is None:
        print("All tasks complete!")
        return
    phase, task, sub = found
    test = sub.get("test") or {}
    print("\nNext task to implement:")
    print(f"   Phase: {phase['id']} - {phase.get('name', '')}")
    print(f"   Task:  {task['id']} - {task.get('name', '')}")
    print(f"   Sub:   {sub['id']} - {sub.get('name', '')}")
    print(f"   Test:  [{test.get('type')}] {test.get('description', '')}")


def cmd_update(doc: TrackerDoc, path: Path, subtask_id: str, status: str) -> None:
    if status not in SUBTASK_STATUSES:
        print(f"Invalid status {status!r}. Status: {' | '.join(SUBTASK_STATUSES)}")
        return
    if not update_subtask(doc, subtask_id, status):
        print(f"Subtask {subtask_id} not found.")
        return
    save_tracker(doc, path)
    print(f"Updated {subtask_id} -> {status}")


def cmd_test(doc: TrackerDoc, phase_id: str, project_root: Path) -> None:
    report = run_phase_tests(doc, phase_id, project_root)
    if report is None:
        print(f"Phase {phase_id} not found.")
        return
    print(f"\nRunning tests for {report.phase_id}: {report.name}\n")
    for outcome in report.outcomes:
        if outcome.result is None:
            print(f"    SKIP {outcome.subtask_id}")
        elif outcome.result.passed:
            print(f"    PASS {outcome.subtask_id}: {outcome.description}")
        else:
            print(f"    FAIL {outcome.subtask_id}: {outcome.description}")
            print(f"       -> {outcome.result.message}")
    print(
        f"\nResults: {report.passed} passed, {report.failed} failed, {report.skipped} skipped"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m scripts.tasks", description="Project task tracker"
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Tracker JSON (default: MYGYM_TASKS_FILE or mygym.json)",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("summary", help="Show all phases with progress")
    p = sub.add_parser("phase", help="Show full phase context")
    p.add_argument("phase_id")
    p = sub.add_parser("task", help="Show task detail")
    p.add_argument("task_id")
    sub.add_parser("next", help="Show next pending subtask")
    p = sub.add_parser("update", help="Update subtask status")
    p.add_argument("subtask_id")
    p.add_argument("status", help=" | ".join(SUBTASK_STATUSES))
    p = sub.add_parser("test", help="Run tests for a phase")
    p.add_argument("phase_id")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    path = Path(args.file or get_settings().mygym_tasks_file)
    doc = load_tracker(path)

    if args.command == "summary":
        cmd_summary(doc)
    elif args.command == "phase":
        cmd_phase(doc, args.phase_id.upper())
    elif args.command == "task":
        cmd_task(doc, args.task_id.upper())
    elif args.command == "next":
        cmd_next(doc)
    elif args.command == "update":
        cmd_update(doc, path, args.subtask_id.upper(), args.status)
    elif args.command == "test":
        cmd_test(doc, args.phase_id.upper(), path.resolve().parent)
    return 0
