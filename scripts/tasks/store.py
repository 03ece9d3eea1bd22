"""Load, query and update the JSON task tracker (phases -> tasks -> subtasks)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

SUBTASK_STATUSES = ("pending", "in_progress", "done", "skipped")

TrackerDoc = dict[str, Any]


def load_tracker(path: str | Path) -> TrackerDoc:
    with open(path, encoding="utf-8") as fh:
        doc = json.load(fh)
    doc.setdefault("phases", [])
    return doc


def save_tracker(doc: TrackerDoc, path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(doc, fh, indent=2, ensure_ascii=False)
        fh.write("\n")


@dataclass(frozen=True)
class PhaseProgress:
    phase_id: str
    name: str
    status: str
    done: int
    total: int
    sprint: Any = None
    estimated_days: Any = None

    @property
    def percent(self) -> int:
        return round(self.done / self.total * 100) if self.total else 0


def _subtasks(phase: dict) -> list[dict]:
    return [s for t in phase.get("tasks", []) for s in t.get("subtasks", [])]


def phase_progress(doc: TrackerDoc) -> list[PhaseProgress]:
    out: list[PhaseProgress] = []
    for phase in doc["phases"]:
        subs = _subtasks(phase)
        out.append(
            PhaseProgress(
                phase_id=phase["id"],
                name=phase.get("name", ""),
                status=phase.get("status", "pending"),
                done=sum(1 for s in subs if s.get("status") == "done"),
                total=len(subs),
                sprint=phase.get("sprint"),
                estimated_days=phase.get("estimated_days"),
            )
        )
    return out


def find_phase(doc: TrackerDoc, phase_id: str) -> dict | None:
    return next((p for p in doc["phases"] if p["id"] == phase_id), None)


def find_task(doc: TrackerDoc, task_id: str) -> tuple[dict, dict] | None:
    for phase in doc["phases"]:
        for task in phase.get("tasks", []):
            if task["id"] == task_id:
                return phase, task
    return None


def _deps_done(doc: TrackerDoc, phase: dict) -> bool:
    for dep_id in phase.get("depends_on") or []:
        dep = find_phase(doc, dep_id)
        if dep is None or dep.get("status") != "done":
            return False
    return True


def next_subtask(doc: TrackerDoc) -> tuple[dict, dict, dict] | None:
    """First pending subtask in file order, skipping phases with unfinished dependencies."""
    for phase in doc["phases"]:
        if not _deps_done(doc, phase):
            continue
        for task in phase.get("tasks", []):
            for sub in task.get("subtasks", []):
                if sub.get("status") == "pending":
                    return phase, task, sub
    return None


def rollup_status(statuses: list[str]) -> str:
    if all(s in ("done", "skipped") for s in statuses):
        return "done"
    if any(s in ("in_progress", "done") for s in statuses):
        return "in_progress"
    return "pending"


def update_subtask(doc: TrackerDoc, subtask_id: str, status: str) -> bool:
    """Set a subtask's status and roll it up into its task and phase.

    Returns False when no subtask has that id.
    """
    if status not in SUBTASK_STATUSES:
        raise ValueError(f"invalid status: {status}")
    for phase in doc["phases"]:
        for task in phase.get("tasks", []):
            for sub in task.get("subtasks", []):
                if sub["id"] != subtask_id:
                    continue
                sub["status"] = status
                task["status"] = rollup_status([s.get("status") for s in task["subtasks"]])
                phase["status"] = rollup_status([t.get("status") for t in phase["tasks"]])
                return True
    return False
