"""Execute the ``test`` descriptor attached to each subtask."""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .store import TrackerDoc, find_phase

_MESSAGE_LIMIT = 200


@dataclass(frozen=True)
class CheckResult:
    passed: bool
    message: str


@dataclass
class SubtaskOutcome:
    subtask_id: str
    description: str
    result: CheckResult | None  # None when skipped


@dataclass
class PhaseReport:
    phase_id: str
    name: str
    outcomes: list[SubtaskOutcome] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for o in self.outcomes if o.result is not None and o.result.passed)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.result is not None and not o.result.passed)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.result is None)


def _run(cmd: list[str] | str, root: Path, *, shell: bool = False) -> str:
    proc = subprocess.run(
        cmd, cwd=root, shell=shell, check=True, capture_output=True, text=True
    )
    return proc.stdout.strip()


def run_test(test: dict, project_root: str | Path) -> CheckResult:
    root = Path(project_root)
    kind = test.get("type")
    try:
        if kind == "command":
            out = _run(test["command"], root, shell=True)
            return CheckResult(True, f"Command passed: {out[:100]}")

        if kind == "file_exists":
            files = test.get("files") or []
            if not files:
                return CheckResult(False, "No files defined")
            missing = [f for f in files if not (root / f).exists()]
            if missing:
                return CheckResult(False, f"Missing: {', '.join(missing)}")
            return CheckResult(True, "All files exist")

        if kind == "api":
            if not test.get("endpoint"):
                return CheckResult(False, "No endpoint defined")
            return CheckResult(
                True, f"API test defined: {test['endpoint']} -> {test.get('expected_status')}"
            )

        if kind == "unit":
            if not test.get("file"):
                return CheckResult(False, "No test file defined")
            if not (root / test["file"]).exists():
                return CheckResult(False, f"Test file not found: {test['file']}")
            out = _run([sys.executable, "-m", "pytest", test["file"], "-q"], root)
            return CheckResult(True, out[:_MESSAGE_LIMIT])

        if kind in ("render", "interaction"):
            return CheckResult(True, f"Manual test: {test.get('description', '')}")

        if kind == "db_query":
            return CheckResult(True, f"DB test defined: {test.get('query')}")

        return CheckResult(False, f"Unknown test type: {kind}")
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or exc.stdout or str(exc)).strip()
        return CheckResult(False, detail[:_MESSAGE_LIMIT])
    except (OSError, KeyError) as exc:
        return CheckResult(False, str(exc)[:_MESSAGE_LIMIT])


def run_phase_tests(doc: TrackerDoc, phase_id: str, project_root: str | Path) -> PhaseReport | None:
    phase = find_phase(doc, phase_id)
    if phase is None:
        return None
    report = PhaseReport(phase_id=phase["id"], name=phase.get("name", ""))
    for task in phase.get("tasks", []):
        for sub in task.get("subtasks", []):
            test = sub.get("test") or {}
            if sub.get("status") == "skipped":
                result = None
            else:
                result = run_test(test, project_root)
            report.outcomes.append(
                SubtaskOutcome(sub["id"], test.get("description", sub.get("name", "")), result)
            )
    return report
