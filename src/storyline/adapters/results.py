"""JSON result artifact.

Shape::

    {
      "run_id": "01J...",
      "started_at": "2026-10-18T09:00:00+00:00",
      "finished_at": "2026-10-18T09:00:03+00:00",
      "workspace": null,
      "totals": {"total": 3, "successes": 2, "failures": 1, "errors": 0},
      "projects": [
        {
          "name": "shop",
          "project_file": "/src/shop/shop.proj",
          "workspace": null,
          "totals": {...},
          "tests": [
            {"path": "s1/t1", "outcome": "success", "details": [], "duration_seconds": 0.01}
          ]
        }
      ]
    }

Projects and tests appear in execution order.
"""

import json
import logging
import os
from typing import Any

from storyline.domain.value_objects import Counts, ProjectResult, RunReport, TestResult
from storyline.interfaces.filesystem import FileSystem, PathLike
from storyline.interfaces.results import ResultWriter

logger = logging.getLogger(__name__)


def _counts_to_dict(counts: Counts) -> dict[str, int]:
    return {
        "total": counts.total,
        "successes": counts.successes,
        "failures": counts.failures,
        "errors": counts.errors,
    }


def _test_to_dict(result: TestResult) -> dict[str, Any]:
    return {
        "path": result.test_path,
        "outcome": result.outcome.value,
        "details": list(result.details),
        "duration_seconds": round(result.duration_seconds, 6),
    }


def _project_to_dict(project: ProjectResult) -> dict[str, Any]:
    return {
        "name": project.project_name,
        "project_file": project.project_file_name,
        "workspace": project.workspace,
        "totals": _counts_to_dict(project.counts),
        "tests": [_test_to_dict(r) for r in project.results],
    }


def report_to_dict(report: RunReport) -> dict[str, Any]:
    """Convert a run report into JSON-ready primitives."""
    return {
        "run_id": report.run_id,
        "started_at": report.started_at.isoformat(),
        "finished_at": report.finished_at.isoformat(),
        "workspace": report.workspace,
        "totals": _counts_to_dict(report.counts),
        "projects": [_project_to_dict(p) for p in report.projects],
    }


class JsonResultWriter(ResultWriter):
    """Writes run reports as indented JSON through a `FileSystem`."""

    def __init__(self, filesystem: FileSystem) -> None:
        self._fs = filesystem

    def write(self, report: RunReport, path: PathLike) -> None:
        target = os.path.abspath(os.fspath(path))
        self._fs.make_dirs(os.path.dirname(target))
        self._fs.write_text(target, json.dumps(report_to_dict(report), indent=2) + "\n")
        logger.info("Wrote results for run %s to %s", report.run_id, target)
