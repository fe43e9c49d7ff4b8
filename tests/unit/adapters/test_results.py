"""Unit tests for the JSON result artifact."""

import json
from datetime import datetime, timedelta, timezone

from storyline.adapters.results import JsonResultWriter, report_to_dict
from storyline.domain.value_objects import Outcome, ProjectResult, RunReport, TestResult

STARTED = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)


def _report() -> RunReport:
    return RunReport(
        run_id="run-0001",
        started_at=STARTED,
        finished_at=STARTED + timedelta(seconds=3),
        workspace="s1",
        projects=(
            ProjectResult(
                project_name="shop",
                project_file_name="/work/shop/shop.proj",
                workspace="s1",
                results=(
                    TestResult("s1/t1", Outcome.SUCCESS, (), 0.25),
                    TestResult("s1/t2", Outcome.FAILURE, ("step 1 (Add): nope",), 0.5),
                ),
            ),
        ),
    )


def test_report_to_dict_shape():
    """Totals, projects and tests are laid out as documented."""
    data = report_to_dict(_report())

    assert data["run_id"] == "run-0001"
    assert data["started_at"] == "2026-10-18T09:00:00+00:00"
    assert data["workspace"] == "s1"
    assert data["totals"] == {"total": 2, "successes": 1, "failures": 1, "errors": 0}

    (project,) = data["projects"]
    assert project["name"] == "shop"
    assert project["project_file"] == "/work/shop/shop.proj"
    assert [t["path"] for t in project["tests"]] == ["s1/t1", "s1/t2"]
    assert project["tests"][1] == {
        "path": "s1/t2",
        "outcome": "failure",
        "details": ["step 1 (Add): nope"],
        "duration_seconds": 0.5,
    }


def test_writer_creates_parent_directories(memory_fs):
    """The artifact is written as JSON, creating missing directories."""
    JsonResultWriter(memory_fs).write(_report(), "/out/results/run.json")

    data = json.loads(memory_fs.read_text("/out/results/run.json"))
    assert data["totals"]["total"] == 2
