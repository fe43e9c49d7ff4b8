"""Fixtures and test helpers for end-to-end CLI tests.

Provides a CliRunner, an isolated working directory, an importable fixtures
module (`e2e_fixtures`) and a factory that lays out a project on disk.
"""

import logging
import sys
import types
from pathlib import Path

import pytest
from click.testing import CliRunner

from storyline.adapters.filesystem import LocalFileSystem
from storyline.adapters.project_file import save_project
from storyline.adapters.test_xml import XmlTestWriter
from storyline.domain.hierarchy import Hierarchy, Test
from storyline.domain.parts import Step
from storyline.service_layer.project import Project

# pylint: disable=redefined-outer-name

FIXTURES_MODULE = "e2e_fixtures"


def _check(ok):
    assert ok == "yes", f"expected yes, got {ok}"


def _crash():
    raise RuntimeError("fixture crashed")


@pytest.fixture(autouse=True)
def _restore_logger_levels():
    """Undo per-logger levels set through ``-L`` so they do not leak."""
    levels = {
        name: lg.level
        for name, lg in logging.root.manager.loggerDict.items()
        if isinstance(lg, logging.Logger)
    }
    yield
    for name, lg in list(logging.root.manager.loggerDict.items()):
        if isinstance(lg, logging.Logger):
            lg.setLevel(levels.get(name, logging.NOTSET))


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner, monkeypatch):
    """Run the test inside an isolated working directory.

    Also clears the STORYLINE_* variables that would change CLI defaults.
    """
    for name in (
        "STORYLINE_PROJECT",
        "STORYLINE_WORKERS",
        "STORYLINE_WORKSPACE",
        "STORYLINE_FIXTURES",
        "STORYLINE_RESULTS_PATH",
        "STORYLINE_LOGGER_LEVELS",
    ):
        monkeypatch.delenv(name, raising=False)
    with runner.isolated_filesystem() as path:
        yield Path(path)


@pytest.fixture
def fixtures_module(monkeypatch):
    """Register `e2e_fixtures` with grammars `Check` and `Crash`."""
    module = types.ModuleType(FIXTURES_MODULE)
    module.GRAMMARS = {"Check": _check, "Crash": _crash}
    monkeypatch.setitem(sys.modules, FIXTURES_MODULE, module)
    return FIXTURES_MODULE


@pytest.fixture
def make_project_on_disk(fs):
    """Factory fixture: write a project whose tests each run one `Check` step.

    Args (of the returned callable):
        name: Project (and directory) name.
        tests: Mapping of test path (``"s1/t1"``) to the `ok` cell value;
            ``"crash"`` uses the `Crash` grammar instead.

    Returns the path of the project file, relative to the working directory.
    """

    def _make(name: str, tests: dict[str, str]) -> Path:
        disk = LocalFileSystem()
        project_file = Path(name) / f"{name}.proj"
        project = Project(project_file, filesystem=disk, writer=XmlTestWriter(disk))
        save_project(project, disk)

        hierarchy = Hierarchy(name)
        for path, value in tests.items():
            *suites, test_name = path.split("/")
            container = (
                hierarchy.find_or_create_suite("/".join(suites)) if suites else hierarchy
            )
            step = Step("Crash") if value == "crash" else Step("Check", {"ok": value})
            project.save(container.add_test(Test(test_name, [step])))
        return project_file

    return _make
