"""Project runner: executes one or more projects and summarises the outcome.

Projects run strictly one after another; a project's results are complete
before the next project starts. Within a project, tests may run on a thread
pool, but results are always recorded in hierarchy order, so the artifact and
counts do not depend on scheduling.

Every test is its own failure domain: an exception escaping the execution
engine becomes an ERROR result for that test and the batch carries on.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from storyline.domain.hierarchy import Hierarchy, Test
from storyline.domain.value_objects import Outcome, ProjectResult, RunReport, TestResult
from storyline.interfaces.execution import ExecutionEngine
from storyline.interfaces.filesystem import PathLike
from storyline.interfaces.id_generator import IdGenerator
from storyline.interfaces.results import ResultWriter

from .project import Project

logger = logging.getLogger(__name__)

# pylint: disable=too-many-instance-attributes,too-few-public-methods

HierarchyLoader = Callable[[Project], Hierarchy]
EngineFactory = Callable[[Project], ExecutionEngine]


def select_tests(hierarchy: Hierarchy, workspace: str | None) -> list[Test]:
    """Return the tests a run executes, in hierarchy order.

    Args:
        hierarchy: The project's hierarchy.
        workspace: Suite path restricting the run, or None/"" for every test.

    Raises:
        SuiteNotFoundError: If the workspace names no suite.
    """
    if not workspace:
        return list(hierarchy.all_tests())
    return list(hierarchy.find_suite(workspace).all_tests())


def exit_status(report: RunReport) -> int:
    """0 when every executed test passed, else the failure plus error count."""
    return report.counts.unsuccessful


class ProjectRunner:
    """Runs a sequence of projects and writes one aggregate result artifact.

    Args:
        projects: Projects to execute, in order.
        results_path: Where to write the artifact; None skips writing.
        hierarchy_loader: Builds the hierarchy of a project.
        engine_factory: Builds the execution engine for a project.
        result_writer: Persists the run report.
        id_generator: Produces the run id.
        workspace: Suite path applied to every project; when None each
            project's own `workspace` setting is used.
        max_workers: Threads used to execute the tests of one project.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        projects: Sequence[Project],
        results_path: PathLike | None = None,
        *,
        hierarchy_loader: HierarchyLoader,
        engine_factory: EngineFactory,
        result_writer: ResultWriter,
        id_generator: IdGenerator,
        workspace: str | None = None,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.projects = list(projects)
        self.results_path = results_path
        self.workspace = workspace
        self.max_workers = max_workers
        self._load_hierarchy = hierarchy_loader
        self._build_engine = engine_factory
        self._result_writer = result_writer
        self._id_generator = id_generator
        self.last_report: RunReport | None = None

    def execute(self) -> int:
        """Run every project and return the exit status.

        Returns:
            0 if every executed test passed; otherwise the number of failed
            plus errored tests.

        Raises:
            SuiteNotFoundError: If a workspace names no suite in a project.
            TestParseError: If a project's test files cannot be loaded.
        """
        run_id = self._id_generator.new_id()
        started_at = datetime.now(timezone.utc)
        logger.info("Run %s: %d project(s)", run_id, len(self.projects))

        project_results = tuple(self._execute_project(p) for p in self.projects)

        report = RunReport(
            run_id=run_id,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
            workspace=self.workspace,
            projects=project_results,
        )
        self.last_report = report

        if self.results_path is not None:
            self._result_writer.write(report, self.results_path)

        counts = report.counts
        logger.info(
            "Run %s finished: %d test(s), %d passed, %d failed, %d errors",
            run_id,
            counts.total,
            counts.successes,
            counts.failures,
            counts.errors,
        )
        return exit_status(report)

    def _execute_project(self, project: Project) -> ProjectResult:
        workspace = self.workspace or project.workspace
        hierarchy = self._load_hierarchy(project)
        tests = select_tests(hierarchy, workspace)
        engine = self._build_engine(project)

        logger.info(
            "Project %r: running %d test(s)%s",
            project.name,
            len(tests),
            f" in workspace {workspace!r}" if workspace else "",
        )

        def run(test: Test) -> TestResult:
            return _run_isolated(engine, test)

        if self.max_workers == 1 or len(tests) < 2:  # pylint: disable=magic-value-comparison
            results = tuple(run(t) for t in tests)
        else:
            with ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="storyline"
            ) as pool:
                # map preserves input order regardless of completion order
                results = tuple(pool.map(run, tests))

        project_result = ProjectResult(
            project_name=project.name,
            project_file_name=project.project_file_name,
            workspace=workspace,
            results=results,
        )
        if counts := project_result.counts.unsuccessful:
            logger.warning(
                "Project %r: %d of %d test(s) did not pass",
                project.name,
                counts,
                project_result.counts.total,
            )
        return project_result


def _run_isolated(engine: ExecutionEngine, test: Test) -> TestResult:
    """Execute one test; any exception becomes an ERROR result."""
    path = test.path
    started = time.perf_counter()
    try:
        result = engine.execute(test)
    except Exception as e:  # pylint: disable=broad-except
        logger.exception("Engine raised while executing test %r", path)
        result = TestResult(
            test_path=path,
            outcome=Outcome.ERROR,
            details=(f"{type(e).__name__}: {e}",),
            duration_seconds=time.perf_counter() - started,
        )
    logger.debug("Test %r: %s", path, result.outcome.value)
    return result
