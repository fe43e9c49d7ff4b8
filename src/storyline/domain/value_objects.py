"""Value objects describing test and run outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Outcome(Enum):
    """Enumeration of possible test outcomes."""

    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


@dataclass(frozen=True)
class TestResult:
    """Outcome of executing one test, with diagnostic detail."""

    __test__ = False  # not a pytest test class

    test_path: str
    outcome: Outcome
    details: tuple[str, ...] = ()
    duration_seconds: float = 0.0

    @property
    def passed(self) -> bool:
        """True only for a successful outcome."""
        return self.outcome is Outcome.SUCCESS


@dataclass(frozen=True)
class Counts:
    """Aggregate outcome counts."""

    successes: int = 0
    failures: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        """Number of executed tests."""
        return self.successes + self.failures + self.errors

    @property
    def unsuccessful(self) -> int:
        """Failures plus errors."""
        return self.failures + self.errors

    def __add__(self, other: Counts) -> Counts:
        return Counts(
            successes=self.successes + other.successes,
            failures=self.failures + other.failures,
            errors=self.errors + other.errors,
        )

    @classmethod
    def of(cls, results: tuple[TestResult, ...]) -> Counts:
        """Count the outcomes of a sequence of results."""
        return cls(
            successes=sum(r.outcome is Outcome.SUCCESS for r in results),
            failures=sum(r.outcome is Outcome.FAILURE for r in results),
            errors=sum(r.outcome is Outcome.ERROR for r in results),
        )


@dataclass(frozen=True)
class ProjectResult:
    """All results of one project, in hierarchy order."""

    project_name: str
    project_file_name: str | None
    workspace: str | None
    results: tuple[TestResult, ...] = field(default_factory=tuple)

    @property
    def counts(self) -> Counts:
        """Outcome counts for this project."""
        return Counts.of(self.results)


@dataclass(frozen=True)
class RunReport:
    """Everything a run produced, ready to be written as an artifact."""

    run_id: str
    started_at: datetime
    finished_at: datetime
    workspace: str | None
    projects: tuple[ProjectResult, ...] = field(default_factory=tuple)

    @property
    def counts(self) -> Counts:
        """Outcome counts across all projects."""
        return sum((p.counts for p in self.projects), Counts())
