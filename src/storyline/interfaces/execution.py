"""Execution engine interface."""

import abc

from storyline.domain.hierarchy import Test
from storyline.domain.value_objects import TestResult

# pylint: disable=too-few-public-methods


class ExecutionEngine(abc.ABC):
    """Contract for executing a single test.

    Implementations must be safe to call from several worker threads at once:
    the runner may execute the tests of one project in parallel.
    """

    @abc.abstractmethod
    def execute(self, test: Test) -> TestResult:
        """Execute `test` and return its outcome with diagnostic detail.

        Failures and errors inside the test are reported through the returned
        result. An exception escaping this method is treated by the runner as
        an error outcome for this test only.
        """
