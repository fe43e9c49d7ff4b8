"""Grammar-dispatch execution engine.

Each `Step` names a grammar; the engine looks the name up in a registry of
plain Python callables and calls it with the step's cells as keyword
arguments (all values are strings)::

    def add(x: str, y: str, sum: str) -> None:
        assert int(x) + int(y) == int(sum)

    GRAMMARS = {"Add": add}

Outcome rules, per step:
- returns normally (anything but ``False``): the step passes;
- raises `AssertionError` or returns ``False``: FAILURE, later steps still run;
- unknown grammar or any other exception: ERROR, the remaining steps are
  skipped.

A test's outcome is its worst step outcome. Comments are ignored.
"""

import importlib
import logging
import time
from collections.abc import Callable, Mapping

from storyline.domain.hierarchy import Test
from storyline.domain.parts import Step
from storyline.domain.value_objects import Outcome, TestResult
from storyline.interfaces.execution import ExecutionEngine

logger = logging.getLogger(__name__)

GRAMMARS_ATTRIBUTE = "GRAMMARS"

Grammar = Callable[..., object]

_SEVERITY = {Outcome.SUCCESS: 0, Outcome.FAILURE: 1, Outcome.ERROR: 2}


class GrammarModuleError(ImportError):
    """Raised when a fixtures module cannot provide a grammar registry."""

    def __init__(self, module_name: str, reason: str) -> None:
        super().__init__(f"Cannot load grammars from {module_name!r}: {reason}")
        self.module_name = module_name
        self.reason = reason


def load_grammars(module_name: str) -> dict[str, Grammar]:
    """Import `module_name` and return a copy of its ``GRAMMARS`` mapping.

    Raises:
        GrammarModuleError: If the module cannot be imported, or has no
            ``GRAMMARS`` mapping.
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise GrammarModuleError(module_name, str(e)) from e

    grammars = getattr(module, GRAMMARS_ATTRIBUTE, None)
    if not isinstance(grammars, Mapping):
        raise GrammarModuleError(
            module_name, f"it defines no {GRAMMARS_ATTRIBUTE} mapping"
        )
    logger.debug("Loaded %d grammar(s) from %s", len(grammars), module_name)
    return dict(grammars)


class GrammarEngine(ExecutionEngine):
    """Executes steps by calling the grammar registered under their key.

    Args:
        grammars: Mapping of grammar key to callable. Grammars are shared by
            every worker thread, so they must not keep per-test state.
    """

    def __init__(self, grammars: Mapping[str, Grammar]) -> None:
        self._grammars = dict(grammars)

    def execute(self, test: Test) -> TestResult:
        started = time.perf_counter()
        outcome = Outcome.SUCCESS
        details: list[str] = []

        for index, part in enumerate(test.parts, start=1):
            if not isinstance(part, Step):
                continue
            step_outcome, detail = self._execute_step(index, part)
            if detail:
                details.append(detail)
            if _SEVERITY[step_outcome] > _SEVERITY[outcome]:
                outcome = step_outcome
            if step_outcome is Outcome.ERROR:
                break

        return TestResult(
            test_path=test.path,
            outcome=outcome,
            details=tuple(details),
            duration_seconds=time.perf_counter() - started,
        )

    def _execute_step(self, index: int, step: Step) -> tuple[Outcome, str | None]:
        label = f"step {index} ({step.grammar})"
        if (grammar := self._grammars.get(step.grammar)) is None:
            return Outcome.ERROR, f"{label}: no grammar named {step.grammar!r}"
        try:
            returned = grammar(**step.cells)
        except AssertionError as e:
            return Outcome.FAILURE, f"{label}: {str(e) or 'assertion failed'}"
        except Exception as e:  # pylint: disable=broad-except
            logger.debug("Grammar %r raised", step.grammar, exc_info=True)
            return Outcome.ERROR, f"{label}: {type(e).__name__}: {e}"
        if returned is False:
            return Outcome.FAILURE, f"{label}: returned False"
        return Outcome.SUCCESS, None
