"""Run ID generators for STORYLINE."""

import threading

from ulid import monotonic

from storyline.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs sort by creation time, so result artifacts from successive runs can be
    ordered by their run id alone. Uses the `ulid-py` library.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class SequentialIdGenerator(IdGenerator):
    """Zero-padded counter ids (``run-0001``, ``run-0002``, ...).

    Note:
        Deterministic; meant for tests and demos.
    """

    def __init__(self, prefix: str = "run-", width: int = 4) -> None:
        self._counter = 0
        self._prefix = prefix
        self._width = width

    def new_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}{self._counter:0{self._width}d}"
