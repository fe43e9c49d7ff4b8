"""Result artifact interface."""

import abc

from storyline.domain.value_objects import RunReport

from .filesystem import PathLike

# pylint: disable=too-few-public-methods


class ResultWriter(abc.ABC):
    """Contract for persisting the aggregate outcome of a run."""

    @abc.abstractmethod
    def write(self, report: RunReport, path: PathLike) -> None:
        """Write `report` to `path`, creating parent directories as needed."""
