"""Interface for run identifier generators."""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Contract for producing the identifier stamped on each run's results."""

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return an identifier not handed out before by this generator."""
