"""Test parts: the ordered, opaque content owned by a Test.

The project and runner only ever treat a test's parts as a sequence; the part
kinds below matter to the test serializer and to execution engines.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class Part:
    """Base class for all test parts."""


@dataclass(frozen=True)
class Comment(Part):
    """Free text attached to a test."""

    text: str


@dataclass(frozen=True)
class Step(Part):
    """One executable step: a grammar key plus its named cell values."""

    grammar: str
    cells: Mapping[str, str] = field(default_factory=dict)
