"""In-memory namespace tree of suites and tests.

A `Hierarchy` owns the top-level suites and tests of one test project. Suites
own their child suites and tests; every back-reference from a child to the
suite or hierarchy holding it is a `weakref.ref`, so ownership only ever flows
downwards. Nodes are only meaningful while their `Hierarchy` is alive: once it
is collected, asking a node for its parent or path raises `DetachedNodeError`.

Names are single path segments; `/`, `\\`, `.` and `..` are rejected.

Paths are slash-separated chains of names, e.g. ``"s1/s2/t3"``. Sibling names
are unique per kind: a suite and a test may share a name, two suites may not.

Example:
    hierarchy = Hierarchy("acceptance")
    checkout = hierarchy.find_or_create_suite("shop/checkout")
    checkout.add_test(Test("pay by card"))
    hierarchy.find_test("shop/checkout/pay by card")
"""

from __future__ import annotations

import re
import weakref
from collections.abc import Iterable, Iterator

from storyline.config import TEST_FILE_EXTENSION

from .errors import (
    AlreadyAttachedError,
    DetachedNodeError,
    DuplicateNameError,
    InvalidNameError,
    SuiteNotFoundError,
    TestNotFoundError,
)
from .parts import Comment, Part

PATH_SEPARATOR = "/"

_WHITESPACE_RUN = re.compile(r"\s+")
_SEPARATORS = ("/", "\\")
_RELATIVE_SEGMENTS = (".", "..")


def split_path(path: str) -> list[str]:
    """Split a slash-separated hierarchy path into its non-empty segments."""
    return [segment for segment in path.split(PATH_SEPARATOR) if segment]


def derive_file_name(name: str) -> str:
    """Return a filesystem-safe file name for a test name.

    Whitespace runs become a single underscore: ``"New Name"`` gives
    ``"New_Name.xml"``. Names are single path segments (see `check_name`), so
    the result never leaves the directory it is placed in.

    Raises:
        InvalidNameError: If `name` is not a valid test name.
    """
    check_name("Test", name)
    return _WHITESPACE_RUN.sub("_", name.strip()) + TEST_FILE_EXTENSION


def check_name(kind: str, name: str) -> str:
    """Return `name` if it can be one segment of a hierarchy path.

    Raises:
        InvalidNameError: If `name` is blank, ``"."`` or ``".."``, or contains
            a ``/`` or ``\\``.
    """
    if (
        not name.strip()
        or name in _RELATIVE_SEGMENTS
        or any(sep in name for sep in _SEPARATORS)
    ):
        raise InvalidNameError(kind, name)
    return name


class _Node:
    """Shared parent bookkeeping for suites and tests.

    `_owner_ref` points (weakly) at the container the node was added to: a
    `Suite`, or the `Hierarchy` itself for top-level nodes. It is None only
    while the node has never been attached.
    """

    kind = "Node"

    def __init__(self, name: str) -> None:
        self.name = name
        self._owner_ref: weakref.ref[_Container] | None = None

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = check_name(self.kind, value)

    @property
    def container(self) -> _Container | None:
        """The owning `Suite` or `Hierarchy`, or None if never attached.

        Raises:
            DetachedNodeError: If the owner has been garbage-collected.
        """
        if self._owner_ref is None:
            return None
        owner = self._owner_ref()
        if owner is None:
            raise DetachedNodeError(self.kind, self._name)
        return owner

    @property
    def parent(self) -> Suite | None:
        """The containing suite, or None at the hierarchy root (or unattached).

        Raises:
            DetachedNodeError: If the owning container no longer exists.
        """
        owner = self.container
        return owner if isinstance(owner, Suite) else None

    @property
    def path(self) -> str:
        """Slash-joined names from the topmost ancestor down to this node."""
        parent = self.parent
        if parent is None:
            return self.name
        return f"{parent.path}{PATH_SEPARATOR}{self.name}"

    def _attach(self, owner: _Container) -> None:
        if self._owner_ref is not None:
            raise AlreadyAttachedError(self.kind, self.name)
        self._owner_ref = weakref.ref(owner)


class _Container:
    """Ordered children (suites and tests) plus path lookups."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._suites: list[Suite] = []
        self._tests: list[Test] = []

    @property
    def suites(self) -> tuple[Suite, ...]:
        """Child suites in insertion order."""
        return tuple(self._suites)

    @property
    def tests(self) -> tuple[Test, ...]:
        """Child tests in insertion order."""
        return tuple(self._tests)

    @property
    def label(self) -> str:
        """Name used in messages: the hierarchy name or the suite path."""
        return self.name

    def add_suite(self, suite: Suite) -> Suite:
        """Append `suite` to this container and set its back-reference.

        Raises:
            DuplicateNameError: If a child suite already uses the name.
            AlreadyAttachedError: If `suite` already has a parent.
        """
        if self.suite_named(suite.name) is not None:
            raise DuplicateNameError(suite.kind, suite.name, self.label)
        suite._attach(self)  # pylint: disable=protected-access
        self._suites.append(suite)
        return suite

    def add_test(self, test: Test) -> Test:
        """Append `test` to this container and set its back-reference.

        Raises:
            DuplicateNameError: If a child test already uses the name.
            AlreadyAttachedError: If `test` already has a parent.
        """
        if self.test_named(test.name) is not None:
            raise DuplicateNameError(test.kind, test.name, self.label)
        test._attach(self)  # pylint: disable=protected-access
        self._tests.append(test)
        return test

    def suite_named(self, name: str) -> Suite | None:
        """Return the direct child suite called `name`, if any."""
        return next((s for s in self._suites if s.name == name), None)

    def test_named(self, name: str) -> Test | None:
        """Return the direct child test called `name`, if any."""
        return next((t for t in self._tests if t.name == name), None)

    def find_suite(self, path: str) -> Suite:
        """Resolve a slash-separated suite path relative to this container.

        Raises:
            SuiteNotFoundError: If any segment cannot be resolved.
        """
        container: _Container = self
        segments = split_path(path)
        if not segments:
            raise SuiteNotFoundError(path, "")
        for segment in segments:
            suite = container.suite_named(segment)
            if suite is None:
                raise SuiteNotFoundError(path, segment)
            container = suite
        assert isinstance(container, Suite)
        return container

    def find_test(self, path: str) -> Test:
        """Resolve a slash-separated test path relative to this container.

        Every segment but the last names a suite; the last names a test.

        Raises:
            TestNotFoundError: If any segment cannot be resolved.
        """
        segments = split_path(path)
        if not segments:
            raise TestNotFoundError(path, "")
        container: _Container = self
        for segment in segments[:-1]:
            suite = container.suite_named(segment)
            if suite is None:
                raise TestNotFoundError(path, segment)
            container = suite
        test = container.test_named(segments[-1])
        if test is None:
            raise TestNotFoundError(path, segments[-1])
        return test

    def find_or_create_suite(self, path: str) -> Suite:
        """Resolve a suite path, creating any missing suites along the way."""
        container: _Container = self
        for segment in split_path(path):
            suite = container.suite_named(segment)
            if suite is None:
                suite = container.add_suite(Suite(segment))
            container = suite
        if container is self and not isinstance(self, Suite):
            raise ValueError("A suite path needs at least one segment.")
        assert isinstance(container, Suite)
        return container

    def all_tests(self) -> Iterator[Test]:
        """Yield every test below this container, depth first.

        A container's own tests come before the tests of its child suites.
        """
        yield from self._tests
        for suite in self._suites:
            yield from suite.all_tests()


class Suite(_Node, _Container):
    """A named grouping node; owns child suites and tests."""

    kind = "Suite"

    def __init__(self, name: str) -> None:
        _Node.__init__(self, name)
        _Container.__init__(self, name)

    @property
    def label(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"Suite({self.path!r})"


class Test(_Node):
    """A named leaf holding an ordered sequence of opaque parts.

    Attributes:
        name: Display name, also the last segment of the test's path.
        file_name: Explicit file name relative to the project's test folder,
            or None to use the name derived from the hierarchy path.
        parts: The test's content, in order.
    """

    __test__ = False  # not a pytest test class
    kind = "Test"

    def __init__(
        self,
        name: str,
        parts: Iterable[Part] = (),
        file_name: str | None = None,
    ) -> None:
        super().__init__(name)
        self.parts: list[Part] = list(parts)
        self.file_name = file_name

    @property
    def default_file_name(self) -> str:
        """``<hierarchy path>.xml``, using ``/`` between segments."""
        return self.path + TEST_FILE_EXTENSION

    @property
    def effective_file_name(self) -> str:
        """The override `file_name` if set, else `default_file_name`."""
        return self.file_name or self.default_file_name

    def add_comment(self, text: str) -> Comment:
        """Append a comment part and return it."""
        comment = Comment(text)
        self.parts.append(comment)
        return comment

    def replace_parts(self, parts: Iterable[Part]) -> None:
        """Replace the whole part sequence."""
        self.parts = list(parts)

    def __repr__(self) -> str:
        return f"Test({self.path!r})"


class Hierarchy(_Container):
    """Root of a test project's tree: top-level suites and tests."""

    def __repr__(self) -> str:
        return f"Hierarchy({self.name!r})"
