"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class StorylineError(Exception):
    """Base class for STORYLINE errors."""


# ============================================================================
#                      Hierarchy lookup (path resolution)
# ============================================================================


class PathResolutionError(StorylineError, LookupError):
    """Raised when a slash-separated path cannot be resolved in a hierarchy."""

    def __init__(self, kind: str, path: str, segment: str) -> None:
        super().__init__(
            f"{kind} '{path}' not found (no node named '{segment}' at that level)."
        )
        self.kind = kind
        self.path = path
        self.segment = segment


class TestNotFoundError(PathResolutionError):
    """Raised when `find_test` cannot resolve a path."""

    __test__ = False  # not a pytest test class

    def __init__(self, path: str, segment: str) -> None:
        super().__init__("Test", path, segment)


class SuiteNotFoundError(PathResolutionError):
    """Raised when `find_suite` (or a workspace selector) cannot resolve a path."""

    def __init__(self, path: str, segment: str) -> None:
        super().__init__("Suite", path, segment)


# ============================================================================
#                           Hierarchy construction
# ============================================================================


class HierarchyError(StorylineError):
    """Base class for errors raised while building a hierarchy."""


class DuplicateNameError(HierarchyError):
    """Raised when a sibling of the same kind already uses a name."""

    def __init__(self, kind: str, name: str, parent: str) -> None:
        super().__init__(f"{kind} '{name}' already exists in '{parent}'.")
        self.kind = kind
        self.name = name
        self.parent = parent


class AlreadyAttachedError(HierarchyError):
    """Raised when adding a node that already belongs to another container."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} '{name}' is already attached to a parent.")
        self.kind = kind
        self.name = name


class InvalidNameError(HierarchyError, ValueError):
    """Raised when a suite or test name cannot be a single path segment."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(
            f"{kind} name {name!r} must be non-blank, must not be '.' or '..', "
            "and must not contain '/' or '\\'."
        )
        self.kind = kind
        self.name = name


class DetachedNodeError(HierarchyError):
    """Raised when the hierarchy a node was added to no longer exists.

    Parent links are weak, so a suite or test outlives its tree only as a
    detached object; its path is then unknown rather than top-level.
    """

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(
            f"{kind} '{name}' has lost its parent; keep the Hierarchy alive "
            "while using its nodes."
        )
        self.kind = kind
        self.name = name


# ============================================================================
#                               Persistence
# ============================================================================


class PersistenceError(StorylineError):
    """Base class for errors raised by test file operations."""


class TestFileConflictError(PersistenceError):
    """Raised when a rename would overwrite the file of another test."""

    __test__ = False

    def __init__(self, test_name: str, path: str) -> None:
        super().__init__(
            f"Cannot rename '{test_name}': a file already exists at {path}."
        )
        self.test_name = test_name
        self.path = path


class ProjectNotBoundError(PersistenceError, RuntimeError):
    """Raised when a file operation needs a collaborator the project lacks."""

    def __init__(self, collaborator: str) -> None:
        super().__init__(
            f"This project has no {collaborator}; pass one to Project(...)."
        )
        self.collaborator = collaborator
