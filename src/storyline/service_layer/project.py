"""Project: where one test collection lives on disk, and its file operations.

A `Project` turns a test's position in the hierarchy into an absolute file
path, and saves, deletes and renames test files at those paths. Layout::

    <project_folder>/
        <test_folder>/          (default "Tests")
            s1/
                s2/
                    t3.xml      (test "t3" in suite "s1/s2")
        bin/<compile_target>/   (unless binary_folder overrides it)

All returned paths are absolute and use the host separator, whatever mix of
forward and back slashes the settings were written with.

File operations go through the injected `FileSystem` and `TestWriter`. A
project built without them still answers every path question; the file
operations raise `ProjectNotBoundError`.
"""

from __future__ import annotations

import logging
import os

from storyline.config import (
    BINARY_FOLDER_NAME,
    DEFAULT_COMPILE_TARGET,
    DEFAULT_TEST_FOLDER,
)
from storyline.domain.errors import (
    DuplicateNameError,
    ProjectNotBoundError,
    TestFileConflictError,
)
from storyline.domain.hierarchy import Suite, Test, check_name, derive_file_name
from storyline.interfaces.filesystem import FileSystem, PathLike
from storyline.interfaces.test_io import TestWriter

from .config_resolver import resolve_configuration_file

logger = logging.getLogger(__name__)

# pylint: disable=too-many-instance-attributes


def _unify_separators(path: str) -> str:
    return path.replace("\\", os.sep).replace("/", os.sep)


def normalize_path(*segments: PathLike) -> str:
    """Join path segments and return an absolute, host-style path.

    Empty segments are skipped, both ``/`` and ``\\`` count as separators, and
    relative results are anchored at the current working directory.
    """
    parts = [_unify_separators(os.fspath(s)) for s in segments if os.fspath(s)]
    return os.path.abspath(os.path.join(*parts)) if parts else os.path.abspath("")


class Project:
    """Settings for one test collection, plus path resolution and persistence.

    Args:
        project_file_name: Path of the project descriptor file, if any.
        project_folder: Base directory. Defaults to the descriptor's directory,
            or the empty string (current directory) without one.
        test_folder: Test root, relative to `project_folder`.
        binary_folder: Overrides ``bin/<compile_target>`` when non-empty.
        compile_target: Build configuration name, e.g. ``"debug"``.
        workspace: Suite path selecting the tests a run executes.
        assembly_name: Name used for ``<assembly>.dll.config`` discovery.
        name: Display name; defaults to the descriptor file's stem.
        configuration_file_name: Explicit configuration file; when omitted it
            is discovered lazily in the binary folder.
        filesystem: Filesystem used by the file operations.
        writer: Serializer used by `save` and `rename_test`.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        project_file_name: PathLike | None = None,
        *,
        project_folder: PathLike | None = None,
        test_folder: str = DEFAULT_TEST_FOLDER,
        binary_folder: str | None = None,
        compile_target: str = DEFAULT_COMPILE_TARGET,
        workspace: str | None = None,
        assembly_name: str | None = None,
        name: str | None = None,
        configuration_file_name: str | None = None,
        filesystem: FileSystem | None = None,
        writer: TestWriter | None = None,
    ) -> None:
        self.project_file_name = (
            os.fspath(project_file_name) if project_file_name is not None else None
        )
        self.project_folder = (
            os.fspath(project_folder)
            if project_folder is not None
            else self.get_base_project_folder()
        )
        self.test_folder = test_folder
        self.binary_folder = binary_folder
        self.compile_target = compile_target
        self.workspace = workspace
        self.assembly_name = assembly_name
        self.name = name if name is not None else self._default_name()
        self.filesystem = filesystem
        self.writer = writer
        self._configuration_override = configuration_file_name
        self._discovered_configuration: str | None = None
        self._configuration_discovered = False

    @classmethod
    def for_directory(
        cls,
        directory: PathLike,
        *,
        filesystem: FileSystem,
        assembly_name: str | None = None,
        writer: TestWriter | None = None,
    ) -> Project:
        """Build a project rooted at `directory` whose binaries live there too.

        The configuration file is discovered immediately in `directory`; see
        `resolve_configuration_file` for the search order.
        """
        folder = os.path.abspath(os.fspath(directory))
        return cls(
            project_folder=folder,
            binary_folder=folder,
            assembly_name=assembly_name,
            configuration_file_name=resolve_configuration_file(
                folder, filesystem, assembly_name
            ),
            filesystem=filesystem,
            writer=writer,
        )

    def __repr__(self) -> str:
        return (
            f"Project(name={self.name!r}, project_folder={self.project_folder!r}, "
            f"test_folder={self.test_folder!r})"
        )

    # ------------------------------------------------------------------
    #                          Path resolution
    # ------------------------------------------------------------------

    def get_base_project_folder(self) -> str:
        """Directory portion of the project file name, or "" without one."""
        if not self.project_file_name:
            return ""
        return os.path.dirname(_unify_separators(self.project_file_name))

    def get_binary_folder(self) -> str:
        """The override binary folder if set, else ``bin/<compile_target>``."""
        if self.binary_folder:
            return normalize_path(self.project_folder, self.binary_folder)
        return normalize_path(
            self.project_folder, BINARY_FOLDER_NAME, self.compile_target
        )

    def get_test_folder(self) -> str:
        """Absolute test root directory."""
        return normalize_path(self.project_folder, self.test_folder)

    def get_test_path(self, test: Test) -> str:
        """Absolute file path of `test`.

        ``<project_folder>/<test_folder>/<relative>``, where ``<relative>`` is
        the test's `file_name` override or its hierarchy path plus ``.xml``.
        """
        return normalize_path(self.get_test_folder(), test.effective_file_name)

    def get_suite_path(self, suite: Suite) -> str:
        """Absolute directory path of `suite`."""
        return normalize_path(self.get_test_folder(), suite.path)

    # ------------------------------------------------------------------
    #                          Configuration
    # ------------------------------------------------------------------

    @property
    def configuration_file_name(self) -> str | None:
        """Configuration file of the system under test, or None.

        Discovered in the binary folder on first access unless set explicitly.
        """
        if self._configuration_override:
            return self._configuration_override
        if not self._configuration_discovered and self.filesystem is not None:
            self._discovered_configuration = resolve_configuration_file(
                self.get_binary_folder(), self.filesystem, self.assembly_name
            )
            self._configuration_discovered = True
        return self._discovered_configuration

    @configuration_file_name.setter
    def configuration_file_name(self, value: str | None) -> None:
        self._configuration_override = value

    @property
    def configuration_override(self) -> str | None:
        """The explicitly assigned configuration file, ignoring discovery."""
        return self._configuration_override

    # ------------------------------------------------------------------
    #                          File operations
    # ------------------------------------------------------------------

    def create_directory(self, suite: Suite) -> str:
        """Ensure the directory of `suite` exists; returns its path."""
        path = self.get_suite_path(suite)
        self._require_filesystem().make_dirs(path)
        return path

    def save(self, test: Test) -> str:
        """Write `test` to its file, creating directories first; returns the path."""
        fs = self._require_filesystem()
        writer = self._require_writer()
        path = self.get_test_path(test)
        fs.make_dirs(os.path.dirname(path))
        writer.write_to_file(test, path)
        logger.debug("Saved test %r to %s", test.name, path)
        return path

    def delete_file(self, test: Test) -> None:
        """Delete the file of `test`; a missing file is not an error."""
        path = self.get_test_path(test)
        self._require_filesystem().delete_file(path, missing_ok=True)
        logger.debug("Deleted test file %s", path)

    def rename_test(
        self, test: Test, new_name: str, file_name: str | None = None
    ) -> str:
        """Rename `test` and move its file; returns the new path.

        Unless `file_name` is given, the test gets a fresh file name derived
        from `new_name` (whitespace runs become ``_``), kept in the directory of
        its containing suite. The new file is written before the old one is
        removed, and any failure restores the previous name and file.

        Raises:
            InvalidNameError: If `new_name` is not a single path segment.
            DuplicateNameError: If a sibling test already uses `new_name`.
            TestFileConflictError: If another file already sits at the new path.
            OSError: If writing or deleting fails (after rolling back).
        """
        fs = self._require_filesystem()
        check_name(test.kind, new_name)
        owner = test.container
        if owner is not None and owner.test_named(new_name) not in (None, test):
            raise DuplicateNameError(test.kind, new_name, owner.label)

        old_path = self.get_test_path(test)
        old_name, old_file_name = test.name, test.file_name

        def restore() -> None:
            test.name, test.file_name = old_name, old_file_name

        test.name = new_name
        test.file_name = file_name or self._derived_file_name(test)
        new_path = self.get_test_path(test)

        if new_path != old_path and fs.exists(new_path):
            restore()
            raise TestFileConflictError(new_name, new_path)

        try:
            self.save(test)
        except Exception:
            restore()
            raise

        if new_path != old_path:
            try:
                fs.delete_file(old_path, missing_ok=True)
            except OSError:
                logger.error(
                    "Could not remove %s; rolling back rename of %r", old_path, old_name
                )
                fs.delete_file(new_path, missing_ok=True)
                restore()
                raise

        logger.info("Renamed test %r to %r (%s)", old_name, new_name, new_path)
        return new_path

    # ------------------------------------------------------------------
    #                          Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _derived_file_name(test: Test) -> str:
        base = derive_file_name(test.name)
        parent = test.parent
        return f"{parent.path}/{base}" if parent is not None else base

    def _default_name(self) -> str:
        if self.project_file_name:
            stem = os.path.basename(_unify_separators(self.project_file_name))
            return os.path.splitext(stem)[0]
        return os.path.basename(normalize_path(self.project_folder))

    def _require_filesystem(self) -> FileSystem:
        if self.filesystem is None:
            raise ProjectNotBoundError("filesystem")
        return self.filesystem

    def _require_writer(self) -> TestWriter:
        if self.writer is None:
            raise ProjectNotBoundError("test writer")
        return self.writer
