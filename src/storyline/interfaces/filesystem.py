"""Filesystem interface.

The project and the adapters reach the disk only through this contract, so
persistence can be exercised against an in-memory backend in tests and against
the local disk in production.

Paths are plain strings or `os.PathLike` objects; callers pass absolute paths.
Errors use the built-in `OSError` family (`FileNotFoundError`,
`IsADirectoryError`, `PermissionError`) so both backends fail the same way.

Typical usage
-------------
    fs.make_dirs("/p/Tests/s1")
    fs.write_text("/p/Tests/s1/t1.xml", "<Test name='t1' />")
    for dirpath, dirnames, filenames in fs.walk("/p/Tests"):
        ...
    fs.delete_file("/p/Tests/s1/t1.xml", missing_ok=True)
"""

import abc
import os
from collections.abc import Iterator

PathLike = str | os.PathLike[str]


class FileSystem(abc.ABC):
    """Abstract base class for the filesystem operations STORYLINE needs."""

    # --- Queries ---

    @abc.abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Return True if a file or directory exists at `path`."""

    @abc.abstractmethod
    def is_file(self, path: PathLike) -> bool:
        """Return True if a regular file exists at `path`."""

    @abc.abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """Return True if a directory exists at `path`."""

    @abc.abstractmethod
    def walk(self, top: PathLike) -> Iterator[tuple[str, list[str], list[str]]]:
        """Walk a directory tree top-down, like `os.walk`.

        Directory and file names are yielded sorted so traversal order is
        deterministic. Yields nothing if `top` is not a directory.
        """

    # --- Reads and writes ---

    @abc.abstractmethod
    def read_text(self, path: PathLike) -> str:
        """Return the UTF-8 contents of the file at `path`.

        Raises:
            FileNotFoundError: If no file exists at `path`.
        """

    @abc.abstractmethod
    def write_text(self, path: PathLike, text: str) -> None:
        """Replace the contents of the file at `path` with `text` (UTF-8).

        The write is all-or-nothing: on failure the previous contents (or the
        absence of a file) are left in place.

        Raises:
            FileNotFoundError: If the parent directory does not exist (backends
                that track directories implicitly may create it instead).
            IsADirectoryError: If `path` is a directory.
        """

    # --- Mutations ---

    @abc.abstractmethod
    def make_dirs(self, path: PathLike) -> None:
        """Create the directory at `path` and any missing parents; idempotent."""

    @abc.abstractmethod
    def delete_file(self, path: PathLike, *, missing_ok: bool = False) -> None:
        """Delete the file at `path`.

        Raises:
            FileNotFoundError: If no file exists and `missing_ok` is False.
        """
