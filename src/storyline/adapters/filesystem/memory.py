"""In-memory filesystem backend.

A tiny, dependency-free `FileSystem` meant for **tests**, examples and dry
runs. Files and directories live in RAM; nothing persists across process
restarts.

Key behaviors
-------------
- **Absolute keys**: every path is normalised with `os.path.abspath`, so a
  relative path means the same thing it would on disk (relative to the current
  working directory).
- **Explicit directories**: like the local disk, `write_text` needs the parent
  directory to exist (`make_dirs` first). Filesystem roots always exist.
- **Atomic writes**: a file's contents are swapped in a single dict
  assignment under an `RLock`.

Typical usage
-------------
    fs = MemoryFileSystem()
    fs.make_dirs("/p/Tests")
    fs.write_text("/p/Tests/t1.xml", "<Test name='t1' />")
    assert fs.read_text("/p/Tests/t1.xml").startswith("<Test")
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterator

from storyline.interfaces.filesystem import FileSystem, PathLike

__all__ = ["MemoryFileSystem"]


def _key(path: PathLike) -> str:
    return os.path.abspath(os.fspath(path))


def _is_root(key: str) -> bool:
    return os.path.dirname(key) == key


class MemoryFileSystem(FileSystem):
    """In-memory FileSystem; thread-safe, non-durable."""

    def __init__(self) -> None:
        self._files: dict[str, str] = {}
        self._dirs: set[str] = set()
        self._lock = threading.RLock()

    # --- Queries ---

    def exists(self, path: PathLike) -> bool:
        return self.is_file(path) or self.is_dir(path)

    def is_file(self, path: PathLike) -> bool:
        with self._lock:
            return _key(path) in self._files

    def is_dir(self, path: PathLike) -> bool:
        key = _key(path)
        with self._lock:
            return _is_root(key) or key in self._dirs

    def walk(self, top: PathLike) -> Iterator[tuple[str, list[str], list[str]]]:
        if not self.is_dir(top):
            return
        pending = [_key(top)]
        while pending:
            current = pending.pop()
            with self._lock:
                dirnames = sorted(
                    os.path.basename(d)
                    for d in self._dirs
                    if os.path.dirname(d) == current and d != current
                )
                filenames = sorted(
                    os.path.basename(f)
                    for f in self._files
                    if os.path.dirname(f) == current
                )
            yield current, dirnames, filenames
            # reversed so the stack pops directories in sorted order
            pending.extend(os.path.join(current, d) for d in reversed(dirnames))

    # --- Reads and writes ---

    def read_text(self, path: PathLike) -> str:
        key = _key(path)
        with self._lock:
            try:
                return self._files[key]
            except KeyError:
                if key in self._dirs:
                    raise IsADirectoryError(f"Is a directory: {key!r}") from None
                raise FileNotFoundError(f"No such file: {key!r}") from None

    def write_text(self, path: PathLike, text: str) -> None:
        key = _key(path)
        with self._lock:
            if key in self._dirs or _is_root(key):
                raise IsADirectoryError(f"Is a directory: {key!r}")
            if not self.is_dir(os.path.dirname(key)):
                raise FileNotFoundError(f"No such directory: {os.path.dirname(key)!r}")
            self._files[key] = str(text)

    # --- Mutations ---

    def make_dirs(self, path: PathLike) -> None:
        key = _key(path)
        with self._lock:
            if key in self._files:
                raise FileExistsError(f"File exists: {key!r}")
            while not _is_root(key) and key not in self._dirs:
                self._dirs.add(key)
                key = os.path.dirname(key)

    def delete_file(self, path: PathLike, *, missing_ok: bool = False) -> None:
        key = _key(path)
        with self._lock:
            if key in self._dirs:
                raise IsADirectoryError(f"Is a directory: {key!r}")
            if self._files.pop(key, None) is None and not missing_ok:
                raise FileNotFoundError(f"No such file: {key!r}")
