"""Pytest fixtures for FileSystem contract tests.

Provided fixtures
-----------------
- **filesystem**: Parametrized backend factory returning a **fresh**
  `FileSystem` per test. `"memory"` is the in-memory implementation and
  `"local"` the disk-backed one.
- **root**: An absolute directory that exists in the backend and is empty.
  For `"local"` it is pytest's `tmp_path`; for `"memory"` it is created on
  the fly so both backends see the same kind of path.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from storyline.adapters.filesystem import LocalFileSystem, MemoryFileSystem

if TYPE_CHECKING:
    from storyline.interfaces.filesystem import FileSystem

# pylint: disable=redefined-outer-name


@pytest.fixture(params=["memory", "local"])
def filesystem(request: pytest.FixtureRequest) -> FileSystem:
    """Return a fresh filesystem for the requested backend."""
    match request.param:
        case "memory":
            return MemoryFileSystem()
        case "local":
            return LocalFileSystem()
        case _:
            raise ValueError(f"unknown filesystem type: {request.param}")


@pytest.fixture
def root(filesystem: FileSystem, tmp_path) -> str:
    """An existing, empty directory in `filesystem`."""
    path = os.fspath(tmp_path)
    filesystem.make_dirs(path)
    return path
