"""Filesystem backends: the local disk and an in-memory store for tests."""

from .local import LocalFileSystem
from .memory import MemoryFileSystem

__all__ = ["LocalFileSystem", "MemoryFileSystem"]
