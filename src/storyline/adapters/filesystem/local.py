"""Local filesystem adapter."""

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from storyline.interfaces.filesystem import FileSystem, PathLike

ENCODING = "utf-8"


class LocalFileSystem(FileSystem):
    """FileSystem implementation backed by the host's disk."""

    # --- Queries ---

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def is_file(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def is_dir(self, path: PathLike) -> bool:
        return Path(path).is_dir()

    def walk(self, top: PathLike) -> Iterator[tuple[str, list[str], list[str]]]:
        for dirpath, dirnames, filenames in os.walk(top):
            dirnames.sort()  # in place, so os.walk descends in sorted order
            yield dirpath, list(dirnames), sorted(filenames)

    # --- Reads and writes ---

    def read_text(self, path: PathLike) -> str:
        with open(path, encoding=ENCODING) as fp:
            return fp.read()

    def write_text(self, path: PathLike, text: str) -> None:
        dest = Path(path)
        if dest.is_dir():
            raise IsADirectoryError(f"Is a directory: {str(dest)!r}")

        # write next to the destination, then atomically move into place
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=ENCODING,
            dir=dest.parent,
            prefix=f".{dest.name}.",
            suffix=".tmp",
            delete=False,  # pragma: no mutate
        ) as tmp:
            tmp_path = Path(tmp.name)
            try:
                tmp.write(text)
            except BaseException:
                tmp.close()
                tmp_path.unlink(missing_ok=True)
                raise

        try:
            os.replace(tmp_path, dest)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    # --- Mutations ---

    def make_dirs(self, path: PathLike) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def delete_file(self, path: PathLike, *, missing_ok: bool = False) -> None:
        Path(path).unlink(missing_ok=missing_ok)
