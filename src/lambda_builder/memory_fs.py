"""
In-memory output file system for compiled bundles.

Paths are virtual and rooted at "/", e.g. "/foo.js". Compiled output is held
here between the bundler and the packaging stage and is never written to
disk as-is.
"""

import posixpath
from typing import Dict, Iterator


def bundle_path(function_name: str) -> str:
    """Virtual path of a function's bundle in the build output."""
    return f"/{function_name}.js"


class MemoryFileSystem:
    """Dict-backed store of virtual absolute paths to file contents."""

    def __init__(self):
        self._files: Dict[str, bytes] = {}

    @staticmethod
    def _normalize(path: str) -> str:
        if not path.startswith("/"):
            raise ValueError(f"Path must be absolute: {path}")
        return posixpath.normpath(path)

    def write_file(self, path: str, data: bytes) -> None:
        self._files[self._normalize(path)] = bytes(data)

    def read_file(self, path: str) -> bytes:
        """
        Raises:
            FileNotFoundError: If nothing was written at path
        """
        normalized = self._normalize(path)
        try:
            return self._files[normalized]
        except KeyError:
            raise FileNotFoundError(f"No such file in build output: {normalized}")

    def exists(self, path: str) -> bool:
        return self._normalize(path) in self._files

    def listdir(self) -> list:
        return sorted(self._files)

    def clear(self) -> None:
        self._files.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)
