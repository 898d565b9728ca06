"""Filesystem access used while parsing.

Background resolution and ``load`` forms are the only places parsing touches
disk.  Both go through a :class:`FileSystem` so tests can substitute one.
"""

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...


class LocalFileSystem:
    """The real disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")
