"""Filesystem capabilities used by the scaffold orchestrator.

The orchestrator only needs ``exists``, ``read`` and ``write``.  Paths are
relative, ``/``-separated project paths.  :class:`DiskFilesystem` maps them
under a root directory; :class:`MemoryFilesystem` keeps everything in a dict
and is what the test-suite scaffolds into.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Filesystem(Protocol):
    """Minimal file access needed to scaffold a project."""

    def exists(self, path: str) -> bool: ...

    def read(self, path: str) -> str: ...

    def write(self, path: str, content: str) -> None: ...


class DiskFilesystem:
    """Files stored under a root directory on the local disk."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root / path

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def write(self, path: str, content: str) -> None:
        """Write *content*, creating parent directories as needed."""
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


class MemoryFilesystem:
    """In-memory files keyed by path."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.writes: list[str] = []

    def exists(self, path: str) -> bool:
        return path in self.files

    def read(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

    def write(self, path: str, content: str) -> None:
        self.files[path] = content
        self.writes.append(path)
