"""Disposable resolution workspaces.

A ``ResolutionWorkspace`` is a fresh temporary directory owned by exactly one
resolver (or hash helper) invocation. It is only created through
``ResolutionWorkspace.create()``, which removes the directory on every exit
path, including exceptions. Concurrent updates each get their own directory.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from lockforge.models.files import ProjectFile

logger = logging.getLogger(__name__)


class WorkspacePathError(ValueError):
    """Raised when a file path would land outside the workspace."""


class ResolutionWorkspace:
    """File access scoped to one temporary directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    @classmethod
    @contextmanager
    def create(cls, base_dir: Path | None = None) -> Iterator[ResolutionWorkspace]:
        """Yield a new workspace; its directory is deleted when the block exits."""
        if base_dir is not None:
            base_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix="lockforge-", dir=base_dir) as tmp:
            logger.debug("Created workspace %s", tmp)
            try:
                yield cls(Path(tmp))
            finally:
                logger.debug("Removing workspace %s", tmp)

    def path(self, name: str) -> Path:
        """Resolve *name* inside the workspace, refusing paths that escape it."""
        target = (self.root / name).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise WorkspacePathError(f"{name!r} resolves outside the workspace")
        return target

    def write_file(self, name: str, content: str) -> Path:
        target = self.path(name)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    def write_files(self, files: Iterable[ProjectFile]) -> None:
        for project_file in files:
            self.write_file(project_file.name, project_file.content)

    def exists(self, name: str) -> bool:
        return self.path(name).is_file()

    def read_file(self, name: str) -> str:
        return self.path(name).read_text(encoding="utf-8")

    def read_first(self, names: Iterable[str]) -> str:
        """Read the first of *names* that exists.

        Raises ``FileNotFoundError`` if none of them do.
        """
        names = list(names)
        for name in names:
            if self.exists(name):
                return self.read_file(name)
        raise FileNotFoundError(f"None of {names} found in {self.root}")
