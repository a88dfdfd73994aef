"""Shared helpers for commands that operate on a project directory."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import tomli
from rich.console import Console
from rich.panel import Panel

from lockforge.config import config
from lockforge.core.freezer import dependency_tables, sanitize
from lockforge.models.files import ProjectFile

logger = logging.getLogger(__name__)

# Never copied out of a path dependency.
_IGNORED_DIRS = frozenset({".git", ".hg", ".venv", "__pycache__", ".mypy_cache", ".pytest_cache"})


def load_project_files(project_dir: Path) -> list[ProjectFile]:
    """Read the manifest, any lockfile and ``.python-version`` from *project_dir*.

    Directories named by ``path`` declarations in the manifest are read as
    well, so the resolver sees local packages at the same relative paths.
    Raises ``tomli.TOMLDecodeError`` if the manifest cannot be parsed.
    """
    names = [
        config.manifest_filename,
        *config.lockfile_filenames,
        config.python_version_filename,
    ]
    files = [
        ProjectFile(name=name, content=(project_dir / name).read_text(encoding="utf-8"))
        for name in names
        if (project_dir / name).is_file()
    ]

    manifest = project_dir / config.manifest_filename
    if manifest.is_file():
        seen = {f.name for f in files}
        for path_dir in path_dependency_dirs(project_dir, manifest.read_text(encoding="utf-8")):
            for project_file in _read_tree(project_dir, path_dir):
                if project_file.name not in seen:
                    seen.add(project_file.name)
                    files.append(project_file)
    return files


def path_dependency_dirs(project_dir: Path, manifest_content: str) -> list[Path]:
    """Directories inside *project_dir* that ``path`` declarations point at."""
    root = project_dir.resolve()
    poetry = tomli.loads(sanitize(manifest_content)).get("tool", {}).get("poetry", {})
    dirs: list[Path] = []
    for _, table in dependency_tables(poetry):
        for name, declaration in table.items():
            if not isinstance(declaration, dict) or "path" not in declaration:
                continue
            target = (project_dir / declaration["path"]).resolve()
            if not target.is_relative_to(root):
                logger.warning("Skipping %s: path %s is outside the project", name, declaration["path"])
            elif not target.is_dir():
                logger.warning("Skipping %s: path %s is not a directory", name, declaration["path"])
            elif target not in dirs:
                dirs.append(target)
    return dirs


def _read_tree(project_dir: Path, directory: Path) -> Iterator[ProjectFile]:
    root = project_dir.resolve()
    for path in sorted(directory.rglob("*")):
        if not path.is_file() or _IGNORED_DIRS.intersection(path.relative_to(root).parts):
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.debug("Skipping binary file %s", path)
            continue
        yield ProjectFile(name=path.relative_to(root).as_posix(), content=content)


def render_failure(console: Console, title: str, body: str) -> None:
    console.print(Panel(body, title=f"[bold red]{title}[/bold red]", border_style="red"))
