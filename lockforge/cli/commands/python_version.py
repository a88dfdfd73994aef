"""``lockforge python-version`` — show the interpreter a workspace would use."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from lockforge.cli.commands._project import load_project_files, render_failure
from lockforge.config import config
from lockforge.core.freezer import sanitize
from lockforge.core.python_version import PythonVersionResolver
from lockforge.core.runner import CommandRunner, SubprocessFailure
from lockforge.models.files import find_file

console = Console()


def python_version_cmd(
    project_dir: Path = typer.Argument(
        Path("."), exists=True, file_okay=False, help="Directory holding pyproject.toml."
    ),
) -> None:
    """Print the interpreter version selected for resolution."""
    try:
        files = load_project_files(project_dir)
    except ValueError as exc:
        render_failure(console, "Invalid manifest", escape(str(exc)))
        raise typer.Exit(code=1) from exc
    manifest = find_file(files, config.manifest_filename)
    if manifest is None:
        render_failure(console, "No manifest", f"{config.manifest_filename} not found in {project_dir}")
        raise typer.Exit(code=1)

    resolver = PythonVersionResolver(CommandRunner(), config)
    try:
        version = resolver.resolve(
            sanitize(manifest.content), find_file(files, config.python_version_filename)
        )
    except SubprocessFailure as exc:
        render_failure(console, "pyenv failed", escape(f"{exc.command}\n\n{exc.message}"))
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        render_failure(console, "Invalid manifest", escape(str(exc)))
        raise typer.Exit(code=1) from exc

    if version is None:
        console.print("[dim]No specific version selected; the active default is used.[/dim]")
        return

    suffix = " [dim](pre-installed)[/dim]" if resolver.is_pre_installed(version) else ""
    console.print(f"[bold]{version}[/bold]{suffix}")
