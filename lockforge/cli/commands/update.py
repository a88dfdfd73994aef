"""``lockforge update`` — move one dependency to a new constraint.

Reads the manifest, lockfile and ``.python-version`` from a project
directory, runs the update pipeline and shows which files changed.
Nothing is written back unless ``--write`` is given.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from lockforge.cli.commands._project import load_project_files, render_failure
from lockforge.config import config
from lockforge.core.patcher import PatchMismatchError
from lockforge.core.pipeline import LockfileUnchangedError, UpdatePipeline
from lockforge.core.runner import SubprocessFailure
from lockforge.models.credentials import Credential
from lockforge.models.dependency import Dependency, Requirement

console = Console()


def update_cmd(
    project_dir: Path = typer.Argument(
        Path("."), exists=True, file_okay=False, help="Directory holding pyproject.toml."
    ),
    dependency: str = typer.Option(..., "--dependency", "-d", help="Package to update."),
    version: str = typer.Option(..., "--version", "-v", help="Target version to lock."),
    requirement: str = typer.Option(
        ..., "--requirement", "-r", help="New constraint, e.g. '^2.28.0'."
    ),
    previous_requirement: str = typer.Option(
        ..., "--previous-requirement", "-p", help="Constraint currently declared."
    ),
    credential: list[str] = typer.Option(
        [], "--credential", "-c", help="Private index URL (repeatable)."
    ),
    write: bool = typer.Option(False, "--write", "-w", help="Write updated files back."),
) -> None:
    """Update a dependency's constraint and regenerate the lockfile."""
    manifest_name = config.manifest_filename

    dep = Dependency(
        name=dependency,
        version=version,
        requirements=[Requirement(file=manifest_name, requirement=requirement)],
        previous_requirements=[
            Requirement(file=manifest_name, requirement=previous_requirement)
        ],
    )
    credentials = [Credential(index_url=url) for url in credential]

    try:
        files = load_project_files(project_dir)
        updated = UpdatePipeline([dep], files, credentials, config=config).updated_dependency_files()
    except SubprocessFailure as exc:
        render_failure(
            console,
            "Resolver failed",
            f"[bold]Command:[/bold] {escape(exc.command)}\n"
            f"[bold]Exit status:[/bold] {exc.exit_status}  "
            f"[bold]Time:[/bold] {exc.time_taken:.1f}s\n\n{escape(exc.message)}",
        )
        raise typer.Exit(code=1) from exc
    except (PatchMismatchError, LockfileUnchangedError, FileNotFoundError, ValueError) as exc:
        render_failure(console, "Update failed", escape(str(exc)))
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{dependency} -> {version}")
    table.add_column("File", style="cyan")
    table.add_column("Bytes", justify="right")
    table.add_column("Written", justify="center")
    for updated_file in updated:
        if write:
            (project_dir / updated_file.name).write_text(updated_file.content, encoding="utf-8")
        table.add_row(
            updated_file.name,
            str(len(updated_file.content)),
            "[green]Yes[/green]" if write else "[dim]No[/dim]",
        )

    console.print(table)
    if not write:
        console.print(Panel("[dim]Dry run. Re-run with --write to save.[/dim]", border_style="dim"))
