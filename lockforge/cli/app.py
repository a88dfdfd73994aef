"""Main Typer application — imports and registers all CLI commands.

Entry point: ``lockforge`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from lockforge.cli.commands.python_version import python_version_cmd
from lockforge.cli.commands.update import update_cmd
from lockforge.config import config

app = typer.Typer(
    name="lockforge",
    help="lockforge: update pyproject.toml constraints and regenerate poetry.lock.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def configure_logging(
    verbose: bool = typer.Option(False, "--verbose", help="Log at DEBUG level."),
) -> None:
    """Route log records through Rich at the configured level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="update", help="Update a dependency and regenerate the lockfile.")(update_cmd)
app.command(name="python-version", help="Show the interpreter used for resolution.")(
    python_version_cmd
)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
