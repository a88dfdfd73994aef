"""Shared test fixtures for lockforge."""

from __future__ import annotations

import json
import shlex
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from lockforge.config import UpdaterConfig
from lockforge.core import hasher
from lockforge.core.runner import CommandRunner, SubprocessFailure
from lockforge.models.dependency import Dependency, Requirement
from lockforge.models.files import ProjectFile

MANIFEST = """\
[tool.poetry]
name = "demo"
version = "0.1.0"
description = "A demo project"
authors = ["Dev <dev@example.com>"]

# Runtime dependencies
[tool.poetry.dependencies]
python = "^3.8"
requests = "^2.25.0"
Flask = {version = "^1.1", extras = ["dotenv"]}

[tool.poetry.dev-dependencies]
pytest = "^6.0"

[build-system]
requires = ["poetry>=0.12"]
build-backend = "poetry.masonry.api"
"""

LOCKFILE = """\
[[package]]
name = "flask"
version = "1.1.2"
description = "A simple framework for building complex web applications."
category = "main"
optional = false
python-versions = ">=2.7"

[[package]]
name = "pytest"
version = "6.2.5"
description = "pytest: simple powerful testing with Python"
category = "dev"
optional = false
python-versions = ">=3.6"

[[package]]
name = "requests"
version = "2.25.1"
description = "Python HTTP for Humans."
category = "main"
optional = false
python-versions = ">=2.7"

[metadata]
lock-version = "1.1"
python-versions = "^3.8"
content-hash = "0000000000000000000000000000000000000000000000000000000000000000"

[metadata.files]
flask = []
pytest = []
requests = []
"""

RESOLVED_LOCKFILE = LOCKFILE.replace('version = "2.25.1"', 'version = "2.28.1"').replace(
    "0" * 64, "f" * 64
)


class FakeRunner(CommandRunner):
    """Scripted stand-in for pyenv/pip/poetry.

    ``poetry update`` writes ``lockfile`` into the workspace; helper calls
    are answered by running the real hasher functions in-process.
    """

    def __init__(
        self,
        lockfile: str | None = RESOLVED_LOCKFILE,
        *,
        lockfile_name: str = "poetry.lock",
        installable: str = "Available versions:\n  3.10.14\n  3.12.4\n",
        fail_on: str | None = None,
    ) -> None:
        self.lockfile = lockfile
        self.lockfile_name = lockfile_name
        self.installable = installable
        self.fail_on = fail_on
        self.calls: list[list[str]] = []
        self.resolver_manifests: list[str] = []
        self.resolver_python_versions: list[str | None] = []
        self.resolver_trees: list[list[str]] = []
        self.workspaces: list[Path] = []

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        stdin: str | None = None,
    ) -> str:
        args = [str(a) for a in args]
        self.calls.append(args)
        if cwd is not None:
            self.workspaces.append(cwd)

        if self.fail_on is not None and self.fail_on in args:
            raise SubprocessFailure(
                "SolverProblemError: because demo depends on nothing...",
                command=shlex.join(args),
                time_taken=0.25,
                exit_status=1,
            )
        if "--list" in args:
            return self.installable
        if "update" in args and "--lock" in args:
            assert cwd is not None
            self.resolver_manifests.append((cwd / "pyproject.toml").read_text())
            self.resolver_trees.append(
                sorted(p.relative_to(cwd).as_posix() for p in cwd.rglob("*") if p.is_file())
            )
            version_file = cwd / ".python-version"
            self.resolver_python_versions.append(
                version_file.read_text() if version_file.exists() else None
            )
            if self.lockfile is not None:
                (cwd / self.lockfile_name).write_text(self.lockfile)
            return "Updating dependencies\nResolving dependencies...\n"
        if stdin is not None:
            request = json.loads(stdin)
            result = hasher.FUNCTIONS[request["function"]](*request["args"])
            return json.dumps({"result": result})
        return ""

    def commands(self) -> list[str]:
        return [" ".join(c) for c in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def config(tmp_path: Path) -> UpdaterConfig:
    """Config with workspaces rooted in the test's temp dir."""
    return UpdaterConfig(workspace_root=tmp_path / "workspaces")


@pytest.fixture
def manifest_file() -> ProjectFile:
    return ProjectFile(name="pyproject.toml", content=MANIFEST)


@pytest.fixture
def lockfile_file() -> ProjectFile:
    return ProjectFile(name="poetry.lock", content=LOCKFILE)


@pytest.fixture
def make_dependency() -> Callable[..., Dependency]:
    """Factory fixture: a dependency moving between two manifest constraints."""

    def _factory(
        name: str = "requests",
        version: str = "2.28.1",
        requirement: str = "^2.28.0",
        previous_requirement: str = "^2.25.0",
        file: str = "pyproject.toml",
        **overrides: Any,
    ) -> Dependency:
        defaults: dict[str, Any] = {
            "name": name,
            "version": version,
            "requirements": [Requirement(file=file, requirement=requirement)],
            "previous_requirements": [
                Requirement(file=file, requirement=previous_requirement)
            ],
        }
        defaults.update(overrides)
        return Dependency(**defaults)

    return _factory


@pytest.fixture
def dependency(make_dependency: Callable[..., Dependency]) -> Dependency:
    """Convenience: requests ^2.25.0 -> ^2.28.0, locking 2.28.1."""
    return make_dependency()


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Factory fixture: a FakeRunner with custom behaviour."""
    return FakeRunner


@pytest.fixture
def resolved_lockfile() -> str:
    """What the fake resolver writes: requests at 2.28.1, placeholder hash."""
    return RESOLVED_LOCKFILE
