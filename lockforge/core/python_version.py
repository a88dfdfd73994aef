"""Selection of the interpreter version for a resolution workspace.

Decision order:

1. A ``python`` constraint in ``[tool.poetry.dependencies]`` or
   ``[tool.poetry.dev-dependencies]`` selects the first supported version
   that satisfies it.
2. Otherwise a ``.python-version`` file is honoured if pyenv can install
   exactly that version.
3. Otherwise no version is selected and the active default is used.
"""

from __future__ import annotations

import logging
from functools import cached_property

import tomli

from lockforge.config import UpdaterConfig
from lockforge.core.constraints import satisfied_by
from lockforge.core.runner import CommandRunner
from lockforge.models.files import ProjectFile

logger = logging.getLogger(__name__)


def manifest_python_requirement(manifest_content: str) -> str | None:
    """Return the declared ``python`` constraint, runtime group first."""
    poetry = tomli.loads(manifest_content).get("tool", {}).get("poetry", {})
    for key in ("dependencies", "dev-dependencies"):
        requirement = poetry.get(key, {}).get("python")
        if requirement:
            return requirement if isinstance(requirement, str) else requirement.get("version")
    return None


def parse_version_listing(output: str) -> frozenset[str]:
    """Parse ``pyenv install --list`` output into a set of version strings."""
    return frozenset(
        line.strip()
        for line in output.splitlines()
        if line.strip() and not line.strip().endswith(":")
    )


class PythonVersionResolver:
    """Decides which interpreter version a workspace should use.

    Parameters
    ----------
    runner:
        Runs ``pyenv install --list`` the first time installable versions
        are needed.
    config:
        Supplies the supported version list and pyenv executable.
    """

    def __init__(self, runner: CommandRunner, config: UpdaterConfig | None = None) -> None:
        self._runner = runner
        self._config = config or UpdaterConfig()

    @cached_property
    def installable_versions(self) -> frozenset[str]:
        output = self._runner.run(self._config.pyenv("install", "--list"))
        return parse_version_listing(output)

    def resolve(
        self, manifest_content: str, python_version_file: ProjectFile | None = None
    ) -> str | None:
        """Return the version to pin in the workspace, or None for the default."""
        requirement = manifest_python_requirement(manifest_content)
        if requirement is not None:
            version = self.version_for_requirement(requirement)
            logger.info("python %r selects interpreter %s", requirement, version)
            return version
        return self.version_from_file(python_version_file)

    def version_for_requirement(self, requirement: str) -> str | None:
        """First supported version satisfying any alternative of *requirement*."""
        return next(
            (
                version
                for version in self._config.supported_python_versions
                if satisfied_by(requirement, version)
            ),
            None,
        )

    def version_from_file(self, python_version_file: ProjectFile | None) -> str | None:
        if python_version_file is None:
            return None
        file_version = python_version_file.content.strip()
        if not file_version:
            return None
        if file_version not in self.installable_versions:
            logger.warning(
                "Ignoring %s: %s is not installable",
                python_version_file.name, file_version,
            )
            return None
        return file_version

    def is_pre_installed(self, version: str) -> bool:
        return version in self._config.pre_installed_python_versions
