"""Structural freezing of manifest dependencies.

Pinning every unrelated top-level dependency to its locked version stops the
resolver from opportunistically upgrading packages nobody asked to change.
The dependencies being updated are pinned to their target version.

Unlike ``patcher``, this works on the parsed TOML and re-serialises it; the
output only ever feeds the resolver, never the user.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Any

import tomli
import tomli_w
from packaging.utils import canonicalize_name

from lockforge.models.declarations import parse_declaration
from lockforge.models.dependency import Dependency

logger = logging.getLogger(__name__)

_TEMPLATE_PLACEHOLDER = re.compile(r"\{\{.*?\}\}")


def normalise(name: str) -> str:
    """PEP 503 normalised name: lowercase, runs of ``-_.`` collapsed to ``-``."""
    return canonicalize_name(name)


def sanitize(manifest_content: str) -> str:
    """Make templated manifests parseable.

    ``{{ name }}`` placeholders are not valid TOML and ``#{`` interpolation
    markers confuse the parser; neither affects dependency resolution.
    """
    return _TEMPLATE_PLACEHOLDER.sub("something", manifest_content).replace("#{", "{")


def dependency_tables(poetry: dict[str, Any]) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield ``(label, table)`` for every dependency group in ``[tool.poetry]``.

    Covers ``dependencies``, ``dev-dependencies`` and every
    ``group.<name>.dependencies`` table.
    """
    for key in ("dependencies", "dev-dependencies"):
        table = poetry.get(key)
        if isinstance(table, dict):
            yield key, table
    for group_name, group in poetry.get("group", {}).items():
        table = group.get("dependencies") if isinstance(group, dict) else None
        if isinstance(table, dict):
            yield f"group.{group_name}.dependencies", table


class DependencyFreezer:
    """Rewrites manifest declarations to exact pins.

    Parameters
    ----------
    lockfile_content:
        Text of the current lockfile. When None, unrelated dependencies
        cannot be frozen and are left as declared.
    """

    def __init__(self, lockfile_content: str | None = None) -> None:
        self._locked: dict[str, dict[str, Any]] = {}
        if lockfile_content is not None:
            for package in tomli.loads(lockfile_content).get("package", []):
                self._locked[normalise(package["name"])] = package

    def locked_details(self, dep_name: str) -> dict[str, Any] | None:
        return self._locked.get(normalise(dep_name))

    def freeze_top_level_dependencies_except(
        self, manifest_content: str, dependencies: list[Dependency]
    ) -> str:
        """Pin every declaration except *dependencies* (and ``python``) to its locked version."""
        if not self._locked:
            return manifest_content

        pyproject = tomli.loads(manifest_content)
        poetry = pyproject.get("tool", {}).get("poetry", {})
        excluded = {normalise(d.name) for d in dependencies} | {"python"}

        for label, table in dependency_tables(poetry):
            for dep_name, value in table.items():
                if normalise(dep_name) in excluded:
                    continue
                details = self.locked_details(dep_name)
                if not details or not details.get("version"):
                    continue
                if details.get("source", {}).get("type") == "directory":
                    continue

                declaration = parse_declaration(value)
                if not declaration.pinnable:
                    continue
                table[dep_name] = declaration.with_version(details["version"]).to_toml()
                logger.debug("Froze %s (%s) at %s", dep_name, label, details["version"])

        return tomli_w.dumps(pyproject)

    def freeze_dependencies_being_updated(
        self, manifest_content: str, dependencies: list[Dependency]
    ) -> str:
        """Pin every declaration of *dependencies* to its target version."""
        pyproject = tomli.loads(manifest_content)
        poetry = pyproject.get("tool", {}).get("poetry", {})

        for dependency in dependencies:
            target = normalise(dependency.name)
            for label, table in dependency_tables(poetry):
                pkg_name = next((n for n in table if normalise(n) == target), None)
                if pkg_name is None:
                    continue
                declaration = parse_declaration(table[pkg_name])
                table[pkg_name] = declaration.with_version(dependency.version).to_toml()
                logger.debug("Pinned %s (%s) to %s", pkg_name, label, dependency.version)

        return tomli_w.dumps(pyproject)

    def freeze(self, manifest_content: str, dependencies: list[Dependency]) -> str:
        """Freeze unrelated dependencies, then pin the updated ones."""
        content = self.freeze_top_level_dependencies_except(manifest_content, dependencies)
        return self.freeze_dependencies_being_updated(content, dependencies)
