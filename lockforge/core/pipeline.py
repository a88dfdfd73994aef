"""Update pipeline — the coordinator for one manifest/lockfile update.

Stages, in order::

    patch manifest -> [manifest changed] stage manifest
        -> freeze and prepare -> resolve interpreter -> invoke resolver
        -> reconcile hash -> [lockfile present] stage lockfile

Either the full list of changed files is returned or an exception
propagates; there is no partial result.
"""

from __future__ import annotations

import logging

from lockforge.config import UpdaterConfig
from lockforge.core.freezer import DependencyFreezer, sanitize
from lockforge.core.patcher import ManifestPatcher
from lockforge.core.python_version import PythonVersionResolver
from lockforge.core.reconciler import ContentHashReconciler
from lockforge.core.resolver import LockResolutionInvoker
from lockforge.core.runner import CommandRunner
from lockforge.core.sources import PrivateSourceInjector
from lockforge.models.credentials import Credential
from lockforge.models.dependency import Dependency
from lockforge.models.files import ProjectFile, find_file

logger = logging.getLogger(__name__)


class LockfileUnchangedError(RuntimeError):
    """Raised when the resolver leaves the lockfile exactly as it was.

    The pipeline only runs when a change is expected, so this points at a
    manifest preparation bug rather than a legitimate no-op.
    """


class UpdatePipeline:
    """Produces the updated manifest and lockfile for a set of dependencies.

    Parameters
    ----------
    dependencies:
        The dependencies being updated. Resolution targets the first one.
    dependency_files:
        Every project file; must include the manifest.
    credentials:
        Private index credentials to inject as manifest sources.
    runner:
        Executes external tools. Defaults to a real ``CommandRunner``.
    config:
        File names and tooling settings.
    """

    def __init__(
        self,
        dependencies: list[Dependency],
        dependency_files: list[ProjectFile],
        credentials: list[Credential] | None = None,
        *,
        runner: CommandRunner | None = None,
        config: UpdaterConfig | None = None,
    ) -> None:
        if not dependencies:
            raise ValueError("At least one dependency is required")
        self.dependencies = list(dependencies)
        self.dependency_files = list(dependency_files)
        self.credentials = list(credentials or [])
        self._config = config or UpdaterConfig()
        self._runner = runner or CommandRunner()

        manifest = find_file(self.dependency_files, self._config.manifest_filename)
        if manifest is None:
            raise FileNotFoundError(f"No {self._config.manifest_filename} provided")
        self.manifest = manifest

        self.patcher = ManifestPatcher(self.manifest.name)
        self.python_resolver = PythonVersionResolver(self._runner, self._config)
        self.invoker = LockResolutionInvoker(self._runner, self._config)
        self.reconciler = ContentHashReconciler(self._runner, self._config)

        self._updated_files: list[ProjectFile] | None = None
        self._updated_manifest_content: str | None = None
        self._prepared_manifest_content: str | None = None

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    @property
    def dependency(self) -> Dependency:
        # Resolution only ever targets a single dependency.
        return self.dependencies[0]

    @property
    def lockfile(self) -> ProjectFile | None:
        # The older pyproject.lock wins when a project carries both names.
        for name in reversed(self._config.lockfile_filenames):
            found = find_file(self.dependency_files, name)
            if found is not None:
                return found
        return None

    @property
    def python_version_file(self) -> ProjectFile | None:
        return find_file(self.dependency_files, self._config.python_version_filename)

    def file_changed(self, project_file: ProjectFile) -> bool:
        return any(d.requirement_changed(project_file.name) for d in self.dependencies)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def updated_dependency_files(self) -> list[ProjectFile]:
        """Return the manifest and/or lockfile with their new content."""
        if self._updated_files is None:
            self._updated_files = self._fetch_updated_dependency_files()
        return list(self._updated_files)

    def _fetch_updated_dependency_files(self) -> list[ProjectFile]:
        updated_files: list[ProjectFile] = []

        if self.file_changed(self.manifest):
            updated_files.append(self.manifest.with_content(self.updated_manifest_content()))

        lockfile = self.lockfile
        if lockfile is not None:
            updated_files.append(lockfile.with_content(self._updated_lockfile_content(lockfile)))

        logger.info(
            "Updated %s: %s",
            ", ".join(d.name for d in self.dependencies),
            ", ".join(f.name for f in updated_files) or "no files",
        )
        return updated_files

    def updated_manifest_content(self) -> str:
        """The manifest as shipped to the user: patched text only."""
        if self._updated_manifest_content is None:
            self._updated_manifest_content = self.patcher.patch_all(
                self.manifest.content, self.dependencies
            )
        return self._updated_manifest_content

    def prepared_manifest_content(self) -> str:
        """The manifest handed to the resolver: frozen and with private sources."""
        if self._prepared_manifest_content is None:
            lockfile = self.lockfile
            freezer = DependencyFreezer(lockfile.content if lockfile else None)
            content = sanitize(self.updated_manifest_content())
            content = freezer.freeze(content, self.dependencies)
            content = PrivateSourceInjector(self.credentials).replace_sources(content)
            self._prepared_manifest_content = content
        return self._prepared_manifest_content

    def python_version(self) -> str | None:
        return self.python_resolver.resolve(
            self.prepared_manifest_content(), self.python_version_file
        )

    def _updated_lockfile_content(self, lockfile: ProjectFile) -> str:
        prepared = self.prepared_manifest_content()
        resolved = self.invoker.resolve(
            self.dependency_files,
            prepared,
            self.dependency.name,
            python_version=self.python_version(),
            lockfile_name=lockfile.name,
        )
        if resolved == lockfile.content:
            raise LockfileUnchangedError("Expected lockfile to change!")

        reconciled = self.reconciler.reconcile(resolved, self.updated_manifest_content())
        if reconciled == lockfile.content:
            raise LockfileUnchangedError("Expected lockfile to change!")
        return reconciled
