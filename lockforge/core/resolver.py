"""Lockfile regeneration through pyenv and Poetry.

``LockResolutionInvoker.resolve()`` lays out the project in a fresh
``ResolutionWorkspace``, installs the selected interpreter when the base
image lacks it, swaps in the prepared manifest and runs
``poetry update <name> --lock``. The workspace is gone when it returns.
"""

from __future__ import annotations

import logging

from lockforge.config import UpdaterConfig
from lockforge.core.runner import CommandRunner
from lockforge.core.workspace import ResolutionWorkspace
from lockforge.models.files import ProjectFile

logger = logging.getLogger(__name__)


class LockResolutionInvoker:
    """Runs the external resolver and returns the lockfile it produced.

    Parameters
    ----------
    runner:
        Executes pyenv, pip and poetry. Failures propagate as
        ``SubprocessFailure``.
    config:
        File names, pyenv executable, helper requirements and the
        pre-installed interpreter set.
    """

    def __init__(self, runner: CommandRunner, config: UpdaterConfig | None = None) -> None:
        self._runner = runner
        self._config = config or UpdaterConfig()

    def resolve(
        self,
        dependency_files: list[ProjectFile],
        manifest_content: str,
        dependency_name: str,
        python_version: str | None = None,
        lockfile_name: str | None = None,
    ) -> str:
        """Return new lockfile content for *manifest_content*.

        Only *dependency_name* is updated; everything else stays as the
        manifest pins it. *lockfile_name* is read back before the other
        known lockfile names.
        """
        cfg = self._config
        with ResolutionWorkspace.create(cfg.workspace_root) as workspace:
            workspace.write_files(dependency_files)

            if python_version:
                workspace.write_file(cfg.python_version_filename, python_version)
                if python_version not in cfg.pre_installed_python_versions:
                    self._install_python(workspace, python_version)

            workspace.write_file(cfg.manifest_filename, manifest_content)

            logger.info("Resolving %s in %s", dependency_name, workspace.root)
            self._runner.run(
                cfg.pyenv_exec("poetry", "update", dependency_name, "--lock"),
                cwd=workspace.root,
            )
            names = list(cfg.lockfile_filenames)
            if lockfile_name in names:
                names.remove(lockfile_name)
                names.insert(0, lockfile_name)
            return workspace.read_first(names)

    def _install_python(self, workspace: ResolutionWorkspace, version: str) -> None:
        cfg = self._config
        logger.info("Installing Python %s", version)
        self._runner.run(cfg.pyenv("install", "-s", version), cwd=workspace.root)
        self._runner.run(
            cfg.pyenv_exec("pip", "install", "--upgrade", "pip"), cwd=workspace.root
        )
        self._runner.run(
            cfg.pyenv_exec("pip", "install", "-r", str(cfg.helper_requirements_path)),
            cwd=workspace.root,
        )
