"""Runtime configuration — env-driven.

Centralized config using pydantic-settings. Reads from a .env file and
LOCKFORGE_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from lockforge.helpers import REQUIREMENTS_PATH
from lockforge.models.python_versions import PRE_INSTALLED_VERSIONS, SUPPORTED_VERSIONS


class UpdaterConfig(BaseSettings):
    """Configuration for manifest and lockfile updates.

    Examples
    --------
    Override via environment::

        export LOCKFORGE_LOG_LEVEL=DEBUG
        export LOCKFORGE_PYENV_EXECUTABLE=/opt/pyenv/bin/pyenv
        export LOCKFORGE_WORKSPACE_ROOT=/var/tmp/lockforge

    Or via .env file::

        LOCKFORGE_PRE_INSTALLED_PYTHON_VERSIONS='["3.12.4"]'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LOCKFORGE_",
        env_file_encoding="utf-8",
    )

    log_level: str = "INFO"

    # Tooling
    pyenv_executable: str = "pyenv"
    helper_requirements_path: Path = REQUIREMENTS_PATH
    helper_script_path: Path = Path(__file__).parent / "core" / "hasher.py"

    # Resolution workspaces are created here (system temp dir when unset)
    workspace_root: Path | None = None

    # Interpreter versions
    supported_python_versions: list[str] = list(SUPPORTED_VERSIONS)
    pre_installed_python_versions: list[str] = sorted(PRE_INSTALLED_VERSIONS)

    # Project file names
    manifest_filename: str = "pyproject.toml"
    lockfile_filenames: list[str] = ["poetry.lock", "pyproject.lock"]  # newest first
    python_version_filename: str = ".python-version"

    def pyenv(self, *args: str) -> list[str]:
        """Build a pyenv command line."""
        return [self.pyenv_executable, *args]

    def pyenv_exec(self, *args: str) -> list[str]:
        """Build a command line run inside the pyenv-selected interpreter."""
        return self.pyenv("exec", *args)


# Module-level singleton: import as `from lockforge.config import config`
config = UpdaterConfig()
