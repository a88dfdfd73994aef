"""Tests for UpdaterConfig — env-driven settings."""

from __future__ import annotations

from pathlib import Path

from lockforge.config import UpdaterConfig
from lockforge.models.python_versions import SUPPORTED_VERSIONS


class TestUpdaterConfig:
    def test_defaults(self):
        config = UpdaterConfig()
        assert config.log_level == "INFO"
        assert config.pyenv_executable == "pyenv"
        assert config.manifest_filename == "pyproject.toml"
        assert config.lockfile_filenames == ["poetry.lock", "pyproject.lock"]
        assert config.workspace_root is None

    def test_supported_versions_default(self):
        assert UpdaterConfig().supported_python_versions == list(SUPPORTED_VERSIONS)

    def test_helper_files_exist(self):
        config = UpdaterConfig()
        assert config.helper_requirements_path.is_file()
        assert config.helper_script_path.is_file()

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOCKFORGE_PYENV_EXECUTABLE", "/opt/pyenv/bin/pyenv")
        monkeypatch.setenv("LOCKFORGE_WORKSPACE_ROOT", "/var/tmp/lockforge")
        config = UpdaterConfig()
        assert config.pyenv("install", "--list") == ["/opt/pyenv/bin/pyenv", "install", "--list"]
        assert config.workspace_root == Path("/var/tmp/lockforge")

    def test_pyenv_exec(self):
        assert UpdaterConfig().pyenv_exec("poetry", "update") == [
            "pyenv", "exec", "poetry", "update",
        ]
