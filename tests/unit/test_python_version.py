"""Tests for PythonVersionResolver — constraint, pin file, default."""

from __future__ import annotations

from lockforge.config import UpdaterConfig
from lockforge.core.python_version import (
    PythonVersionResolver,
    manifest_python_requirement,
    parse_version_listing,
)
from lockforge.models.files import ProjectFile

NO_PYTHON_MANIFEST = '[tool.poetry.dependencies]\nrequests = "^2.25.0"\n'


def _pin_file(content: str) -> ProjectFile:
    return ProjectFile(name=".python-version", content=content)


class TestManifestPythonRequirement:
    def test_runtime_group(self, manifest_file):
        assert manifest_python_requirement(manifest_file.content) == "^3.8"

    def test_dev_group(self):
        content = '[tool.poetry.dev-dependencies]\npython = "~3.9"\n'
        assert manifest_python_requirement(content) == "~3.9"

    def test_absent(self):
        assert manifest_python_requirement(NO_PYTHON_MANIFEST) is None


class TestParseVersionListing:
    def test_header_and_indentation_stripped(self):
        listing = "Available versions:\n  2.7.18\n  3.10.14\n  3.12.4\n\n"
        assert parse_version_listing(listing) == frozenset({"2.7.18", "3.10.14", "3.12.4"})

    def test_prefix_of_listed_version_not_matched(self):
        assert "3.10.1" not in parse_version_listing("  3.10.14\n")


class TestPythonVersionResolver:
    def test_constraint_selects_first_supported(self, make_runner):
        config = UpdaterConfig(supported_python_versions=["3.12.4", "3.11.9", "3.8.19"])
        resolver = PythonVersionResolver(make_runner(), config)
        content = '[tool.poetry.dependencies]\npython = ">=3.8,<3.12"\n'
        assert resolver.resolve(content) == "3.11.9"

    def test_or_constraint_any_clause(self, make_runner):
        config = UpdaterConfig(supported_python_versions=["3.12.4", "3.7.17"])
        resolver = PythonVersionResolver(make_runner(), config)
        content = '[tool.poetry.dependencies]\npython = "~3.7 || ~3.5"\n'
        assert resolver.resolve(content) == "3.7.17"

    def test_unsatisfiable_constraint_selects_nothing(self, make_runner):
        resolver = PythonVersionResolver(make_runner())
        content = '[tool.poetry.dependencies]\npython = "^4.0"\n'
        assert resolver.resolve(content) is None

    def test_constraint_wins_over_pin_file(self, make_runner, manifest_file):
        runner = make_runner()
        resolver = PythonVersionResolver(runner)
        assert resolver.resolve(manifest_file.content, _pin_file("3.10.14\n")) == "3.12.4"
        assert runner.calls == []

    def test_pin_file_used_when_installable(self, make_runner):
        runner = make_runner()
        resolver = PythonVersionResolver(runner)
        assert resolver.resolve(NO_PYTHON_MANIFEST, _pin_file("3.10.14\n")) == "3.10.14"
        assert runner.calls == [["pyenv", "install", "--list"]]

    def test_pin_file_ignored_when_not_installable(self, make_runner):
        resolver = PythonVersionResolver(make_runner(installable="  3.12.4\n"))
        assert resolver.resolve(NO_PYTHON_MANIFEST, _pin_file("3.6.0")) is None

    def test_no_constraint_no_pin_file(self, make_runner):
        runner = make_runner()
        resolver = PythonVersionResolver(runner)
        assert resolver.resolve(NO_PYTHON_MANIFEST) is None
        assert runner.calls == []

    def test_installable_versions_listed_once(self, make_runner):
        runner = make_runner()
        resolver = PythonVersionResolver(runner)
        resolver.version_from_file(_pin_file("3.10.14"))
        resolver.version_from_file(_pin_file("3.12.4"))
        assert len(runner.calls) == 1

    def test_pre_installed(self, make_runner):
        resolver = PythonVersionResolver(make_runner())
        assert resolver.is_pre_installed("3.12.4")
        assert not resolver.is_pre_installed("3.8.19")
