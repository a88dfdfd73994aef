"""Tests for the helper requirements installed into fresh interpreters."""

from __future__ import annotations

from packaging.requirements import Requirement
from packaging.specifiers import SpecifierSet

from lockforge.helpers import REQUIREMENTS_PATH, REQUIRES_PYTHON
from lockforge.models.python_versions import PRE_INSTALLED_VERSIONS, SUPPORTED_VERSIONS

# A release of each helper that still installs on the oldest interpreter
# REQUIRES_PYTHON admits.
INSTALLABLE_ON_FLOOR = {"pip": "24.0", "poetry": "1.1.15", "tomli": "2.0.1"}


def _requirements() -> list[Requirement]:
    lines = REQUIREMENTS_PATH.read_text().splitlines()
    return [Requirement(line) for line in lines if line.strip() and not line.startswith("#")]


class TestHelperRequirements:
    def test_every_supported_version_can_install_helpers(self):
        floor = SpecifierSet(REQUIRES_PYTHON)
        assert [v for v in SUPPORTED_VERSIONS if v not in floor] == []

    def test_pre_installed_versions_within_floor(self):
        floor = SpecifierSet(REQUIRES_PYTHON)
        assert all(v in floor for v in PRE_INSTALLED_VERSIONS)

    def test_no_helper_pin_excludes_floor_interpreter(self):
        requirements = _requirements()
        assert {r.name for r in requirements} == set(INSTALLABLE_ON_FLOOR)
        for requirement in requirements:
            assert requirement.specifier.contains(INSTALLABLE_ON_FLOOR[requirement.name])

    def test_python_2_no_longer_offered(self):
        assert not any(v.startswith(("2.", "3.6.")) for v in SUPPORTED_VERSIONS)
