"""Translation of Poetry version constraints into PEP 440 specifier sets.

Poetry accepts caret (``^3.7``), tilde (``~3.7``), wildcard, space- or
comma-separated AND clauses and ``||`` alternatives. ``packaging`` only
understands PEP 440, so each alternative becomes one ``SpecifierSet`` and a
version satisfies the constraint if any of them contains it.
"""

from __future__ import annotations

import re

from packaging.specifiers import SpecifierSet
from packaging.version import Version

_PEP440_OPERATORS = ("===", "==", "!=", ">=", "<=", "~=", ">", "<")

# Whitespace after an operator is allowed by Poetry (">= 3.7").
_OPERATOR_SPACE = re.compile(r"(===|==|!=|>=|<=|~=|\^|~|>|<|=)\s+")
_CLAUSE_SEPARATOR = re.compile(r"[\s,]+")


def _release(version: str) -> list[int]:
    return list(Version(version.rstrip(".*")).release)


def _caret(version: str) -> list[str]:
    release = _release(version)
    bump = next((i for i, part in enumerate(release) if part != 0), len(release) - 1)
    upper = release[:bump] + [release[bump] + 1]
    return [f">={version}", "<" + ".".join(map(str, upper))]


def _tilde(version: str) -> list[str]:
    release = _release(version)
    if len(release) == 1:
        upper = [release[0] + 1]
    else:
        upper = [release[0], release[1] + 1]
    return [f">={version}", "<" + ".".join(map(str, upper))]


def _clause_specifiers(clause: str) -> list[str]:
    if clause in ("", "*"):
        return []
    if clause.startswith("^"):
        return _caret(clause[1:])
    if clause.startswith("~") and not clause.startswith("~="):
        return _tilde(clause[1:])
    if clause.startswith(_PEP440_OPERATORS):
        return [clause]
    if clause.startswith("="):
        return ["=" + clause]
    return [f"=={clause}"]


def to_specifier_set(constraint: str) -> SpecifierSet:
    """Convert one AND-ed Poetry constraint (no ``||``) into a ``SpecifierSet``.

    Raises ``ValueError`` (``InvalidSpecifier`` or ``InvalidVersion``) for
    anything that cannot be expressed in PEP 440.
    """
    constraint = _OPERATOR_SPACE.sub(r"\1", constraint.strip())
    specifiers: list[str] = []
    for clause in _CLAUSE_SEPARATOR.split(constraint):
        specifiers.extend(_clause_specifiers(clause))
    return SpecifierSet(",".join(specifiers))


def requirements_array(constraint: str) -> list[SpecifierSet]:
    """One ``SpecifierSet`` per ``||`` alternative of *constraint*."""
    return [to_specifier_set(part) for part in constraint.split("||")]


def satisfied_by(constraint: str, version: str) -> bool:
    """True if *version* satisfies any alternative of *constraint*."""
    candidate = Version(version)
    return any(
        specifiers.contains(candidate, prereleases=True)
        for specifiers in requirements_array(constraint)
    )
