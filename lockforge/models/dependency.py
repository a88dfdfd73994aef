"""Dependency and requirement models supplied by the caller."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Requirement(BaseModel):
    """A version constraint for a dependency as declared in one file.

    Extra keys are accepted and take part in equality, so two requirements
    only compare equal when every recorded detail matches.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    file: str
    requirement: str | None = None
    groups: list[str] = []
    source: dict[str, str] | None = None


class Dependency(BaseModel):
    """A dependency being moved to a new version.

    ``requirements`` and ``previous_requirements`` are aligned by ``file``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    requirements: list[Requirement] = []
    previous_requirements: list[Requirement] = []

    def requirement_for(self, file_name: str) -> str | None:
        return _constraint_for(self.requirements, file_name)

    def previous_requirement_for(self, file_name: str) -> str | None:
        return _constraint_for(self.previous_requirements, file_name)

    def requirement_changed(self, file_name: str) -> bool:
        """True if any requirement for *file_name* differs from before."""
        changed = [
            r for r in self.requirements if r not in self.previous_requirements
        ]
        return any(r.file == file_name for r in changed)


def _constraint_for(requirements: list[Requirement], file_name: str) -> str | None:
    for req in requirements:
        if req.file == file_name:
            return req.requirement
    return None
