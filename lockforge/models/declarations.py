"""Dependency declaration variants as they appear in a Poetry manifest.

A declaration is one of::

    requests = "^2.25.0"                                  # scalar
    requests = {version = "^2.25.0", extras = ["socks"]}  # table
    numpy = [{version = "<1.20", python = "<3.7"}, ...]   # multiple constraints

All three are updated through the same ``with_version()`` call.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ScalarDeclaration(BaseModel):
    """``name = "<constraint>"``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    version: str

    pinnable: ClassVar[bool] = True

    def with_version(self, version: str) -> ScalarDeclaration:
        return ScalarDeclaration(version=version)

    def to_toml(self) -> Any:
        return self.version


class TableDeclaration(BaseModel):
    """``name = {version = "...", ...}`` — only ``version`` is ever rewritten."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["table"] = "table"
    table: dict[str, Any]

    pinnable: ClassVar[bool] = True

    @property
    def version(self) -> str | None:
        return self.table.get("version")

    def with_version(self, version: str) -> TableDeclaration:
        return TableDeclaration(table={**self.table, "version": version})

    def to_toml(self) -> Any:
        return dict(self.table)


class MultiConstraintDeclaration(BaseModel):
    """``name = [{...}, {...}]`` — one table per environment marker.

    Pinning every entry to one locked version would produce a bad lockfile,
    so these are left alone when freezing unrelated dependencies.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["multiple"] = "multiple"
    constraints: list[dict[str, Any]]

    pinnable: ClassVar[bool] = False

    def with_version(self, version: str) -> ScalarDeclaration:
        return ScalarDeclaration(version=version)

    def to_toml(self) -> Any:
        return [dict(c) for c in self.constraints]


Declaration = Annotated[
    Union[ScalarDeclaration, TableDeclaration, MultiConstraintDeclaration],
    Field(discriminator="kind"),
]


def parse_declaration(value: Any) -> Declaration:
    """Wrap a raw parsed TOML value in the matching declaration variant."""
    if isinstance(value, dict):
        return TableDeclaration(table=value)
    if isinstance(value, list):
        return MultiConstraintDeclaration(constraints=value)
    return ScalarDeclaration(version=str(value))
