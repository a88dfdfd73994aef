"""Credential records for private package indexes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

PYTHON_INDEX = "python_index"


class Credential(BaseModel):
    """Authentication for one package index.

    Only ``python_index`` credentials are turned into manifest sources;
    anything else (git hosts, registries for other ecosystems) is ignored.
    """

    model_config = ConfigDict(frozen=True)

    type: str = PYTHON_INDEX
    index_url: str
    token: str | None = None  # "user:password" or a bare token
    name: str | None = None
    replaces_base: bool = False

    @property
    def is_python_index(self) -> bool:
        return self.type == PYTHON_INDEX
