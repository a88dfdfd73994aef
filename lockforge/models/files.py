"""Project file snapshots — immutable name/content pairs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ProjectFile(BaseModel):
    """A file as it existed on disk when the update started.

    Updated content is always carried by a new instance so the pre-image
    stays available for diffing.
    """

    model_config = ConfigDict(frozen=True)

    name: str  # path relative to the project root
    content: str

    def with_content(self, content: str) -> ProjectFile:
        """Return a copy of this file holding *content*."""
        return self.model_copy(update={"content": content})


def find_file(files: list[ProjectFile], name: str) -> ProjectFile | None:
    """Return the first file called *name*, or None."""
    return next((f for f in files if f.name == name), None)
