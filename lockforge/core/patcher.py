"""Textual manifest patching — alters only the changed declaration line.

The structural serializer does not reproduce comments, ordering or quoting
exactly, so the manifest handed back to the user is edited as text. Only
the old constraint substring on the matched line is replaced, which keeps
extras, markers and anything else on that line intact.
"""

from __future__ import annotations

import logging
import re

from lockforge.models.dependency import Dependency

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[-_.]")


class PatchMismatchError(RuntimeError):
    """Raised when a requested patch leaves the manifest unchanged."""


def declaration_regex(name: str) -> re.Pattern[str]:
    """Match a declaration line for *name*, treating ``-``, ``_`` and ``.`` alike.

    The match starts at the beginning of the line or right after a quote
    and runs to the end of the line.
    """
    escaped = "[-_.]".join(re.escape(part) for part in _SEPARATORS.split(name))
    return re.compile(
        rf"""(?:^|["']){escaped}["']?\s*=.*$""",
        re.IGNORECASE | re.MULTILINE,
    )


class ManifestPatcher:
    """Applies requirement changes to the raw text of one manifest file.

    Parameters
    ----------
    file_name:
        Name of the manifest the requirements refer to (``pyproject.toml``).
    """

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name

    def patch(self, content: str, dependency: Dependency) -> str:
        """Swap the old constraint for the new one on the declaration line.

        Raises ``PatchMismatchError`` if the content does not change.
        """
        new_req = dependency.requirement_for(self.file_name)
        old_req = dependency.previous_requirement_for(self.file_name)
        if new_req is None or old_req is None:
            raise PatchMismatchError(
                f"{dependency.name} has no requirement change recorded "
                f"for {self.file_name}"
            )

        updated = declaration_regex(dependency.name).sub(
            lambda m: m.group(0).replace(old_req, new_req), content
        )
        if updated == content:
            raise PatchMismatchError(
                f"Content did not change! No declaration of {dependency.name} "
                f"with requirement {old_req!r} found in {self.file_name}"
            )

        logger.info(
            "Patched %s in %s: %s -> %s",
            dependency.name, self.file_name, old_req, new_req,
        )
        return updated

    def patch_all(self, content: str, dependencies: list[Dependency]) -> str:
        """Fold ``patch()`` over every dependency whose requirement changed."""
        for dependency in dependencies:
            if dependency.requirement_changed(self.file_name):
                content = self.patch(content, dependency)
        return content
