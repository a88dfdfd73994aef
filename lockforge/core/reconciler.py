"""Content-hash reconciliation for regenerated lockfiles.

The resolver hashes the manifest it was given, which is the frozen variant.
The manifest shipped to the user is the patch-only variant, so the hash in
``[metadata]`` must be recomputed from that and swapped in.
"""

from __future__ import annotations

import logging
import re

import tomli

from lockforge.config import UpdaterConfig
from lockforge.core.runner import CommandRunner
from lockforge.core.workspace import ResolutionWorkspace

logger = logging.getLogger(__name__)

_SECTION_HEADER = re.compile(r"^\[", re.MULTILINE)
_METADATA_HEADER = re.compile(r"^\[metadata\][ \t]*$", re.MULTILINE)


class LockfileFormatError(ValueError):
    """Raised when a lockfile has no ``metadata.content-hash`` field."""


def read_content_hash(lockfile_content: str) -> str:
    metadata = tomli.loads(lockfile_content).get("metadata", {})
    content_hash = metadata.get("content-hash")
    if not content_hash:
        raise LockfileFormatError("Lockfile has no [metadata] content-hash")
    return content_hash


def replace_content_hash(lockfile_content: str, new_hash: str) -> str:
    """Swap the metadata content-hash for *new_hash*.

    The old value is read structurally, then replaced only inside the
    ``[metadata]`` section, so identical strings elsewhere (package file
    hashes) are untouched.
    """
    old_hash = read_content_hash(lockfile_content)

    header = _METADATA_HEADER.search(lockfile_content)
    if header is None:
        raise LockfileFormatError("Lockfile content-hash is not in a [metadata] table")
    start = header.end()
    next_section = _SECTION_HEADER.search(lockfile_content, start)
    end = next_section.start() if next_section else len(lockfile_content)

    section = lockfile_content[start:end].replace(old_hash, new_hash)
    return lockfile_content[:start] + section + lockfile_content[end:]


class ContentHashReconciler:
    """Recomputes the manifest hash with the resolver's own algorithm.

    The algorithm belongs to the resolver, so it runs in the resolution
    interpreter via the helper script rather than in this process.
    """

    def __init__(self, runner: CommandRunner, config: UpdaterConfig | None = None) -> None:
        self._runner = runner
        self._config = config or UpdaterConfig()

    def manifest_hash(self, manifest_content: str) -> str:
        cfg = self._config
        with ResolutionWorkspace.create(cfg.workspace_root) as workspace:
            workspace.write_file("pyproject.toml", manifest_content)
            return self._runner.run_helper(
                cfg.pyenv_exec("python", str(cfg.helper_script_path)),
                function="get_pyproject_hash",
                helper_args=[str(workspace.root)],
                cwd=workspace.root,
            )

    def reconcile(self, lockfile_content: str, manifest_content: str) -> str:
        """Return *lockfile_content* carrying the hash of *manifest_content*."""
        correct_hash = self.manifest_hash(manifest_content)
        logger.info("Reconciled lockfile content-hash to %s", correct_hash[:12])
        return replace_content_hash(lockfile_content, correct_hash)
