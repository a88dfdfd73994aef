"""Interpreter versions known to the resolution environment."""

from __future__ import annotations

# Versions installed in the base image; no pyenv install step is needed.
PRE_INSTALLED_VERSIONS: frozenset[str] = frozenset({"3.12.4", "3.11.9"})

# Newest first. The first entry satisfying a manifest's python constraint wins.
# Nothing older than helpers.REQUIRES_PYTHON: the helper requirements cannot
# be installed there.
SUPPORTED_VERSIONS: tuple[str, ...] = (
    "3.12.4", "3.12.3", "3.12.2", "3.12.1", "3.12.0",
    "3.11.9", "3.11.8", "3.11.7", "3.11.6", "3.11.5", "3.11.4",
    "3.11.3", "3.11.2", "3.11.1", "3.11.0",
    "3.10.14", "3.10.13", "3.10.12", "3.10.11", "3.10.10", "3.10.9",
    "3.10.8", "3.10.7", "3.10.6", "3.10.5", "3.10.4", "3.10.3",
    "3.10.2", "3.10.1", "3.10.0",
    "3.9.19", "3.9.18", "3.9.17", "3.9.16", "3.9.15", "3.9.14",
    "3.9.13", "3.9.12", "3.9.11", "3.9.10", "3.9.9", "3.9.8",
    "3.9.7", "3.9.6", "3.9.5", "3.9.4", "3.9.2", "3.9.1", "3.9.0",
    "3.8.19", "3.8.18", "3.8.17", "3.8.16", "3.8.15", "3.8.14",
    "3.8.13", "3.8.12", "3.8.11", "3.8.10", "3.8.9", "3.8.8",
    "3.8.7", "3.8.6", "3.8.5", "3.8.4", "3.8.3", "3.8.2",
    "3.8.1", "3.8.0",
    "3.7.17", "3.7.16", "3.7.15", "3.7.13", "3.7.12", "3.7.10",
    "3.7.9", "3.7.8", "3.7.7", "3.7.6", "3.7.5", "3.7.4",
    "3.7.3", "3.7.2", "3.7.1", "3.7.0",
)
