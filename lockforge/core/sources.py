"""Private package-index source injection.

Each ``python_index`` credential becomes a ``[[tool.poetry.source]]`` entry so
the resolver can reach private indexes. Sources are identified by their URL
(credentials stripped, one trailing slash), so re-injecting the same
credential replaces the existing entry rather than duplicating it.
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import tomli
import tomli_w

from lockforge.models.credentials import Credential

logger = logging.getLogger(__name__)

_NON_NAME_CHARS = re.compile(r"[^a-z0-9]+")


def normalise_url(url: str) -> str:
    """Strip any trailing slashes and add exactly one back."""
    return url.rstrip("/") + "/"


def source_identity(url: str) -> str:
    """The URL without user-info, normalised — what makes two sources the same."""
    parts = urlsplit(normalise_url(url))
    netloc = parts.netloc.rsplit("@", 1)[-1].lower()
    return urlunsplit((parts.scheme.lower(), netloc, parts.path, parts.query, ""))


def _authenticated_url(url: str, token: str | None) -> str:
    url = normalise_url(url)
    if not token:
        return url
    parts = urlsplit(url)
    netloc = parts.netloc.rsplit("@", 1)[-1]
    return urlunsplit((parts.scheme, f"{token}@{netloc}", parts.path, parts.query, ""))


def _source_name(credential: Credential) -> str:
    if credential.name:
        return credential.name
    host = urlsplit(credential.index_url).hostname or "index"
    return "private-" + _NON_NAME_CHARS.sub("-", host.lower()).strip("-")


def credential_source(credential: Credential) -> dict[str, Any]:
    """Build the manifest source table for one credential."""
    source: dict[str, Any] = {
        "name": _source_name(credential),
        "url": _authenticated_url(credential.index_url, credential.token),
    }
    if credential.replaces_base:
        source["default"] = True
    return source


class PrivateSourceInjector:
    """Adds or replaces credential-derived sources in a manifest."""

    def __init__(self, credentials: list[Credential]) -> None:
        self.credentials = [c for c in credentials if c.is_python_index]

    def replace_sources(self, manifest_content: str) -> str:
        """Return *manifest_content* with every credential source present exactly once."""
        if not self.credentials:
            return manifest_content

        pyproject = tomli.loads(manifest_content)
        poetry = pyproject.setdefault("tool", {}).setdefault("poetry", {})

        sources: list[dict[str, Any]] = [
            {**s, "url": normalise_url(s["url"])} if "url" in s else s
            for s in poetry.get("source", [])
        ]
        for credential in self.credentials:
            new_source = credential_source(credential)
            identity = source_identity(new_source["url"])
            sources = [
                s for s in sources
                if s.get("name") != new_source["name"]
                and ("url" not in s or source_identity(s["url"]) != identity)
            ]
            sources.append(new_source)
            logger.debug("Injected source %s (%s)", new_source["name"], identity)

        poetry["source"] = sources
        return tomli_w.dumps(pyproject)
