"""Content-hash helper run inside the resolution interpreter.

Poetry stores a hash of the manifest's relevant sections in
``[metadata] content-hash`` of the lockfile. This module reproduces that
hash. It is executed as a standalone script by the pyenv-selected
interpreter, so it must only import the standard library and ``tomli``
(installed from ``helpers/requirements.txt``), never ``lockforge`` itself.

Protocol: a JSON request ``{"function": ..., "args": [...]}`` on stdin, a
single JSON response ``{"result": ...}`` or ``{"error": ..., "error_class":
...}`` on stdout.
"""

from __future__ import annotations

import hashlib
import json
import os
import sys
from typing import Any

import tomli

# Sections of [tool.poetry] that feed Poetry's content hash.
RELEVANT_KEYS = ("dependencies", "dev-dependencies", "source", "extras")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def relevant_content(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Pick the hashed sections out of a parsed pyproject."""
    poetry = pyproject.get("tool", {}).get("poetry", {})
    return {key: poetry.get(key) for key in RELEVANT_KEYS}


def content_hash(pyproject: dict[str, Any]) -> str:
    """Poetry's content hash — sorted, default-separator JSON, SHA-256.

    The separators must stay at ``json.dumps`` defaults; Poetry hashes
    exactly that serialisation.
    """
    payload = json.dumps(relevant_content(pyproject), sort_keys=True)
    return sha256_hex(payload.encode("utf-8"))


def get_pyproject_hash(directory: str) -> str:
    """Hash the ``pyproject.toml`` found in *directory*."""
    with open(os.path.join(directory, "pyproject.toml"), "rb") as f:
        return content_hash(tomli.load(f))


FUNCTIONS = {"get_pyproject_hash": get_pyproject_hash}


def main() -> int:
    request = json.loads(sys.stdin.read())
    function = FUNCTIONS.get(request.get("function", ""))
    if function is None:
        print(json.dumps({
            "error": f"Unknown function: {request.get('function')!r}",
            "error_class": "KeyError",
        }))
        return 1

    try:
        result = function(*request.get("args", []))
    except (OSError, tomli.TOMLDecodeError) as exc:
        print(json.dumps({"error": str(exc), "error_class": type(exc).__name__}))
        return 1

    print(json.dumps({"result": result}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
