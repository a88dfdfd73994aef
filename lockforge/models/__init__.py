"""lockforge data models — all Pydantic v2, all frozen (immutable)."""

from lockforge.models.credentials import PYTHON_INDEX, Credential
from lockforge.models.declarations import (
    Declaration,
    MultiConstraintDeclaration,
    ScalarDeclaration,
    TableDeclaration,
    parse_declaration,
)
from lockforge.models.dependency import Dependency, Requirement
from lockforge.models.files import ProjectFile, find_file
from lockforge.models.python_versions import PRE_INSTALLED_VERSIONS, SUPPORTED_VERSIONS

__all__ = [
    # files
    "ProjectFile",
    "find_file",
    # dependencies
    "Dependency",
    "Requirement",
    # credentials
    "Credential",
    "PYTHON_INDEX",
    # declarations
    "Declaration",
    "ScalarDeclaration",
    "TableDeclaration",
    "MultiConstraintDeclaration",
    "parse_declaration",
    # interpreter versions
    "SUPPORTED_VERSIONS",
    "PRE_INSTALLED_VERSIONS",
]
