"""Update pipeline components: patch, freeze, inject, resolve, reconcile."""

from lockforge.core.freezer import DependencyFreezer, normalise, sanitize
from lockforge.core.patcher import ManifestPatcher, PatchMismatchError
from lockforge.core.pipeline import LockfileUnchangedError, UpdatePipeline
from lockforge.core.python_version import PythonVersionResolver
from lockforge.core.reconciler import ContentHashReconciler, LockfileFormatError
from lockforge.core.resolver import LockResolutionInvoker
from lockforge.core.runner import CommandRunner, SubprocessFailure
from lockforge.core.sources import PrivateSourceInjector
from lockforge.core.workspace import ResolutionWorkspace, WorkspacePathError

__all__ = [
    "CommandRunner",
    "ContentHashReconciler",
    "DependencyFreezer",
    "LockResolutionInvoker",
    "LockfileFormatError",
    "LockfileUnchangedError",
    "ManifestPatcher",
    "PatchMismatchError",
    "PrivateSourceInjector",
    "PythonVersionResolver",
    "ResolutionWorkspace",
    "SubprocessFailure",
    "UpdatePipeline",
    "WorkspacePathError",
    "normalise",
    "sanitize",
]
