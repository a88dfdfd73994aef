"""lockforge: Surgical pyproject.toml updates with consistent poetry.lock regeneration.

  - Textual manifest patching that leaves unrelated bytes untouched
  - Frozen resolution: unrelated dependencies pinned to their locked versions
  - Private index sources injected from credentials
  - Interpreter selection from python constraints or .python-version
  - Isolated, always-cleaned resolution workspaces
  - Lockfile content-hash reconciled against the shipped manifest
"""

__version__ = "0.1.0"
__description__ = (
    "Update Poetry manifests and regenerate lockfiles without collateral upgrades"
)

from lockforge.core.pipeline import UpdatePipeline
from lockforge.models import Credential, Dependency, ProjectFile, Requirement

__all__ = [
    "UpdatePipeline",
    "Credential",
    "Dependency",
    "ProjectFile",
    "Requirement",
    "__version__",
]
