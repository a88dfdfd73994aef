"""Files installed into the resolution interpreter."""

from pathlib import Path

REQUIREMENTS_PATH = Path(__file__).parent / "requirements.txt"

# Interpreters every pin in requirements.txt can install on, and that can run
# core/hasher.py. pip 24.0 and tomli 2.0.1 both stop at 3.7.
REQUIRES_PYTHON = ">=3.7"

__all__ = ["REQUIREMENTS_PATH", "REQUIRES_PYTHON"]
