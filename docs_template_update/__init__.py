"""Restructure integration package READMEs into the package-docs template."""

from .models import PlaceholderSpec, UpdateOutcome
from .orchestrator import Orchestrator

__version__ = "0.1.0"

__all__ = ["Orchestrator", "PlaceholderSpec", "UpdateOutcome", "__version__"]
