"""Local model inventory and host compatibility checks."""

from .compat import assess_compatibility, evaluate_compatibility, evaluate_inventory
from .core.types import (
    LocalModel,
    ModelCompatibility,
    ModelDiscoveryResult,
    ModelSource,
    SystemResources,
)
from .discovery import discover_models, scan_directory
from .probe import probe_resources

__all__ = [
    "LocalModel",
    "ModelCompatibility",
    "ModelDiscoveryResult",
    "ModelSource",
    "SystemResources",
    "assess_compatibility",
    "discover_models",
    "evaluate_compatibility",
    "evaluate_inventory",
    "probe_resources",
    "scan_directory",
]
