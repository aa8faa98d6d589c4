"""Core data contracts, configuration and errors."""

from .config import InventorySettings, load_settings, resolve_home
from .errors import HomeDirectoryError, InventoryError, ProbeError, ScanError
from .types import (
    LocalModel,
    ModelCompatibility,
    ModelDiscoveryResult,
    ModelSource,
    SystemResources,
    bytes_to_gb,
)

__all__ = [
    "HomeDirectoryError",
    "InventoryError",
    "InventorySettings",
    "LocalModel",
    "ModelCompatibility",
    "ModelDiscoveryResult",
    "ModelSource",
    "ProbeError",
    "ScanError",
    "SystemResources",
    "bytes_to_gb",
    "load_settings",
    "resolve_home",
]
