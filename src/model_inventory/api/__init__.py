"""HTTP surface for the inventory and compatibility checks."""

from .cache import DiscoveryCache

__all__ = ["DiscoveryCache"]
