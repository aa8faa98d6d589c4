from __future__ import annotations

from pathlib import Path


class InventoryError(RuntimeError):
    """Base class for failures raised by model_inventory."""


class ProbeError(InventoryError):
    """A required system metric could not be read or parsed."""


class HomeDirectoryError(InventoryError):
    pass


class ScanError(InventoryError):
    def __init__(self, directory: Path | str, reason: str) -> None:
        self.directory = str(directory)
        self.reason = reason
        super().__init__(f"Failed to read directory {self.directory}: {reason}")
