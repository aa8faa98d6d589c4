from __future__ import annotations

from pathlib import Path

import pytest

from model_inventory.discovery import scanner


class _LockedEntry:
    """Directory entry whose type lookup fails, like a child of a `r--` directory."""

    def __init__(self, path: str) -> None:
        self.path = path

    def is_file(self) -> bool:
        raise PermissionError(13, "Permission denied", self.path)

    def is_dir(self) -> bool:
        raise PermissionError(13, "Permission denied", self.path)


@pytest.fixture
def lock_directory(monkeypatch):
    """Make every entry listed under the given directory fail its type lookup."""
    real_list = scanner._list_entries

    def lock(locked: Path) -> None:
        def fake_list(directory: Path) -> list:
            entries = real_list(directory)
            if Path(directory) == locked:
                return [_LockedEntry(entry.path) for entry in entries]
            return entries

        monkeypatch.setattr(scanner, "_list_entries", fake_list)

    return lock
