from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from model_inventory.core.config import InventorySettings, current_system, resolve_home
from model_inventory.core.errors import InventoryError, ProbeError
from model_inventory.core.types import SystemResources, bytes_to_gb

_COMMAND_TIMEOUT_S = 10.0


class ResourceProbe(Protocol):
    def total_memory_bytes(self) -> int:
        ...

    def available_memory_bytes(self) -> int:
        ...

    def available_storage_bytes(self, path: Path) -> int:
        ...

    def cpu_cores(self) -> int:
        ...


_PROBES: dict[str, Callable[[], ResourceProbe]] = {}


def register_probe(system: str, factory: Callable[[], ResourceProbe]) -> None:
    key = system.lower()
    if key in _PROBES:
        raise ValueError(f"Probe for '{system}' is already registered")
    _PROBES[key] = factory


def get_probe(system: str | None = None) -> ResourceProbe:
    key = current_system(system)
    factory = _PROBES.get(key)
    if factory is None:
        available = ", ".join(list_probes())
        raise ProbeError(f"No resource probe for platform '{key}'. Available probes: {available}")
    return factory()


def list_probes() -> list[str]:
    return sorted(_PROBES)


def default_cpu_cores() -> int:
    return os.cpu_count() or 1


def run_command(args: Sequence[str]) -> str:
    try:
        result = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            check=False,
            timeout=_COMMAND_TIMEOUT_S,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise ProbeError(f"Failed to run {args[0]}: {exc}") from exc
    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit code {result.returncode}"
        raise ProbeError(f"{args[0]} failed: {detail}")
    return result.stdout


def probe_resources(
    probe: ResourceProbe | None = None,
    *,
    home: Path | None = None,
    settings: InventorySettings | None = None,
) -> SystemResources:
    """Take a fresh resource snapshot; storage is measured at the home directory."""
    probe = probe or get_probe()
    if home is None:
        try:
            home = resolve_home(settings)
        except InventoryError as exc:
            raise ProbeError(str(exc)) from exc

    total = probe.total_memory_bytes()
    available = probe.available_memory_bytes()
    storage = probe.available_storage_bytes(home)
    return SystemResources(
        total_memory_gb=bytes_to_gb(total),
        available_memory_gb=bytes_to_gb(available),
        available_storage_gb=bytes_to_gb(storage),
        cpu_cores=probe.cpu_cores(),
    )


def statvfs_free_bytes(path: Path) -> int:
    try:
        stats = os.statvfs(path)
    except OSError as exc:
        raise ProbeError(f"Failed to get storage info for {path}: {exc}") from exc
    return stats.f_bavail * stats.f_frsize
