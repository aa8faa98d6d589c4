from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from model_inventory.core.errors import ProbeError
from model_inventory.probe.base import default_cpu_cores, register_probe, statvfs_free_bytes
from model_inventory.probe.parsers import meminfo_bytes


@dataclass(slots=True)
class LinuxProbe:
    meminfo_path: Path = Path("/proc/meminfo")

    def _read_meminfo(self) -> str:
        try:
            return self.meminfo_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ProbeError(f"Failed to read {self.meminfo_path}: {exc}") from exc

    def total_memory_bytes(self) -> int:
        return meminfo_bytes(self._read_meminfo(), "MemTotal")

    def available_memory_bytes(self) -> int:
        return meminfo_bytes(self._read_meminfo(), "MemAvailable")

    def available_storage_bytes(self, path: Path) -> int:
        return statvfs_free_bytes(path)

    def cpu_cores(self) -> int:
        return default_cpu_cores()


register_probe("linux", LinuxProbe)
