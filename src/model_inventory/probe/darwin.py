from __future__ import annotations

from pathlib import Path

from model_inventory.probe.base import (
    default_cpu_cores,
    register_probe,
    run_command,
    statvfs_free_bytes,
)
from model_inventory.probe.parsers import parse_sysctl_memsize, parse_vm_stat


class DarwinProbe:
    def total_memory_bytes(self) -> int:
        return parse_sysctl_memsize(run_command(["sysctl", "-n", "hw.memsize"]))

    def available_memory_bytes(self) -> int:
        return parse_vm_stat(run_command(["vm_stat"]))

    def available_storage_bytes(self, path: Path) -> int:
        return statvfs_free_bytes(path)

    def cpu_cores(self) -> int:
        return default_cpu_cores()


register_probe("darwin", DarwinProbe)
