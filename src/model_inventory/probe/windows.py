from __future__ import annotations

import shutil
from pathlib import Path

from model_inventory.core.errors import ProbeError
from model_inventory.probe.base import default_cpu_cores, register_probe, run_command
from model_inventory.probe.parsers import parse_wmic_value


class WindowsProbe:
    def total_memory_bytes(self) -> int:
        output = run_command(["wmic", "computersystem", "get", "TotalPhysicalMemory", "/value"])
        return parse_wmic_value(output, "TotalPhysicalMemory")

    def available_memory_bytes(self) -> int:
        output = run_command(["wmic", "OS", "get", "FreePhysicalMemory", "/value"])
        # FreePhysicalMemory is reported in kB.
        return parse_wmic_value(output, "FreePhysicalMemory") * 1024

    def available_storage_bytes(self, path: Path) -> int:
        try:
            return shutil.disk_usage(path).free
        except OSError as exc:
            raise ProbeError(f"Failed to get storage info for {path}: {exc}") from exc

    def cpu_cores(self) -> int:
        return default_cpu_cores()


register_probe("windows", WindowsProbe)
