"""Host resource probes, one per platform."""

from .base import ResourceProbe, get_probe, list_probes, probe_resources, register_probe
from .darwin import DarwinProbe
from .linux import LinuxProbe
from .windows import WindowsProbe

__all__ = [
    "DarwinProbe",
    "LinuxProbe",
    "ResourceProbe",
    "WindowsProbe",
    "get_probe",
    "list_probes",
    "probe_resources",
    "register_probe",
]
