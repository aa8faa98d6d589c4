"""Parsers for raw OS memory reports.

Every parser returns a byte count or raises ProbeError; none of them
substitutes zero for a missing or malformed figure.
"""

from __future__ import annotations

import re

from model_inventory.core.errors import ProbeError

_VM_STAT_PAGE_SIZE = re.compile(r"page size of (\d+) bytes")
_VM_STAT_AVAILABLE_KEYS = ("Pages free", "Pages inactive", "Pages speculative")
_DEFAULT_PAGE_SIZE = 4096


def parse_meminfo(text: str) -> dict[str, int]:
    """Map /proc/meminfo keys to their values in kB."""
    data: dict[str, int] = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[0].endswith(":"):
            key = parts[0][:-1]
            try:
                data[key] = int(parts[1])
            except ValueError:
                continue
    return data


def meminfo_bytes(text: str, key: str) -> int:
    meminfo = parse_meminfo(text)
    if key not in meminfo:
        raise ProbeError(f"Could not find {key} in /proc/meminfo")
    return meminfo[key] * 1024


def parse_sysctl_memsize(text: str) -> int:
    raw = text.strip()
    try:
        return int(raw)
    except ValueError as exc:
        raise ProbeError(f"Failed to parse memory size: {raw!r}") from exc


def parse_vm_stat(text: str) -> int:
    """Reclaimable memory in bytes from `vm_stat` output."""
    page_size = _DEFAULT_PAGE_SIZE
    match = _VM_STAT_PAGE_SIZE.search(text)
    if match:
        page_size = int(match.group(1))

    pages: dict[str, int] = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep or key.strip() not in _VM_STAT_AVAILABLE_KEYS:
            continue
        try:
            pages[key.strip()] = int(value.strip().rstrip("."))
        except ValueError as exc:
            raise ProbeError(f"Failed to parse vm_stat line: {line.strip()!r}") from exc

    if "Pages free" not in pages:
        raise ProbeError("Could not find free page count in vm_stat output")
    return sum(pages.values()) * page_size


def parse_wmic_value(text: str, key: str) -> int:
    prefix = f"{key}="
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith(prefix):
            continue
        raw = line[len(prefix):].strip()
        try:
            return int(raw)
        except ValueError as exc:
            raise ProbeError(f"Failed to parse {key}: {raw!r}") from exc
    raise ProbeError(f"Could not find {key} in wmic output")
