from __future__ import annotations

import http.client
import logging
import shutil
import subprocess
import urllib.error
import urllib.request
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from model_inventory.core.config import InventorySettings, current_system, load_settings

logger = logging.getLogger(__name__)

_API_TIMEOUT_S = 5.0
_VERSION_TIMEOUT_S = 10.0

_FALLBACK_BINARIES = {
    "windows": (
        "C:\\Program Files\\Ollama\\ollama.exe",
        "C:\\Program Files (x86)\\Ollama\\ollama.exe",
    ),
    "darwin": (
        "/usr/local/bin/ollama",
        "/opt/homebrew/bin/ollama",
        "/Applications/Ollama.app/Contents/Resources/ollama",
    ),
    "linux": (
        "/usr/local/bin/ollama",
        "/usr/bin/ollama",
        "/opt/ollama/bin/ollama",
    ),
}


class OllamaStatus(str, Enum):
    NOT_INSTALLED = "not_installed"
    INSTALLED_NOT_RUNNING = "installed_not_running"
    RUNNING = "running"


@dataclass(frozen=True, slots=True)
class OllamaDetection:
    status: OllamaStatus
    binary_path: str | None
    api_accessible: bool
    version: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "binary_path": self.binary_path,
            "api_accessible": self.api_accessible,
            "version": self.version,
        }


def find_ollama_binary(system: str | None = None) -> str | None:
    found = shutil.which("ollama")
    if found:
        return found
    for candidate in _FALLBACK_BINARIES.get(current_system(system), _FALLBACK_BINARIES["linux"]):
        if Path(candidate).exists():
            return candidate
    return None


def ollama_api_accessible(base_url: str, timeout_s: float = _API_TIMEOUT_S) -> bool:
    if "://" not in base_url:
        # OLLAMA_HOST is commonly set as host:port.
        base_url = f"http://{base_url}"
    url = base_url.rstrip("/") + "/api/tags"
    try:
        with urllib.request.urlopen(url, timeout=timeout_s) as response:
            return 200 <= response.status < 300
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
        logger.debug("ollama api not reachable at %s: %s", url, exc)
        return False


def ollama_version(binary_path: str) -> str | None:
    """Version from `ollama --version`, e.g. "ollama version is 0.1.32"."""
    try:
        result = subprocess.run(
            [binary_path, "--version"],
            capture_output=True,
            text=True,
            check=False,
            timeout=_VERSION_TIMEOUT_S,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    tokens = result.stdout.split()
    return tokens[-1].strip() if tokens else None


def detect_ollama(
    settings: InventorySettings | None = None,
    *,
    system: str | None = None,
) -> OllamaDetection:
    settings = settings or load_settings()
    binary_path = find_ollama_binary(system)
    if binary_path is None:
        return OllamaDetection(
            status=OllamaStatus.NOT_INSTALLED,
            binary_path=None,
            api_accessible=False,
            version=None,
        )

    api_accessible = ollama_api_accessible(settings.ollama_host)
    status = OllamaStatus.RUNNING if api_accessible else OllamaStatus.INSTALLED_NOT_RUNNING
    return OllamaDetection(
        status=status,
        binary_path=binary_path,
        api_accessible=api_accessible,
        version=ollama_version(binary_path),
    )
