from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path

from model_inventory.core.errors import HomeDirectoryError

_DEFAULT_OLLAMA_HOST = "http://127.0.0.1:11434"


@dataclass(frozen=True, slots=True)
class InventorySettings:
    home: Path | None = None
    ollama_models_dir: Path | None = None
    lmstudio_dirs: tuple[Path, ...] | None = None
    extra_dirs: tuple[Path, ...] = ()
    cache_ttl_s: float = 30.0
    scan_timeout_s: float = 0.0
    token: str | None = None
    log_level: str = "INFO"
    ollama_host: str = _DEFAULT_OLLAMA_HOST


def load_settings() -> InventorySettings:
    home_raw = os.getenv("MODEL_INVENTORY_HOME")
    ollama_raw = os.getenv("OLLAMA_MODELS")
    lmstudio_raw = os.getenv("MODEL_INVENTORY_LMSTUDIO_DIRS")
    return InventorySettings(
        home=Path(home_raw).expanduser() if home_raw else None,
        ollama_models_dir=Path(ollama_raw).expanduser() if ollama_raw else None,
        lmstudio_dirs=_split_paths(lmstudio_raw) if lmstudio_raw else None,
        extra_dirs=_split_paths(os.getenv("MODEL_INVENTORY_EXTRA_DIRS")),
        cache_ttl_s=max(0.0, _env_float("MODEL_INVENTORY_CACHE_TTL_S", 30.0)),
        scan_timeout_s=max(0.0, _env_float("MODEL_INVENTORY_SCAN_TIMEOUT_S", 0.0)),
        token=os.getenv("MODEL_INVENTORY_TOKEN") or None,
        log_level=os.getenv("MODEL_INVENTORY_LOG_LEVEL", "INFO").upper(),
        ollama_host=os.getenv("OLLAMA_HOST", _DEFAULT_OLLAMA_HOST),
    )


def current_system(system: str | None = None) -> str:
    """Normalized OS name: "linux", "darwin" or "windows"."""
    return (system or platform.system()).lower()


def resolve_home(settings: InventorySettings | None = None, system: str | None = None) -> Path:
    if settings is not None and settings.home is not None:
        return settings.home
    if current_system(system) == "windows":
        raw = os.getenv("USERPROFILE") or os.getenv("HOMEPATH")
    else:
        raw = os.getenv("HOME")
    if not raw:
        raise HomeDirectoryError("Could not determine home directory")
    return Path(raw)


def _split_paths(raw: str | None) -> tuple[Path, ...]:
    if not raw:
        return ()
    return tuple(Path(item).expanduser() for item in raw.split(os.pathsep) if item.strip())


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
