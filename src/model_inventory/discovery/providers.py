from __future__ import annotations

from pathlib import Path

from model_inventory.core.config import InventorySettings, current_system, resolve_home


def ollama_models_dir(settings: InventorySettings, system: str | None = None) -> Path:
    if settings.ollama_models_dir is not None:
        return settings.ollama_models_dir
    home = resolve_home(settings, system)
    if current_system(system) == "windows":
        return home / "AppData" / "Local" / "ollama" / "models"
    return home / ".ollama" / "models"


def lmstudio_dirs(settings: InventorySettings, system: str | None = None) -> list[Path]:
    """Candidate LM Studio model directories, most specific first.

    The install location moved between LM Studio releases, so every known
    location is returned; callers skip the ones that do not exist.
    """
    if settings.lmstudio_dirs is not None:
        return list(settings.lmstudio_dirs)
    home = resolve_home(settings, system)
    name = current_system(system)
    if name == "windows":
        return [
            home / "AppData" / "Roaming" / "LM Studio" / "models",
            home / "Documents" / "LM Studio" / "models",
            home / ".lmstudio" / "models",
        ]
    if name == "darwin":
        return [
            home / "Library" / "Application Support" / "LM Studio" / "models",
            home / ".lmstudio" / "models",
            home / ".cache" / "lm-studio" / "models",
        ]
    return [
        home / ".config" / "lmstudio" / "models",
        home / ".lmstudio" / "models",
        home / ".cache" / "lm-studio" / "models",
    ]
