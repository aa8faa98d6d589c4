from __future__ import annotations

import os
from pathlib import Path

import pytest

from model_inventory.core.config import load_settings, resolve_home
from model_inventory.core.errors import HomeDirectoryError

_ENV_KEYS = (
    "MODEL_INVENTORY_HOME",
    "OLLAMA_MODELS",
    "MODEL_INVENTORY_LMSTUDIO_DIRS",
    "MODEL_INVENTORY_EXTRA_DIRS",
    "MODEL_INVENTORY_CACHE_TTL_S",
    "MODEL_INVENTORY_SCAN_TIMEOUT_S",
    "MODEL_INVENTORY_TOKEN",
    "MODEL_INVENTORY_LOG_LEVEL",
    "OLLAMA_HOST",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    settings = load_settings()

    assert settings.home is None
    assert settings.ollama_models_dir is None
    assert settings.lmstudio_dirs is None
    assert settings.extra_dirs == ()
    assert settings.cache_ttl_s == 30.0
    assert settings.scan_timeout_s == 0.0
    assert settings.token is None
    assert settings.log_level == "INFO"
    assert settings.ollama_host == "http://127.0.0.1:11434"


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MODEL_INVENTORY_HOME", str(tmp_path))
    monkeypatch.setenv("OLLAMA_MODELS", str(tmp_path / "ollama"))
    monkeypatch.setenv(
        "MODEL_INVENTORY_EXTRA_DIRS", os.pathsep.join([str(tmp_path / "a"), "", str(tmp_path / "b")])
    )
    monkeypatch.setenv("MODEL_INVENTORY_LMSTUDIO_DIRS", str(tmp_path / "lm"))
    monkeypatch.setenv("MODEL_INVENTORY_CACHE_TTL_S", "5")
    monkeypatch.setenv("MODEL_INVENTORY_TOKEN", "secret")
    monkeypatch.setenv("MODEL_INVENTORY_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.home == tmp_path
    assert settings.ollama_models_dir == tmp_path / "ollama"
    assert settings.extra_dirs == (tmp_path / "a", tmp_path / "b")
    assert settings.lmstudio_dirs == (tmp_path / "lm",)
    assert settings.cache_ttl_s == 5.0
    assert settings.token == "secret"
    assert settings.log_level == "DEBUG"


def test_malformed_numbers_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("MODEL_INVENTORY_CACHE_TTL_S", "soon")
    monkeypatch.setenv("MODEL_INVENTORY_SCAN_TIMEOUT_S", "-3")

    settings = load_settings()

    assert settings.cache_ttl_s == 30.0
    assert settings.scan_timeout_s == 0.0


def test_resolve_home_per_platform(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path / "posix"))
    monkeypatch.delenv("USERPROFILE", raising=False)
    monkeypatch.setenv("HOMEPATH", str(tmp_path / "homepath"))

    assert resolve_home(system="linux") == tmp_path / "posix"
    assert resolve_home(system="windows") == tmp_path / "homepath"

    monkeypatch.setenv("USERPROFILE", str(tmp_path / "profile"))
    assert resolve_home(system="windows") == tmp_path / "profile"


def test_resolve_home_missing(monkeypatch) -> None:
    monkeypatch.delenv("HOME", raising=False)
    with pytest.raises(HomeDirectoryError):
        resolve_home(system="darwin")
