from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient

from model_inventory.api.app import create_app
from model_inventory.core.config import InventorySettings
from model_inventory.core.errors import ProbeError

pytestmark = pytest.mark.api

GB = 1024**3


class _Probe:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail

    def total_memory_bytes(self) -> int:
        if self.fail:
            raise ProbeError("Could not find MemTotal in /proc/meminfo")
        return 32 * GB

    def available_memory_bytes(self) -> int:
        return 16 * GB

    def available_storage_bytes(self, path: Path) -> int:
        return 200 * GB

    def cpu_cores(self) -> int:
        return 8


def _settings(home: Path, **overrides) -> InventorySettings:
    return InventorySettings(home=home, lmstudio_dirs=(), **overrides)


def _seed_ollama(home: Path, size: int = 16) -> None:
    path = home / ".ollama" / "models" / "manifests" / "llama3" / "8b" / "model"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)


def test_models_endpoint_serves_cached_inventory(tmp_path: Path) -> None:
    home = tmp_path / "home"
    _seed_ollama(home)
    client = TestClient(create_app(_settings(home, cache_ttl_s=300.0), _Probe()))

    payload = client.get("/api/models").json()

    assert payload["total_count"] == 1
    assert payload["total_size_bytes"] == 16
    assert payload["errors"] == []
    model = payload["models"][0]
    assert set(model) == {"name", "path", "size_bytes", "source", "format"}
    assert model["name"] == "llama3:8b"
    assert model["source"] == "ollama"
    assert model["format"] is None

    extra = home / ".ollama" / "models" / "blobs" / "extra.gguf"
    extra.parent.mkdir(parents=True)
    extra.write_bytes(b"x")
    assert client.get("/api/models").json()["total_count"] == 1
    assert client.get("/api/models", params={"refresh": True}).json()["total_count"] == 2


def test_system_endpoint(tmp_path: Path) -> None:
    client = TestClient(create_app(_settings(tmp_path), _Probe()))

    payload = client.get("/api/system").json()

    assert payload == {
        "total_memory_gb": 32.0,
        "available_memory_gb": 16.0,
        "available_storage_gb": 200.0,
        "cpu_cores": 8,
    }


def test_probe_failure_maps_to_503(tmp_path: Path) -> None:
    client = TestClient(create_app(_settings(tmp_path), _Probe(fail=True)))

    response = client.get("/api/system")
    assert response.status_code == 503
    assert "MemTotal" in response.json()["detail"]

    response = client.post(
        "/api/compatibility", json={"model_size_bytes": GB, "model_name": "tiny"}
    )
    assert response.status_code == 503


def test_compatibility_endpoint(tmp_path: Path) -> None:
    client = TestClient(create_app(_settings(tmp_path), _Probe()))

    response = client.post(
        "/api/compatibility",
        json={"model_size_bytes": 4 * GB, "model_name": "mistral-7b"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["is_compatible"] is True
    assert payload["required_memory_gb"] == pytest.approx(6.0)
    assert payload["available_memory_gb"] == pytest.approx(14.0)
    assert payload["warnings"] == []


def test_compatibility_rejects_negative_size(tmp_path: Path) -> None:
    client = TestClient(create_app(_settings(tmp_path), _Probe()))

    response = client.post(
        "/api/compatibility", json={"model_size_bytes": -1, "model_name": "tiny"}
    )

    assert response.status_code == 422


def test_models_compatibility_endpoint(tmp_path: Path) -> None:
    home = tmp_path / "home"
    _seed_ollama(home)
    client = TestClient(create_app(_settings(home), _Probe()))

    payload = client.get("/api/models/compatibility").json()

    assert len(payload["models"]) == 1
    entry = payload["models"][0]
    assert entry["model"]["name"] == "llama3:8b"
    assert entry["compatibility"]["is_compatible"] is True


def test_ollama_endpoint(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr("model_inventory.ollama.find_ollama_binary", lambda system=None: None)
    client = TestClient(create_app(_settings(tmp_path), _Probe()))

    payload = client.get("/api/ollama").json()

    assert payload["status"] == "not_installed"


def test_token_required_when_configured(tmp_path: Path) -> None:
    client = TestClient(create_app(_settings(tmp_path, token="secret"), _Probe()))

    assert client.get("/api/health").status_code == 401
    response = client.get("/api/health", headers={"Authorization": "Bearer secret"})
    assert response.json() == {"ok": True}
