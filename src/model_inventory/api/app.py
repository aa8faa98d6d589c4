from __future__ import annotations

import argparse
import logging
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field

from model_inventory.api.cache import DiscoveryCache
from model_inventory.compat import evaluate_compatibility, evaluate_inventory
from model_inventory.core.config import InventorySettings, load_settings
from model_inventory.core.errors import ProbeError
from model_inventory.core.logs import configure_logging
from model_inventory.discovery import discover_models
from model_inventory.ollama import detect_ollama
from model_inventory.probe import ResourceProbe, probe_resources

logger = logging.getLogger(__name__)


class CompatibilityRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_size_bytes: int = Field(ge=0)
    model_name: str


def create_app(
    settings: InventorySettings | None = None,
    probe: ResourceProbe | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    cache = DiscoveryCache(settings.cache_ttl_s, lambda: discover_models(settings))

    app = FastAPI(title="model_inventory")
    app.state.discovery_cache = cache

    def require_token(request: Request) -> None:
        if not settings.token:
            return
        header = request.headers.get("Authorization", "")
        expected = f"Bearer {settings.token}"
        if header != expected:
            raise HTTPException(status_code=401, detail="Unauthorized")

    def _probe_failed(exc: ProbeError) -> HTTPException:
        logger.warning("resource probe failed: %s", exc)
        return HTTPException(status_code=503, detail=str(exc))

    @app.get("/api/health", dependencies=[Depends(require_token)])
    async def api_health() -> dict[str, Any]:
        return {"ok": True}

    @app.get("/api/models", dependencies=[Depends(require_token)])
    async def api_models(refresh: bool = False) -> dict[str, Any]:
        result = await run_in_threadpool(cache.get, refresh)
        return result.to_dict()

    @app.get("/api/models/compatibility", dependencies=[Depends(require_token)])
    async def api_models_compatibility(refresh: bool = False) -> dict[str, Any]:
        result = await run_in_threadpool(cache.get, refresh)
        try:
            pairs = await run_in_threadpool(
                evaluate_inventory, result, probe, settings=settings
            )
        except ProbeError as exc:
            raise _probe_failed(exc) from exc
        return {
            "models": [
                {"model": model.to_dict(), "compatibility": verdict.to_dict()}
                for model, verdict in pairs
            ],
            "errors": list(result.errors),
        }

    @app.get("/api/system", dependencies=[Depends(require_token)])
    async def api_system() -> dict[str, Any]:
        try:
            resources = await run_in_threadpool(probe_resources, probe, settings=settings)
        except ProbeError as exc:
            raise _probe_failed(exc) from exc
        return resources.to_dict()

    @app.post("/api/compatibility", dependencies=[Depends(require_token)])
    async def api_compatibility(payload: CompatibilityRequest) -> dict[str, Any]:
        try:
            verdict = await run_in_threadpool(
                evaluate_compatibility,
                payload.model_size_bytes,
                payload.model_name,
                probe,
                settings=settings,
            )
        except ProbeError as exc:
            raise _probe_failed(exc) from exc
        return verdict.to_dict()

    @app.get("/api/ollama", dependencies=[Depends(require_token)])
    async def api_ollama() -> dict[str, Any]:
        detection = await run_in_threadpool(detect_ollama, settings)
        return detection.to_dict()

    return app


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="model_inventory.api")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=9100)
    args = parser.parse_args(argv)
    return serve(args.host, args.port)


def serve(host: str, port: int) -> int:
    try:
        import uvicorn
    except ImportError as exc:
        raise SystemExit("uvicorn is required to run the service") from exc
    configure_logging(load_settings().log_level)
    uvicorn.run("model_inventory.api.app:create_app", host=host, port=port, factory=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
