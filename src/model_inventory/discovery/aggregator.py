from __future__ import annotations

import logging
import os
from pathlib import Path

from model_inventory.core.config import InventorySettings, load_settings
from model_inventory.core.errors import InventoryError
from model_inventory.core.types import LocalModel, ModelDiscoveryResult, ModelSource
from model_inventory.discovery.providers import lmstudio_dirs, ollama_models_dir
from model_inventory.discovery.scanner import StopCheck, deadline, scan_directory

logger = logging.getLogger(__name__)


class _Run:
    """Accumulator for one discovery pass."""

    def __init__(self, should_stop: StopCheck | None) -> None:
        self.models: list[LocalModel] = []
        self.errors: list[str] = []
        self.should_stop = should_stop
        self._roots: set[str] = set()
        self._paths: set[str] = set()

    def scan(self, directory: Path, source: ModelSource) -> None:
        root_key = os.path.normcase(os.path.realpath(directory))
        if root_key in self._roots:
            logger.debug("skipping %s: already scanned", directory)
            return
        self._roots.add(root_key)
        for model in scan_directory(directory, source, should_stop=self.should_stop):
            if model.path in self._paths:
                continue
            self._paths.add(model.path)
            self.models.append(model)


def discover_models(
    settings: InventorySettings | None = None,
    *,
    system: str | None = None,
) -> ModelDiscoveryResult:
    """Best-effort inventory of local model files.

    Never raises. Ollama and extra-directory failures are reported in
    `errors`; LM Studio directories that cannot be read are logged and
    skipped. Models collected before a failure are kept.
    """
    settings = settings or load_settings()
    run = _Run(deadline(settings.scan_timeout_s))

    try:
        run.scan(ollama_models_dir(settings, system), ModelSource.OLLAMA)
    except InventoryError as exc:
        run.errors.append(f"Ollama model discovery error: {exc}")

    try:
        candidates = lmstudio_dirs(settings, system)
    except InventoryError as exc:
        logger.warning("Skipping LM Studio discovery: %s", exc)
        candidates = []
    for directory in candidates:
        try:
            run.scan(directory, ModelSource.LM_STUDIO)
        except InventoryError as exc:
            logger.warning("Failed to scan LM Studio directory %s: %s", directory, exc)

    for directory in settings.extra_dirs:
        try:
            run.scan(directory, ModelSource.OTHER)
        except InventoryError as exc:
            run.errors.append(f"Other model discovery error: {exc}")

    result = ModelDiscoveryResult.from_models(run.models, run.errors)
    logger.info(
        "discovered %d models (%d bytes), %d errors",
        result.total_count,
        result.total_size_bytes,
        len(result.errors),
    )
    return result
