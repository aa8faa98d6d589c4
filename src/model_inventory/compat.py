"""Scores whether a model fits the host's memory, storage and CPU."""

from __future__ import annotations

from pathlib import Path

from model_inventory.core.config import InventorySettings
from model_inventory.core.types import (
    LocalModel,
    ModelCompatibility,
    ModelDiscoveryResult,
    SystemResources,
    bytes_to_gb,
)
from model_inventory.probe import ResourceProbe, probe_resources

MEMORY_RESERVE_GB = 2.0
STORAGE_OVERHEAD_GB = 1.0
MIN_REQUIRED_MEMORY_GB = 2.0
MIN_CPU_CORES = 4
TIGHT_MEMORY_RATIO = 1.5

# First match wins.
_MEMORY_MULTIPLIERS: tuple[tuple[tuple[str, ...], float], ...] = (
    (("70b", "70-b"), 1.8),
    (("13b", "13-b"), 1.6),
    (("vision", "llava"), 1.7),
    (("7b", "7-b"), 1.5),
    (("code", "coder"), 1.4),
)
_BASE_MULTIPLIER = 1.2

_MEMORY_SCORES = ((2.0, 1.0), (1.5, 0.8), (1.0, 0.6))
_STORAGE_SCORES = ((2.0, 1.0), (1.5, 0.9), (1.0, 0.7))
_MEMORY_WEIGHT = 0.7
_STORAGE_WEIGHT = 0.3


def memory_multiplier(model_name: str) -> float:
    name = model_name.lower()
    for needles, multiplier in _MEMORY_MULTIPLIERS:
        if any(needle in name for needle in needles):
            return multiplier
    return _BASE_MULTIPLIER


def estimate_required_memory(size_gb: float, model_name: str) -> float:
    return max(size_gb * memory_multiplier(model_name), MIN_REQUIRED_MEMORY_GB)


def _step_score(ratio: float, steps: tuple[tuple[float, float], ...]) -> float:
    for threshold, score in steps:
        if ratio >= threshold:
            return score
    return 0.0


def confidence_level(memory_ratio: float, storage_ratio: float) -> float:
    score = (
        _step_score(memory_ratio, _MEMORY_SCORES) * _MEMORY_WEIGHT
        + _step_score(storage_ratio, _STORAGE_SCORES) * _STORAGE_WEIGHT
    )
    return min(max(score, 0.0), 1.0)


def assess_compatibility(
    model_size_bytes: int,
    model_name: str,
    resources: SystemResources,
) -> ModelCompatibility:
    """Verdict for one model against an existing resource snapshot."""
    size_gb = bytes_to_gb(model_size_bytes)
    required_gb = estimate_required_memory(size_gb, model_name)

    usable_gb = resources.available_memory_gb - MEMORY_RESERVE_GB
    memory_sufficient = usable_gb >= required_gb

    storage_needed_gb = size_gb + STORAGE_OVERHEAD_GB
    storage_sufficient = resources.available_storage_gb >= storage_needed_gb

    memory_ratio = usable_gb / required_gb if required_gb > 0 else 1.0
    storage_ratio = resources.available_storage_gb / storage_needed_gb if size_gb > 0 else 1.0

    warnings: list[str] = []
    if not memory_sufficient:
        warnings.append(
            f"Insufficient RAM: Model requires {required_gb:.1f}GB, "
            f"but only {usable_gb:.1f}GB available after system overhead"
        )
    elif memory_ratio < TIGHT_MEMORY_RATIO:
        warnings.append(
            f"Tight memory: Model requires {required_gb:.1f}GB, "
            f"only {usable_gb:.1f}GB available. Performance may be affected."
        )
    if not storage_sufficient:
        warnings.append(
            f"Insufficient storage: Need {storage_needed_gb:.1f}GB for model + overhead, "
            f"but only {resources.available_storage_gb:.1f}GB available"
        )
    if resources.cpu_cores < MIN_CPU_CORES:
        warnings.append("CPU has fewer than 4 cores. Model inference may be slow.")

    return ModelCompatibility(
        is_compatible=memory_sufficient and storage_sufficient,
        confidence_level=confidence_level(memory_ratio, storage_ratio),
        required_memory_gb=required_gb,
        available_memory_gb=usable_gb,
        memory_sufficient=memory_sufficient,
        storage_sufficient=storage_sufficient,
        warnings=tuple(warnings),
    )


def evaluate_compatibility(
    model_size_bytes: int,
    model_name: str,
    probe: ResourceProbe | None = None,
    *,
    home: Path | None = None,
    settings: InventorySettings | None = None,
) -> ModelCompatibility:
    resources = probe_resources(probe, home=home, settings=settings)
    return assess_compatibility(model_size_bytes, model_name, resources)


def evaluate_inventory(
    result: ModelDiscoveryResult,
    probe: ResourceProbe | None = None,
    *,
    home: Path | None = None,
    settings: InventorySettings | None = None,
) -> list[tuple[LocalModel, ModelCompatibility]]:
    resources = probe_resources(probe, home=home, settings=settings)
    return [
        (model, assess_compatibility(model.size_bytes, model.name, resources))
        for model in result.models
    ]
