from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

_BYTES_PER_GB = 1024**3


def bytes_to_gb(value: int) -> float:
    return value / _BYTES_PER_GB


class ModelSource(str, Enum):
    OLLAMA = "ollama"
    LM_STUDIO = "lm_studio"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class LocalModel:
    name: str
    path: str
    size_bytes: int
    source: ModelSource
    format: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "size_bytes": self.size_bytes,
            "source": self.source.value,
            "format": self.format,
        }


@dataclass(slots=True)
class ModelDiscoveryResult:
    models: list[LocalModel] = field(default_factory=list)
    total_count: int = 0
    total_size_bytes: int = 0
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_models(
        cls, models: Iterable[LocalModel], errors: Iterable[str] = ()
    ) -> "ModelDiscoveryResult":
        items = list(models)
        return cls(
            models=items,
            total_count=len(items),
            total_size_bytes=sum(item.size_bytes for item in items),
            errors=list(errors),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "models": [item.to_dict() for item in self.models],
            "total_count": self.total_count,
            "total_size_bytes": self.total_size_bytes,
            "errors": list(self.errors),
        }


@dataclass(frozen=True, slots=True)
class SystemResources:
    total_memory_gb: float
    available_memory_gb: float
    available_storage_gb: float
    cpu_cores: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_memory_gb": self.total_memory_gb,
            "available_memory_gb": self.available_memory_gb,
            "available_storage_gb": self.available_storage_gb,
            "cpu_cores": self.cpu_cores,
        }


@dataclass(frozen=True, slots=True)
class ModelCompatibility:
    is_compatible: bool
    confidence_level: float
    required_memory_gb: float
    # Usable memory: available memory minus the system reserve.
    available_memory_gb: float
    memory_sufficient: bool
    storage_sufficient: bool
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_compatible": self.is_compatible,
            "confidence_level": self.confidence_level,
            "required_memory_gb": self.required_memory_gb,
            "available_memory_gb": self.available_memory_gb,
            "memory_sufficient": self.memory_sufficient,
            "storage_sufficient": self.storage_sufficient,
            "warnings": list(self.warnings),
        }
