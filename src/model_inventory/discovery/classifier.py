from __future__ import annotations

import re
from pathlib import Path, PurePath

from model_inventory.core.types import LocalModel, ModelSource

_MODEL_SUFFIXES = (".gguf", ".bin", ".safetensors")
_FORMATS = {
    ".gguf": "GGUF",
    ".bin": "BIN",
    ".safetensors": "SafeTensors",
}
# Ollama stores weights under a fixed file name.
_OLLAMA_WEIGHTS_NAME = "model"
_MANIFEST_MARKERS = ("/manifests/", "\\manifests\\")
_SEPARATORS = re.compile(r"[\\/]")


def is_model_file(file_name: str, source: ModelSource) -> bool:
    if file_name.endswith(_MODEL_SUFFIXES):
        return True
    return source is ModelSource.OLLAMA and file_name == _OLLAMA_WEIGHTS_NAME


def detect_format(file_name: str) -> str | None:
    for suffix, label in _FORMATS.items():
        if file_name.endswith(suffix):
            return label
    return None


def _file_stem(path: str) -> str:
    name = _SEPARATORS.split(path)[-1]
    return PurePath(name).stem


def derive_name(path: str, source: ModelSource) -> str:
    """Display name for a model file.

    Ollama manifests live under ``manifests/<repository>/<tag>``; those two
    segments become ``repository:tag``. Deeper registry layouts only use the
    first two segments. Everything else is named after the file stem.
    """
    if source is ModelSource.OLLAMA:
        for marker in _MANIFEST_MARKERS:
            if marker not in path:
                continue
            remainder = path.split(marker, 1)[1]
            parts = [part for part in _SEPARATORS.split(remainder) if part]
            if len(parts) >= 2:
                return f"{parts[0]}:{parts[1]}"
            if parts:
                return parts[0]
    return _file_stem(path)


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def classify(path: Path | str, source: ModelSource) -> LocalModel | None:
    path = Path(path)
    file_name = path.name
    if not file_name or not is_model_file(file_name, source):
        return None
    path_str = str(path)
    return LocalModel(
        name=derive_name(path_str, source),
        path=path_str,
        size_bytes=_file_size(path),
        source=source,
        format=detect_format(file_name),
    )
