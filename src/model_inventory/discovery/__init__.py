"""Model discovery across provider directory layouts."""

from .aggregator import discover_models
from .classifier import classify, derive_name, detect_format, is_model_file
from .providers import lmstudio_dirs, ollama_models_dir
from .scanner import deadline, scan_directory

__all__ = [
    "classify",
    "deadline",
    "derive_name",
    "detect_format",
    "discover_models",
    "is_model_file",
    "lmstudio_dirs",
    "ollama_models_dir",
    "scan_directory",
]
