from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from pathlib import Path

from model_inventory.core.errors import ScanError
from model_inventory.core.types import LocalModel, ModelSource
from model_inventory.discovery.classifier import classify

logger = logging.getLogger(__name__)

StopCheck = Callable[[], bool]


def deadline(seconds: float, clock: Callable[[], float] = time.monotonic) -> StopCheck | None:
    """Stop check that trips once `seconds` have elapsed; None for no limit."""
    if seconds <= 0:
        return None
    expires = clock() + seconds

    def expired() -> bool:
        return clock() >= expires

    return expired


def _canonical(path: Path) -> str:
    try:
        return os.path.normcase(str(path.resolve()))
    except (OSError, RuntimeError):
        return os.path.normcase(os.path.abspath(path))


def _list_entries(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as entries:
        return list(entries)


def scan_directory(
    directory: Path | str,
    source: ModelSource,
    *,
    should_stop: StopCheck | None = None,
) -> list[LocalModel]:
    """Collect model artifacts below `directory`.

    A missing root yields an empty list. A root that cannot be listed raises
    ScanError; nested directories that cannot be listed are logged and
    skipped, as are entries whose type cannot be read. Directories are
    visited once by canonical path, so symlink loops terminate.
    """
    root = Path(directory)
    try:
        root_entries = _list_entries(root)
    except FileNotFoundError:
        return []
    except OSError as exc:
        raise ScanError(root, exc.strerror or str(exc)) from exc

    models: list[LocalModel] = []
    visited = {_canonical(root)}
    pending: list[list[os.DirEntry]] = [root_entries]

    while pending:
        if should_stop is not None and should_stop():
            logger.warning("scan of %s stopped early with %d models", root, len(models))
            break
        for entry in pending.pop():
            path = Path(entry.path)
            try:
                is_file = entry.is_file()
                is_dir = not is_file and entry.is_dir()
            except OSError as exc:
                logger.warning("skipping unreadable entry %s: %s", path, exc)
                continue
            if is_file:
                model = classify(path, source)
                if model is not None:
                    models.append(model)
            elif is_dir:
                key = _canonical(path)
                if key in visited:
                    logger.debug("skipping already visited directory %s", path)
                    continue
                visited.add(key)
                try:
                    pending.append(_list_entries(path))
                except OSError as exc:
                    logger.warning("skipping unreadable directory %s: %s", path, exc)

    logger.debug("scanned %s (%s): %d models", root, source.value, len(models))
    return models
