"""I/O helpers for writing generated variant textures."""
from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Dict, Optional

import numpy as np
from PIL import Image

from .utils_image import PixelGrid, grid_to_image


_LOCK_REGISTRY: dict[Path, threading.Lock] = {}
_LOCK_REGISTRY_GUARD = threading.Lock()


def ensure_dir(path: Path) -> Path:
    """Ensure that *path* exists and return it."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def _lock_for(target: Path) -> threading.Lock:
    with _LOCK_REGISTRY_GUARD:
        lock = _LOCK_REGISTRY.get(target)
        if lock is None:
            lock = threading.Lock()
            _LOCK_REGISTRY[target] = lock
    return lock


class SafeFileManager:
    """Write textures atomically below a base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)
        ensure_dir(self.base_dir)

    def resolve(self, path: Path | str) -> Path:
        """Resolve *path* relative to :attr:`base_dir`."""

        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        ensure_dir(candidate.parent)
        return candidate

    def atomic_save(self, image: Image.Image | PixelGrid, path: Path | str) -> Path:
        """Save *image* as PNG through a temporary file and an atomic rename."""

        destination = self.resolve(path)
        if isinstance(image, np.ndarray):
            image = grid_to_image(image)
        temp_path = destination.with_name(f".{destination.name}.tmp")
        with _lock_for(destination):
            image.save(temp_path, format="PNG")
            os.replace(temp_path, destination)
        return destination


def load_stats_table(path: Optional[Path]) -> Dict[str, Dict[str, float]]:
    """Read a JSON object mapping item names to stat fields."""

    if path is None:
        return {}
    with Path(path).open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Stats file {path} must contain a JSON object")
    return {str(name): dict(values) for name, values in data.items()}
