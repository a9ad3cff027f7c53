"""Path and filesystem helper functions."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4


def ensure_directory(path: Path) -> Path:
    """Create the directory if it does not exist and return it."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_temp_path(target_path: Path) -> Path:
    """Create a temp path in the target directory for atomic replacement."""

    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"
