"""Pick the newest machine folder or log file inside a directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


def newest_entry(entries: Iterable[Path]) -> Path | None:
    """Return the entry with the latest modification time.

    Entries are ordered by name, then stably by mtime; ties resolve to the last one.
    A single entry is returned without being stat'ed.
    """

    candidates = sorted(entries, key=lambda path: path.name)
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]
    ordered = sorted(candidates, key=lambda path: path.stat().st_mtime_ns)
    return ordered[-1]


def resolve_machine_name(machines_dir: Path) -> str | None:
    """Return the machine subdirectory name to read logs from, or None if there is none."""

    chosen = newest_entry(path for path in machines_dir.iterdir() if path.is_dir())
    return None if chosen is None else chosen.name


def resolve_most_recent_file(directory: Path, suffix: str | None = None) -> str | None:
    """Return the name of the newest regular file, optionally filtered by suffix."""

    normalized_suffix = suffix.lower() if suffix else None
    candidates = (
        path
        for path in directory.iterdir()
        if path.is_file() and (normalized_suffix is None or path.suffix.lower() == normalized_suffix)
    )
    chosen = newest_entry(candidates)
    return None if chosen is None else chosen.name
