"""Stage log copies, bundle them into a ZIP archive, and remove the copies."""

from __future__ import annotations

import logging
import os
import shutil
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Literal, Sequence

from log_export.utils.paths import atomic_temp_path
from log_export.utils.time_utils import filename_timestamp

LOGGER = logging.getLogger(__name__)

CompressionName = Literal["deflated", "stored", "bzip2", "lzma"]

_COMPRESSION_METHODS: dict[str, int] = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
    "bzip2": zipfile.ZIP_BZIP2,
    "lzma": zipfile.ZIP_LZMA,
}


def archive_name(prefix: str = "export", timestamp: datetime | None = None) -> str:
    """Return `<prefix>_<timestamp>.zip` using a filename-safe ISO timestamp."""

    return f"{prefix}_{filename_timestamp(timestamp)}.zip"


def unused_archive_path(archive_path: Path) -> Path:
    """Return archive_path, or `<stem>-<n><suffix>` when that name is already taken."""

    candidate = archive_path
    counter = 1
    while candidate.exists():
        candidate = archive_path.with_name(f"{archive_path.stem}-{counter}{archive_path.suffix}")
        counter += 1
    return candidate


def stage_file(source: Path, destination_dir: Path, *, name_prefix: str | None = None) -> Path:
    """Copy a log file into the destination directory and return the copy's path.

    Staged copies are deleted after archiving, so an existing file is never overwritten.
    """

    target_name = f"{name_prefix}_{source.name}" if name_prefix else source.name
    target = destination_dir / target_name
    if target.exists():
        raise FileExistsError(f"Refusing to overwrite existing file {target} while staging {source}.")
    shutil.copy2(source, target)
    return target


def write_archive(
    files: Sequence[Path],
    archive_path: Path,
    compression: CompressionName = "deflated",
) -> Path:
    """Write files into a ZIP archive atomically; entries use bare file names."""

    if not files:
        raise ValueError("Cannot build an archive without staged files.")

    archive_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = atomic_temp_path(archive_path)
    try:
        with zipfile.ZipFile(temp_path, "w", compression=_COMPRESSION_METHODS[compression]) as bundle:
            for file_path in files:
                bundle.write(file_path, arcname=file_path.name)
        os.replace(temp_path, archive_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return archive_path


def remove_staged_files(files: Sequence[Path], logger: logging.Logger | None = None) -> list[Path]:
    """Delete staged copies and return the ones actually removed."""

    effective_logger = logger or LOGGER
    removed: list[Path] = []
    for file_path in files:
        try:
            file_path.unlink()
        except FileNotFoundError:
            effective_logger.warning("archive.staged_file_missing path=%s", file_path)
            continue
        removed.append(file_path)
    return removed
