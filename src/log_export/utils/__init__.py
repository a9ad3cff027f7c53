"""Shared utility helpers."""

from log_export.utils.paths import atomic_temp_path, ensure_directory
from log_export.utils.time_utils import filename_timestamp, now_utc

__all__ = [
    "atomic_temp_path",
    "ensure_directory",
    "filename_timestamp",
    "now_utc",
]
