"""Export package for staging, archiving and cleaning up log copies."""

from log_export.export.archive import (
    archive_name,
    remove_staged_files,
    stage_file,
    unused_archive_path,
    write_archive,
)
from log_export.export.pipeline import ExportRunOptions, ExportRunResult, run_export

__all__ = [
    "archive_name",
    "remove_staged_files",
    "stage_file",
    "unused_archive_path",
    "write_archive",
    "ExportRunOptions",
    "ExportRunResult",
    "run_export",
]
