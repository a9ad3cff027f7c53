"""Discovery package for locating the current log file of each component."""

from log_export.discover.latest import newest_entry, resolve_machine_name, resolve_most_recent_file
from log_export.discover.resolver import FolderChooser, LogPathResolver, ResolvedLogPath
from log_export.discover.settings_reader import LOG_DIR_KEY, read_log_dir

__all__ = [
    "newest_entry",
    "resolve_machine_name",
    "resolve_most_recent_file",
    "FolderChooser",
    "LogPathResolver",
    "ResolvedLogPath",
    "LOG_DIR_KEY",
    "read_log_dir",
]
