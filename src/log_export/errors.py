"""Exception types raised while locating and exporting logs."""

from __future__ import annotations


class LogExportError(RuntimeError):
    """Base class for failures that abort an export run."""


class SettingsFileError(LogExportError):
    """Raised when a component's log settings file cannot be used."""


class LogLocationError(LogExportError):
    """Raised when a machine folder or log file cannot be found."""


class FolderChoiceError(LogExportError):
    """Raised when no valid data store log folder was chosen."""
