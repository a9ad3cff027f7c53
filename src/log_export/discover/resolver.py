"""Compose settings, machine and file lookups into one log path per component."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from log_export.components import (
    DATASTORE_FOLDERS,
    Component,
    ComponentDescriptor,
    ComponentTable,
    DataStoreFolder,
    parse_datastore_folder,
)
from log_export.discover.latest import resolve_machine_name, resolve_most_recent_file
from log_export.discover.settings_reader import read_log_dir
from log_export.errors import FolderChoiceError, LogLocationError, SettingsFileError

LOGGER = logging.getLogger(__name__)

FolderChooser = Callable[[Sequence[DataStoreFolder]], DataStoreFolder]


@dataclass(frozen=True, slots=True)
class ResolvedLogPath:
    """The log file selected for one component."""

    component: Component
    machine: str
    subpath: str
    path: Path


class LogPathResolver:
    """Resolve the current log file of each component from a component table."""

    def __init__(
        self,
        table: ComponentTable,
        *,
        chooser: FolderChooser | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._table = table
        self._chooser = chooser
        self._logger = logger or LOGGER

    def log_dir(self, descriptor: ComponentDescriptor) -> Path:
        """Return the configured log directory, reading the settings file if needed."""

        if descriptor.log_dir is not None:
            return descriptor.log_dir
        if descriptor.settings_file is None:
            raise SettingsFileError(
                f"Install directory for {descriptor.component} is not set "
                f"(environment variable {descriptor.install_dir_env})."
            )
        return read_log_dir(descriptor.settings_file, logger=self._logger)

    def choose_folder(self, requested: str | None) -> DataStoreFolder:
        """Use a valid explicit folder, otherwise ask the injected chooser."""

        folder = parse_datastore_folder(requested)
        if folder is not None:
            return folder
        if requested is not None:
            self._logger.warning("resolver.invalid_datastore_folder value=%s", requested)
        if self._chooser is None:
            raise FolderChoiceError(
                "A data store log folder is required; choose one of: " + ", ".join(DATASTORE_FOLDERS)
            )
        chosen = self._chooser(DATASTORE_FOLDERS)
        if chosen not in DATASTORE_FOLDERS:
            raise FolderChoiceError(f"Unsupported data store log folder: {chosen!r}")
        return chosen

    def resolve(self, component: Component, datastore_folder: str | None = None) -> ResolvedLogPath:
        """Return the newest log file for a component."""

        descriptor = self._table[component]
        log_dir = self.log_dir(descriptor)

        try:
            machine = resolve_machine_name(log_dir)
        except OSError as exc:
            raise LogLocationError(f"Cannot list machine folders in {log_dir}: {exc}") from exc
        if machine is None:
            raise LogLocationError(f"No machine folders found in {log_dir}.")

        if descriptor.has_folder_choice:
            subpath: str = self.choose_folder(datastore_folder)
        else:
            subpath = descriptor.subpaths[0]

        log_folder = log_dir / machine / subpath if subpath else log_dir / machine
        try:
            file_name = resolve_most_recent_file(log_folder, descriptor.file_suffix)
        except OSError as exc:
            raise LogLocationError(f"Cannot list log files in {log_folder}: {exc}") from exc
        if file_name is None:
            raise LogLocationError(f"No log files matching {descriptor.file_suffix!r} found in {log_folder}.")

        resolved = ResolvedLogPath(
            component=component,
            machine=machine,
            subpath=subpath,
            path=log_folder / file_name,
        )
        self._logger.info(
            "resolver.resolved component=%s machine=%s subpath=%s path=%s",
            component,
            machine,
            subpath,
            resolved.path,
        )
        return resolved
