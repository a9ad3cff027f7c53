"""Static per-component discovery metadata built once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Literal, Mapping

from log_export.config import AppSettings, ComponentConfig

Component = Literal["server", "portal", "datastore"]
COMPONENT_ORDER: tuple[Component, ...] = ("server", "portal", "datastore")

DataStoreFolder = Literal["server", "database", "elasticsearch", "tilecache"]
DATASTORE_FOLDERS: tuple[DataStoreFolder, ...] = ("server", "database", "elasticsearch", "tilecache")


@dataclass(frozen=True, slots=True)
class ComponentDescriptor:
    """Resolved discovery rules for one component."""

    component: Component
    install_dir_env: str
    install_dir: Path | None
    settings_file: Path | None
    log_dir: Path | None
    subpaths: tuple[str, ...]
    file_suffix: str

    @property
    def has_folder_choice(self) -> bool:
        return self.component == "datastore"


@dataclass(frozen=True, slots=True)
class ComponentTable:
    """Immutable lookup of descriptors keyed by component."""

    descriptors: Mapping[Component, ComponentDescriptor]

    def __getitem__(self, component: Component) -> ComponentDescriptor:
        return self.descriptors[component]


def parse_datastore_folder(value: str | None) -> DataStoreFolder | None:
    """Return the matching data store folder, or None for absent/unknown values."""

    if value is None:
        return None
    normalized = value.strip().lower()
    for folder in DATASTORE_FOLDERS:
        if folder == normalized:
            return folder
    return None


def _component_config(settings: AppSettings, component: Component) -> ComponentConfig:
    if component == "server":
        return settings.components.server
    if component == "portal":
        return settings.components.portal
    return settings.components.datastore


def build_descriptor(
    component: Component,
    config: ComponentConfig,
    environ: Mapping[str, str],
) -> ComponentDescriptor:
    """Build one descriptor; an unset install variable leaves paths as None."""

    raw_install_dir = environ.get(config.install_dir_env, "").strip()
    install_dir = Path(raw_install_dir) if raw_install_dir else None
    settings_file = None if install_dir is None else install_dir / config.settings_file

    if component == "datastore":
        subpaths: tuple[str, ...] = DATASTORE_FOLDERS
    else:
        subpaths = (config.subpath,)

    return ComponentDescriptor(
        component=component,
        install_dir_env=config.install_dir_env,
        install_dir=install_dir,
        settings_file=settings_file,
        log_dir=config.log_dir,
        subpaths=subpaths,
        file_suffix=config.file_suffix,
    )


def build_component_table(
    settings: AppSettings,
    environ: Mapping[str, str] | None = None,
) -> ComponentTable:
    """Build the descriptor table for every supported component."""

    effective_environ = os.environ if environ is None else environ
    descriptors = {
        component: build_descriptor(component, _component_config(settings, component), effective_environ)
        for component in COMPONENT_ORDER
    }
    return ComponentTable(descriptors=MappingProxyType(descriptors))
