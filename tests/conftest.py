from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path

import pytest

from log_export.components import ComponentTable, build_component_table
from log_export.config import AppSettings, load_settings

SETTINGS_RELPATH = Path("framework/etc/arcgis-logsettings.json")
MACHINE = "GISHOST01.EXAMPLE.COM"
OLDER_LOG = "2026-10-18.log"
NEWER_LOG = "2026-10-19.log"


def touch(path: Path, mtime: float, content: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    os.utime(path, (mtime, mtime))
    return path


def make_dir(path: Path, mtime: float) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    os.utime(path, (mtime, mtime))
    return path


@dataclass
class InstallTree:
    root: Path
    environ: dict[str, str]
    log_dirs: dict[str, Path]

    def log_folder(self, component: str, subpath: str) -> Path:
        return self.log_dirs[component] / MACHINE / subpath


def _write_install(root: Path, component: str, log_dir: Path) -> Path:
    install_dir = root / "install" / component
    settings_file = install_dir / SETTINGS_RELPATH
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    settings_file.write_text(json.dumps({"logDir": str(log_dir), "logLevel": "WARNING"}), encoding="utf-8")
    return install_dir


@pytest.fixture
def install_tree(tmp_path: Path) -> InstallTree:
    """One machine directory per component with an older and a newer log in each log folder."""

    t0 = time.time()
    environ: dict[str, str] = {}
    log_dirs: dict[str, Path] = {}
    layout = {
        "server": ("AGSSERVER", ("server",)),
        "portal": ("AGSPORTAL", ("portal",)),
        "datastore": ("AGSDATASTORE", ("server", "database")),
    }
    for component, (env_name, subpaths) in layout.items():
        log_dir = tmp_path / "logs" / component
        for subpath in subpaths:
            folder = log_dir / MACHINE / subpath
            touch(folder / OLDER_LOG, t0 - 200, content=f"{component} {subpath} older")
            touch(folder / NEWER_LOG, t0 - 20, content=f"{component} {subpath} newer")
        environ[env_name] = str(_write_install(tmp_path, component, log_dir))
        log_dirs[component] = log_dir
    return InstallTree(root=tmp_path, environ=environ, log_dirs=log_dirs)


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return load_settings(config_file=tmp_path / "absent-settings.yaml")


@pytest.fixture
def table(settings: AppSettings, install_tree: InstallTree) -> ComponentTable:
    return build_component_table(settings, environ=install_tree.environ)


@pytest.fixture(autouse=True)
def _reset_root_logging():
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
