"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_SETTINGS_FILE = Path("configs/log_export.yaml")
SETTINGS_FILE_ENV = "LOG_EXPORT_SETTINGS_FILE"

LOG_SETTINGS_RELPATH = Path("framework/etc/arcgis-logsettings.json")


class ProjectConfig(BaseModel):
    """Project metadata settings."""

    name: str = "log_export"
    env: str = "dev"


class ComponentConfig(BaseModel):
    """Where a single component keeps its install root and log settings."""

    install_dir_env: str
    settings_file: Path = LOG_SETTINGS_RELPATH
    subpath: str = ""
    file_suffix: str = ".log"
    log_dir: Path | None = None


class ServerComponentConfig(ComponentConfig):
    install_dir_env: str = "AGSSERVER"
    subpath: str = "server"


class PortalComponentConfig(ComponentConfig):
    install_dir_env: str = "AGSPORTAL"
    subpath: str = "portal"


class DataStoreComponentConfig(ComponentConfig):
    # Subfolder comes from the data store folder choice.
    install_dir_env: str = "AGSDATASTORE"


class ComponentsConfig(BaseModel):
    """Per-component discovery rules."""

    server: ServerComponentConfig = Field(default_factory=ServerComponentConfig)
    portal: PortalComponentConfig = Field(default_factory=PortalComponentConfig)
    datastore: DataStoreComponentConfig = Field(default_factory=DataStoreComponentConfig)


class ExportConfig(BaseModel):
    """Archive naming and staging behavior."""

    archive_prefix: str = Field(default="export", min_length=1)
    compression: Literal["deflated", "stored", "bzip2", "lzma"] = "deflated"
    prefix_component: bool = True


class LoggingConfig(BaseModel):
    """Process logging options."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Path | None = None


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    components: ComponentsConfig = Field(default_factory=ComponentsConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="LOG_EXPORT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for the settings file."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides.

    A missing YAML file is not an error; built-in defaults apply.
    """

    settings_file = resolve_settings_file(config_file)
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    finally:
        AppSettings._yaml_file_override = None
    return settings
