"""Read a component's JSON log settings file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from log_export.errors import SettingsFileError

LOGGER = logging.getLogger(__name__)

LOG_DIR_KEY = "logDir"


def read_log_dir(settings_file: Path, logger: logging.Logger | None = None) -> Path:
    """Return the `logDir` value from a JSON settings file.

    The file is re-read on every call.
    """

    effective_logger = logger or LOGGER
    try:
        payload = json.loads(settings_file.read_text(encoding="utf-8-sig"))
    except OSError as exc:
        raise SettingsFileError(f"Cannot read settings file {settings_file}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SettingsFileError(f"Settings file {settings_file} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise SettingsFileError(f"Settings file {settings_file} must contain a JSON object.")

    value = payload.get(LOG_DIR_KEY)
    if not isinstance(value, str) or value.strip() == "":
        raise SettingsFileError(f"Settings file {settings_file} has no usable '{LOG_DIR_KEY}' value.")

    log_dir = Path(value.strip())
    effective_logger.debug("settings_reader.log_dir settings_file=%s log_dir=%s", settings_file, log_dir)
    return log_dir
