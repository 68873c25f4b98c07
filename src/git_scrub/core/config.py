"""Loading git-scrub settings from config files and command-line overrides."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from git_scrub.core.errors import ConfigError
from git_scrub.models.settings import ScrubSettings

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "git-scrub"
CONFIG_FILE_NAME = "config.json"


def global_config_path() -> Path:
    """Location of the per-user config file."""
    if "XDG_CONFIG_HOME" in os.environ:
        base = Path(os.environ["XDG_CONFIG_HOME"])
    else:
        base = Path.home() / ".config"
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read a JSON object of settings from ``path``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def load_settings(
    config_file: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    use_global: bool = True,
) -> ScrubSettings:
    """Build settings from, in increasing priority: defaults, the global config
    file, ``config_file`` and ``overrides``.

    Override values of None are ignored so unset command-line options don't
    mask config files. A missing global file is fine; a missing
    ``config_file`` is an error.
    """
    merged: Dict[str, Any] = {}

    if use_global:
        global_path = global_config_path()
        if global_path.is_file():
            logger.debug("Loading global config from %s", global_path)
            merged.update(read_config_file(global_path))

    if config_file is not None:
        logger.debug("Loading config from %s", config_file)
        merged.update(read_config_file(Path(config_file)))

    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ScrubSettings(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
