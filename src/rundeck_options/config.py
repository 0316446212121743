"""YAML configuration loading.

Example::

    server:
      host: 0.0.0.0
      port: 8081
    search:
      url: http://nexus-es:9200
      index: components
      timeout: 30
    snapshots_repository: snapshots
    storage:
      repositories:
        releases: {format: maven2, path: /srv/maven/releases}
        snapshots: {format: maven2, path: /srv/maven/snapshots}
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """The configuration file is unreadable or malformed."""


def _require_int(data: Dict[str, Any], section: str, key: str) -> None:
    value = (data.get(section) or {}).get(key)
    if value is None:
        return
    try:
        int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{section}.{key} must be an integer, got {value!r}") from e


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the YAML config file; an absent path yields an empty config.

    Raises:
        ConfigError: the file is missing, unparsable or not a mapping.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")

    for section in ("server", "search", "storage"):
        if data.get(section) is not None and not isinstance(data[section], dict):
            raise ConfigError(f"{section} must be a mapping")
    _require_int(data, "server", "port")
    _require_int(data, "search", "timeout")

    repositories = ((data.get("storage") or {}).get("repositories")) or {}
    if not isinstance(repositories, dict):
        raise ConfigError("storage.repositories must be a mapping of name -> {format, path}")
    for name, entry in repositories.items():
        if not isinstance(entry, dict) or not entry.get("path"):
            raise ConfigError(f"storage.repositories.{name} needs a path")

    logger.info("Loaded config from: %s", config_path)
    return data
