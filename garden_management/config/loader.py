"""Configuration loader - merges defaults, file and environment into one dictionary."""
import copy
import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from garden_management.infrastructure.exceptions import ConfigurationError

from .defaults import DEFAULT_CONFIG, ENVIRONMENT_OVERRIDES
from .utils.env_expansion import expand_config_env_vars

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``base`` with ``override`` merged in, recursing into nested dicts."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


class ConfigurationLoader:
    """Loads raw configuration data from built-in defaults, a JSON file and the environment."""

    def __init__(self, defaults: Optional[Dict[str, Any]] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self._defaults = defaults if defaults is not None else DEFAULT_CONFIG
        self._environ = environ if environ is not None else os.environ

    def load_from_file(self, config_file: str) -> Dict[str, Any]:
        """Read a JSON configuration file."""
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file not found: {config_file}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_file} must contain a JSON object")
        logger.debug("Loaded configuration file %s", config_file)
        return data

    def load_configuration(self, config_file: Optional[str] = None) -> Dict[str, Any]:
        """Build the raw configuration: defaults, then file, then environment."""
        config = copy.deepcopy(self._defaults)
        if config_file:
            config = deep_merge(config, self.load_from_file(config_file))
        config = expand_config_env_vars(config)
        return self.apply_environment_overrides(config)

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply ``GARDEN_*`` environment variables on top of ``config``."""
        result = copy.deepcopy(config)
        for env_name, path in ENVIRONMENT_OVERRIDES.items():
            if env_name not in self._environ:
                continue
            value = _coerce(self._environ[env_name])
            target = result
            *parents, leaf = path.split(".")
            for part in parents:
                target = target.setdefault(part, {})
            target[leaf] = value
            logger.debug("Configuration override %s -> %s", env_name, path)
        return result


def _coerce(raw: str) -> Any:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return raw
