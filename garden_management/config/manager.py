"""Configuration management - single source of truth for typed configuration."""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Type, TypeVar

from garden_management.infrastructure.exceptions import ConfigurationError

from .loader import ConfigurationLoader
from .schemas import AppConfig, LoggingConfig, MessagingConfig, validate_config

T = TypeVar("T")
logger = logging.getLogger(__name__)


class ConfigurationManager:
    """
    Lazily loads and caches the application configuration.

    Configuration is read once (defaults, optional JSON file, environment
    overrides), validated into ``AppConfig`` and shared read-only afterwards.
    """

    _SECTIONS: Dict[Type[Any], str] = {
        LoggingConfig: "logging",
        MessagingConfig: "messaging",
    }

    def __init__(self, config_file: Optional[str] = None,
                 loader: Optional[ConfigurationLoader] = None):
        self._config_file = config_file
        self._loader = loader or ConfigurationLoader()
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        data = self._loader.load_configuration(self._config_file)
        config = validate_config(data)
        logger.debug("Configuration loaded for environment %s", config.environment)
        return config

    def get_typed(self, config_type: Type[T]) -> T:
        """Get a typed configuration section."""
        if config_type is AppConfig:
            return self.app_config  # type: ignore[return-value]
        section = self._SECTIONS.get(config_type)
        if section is None:
            raise ConfigurationError(f"Unknown configuration type: {config_type.__name__}")
        return getattr(self.app_config, section)

    def reload(self) -> AppConfig:
        """Discard the cached configuration and load it again."""
        with self._lock:
            self._app_config = None
        return self.app_config


_manager: Optional[ConfigurationManager] = None
_manager_lock = threading.Lock()


def get_config_manager(config_file: Optional[str] = None) -> ConfigurationManager:
    """Return the process-wide configuration manager, creating it on first use."""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = ConfigurationManager(config_file)
        return _manager


def reset_config_manager() -> None:
    """Forget the process-wide configuration manager (for testing)."""
    global _manager
    with _manager_lock:
        _manager = None
