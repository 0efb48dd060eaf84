"""Application bootstrap - wires configuration, logging, storage and messaging."""

from __future__ import annotations

from typing import Optional

from garden_management.application.garden.service import Clock, GardenApplicationService
from garden_management.config import AppConfig, ConfigurationManager, get_config_manager
from garden_management.infrastructure.logging.logger import get_logger, setup_logging
from garden_management.infrastructure.messaging.publisher import GardenIntegrationEventPublisher
from garden_management.infrastructure.messaging.transports import (
    MessageTransport,
    create_message_transport,
)
from garden_management.infrastructure.persistence.memory import (
    InMemoryGardenStore,
    InMemoryUnitOfWork,
)


class Application:
    """Application context: builds the garden service once, on first use."""

    def __init__(self,
                 config_path: Optional[str] = None,
                 config_manager: Optional[ConfigurationManager] = None,
                 transport: Optional[MessageTransport] = None,
                 store: Optional[InMemoryGardenStore] = None,
                 clock: Optional[Clock] = None) -> None:
        self.config_path = config_path
        self._config_manager = config_manager
        self._transport = transport
        self._store = store
        self._clock = clock
        self._service: Optional[GardenApplicationService] = None
        self.logger = get_logger(__name__)

    @property
    def config(self) -> AppConfig:
        if self._config_manager is None:
            self._config_manager = get_config_manager(self.config_path)
        return self._config_manager.get_typed(AppConfig)

    def initialize(self) -> GardenApplicationService:
        """Configure logging and build the garden service. Safe to call again."""
        if self._service is not None:
            return self._service

        config = self.config
        setup_logging(config.logging)

        if self._transport is None:
            self._transport = create_message_transport(config.messaging)
        if self._store is None:
            self._store = InMemoryGardenStore()

        store = self._store
        self._service = GardenApplicationService(
            unit_of_work_factory=lambda: InMemoryUnitOfWork(store),
            publisher=GardenIntegrationEventPublisher(self._transport),
            clock=self._clock,
        )
        self.logger.info(
            "Garden management initialized",
            environment=config.environment,
            transport=type(self._transport).__name__,
        )
        return self._service

    @property
    def garden_service(self) -> GardenApplicationService:
        return self.initialize()

    @property
    def transport(self) -> Optional[MessageTransport]:
        return self._transport
