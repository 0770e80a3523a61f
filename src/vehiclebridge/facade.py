"""
vehiclebridge.facade - Vehicle Bridge Facade
==============================================

VehicleBridge is the process-level entry point. It builds the backends the
configuration selects (unless they are injected), connects them, and wires
them into a VehicleDataService.

    ┌──────────────────────────────────────────────┐
    │              VehicleBridge (Facade)           │
    │                                               │
    │   ┌───────────────────────────────────────┐   │
    │   │        VehicleDataService              │   │
    │   └──────────┬────────────────┬───────────┘   │
    │              │                │               │
    │   ┌──────────▼─────┐  ┌───────▼──────────┐    │
    │   │  VehicleStore   │  │  MessageBroker    │    │
    │   │ memory | cosmos │  │ memory | kafka    │    │
    │   └────────────────┘  └──────────────────┘    │
    └──────────────────────────────────────────────┘

Usage:
    >>> async with VehicleBridge(load_config()) as bridge:
    ...     await bridge.push_data(car)
    ...     async for car in bridge.get_cars_by_brand("Toyota"):
    ...         ...
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from vehiclebridge.core.config import BridgeConfig
from vehiclebridge.core.exceptions import ConfigurationError
from vehiclebridge.core.models import Car, CarBrand
from vehiclebridge.infrastructure.vehicle_store import VehicleStore
from vehiclebridge.integrations.broker.base import MessageBroker
from vehiclebridge.integrations.factory import create_message_broker, create_vehicle_store
from vehiclebridge.service.streams import QueryStream
from vehiclebridge.service.vehicle_data_service import VehicleDataService


logger = structlog.get_logger()


class VehicleBridge:
    """Top-level facade owning the bridge lifecycle.

    Lifecycle:
        1. ``VehicleBridge(config)``  builds backends from config
        2. ``await initialize()``     connects store, then broker
        3. push / query
        4. ``await shutdown()``       disconnects broker, then store

    Args:
        config: Bridge configuration. Defaults to ``BridgeConfig()``.
        store: Optional store to use instead of the configured one.
        broker: Optional broker to use instead of the configured one.

    Raises:
        ConfigurationError: If a configured backend cannot be built.
    """

    def __init__(
        self,
        config: Optional[BridgeConfig] = None,
        *,
        store: Optional[VehicleStore] = None,
        broker: Optional[MessageBroker] = None,
    ) -> None:
        self._config = config or BridgeConfig()
        self._store = store or create_vehicle_store(self._config)
        self._broker = broker or create_message_broker(self._config)
        self._service = VehicleDataService(store=self._store, broker=self._broker)

        self._initialized = False
        self._logger = logger.bind(component="vehicle_bridge")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> BridgeConfig:
        return self._config

    @property
    def store(self) -> VehicleStore:
        return self._store

    @property
    def broker(self) -> MessageBroker:
        return self._broker

    @property
    def service(self) -> VehicleDataService:
        return self._service

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # =========================================================================
    # Lifecycle Management
    # =========================================================================

    async def initialize(self) -> None:
        """Connect the store and the broker. Idempotent.

        If the broker fails to connect, the store is disconnected again
        before the error propagates.
        """
        if self._initialized:
            self._logger.debug("bridge_already_initialized")
            return

        self._logger.info(
            "bridge_initializing",
            store_backend=self._config.store_backend.value,
            broker_backend=self._config.broker_backend.value,
        )

        await self._store.connect()
        try:
            await self._broker.connect()
        except BaseException:
            await self._store.disconnect()
            raise

        self._initialized = True
        self._logger.info("bridge_initialized")

    async def shutdown(self) -> None:
        """Disconnect the broker, then the store. Idempotent."""
        if not self._initialized:
            self._logger.debug("bridge_not_initialized_skipping_shutdown")
            return

        self._logger.info("bridge_shutting_down")
        try:
            await self._broker.disconnect()
        finally:
            await self._store.disconnect()
            self._initialized = False
        self._logger.info("bridge_shutdown_complete")

    async def __aenter__(self) -> VehicleBridge:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.shutdown()

    # =========================================================================
    # Bridge Operations
    # =========================================================================

    async def push_data(self, car: Car) -> None:
        """See ``VehicleDataService.push_data``."""
        self._ensure_initialized()
        await self._service.push_data(car)

    def get_cars_by_brand(self, brand: str) -> QueryStream[Car]:
        """See ``VehicleDataService.get_cars_by_brand``."""
        self._ensure_initialized()
        return self._service.get_cars_by_brand(brand)

    def get_all_brands(self) -> QueryStream[CarBrand]:
        """See ``VehicleDataService.get_all_brands``."""
        self._ensure_initialized()
        return self._service.get_all_brands()

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise ConfigurationError(
                message="VehicleBridge is not initialized. Call initialize() first.",
                error_code="BRIDGE_NOT_INITIALIZED",
            )
