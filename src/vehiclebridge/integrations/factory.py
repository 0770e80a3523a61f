"""
vehiclebridge.integrations.factory - Backend Factories
========================================================

Maps the backend selectors in BridgeConfig to concrete implementations.
This is the deployment-time switch between alternative backends; every
choice satisfies the same VehicleStore / MessageBroker interface.

    store_backend   "memory" → InMemoryVehicleStore
                    "cosmos" → CosmosVehicleStore
    broker_backend  "memory" → InMemoryBroker
                    "kafka"  → KafkaBroker

Usage:
    >>> store = create_vehicle_store(config)
    >>> broker = create_message_broker(config)
"""

from __future__ import annotations

from vehiclebridge.core.config import BridgeConfig
from vehiclebridge.core.enums import BrokerBackend, StoreBackend
from vehiclebridge.core.exceptions import ConfigurationError
from vehiclebridge.infrastructure.vehicle_store import VehicleStore
from vehiclebridge.integrations.broker.base import MessageBroker


def create_vehicle_store(config: BridgeConfig) -> VehicleStore:
    """Create the document store selected by ``config.store_backend``.

    Raises:
        ConfigurationError: If the backend is unknown, or its settings are
            incomplete (e.g. cosmos without endpoint/key).
    """
    backend = config.store_backend

    if backend == StoreBackend.MEMORY:
        from vehiclebridge.infrastructure.vehicle_store import InMemoryVehicleStore
        return InMemoryVehicleStore()

    if backend == StoreBackend.COSMOS:
        from vehiclebridge.infrastructure.cosmos_store import CosmosVehicleStore
        return CosmosVehicleStore(config.cosmos)

    raise ConfigurationError(
        message=f"Unknown store backend: '{backend}'",
        error_code="UNKNOWN_STORE_BACKEND",
        details={"available": [b.value for b in StoreBackend]},
    )


def create_message_broker(config: BridgeConfig) -> MessageBroker:
    """Create the message broker selected by ``config.broker_backend``.

    Raises:
        ConfigurationError: If the backend is unknown.
    """
    backend = config.broker_backend

    if backend == BrokerBackend.MEMORY:
        from vehiclebridge.integrations.broker.memory import InMemoryBroker
        return InMemoryBroker()

    if backend == BrokerBackend.KAFKA:
        from vehiclebridge.integrations.broker.kafka import KafkaBroker
        return KafkaBroker(config.kafka)

    raise ConfigurationError(
        message=f"Unknown broker backend: '{backend}'",
        error_code="UNKNOWN_BROKER_BACKEND",
        details={"available": [b.value for b in BrokerBackend]},
    )
