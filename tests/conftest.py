"""
Shared Test Fixtures for the Vehicle Bridge
=============================================

Fixtures are organized by layer:

    1. Configuration
    2. Sample data (cars)
    3. Backends (store, broker), connected and ready
    4. Service and facade
"""

from __future__ import annotations

import pytest

from vehiclebridge.core.config import BridgeConfig
from vehiclebridge.core.models import Car
from vehiclebridge.facade import VehicleBridge
from vehiclebridge.infrastructure.vehicle_store import InMemoryVehicleStore
from vehiclebridge.integrations.broker.memory import InMemoryBroker
from vehiclebridge.service.vehicle_data_service import VehicleDataService


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def config():
    """Bridge configuration with in-memory backends."""
    return BridgeConfig()


# =============================================================================
# Sample Data
# =============================================================================

@pytest.fixture
def toyota():
    """A single Toyota reading."""
    return Car(car_id="1", brand="Toyota", model="Corolla", year=2021, color="white")


@pytest.fixture
def sample_cars(toyota):
    """Five readings over three brands, Toyota first."""
    return [
        toyota,
        Car(car_id="2", brand="Honda", model="Civic", year=2019),
        Car(car_id="3", brand="Toyota", model="Yaris", year=2020),
        Car(car_id="4", brand="Ford", model="Focus", year=2018),
        Car(car_id="5", brand="Toyota", model="Prius", year=2022),
    ]


# =============================================================================
# Backends
# =============================================================================

@pytest.fixture
async def store(sample_cars):
    """Connected InMemoryVehicleStore seeded with sample_cars."""
    store = InMemoryVehicleStore(sample_cars)
    await store.connect()
    yield store
    await store.disconnect()


@pytest.fixture
async def empty_store():
    """Connected InMemoryVehicleStore with no documents."""
    store = InMemoryVehicleStore()
    await store.connect()
    yield store
    await store.disconnect()


@pytest.fixture
async def broker():
    """Connected InMemoryBroker."""
    broker = InMemoryBroker()
    await broker.connect()
    yield broker
    await broker.disconnect()


# =============================================================================
# Service and Facade
# =============================================================================

@pytest.fixture
def service(store, broker):
    """VehicleDataService over the seeded store and the in-memory broker."""
    return VehicleDataService(store=store, broker=broker)


@pytest.fixture
def bridge(config, sample_cars):
    """Uninitialized VehicleBridge with a seeded in-memory store."""
    return VehicleBridge(config, store=InMemoryVehicleStore(sample_cars))
