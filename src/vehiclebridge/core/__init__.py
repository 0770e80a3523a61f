"""
vehiclebridge.core - Foundation Layer
======================================

The building blocks every other package depends on:

    - config:          BridgeConfig, CosmosConfig, KafkaConfig, load_config
    - enums:           StoreBackend, BrokerBackend, LogFormat
    - models:          Car, CarBrand
    - messages:        BrokerMessage envelope
    - exceptions:      Structured exception hierarchy
    - logging_config:  structlog setup

Dependency Rule:
    core/ depends on NOTHING else in the vehiclebridge package.
"""

from vehiclebridge.core.config import BridgeConfig, CosmosConfig, KafkaConfig, load_config
from vehiclebridge.core.enums import BrokerBackend, LogFormat, StoreBackend
from vehiclebridge.core.exceptions import (
    BrokerError,
    ConfigurationError,
    DataNotFoundError,
    StoreError,
    VehicleBridgeError,
)
from vehiclebridge.core.logging_config import configure_logging
from vehiclebridge.core.messages import BrokerMessage
from vehiclebridge.core.models import Car, CarBrand

__all__ = [
    # Config
    "BridgeConfig",
    "CosmosConfig",
    "KafkaConfig",
    "load_config",
    "configure_logging",
    # Enums
    "StoreBackend",
    "BrokerBackend",
    "LogFormat",
    # Models
    "Car",
    "CarBrand",
    "BrokerMessage",
    # Exceptions
    "VehicleBridgeError",
    "ConfigurationError",
    "StoreError",
    "BrokerError",
    "DataNotFoundError",
]
