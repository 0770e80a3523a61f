"""
vehiclebridge.core.enums - Type-Safe Enumerations
===================================================

Enumerations used to select backend implementations from configuration.
They replace a runtime profile tag: the deployment chooses which store and
which broker the bridge talks to, and both choices satisfy the same
interfaces.

All enums inherit from both `str` and `Enum`, so they load straight from
environment variables and YAML, and compare equal to plain strings:
    StoreBackend.COSMOS == "cosmos"  # True
"""

from enum import Enum


# =============================================================================
# Store Backend
# =============================================================================
#   MEMORY → infrastructure/vehicle_store.py  (InMemoryVehicleStore)
#   COSMOS → infrastructure/cosmos_store.py   (CosmosVehicleStore)
# =============================================================================
class StoreBackend(str, Enum):
    """Which document store implementation serves the read paths."""

    MEMORY = "memory"   # Process-local store for development and tests
    COSMOS = "cosmos"   # Azure Cosmos DB (SQL API)


# =============================================================================
# Broker Backend
# =============================================================================
#   MEMORY → integrations/broker/memory.py  (InMemoryBroker)
#   KAFKA  → integrations/broker/kafka.py   (KafkaBroker, also Event Hubs)
# =============================================================================
class BrokerBackend(str, Enum):
    """Which message broker implementation serves the publisher path."""

    MEMORY = "memory"   # Records messages in process memory
    KAFKA = "kafka"     # Kafka protocol (Apache Kafka or Azure Event Hubs)


class LogFormat(str, Enum):
    """Renderer used for structured log output."""

    CONSOLE = "console"
    JSON = "json"
