"""
vehiclebridge.integrations - External System Integrations
===========================================================

    - broker/:   Outbound message brokers (in-memory, Kafka)
    - factory:   Config-driven construction of the store and broker
"""

from vehiclebridge.integrations.factory import create_message_broker, create_vehicle_store

__all__ = [
    "create_vehicle_store",
    "create_message_broker",
]
