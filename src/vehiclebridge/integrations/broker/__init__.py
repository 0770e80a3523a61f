"""
vehiclebridge.integrations.broker - Outbound Message Brokers
==============================================================

    MessageBroker (ABC)
        ├── InMemoryBroker   (development/testing)
        └── KafkaBroker      (aiokafka; Apache Kafka or Azure Event Hubs)

KafkaBroker lives in its own module so aiokafka is only imported when the
kafka backend is selected:
    from vehiclebridge.integrations.broker.kafka import KafkaBroker
"""

from vehiclebridge.integrations.broker.base import MessageBroker
from vehiclebridge.integrations.broker.memory import InMemoryBroker

__all__ = [
    "MessageBroker",
    "InMemoryBroker",
]
