"""
vehiclebridge.integrations.broker.base - Message Broker Interface
===================================================================

The contract the publisher path consumes from the message broker.

Handoff Semantics:
    ``send()`` returns as soon as the broker client has accepted the message
    for delivery. It does NOT wait for the broker to acknowledge it. A
    returned ``send()`` therefore means "handed off", never "durably
    delivered". Delivery failures discovered later are the broker client's
    business (logged, not raised to the publisher).

    ┌──────────────────────┐   send(BrokerMessage)   ┌──────────────────┐
    │ VehicleDataService    │ ──────────────────────→ │  MessageBroker    │ ──→ topic
    │   push_data()         │ ←── None | BrokerError  │                  │
    └──────────────────────┘                         └──────────────────┘

Implementations:
    - InMemoryBroker:  Records messages in memory (development/testing)
    - KafkaBroker:     aiokafka producer (Apache Kafka, Azure Event Hubs)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vehiclebridge.core.messages import BrokerMessage


class MessageBroker(ABC):
    """Abstract interface for the outbound message broker.

    Lifecycle:
        broker = KafkaBroker(config)
        await broker.connect()
        await broker.send(message)
        await broker.disconnect()
    """

    @abstractmethod
    async def connect(self) -> None:
        """Start the broker client.

        Raises:
            BrokerError: If the broker cannot be reached.
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Stop the broker client. Safe to call more than once."""

    @abstractmethod
    async def send(self, message: BrokerMessage) -> None:
        """Hand one message off for delivery to ``message.destination``.

        Exactly one send attempt is made; implementations do not retry.

        Args:
            message: The envelope to deliver.

        Raises:
            BrokerError: If the client refuses the message (not connected,
                serialization failure, transport fault during handoff).
        """
