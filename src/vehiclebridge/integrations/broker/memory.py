"""
vehiclebridge.integrations.broker.memory - In-Memory Message Broker
=====================================================================

A MessageBroker that keeps every accepted message in a per-topic list.
Used for local development and as the default broker in tests.

Testing Support:
    - ``sent_count`` and ``messages(topic)`` expose what was handed off.
    - ``set_should_fail()`` makes the next sends raise BrokerError.
"""

from __future__ import annotations

from typing import Optional

import structlog

from vehiclebridge.core.exceptions import BrokerError
from vehiclebridge.core.messages import BrokerMessage
from vehiclebridge.integrations.broker.base import MessageBroker


logger = structlog.get_logger()


class InMemoryBroker(MessageBroker):
    """In-memory message broker for development and testing.

    Example:
        >>> broker = InMemoryBroker()
        >>> await broker.connect()
        >>> await broker.send(BrokerMessage.for_car(car, "myeventhub"))
        >>> broker.messages("myeventhub")[0].payload == car
        True
    """

    def __init__(self) -> None:
        self._topics: dict[str, list[BrokerMessage]] = {}
        self._connected: bool = False
        self._sent_count: int = 0
        self._failure: Optional[tuple[str, str]] = None
        self._logger = logger.bind(component="message_broker", impl="in_memory")

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def sent_count(self) -> int:
        """Number of messages accepted since the broker was connected."""
        return self._sent_count

    def messages(self, topic: Optional[str] = None) -> list[BrokerMessage]:
        """Accepted messages for ``topic``, or for every topic if None."""
        if topic is not None:
            return list(self._topics.get(topic, []))
        return [message for queue in self._topics.values() for message in queue]

    def set_should_fail(
        self,
        should_fail: bool,
        message: str = "Simulated broker failure",
        error_code: str = "SIMULATED_FAILURE",
    ) -> None:
        """Make subsequent ``send()`` calls raise a BrokerError."""
        if should_fail:
            self._failure = (message, error_code)
        else:
            self._failure = None

    async def connect(self) -> None:
        self._topics.clear()
        self._sent_count = 0
        self._connected = True
        self._logger.info("message_broker_connected")

    async def disconnect(self) -> None:
        self._connected = False
        self._logger.info("message_broker_disconnected")

    async def send(self, message: BrokerMessage) -> None:
        if not self._connected:
            raise BrokerError(
                message="Message broker is not connected. Call connect() first.",
                destination=message.destination,
                error_code="BROKER_NOT_CONNECTED",
            )
        if self._failure is not None:
            failure_message, error_code = self._failure
            raise BrokerError(
                message=failure_message,
                destination=message.destination,
                error_code=error_code,
            )

        self._topics.setdefault(message.destination, []).append(message)
        self._sent_count += 1
        self._logger.debug(
            "message_sent",
            destination=message.destination,
            message_id=message.message_id,
            car_id=message.payload.car_id,
        )
