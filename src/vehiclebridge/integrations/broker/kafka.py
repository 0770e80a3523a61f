"""
vehiclebridge.integrations.broker.kafka - Kafka Message Broker
================================================================

MessageBroker implementation on top of ``aiokafka``. Works against Apache
Kafka and against the Kafka endpoint of Azure Event Hubs (SASL_SSL with the
connection string as password).

Handoff vs. Delivery:
    ``AIOKafkaProducer.send()`` appends the record to the producer's batch
    buffer and returns a future that resolves when the broker acknowledges
    it. ``KafkaBroker.send()`` awaits only the append, then attaches a
    callback to the delivery future that logs the outcome. A failed
    delivery is therefore logged (``delivery_failed``) and never raised to
    the publisher.

Errors raised while appending (producer closed, buffer full past
``request_timeout_ms``, oversized record) are wrapped in BrokerError.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import structlog
from aiokafka import AIOKafkaProducer
from aiokafka.errors import KafkaError
from aiokafka.helpers import create_ssl_context

from vehiclebridge.core.config import KafkaConfig
from vehiclebridge.core.exceptions import BrokerError
from vehiclebridge.core.messages import BrokerMessage
from vehiclebridge.integrations.broker.base import MessageBroker


logger = structlog.get_logger()


def _producer_kwargs(config: KafkaConfig) -> dict[str, Any]:
    """Translate KafkaConfig into AIOKafkaProducer keyword arguments."""
    kwargs: dict[str, Any] = {
        "bootstrap_servers": config.bootstrap_servers,
        "client_id": config.client_id,
        "acks": "all" if config.acks == "all" else int(config.acks),
        "request_timeout_ms": config.request_timeout_ms,
        "security_protocol": config.security_protocol,
    }
    if config.security_protocol in ("SSL", "SASL_SSL"):
        kwargs["ssl_context"] = create_ssl_context()
    if config.sasl_mechanism:
        kwargs["sasl_mechanism"] = config.sasl_mechanism
        kwargs["sasl_plain_username"] = config.sasl_username
        kwargs["sasl_plain_password"] = config.sasl_password
    return kwargs


class KafkaBroker(MessageBroker):
    """Message broker backed by an ``AIOKafkaProducer``.

    Args:
        config: Producer settings.
        producer: An already-built producer (or any object with async
            ``start``/``stop``/``send``). When omitted, one is created from
            ``config`` in ``connect()``.
    """

    def __init__(self, config: KafkaConfig, producer: Optional[Any] = None) -> None:
        self._config = config
        self._producer: Optional[Any] = producer
        self._started: bool = False
        self._logger = logger.bind(
            component="message_broker",
            impl="kafka",
            bootstrap_servers=config.bootstrap_servers,
        )

    @property
    def is_connected(self) -> bool:
        return self._started

    async def connect(self) -> None:
        """Start the producer and fetch cluster metadata.

        Raises:
            BrokerError: If no bootstrap server can be reached.
        """
        if self._started:
            return
        if self._producer is None:
            self._producer = AIOKafkaProducer(**_producer_kwargs(self._config))

        try:
            await self._producer.start()
        except KafkaError as exc:
            raise BrokerError(
                message=f"Cannot start Kafka producer: {exc}",
                error_code="BROKER_CONNECT_FAILED",
                details={"bootstrap_servers": self._config.bootstrap_servers},
            ) from exc

        self._started = True
        self._logger.info("message_broker_connected")

    async def disconnect(self) -> None:
        """Flush pending records and stop the producer."""
        if not self._started:
            return
        self._started = False
        await self._producer.stop()
        self._logger.info("message_broker_disconnected")

    async def send(self, message: BrokerMessage) -> None:
        if not self._started:
            raise BrokerError(
                message="Message broker is not connected. Call connect() first.",
                destination=message.destination,
                error_code="BROKER_NOT_CONNECTED",
            )

        try:
            delivery = await self._producer.send(
                message.destination,
                value=message.payload_bytes(),
                headers=message.header_items(),
            )
        except KafkaError as exc:
            raise BrokerError(
                message=f"Failed to hand off message: {exc}",
                destination=message.destination,
                error_code="SEND_FAILED",
                details={"message_id": message.message_id, "kafka_error": type(exc).__name__},
            ) from exc

        delivery.add_done_callback(
            lambda future: self._on_delivery(message, future)
        )
        self._logger.debug(
            "message_handed_off",
            destination=message.destination,
            message_id=message.message_id,
        )

    def _on_delivery(self, message: BrokerMessage, future: asyncio.Future) -> None:
        if future.cancelled():
            self._logger.warning(
                "delivery_cancelled",
                destination=message.destination,
                message_id=message.message_id,
            )
            return

        error = future.exception()
        if error is not None:
            self._logger.error(
                "delivery_failed",
                destination=message.destination,
                message_id=message.message_id,
                error=str(error),
                error_type=type(error).__name__,
            )
            return

        metadata = future.result()
        self._logger.debug(
            "message_delivered",
            destination=message.destination,
            message_id=message.message_id,
            partition=getattr(metadata, "partition", None),
            offset=getattr(metadata, "offset", None),
        )
