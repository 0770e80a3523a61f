"""
vehiclebridge.core.messages - Broker Message Envelope
=======================================================

Every car pushed through the bridge is wrapped in a BrokerMessage before it
reaches the broker client. The envelope carries the destination topic so the
broker client never has to guess where a payload goes.

    ┌─────────────────────────────────────────────┐
    │  BrokerMessage (envelope)                    │
    │  ├── message_id:   Unique identifier         │
    │  ├── destination:  Topic name                │
    │  ├── payload:      The Car                   │
    │  ├── headers:      Transport headers         │
    │  └── timestamp:    When it was created       │
    └─────────────────────────────────────────────┘

Usage:
    >>> msg = BrokerMessage.for_car(car, destination="myeventhub")
    >>> await broker.send(msg)
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from vehiclebridge.core.models import Car


def _generate_message_id() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class BrokerMessage(BaseModel):
    """Transport envelope for one car handed to the message broker.

    Attributes:
        message_id: Unique identifier (UUID4), sent as a header so consumers
            can de-duplicate at-least-once deliveries.
        destination: Topic the message is addressed to.
        payload: The car being published. Never modified by the bridge.
        headers: String headers attached to the transport record.
        timestamp: Creation time of the envelope (UTC).
    """

    model_config = ConfigDict(frozen=True)

    message_id: str = Field(
        default_factory=_generate_message_id,
        description="Unique message identifier (UUID4)",
    )
    destination: str = Field(
        min_length=1,
        description="Topic the message is addressed to",
    )
    payload: Car = Field(
        description="The car being published",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Transport headers",
    )
    timestamp: datetime = Field(
        default_factory=_now,
        description="When this envelope was created (UTC)",
    )

    @classmethod
    def for_car(cls, car: Car, destination: str) -> BrokerMessage:
        """Build an envelope for ``car`` tagged with ``destination``.

        The message id and content type are copied into ``headers`` so they
        survive transports that only forward the raw value plus headers.
        """
        message_id = _generate_message_id()
        return cls(
            message_id=message_id,
            destination=destination,
            payload=car,
            headers={
                "message_id": message_id,
                "content_type": "application/json",
            },
        )

    def payload_bytes(self) -> bytes:
        """Serialize the payload to UTF-8 JSON for the wire."""
        return self.payload.model_dump_json().encode("utf-8")

    def header_items(self) -> list[tuple[str, bytes]]:
        """Headers in the ``(key, bytes)`` form Kafka clients expect."""
        return [(key, value.encode("utf-8")) for key, value in self.headers.items()]
