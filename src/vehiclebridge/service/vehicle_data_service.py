"""
vehiclebridge.service.vehicle_data_service - The Vehicle Data Bridge
======================================================================

VehicleDataService is the only place in the package that makes decisions
about faults and empty results. Everything around it is plumbing.

Write Path (push_data):
    Car ──→ BrokerMessage(destination="myeventhub") ──→ MessageBroker.send()
    One send attempt, no retry, no buffering. Broker faults reach the
    caller unchanged. Returning means "handed off", not "delivered".

Read Paths (get_cars_by_brand, get_all_brands):
    VehicleStore query
        → map_errors      StoreError is logged, DataNotFoundError raised
        → on_complete     completion logged (also for an empty result)
        → error_if_empty  zero items raise DataNotFoundError

    The stage order is fixed: a store fault is already a DataNotFoundError
    before it reaches on_complete, so completion is never logged for it,
    and error_if_empty only ever sees a successful completion.

    Callers see either a non-empty sequence or DataNotFoundError. An empty
    result and a failing store look the same from outside.

Concurrency:
    The service keeps no per-call state. Each stream consumption builds its
    own pipeline; any number can run at once on the same service.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any, TypeVar

import structlog

from vehiclebridge.core.exceptions import DataNotFoundError, StoreError
from vehiclebridge.core.messages import BrokerMessage
from vehiclebridge.core.models import Car, CarBrand
from vehiclebridge.infrastructure.vehicle_store import VehicleStore
from vehiclebridge.integrations.broker.base import MessageBroker
from vehiclebridge.service.base import CloudDataService
from vehiclebridge.service.operators import error_if_empty, map_errors, on_complete, on_next
from vehiclebridge.service.streams import QueryStream


logger = structlog.get_logger()

T = TypeVar("T")

# Destination of every pushed car. Fixed: not taken from configuration.
EVENT_HUB_TOPIC = "myeventhub"


class VehicleDataService(CloudDataService):
    """Bridge between vehicle producers, the broker and the document store.

    Args:
        store: Document store serving the read paths. Shared, not owned.
        broker: Message broker serving the write path. Shared, not owned.

    Example:
        >>> service = VehicleDataService(store=store, broker=broker)
        >>> await service.push_data(Car(car_id="1", brand="Toyota"))
        >>> cars = await service.get_cars_by_brand("Toyota").collect()
    """

    def __init__(self, store: VehicleStore, broker: MessageBroker) -> None:
        self._store = store
        self._broker = broker
        self._logger = logger.bind(component="vehicle_data_service")

    # =========================================================================
    # Write Path
    # =========================================================================

    async def push_data(self, car: Car) -> None:
        """Hand ``car`` to the broker, addressed to ``EVENT_HUB_TOPIC``."""
        message = BrokerMessage.for_car(car, destination=EVENT_HUB_TOPIC)
        await self._broker.send(message)
        self._logger.debug(
            "car_pushed",
            car_id=car.car_id,
            destination=EVENT_HUB_TOPIC,
            message_id=message.message_id,
        )

    # =========================================================================
    # Read Paths
    # =========================================================================

    def get_cars_by_brand(self, brand: str) -> QueryStream[Car]:
        """Stream the cars of ``brand``, or fail with DataNotFoundError."""
        return QueryStream(
            lambda: self._guard(
                self._store.find_by_brand(brand),
                completed_event="cars_by_brand_received",
                brand=brand,
            )
        )

    def get_all_brands(self) -> QueryStream[CarBrand]:
        """Stream distinct brands, or fail with DataNotFoundError.

        Each delivered brand is also logged at DEBUG.
        """
        return QueryStream(
            lambda: on_next(
                self._guard(
                    self._store.find_distinct_brands(),
                    completed_event="brands_received",
                ),
                lambda item: self._logger.debug("brand_received", brand=item.brand),
            )
        )

    def _guard(
        self,
        source: AsyncIterator[T],
        completed_event: str,
        **context: Any,
    ) -> AsyncIterator[T]:
        """Apply the read-path stages to a store query, innermost first."""
        mapped = map_errors(source, StoreError, self._not_found_from(context))
        logged = on_complete(mapped, lambda: self._logger.info(completed_event, **context))
        return error_if_empty(logged, DataNotFoundError)

    def _not_found_from(
        self, context: dict[str, Any]
    ) -> Callable[[BaseException], DataNotFoundError]:
        def replace(error: BaseException) -> DataNotFoundError:
            self._logger.error(
                "store_query_failed",
                error=str(error),
                error_type=type(error).__name__,
                error_code=getattr(error, "error_code", None),
                **context,
            )
            return DataNotFoundError()

        return replace
