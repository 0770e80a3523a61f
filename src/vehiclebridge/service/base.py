"""
vehiclebridge.service.base - Cloud Data Service Contract
==========================================================

The public contract of the bridge. Callers program against this ABC; the
concrete VehicleDataService binds it to a VehicleStore and a MessageBroker.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vehiclebridge.core.models import Car, CarBrand
from vehiclebridge.service.streams import QueryStream


class CloudDataService(ABC):
    """Publishes vehicle readings and streams them back by brand."""

    @abstractmethod
    async def push_data(self, car: Car) -> None:
        """Publish one vehicle reading to the event topic.

        Returns once the broker client accepted the message. This is not a
        delivery guarantee.

        Raises:
            BrokerError: Or any other fault from the broker client,
                unchanged.
        """

    @abstractmethod
    def get_cars_by_brand(self, brand: str) -> QueryStream[Car]:
        """Stream the cars of one brand.

        Raises:
            DataNotFoundError: During iteration, if nothing matched or the
                store failed.
        """

    @abstractmethod
    def get_all_brands(self) -> QueryStream[CarBrand]:
        """Stream the distinct brands in the store.

        Raises:
            DataNotFoundError: During iteration, if the store is empty or
                failed.
        """
