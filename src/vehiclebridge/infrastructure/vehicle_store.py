"""
vehiclebridge.infrastructure.vehicle_store - Document Store Interface
======================================================================

This module defines the contract the bridge consumes from the document
store, plus an in-memory implementation for development and tests.

Architecture Context:
    The bridge never builds queries. It asks the store for one of two lazy
    sequences and decorates them with its own fault and empty-result policy:

    ┌──────────────────────┐  find_by_brand(brand)   ┌───────────────────┐
    │ VehicleDataService    │ ──────────────────────→ │   VehicleStore     │
    │                       │ ←── AsyncIterator[Car]  │                   │
    │                       │  find_distinct_brands() │   ┌────────────┐  │
    │                       │ ──────────────────────→ │   │ documents  │  │
    │                       │ ←─ AsyncIterator[Brand] │   └────────────┘  │
    └──────────────────────┘                         └───────────────────┘

Fault Contract:
    Implementations raise StoreError, and only StoreError, for backend
    failures. A failure may happen before the first item or after partial
    results. Closing an iterator early (``aclose()``) must release any
    backend cursor it holds.

Implementations:
    - VehicleStore (ABC):       Abstract interface
    - InMemoryVehicleStore:     Dict-based, for development/testing
    - CosmosVehicleStore:       Azure Cosmos DB (see cosmos_store.py)
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable, Iterable
from typing import TypeVar

import structlog

from vehiclebridge.core.exceptions import StoreError
from vehiclebridge.core.models import Car, CarBrand


logger = structlog.get_logger()

T = TypeVar("T")


# =============================================================================
# Abstract Base Class
# =============================================================================
class VehicleStore(ABC):
    """Abstract interface for the vehicle document store.

    Both query methods return async iterators without awaiting anything, so
    the backend query starts only when the caller begins iterating.

    Usage:
        >>> store: VehicleStore = InMemoryVehicleStore()
        >>> await store.connect()
        >>> async for car in store.find_by_brand("Toyota"):
        ...     print(car.car_id)
    """

    @abstractmethod
    async def connect(self) -> None:
        """Acquire the backend connection.

        Raises:
            StoreError: If the backend cannot be reached.
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the backend connection. Safe to call more than once."""

    @abstractmethod
    def find_by_brand(self, brand: str) -> AsyncIterator[Car]:
        """Stream every car whose brand equals ``brand`` exactly.

        Args:
            brand: The brand to match. Not normalized.

        Returns:
            An async iterator over matching cars, in store order.

        Raises:
            StoreError: During iteration, if the backend fails.
        """

    @abstractmethod
    def find_distinct_brands(self) -> AsyncIterator[CarBrand]:
        """Stream each brand present in the store exactly once.

        Raises:
            StoreError: During iteration, if the backend fails.
        """


# =============================================================================
# In-Memory Implementation
# =============================================================================
class InMemoryVehicleStore(VehicleStore):
    """In-memory vehicle store for development and testing.

    Cars are kept in insertion order, keyed by ``car_id``. Queries yield to
    the event loop between items so that concurrent consumers interleave the
    way they would against a real backend.

    Testing Support:
        - ``set_should_fail()`` makes queries raise StoreError, optionally
          after a number of items have been produced (mid-stream failure).
        - ``query_count`` counts how many queries were started.
        - ``open_cursors`` counts iterators that started and have not been
          exhausted or closed yet.

    Example:
        >>> store = InMemoryVehicleStore([Car(car_id="1", brand="Toyota")])
        >>> await store.connect()
        >>> [c.car_id async for c in store.find_by_brand("Toyota")]
        ['1']
    """

    def __init__(self, cars: Iterable[Car] = ()) -> None:
        self._cars: dict[str, Car] = {car.car_id: car for car in cars}
        self._connected: bool = False
        self._should_fail: bool = False
        self._failure_message: str = "Simulated store failure"
        self._fail_after: int = 0
        self._query_count: int = 0
        self._open_cursors: int = 0
        self._logger = logger.bind(component="vehicle_store", impl="in_memory")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def query_count(self) -> int:
        """Number of queries started since the store was created."""
        return self._query_count

    @property
    def open_cursors(self) -> int:
        """Number of query iterators currently in progress."""
        return self._open_cursors

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def connect(self) -> None:
        self._connected = True
        self._logger.info("vehicle_store_connected", documents=len(self._cars))

    async def disconnect(self) -> None:
        self._connected = False
        self._logger.info("vehicle_store_disconnected")

    # =========================================================================
    # Data Management (not part of the VehicleStore contract)
    # =========================================================================

    async def save(self, car: Car) -> None:
        """Insert or replace a car, keyed by ``car_id``."""
        self._cars[car.car_id] = car
        self._logger.debug("car_saved", car_id=car.car_id, brand=car.brand)

    async def count(self) -> int:
        return len(self._cars)

    def set_should_fail(
        self,
        should_fail: bool,
        message: str = "Simulated store failure",
        after: int = 0,
    ) -> None:
        """Configure failure simulation for subsequent queries.

        Args:
            should_fail: Whether queries should raise StoreError.
            message: Message carried by the raised StoreError.
            after: Number of items each query yields before failing.
        """
        self._should_fail = should_fail
        self._failure_message = message
        self._fail_after = after

    # =========================================================================
    # Queries
    # =========================================================================

    def find_by_brand(self, brand: str) -> AsyncIterator[Car]:
        return self._stream(
            "find_by_brand",
            lambda: [car for car in self._cars.values() if car.brand == brand],
        )

    def find_distinct_brands(self) -> AsyncIterator[CarBrand]:
        def distinct() -> list[CarBrand]:
            seen: dict[str, CarBrand] = {}
            for car in self._cars.values():
                seen.setdefault(car.brand, CarBrand(brand=car.brand))
            return list(seen.values())

        return self._stream("find_distinct_brands", distinct)

    async def _stream(
        self, operation: str, snapshot: Callable[[], list[T]]
    ) -> AsyncIterator[T]:
        """Yield items from ``snapshot()`` with failure simulation applied.

        The snapshot is taken when iteration starts, not when the query
        method is called.
        """
        self._ensure_connected(operation)
        self._query_count += 1
        self._open_cursors += 1
        try:
            items = snapshot()
            self._logger.debug("query_started", operation=operation, matches=len(items))
            for index, item in enumerate(items):
                if self._should_fail and index >= self._fail_after:
                    break
                await asyncio.sleep(0)
                yield item
            if self._should_fail:
                raise StoreError(
                    message=self._failure_message,
                    operation=operation,
                    error_code="SIMULATED_FAILURE",
                )
        finally:
            self._open_cursors -= 1

    def _ensure_connected(self, operation: str) -> None:
        if not self._connected:
            raise StoreError(
                message="Vehicle store is not connected. Call connect() first.",
                operation=operation,
                error_code="STORE_NOT_CONNECTED",
            )
