"""
vehiclebridge.service.streams - Restartable Query Streams
===========================================================

QueryStream is what the read paths hand back to callers: a cold, lazy
sequence. Building one performs no I/O. Each ``async for`` over it builds a
fresh pipeline and therefore re-issues the backend query.

Usage:
    >>> stream = service.get_cars_by_brand("Toyota")   # nothing queried yet
    >>> async for car in stream:                       # query #1
    ...     print(car.car_id)
    >>> cars = await stream.collect()                  # query #2

Abandoning a stream:
    Python does not close an async iterator when ``async for`` is left with
    ``break``. To stop backend work deterministically, iterate inside
    ``contextlib.aclosing(stream.open())``, or use ``first()``/``collect()``,
    which close the pipeline themselves. Cancelling the consuming task also
    closes every stage down to the store iterator.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import aclosing
from typing import Generic, TypeVar

from vehiclebridge.core.exceptions import DataNotFoundError

T = TypeVar("T")


class QueryStream(Generic[T]):
    """A cold, restartable async sequence.

    Args:
        factory: Zero-argument callable returning a new async iterator (an
            async generator) over the results. Called once per consumption.
    """

    def __init__(self, factory: Callable[[], AsyncIterator[T]]) -> None:
        self._factory = factory

    def open(self) -> AsyncIterator[T]:
        """Start a new consumption and return its iterator."""
        return self._factory()

    def __aiter__(self) -> AsyncIterator[T]:
        return self.open()

    async def collect(self) -> list[T]:
        """Consume the whole stream into a list."""
        async with aclosing(self.open()) as items:
            return [item async for item in items]

    async def first(self) -> T:
        """Return the first item and close the stream.

        Closing propagates to the backend iterator, so the rest of the
        query is not fetched.

        Raises:
            DataNotFoundError: If the stream completes without items.
        """
        async with aclosing(self.open()) as items:
            async for item in items:
                return item
        raise DataNotFoundError()
