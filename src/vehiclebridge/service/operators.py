"""
vehiclebridge.service.operators - Async Stream Stages
=======================================================

Small async-generator stages that decorate a lazily produced sequence. The
read paths of the bridge are built by nesting them:

    error_if_empty( on_complete( map_errors( store_query ) ) )
         outermost                   innermost

Every stage:
    - pulls from its source only when its own consumer pulls (laziness),
    - yields items unchanged and in order,
    - closes its source when it is closed or fails (``aclose()`` reaches
      the backend iterator, so abandoning a stream stops backend work).

``asyncio.CancelledError`` and ``GeneratorExit`` are never intercepted.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import aclosing, nullcontext
from typing import Any, TypeVar

T = TypeVar("T")


def _closing(source: AsyncIterator[T]) -> Any:
    """Context manager that closes ``source`` on exit if it can be closed."""
    if hasattr(source, "aclose"):
        return aclosing(source)
    return nullcontext(source)


async def map_errors(
    source: AsyncIterator[T],
    error_type: type[BaseException] | tuple[type[BaseException], ...],
    replace: Callable[[BaseException], BaseException],
) -> AsyncIterator[T]:
    """Replace faults of ``error_type`` raised by ``source``.

    ``replace`` receives the original error and returns the exception to
    raise instead. The replacement is raised outside the handler, so it has
    neither a cause nor a context and the original error does not travel
    with it. Items produced before the fault are still delivered.
    """
    async with _closing(source) as items:
        try:
            async for item in items:
                yield item
        except error_type as exc:
            replacement = replace(exc)
        else:
            return
    raise replacement


async def on_complete(
    source: AsyncIterator[T],
    callback: Callable[[], None],
) -> AsyncIterator[T]:
    """Call ``callback`` once ``source`` is exhausted without a fault.

    An empty source counts as completed. Faults and early closing skip the
    callback.
    """
    async with _closing(source) as items:
        async for item in items:
            yield item
    callback()


async def on_next(
    source: AsyncIterator[T],
    callback: Callable[[T], None],
) -> AsyncIterator[T]:
    """Call ``callback`` with each item before passing it on."""
    async with _closing(source) as items:
        async for item in items:
            callback(item)
            yield item


async def error_if_empty(
    source: AsyncIterator[T],
    error_factory: Callable[[], BaseException],
) -> AsyncIterator[T]:
    """Raise ``error_factory()`` if ``source`` completes without any item."""
    empty = True
    async with _closing(source) as items:
        async for item in items:
            empty = False
            yield item
    if empty:
        raise error_factory()
