"""
Tests for vehiclebridge.service.operators and vehiclebridge.service.streams
=============================================================================

Each stage is tested on its own against small async generators, then the
read-path composition is checked for stage order.
"""

from __future__ import annotations

import pytest

from vehiclebridge.core.exceptions import DataNotFoundError, StoreError
from vehiclebridge.service.operators import error_if_empty, map_errors, on_complete, on_next
from vehiclebridge.service.streams import QueryStream


class _Source:
    """Async generator factory that records how it was consumed."""

    def __init__(self, items: list, fail_with: BaseException | None = None) -> None:
        self.items = items
        self.fail_with = fail_with
        self.started = 0
        self.closed = 0

    async def __call__(self):
        self.started += 1
        try:
            for item in self.items:
                yield item
            if self.fail_with is not None:
                raise self.fail_with
        finally:
            self.closed += 1


async def _drain(iterator) -> list:
    return [item async for item in iterator]


# =============================================================================
# Test: map_errors
# =============================================================================
class TestMapErrors:

    async def test_passes_items_through(self) -> None:
        source = _Source([1, 2, 3])
        result = await _drain(map_errors(source(), StoreError, lambda e: DataNotFoundError()))
        assert result == [1, 2, 3]

    async def test_replaces_matching_error(self) -> None:
        source = _Source([1], fail_with=StoreError("boom"))
        seen: list[BaseException] = []

        def replace(error: BaseException) -> BaseException:
            seen.append(error)
            return DataNotFoundError()

        received = []
        with pytest.raises(DataNotFoundError) as exc_info:
            async for item in map_errors(source(), StoreError, replace):
                received.append(item)

        assert received == [1]
        assert isinstance(seen[0], StoreError)
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__context__ is None

    async def test_other_errors_propagate(self) -> None:
        source = _Source([], fail_with=ValueError("not a store fault"))
        with pytest.raises(ValueError):
            await _drain(map_errors(source(), StoreError, lambda e: DataNotFoundError()))


# =============================================================================
# Test: on_complete
# =============================================================================
class TestOnComplete:

    async def test_called_after_last_item(self) -> None:
        calls: list[str] = []
        result = await _drain(on_complete(_Source([1, 2])(), lambda: calls.append("done")))
        assert result == [1, 2]
        assert calls == ["done"]

    async def test_called_for_empty_source(self) -> None:
        calls: list[str] = []
        await _drain(on_complete(_Source([])(), lambda: calls.append("done")))
        assert calls == ["done"]

    async def test_not_called_on_error(self) -> None:
        calls: list[str] = []
        with pytest.raises(StoreError):
            await _drain(on_complete(_Source([1], StoreError("x"))(), lambda: calls.append("done")))
        assert calls == []


# =============================================================================
# Test: error_if_empty and on_next
# =============================================================================
class TestErrorIfEmpty:

    async def test_raises_for_empty_source(self) -> None:
        with pytest.raises(DataNotFoundError):
            await _drain(error_if_empty(_Source([])(), DataNotFoundError))

    async def test_non_empty_source_passes(self) -> None:
        assert await _drain(error_if_empty(_Source(["a"])(), DataNotFoundError)) == ["a"]

    async def test_on_next_sees_every_item(self) -> None:
        seen: list[int] = []
        assert await _drain(on_next(_Source([1, 2])(), seen.append)) == [1, 2]
        assert seen == [1, 2]


# =============================================================================
# Test: Composition Order
# =============================================================================
class TestComposition:
    """error_if_empty(on_complete(map_errors(source)))"""

    @staticmethod
    def _pipeline(source, calls: list[str]):
        mapped = map_errors(source, StoreError, lambda e: DataNotFoundError())
        logged = on_complete(mapped, lambda: calls.append("complete"))
        return error_if_empty(logged, DataNotFoundError)

    async def test_error_never_reaches_empty_guard_as_completion(self) -> None:
        calls: list[str] = []
        with pytest.raises(DataNotFoundError):
            await _drain(self._pipeline(_Source([], StoreError("x"))(), calls))
        assert calls == []

    async def test_empty_success_logs_then_fails(self) -> None:
        calls: list[str] = []
        with pytest.raises(DataNotFoundError):
            await _drain(self._pipeline(_Source([])(), calls))
        assert calls == ["complete"]

    async def test_closing_outer_stage_closes_source(self) -> None:
        source = _Source([1, 2, 3])
        calls: list[str] = []
        pipeline = self._pipeline(source(), calls)

        assert await pipeline.__anext__() == 1
        await pipeline.aclose()

        assert source.closed == 1
        assert calls == [], "An abandoned stream is not a completed one"


# =============================================================================
# Test: QueryStream
# =============================================================================
class TestQueryStream:

    async def test_factory_called_per_consumption(self) -> None:
        source = _Source([1, 2])
        stream = QueryStream(source)

        assert source.started == 0
        assert await stream.collect() == [1, 2]
        assert [item async for item in stream] == [1, 2]
        assert source.started == 2

    async def test_first_returns_head_and_closes(self) -> None:
        source = _Source([1, 2, 3])
        assert await QueryStream(source).first() == 1
        assert source.closed == 1

    async def test_first_on_empty_stream(self) -> None:
        with pytest.raises(DataNotFoundError):
            await QueryStream(_Source([])).first()
