from __future__ import annotations

import itertools
from collections.abc import Iterator

import pytest

from resumable.counters import counter
from resumable.handle import GeneratorHandle, create
from resumable.iteration import GeneratorIterator, next_value
from resumable.producer import producer


class TestNextValue:

    def test_returns_values_in_order(self, arena) -> None:
        handle = create(counter, 1, 4, arena=arena)

        assert next_value(handle) == 1
        assert next_value(handle) == 2
        assert next_value(handle) == 3

    def test_stops_instead_of_returning_stale_value(self, arena) -> None:
        handle = create(counter, 1, 2, arena=arena)
        next_value(handle)

        with pytest.raises(StopIteration):
            next_value(handle)
        with pytest.raises(StopIteration):
            next_value(handle)

    def test_stop_iteration_carries_return_value(self, arena) -> None:
        @producer
        def summed() -> Iterator[int]:
            yield 1
            yield 2
            return 3

        handle = create(summed, arena=arena)
        next_value(handle)
        next_value(handle)

        with pytest.raises(StopIteration) as exc_info:
            next_value(handle)

        assert exc_info.value.value == 3

    def test_empty_handle_stops_immediately(self) -> None:
        with pytest.raises(StopIteration):
            next_value(GeneratorHandle.empty())


class TestIteratorAdapter:

    def test_iter_returns_adapter(self, arena) -> None:
        handle = create(counter, 1, 3, arena=arena)

        it = iter(handle)

        assert isinstance(it, GeneratorIterator)
        assert iter(it) is it

    def test_list_collects_remaining_values(self, arena) -> None:
        handle = create(counter, 1, 5, arena=arena)
        handle.resume()

        assert list(handle) == [2, 3, 4]
        assert handle.is_exhausted

    def test_works_with_itertools(self, arena) -> None:
        evens = create(counter, 0, 10, arena=arena)

        assert list(itertools.islice(evens, 3)) == [0, 1, 2]
        assert evens.current_value == 2

    def test_zip_interleaves_instances(self, arena) -> None:
        a = create(counter, 1, 5, arena=arena)
        b = create(counter, 10, 12, arena=arena)

        assert list(zip(a, b)) == [(1, 10), (2, 11)]

    def test_handle_keeps_ownership_after_iteration(self, arena) -> None:
        handle = create(counter, 1, 3, arena=arena)

        list(handle)

        assert arena.live == 1
        handle.destroy()
        assert arena.live == 0
