from __future__ import annotations

import pytest
from loguru import logger

from resumable.arena import FrameArena, default_arena, reset_default_arena
from resumable.counters import counter, counter_machine
from resumable.errors import ContractViolation, FrameAllocationError
from resumable.frame.state import FrameState
from resumable.handle import create
from resumable.settings import disable_logging, enable_logging


class TestFrameArena:

    def test_allocate_and_release_counts(self) -> None:
        arena = FrameArena()
        frame = arena.allocate(counter.bind(1, 5))

        assert arena.live == 1
        assert arena.owns(frame)
        arena.release(frame)

        assert arena.live == 0
        assert arena.allocated_total == 1
        assert arena.released_total == 1
        assert frame.released
        assert not arena.owns(frame)

    def test_capacity_is_enforced(self) -> None:
        arena = FrameArena(capacity=2)
        arena.allocate(counter.bind(1, 5))
        arena.allocate(counter.bind(1, 5))

        with pytest.raises(FrameAllocationError) as exc_info:
            arena.allocate(counter.bind(1, 5))

        assert exc_info.value.capacity == 2
        assert exc_info.value.live == 2

    def test_release_makes_room(self) -> None:
        arena = FrameArena(capacity=1)
        frame = arena.allocate(counter.bind(1, 5))
        arena.release(frame)

        arena.allocate(counter.bind(1, 5))

        assert arena.live == 1

    def test_double_release_is_violation(self) -> None:
        arena = FrameArena()
        frame = arena.allocate(counter.bind(1, 5))
        arena.release(frame)

        with pytest.raises(ContractViolation, match="double release"):
            arena.release(frame)

        assert arena.released_total == 1

    def test_foreign_frame_is_violation(self) -> None:
        frame = FrameArena().allocate(counter.bind(1, 5))

        with pytest.raises(ContractViolation):
            FrameArena().release(frame)

    def test_negative_capacity_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            FrameArena(capacity=-1)


class TestAllocationFailure:

    @pytest.mark.parametrize("definition", [counter, counter_machine])
    def test_full_arena_gives_empty_handle(self, definition) -> None:
        arena = FrameArena(capacity=0)

        handle = create(definition, 1, 5, arena=arena)

        assert handle.is_empty
        assert handle.is_exhausted
        handle.resume()
        assert handle.is_exhausted
        assert list(handle) == []
        handle.destroy()
        assert arena.released_total == 0

    def test_memory_error_gives_empty_handle(self, monkeypatch: pytest.MonkeyPatch) -> None:
        arena = FrameArena()

        def out_of_memory(call):
            raise MemoryError

        monkeypatch.setattr(arena, "allocate", out_of_memory)

        handle = create(counter, 1, 5, arena=arena)

        assert handle.is_empty
        assert handle.is_exhausted

    def test_other_handles_unaffected(self) -> None:
        arena = FrameArena(capacity=1)
        first = create(counter, 1, 5, arena=arena)
        second = create(counter, 1, 5, arena=arena)

        first.resume()

        assert second.is_empty
        assert first.state is FrameState.SUSPENDED
        assert first.current_value == 1

    def test_fallback_is_logged_as_warning(self) -> None:
        records = []
        enable_logging()
        sink_id = logger.add(lambda message: records.append(message.record), level="WARNING")
        try:
            create(counter, 1, 5, arena=FrameArena(capacity=0))
        finally:
            logger.remove(sink_id)
            disable_logging()

        assert len(records) == 1
        assert records[0]["level"].name == "WARNING"
        assert "counter(1, 5)" in records[0]["message"]


class TestDefaultArena:

    def test_default_arena_uses_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from resumable.settings import reset_settings

        monkeypatch.setenv("RESUMABLE_MAX_FRAMES", "1")
        reset_settings()
        reset_default_arena()

        first = counter(1, 5)
        second = counter(1, 5)

        assert default_arena().capacity == 1
        assert not first.is_empty
        assert second.is_empty

    def test_default_arena_is_cached(self) -> None:
        assert default_arena() is default_arena()
