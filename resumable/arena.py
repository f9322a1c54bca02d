"""Explicit allocation and release of execution frames."""

from __future__ import annotations

from typing import Any, TypeVar

from loguru import logger

from resumable.errors import ContractViolation, FrameAllocationError
from resumable.frame.frame import ExecutionFrame
from resumable.producer import ProducerCall
from resumable.settings import get_settings

T = TypeVar("T")

log = logger.bind(component="arena")


class FrameArena:
    """
    Hands out execution frames and takes them back, exactly once each.

    ``capacity`` bounds the number of live frames; ``None`` means unbounded.
    Allocation beyond capacity raises :class:`FrameAllocationError`.
    The arena only tracks frame ids, so it never keeps a producer alive.
    """

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self.capacity = capacity
        self.allocated_total = 0
        self.released_total = 0
        self._live: set[int] = set()

    @property
    def live(self) -> int:
        return len(self._live)

    def owns(self, frame: ExecutionFrame[Any]) -> bool:
        return frame.frame_id in self._live

    def allocate(self, call: ProducerCall[T]) -> ExecutionFrame[T]:
        if self.capacity is not None and self.live >= self.capacity:
            raise FrameAllocationError(self.capacity, self.live)
        frame = ExecutionFrame(call)
        self._live.add(frame.frame_id)
        self.allocated_total += 1
        log.debug("allocated frame #{} for {}", frame.frame_id, call.describe())
        return frame

    def release(self, frame: ExecutionFrame[Any]) -> None:
        if frame.frame_id not in self._live:
            raise ContractViolation(
                f"Frame #{frame.frame_id} is not live in this arena (double release?)"
            )
        if frame.running:
            raise ContractViolation(f"Frame #{frame.frame_id} cannot be released while running")
        self._live.discard(frame.frame_id)
        self.released_total += 1
        frame.release()

    def __repr__(self) -> str:
        return (
            f"FrameArena(live={self.live}, capacity={self.capacity}, "
            f"allocated={self.allocated_total}, released={self.released_total})"
        )


_default: dict[str, FrameArena] = {}


def default_arena() -> FrameArena:
    """Arena used when ``create`` is not given one, sized from settings."""
    if "arena" not in _default:
        _default["arena"] = FrameArena(capacity=get_settings().max_frames)
    return _default["arena"]


def reset_default_arena() -> None:
    _default.clear()


__all__ = ["FrameArena", "default_arena", "reset_default_arena"]
