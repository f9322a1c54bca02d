"""
Generator handles: the consumer-facing owner of one execution frame.

A handle owns exactly one frame, or none at all (the *empty* handle returned
when a frame could not be allocated). Ownership is exclusive: handles cannot
be copied, only moved with :meth:`GeneratorHandle.move`.

Usage:
    from resumable import create
    from resumable.counters import counter

    with create(counter, 1, 5) as handle:
        while True:
            handle.resume()
            if handle.is_exhausted:
                break
            print(handle.current_value)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

from loguru import logger

from resumable.arena import FrameArena, default_arena
from resumable.errors import ContractViolation, FrameAllocationError
from resumable.frame.state import FrameState
from resumable.iteration import GeneratorIterator
from resumable.observability import FrameSnapshot

if TYPE_CHECKING:
    from types import TracebackType

    from resumable.frame.frame import ExecutionFrame
    from resumable.producer import ProducerDefinition

T = TypeVar("T")

log = logger.bind(component="handle")


class GeneratorHandle(Generic[T]):
    def __init__(
        self,
        frame: ExecutionFrame[T] | None = None,
        arena: FrameArena | None = None,
    ) -> None:
        if frame is not None and arena is None:
            raise ValueError("a handle that owns a frame needs the arena it came from")
        self._frame = frame
        self._arena = arena if frame is not None else None

    @classmethod
    def empty(cls) -> GeneratorHandle[T]:
        return cls()

    # -- ownership ---------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self._frame is None

    @property
    def frame(self) -> ExecutionFrame[T] | None:
        return self._frame

    def move(self) -> GeneratorHandle[T]:
        """Transfer the frame to a new handle, leaving this one empty."""
        frame, arena = self._frame, self._arena
        if frame is not None and frame.running:
            raise ContractViolation(f"Frame #{frame.frame_id} cannot be moved while running")
        self._frame = None
        self._arena = None
        return GeneratorHandle(frame, arena)

    def destroy(self) -> None:
        """Release the owned frame. Safe to call any number of times."""
        frame, arena = self._frame, self._arena
        if frame is None or arena is None:
            return
        if frame.running:
            raise ContractViolation(f"Frame #{frame.frame_id} cannot be released while running")
        # Detach first: cleanup raised from the producer must not leave a released frame owned.
        self._frame = None
        self._arena = None
        arena.release(frame)

    close = destroy

    def __enter__(self) -> GeneratorHandle[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.destroy()

    def __del__(self) -> None:
        frame = getattr(self, "_frame", None)
        if frame is not None and not frame.running:
            self.destroy()

    def _refuse_copy(self, *args: Any) -> NoReturn:
        raise ContractViolation("GeneratorHandle owns its frame exclusively; use move()")

    __copy__ = _refuse_copy
    __deepcopy__ = _refuse_copy
    __reduce_ex__ = _refuse_copy

    # -- stepping ----------------------------------------------------------

    def resume(self) -> None:
        """Advance the producer by one step.

        Does nothing on an exhausted handle. If the producer raises, the frame
        becomes FAILED and the exception propagates from this call.
        """
        frame = self._frame
        if frame is None:
            return
        frame.resume()

    @property
    def is_exhausted(self) -> bool:
        frame = self._frame
        return frame is None or frame.state.is_terminal

    def done(self) -> bool:
        return self.is_exhausted

    @property
    def current_value(self) -> T:
        frame = self._frame
        if frame is None:
            raise ContractViolation("Empty generator handle has no current value")
        return frame.current_value

    @property
    def state(self) -> FrameState | None:
        frame = self._frame
        return None if frame is None else frame.state

    @property
    def pending_error(self) -> BaseException | None:
        frame = self._frame
        return None if frame is None else frame.pending_error

    @property
    def return_value(self) -> Any:
        frame = self._frame
        return None if frame is None else frame.return_value

    def snapshot(self) -> FrameSnapshot:
        frame = self._frame
        if frame is None:
            return FrameSnapshot.empty()
        return FrameSnapshot.from_frame(frame)

    def __iter__(self) -> GeneratorIterator[T]:
        return GeneratorIterator(self)

    def __repr__(self) -> str:
        frame = self._frame
        if frame is None:
            return "GeneratorHandle(<empty>)"
        return f"GeneratorHandle({frame!r})"


def create(
    definition: ProducerDefinition[Any, T],
    /,
    *args: Any,
    arena: FrameArena | None = None,
    **kwargs: Any,
) -> GeneratorHandle[T]:
    """
    Instantiate ``definition`` with the given arguments.

    Binds the arguments, allocates a frame in ``NOT_STARTED`` from ``arena``
    (the default arena when omitted) and returns the handle owning it. No
    producer logic runs. When no frame can be allocated the returned handle
    is empty: already exhausted, and ``resume`` does nothing.

    Raises:
        TypeError: the arguments do not match the producer's signature.
    """
    call = definition.bind(*args, **kwargs)
    target = arena if arena is not None else default_arena()
    try:
        frame = target.allocate(call)
    except (FrameAllocationError, MemoryError) as exc:
        log.warning("could not allocate a frame for {}: {}", call.describe(), exc)
        return GeneratorHandle.empty()
    return GeneratorHandle(frame, target)


__all__ = ["GeneratorHandle", "create"]
