"""
The execution frame: one producer instance's paused state, held as data.

A frame never shares state with another frame. It is created in
``NOT_STARTED``, changes state only inside :meth:`ExecutionFrame.resume`, and
is released exactly once by its arena.

Transitions::

    NOT_STARTED --yield--> SUSPENDED --yield--> SUSPENDED
    NOT_STARTED|SUSPENDED --end--> COMPLETED
    NOT_STARTED|SUSPENDED --raise--> FAILED

``COMPLETED`` and ``FAILED`` are terminal; resuming them does nothing.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from loguru import logger

from resumable.errors import ContractViolation, ReentrantResumeError
from resumable.frame.state import FrameState, Returned, Yielded

if TYPE_CHECKING:
    from resumable.frame.continuation import Continuation
    from resumable.producer import ProducerCall

T = TypeVar("T")

log = logger.bind(component="frame")

_frame_id_counter = itertools.count(1)


def _next_frame_id() -> int:
    return next(_frame_id_counter)


class ExecutionFrame(Generic[T]):
    def __init__(self, call: ProducerCall[T]) -> None:
        self.frame_id = _next_frame_id()
        self.call = call
        self.continuation: Continuation[T] = call.open()
        self.state = FrameState.NOT_STARTED
        self.pending_error: BaseException | None = None
        self.return_value: Any = None
        self.steps_taken = 0
        self.released = False
        self.running = False
        self._value: T | None = None

    @property
    def has_value(self) -> bool:
        return self.state is FrameState.SUSPENDED

    @property
    def current_value(self) -> T:
        if self.state is not FrameState.SUSPENDED:
            raise ContractViolation(
                f"Frame #{self.frame_id} ({self.call.name}) has no current value "
                f"in state {self.state.name}"
            )
        return self._value  # type: ignore[return-value]

    def resume(self) -> None:
        """Run the producer to its next yield point, its end, or a failure.

        A producer failure is recorded as ``pending_error`` and then re-raised
        to the caller, once. Terminal frames ignore the call.
        """
        if self.released:
            raise ContractViolation(f"Frame #{self.frame_id} has been released")
        if self.running:
            raise ReentrantResumeError(self.frame_id)
        if self.state.is_terminal:
            log.debug("frame #{} resume ignored in {}", self.frame_id, self.state.name)
            return

        previous = self.state
        self.running = True
        try:
            outcome = self.continuation.advance()
        except BaseException as exc:
            self._value = None
            self.pending_error = exc
            self.state = FrameState.FAILED
            self.steps_taken += 1
            log.debug(
                "frame #{} {} -> FAILED: {}: {}",
                self.frame_id,
                previous.name,
                type(exc).__name__,
                exc,
            )
            raise
        finally:
            self.running = False

        self.steps_taken += 1
        if isinstance(outcome, Yielded):
            self._value = outcome.value
            self.state = FrameState.SUSPENDED
        elif isinstance(outcome, Returned):
            self._value = None
            self.return_value = outcome.value
            self.state = FrameState.COMPLETED
        else:
            raise TypeError(f"Unexpected step outcome {type(outcome).__name__}")
        log.debug("frame #{} {} -> {}", self.frame_id, previous.name, self.state.name)

    def release(self) -> None:
        """Drop the continuation. Called once, by the owning arena."""
        if self.released:
            raise ContractViolation(f"Frame #{self.frame_id} released twice")
        if self.running:
            raise ContractViolation(f"Frame #{self.frame_id} cannot be released while running")
        self.released = True
        self._value = None
        if not self.state.is_terminal:
            log.debug("frame #{} cancelled in {}", self.frame_id, self.state.name)
        # Closing a native generator runs its finally blocks but never another step.
        self.continuation.close()

    def __repr__(self) -> str:
        return f"ExecutionFrame(#{self.frame_id}, {self.call.describe()}, {self.state.name})"


__all__ = ["ExecutionFrame"]
