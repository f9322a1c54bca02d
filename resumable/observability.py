"""
Point-in-time snapshots of generator handles.

Example:
    handle = counter(1, 5)
    handle.resume()
    print(handle.snapshot().format())
    # frame #7 counter(1, 5): SUSPENDED after 1 step(s), value=1
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from resumable.frame.state import FrameState

if TYPE_CHECKING:
    from resumable.frame.frame import ExecutionFrame


@dataclass(frozen=True)
class FrameSnapshot:
    """
    Immutable view of one frame.

    Attributes:
        frame_id: Id of the frame, or None for an empty handle.
        producer: Description of the producer call, e.g. ``counter(1, 5)``.
        state: Frame state, or None for an empty handle.
        steps_taken: Number of resumes that ran producer logic.
        has_value: Whether ``value`` holds a current value.
        value: The current value while suspended.
        error: The pending error of a failed frame.
    """

    frame_id: int | None
    producer: str | None
    state: FrameState | None
    steps_taken: int = 0
    has_value: bool = False
    value: Any = None
    error: BaseException | None = None

    @classmethod
    def empty(cls) -> FrameSnapshot:
        return cls(frame_id=None, producer=None, state=None)

    @classmethod
    def from_frame(cls, frame: ExecutionFrame[Any]) -> FrameSnapshot:
        has_value = frame.has_value
        return cls(
            frame_id=frame.frame_id,
            producer=frame.call.describe(),
            state=frame.state,
            steps_taken=frame.steps_taken,
            has_value=has_value,
            value=frame.current_value if has_value else None,
            error=frame.pending_error,
        )

    @property
    def is_exhausted(self) -> bool:
        return self.state is None or self.state.is_terminal

    def format(self) -> str:
        if self.frame_id is None or self.state is None:
            return "empty handle"
        text = (
            f"frame #{self.frame_id} {self.producer}: {self.state.name} "
            f"after {self.steps_taken} step(s)"
        )
        if self.has_value:
            text += f", value={self.value!r}"
        if self.error is not None:
            text += f", error={type(self.error).__name__}: {self.error}"
        return text


__all__ = ["FrameSnapshot"]
