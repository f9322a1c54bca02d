"""Error types for suspendable generators."""

from __future__ import annotations

from typing import Any


class ResumableError(Exception):
    """Base class for errors raised by the generator machinery."""


class FrameAllocationError(ResumableError):
    """Raised when an arena cannot hand out another execution frame."""

    def __init__(self, capacity: int, live: int) -> None:
        self.capacity = capacity
        self.live = live
        super().__init__(
            f"Frame arena exhausted: {live} live frames at capacity {capacity}"
        )


class StepLimitExceeded(ResumableError):
    """Raised when a step machine jumps too many times without emitting."""

    def __init__(self, limit: int, label: Any) -> None:
        self.limit = limit
        self.label = label
        super().__init__(
            f"Step machine made {limit} transitions without emitting a value "
            f"(last label: {label!r})"
        )


class ContractViolation(ResumableError, AssertionError):
    """Raised on programmer errors such as reading a value that does not exist."""


class ReentrantResumeError(ContractViolation):
    """Raised when a handle is resumed while it is already resuming."""

    def __init__(self, frame_id: int) -> None:
        self.frame_id = frame_id
        super().__init__(f"Frame #{frame_id} is already running; resume is not reentrant")


__all__ = [
    "ContractViolation",
    "FrameAllocationError",
    "ReentrantResumeError",
    "ResumableError",
    "StepLimitExceeded",
]
