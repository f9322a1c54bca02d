from resumable.frame.continuation import (
    Continuation,
    IteratorContinuation,
    StepContinuation,
)
from resumable.frame.frame import ExecutionFrame
from resumable.frame.state import FrameState, Returned, StepOutcome, Yielded

__all__ = [
    "Continuation",
    "ExecutionFrame",
    "FrameState",
    "IteratorContinuation",
    "Returned",
    "StepContinuation",
    "StepOutcome",
    "Yielded",
]
