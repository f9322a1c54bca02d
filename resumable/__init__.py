"""
resumable - suspendable value generators with explicitly owned execution frames.

A producer pauses at each yield point, hands a value to its consumer, and
resumes exactly where it left off on the next ``resume``. Every instance keeps
its paused state in its own :class:`ExecutionFrame`, owned by exactly one
:class:`GeneratorHandle`.

Example:
    >>> from resumable import producer
    >>>
    >>> @producer
    ... def counter(start, end):
    ...     while start < end:
    ...         yield start
    ...         start += 1
    >>>
    >>> handle = counter(1, 3)
    >>> handle.resume(); handle.current_value
    1
    >>> list(handle)
    [2]
    >>> handle.is_exhausted
    True
"""

from loguru import logger

from resumable.arena import FrameArena, default_arena, reset_default_arena
from resumable.errors import (
    ContractViolation,
    FrameAllocationError,
    ReentrantResumeError,
    ResumableError,
    StepLimitExceeded,
)
from resumable.frame import ExecutionFrame, FrameState
from resumable.handle import GeneratorHandle, create
from resumable.iteration import GeneratorIterator, next_value
from resumable.observability import FrameSnapshot
from resumable.producer import GeneratorProducer, ProducerCall, ProducerDefinition, producer
from resumable.settings import (
    Settings,
    debug_requested,
    disable_logging,
    enable_logging,
    get_settings,
)
from resumable.steps import Emit, Halt, Jump, StepProgram, step_program

logger.disable("resumable")
if debug_requested():
    enable_logging()

__version__ = "0.1.0"

__all__ = [
    "ContractViolation",
    "Emit",
    "ExecutionFrame",
    "FrameAllocationError",
    "FrameArena",
    "FrameSnapshot",
    "FrameState",
    "GeneratorHandle",
    "GeneratorIterator",
    "GeneratorProducer",
    "Halt",
    "Jump",
    "ProducerCall",
    "ProducerDefinition",
    "ReentrantResumeError",
    "ResumableError",
    "Settings",
    "StepLimitExceeded",
    "StepProgram",
    "create",
    "debug_requested",
    "default_arena",
    "disable_logging",
    "enable_logging",
    "get_settings",
    "next_value",
    "producer",
    "reset_default_arena",
    "step_program",
]
