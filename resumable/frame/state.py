from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FrameState(Enum):
    NOT_STARTED = "not_started"
    SUSPENDED = "suspended"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (FrameState.COMPLETED, FrameState.FAILED)


@dataclass(frozen=True)
class Yielded:
    value: Any


@dataclass(frozen=True)
class Returned:
    value: Any = None


StepOutcome = Yielded | Returned
