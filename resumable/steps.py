"""
Explicit step machines.

A :class:`StepProgram` spells out a producer as data: a setup function that
turns the call arguments into a locals mapping, and an ordered list of labelled
steps. Each step receives the locals mapping and returns an instruction:

* ``Emit(value, then=None)`` suspends with ``value``; the next resume starts at
  label ``then`` or at the following step.
* ``Jump(label)`` moves to another step without suspending.
* ``Halt(value=None)`` completes the sequence.
* ``None`` falls through to the following step.

Falling off the end of the step list completes the sequence.

Example::

    @step_program
    def countdown(n: int) -> dict:
        return {"n": n}

    @countdown.step("check")
    def _(f):
        return None if f["n"] > 0 else Halt()

    @countdown.step()
    def _(f):
        f["n"] -= 1
        return Emit(f["n"] + 1, then="check")
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Hashable, MutableMapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

from resumable.producer import ProducerCall, ProducerDefinition

if TYPE_CHECKING:
    from resumable.frame.continuation import Continuation

P = ParamSpec("P")
T = TypeVar("T")

Locals = MutableMapping[str, Any]


@dataclass(frozen=True)
class Emit:
    value: Any
    then: Hashable | None = None


@dataclass(frozen=True)
class Jump:
    label: Hashable


@dataclass(frozen=True)
class Halt:
    value: Any = None


Instruction = Emit | Jump | Halt | None


@dataclass(frozen=True)
class Step:
    label: Hashable | None
    fn: Callable[[Locals], Instruction]


class StepProgram(ProducerDefinition[P, T]):
    """Producer definition written as an explicit list of steps."""

    def __init__(
        self,
        setup: Callable[P, Locals],
        *,
        max_transitions: int | None = None,
    ) -> None:
        self.setup = setup
        self.name = getattr(setup, "__qualname__", getattr(setup, "__name__", "<steps>"))
        self.__doc__ = getattr(setup, "__doc__", None)
        self.max_transitions = max_transitions
        self._steps: list[Step] = []
        self._labels: dict[Hashable, int] = {}
        try:
            self._signature: inspect.Signature | None = inspect.signature(setup)
        except (TypeError, ValueError):
            self._signature = None

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    def step(
        self, label: Hashable | None = None
    ) -> Callable[[Callable[[Locals], Instruction]], Callable[[Locals], Instruction]]:
        """Append the decorated function as the next step, optionally labelled."""

        def register(fn: Callable[[Locals], Instruction]) -> Callable[[Locals], Instruction]:
            self.add_step(fn, label=label)
            return fn

        return register

    def add_step(self, fn: Callable[[Locals], Instruction], *, label: Hashable | None = None) -> None:
        if label is not None:
            if label in self._labels:
                raise ValueError(f"Duplicate step label {label!r} in {self.name}")
            self._labels[label] = len(self._steps)
        self._steps.append(Step(label, fn))

    def index_of(self, label: Hashable) -> int:
        try:
            return self._labels[label]
        except KeyError:
            raise KeyError(f"Unknown step label {label!r} in {self.name}") from None

    def signature(self) -> inspect.Signature | None:
        return self._signature

    def open(self, call: ProducerCall[T]) -> Continuation[T]:
        from resumable.frame.continuation import StepContinuation
        from resumable.settings import get_settings

        limit = self.max_transitions
        if limit is None:
            limit = get_settings().max_transitions
        return StepContinuation(self, call, max_transitions=limit)

    def __repr__(self) -> str:
        return f"StepProgram({self.name}, steps={len(self._steps)})"


def step_program(
    setup: Callable[P, Locals] | None = None,
    *,
    max_transitions: int | None = None,
) -> Any:
    """Decorator creating a :class:`StepProgram` from its setup function."""

    if setup is None:
        return lambda fn: StepProgram(fn, max_transitions=max_transitions)
    return StepProgram(setup, max_transitions=max_transitions)


__all__ = [
    "Emit",
    "Halt",
    "Instruction",
    "Jump",
    "Locals",
    "Step",
    "StepProgram",
    "step_program",
]
