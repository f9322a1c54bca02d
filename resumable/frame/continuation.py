"""Continuations: where a paused producer picks up on the next resume."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from resumable.errors import StepLimitExceeded
from resumable.frame.state import Returned, StepOutcome, Yielded

if TYPE_CHECKING:
    from resumable.producer import ProducerCall
    from resumable.steps import Locals, StepProgram

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Continuation(Protocol[T_co]):
    def advance(self) -> StepOutcome:
        """Run producer logic up to the next yield point or the end.

        Exceptions raised by the producer propagate unchanged.
        """
        ...

    def close(self) -> None:
        """Abandon the producer without running any further steps."""
        ...


def _call_producer(name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    # StopIteration leaking out of producer code must not read as completion (PEP 479).
    try:
        return fn(*args, **kwargs)
    except StopIteration as exc:
        raise RuntimeError(f"{name} raised StopIteration") from exc


def _to_iterator(produced: Any) -> Iterator[Any]:
    if isinstance(produced, Iterator):
        return produced
    raise TypeError(f"Producer did not return an iterator, got {type(produced).__name__}")


class IteratorContinuation(Generic[T]):
    """Cursor over a native Python generator, created on the first advance."""

    def __init__(self, factory: Callable[[], Iterator[T]], name: str = "<producer>") -> None:
        self.name = name
        self._factory: Callable[[], Iterator[T]] | None = factory
        self._iterator: Iterator[T] | None = None

    @property
    def started(self) -> bool:
        return self._iterator is not None

    def advance(self) -> StepOutcome:
        if self._iterator is None:
            if self._factory is None:
                return Returned()
            factory, self._factory = self._factory, None
            self._iterator = _to_iterator(_call_producer(self.name, factory))
        try:
            return Yielded(next(self._iterator))
        except StopIteration as stop:
            return Returned(stop.value)

    def close(self) -> None:
        self._factory = None
        iterator, self._iterator = self._iterator, None
        close = getattr(iterator, "close", None)
        if close is not None:
            close()


class StepContinuation(Generic[T]):
    """Explicit program counter and locals for a :class:`StepProgram`."""

    def __init__(
        self,
        program: StepProgram[Any, T],
        call: ProducerCall[T],
        *,
        max_transitions: int,
    ) -> None:
        self.program = program
        self.call = call
        self.max_transitions = max_transitions
        self.pc = 0
        self.locals: Locals | None = None
        self.finished = False

    def advance(self) -> StepOutcome:
        from resumable.steps import Emit, Halt, Jump

        if self.finished:
            return Returned()
        if self.locals is None:
            self.locals = _call_producer(
                self.program.name, self.program.setup, *self.call.args, **self.call.kwargs
            )
            if self.locals is None:
                self.locals = {}

        steps = self.program.steps
        transitions = 0
        while True:
            if self.pc >= len(steps):
                self.finished = True
                return Returned()

            step = steps[self.pc]
            instruction = _call_producer(
                f"step {step.label if step.label is not None else self.pc!r} of {self.program.name}",
                step.fn,
                self.locals,
            )

            if isinstance(instruction, Emit):
                if instruction.then is None:
                    self.pc += 1
                else:
                    self.pc = self.program.index_of(instruction.then)
                return Yielded(instruction.value)
            if isinstance(instruction, Halt):
                self.finished = True
                return Returned(instruction.value)
            if isinstance(instruction, Jump):
                self.pc = self.program.index_of(instruction.label)
            elif instruction is None:
                self.pc += 1
            else:
                raise TypeError(
                    f"Step {step.label or self.pc!r} of {self.program.name} returned "
                    f"{type(instruction).__name__}; expected Emit, Jump, Halt or None"
                )

            transitions += 1
            if transitions > self.max_transitions:
                raise StepLimitExceeded(self.max_transitions, step.label)

    def close(self) -> None:
        self.finished = True
        self.locals = None


__all__ = [
    "Continuation",
    "IteratorContinuation",
    "StepContinuation",
]
