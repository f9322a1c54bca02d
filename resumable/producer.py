"""
Producer definitions for suspendable generators.

A producer definition is the reusable description of a sequence: given
arguments it can open any number of independent continuations. Calling a
definition is shorthand for :func:`resumable.handle.create`, which allocates
an execution frame and wraps it in a :class:`~resumable.handle.GeneratorHandle`.

Two styles are supported:

* ``@producer`` wraps an ordinary Python generator function. The frame holds
  the generator object as an iterator cursor.
* ``@step_program`` (see :mod:`resumable.steps`) describes the producer as an
  explicit list of steps over a locals mapping with its own program counter.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, ParamSpec, TypeVar

from frozendict import frozendict

if TYPE_CHECKING:
    from resumable.frame.continuation import Continuation
    from resumable.handle import GeneratorHandle

P = ParamSpec("P")
T = TypeVar("T")


@dataclass(frozen=True)
class ProducerCall(Generic[T]):
    """A producer definition bound to the arguments of one invocation."""

    definition: ProducerDefinition[Any, T]
    args: tuple[Any, ...] = ()
    kwargs: frozendict[str, Any] = field(default_factory=frozendict)

    @property
    def name(self) -> str:
        return self.definition.name

    def open(self) -> Continuation[T]:
        return self.definition.open(self)

    def describe(self) -> str:
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"{self.name}({', '.join(parts)})"


class ProducerDefinition(Generic[P, T]):
    """Base class for anything that can be instantiated into a generator handle."""

    name: str = "<producer>"

    def signature(self) -> inspect.Signature | None:
        return None

    def bind(self, *args: Any, **kwargs: Any) -> ProducerCall[T]:
        signature = self.signature()
        if signature is not None:
            # Argument errors surface at creation, like calling a generator function.
            signature.bind(*args, **kwargs)
        return ProducerCall(self, tuple(args), frozendict(kwargs))

    def open(self, call: ProducerCall[T]) -> Continuation[T]:
        raise NotImplementedError

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> GeneratorHandle[T]:
        from resumable.handle import create

        return create(self, *args, **kwargs)


class GeneratorProducer(ProducerDefinition[P, T]):
    """Producer backed by a Python generator function."""

    def __init__(self, func: Callable[P, Iterator[T]]) -> None:
        self.func = func
        self.name = getattr(func, "__qualname__", getattr(func, "__name__", "<producer>"))

        for attr in ("__doc__", "__module__", "__name__", "__qualname__", "__annotations__"):
            value = getattr(func, attr, None)
            if value is not None:
                setattr(self, attr, value)

        self._signature = _safe_signature(func)
        if self._signature is not None:
            self.__signature__ = self._signature

    def signature(self) -> inspect.Signature | None:
        return self._signature

    def open(self, call: ProducerCall[T]) -> Continuation[T]:
        from resumable.frame.continuation import IteratorContinuation

        return IteratorContinuation(lambda: self.func(*call.args, **call.kwargs), name=self.name)

    def __repr__(self) -> str:
        return f"GeneratorProducer({self.name})"


def producer(func: Callable[P, Iterator[T]]) -> GeneratorProducer[P, T]:
    """
    Turn a generator function into a producer definition.

    Usage:
        @producer
        def countdown(n: int):
            while n > 0:
                yield n
                n -= 1

        handle = countdown(3)   # GeneratorHandle, nothing has run yet
        handle.resume()
        handle.current_value    # 3

    The function body does not run until the first ``resume``; every call
    creates a handle with its own frame.
    """

    return GeneratorProducer(func)


def _safe_signature(target: Any) -> inspect.Signature | None:
    try:
        return inspect.signature(target)
    except (TypeError, ValueError):
        return None


__all__ = [
    "GeneratorProducer",
    "ProducerCall",
    "ProducerDefinition",
    "producer",
]
