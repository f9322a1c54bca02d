"""Adapters between generator handles and Python's iterator protocol."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from resumable.handle import GeneratorHandle

T = TypeVar("T")


def next_value(handle: GeneratorHandle[T]) -> T:
    """Resume ``handle`` and return the value it produced.

    Raises ``StopIteration`` once the handle is exhausted instead of handing
    back a stale value. Producer failures propagate from the resume.
    """
    handle.resume()
    if handle.is_exhausted:
        raise StopIteration(handle.return_value)
    return handle.current_value


class GeneratorIterator(Iterator[T], Generic[T]):
    """Iterator view over a handle; the handle keeps ownership of its frame."""

    def __init__(self, handle: GeneratorHandle[T]) -> None:
        self._handle = handle

    def __iter__(self) -> GeneratorIterator[T]:
        return self

    def __next__(self) -> T:
        return next_value(self._handle)


__all__ = ["GeneratorIterator", "next_value"]
