"""
Bounded integer counters, written once per producer style.

``counter(start, end)`` yields ``start, start + 1, ..., end - 1``; an empty or
reversed range yields nothing.
"""

from __future__ import annotations

from collections.abc import Iterator

from resumable.producer import producer
from resumable.steps import Emit, Halt, Jump, Locals, step_program


@producer
def counter(start: int, end: int) -> Iterator[int]:
    while start < end:
        yield start
        start += 1


@step_program
def counter_machine(start: int, end: int) -> Locals:
    return {"current": start, "end": end}


@counter_machine.step("check")
def _check(f: Locals) -> Halt | None:
    if f["current"] < f["end"]:
        return None
    return Halt()


@counter_machine.step("emit")
def _emit(f: Locals) -> Emit:
    return Emit(f["current"])


@counter_machine.step("advance")
def _advance(f: Locals) -> Jump:
    f["current"] += 1
    return Jump("check")


COUNTER_STYLES = {
    "iterator": counter,
    "steps": counter_machine,
}


__all__ = ["COUNTER_STYLES", "counter", "counter_machine"]
