from __future__ import annotations

import dataclasses
from collections.abc import Iterator

import pytest

from resumable.counters import counter
from resumable.frame.state import FrameState
from resumable.handle import GeneratorHandle, create
from resumable.observability import FrameSnapshot
from resumable.producer import producer


def test_snapshot_of_suspended_frame(arena) -> None:
    handle = create(counter, 1, 5, arena=arena)
    handle.resume()

    snapshot = handle.snapshot()

    assert snapshot.frame_id == handle.frame.frame_id
    assert snapshot.producer == "counter(1, 5)"
    assert snapshot.state is FrameState.SUSPENDED
    assert snapshot.steps_taken == 1
    assert snapshot.has_value
    assert snapshot.value == 1
    assert not snapshot.is_exhausted
    assert snapshot.format().endswith("SUSPENDED after 1 step(s), value=1")


def test_snapshot_is_frozen_in_time(arena) -> None:
    handle = create(counter, 1, 5, arena=arena)
    handle.resume()
    snapshot = handle.snapshot()

    handle.resume()

    assert snapshot.value == 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.value = 2  # type: ignore[misc]


def test_snapshot_of_unstarted_frame_has_no_value(arena) -> None:
    snapshot = create(counter, 1, 5, arena=arena).snapshot()

    assert snapshot.state is FrameState.NOT_STARTED
    assert not snapshot.has_value
    assert snapshot.value is None


def test_snapshot_of_failed_frame(arena) -> None:
    @producer
    def broken() -> Iterator[int]:
        raise KeyError("missing")
        yield 0  # noqa: B027

    handle = create(broken, arena=arena)
    with pytest.raises(KeyError):
        handle.resume()

    snapshot = handle.snapshot()

    assert snapshot.state is FrameState.FAILED
    assert snapshot.is_exhausted
    assert isinstance(snapshot.error, KeyError)
    assert "error=KeyError" in snapshot.format()


def test_snapshot_of_empty_handle() -> None:
    snapshot = GeneratorHandle.empty().snapshot()

    assert snapshot == FrameSnapshot.empty()
    assert snapshot.is_exhausted
    assert snapshot.format() == "empty handle"
