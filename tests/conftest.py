"""
Shared fixtures for resumable tests.

Every test starts from an environment without RESUMABLE_* variables, fresh
cached settings and a fresh default arena.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from resumable.arena import FrameArena, reset_default_arena
from resumable.counters import COUNTER_STYLES
from resumable.producer import ProducerDefinition
from resumable.settings import reset_settings

_ENV_VARS = ("RESUMABLE_DEBUG", "RESUMABLE_MAX_FRAMES", "RESUMABLE_MAX_TRANSITIONS")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_default_arena()
    yield
    reset_settings()
    reset_default_arena()


@pytest.fixture
def arena() -> FrameArena:
    return FrameArena()


@pytest.fixture(params=sorted(COUNTER_STYLES))
def counter_definition(request: pytest.FixtureRequest) -> ProducerDefinition:
    """Both counter implementations, so every scenario runs against each style."""
    return COUNTER_STYLES[request.param]
