"""Environment-driven settings for the resumable package.

Recognised variables:
    RESUMABLE_DEBUG            enable loguru output for the package ("1", "true", "yes")
    RESUMABLE_MAX_FRAMES       capacity of the default frame arena (unset = unbounded)
    RESUMABLE_MAX_TRANSITIONS  jumps a step machine may take in one resume
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from loguru import logger

DEFAULT_MAX_TRANSITIONS = 10_000

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    debug: bool = False
    max_frames: int | None = None
    max_transitions: int = DEFAULT_MAX_TRANSITIONS


def _parse_int(environ: Mapping[str, str], name: str, *, minimum: int = 0) -> int | None:
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def debug_requested(environ: Mapping[str, str] | None = None) -> bool:
    """Read only RESUMABLE_DEBUG, so import never fails on other variables."""
    if environ is None:
        environ = os.environ
    return environ.get("RESUMABLE_DEBUG", "").lower() in _TRUTHY


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build a Settings object from ``environ`` (defaults to ``os.environ``)."""
    if environ is None:
        environ = os.environ
    debug = debug_requested(environ)
    # Zero frames forces allocation failure; zero transitions would stall every step machine.
    max_frames = _parse_int(environ, "RESUMABLE_MAX_FRAMES")
    max_transitions = _parse_int(environ, "RESUMABLE_MAX_TRANSITIONS", minimum=1)
    return Settings(
        debug=debug,
        max_frames=max_frames,
        max_transitions=DEFAULT_MAX_TRANSITIONS if max_transitions is None else max_transitions,
    )


_cache: dict[str, Settings] = {}


def get_settings() -> Settings:
    if "settings" not in _cache:
        _cache["settings"] = load_settings()
    return _cache["settings"]


def reset_settings() -> None:
    """Forget cached settings so the next lookup re-reads the environment."""
    _cache.clear()


def enable_logging() -> None:
    logger.enable("resumable")


def disable_logging() -> None:
    logger.disable("resumable")


__all__ = [
    "DEFAULT_MAX_TRANSITIONS",
    "Settings",
    "debug_requested",
    "disable_logging",
    "enable_logging",
    "get_settings",
    "load_settings",
    "reset_settings",
]
