"""Parallel processing mode helpers for batch encoding and decoding."""

import sys
from enum import Enum
from typing import Literal

from .errors import ModeError

ParallelStrategy = Literal["auto", "batch", "off"]

# below this many characters a thread pool costs more than it saves
AUTO_MIN_CHARS = 100_000


def gil_enabled() -> bool:
    """
    Check whether threads of this interpreter share a global interpreter lock.

    Merging is pure Python, so threads only run it in parallel on a
    free-threaded build (3.13t and later).
    """
    is_enabled = getattr(sys, "_is_gil_enabled", None)
    return True if is_enabled is None else is_enabled()


class ParallelMode(str, Enum):
    """Named parallelization modes for batch operations."""

    AUTO = "auto"
    BATCH = "batch"
    OFF = "off"

    @classmethod
    def get(cls, name: "str | ParallelMode") -> "ParallelMode":
        """Get parallel mode by name (case-insensitive)."""
        if isinstance(name, ParallelMode):
            return name
        try:
            return cls[name.upper()]
        except KeyError:
            raise ModeError(
                "unknown mode",
                invalid_name=name,
                available_modes=[mode.value for mode in cls],
            ) from None


def list_parallel_modes() -> list[str]:
    """Return available parallel mode names."""
    return [mode.value for mode in ParallelMode]


__all__ = [
    "AUTO_MIN_CHARS",
    "ParallelStrategy",
    "ParallelMode",
    "gil_enabled",
    "list_parallel_modes",
]
