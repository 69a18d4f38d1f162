"""
Pre-segmentation of raw text into candidate pieces.

The encoder only depends on the :class:`Segmenter` protocol: anything that
turns text into an ordered sequence of non-overlapping substrings will do.
"""

import logging
from collections.abc import Iterator
from typing import Protocol, runtime_checkable

import regex as re

from ._config import get_segment_timeout
from .errors import PatternError, SegmentationError

log = logging.getLogger(__name__)


@runtime_checkable
class Segmenter(Protocol):
    """Capability that splits text into ordered, non-overlapping pieces."""

    def segment(self, text: str) -> Iterator[str]:
        """Yield matched substrings left to right; empty strings are allowed."""
        ...


class RegexSegmenter:
    """Segmenter backed by a ``regex`` module pattern."""

    __slots__ = ("pattern", "compiled_pat")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.compiled_pat: re.Pattern[str] = _compile_pattern(pattern)

    def segment(self, text: str) -> Iterator[str]:
        """
        Yield every match of the pattern over ``text``.

        Matches are materialized before yielding, so a failure surfaces before
        any piece is handed out.

        :raises SegmentationError: If the engine aborts, e.g. on timeout.
        """
        timeout = get_segment_timeout()
        try:
            pieces = [
                m.group(0) for m in self.compiled_pat.finditer(text, timeout=timeout)
            ]
        except TimeoutError as e:
            raise SegmentationError(
                "matching failed", pattern=self.pattern, reason=f"timed out: {e}"
            ) from e
        except (re.error, RecursionError) as e:
            raise SegmentationError(
                "matching failed", pattern=self.pattern, reason=str(e)
            ) from e

        log.debug(f"segmented {len(text)} chars into {len(pieces)} pieces")
        yield from pieces

    def __repr__(self) -> str:
        return f"RegexSegmenter({self.pattern!r})"


def _compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile and validate a regex pattern.

    :param pattern: Regex pattern string to compile.
    :return: Compiled regex pattern.
    :raises PatternError: If pattern is invalid.
    """
    if not pattern:
        raise PatternError("pattern must be a non-empty string")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e)
