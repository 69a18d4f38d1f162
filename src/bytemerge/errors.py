"""Custom exception hierarchy for bytemerge encoding errors."""

import regex as re

from ._sanitise import byte_values, render_piece
from .types import Rank


class BytemergeError(Exception):
    """Base exception for all bytemerge errors."""


class VocabularyError(BytemergeError, ValueError):
    """Raised when a vocabulary mapping holds an invalid token or rank."""

    def __init__(
        self,
        message: str,
        *,
        invalid_tok: object = None,
        invalid_rank: object = None,
    ) -> None:
        """Initialize with the offending token and/or rank appended to the message."""
        extra = " "
        if invalid_tok is not None:
            extra += f"(token: {render_piece(invalid_tok)!r}) "
        if invalid_rank is not None:
            extra += f"(rank: {invalid_rank!r}) "
        super().__init__((message + extra).rstrip())
        self.invalid_tok = invalid_tok
        self.invalid_rank = invalid_rank


class DuplicateRankError(VocabularyError):
    """Raised when two tokens of a vocabulary share the same rank."""

    def __init__(self, message: str, *, ranks: list[Rank] | None = None) -> None:
        """Initialize with optional colliding ranks that get appended to the message."""
        extra = " "
        if ranks:
            shown = ", ".join(str(r) for r in ranks[:10])
            if len(ranks) > 10:
                shown += ", ..."
            extra += f"(duplicate ranks: {shown}) "
        super().__init__(message + extra.rstrip())
        self.ranks = ranks


class RankNotFoundError(BytemergeError, LookupError):
    """Raised when a byte vector has no rank in the vocabulary."""

    def __init__(self, piece: bytes) -> None:
        if isinstance(piece, (bytes, bytearray)):
            message = (
                f"no rank for bytes vector: [{byte_values(piece)}] "
                f"({render_piece(piece)!r})"
            )
        else:
            message = f"no rank for non-bytes piece: {piece!r}"
        super().__init__(message)
        self.piece = piece


class TokenNotFoundError(BytemergeError, LookupError):
    """Raised when a rank has no token in the vocabulary."""

    def __init__(self, rank: Rank) -> None:
        super().__init__(f"no token for rank: {rank}")
        self.rank = rank


class SegmentationError(BytemergeError):
    """Raised when splitting text into pieces fails."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        reason: str | None = None,
    ) -> None:
        """
        Initialize SegmentationError with matching details.

        :param message: Error message.
        :param pattern: The split pattern that was being applied.
        :param reason: Diagnostic reported by the matching engine.
        """
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if reason:
            extra += f"(reason: {reason}) "
        super().__init__((message + extra).rstrip())
        self.pattern = pattern
        self.reason = reason


class PatternError(BytemergeError):
    """Raised when compiling and/or looking up regex patterns."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if regex_err:
            extra += f"(reason: {regex_err}) "
        super().__init__((message + extra).rstrip())
        self.pattern = pattern
        self.regex_err = regex_err


class ParseError(BytemergeError):
    """Raised when a vocabulary source line is malformed."""

    def __init__(
        self,
        message: str,
        *,
        line_no: int | None = None,
        line: str | None = None,
        path: str | None = None,
    ) -> None:
        extra = " "
        if path:
            extra += f"(path: {path}) "
        if line_no is not None:
            extra += f"(line {line_no}) "
        if line is not None:
            extra += f"(got {line!r}) "
        super().__init__((message + extra).rstrip())
        self.line_no = line_no
        self.line = line
        self.path = path


class ModeError(BytemergeError):
    """Raised when an unknown batch processing mode is requested."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available_modes: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available_modes}) (got {invalid_name}) "
        super().__init__((message + extra).rstrip())
        self.invalid_name = invalid_name
        self.available_modes = available_modes


class VocabLoadError(BytemergeError):
    """Raised when a vocabulary source cannot be opened or fetched."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        extra = " "
        if path:
            extra += f"(path: {path}) "
        super().__init__((message + extra).rstrip())
        self.path = path
