from enum import Enum

from .errors import PatternError


class TokenPattern(str, Enum):
    """
    Pre-defined split patterns for the published BPE vocabularies.

    Members sharing a pattern are enum aliases, so ``GPT4`` resolves to
    ``CL100K`` and so on.

    Source: https://github.com/openai/tiktoken/blob/main/tiktoken_ext/openai_public.py
    """

    R50K = (
        r"'(?:[sdmt]|ll|ve|re)|"
        r" ?\p{L}+|"
        r" ?\p{N}+|"
        r" ?[^\s\p{L}\p{N}]+|"
        r"\s+(?!\S)|"
        r"\s+"
    )

    CL100K = (
        r"'(?i:[sdmt]|ll|ve|re)|"
        r"[^\r\n\p{L}\p{N}]?+\p{L}+|"
        r"\p{N}{1,3}|"
        r" ?[^\s\p{L}\p{N}]++[\r\n]*|"
        r"\s*[\r\n]|"
        r"\s+(?!\S)|"
        r"\s+"
    )

    O200K = (
        r"[^\r\n\p{L}\p{N}]?[\p{Lu}\p{Lt}\p{Lm}\p{Lo}\p{M}]*[\p{Ll}\p{Lm}\p{Lo}\p{M}]+(?i:'s|'t|'re|'ve|'m|'ll|'d)?|"
        r"[^\r\n\p{L}\p{N}]?[\p{Lu}\p{Lt}\p{Lm}\p{Lo}\p{M}]+[\p{Ll}\p{Lm}\p{Lo}\p{M}]*(?i:'s|'t|'re|'ve|'m|'ll|'d)?|"
        r"\p{N}{1,3}|"
        r" ?[^\s\p{L}\p{N}]+[\r\n/]*|"
        r"\s*[\r\n]+|"
        r"\s+(?!\S)|"
        r"\s+"
    )

    # generic splitters, handy for hand-built vocabularies
    WHOLE = r"\S+|\s+"
    WORDS = r"\w+|\W"

    # aliases
    P50K = R50K
    GPT2 = R50K
    GPT4 = CL100K
    GPT4O = O200K

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive, ``_base`` suffix optional)."""
        try:
            return cls[_member_key(name)].value
        except KeyError:
            raise PatternError(
                f"unknown pattern: {name!r}. "
                f"valid patterns: {', '.join(cls.__members__)}"
            ) from None


def _member_key(name: str) -> str:
    """Normalise a pattern name to its member key: case, dashes, ``_base`` suffix."""
    return name.upper().replace("-", "_").removesuffix("_BASE")


def is_builtin_pattern(name: str) -> bool:
    """Check whether ``name`` refers to a built-in split pattern."""
    return _member_key(name) in TokenPattern.__members__


def get_pattern(name: str) -> str:
    """Return the split pattern registered under ``name``."""
    return TokenPattern.get(name)


def list_patterns() -> list[str]:
    """Return names of all built-in split patterns, aliases included."""
    return [name.lower() for name in TokenPattern.__members__]
