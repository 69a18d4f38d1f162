"""Factory functions for creating encoders."""

import logging
from collections.abc import Mapping
from pathlib import Path

from .encoder import Encoder
from .errors import VocabLoadError
from .loader import load_vocab
from .pattern import TokenPattern, is_builtin_pattern
from .segment import Segmenter
from .types import Rank, TokenBytes
from .vocab import Vocab

log = logging.getLogger(__name__)


def _resolve_pattern(pattern: str | Segmenter) -> str | Segmenter:
    """Map built-in pattern names to their regex; pass anything else through."""
    if isinstance(pattern, str) and is_builtin_pattern(pattern):
        return TokenPattern.get(pattern)
    return pattern


def from_mapping(
    ranks: Mapping[TokenBytes, Rank],
    pattern: str | Segmenter = "cl100k",
    name: str = "custom",
) -> Encoder:
    """
    Create an encoder from an in-memory token -> rank mapping.

    :param ranks: Mapping of byte tokens to ranks.
    :param pattern: Built-in pattern name, custom regex pattern, or a segmenter.
    :param name: Encoder name.
    :raises DuplicateRankError: If two tokens share a rank.
    :raises PatternError: If a custom pattern fails to compile.
    """
    return Encoder(name, Vocab(ranks), _resolve_pattern(pattern))


def from_file(
    path: str | Path,
    pattern: str | Segmenter = "cl100k",
    name: str | None = None,
) -> Encoder:
    """
    Create an encoder from a ``<base64 token> <rank>`` vocabulary file.

    :param path: Path to the vocabulary file.
    :param pattern: Built-in pattern name, custom regex pattern, or a segmenter.
    :param name: Encoder name; defaults to the file name without extension.
    :raises VocabLoadError: If the file does not exist.
    :raises ParseError: If the file is malformed.

    .. code-block:: python

        enc = from_file("cl100k_base.tiktoken", pattern="cl100k")
        enc.decode(enc.encode("hello world"))
    """
    path = Path(path)
    vocab = load_vocab(path)
    return Encoder(name or path.stem, vocab, _resolve_pattern(pattern))


def from_tiktoken(encoding_name: str) -> Encoder:
    """
    Create an encoder from one of tiktoken's published encodings.

    Uses tiktoken's mergeable ranks and split pattern; special tokens are not
    carried over. The vocabulary is fetched and cached by tiktoken itself.

    :param encoding_name: tiktoken encoding name, e.g. ``"cl100k_base"``.
    :raises VocabLoadError: If tiktoken is not installed or the name is unknown.
    """
    try:
        import tiktoken
    except ImportError as e:
        raise VocabLoadError(
            "tiktoken is required for published encodings; "
            "install with `pip install bytemerge[pretrained]`"
        ) from e

    try:
        enc = tiktoken.get_encoding(encoding_name)
    except ValueError as e:
        raise VocabLoadError(f"unknown tiktoken encoding: {encoding_name!r}") from e

    # _mergeable_ranks and _pat_str are tiktoken internals with no public
    # accessor; revisit on tiktoken upgrades
    log.info(f"loaded tiktoken encoding {encoding_name} ({enc.n_vocab} tokens)")
    return Encoder(enc.name, Vocab(enc._mergeable_ranks), enc._pat_str)
