"""
Immutable bidirectional vocabulary of byte tokens and their merge ranks.
"""

import logging
from collections import Counter
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .errors import (
    DuplicateRankError,
    RankNotFoundError,
    TokenNotFoundError,
    VocabularyError,
)
from .types import InverseRankMap, Rank, RankMap, TokenBytes

log = logging.getLogger(__name__)


class Vocab:
    """
    Exact two-way lookup between byte tokens and ranks.

    Both indices are built once at construction and never mutated, so a single
    instance can be shared by any number of encoders and threads.
    """

    __slots__ = ("_token_to_rank", "_rank_to_token")

    def __init__(self, ranks: Mapping[TokenBytes, Rank]) -> None:
        """
        Build forward and inverse indices from a token -> rank mapping.

        :param ranks: Mapping of non-empty byte strings to non-negative ranks.
        :raises VocabularyError: If a token is not non-empty bytes or a rank is
            not a non-negative integer.
        :raises DuplicateRankError: If two tokens map to the same rank.
        """
        token_to_rank: RankMap = dict(ranks)
        for token, rank in token_to_rank.items():
            _check_entry(token, rank)
        rank_to_token: InverseRankMap = {
            rank: token for token, rank in token_to_rank.items()
        }

        if len(token_to_rank) != len(rank_to_token):
            counts = Counter(token_to_rank.values())
            duplicates = sorted(rank for rank, n in counts.items() if n > 1)
            raise DuplicateRankError(
                "the map of tokens and ranks has duplicates of rank", ranks=duplicates
            )

        self._token_to_rank = token_to_rank
        self._rank_to_token = rank_to_token

        log.debug(f"built vocabulary with {len(token_to_rank)} tokens")
        if not self.has_byte_alphabet():
            log.warning(
                "vocabulary does not contain all 256 single-byte tokens; "
                "encoding arbitrary text may fail"
            )

    def try_get_rank(self, piece: TokenBytes) -> Rank | None:
        """Return the rank of ``piece``, or ``None`` if it is not a token."""
        return self._token_to_rank.get(piece)

    def get_rank(self, piece: TokenBytes) -> Rank:
        """
        Return the rank of ``piece``.

        :raises RankNotFoundError: If ``piece`` is not a token of this vocabulary.
        """
        try:
            return self._token_to_rank[piece]
        except (KeyError, TypeError):
            raise RankNotFoundError(piece) from None

    def get_token(self, rank: Rank) -> TokenBytes:
        """
        Return the byte token for ``rank``.

        :raises TokenNotFoundError: If ``rank`` does not belong to this vocabulary.
        """
        try:
            return self._rank_to_token[rank]
        except (KeyError, TypeError):
            raise TokenNotFoundError(rank) from None

    def size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self._token_to_rank)

    @property
    def max_rank(self) -> Rank | None:
        """Largest rank in the vocabulary, ``None`` when empty."""
        return max(self._rank_to_token, default=None)

    def has_byte_alphabet(self) -> bool:
        """Check whether every single byte 0-255 is a token on its own."""
        return all(bytes([b]) in self._token_to_rank for b in range(256))

    def items(self) -> Iterator[tuple[TokenBytes, Rank]]:
        """Yield ``(token, rank)`` pairs in ascending rank order."""
        for rank in sorted(self._rank_to_token):
            yield self._rank_to_token[rank], rank

    def as_mapping(self) -> Mapping[TokenBytes, Rank]:
        """Return a read-only view of the token -> rank index."""
        return MappingProxyType(self._token_to_rank)

    def __len__(self) -> int:
        return len(self._token_to_rank)

    def __contains__(self, piece: object) -> bool:
        return piece in self._token_to_rank

    def __repr__(self) -> str:
        return f"Vocab(size={len(self)})"


def _check_entry(token: object, rank: object) -> None:
    """Reject tokens that are not non-empty bytes and ranks that are not non-negative ints."""
    if not isinstance(token, bytes) or not token:
        raise VocabularyError("tokens must be non-empty bytes", invalid_tok=token)
    # bool is an int subclass but never a meaningful rank
    if not isinstance(rank, int) or isinstance(rank, bool) or rank < 0:
        raise VocabularyError(
            "ranks must be non-negative integers", invalid_tok=token, invalid_rank=rank
        )
