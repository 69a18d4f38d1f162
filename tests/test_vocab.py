"""Unit tests for Vocab construction and two-way lookups."""

import pytest

from bytemerge import (
    DuplicateRankError,
    RankNotFoundError,
    TokenNotFoundError,
    Vocab,
    VocabularyError,
)


@pytest.fixture
def vocab(hello_ranks):
    """Return the 'hello' vocabulary."""
    return Vocab(hello_ranks)


# Construction
# ---------------------------------------------------------------------------


def test_duplicate_rank_raises():
    """Two tokens sharing a rank is rejected at construction."""
    with pytest.raises(DuplicateRankError) as exc_info:
        Vocab({b"a": 0, b"b": 0})
    assert exc_info.value.ranks == [0]


def test_duplicate_rank_lists_every_collision():
    """All colliding ranks are reported."""
    with pytest.raises(DuplicateRankError) as exc_info:
        Vocab({b"a": 0, b"b": 0, b"c": 1, b"d": 2, b"e": 2})
    assert exc_info.value.ranks == [0, 2]


@pytest.mark.parametrize(
    "ranks",
    [
        {b"a": -1},
        {b"": 0},
        {"a": 0},
        {b"a": 1.5},
        {b"a": True},
    ],
)
def test_invalid_entries_rejected(ranks):
    """Tokens must be non-empty bytes and ranks non-negative integers."""
    with pytest.raises(VocabularyError):
        Vocab(ranks)


def test_duplicate_rank_is_vocabulary_error():
    """Rank collisions are one kind of invalid vocabulary."""
    assert issubclass(DuplicateRankError, VocabularyError)
    assert issubclass(VocabularyError, ValueError)


def test_source_mapping_changes_do_not_leak(hello_ranks):
    """The vocabulary keeps its own copy of the mapping."""
    vocab = Vocab(hello_ranks)
    hello_ranks[b"x"] = 99
    assert b"x" not in vocab
    assert len(vocab) == 7


def test_empty_vocab():
    """An empty mapping builds an empty vocabulary."""
    vocab = Vocab({})
    assert len(vocab) == 0
    assert vocab.max_rank is None


# Lookups
# ---------------------------------------------------------------------------


def test_try_get_rank(vocab):
    """Exact lookup returns the rank or None."""
    assert vocab.try_get_rank(b"he") == 4
    assert vocab.try_get_rank(b"h") == 0
    assert vocab.try_get_rank(b"hel") is None


def test_get_rank_missing_raises(vocab):
    """Missing byte vectors raise with the vector attached."""
    with pytest.raises(RankNotFoundError, match=r"\[120, 121\]") as exc_info:
        vocab.get_rank(b"xy")
    assert exc_info.value.piece == b"xy"


def test_get_rank_non_bytes_raises(vocab):
    """Non-bytes pieces miss cleanly instead of breaking the error message."""
    with pytest.raises(RankNotFoundError, match="non-bytes") as exc_info:
        vocab.get_rank("he")  # type: ignore[arg-type]
    assert exc_info.value.piece == "he"
    with pytest.raises(RankNotFoundError):
        vocab.get_rank([104, 101])  # type: ignore[arg-type]


def test_get_rank_long_piece_message_is_truncated(vocab):
    """Very long pieces are shortened in the error message."""
    with pytest.raises(RankNotFoundError) as exc_info:
        vocab.get_rank(b"x" * 1000)
    assert "..." in str(exc_info.value)
    assert len(str(exc_info.value)) < 600
    assert exc_info.value.piece == b"x" * 1000


def test_get_token(vocab):
    """Inverse lookup returns the token bytes."""
    assert vocab.get_token(6) == b"hello"
    assert vocab.get_token(0) == b"h"


def test_get_token_missing_raises(vocab):
    """Unknown ranks raise with the rank attached."""
    with pytest.raises(TokenNotFoundError, match="999999") as exc_info:
        vocab.get_token(999999)
    assert exc_info.value.rank == 999999


def test_lookup_errors_are_lookup_errors(vocab):
    """Core lookup errors can be caught as LookupError."""
    with pytest.raises(LookupError):
        vocab.get_token(-1)
    with pytest.raises(LookupError):
        vocab.get_rank(b"zzz")


# Introspection
# ---------------------------------------------------------------------------


def test_size_and_len(vocab):
    """size() and len() agree."""
    assert vocab.size() == 7
    assert len(vocab) == 7


def test_items_in_rank_order():
    """items() yields tokens sorted by rank regardless of insertion order."""
    vocab = Vocab({b"c": 2, b"a": 0, b"b": 1})
    assert list(vocab.items()) == [(b"a", 0), (b"b", 1), (b"c", 2)]


def test_max_rank(vocab):
    """max_rank is the largest rank."""
    assert vocab.max_rank == 6


def test_byte_alphabet(vocab, byte_ranks):
    """has_byte_alphabet() requires all 256 single bytes."""
    assert not vocab.has_byte_alphabet()
    assert Vocab(byte_ranks).has_byte_alphabet()


def test_as_mapping_is_read_only(vocab):
    """The exposed mapping cannot be mutated."""
    mapping = vocab.as_mapping()
    assert mapping[b"ll"] == 5
    with pytest.raises(TypeError):
        mapping[b"x"] = 7  # type: ignore[index]
