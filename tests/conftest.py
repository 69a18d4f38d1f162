"""Shared vocabularies for bytemerge tests."""

import pytest


@pytest.fixture
def hello_ranks():
    """Return the 'hello' vocabulary: single letters, 'he', 'll' and the whole word."""
    return {
        b"h": 0,
        b"e": 1,
        b"l": 2,
        b"o": 3,
        b"he": 4,
        b"ll": 5,
        b"hello": 6,
    }


@pytest.fixture
def byte_ranks():
    """Return a vocabulary with every single byte (rank == byte value) plus a few merges."""
    ranks = {bytes([b]): b for b in range(256)}
    ranks.update(
        {
            b"he": 256,
            b"ll": 257,
            b"hello": 258,
            b" w": 259,
            b"or": 260,
            b" wor": 261,
        }
    )
    return ranks
