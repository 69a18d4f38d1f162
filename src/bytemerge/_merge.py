"""
Core Byte Pair Encoding (BPE) merge over a single piece.
"""

from .types import Rank
from .vocab import Vocab


def merge_byte_pairs(piece: bytes, vocab: Vocab) -> list[Rank]:
    """
    Decompose ``piece`` into vocabulary tokens by repeated lowest-rank merges.

    ``parts`` holds one ``[start, rank]`` boundary per byte gap plus the end of
    the piece. ``rank`` is the rank of the part starting at ``start`` fused with
    the part to its right, or ``None`` when that pair is not a token or there
    is no right neighbour. Each round fuses the pair with the smallest rank,
    preferring the leftmost one on equal ranks, and only refreshes the ranks of
    the fused part and of the part before it.

    Complexity is O(n^2) in the piece length, which is fine for the short
    pieces a split pattern produces.

    :param piece: Non-empty byte string that is not itself a token.
    :param vocab: Vocabulary providing pair ranks.
    :return: Ranks of the final sub-pieces, left to right.
    :raises RankNotFoundError: If a final sub-piece has no rank.
    """
    n = len(piece)
    parts: list[list] = [
        [i, vocab.try_get_rank(piece[i : i + 2]) if i + 1 < n else None]
        for i in range(n + 1)
    ]

    def pair_rank(idx: int) -> Rank | None:
        """Rank of the part at ``idx`` fused with its right neighbour."""
        if idx + 2 >= len(parts):
            return None
        return vocab.try_get_rank(piece[parts[idx][0] : parts[idx + 2][0]])

    while len(parts) > 1:
        min_rank: Rank | None = None
        min_idx = 0
        # strict comparison keeps the leftmost boundary on ties
        for i in range(len(parts) - 1):
            rank = parts[i][1]
            if rank is not None and (min_rank is None or rank < min_rank):
                min_rank = rank
                min_idx = i

        if min_rank is None:
            break

        # fuse the winning part with its right neighbour
        del parts[min_idx + 1]

        parts[min_idx][1] = pair_rank(min_idx)
        if min_idx > 0:
            parts[min_idx - 1][1] = pair_rank(min_idx - 1)

    return [
        vocab.get_rank(piece[parts[i][0] : parts[i + 1][0]])
        for i in range(len(parts) - 1)
    ]
