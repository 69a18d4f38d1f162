"""
Byte-pair encoder: text to ranks and back over a fixed vocabulary.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from math import ceil
from typing import Callable

from ._config import default_workers
from ._merge import merge_byte_pairs
from .errors import SegmentationError
from .parallel import AUTO_MIN_CHARS, ParallelMode, ParallelStrategy, gil_enabled
from .segment import RegexSegmenter, Segmenter
from .types import Rank, TokenBytes
from .vocab import Vocab

log = logging.getLogger(__name__)


class Encoder:
    """
    Encodes text into vocabulary ranks and decodes ranks back into text.

    An encoder is an immutable ``(name, vocab, segmenter)`` triple. It holds no
    per-call state, so one instance can serve concurrent callers.
    """

    __slots__ = ("_name", "_vocab", "_segmenter")

    def __init__(self, name: str, vocab: Vocab, segmenter: Segmenter | str) -> None:
        """
        :param name: Human-readable encoder name.
        :param vocab: Vocabulary of byte tokens and ranks.
        :param segmenter: Segmenter, or a regex pattern string to build one from.
        :raises PatternError: If ``segmenter`` is a string that fails to compile.
        """
        if not name:
            raise ValueError("encoder name must be a non-empty string")
        if isinstance(segmenter, str):
            segmenter = RegexSegmenter(segmenter)
        self._name = name
        self._vocab = vocab
        self._segmenter = segmenter

    @property
    def name(self) -> str:
        return self._name

    @property
    def vocab(self) -> Vocab:
        return self._vocab

    @property
    def segmenter(self) -> Segmenter:
        return self._segmenter

    @property
    def n_vocab(self) -> int:
        """Number of tokens in the vocabulary."""
        return len(self._vocab)

    def __str__(self) -> str:
        return f'Encoder(name="{self._name}", vocab={len(self._vocab)})'

    def __repr__(self) -> str:
        return f"Encoder(name={self._name!r}, vocab={self._vocab!r}, segmenter={self._segmenter!r})"

    # Encoding
    # ===================================================================================

    def encode(self, text: str) -> list[Rank]:
        """
        Encode text into a sequence of ranks.

        Text is split by the segmenter, each non-empty piece is expanded to its
        UTF-8 bytes and either looked up whole or decomposed by pairwise merges.

        :param text: Text to encode.
        :returns: Ranks of all pieces, in input order.
        :raises SegmentationError: If splitting fails or text is not encodable as UTF-8.
        :raises RankNotFoundError: If the vocabulary cannot cover a piece.
        """
        if text == "":
            return []

        tokens: list[Rank] = []
        for match in self._segmenter.segment(text):
            # empty matches produce no tokens
            if not match:
                continue
            try:
                piece = match.encode("utf-8")
            except UnicodeEncodeError as e:
                raise SegmentationError(
                    "piece is not valid unicode text", reason=str(e)
                ) from e
            tokens.extend(self.encode_piece(piece))

        return tokens

    def encode_piece(self, piece: TokenBytes) -> list[Rank]:
        """
        Encode one raw byte piece without segmentation.

        :raises RankNotFoundError: If the vocabulary cannot cover ``piece``.
        """
        if not piece:
            return []
        rank = self._vocab.try_get_rank(piece)
        if rank is not None:
            return [rank]
        return merge_byte_pairs(piece, self._vocab)

    def encode_batch(
        self,
        texts: list[str],
        num_workers: int | None = None,
        parallel_mode: ParallelStrategy | ParallelMode = "auto",
    ) -> list[list[Rank]]:
        """
        Encode many texts using the requested parallelization mode.

        ``off`` encodes texts serially. ``batch`` spreads texts over a thread
        pool. Merging is pure Python and holds the GIL, so on a standard CPython
        build ``batch`` adds overhead without speedup. ``auto`` therefore stays
        serial unless the interpreter is free-threaded and the input is large.

        :param texts: Text inputs to encode.
        :param num_workers: Worker count; defaults to ``BYTEMERGE_MAX_WORKERS`` or the CPU count.
        :param parallel_mode: Parallelization policy.
        :returns: Encoded rank sequences in input order.
        :raises ModeError: If ``parallel_mode`` is unknown.
        """
        mode = ParallelMode.get(parallel_mode)
        if not texts:
            return []
        size = sum(len(text) for text in texts)
        return _run_batch(self.encode, texts, size, num_workers, mode)

    # Decoding
    # ===================================================================================

    def decode_bytes(self, tokens: list[Rank]) -> bytes:
        """
        Decode ranks into the exact concatenation of their token bytes.

        :raises TokenNotFoundError: If any rank is not in the vocabulary.
        """
        if not tokens:
            return b""
        return b"".join(map(self._vocab.get_token, tokens))

    def decode(self, tokens: list[Rank], errors: str = "replace") -> str:
        """
        Decode ranks back into text.

        The byte concatenation is not validated. It is decoded as UTF-8 with
        ``errors`` applied to invalid sequences ("strict", "replace",
        "surrogateescape", ...).

        :raises TokenNotFoundError: If any rank is not in the vocabulary.
        """
        return self.decode_bytes(tokens).decode("utf-8", errors=errors)

    def decode_single_token_bytes(self, token: Rank) -> bytes:
        """
        Return the bytes of one rank.

        :raises TokenNotFoundError: If ``token`` is not in the vocabulary.
        """
        return self._vocab.get_token(token)

    def decode_batch(
        self,
        token_batch: list[list[Rank]],
        errors: str = "replace",
        num_workers: int | None = None,
        parallel_mode: ParallelStrategy | ParallelMode = "auto",
    ) -> list[str]:
        """Decode multiple rank sequences, preserving input order."""
        mode = ParallelMode.get(parallel_mode)
        if not token_batch:
            return []
        size = sum(len(tokens) for tokens in token_batch)
        return _run_batch(
            lambda tokens: self.decode(tokens, errors=errors),
            token_batch,
            size,
            num_workers,
            mode,
        )


def _run_batch[T, R](
    func: Callable[[T], R],
    items: list[T],
    size: int,
    num_workers: int | None,
    mode: ParallelMode,
) -> list[R]:
    """
    Apply ``func`` to every item serially or over a thread pool.

    ``auto`` only uses the pool on free-threaded builds, where pure-Python
    merging can actually run on several cores.
    """
    if num_workers is None:
        workers = default_workers()
    else:
        workers = max(1, num_workers)  # "0" interpreted as 1 worker

    match mode:
        case ParallelMode.OFF:
            use_pool = False
        case ParallelMode.BATCH:
            use_pool = True
        case ParallelMode.AUTO:
            use_pool = (
                len(items) > 1
                and size >= AUTO_MIN_CHARS
                and not gil_enabled()
            )

    if not use_pool or workers == 1 or len(items) <= 1:
        return [func(item) for item in items]

    # group items to reduce task-scheduling overhead when the input
    # contains many documents
    target_tasks = min(len(items), workers * 2)
    group_size = max(1, ceil(len(items) / target_tasks))
    groups = [items[idx : idx + group_size] for idx in range(0, len(items), group_size)]

    def run_group(group: list[T]) -> list[R]:
        return [func(item) for item in group]

    log.debug(f"processing {len(items)} items in {len(groups)} groups on {workers} workers")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(run_group, groups))
    return [result for group in results for result in group]
