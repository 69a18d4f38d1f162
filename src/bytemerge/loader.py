"""
Loading vocabularies from the line-oriented ``<base64 token> <rank>`` format.
"""

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import IO, override

from ._decorators import log_elapsed
from .errors import ParseError, VocabLoadError
from .types import RankMap
from .vocab import Vocab

log = logging.getLogger(__name__)


class VocabLoader(ABC):
    """Source of vocabularies addressed by a URI or path."""

    @abstractmethod
    def load(self, uri: str) -> Vocab:
        """Load the vocabulary identified by ``uri``."""
        ...


class FileVocabLoader(VocabLoader):
    """Loads vocabularies from local files."""

    @override
    def load(self, uri: str) -> Vocab:
        return load_vocab(uri)


@log_elapsed("vocabulary load")
def load_vocab(path: str | Path) -> Vocab:
    """
    Read a vocabulary file from disk.

    :param path: Path of a ``<base64 token> <rank>`` file.
    :raises VocabLoadError: If the file does not exist or cannot be read.
    :raises ParseError: If any line is malformed.
    :raises DuplicateRankError: If two tokens share a rank.
    """
    path = Path(path)
    if not path.exists():
        raise VocabLoadError("vocabulary file does not exist", path=str(path))

    log.info(f"loading vocabulary from {path}")
    try:
        with path.open("rb") as f:
            vocab = load_vocab_stream(f, source=str(path))
    except OSError as e:
        raise VocabLoadError(f"could not read vocabulary file: {e}", path=str(path)) from e

    log.info(f"vocabulary loaded successfully: {len(vocab)} tokens")
    return vocab


def load_vocab_stream(stream: IO[bytes], source: str | None = None) -> Vocab:
    """Read a vocabulary from an open binary stream, rewinding it if seekable."""
    if stream.seekable():
        stream.seek(0)
    return Vocab(parse_ranks(stream, source=source))


def parse_ranks(lines: Iterable[bytes | str], source: str | None = None) -> RankMap:
    """
    Parse ``<base64 token> <rank>`` lines into a token -> rank mapping.

    Blank lines are skipped. Later lines win if a token repeats, which the
    vocabulary then reports as a rank collision.

    :param lines: Lines of the vocabulary source, bytes or text.
    :param source: Optional name of the source for error messages.
    :raises ParseError: If a line does not hold a base64 token and a rank.
    """
    ranks: RankMap = {}
    for line_no, raw in enumerate(lines, start=1):
        line = raw.decode("ascii", errors="replace") if isinstance(raw, bytes) else raw
        line = line.strip()
        if not line:
            continue

        fields = line.split()
        if len(fields) != 2:
            raise ParseError(
                "expected a token and a rank separated by a space",
                line_no=line_no,
                line=line,
                path=source,
            )
        encoded, rank_str = fields

        try:
            token = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise ParseError(
                f"could not decode token {encoded!r}",
                line_no=line_no,
                path=source,
            ) from None
        if not token:
            raise ParseError("token decodes to empty bytes", line_no=line_no, path=source)

        try:
            rank = int(rank_str)
            if rank < 0:
                raise ValueError()
        except ValueError:
            raise ParseError(
                f"rank is not a non-negative integer: {rank_str}",
                line_no=line_no,
                path=source,
            ) from None

        ranks[token] = rank

    log.debug(f"parsed {len(ranks)} vocabulary entries")
    return ranks


def dump_ranks(vocab: Vocab, path: str | Path) -> None:
    """Write ``vocab`` to ``path`` in ``<base64 token> <rank>`` format, in rank order."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    log.debug(f"saving vocabulary to {path}")
    with path.open("w", encoding="ascii", newline="\n") as f:
        for token, rank in vocab.items():
            f.write(f"{base64.b64encode(token).decode('ascii')} {rank}\n")
