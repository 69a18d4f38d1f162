"""bytemerge: byte-pair encoding over fixed, ranked vocabularies."""

from ._config import get_segment_timeout, set_segment_timeout
from .encoder import Encoder
from .errors import (
    BytemergeError,
    DuplicateRankError,
    ModeError,
    ParseError,
    PatternError,
    RankNotFoundError,
    SegmentationError,
    TokenNotFoundError,
    VocabLoadError,
    VocabularyError,
)
from .factory import from_file, from_mapping, from_tiktoken
from .loader import FileVocabLoader, VocabLoader, dump_ranks, load_vocab
from .parallel import list_parallel_modes
from .pattern import TokenPattern, get_pattern, list_patterns
from .segment import RegexSegmenter, Segmenter
from .vocab import Vocab

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bytemerge")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Encoder",
    "Vocab",
    "Segmenter",
    "RegexSegmenter",
    "TokenPattern",
    "VocabLoader",
    "FileVocabLoader",
    "BytemergeError",
    "DuplicateRankError",
    "ModeError",
    "ParseError",
    "PatternError",
    "RankNotFoundError",
    "SegmentationError",
    "TokenNotFoundError",
    "VocabLoadError",
    "VocabularyError",
    "from_file",
    "from_mapping",
    "from_tiktoken",
    "load_vocab",
    "dump_ranks",
    "get_pattern",
    "list_patterns",
    "list_parallel_modes",
    "get_segment_timeout",
    "set_segment_timeout",
]
