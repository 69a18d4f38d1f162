"""Unit tests for reading and writing base64 vocabulary files."""

import base64
import io

import pytest

import bytemerge as bm
from bytemerge import DuplicateRankError, ParseError, VocabLoadError
from bytemerge.loader import load_vocab_stream, parse_ranks


def _line(token: bytes, rank: int) -> str:
    return f"{base64.b64encode(token).decode('ascii')} {rank}\n"


@pytest.fixture
def vocab_file(tmp_path, hello_ranks):
    """Write the 'hello' vocabulary to disk and return its path."""
    path = tmp_path / "hello.tiktoken"
    path.write_text("".join(_line(tok, rank) for tok, rank in hello_ranks.items()))
    return path


# Parsing
# ---------------------------------------------------------------------------


def test_parse_ranks():
    """Lines decode to token -> rank entries; blank lines are skipped."""
    lines = ["aGVsbG8= 6\n", "\n", "aA== 0\n"]
    assert parse_ranks(lines) == {b"hello": 6, b"h": 0}


def test_parse_ranks_accepts_bytes():
    """Binary lines parse the same as text lines."""
    assert parse_ranks([b"IA== 220\n"]) == {b" ": 220}


@pytest.mark.parametrize(
    "line",
    [
        "aGVsbG8=\n",
        "aGVsbG8= 6 7\n",
        "!!!! 1\n",
        "aGVsbG8= six\n",
        "aGVsbG8= -1\n",
    ],
)
def test_parse_ranks_malformed(line):
    """Malformed lines raise ParseError with the line number."""
    with pytest.raises(ParseError) as exc_info:
        parse_ranks(["aA== 0\n", line], source="v.tiktoken")
    assert exc_info.value.line_no == 2
    assert exc_info.value.path == "v.tiktoken"


def test_parse_error_is_not_a_core_error():
    """ParseError is distinguishable from lookup failures."""
    assert not issubclass(ParseError, LookupError)
    assert issubclass(ParseError, bm.BytemergeError)


# Files and streams
# ---------------------------------------------------------------------------


def test_load_vocab(vocab_file, hello_ranks):
    """A file on disk loads into an equivalent vocabulary."""
    vocab = bm.load_vocab(vocab_file)
    assert dict(vocab.as_mapping()) == hello_ranks


def test_file_loader(vocab_file):
    """FileVocabLoader loads by path string."""
    vocab = bm.FileVocabLoader().load(str(vocab_file))
    assert vocab.get_token(6) == b"hello"


def test_load_missing_file(tmp_path):
    """Missing files raise VocabLoadError."""
    with pytest.raises(VocabLoadError):
        bm.load_vocab(tmp_path / "nope.tiktoken")


def test_load_stream_rewinds():
    """Seekable streams are read from the start."""
    stream = io.BytesIO(b"aA== 0\nZQ== 1\n")
    stream.read()
    vocab = load_vocab_stream(stream)
    assert len(vocab) == 2


def test_load_duplicate_ranks(tmp_path):
    """Rank collisions in a file surface as DuplicateRankError."""
    path = tmp_path / "dup.tiktoken"
    path.write_text(_line(b"a", 0) + _line(b"b", 0))
    with pytest.raises(DuplicateRankError):
        bm.load_vocab(path)


def test_dump_and_load(tmp_path, byte_ranks):
    """dump_ranks writes a file load_vocab reads back identically."""
    path = tmp_path / "out" / "bytes.tiktoken"
    bm.dump_ranks(bm.Vocab(byte_ranks), path)

    lines = path.read_text().splitlines()
    assert lines[0] == "AA== 0"
    assert len(lines) == len(byte_ranks)
    assert dict(bm.load_vocab(path).as_mapping()) == byte_ranks
