"""
Printable rendering of token pieces for log lines and error messages.
"""

import unicodedata

# longer pieces are cut in messages so one bad piece cannot flood a log
MAX_RENDERED = 64


def _escape_ctrl_chars(s: str) -> str:
    """Replace Unicode control characters with ``\\uXXXX`` escapes."""
    # category "C*" covers Cc, Cf, Cs, Co and Cn
    return "".join(
        f"\\u{ord(c):04x}" if unicodedata.category(c)[0] == "C" else c for c in s
    )


def byte_values(piece: object) -> str:
    """Comma-separated byte values of ``piece``, or its repr if it is not bytes."""
    if not isinstance(piece, (bytes, bytearray)):
        return repr(piece)
    shown = ", ".join(str(b) for b in piece[:MAX_RENDERED])
    if len(piece) > MAX_RENDERED:
        shown += ", ..."
    return shown


def render_piece(piece: object) -> str:
    """
    Render a token piece as readable text.

    Bytes are decoded as UTF-8 with invalid sequences replaced, so partial
    multi-byte tokens still show up. Anything else falls back to ``repr``.
    """
    if not isinstance(piece, (bytes, bytearray)):
        return repr(piece)
    text = _escape_ctrl_chars(
        bytes(piece[:MAX_RENDERED]).decode("utf-8", errors="replace")
    )
    return text + "..." if len(piece) > MAX_RENDERED else text
