"""Formatting of primitive values as source-like literals."""

from __future__ import annotations

_MAX_UINT64 = (1 << 64) - 1

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

# Bytes that could not be decoded are carried as lone surrogates
# U+DC80..U+DCFF (the "surrogateescape" convention).
_ESCAPED_BYTE_LO = 0xDC80
_ESCAPED_BYTE_HI = 0xDCFF


def _is_print(ch: str) -> bool:
    """Report whether a character is a letter, mark, number, punctuation,
    symbol or the ASCII space."""
    return ch == " " or ch.isprintable()


def _is_surrogate(ch: str) -> bool:
    return 0xD800 <= ord(ch) <= 0xDFFF


def _byte_len(s: str) -> int:
    """Length of the string in UTF-8 bytes, counting escaped bytes as one."""
    try:
        return len(s.encode("utf-8", errors="surrogateescape"))
    except UnicodeEncodeError:
        return len(s.encode("utf-8", errors="surrogatepass"))


def format_hex(value: int) -> str:
    """Format an unsigned 64-bit integer as hex, zero-padded to a whole
    number of bytes (at least one)."""
    if value < 0 or value > _MAX_UINT64:
        raise ValueError(f"value out of unsigned 64-bit range: {value}")
    digits = f"{value:x}"
    width = max(2, len(digits) + len(digits) % 2)
    return "0x" + digits.zfill(width)


def quote_string(s: str) -> str:
    """Return *s* as a double-quoted literal with non-printable
    characters escaped."""
    out = ['"']
    for ch in s:
        escape = _SIMPLE_ESCAPES.get(ch)
        if escape is not None:
            out.append(escape)
            continue
        if _is_print(ch):
            out.append(ch)
            continue
        cp = ord(ch)
        if _ESCAPED_BYTE_LO <= cp <= _ESCAPED_BYTE_HI:
            out.append(f"\\x{cp - 0xDC00:02x}")
        elif cp < 0x20 or cp == 0x7F:
            out.append(f"\\x{cp:02x}")
        elif _is_surrogate(ch):
            out.append("\\ufffd")
        elif cp < 0x10000:
            out.append(f"\\u{cp:04x}")
        else:
            out.append(f"\\U{cp:08x}")
    out.append('"')
    return "".join(out)


def _raw_invalid(ch: str) -> bool:
    return ch in ("`", "\n") or not (_is_print(ch) or ch == "\t")


def format_string(s: str) -> str:
    """Format *s* as a double-quoted or backtick-quoted literal.

    The double-quoted form is used when it needs no escapes; otherwise a
    raw backtick form is preferred if the text is valid and printable on a
    single line.
    """
    quoted = quote_string(s)
    if _byte_len(quoted) == _byte_len(s) + 2:
        return quoted
    valid = not any(_is_surrogate(ch) for ch in s)
    if valid and not any(_raw_invalid(ch) for ch in s):
        return "`" + s + "`"
    return quoted