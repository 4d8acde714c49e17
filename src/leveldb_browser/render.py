"""Binary-safe rendering of stored values.

``render`` never raises. JSON documents are pretty-printed; anything else goes
through mixed-content rendering, where printable text is kept verbatim and every
run of undecodable bytes or control characters becomes a ``[b64:...]`` marker
(standard alphabet, no padding)::

    >>> render(b'{"a":1}')
    '{\\n  "a": 1\\n}'
    >>> render(b"A\\x00B")
    'A[b64:AA]B'
"""

import json
import base64
import unicodedata

from .constants import EMPTY_MARKER, B64_OPEN, B64_CLOSE

_JSON_SPACE = " \t\r\n"


def render(value):
    if not value:
        return EMPTY_MARKER
    pretty = pretty_json(value)
    if pretty is not None:
        return pretty
    return mixed_content(value)


def _reject_constant(name):
    raise ValueError(f"not JSON: {name}")


def pretty_json(value):
    """Two-space indented JSON, or None when ``value`` is not strict UTF-8 JSON.

    Only whitespace changes: member order, duplicate members, number literals
    and string escapes are written exactly as stored.
    """
    try:
        text = value.decode("utf-8")
        json.loads(text, parse_constant=_reject_constant, parse_int=str, parse_float=str)
    except (ValueError, RecursionError):
        return None
    # json only escapes C0 controls; DEL and C1 can sit raw inside strings
    return "".join(
        f"\\u{ord(ch):04x}"
        if ch != "\n" and unicodedata.category(ch) in ("Cc", "Cs") else ch
        for ch in reindent(text))


def _string_end(text, i):
    """Index just past the string literal opening at ``text[i]``."""
    i += 1
    while text[i] != '"':
        i += 2 if text[i] == "\\" else 1
    return i + 1


def reindent(text, indent="  "):
    """Re-indent already validated JSON text token by token.

    Insignificant whitespace is dropped; empty containers stay ``{}`` / ``[]``.
    """
    out = []
    depth = 0
    opened = False
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if ch in _JSON_SPACE:
            i += 1
            continue
        if opened and ch not in "]}":
            out.append("\n" + indent * depth)
        was_opened, opened = opened, False
        if ch == '"':
            j = _string_end(text, i)
            out.append(text[i:j])
            i = j
            continue
        if ch in "{[":
            depth += 1
            opened = True
            out.append(ch)
        elif ch in "]}":
            depth -= 1
            if not was_opened:
                out.append("\n" + indent * depth)
            out.append(ch)
        elif ch == ",":
            out.append(",\n" + indent * depth)
        elif ch == ":":
            out.append(": ")
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def b64_marker(data):
    return B64_OPEN + base64.b64encode(bytes(data)).decode("ascii").rstrip("=") + B64_CLOSE


def mixed_content(value):
    out = []
    run = bytearray()

    def flush():
        if run:
            out.append(b64_marker(run))
            run.clear()

    # surrogateescape maps each undecodable byte to U+DC80..U+DCFF
    for ch in value.decode("utf-8", errors="surrogateescape"):
        cp = ord(ch)
        if 0xDC80 <= cp <= 0xDCFF:
            run.append(cp - 0xDC00)
        elif unicodedata.category(ch) == "Cc":
            run += ch.encode("utf-8")
        else:
            flush()
            out.append(ch)
    flush()
    return "".join(out)
