"""Utility functions for LevelDB GUI Browser."""

from .constants import _SIGS, FORBIDDEN_FILENAME_CHARS


# ── utility functions ────────────────────────────────────────────────────
def fmtb(b):
    """Format byte count."""
    if b is None:
        return "0B"
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if abs(b) < 1024.0:
            if unit == "B":
                return f"{int(b)}{unit}"
            return f"{b:.1f}{unit}"
        b /= 1024.0
    return f"{b:.1f}PB"

def tr(s, n=220):
    """Truncate string."""
    if s is None:
        return ""
    s = str(s)
    return s[:n] + "..." if len(s) > n else s

def key_text(key):
    """Raw key as text. Undecodable bytes become U+FFFD."""
    return key.decode("utf-8", errors="replace")

def safe_filename(key):
    """File name for a key: control chars and path/shell specials become '_'."""
    out = []
    for ch in key_text(key):
        if ord(ch) < 32 or ch in FORBIDDEN_FILENAME_CHARS:
            out.append("_")
        else:
            out.append(ch)
    return "".join(out) + ".txt"

def hex_dump(data, width=16):
    """Classic offset / hex / ascii dump."""
    lines = []
    for i in range(0, len(data), width):
        chunk = data[i:i + width]
        hex_part = " ".join(f"{b:02x}" for b in chunk)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        lines.append(f"{i:08x}  {hex_part:<{width * 3}s}  {ascii_part}")
    return "\n".join(lines)

def blob_type(data):
    """Detect value type from magic bytes."""
    if not data or not isinstance(data, bytes):
        return "BLOB"
    for sig, name in _SIGS:
        if data[:len(sig)] == sig:
            if name == "RIFF" and len(data) >= 12 and data[8:12] == b'WEBP':
                return "WEBP"
            return name
    return "BLOB"

def is_image(data):
    """Check if data is a displayable image."""
    if not data or not isinstance(data, bytes):
        return False
    if data[:3] == b'\xff\xd8\xff':
        return True
    if data[:8] == b'\x89PNG\r\n\x1a\n':
        return True
    if data[:4] in (b'GIF8',):
        return True
    if data[:2] == b'BM':
        return True
    if len(data) >= 12 and data[:4] == b'RIFF' and data[8:12] == b'WEBP':
        return True
    return False

def key_summary(key):
    """Hover text for a key: the full text, its byte length, and hex when not UTF-8."""
    lines = [key_text(key), fmtb(len(key))]
    try:
        key.decode("utf-8")
    except UnicodeDecodeError:
        lines.append(key.hex(" "))
    return "\n".join(lines)
