"""Shared constants for LevelDB GUI Browser."""

VERSION = "1.0"

# ── colours ──────────────────────────────────────────────────────────────
C = dict(
    bg="#ffffff", bg2="#f7f8fa", bg3="#eef0f4",
    text="#1a1a2e", text2="#5e6c84",
    accent="#0052cc", green="#00875a", red="#de350b", tsel="#cce0ff",
    hbg="#0747a6", hfg="#ffffff", sbg="#f4f5f7",
)

# ── paging / export defaults ─────────────────────────────────────────────
PAGE_SIZE = 100
DUMP_DIR = "leveldb_dump"
ALL_KEYS_FILE = "all_keys.txt"
RULE = "-" * 80
STATUS_TIMEOUT_MS = 5000

# ── rendering ────────────────────────────────────────────────────────────
EMPTY_MARKER = "(empty)"
B64_OPEN = "[b64:"
B64_CLOSE = "]"

# Characters replaced by "_" when a key becomes a file name (plus C0 controls)
FORBIDDEN_FILENAME_CHARS = '/\\:*?"<>|'

# ── status hints ─────────────────────────────────────────────────────────
KEYS_HINT = ("↑/↓: Navigate | Enter: Focus Value | d: Dump Key | "
             "a: Dump All | /: Search | v: Raw Viewer | h: Help | q: Quit")
VALUE_HINT = "Value View | ↑/↓: Scroll | Esc: Back to keys"

# ── value signatures ─────────────────────────────────────────────────────
_SIGS = [
    (b'\xff\xd8\xff',         "JPEG"),
    (b'\x89PNG\r\n\x1a\n',   "PNG"),
    (b'GIF87a',               "GIF"),
    (b'GIF89a',               "GIF"),
    (b'RIFF',                 "RIFF"),
    (b'bplist',               "bplist"),
    (b'<?xml',                "XML/Plist"),
    (b'SQLite format 3',      "SQLite"),
    (b'%PDF',                 "PDF"),
    (b'PK\x03\x04',          "ZIP"),
    (b'\x1f\x8b',            "GZIP"),
    (b'\x28\xb5\x2f\xfd',   "ZSTD"),
    (b'II\x2a\x00',          "TIFF"),
    (b'MM\x00\x2a',          "TIFF"),
    (b'BM',                   "BMP"),
]

_EXT_MAP = {
    "JPEG": ".jpg", "PNG": ".png", "GIF": ".gif", "WEBP": ".webp",
    "bplist": ".plist", "XML/Plist": ".plist", "SQLite": ".sqlite",
    "PDF": ".pdf", "ZIP": ".zip", "GZIP": ".gz", "ZSTD": ".zst",
    "TIFF": ".tif", "BMP": ".bmp", "RIFF": ".riff",
}
