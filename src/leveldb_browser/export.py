"""Write store entries to text files."""

import os
import logging

from .constants import DUMP_DIR, ALL_KEYS_FILE, RULE
from .render import render
from .errors import StoreError, ExportError
from .utils import key_text, safe_filename

log = logging.getLogger(__name__)


def entry_text(key, value):
    return f"Key: {key_text(key)}\n\nValue: {render(value)}"


def dump_one(store, key, out_dir=DUMP_DIR):
    """Write one key/value to ``<out_dir>/<sanitized key>.txt``; return the path.

    Lookup failures raise ``StoreError``, file-system failures ``OSError``.
    """
    value = store.get(key)
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, safe_filename(key))
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(entry_text(key, value))
    log.info("dumped %r to %s", key, path)
    return path


def dump_all(store, out_dir=DUMP_DIR):
    """Write every entry, in key order, to ``<out_dir>/all_keys.txt``.

    Returns ``(count, path)``. The filter is ignored. On any store or I/O
    failure the partial file is left on disk and ``ExportError`` is raised.
    """
    path = os.path.join(out_dir, ALL_KEYS_FILE)
    count = 0
    try:
        os.makedirs(out_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f, store.scan() as it:
            it.seek_to_first()
            while it.valid():
                f.write(f"{entry_text(it.key(), it.value())}\n\n{RULE}\n")
                count += 1
                it.next()
    except StoreError as e:
        log.warning("dump of all keys stopped after %d entries: %s", count, e)
        raise ExportError(f"Iterator error: {e}", count, path) from e
    except OSError as e:
        log.warning("dump of all keys stopped after %d entries: %s", count, e)
        raise ExportError(f"Error writing file: {e}", count, path) from e
    log.info("dumped %d keys to %s", count, path)
    return count, path
