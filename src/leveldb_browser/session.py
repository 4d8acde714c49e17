"""Browsing session: all state the UI shows, driven by discrete events."""

import logging
from enum import Enum

from .constants import PAGE_SIZE, DUMP_DIR, KEYS_HINT, VALUE_HINT
from . import export
from .pager import Pager
from .render import render
from .errors import StoreError, ExportError
from .utils import key_text, blob_type, fmtb

log = logging.getLogger(__name__)


class Event(Enum):
    FILTER_CHANGED = "filter_changed"        # arg: new filter text
    SELECTION_CHANGED = "selection_changed"  # arg: list index
    SCROLL_PAST_END = "scroll_past_end"
    SHOW_VALUE = "show_value"
    BACK = "back"
    DUMP_ONE = "dump_one"
    DUMP_ALL = "dump_all"
    TOGGLE_HELP = "toggle_help"


_TAKES_ARG = {Event.FILTER_CHANGED, Event.SELECTION_CHANGED}


class Session:
    """One operator session over one open store.

    ``mode`` is ``"keys"`` (list shown, selection tracked) or ``"value"``
    (value panel focused). Status messages carry a generation number;
    ``expire_status`` only clears the message it was scheduled for.
    """

    def __init__(self, store, page_size=PAGE_SIZE, dump_dir=DUMP_DIR):
        self.store = store
        self.pager = Pager(store, page_size)
        self.dump_dir = dump_dir
        self.mode = "keys"
        self.selection = None
        self.current_key = None
        self.current_value = None
        self.value_error = None
        self.show_help = False
        self.status = KEYS_HINT
        self.status_kind = "hint"
        self.status_generation = 0
        self._handlers = {
            Event.FILTER_CHANGED: self.change_filter,
            Event.SELECTION_CHANGED: self.select,
            Event.SCROLL_PAST_END: self.scroll_past_end,
            Event.SHOW_VALUE: self.show_value,
            Event.BACK: self.back,
            Event.DUMP_ONE: self.dump_one,
            Event.DUMP_ALL: self.dump_all,
            Event.TOGGLE_HELP: self.toggle_help,
        }

    def dispatch(self, event, arg=None):
        handler = self._handlers[event]
        log.debug("event %s %r", event.value, arg)
        if event in _TAKES_ARG:
            return handler(arg)
        return handler()

    @property
    def keys(self):
        return self.pager.keys

    @property
    def filter_text(self):
        return self.pager.spec

    # ── status line ──────────────────────────────────────────────────
    def set_status(self, message, kind="info"):
        self.status = message
        self.status_kind = kind
        self.status_generation += 1
        return self.status_generation

    def expire_status(self, generation):
        """Revert to the mode hint if ``generation`` is still the newest message."""
        if generation != self.status_generation or self.status_kind == "hint":
            return False
        self._show_hint()
        return True

    def _show_hint(self):
        self.set_status(VALUE_HINT if self.mode == "value" else KEYS_HINT, "hint")

    def _report(self, message):
        log.warning("%s", message)
        self.set_status(message, "error")

    # ── list ─────────────────────────────────────────────────────────
    def start(self):
        return self.change_filter("")

    def change_filter(self, text):
        """Drop all loaded pages and reload page one for ``text``."""
        self.pager.reset(text)
        self.mode = "keys"
        self.selection = None
        self.current_key = None
        self.current_value = None
        self.value_error = None
        if self.pager.error:
            self._report(f"Error: {self.pager.error}")
        if self.keys:
            self.select(0)
        return len(self.keys)

    def select(self, index):
        """Make ``index`` current and look its value up. False if out of range."""
        if index is None or not 0 <= index < len(self.keys):
            return False
        self.selection = index
        self.current_key = self.keys[index]
        self.current_value = None
        self.value_error = None
        try:
            self.current_value = self.store.get(self.current_key)
        except StoreError as e:
            self.value_error = str(e)
            log.warning("lookup of %r failed: %s", self.current_key, e)
        return True

    def at_last_row(self):
        return self.selection is not None and self.selection == len(self.keys) - 1

    def scroll_past_end(self):
        """Load one more page when the selection sits on the last loaded key."""
        if not self.at_last_row() or not self.pager.more:
            return False
        grown = self.pager.extend()
        if self.pager.error:
            self._report(f"Error: {self.pager.error}")
        if not grown:
            return False
        self.select(self.selection + 1)
        if not self.pager.error:
            self.set_status(f"Loaded {len(self.keys)} keys total", "ok")
        return True

    def keys_title(self):
        if not self.keys:
            return " Keys "
        pos = (self.selection or 0) + 1
        return f" Keys ({pos}/{len(self.keys)}) "

    # ── value ────────────────────────────────────────────────────────
    def show_value(self):
        if self.selection is None:
            return False
        self.mode = "value"
        self._show_hint()
        return True

    def back(self):
        if self.mode != "value":
            return False
        self.mode = "keys"
        self._show_hint()
        return True

    def value_text(self):
        if self.current_key is None:
            return ""
        if self.value_error:
            return f"Error: {self.value_error}"
        return f"Key: {key_text(self.current_key)}\n\nValue: {render(self.current_value)}"

    def value_label(self):
        """Short description of the current value for the panel title."""
        if self.current_value is None:
            return " Value "
        kind = blob_type(self.current_value)
        if kind == "BLOB":
            return f" Value ({fmtb(len(self.current_value))}) "
        return f" Value [{kind} {fmtb(len(self.current_value))}] "

    # ── export ───────────────────────────────────────────────────────
    def dump_one(self):
        if self.selection is None or not 0 <= self.selection < len(self.keys):
            self._report("Invalid selection")
            return None
        key = self.keys[self.selection]
        try:
            path = export.dump_one(self.store, key, self.dump_dir)
        except StoreError as e:
            self._report(f"Error: {e}")
            return None
        except OSError as e:
            self._report(f"Error writing file: {e}")
            return None
        self.set_status(f"Dumped to {path}", "ok")
        return path

    def dump_all(self):
        try:
            count, path = export.dump_all(self.store, self.dump_dir)
        except ExportError as e:
            self._report(f"{e} ({e.count} keys written to {e.path})")
            return None
        self.set_status(f"Dumped {count} keys to {path}", "ok")
        return count

    # ── help ─────────────────────────────────────────────────────────
    def toggle_help(self):
        self.show_help = not self.show_help
        return self.show_help
