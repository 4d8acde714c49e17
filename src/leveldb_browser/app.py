"""Main application window for LevelDB GUI Browser."""

import os
import logging
import tkinter as tk
from tkinter import ttk

from .constants import C, VERSION, STATUS_TIMEOUT_MS, PAGE_SIZE, DUMP_DIR
from .dialogs import HelpDialog, ValueViewer
from .session import Session, Event
from .utils import fmtb, key_text, key_summary
from .widgets import (ToolTip, KeyRowTip, StatusLine, setup_theme, key_list,
                      value_panel, set_text)

log = logging.getLogger(__name__)


# ── Main Application ─────────────────────────────────────────────────────
class App(tk.Tk):
    """Key list, value panel, filter box and status line over one Session.

    Widget callbacks translate Tk events into session events; after every
    dispatch the widgets are refreshed from session state.
    """

    def __init__(self, store, page_size=PAGE_SIZE, dump_dir=DUMP_DIR):
        super().__init__()
        self.title("LevelDB GUI Browser v" + VERSION)
        self.geometry("1100x700")
        self.configure(bg=C["bg"])
        self.minsize(700, 400)

        setup_theme(self)
        self.store = store
        self.session = Session(store, page_size, dump_dir)
        self._help_win = None
        self._status_scheduled = 0
        self._list_len = 0

        self._build_header()
        self._build_body()
        self._build_footer()
        self._bind_keys()
        self._setup_tooltips()
        self.protocol("WM_DELETE_WINDOW", self._on_app_close)

        self.session.start()
        self._refresh_list(rebuild=True)
        self._refresh_value()
        self._sync_status()
        self._key_list.focus_set()

    # ── Header ───────────────────────────────────────────────────────
    def _build_header(self):
        hf = ttk.Frame(self, style="Header.TFrame")
        hf.pack(fill="x")
        inner = ttk.Frame(hf, style="Header.TFrame")
        inner.pack(fill="x", padx=10, pady=6)

        # Canvas logo - stacked disks
        logo = tk.Canvas(inner, width=40, height=40, bg=C["hbg"], highlightthickness=0)
        logo.pack(side="left", padx=(0, 10))
        for i, y in enumerate((6, 16, 26)):
            logo.create_rectangle(6, y, 34, y + 8, fill=("#60a5fa", "#3b82f6", "#2563eb")[i],
                                  outline="#1d4ed8")

        ttk.Label(inner, text="  LevelDB GUI Browser", style="Header.TLabel").pack(side="left")

        path = self.store.path or ""
        info = f"  {os.path.basename(os.path.normpath(path))}  |  {fmtb(self.store.disk_size())}"
        self._db_info = ttk.Label(inner, text=info, style="DbInfo.TLabel")
        self._db_info.pack(side="left", padx=(16, 0))

        ttk.Button(inner, text="Help", style="Header.TButton",
                   command=lambda: self._dispatch(Event.TOGGLE_HELP)).pack(side="right", padx=3)
        ttk.Button(inner, text="Dump All", style="Header.TButton",
                   command=lambda: self._dispatch(Event.DUMP_ALL)).pack(side="right", padx=3)

    # ── Body ─────────────────────────────────────────────────────────
    def _build_body(self):
        pw = ttk.PanedWindow(self, orient="horizontal")
        pw.pack(fill="both", expand=True, padx=8, pady=(8, 4))

        self._keys_box = ttk.LabelFrame(pw, text=" Keys ")
        pw.add(self._keys_box, weight=1)
        self._key_list = key_list(self._keys_box)

        self._value_box = ttk.LabelFrame(pw, text=" Value ")
        pw.add(self._value_box, weight=2)
        self._value_txt = value_panel(self._value_box)
        self._value_txt.configure(takefocus=True)

    def _build_footer(self):
        sf = ttk.Frame(self)
        sf.pack(fill="x", padx=8, pady=2)
        ttk.Label(sf, text=" Search: ", style="Filter.TLabel").pack(side="left")
        self._filter_var = tk.StringVar()
        self._filter_var.trace_add("write", self._on_filter_change)
        self._filter_entry = ttk.Entry(sf, textvariable=self._filter_var, style="Filter.TEntry")
        self._filter_entry.pack(side="left", fill="x", expand=True, padx=4)

        self._status_lbl = StatusLine(self)
        self._status_lbl.pack(fill="x", side="bottom")

    # ── Bindings ─────────────────────────────────────────────────────
    def _bind_keys(self):
        kl = self._key_list
        kl.bind("<<ListboxSelect>>", self._on_select)
        kl.bind("<Down>", self._on_down)
        kl.bind("<Return>", lambda e: self._show_value())
        kl.bind("<Double-1>", lambda e: self._open_viewer())
        for ch, event in (("d", Event.DUMP_ONE), ("a", Event.DUMP_ALL), ("h", Event.TOGGLE_HELP)):
            kl.bind(f"<KeyPress-{ch}>", lambda e, ev=event: self._dispatch(ev))
            kl.bind(f"<KeyPress-{ch.upper()}>", lambda e, ev=event: self._dispatch(ev))
        kl.bind("<KeyPress-v>", lambda e: self._open_viewer())
        kl.bind("<KeyPress-slash>", lambda e: self._focus_filter())
        kl.bind("<KeyPress-q>", lambda e: self._on_app_close())
        kl.bind("<KeyPress-Q>", lambda e: self._on_app_close())

        vt = self._value_txt
        vt.bind("<Escape>", lambda e: self._back_to_keys())
        vt.bind("<Down>", lambda e: self._scroll_value(1))
        vt.bind("<Up>", lambda e: self._scroll_value(-1))

        fe = self._filter_entry
        fe.bind("<Return>", lambda e: self._key_list.focus_set())
        fe.bind("<Escape>", lambda e: self._key_list.focus_set())

    def _setup_tooltips(self):
        ToolTip(self._filter_entry, "Case-insensitive key filter; the list reloads as you type")
        KeyRowTip(self._key_list, self._describe_row)

    def _describe_row(self, index):
        keys = self.session.keys
        return key_summary(keys[index]) if 0 <= index < len(keys) else None

    # ── Event handlers ───────────────────────────────────────────────
    def _dispatch(self, event, arg=None):
        result = self.session.dispatch(event, arg)
        if event == Event.TOGGLE_HELP:
            self._sync_help()
        self._sync_status()
        return result

    def _on_filter_change(self, *args):
        self._dispatch(Event.FILTER_CHANGED, self._filter_var.get())
        self._refresh_list(rebuild=True)
        self._refresh_value()

    def _on_select(self, event=None):
        sel = self._key_list.curselection()
        if not sel:
            return
        self._dispatch(Event.SELECTION_CHANGED, sel[0])
        self._refresh_value()
        self._refresh_title()

    def _on_down(self, event=None):
        if not self.session.at_last_row():
            return None
        if self._dispatch(Event.SCROLL_PAST_END):
            self._refresh_list()
            self._refresh_value()
        return "break"

    def _show_value(self):
        if self._dispatch(Event.SHOW_VALUE):
            self._value_txt.focus_set()
        return "break"

    def _back_to_keys(self):
        self._dispatch(Event.BACK)
        self._key_list.focus_set()
        return "break"

    def _scroll_value(self, n):
        self._value_txt.yview_scroll(n, "units")
        return "break"

    def _focus_filter(self):
        self._filter_entry.focus_set()
        self._filter_entry.select_range(0, "end")
        return "break"

    def _open_viewer(self):
        s = self.session
        if s.current_key is not None and s.current_value is not None:
            ValueViewer(self, s.current_key, s.current_value)
        return "break"

    # ── Refresh from session ─────────────────────────────────────────
    def _refresh_list(self, rebuild=False):
        """Append newly loaded keys; ``rebuild`` after a filter change."""
        keys = self.session.keys
        kl = self._key_list
        if rebuild:
            kl.delete(0, "end")
            self._list_len = 0
        for key in keys[self._list_len:]:
            kl.insert("end", key_text(key))
        self._list_len = len(keys)
        kl.selection_clear(0, "end")
        sel = self.session.selection
        if sel is not None:
            kl.selection_set(sel)
            kl.activate(sel)
            kl.see(sel)
        self._refresh_title()

    def _refresh_title(self):
        self._keys_box.configure(text=self.session.keys_title())

    def _refresh_value(self):
        s = self.session
        set_text(self._value_txt, s.value_text(), "error" if s.value_error else ())
        self._value_box.configure(text=s.value_label())

    def _sync_help(self):
        if self.session.show_help and self._help_win is None:
            self._help_win = HelpDialog(self, on_close=self._on_help_closed)
        elif not self.session.show_help and self._help_win is not None:
            win, self._help_win = self._help_win, None
            win.destroy()

    def _on_help_closed(self):
        self._help_win = None
        if self.session.show_help:
            self.session.dispatch(Event.TOGGLE_HELP)

    def _sync_status(self):
        s = self.session
        self._status_lbl.show(s.status, s.status_kind)
        if s.status_kind != "hint" and s.status_generation != self._status_scheduled:
            gen = self._status_scheduled = s.status_generation
            self.after(STATUS_TIMEOUT_MS, lambda: self._expire_status(gen))

    def _expire_status(self, generation):
        if self.session.expire_status(generation):
            self._sync_status()

    def _on_app_close(self):
        self.store.close()
        self.destroy()
