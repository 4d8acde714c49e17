"""Browser widgets: key list, value panel, status line and their hover tips."""

import sys
import tkinter as tk
from tkinter import ttk

from .constants import C

STATUS_FG = {"hint": C["text2"], "info": C["text"], "ok": C["green"], "error": C["red"]}


def ui_font(size=9, *extra):
    family = "Segoe UI" if sys.platform == "win32" else "Helvetica"
    return (family, size) + extra


def mono_font():
    return ("Consolas", 10) if sys.platform == "win32" else ("Courier", 10)


# ── hover tips ───────────────────────────────────────────────────────────
def _popup(widget, x, y, text):
    tw = tk.Toplevel(widget)
    tw.wm_overrideredirect(True)
    tw.wm_geometry(f"+{x}+{y}")
    tw.attributes("-topmost", True)
    tk.Label(tw, text=text, bg="#333333", fg="#ffffff", font=ui_font(8),
             padx=6, pady=3, relief="solid", bd=1, wraplength=420,
             justify="left").pack()
    return tw


class ToolTip:
    """Fixed hint shown after hovering over ``widget`` for ``delay`` ms."""

    def __init__(self, widget, text, delay=500):
        self.widget = widget
        self.text = text
        self.delay = delay
        self._tip = None
        self._after_id = None
        widget.bind("<Enter>", self._schedule, add="+")
        widget.bind("<Leave>", self.hide, add="+")
        widget.bind("<ButtonPress>", self.hide, add="+")

    def _schedule(self, event=None):
        self.hide()
        self._after_id = self.widget.after(self.delay, self._show)

    def _show(self):
        self._after_id = None
        if self.widget.winfo_exists():
            self._tip = _popup(self.widget, self.widget.winfo_rootx() + 20,
                               self.widget.winfo_rooty() + self.widget.winfo_height() + 4,
                               self.text)

    def hide(self, event=None):
        if self._after_id:
            self.widget.after_cancel(self._after_id)
            self._after_id = None
        if self._tip:
            self._tip.destroy()
            self._tip = None


class KeyRowTip:
    """Per-row tip for the key list: full key text, length and hex for odd bytes.

    ``describe(index)`` returns the tip text for a row, or None for no tip.
    """

    def __init__(self, listbox, describe, delay=400):
        self.listbox = listbox
        self.describe = describe
        self.delay = delay
        self._tip = None
        self._after_id = None
        self._row = None
        listbox.bind("<Motion>", self._on_motion, add="+")
        for seq in ("<Leave>", "<ButtonPress>", "<MouseWheel>", "<KeyPress>"):
            listbox.bind(seq, self.hide, add="+")

    def _on_motion(self, event):
        lb = self.listbox
        if lb.size() == 0:
            return
        row = lb.nearest(event.y)
        x, y, w, h = lb.bbox(row) or (0, 0, 0, 0)
        if not y <= event.y < y + h:
            row = None
        if row == self._row:
            return
        self.hide()
        self._row = row
        if row is not None:
            self._after_id = lb.after(self.delay, lambda: self._show(row, event.x_root, event.y_root))

    def _show(self, row, x, y):
        self._after_id = None
        if not self.listbox.winfo_exists():
            return
        text = self.describe(row)
        if text:
            self._tip = _popup(self.listbox, x + 12, y + 16, text)

    def hide(self, event=None):
        self._row = None
        if self._after_id:
            self.listbox.after_cancel(self._after_id)
            self._after_id = None
        if self._tip:
            self._tip.destroy()
            self._tip = None


# ── panels ───────────────────────────────────────────────────────────────
def _scrolled(frame, widget):
    sb = ttk.Scrollbar(frame, orient="vertical", command=widget.yview)
    widget.configure(yscrollcommand=sb.set)
    sb.pack(side="right", fill="y")
    widget.pack(fill="both", expand=True)
    return widget


def key_list(parent):
    """Single-selection list of keys in the monospace font."""
    return _scrolled(parent, tk.Listbox(
        parent, selectmode="browse", activestyle="none", exportselection=False,
        font=mono_font(), bg=C["bg"], fg=C["text"], relief="flat",
        selectbackground=C["tsel"], selectforeground=C["text"], highlightthickness=0))


def value_panel(parent, wrap="word", bg=C["bg2"]):
    """Read-only text area for rendered values, with an ``error`` tag."""
    txt = _scrolled(parent, tk.Text(parent, wrap=wrap, font=mono_font(), bg=bg,
                                    fg=C["text"], relief="flat", padx=8, pady=6))
    txt.tag_configure("error", foreground=C["red"])
    txt.configure(state="disabled")
    return txt


def set_text(txt, content, tags=()):
    txt.configure(state="normal")
    txt.delete("1.0", "end")
    txt.insert("1.0", content, tags)
    txt.configure(state="disabled")


class StatusLine(tk.Label):
    """Bottom status bar coloured by status kind (hint, info, ok, error)."""

    def __init__(self, parent):
        super().__init__(parent, text="", anchor="center", bg=C["sbg"],
                         fg=STATUS_FG["hint"], font=ui_font(9), pady=3)

    def show(self, message, kind):
        self.configure(text=message, fg=STATUS_FG.get(kind, C["text"]))


# ── theme ────────────────────────────────────────────────────────────────
def setup_theme(root):
    style = ttk.Style(root)
    style.theme_use("clam")
    plain, bold = ui_font(9), ui_font(9, "bold")

    style.configure("TFrame", background=C["bg"])
    style.configure("TLabel", background=C["bg"], foreground=C["text"], font=plain)
    style.configure("TButton", font=plain, padding=(8, 3))
    # key list / value panel frames
    style.configure("TLabelframe", background=C["bg"])
    style.configure("TLabelframe.Label", background=C["bg"], foreground=C["accent"], font=bold)
    # database header bar
    style.configure("Header.TFrame", background=C["hbg"])
    style.configure("Header.TLabel", background=C["hbg"], foreground=C["hfg"], font=ui_font(14, "bold"))
    style.configure("DbInfo.TLabel", background=C["hbg"], foreground=C["hfg"], font=plain)
    style.configure("Header.TButton", background="#0052cc", foreground="#ffffff", font=plain, padding=(8, 3))
    style.map("Header.TButton", background=[("active", "#003d99")])
    # filter box
    style.configure("Filter.TLabel", background=C["bg"], foreground=C["text"], font=bold)
    style.configure("Filter.TEntry", font=ui_font(11))
    # value viewer image controls
    style.configure("Meta.TLabel", background=C["bg"], foreground=C["text2"], font=ui_font(8))
    style.configure("Zoom.TButton", font=ui_font(8), padding=(4, 1))
