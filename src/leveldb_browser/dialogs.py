"""Dialog windows for LevelDB GUI Browser."""

import io
import base64
import binascii
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from PIL import Image as PILImage, ImageTk

from .constants import C, VERSION, _EXT_MAP
from .render import render
from .utils import blob_type, is_image, fmtb, hex_dump, key_text, tr
from .widgets import ui_font, value_panel, set_text


# ── HelpDialog ───────────────────────────────────────────────────────────
class HelpDialog(tk.Toplevel):
    def __init__(self, parent, on_close=None):
        super().__init__(parent)
        self.title("LevelDB GUI Browser - Help")
        self.geometry("560x480")
        self.configure(bg=C["bg"])
        self.transient(parent)
        self._on_close = on_close
        self.protocol("WM_DELETE_WINDOW", self.close)
        self.bind("<Escape>", lambda e: self.close())
        self.bind("<KeyPress-h>", lambda e: self.close())

        txt = tk.Text(self, wrap="word", font=ui_font(10), bg=C["bg"],
                      fg=C["text"], relief="flat", padx=16, pady=12)
        sb = ttk.Scrollbar(self, orient="vertical", command=txt.yview)
        txt.configure(yscrollcommand=sb.set)
        sb.pack(side="right", fill="y")
        txt.pack(fill="both", expand=True)

        txt.tag_configure("h1", font=ui_font(14, "bold"), foreground=C["accent"],
                          spacing1=12, spacing3=6)
        txt.tag_configure("h2", font=ui_font(11, "bold"), foreground=C["text"],
                          spacing1=10, spacing3=4)
        txt.tag_configure("tip", foreground=C["green"], font=ui_font(10, "italic"))

        def h1(t): txt.insert("end", t + "\n", "h1")
        def h2(t): txt.insert("end", t + "\n", "h2")
        def p(t): txt.insert("end", t + "\n\n")
        def tip(t): txt.insert("end", t + "\n\n", "tip")

        h1("LevelDB GUI Browser v" + VERSION)

        h2("KEY SHORTCUTS")
        p("Arrow Keys   Navigate keys (Down on the last key loads the next page)\n"
          "Enter        Show selected key's value\n"
          "d            Dump key/value to file\n"
          "a            Dump all keys to file\n"
          "v            Open raw value viewer\n"
          "/            Focus search box\n"
          "h            Toggle help window\n"
          "q            Quit application")

        h2("IN VALUE VIEW")
        p("Arrow Keys   Scroll value content\n"
          "Esc          Return to key list")

        h2("SEARCH")
        p("The search box filters keys by case-insensitive substring. "
          "Every change reloads the list from the first key.")

        h2("VALUES")
        p("JSON values are pretty-printed. Other values are shown as text, with "
          "undecodable bytes and control characters replaced by [b64:...] markers "
          "(base64 without padding).")
        tip("Dumps are written to the dump directory as <key>.txt and all_keys.txt.")
        txt.configure(state="disabled")

    def close(self):
        if self._on_close:
            self._on_close()
        self.destroy()


# ── ValueViewer ──────────────────────────────────────────────────────────
class ValueViewer(tk.Toplevel):
    def __init__(self, parent, key, data):
        super().__init__(parent)
        self.title(f"Value Viewer - {tr(key_text(key), 60)} ({fmtb(len(data))})")
        self.geometry("700x550")
        self.configure(bg=C["bg"])
        self._data = data
        self._pil_img = None
        self._tk_img = None
        self._zoom = 1.0
        self.bind("<Escape>", lambda e: self.destroy())

        # Pack buttons FIRST at bottom so they're always visible
        btnf = ttk.Frame(self)
        btnf.pack(side="bottom", fill="x", padx=8, pady=6)

        nb = ttk.Notebook(self)
        nb.pack(fill="both", expand=True, padx=4, pady=4)

        # Rendered tab
        self._add_text_tab(nb, "Rendered", render(data), wrap="word")
        # Hex tab
        self._add_text_tab(nb, "Hex Dump", hex_dump(data[:16384]), wrap="none")

        # Image tab
        if is_image(data):
            img_frame = ttk.Frame(nb)
            nb.add(img_frame, text="Image Preview")
            self._setup_image_tab(img_frame, data)

        def save_value():
            ext = _EXT_MAP.get(blob_type(data), ".bin")
            path = filedialog.asksaveasfilename(parent=self, defaultextension=ext,
                                                filetypes=[("All files", "*.*")])
            if path:
                try:
                    with open(path, "wb") as f:
                        f.write(data)
                except OSError as e:
                    messagebox.showerror("Error", str(e), parent=self)

        def copy_hex():
            self.clipboard_clear()
            self.clipboard_append(binascii.hexlify(data).decode())

        def copy_b64():
            self.clipboard_clear()
            self.clipboard_append(base64.b64encode(data).decode())

        ttk.Button(btnf, text="Save", command=save_value).pack(side="left", padx=4)
        ttk.Button(btnf, text="Copy Hex", command=copy_hex).pack(side="left", padx=4)
        ttk.Button(btnf, text="Copy Base64", command=copy_b64).pack(side="left", padx=4)
        ttk.Button(btnf, text="Close", command=self.destroy).pack(side="right", padx=4)

    def _add_text_tab(self, nb, title, content, wrap):
        frame = ttk.Frame(nb)
        nb.add(frame, text=title)
        set_text(value_panel(frame, wrap=wrap), content)

    def _setup_image_tab(self, frame, data):
        try:
            self._pil_img = PILImage.open(io.BytesIO(data))
            self._pil_img.load()
        except Exception as e:
            ttk.Label(frame, text=f"Cannot load image: {e}").pack(padx=20, pady=20)
            return
        info_bar = ttk.Frame(frame)
        info_bar.pack(fill="x", padx=4, pady=2)
        fmt = self._pil_img.format or "Unknown"
        w, h = self._pil_img.size
        ttk.Label(info_bar, text=f"Format: {fmt}  |  Size: {w}x{h}  |  Mode: {self._pil_img.mode}",
                  style="Meta.TLabel").pack(side="left")

        ctrl = ttk.Frame(frame)
        ctrl.pack(fill="x", padx=4, pady=2)
        ttk.Button(ctrl, text="Fit", style="Zoom.TButton",
                   command=self._zoom_fit).pack(side="left", padx=2)
        ttk.Button(ctrl, text="100%", style="Zoom.TButton",
                   command=lambda: self._set_zoom(1.0)).pack(side="left", padx=2)
        ttk.Button(ctrl, text="Zoom +", style="Zoom.TButton",
                   command=lambda: self._set_zoom(self._zoom * 1.25)).pack(side="left", padx=2)
        ttk.Button(ctrl, text="Zoom -", style="Zoom.TButton",
                   command=lambda: self._set_zoom(self._zoom / 1.25)).pack(side="left", padx=2)
        self._zoom_lbl = ttk.Label(ctrl, text="100%", style="Meta.TLabel")
        self._zoom_lbl.pack(side="left", padx=8)

        cvs_frame = ttk.Frame(frame)
        cvs_frame.pack(fill="both", expand=True)
        self._img_canvas = tk.Canvas(cvs_frame, bg=C["bg3"], highlightthickness=0)
        xsb = ttk.Scrollbar(cvs_frame, orient="horizontal", command=self._img_canvas.xview)
        ysb = ttk.Scrollbar(cvs_frame, orient="vertical", command=self._img_canvas.yview)
        self._img_canvas.configure(xscrollcommand=xsb.set, yscrollcommand=ysb.set)
        ysb.pack(side="right", fill="y")
        xsb.pack(side="bottom", fill="x")
        self._img_canvas.pack(fill="both", expand=True)
        self._img_canvas.bind("<MouseWheel>",
            lambda e: self._set_zoom(self._zoom * (1.1 if e.delta > 0 else 0.9)))
        self.after(100, self._zoom_fit)

    def _zoom_fit(self):
        if not self._pil_img:
            return
        self._img_canvas.update_idletasks()
        cw = max(self._img_canvas.winfo_width(), 100)
        ch = max(self._img_canvas.winfo_height(), 100)
        iw, ih = self._pil_img.size
        self._set_zoom(min(cw / iw, ch / ih, 1.0))

    def _set_zoom(self, z):
        if not self._pil_img:
            return
        self._zoom = max(0.05, min(z, 10.0))
        iw, ih = self._pil_img.size
        nw = max(1, int(iw * self._zoom))
        nh = max(1, int(ih * self._zoom))
        resized = self._pil_img.resize((nw, nh), PILImage.LANCZOS)
        self._tk_img = ImageTk.PhotoImage(resized)
        self._img_canvas.delete("all")
        self._img_canvas.create_image(0, 0, anchor="nw", image=self._tk_img)
        self._img_canvas.configure(scrollregion=(0, 0, nw, nh))
        self._zoom_lbl.configure(text=f"{int(self._zoom * 100)}%")
