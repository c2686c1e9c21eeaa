#!/usr/bin/env python3
"""
Base64 Live Preview
Type or paste text; the window shows it at the top and, live, what it
decodes to as base64 at the bottom. Invalid characters and missing
padding are tolerated; the decoded line is a best-effort preview.

Keys:
  text / Space     append
  BackSpace        delete last character
  Ctrl+V           paste clipboard
  Ctrl+C           copy decoded text
  Ctrl+= / Ctrl+-  font size up / down
  F2               toggle raw byte panel
  Escape           clear input

Requirements: pip install pillow numpy
"""

import os
import tkinter as tk
from datetime import datetime, timezone

from PIL import Image, ImageTk

from b64_bytepanel import BytePanel
from b64_config import CONFIG_FILE, load_config, save_config
from b64_decoder import decode_raw, display_from_raw
from b64_render import fit_image, load_font, render_text, typed_char

ICON_FILE = os.path.join("assets", "b64preview.ico")
WINDOW_TITLE = "base64 decoder"
BG = "black"
FONT_STEP = 2


def _utcnow():
    return datetime.now(timezone.utc)


class PreviewGUI:
    def __init__(self, root, config_path=CONFIG_FILE):
        self.root = root
        self.config_path = config_path
        self.config = load_config(config_path)

        self.root.title(WINDOW_TITLE)
        self.root.geometry(f"{self.config['width']}x{self.config['height']}")
        self.root.minsize(200, 60)
        self.root.configure(bg=BG)

        self.log_file = self._open_log_file()
        self.font = load_font(self.config["font_path"], self.config["font_size"])
        self.frame_ms = max(1, 1000 // self.config["fps"])

        self.current_text = ""
        self.decoded_text = ""
        self.raw = b""
        self.invalid_count = 0
        self.text_image = None       # PIL, unscaled
        self.decoded_image = None
        self._tk_images = []         # keep PhotoImages alive while on canvas
        self.dirty = True

        self.build_ui()
        self._set_icon()
        self.bind_keys()

        if self.config["text"]:
            self.add_text(self.config["text"])
        else:
            self.update_text()
        self._frame()   # start render loop

    # ------------------------------------------------------------------
    # File logging
    # ------------------------------------------------------------------
    def _open_log_file(self):
        filename = _utcnow().strftime("b64preview_%Y%m%d.log")
        try:
            f = open(filename, "a", buffering=1, encoding="utf-8")  # line-buffered
            f.write(f"\n--- Session started {_utcnow().strftime('%Y-%m-%d %H:%M:%Sz')} ---\n")
            return f
        except OSError as e:
            print(f"Could not open log file: {e}")
            return None

    def _write_log(self, text):
        if self.log_file:
            try:
                self.log_file.write(text)
            except (OSError, ValueError):
                pass

    def log(self, msg, tag="sys"):
        """Timestamped line to the session log; last message mirrored in the status bar."""
        ts = _utcnow().strftime("%H:%M:%S")
        self._write_log(f"[{ts}z] {msg}\n")
        if hasattr(self, "log_label"):
            colour = "orange" if tag == "err" else "grey"
            self.log_label.config(text=msg, fg=colour)

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def build_ui(self):
        status_bar = tk.Frame(self.root, bg="#1a1a1a")
        status_bar.pack(fill=tk.X, side=tk.BOTTOM)
        self.status_label = tk.Label(status_bar, text="Ready", anchor=tk.W,
                                     bg="#1a1a1a", fg="#888888", font=("Courier", 9))
        self.status_label.pack(side=tk.LEFT, padx=5)
        self.log_label = tk.Label(status_bar, text="", anchor=tk.E,
                                  bg="#1a1a1a", fg="grey", font=("Courier", 9))
        self.log_label.pack(side=tk.RIGHT, padx=5)

        self.byte_panel = BytePanel(self.root)
        if self.config["show_bytes"]:
            self.byte_panel.pack(fill=tk.X, side=tk.BOTTOM)

        self.canvas = tk.Canvas(self.root, background=BG, highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)
        self.canvas.bind("<Configure>", self._on_resize)

    def _set_icon(self):
        if not os.path.exists(ICON_FILE):
            return
        try:
            self._icon = ImageTk.PhotoImage(Image.open(ICON_FILE))
            self.root.iconphoto(True, self._icon)
        except (OSError, tk.TclError) as e:
            self.log(f"[WARN] Could not load icon: {e}", "err")

    def bind_keys(self):
        r = self.root
        r.bind("<Key>", self.on_key)
        r.bind("<space>", lambda e: self.add_text(" ") or "break")
        r.bind("<BackSpace>", lambda e: self.remove_char() or "break")
        r.bind("<Escape>", lambda e: self.clear_text() or "break")
        r.bind("<F2>", lambda e: self.toggle_bytes() or "break")
        for key in ("<Control-v>", "<Control-V>"):
            r.bind(key, self.paste)
        for key in ("<Control-c>", "<Control-C>"):
            r.bind(key, self.copy_decoded)
        for key in ("<Control-equal>", "<Control-plus>"):
            r.bind(key, lambda e: self.change_font_size(FONT_STEP) or "break")
        r.bind("<Control-minus>", lambda e: self.change_font_size(-FONT_STEP) or "break")

    # ------------------------------------------------------------------
    # Input editing
    # ------------------------------------------------------------------
    def on_key(self, event):
        # Ctrl chords come through as control chars; AltGr ones stay printable
        ch = typed_char(event.char)
        if ch is None:
            return None
        self.add_text(ch)
        return "break"

    def add_text(self, s):
        self.current_text += s
        self.update_text(new_from=len(self.current_text) - len(s))

    def remove_char(self):
        if not self.current_text:
            return
        self.current_text = self.current_text[:-1]
        self.update_text()

    def clear_text(self):
        self.current_text = ""
        self.update_text()

    def paste(self, event=None):
        try:
            text = self.root.clipboard_get()
        except tk.TclError as e:
            self.log(f"clipboard error: {e}", "err")
            return "break"
        if text:
            self.add_text(text)
        return "break"

    def copy_decoded(self, event=None):
        self.root.clipboard_clear()
        self.root.clipboard_append(self.decoded_text)
        self.log(f"Copied {len(self.decoded_text)} decoded chars")
        return "break"

    # ------------------------------------------------------------------
    # Decode
    # ------------------------------------------------------------------
    def update_text(self, new_from=None):
        """Re-decode the whole input. Only characters at index >= new_from get logged."""
        invalid = []
        self.raw = decode_raw(self.current_text, on_invalid=lambda c, i: invalid.append((c, i)))
        self.decoded_text = display_from_raw(self.raw)
        self.invalid_count = len(invalid)

        if self.config["log_invalid"] and new_from is not None:
            for c, i in invalid:
                if i >= new_from:
                    self.log(f"invalid char: {c!r} at {i}", "err")

        if self.config["show_bytes"]:
            if self.raw:
                self.byte_panel.show(self.raw)
            else:
                self.byte_panel.clear()

        self.status_label.config(
            text=f"{len(self.current_text)} chars  |  {len(self.raw)} bytes  |  "
                 f"{self.invalid_count} invalid")
        self.recreate_images()

    def recreate_images(self):
        self.text_image = render_text(self.font, self.current_text)
        self.decoded_image = render_text(self.font, self.decoded_text)
        self.dirty = True

    def change_font_size(self, delta):
        size = min(max(self.config["font_size"] + delta, 6), 200)
        if size == self.config["font_size"]:
            return
        self.config["font_size"] = size
        self.font = load_font(self.config["font_path"], size)
        self.recreate_images()
        self.log(f"Font size {size}")

    def toggle_bytes(self):
        self.config["show_bytes"] = not self.config["show_bytes"]
        if self.config["show_bytes"]:
            self.byte_panel.pack(fill=tk.X, side=tk.BOTTOM, before=self.canvas)
            self.update_text()
        else:
            self.byte_panel.pack_forget()

    # ------------------------------------------------------------------
    # Render loop
    # ------------------------------------------------------------------
    def _on_resize(self, event):
        self.dirty = True   # redraw on next frame

    def _frame(self):
        if self.dirty:
            self._redraw()
            self.dirty = False
        self.root.after(self.frame_ms, self._frame)

    def _redraw(self):
        self.canvas.delete("text")
        self._tk_images = []
        cw = self.canvas.winfo_width()
        ch = self.canvas.winfo_height()
        if cw < 2 or ch < 2:
            return

        if self.text_image is not None:
            self._draw(fit_image(self.text_image, cw), 0)

        if self.decoded_image is not None:
            img = fit_image(self.decoded_image, cw)
            self._draw(img, ch - img.height)

    def _draw(self, img, y):
        tk_img = ImageTk.PhotoImage(img)
        self._tk_images.append(tk_img)
        self.canvas.create_image(0, y, anchor=tk.NW, image=tk_img, tags="text")

    # ------------------------------------------------------------------
    def close(self):
        self.config["width"] = self.root.winfo_width()
        self.config["height"] = self.root.winfo_height()
        self.config["text"] = self.current_text
        if not save_config(self.config, self.config_path):
            self._write_log("[WARN] Could not save config\n")
        if self.log_file:
            self.log_file.close()
            self.log_file = None


def main():
    root = tk.Tk()
    app = PreviewGUI(root)

    def on_close():
        app.close()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)
    root.mainloop()


if __name__ == "__main__":
    main()
