#!/usr/bin/env python3
# b64_bytepanel.py  v1.0
"""
BytePanel: tkinter widget for the base64 preview window.

Shows the raw decoded buffer as one hex cell per byte, coloured by what the
text stage will make of it: printable, space, control (→ U+FFFD), non-ASCII
(lossy UTF-8, → U+FFFD) or trimmed (trailing zero run, never displayed).

Usage in the preview window:

    from b64_bytepanel import BytePanel
    self.byte_panel = BytePanel(self.root)
    self.byte_panel.pack(fill=tk.X, side=tk.BOTTOM)
    ...
    self.byte_panel.show(decode_raw(text))
"""

import tkinter as tk

from b64_decoder import ByteKind, classify_bytes

# ---------------------------------------------------------------------------
# Colour scheme, same dark look as the text canvas
# ---------------------------------------------------------------------------
BG_PANEL  = '#1a1a1a'
BG_CELL   = '#2a2a2a'
FG_STATUS = '#666666'

KIND_COLOURS = {
    ByteKind.PRINTABLE: ('#0a3a0a', '#00ff88'),   # bg, fg
    ByteKind.SPACE:     ('#1a3a3a', '#66dddd'),
    ByteKind.CONTROL:   ('#6b1a1a', '#ff6666'),
    ByteKind.NON_ASCII: ('#6b4a00', '#ffaa33'),
    ByteKind.TRIMMED:   ('#222222', '#555555'),
}

MAX_DISPLAY_BYTES = 48
CELL_FONT   = ('Courier', 10, 'bold')
LABEL_FONT  = ('Courier', 8)


def kind_colour(kind):
    return KIND_COLOURS.get(kind, (BG_CELL, '#444444'))


class ByteCell(tk.Frame):
    """Single hex byte cell with coloured background."""
    def __init__(self, parent):
        super().__init__(parent, bg=BG_CELL, width=24, height=22,
                         highlightthickness=1, highlightbackground='#333333')
        self.pack_propagate(False)
        self._label = tk.Label(self, text='  ', font=CELL_FONT,
                               bg=BG_CELL, fg='#444444', width=2)
        self._label.pack(expand=True)

    def set_byte(self, value, kind):
        bg, fg = kind_colour(kind)
        self.configure(bg=bg)
        self._label.configure(text=f'{value:02X}', bg=bg, fg=fg)


class BytePanel(tk.Frame):
    """
    Hex view of the raw buffer. Call show(raw) after every decode;
    clear() when the input is emptied.
    """

    def __init__(self, parent):
        super().__init__(parent, bg=BG_PANEL,
                         highlightthickness=1, highlightbackground='#333333')

        header = tk.Frame(self, bg=BG_PANEL)
        header.pack(fill=tk.X, padx=4, pady=(3, 0))
        tk.Label(header, text='RAW BYTES', font=LABEL_FONT,
                 bg=BG_PANEL, fg='#555555').pack(side=tk.LEFT)
        self._count_lbl = tk.Label(header, text='', font=LABEL_FONT,
                                   bg=BG_PANEL, fg='#555555')
        self._count_lbl.pack(side=tk.RIGHT, padx=4)

        row = tk.Frame(self, bg=BG_PANEL)
        row.pack(fill=tk.X, padx=2, pady=(1, 3))
        self._cell_frame = tk.Frame(row, bg=BG_PANEL)
        self._cell_frame.pack(side=tk.LEFT)
        self._cells = []

        self._overflow = tk.Label(row, text='', font=LABEL_FONT,
                                  bg=BG_PANEL, fg=FG_STATUS, anchor='w')
        self._overflow.pack(side=tk.LEFT, padx=(6, 4))

    def set_length(self, n):
        """Resize to n cells."""
        if len(self._cells) == n:
            return
        while len(self._cells) > n:
            self._cells.pop().destroy()
        while len(self._cells) < n:
            cell = ByteCell(self._cell_frame)
            cell.pack(side=tk.LEFT, padx=1)
            self._cells.append(cell)

    def show(self, raw):
        kinds = classify_bytes(raw)
        shown = min(len(raw), MAX_DISPLAY_BYTES)
        self.set_length(shown)
        for cell, value, kind in zip(self._cells, raw, kinds):
            cell.set_byte(value, kind)

        extra = len(raw) - shown
        self._overflow.configure(text=f'+{extra}' if extra > 0 else '')
        trimmed = kinds.count(ByteKind.TRIMMED)
        self._count_lbl.configure(
            text=f'{len(raw)} bytes  ({trimmed} trimmed)' if raw else '')

    def clear(self):
        self.set_length(0)
        self._overflow.configure(text='')
        self._count_lbl.configure(text='')
