#!/usr/bin/env python3
# b64_render.py  v1.0
"""
Text rasterisation and key filtering for the preview window. No Tk in
here, so the window module can swap toolkits and this stays testable
headless.
"""

import numpy as np
from PIL import Image, ImageDraw, ImageFont

TEXT_COLOUR = (255, 255, 255, 255)


def load_font(path, size):
    try:
        return ImageFont.truetype(path, size)
    except Exception:
        # Missing file or FreeType not built in
        return ImageFont.load_default()


def render_text(font, text, colour=TEXT_COLOUR):
    """RGBA image of `text`, or None when there is nothing to draw."""
    if not text:
        return None
    measure = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
    try:
        left, top, right, bottom = measure.textbbox((0, 0), text, font=font)
    except UnicodeEncodeError:
        # Bitmap fallback font is latin-1 only
        text = text.encode("latin-1", errors="replace").decode("latin-1")
        left, top, right, bottom = measure.textbbox((0, 0), text, font=font)
    w, h = right - left, bottom - top
    if w <= 0 or h <= 0:
        return None
    img = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    ImageDraw.Draw(img).text((-left, -top), text, fill=colour, font=font)
    return img


def fit_size(width, height, max_width):
    """Shrink (never grow) to fit max_width, keeping the aspect ratio."""
    ratio = max_width / width
    if ratio < 1.0:
        return max_width, int(height * ratio)
    return width, height


def fit_image(img, max_width):
    """Nearest-neighbour downscale via index mapping, no per-pixel loops."""
    w, h = img.size
    new_w, new_h = fit_size(w, h, max_width)
    if (new_w, new_h) == (w, h):
        return img
    new_h = max(new_h, 1)

    arr = np.asarray(img)
    x_idx = np.clip((np.arange(new_w) * w / new_w).astype(np.int32), 0, w - 1)
    y_idx = np.clip((np.arange(new_h) * h / new_h).astype(np.int32), 0, h - 1)
    arr = arr[y_idx][:, x_idx]
    return Image.fromarray(np.ascontiguousarray(arr))


def typed_char(char):
    """The character a key press should append, or None.

    Ctrl chords arrive as control characters and are rejected here; AltGr
    compositions arrive printable and are kept.
    """
    if char and char.isprintable():
        return char
    return None
