#!/usr/bin/env python3
# b64_config.py  v1.0
"""
Config persistence for the base64 preview window.

Plain JSON next to the working directory. Missing keys are filled from
DEFAULT_CONFIG and the file rewritten; unreadable files fall back to the
defaults so a bad config never stops the window opening.
"""

import json
import os

CONFIG_FILE = "b64preview_config.json"
DEFAULT_CONFIG = {
    "font_path": "font/OpenSans-Regular.ttf",
    "font_size": 20,
    "fps": 60,
    "width": 1024,
    "height": 100,
    "show_bytes": False,
    "log_invalid": True,
    "text": "",
}

# (min, max) for the numeric keys
LIMITS = {
    "font_size": (6, 200),
    "fps": (1, 240),
    "width": (200, 10000),
    "height": (60, 10000),
}


def normalize_config(cfg):
    """Coerce types and clamp numbers; anything unusable goes back to default."""
    out = dict(cfg)
    for key, (lo, hi) in LIMITS.items():
        try:
            out[key] = min(max(int(out.get(key, DEFAULT_CONFIG[key])), lo), hi)
        except (TypeError, ValueError, OverflowError):
            out[key] = DEFAULT_CONFIG[key]
    for key in ("show_bytes", "log_invalid"):
        if not isinstance(out.get(key), bool):
            out[key] = DEFAULT_CONFIG[key]
    for key in ("font_path", "text"):
        if not isinstance(out.get(key), str):
            out[key] = DEFAULT_CONFIG[key]
    return out


def load_config(path=CONFIG_FILE):
    if not os.path.exists(path):
        return dict(DEFAULT_CONFIG)
    try:
        with open(path, encoding="utf-8") as f:
            cfg = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Could not read config {path}: {e}")
        return dict(DEFAULT_CONFIG)
    if not isinstance(cfg, dict):
        return dict(DEFAULT_CONFIG)

    merged = dict(DEFAULT_CONFIG)
    merged.update(cfg)
    merged = normalize_config(merged)
    if merged != cfg:
        save_config(merged, path)
    return merged


def save_config(cfg, path=CONFIG_FILE):
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cfg, f, indent=2)
        return True
    except OSError as e:
        print(f"Could not save config {path}: {e}")
        return False
