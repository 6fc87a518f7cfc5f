# tilelabel/core/text_metrics.py
"""
Label extents from Pillow font metrics. 1 pt = 1 glyph unit at the shaped size.
"""

from __future__ import annotations

import warnings

from PIL import ImageFont

from tilelabel.core.types import ShapedLabel

_font_warning_emitted: set[str] = set()


def _load_font(font_family: str, size: int):
    """TrueType font by family name, else Pillow's default font (warns once per family)."""
    for name in (font_family + ".ttf", font_family.replace(" ", "") + ".ttf", "DejaVuSans.ttf"):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default(size=size)


def measure_text_pt(text: str, font_family: str, font_size_pt: float) -> tuple[float, float]:
    """Return (width_pt, height_pt) of the text's ink box."""
    size = max(1, int(round(font_size_pt)))
    left, top, right, bottom = _load_font(font_family, size).getbbox(text)
    # Fonts load at integer sizes; scale back to the requested size
    scale = font_size_pt / size
    return (float(right - left) * scale, float(bottom - top) * scale)


def shape_label(text: str, font_family: str, font_size_pt: float) -> ShapedLabel | None:
    """Horizontal extents of text centered on its anchor; None for empty text."""
    if not (text or "").strip():
        return None
    width, _ = measure_text_pt(text, font_family, font_size_pt)
    return ShapedLabel(left=-width / 2, right=width / 2)
