"""
canvas/geometry.py

Bounds engine: text metrics, font resolution and rotation helpers.

All measurement goes through QFontMetricsF, so a QGuiApplication must
exist before any function here is called.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import FrozenSet, List, Tuple

from PyQt6.QtCore import QPointF
from PyQt6.QtGui import QFont, QFontDatabase, QFontMetricsF, QPainterPath, QTransform

from models import (
    BOUNDS_PADDING,
    DEFAULT_FONT_FAMILY,
    FALLBACK_FONT_FAMILY,
    LINE_HEIGHT_FACTOR,
    SYSTEM_FONT,
    Bounds,
    TextItem,
)

log = logging.getLogger(__name__)

_GENERIC_HINTS = {
    "sans-serif": QFont.StyleHint.SansSerif,
    "serif": QFont.StyleHint.Serif,
    "cursive": QFont.StyleHint.Cursive,
    "fantasy": QFont.StyleHint.Fantasy,
    "monospace": QFont.StyleHint.Monospace,
    "system-ui": QFont.StyleHint.System,
}


@lru_cache(maxsize=1)
def _installed_families() -> FrozenSet[str]:
    return frozenset(f.lower() for f in QFontDatabase.families())


def _split_family_list(family: str) -> List[str]:
    """Split a CSS-style family list ("'A B', serif") into bare names."""
    return [part.strip().strip("'\"") for part in family.split(",") if part.strip()]


def resolve_font_family(family: str) -> str:
    """Resolve a family value to a concrete installed family or a generic name.

    The SYSTEM_FONT sentinel means "Arial, sans-serif". Names are tried in
    order; a generic keyword ends the search. When nothing matches the
    result is the generic sans-serif family.
    """
    if not family or family == SYSTEM_FONT:
        candidates = [DEFAULT_FONT_FAMILY, FALLBACK_FONT_FAMILY]
    else:
        candidates = _split_family_list(family)

    installed = _installed_families()
    for name in candidates:
        if name.lower() in _GENERIC_HINTS:
            return name.lower()
        if name.lower() in installed:
            return name
    log.debug("No installed font for %r, using %s", family, FALLBACK_FONT_FAMILY)
    return FALLBACK_FONT_FAMILY


def make_font(family: str, pixel_size: int) -> QFont:
    """Bold QFont for a family value at an integer pixel size."""
    resolved = resolve_font_family(family)
    font = QFont(resolved)
    font.setStyleHint(_GENERIC_HINTS.get(resolved, QFont.StyleHint.SansSerif))
    font.setPixelSize(max(1, int(pixel_size)))
    font.setBold(True)
    return font


def _font_for_size(family: str, size: float) -> Tuple[QFont, float]:
    """Return a font near *size* pixels and the factor that corrects it to *size*.

    QFont only takes integer pixel sizes; glyph metrics are linear in size,
    so measurements are taken at the rounded size and rescaled.
    """
    pixel = max(1, round(size))
    return make_font(family, pixel), size / pixel


def compute_bounds(item: TextItem) -> Bounds:
    """Axis-aligned footprint of *item*, ignoring rotation.

    Lines are measured at ``font_size * scale_y``; widths are then
    stretched by ``scale_x``. A fixed padding surrounds the text block,
    which is centered on the item's anchor.
    """
    measured_size = item.font_size * item.scale_y
    font, factor = _font_for_size(item.font_family, measured_size)
    metrics = QFontMetricsF(font)

    lines = item.lines()
    line_height = measured_size * LINE_HEIGHT_FACTOR
    total_height = len(lines) * line_height

    max_width = 0.0
    for line in lines:
        max_width = max(max_width, metrics.horizontalAdvance(line) * factor * item.scale_x)

    width = max_width + BOUNDS_PADDING * 2
    height = total_height + BOUNDS_PADDING * 2
    left = item.x - max_width / 2 - BOUNDS_PADDING
    top = item.y - total_height / 2 - BOUNDS_PADDING
    return Bounds.from_rect(left, top, width, height)


def text_path(item: TextItem) -> QPainterPath:
    """Glyph outlines of *item* in local (unscaled, unrotated) coordinates.

    Each line is centered horizontally on x=0 and vertically on its own
    middle line; the block of lines is centered on y=0 with a spacing of
    ``font_size * 1.2``.
    """
    font, factor = _font_for_size(item.font_family, item.font_size)
    metrics = QFontMetricsF(font)

    # Work in the rounded font's units, then rescale to the exact size
    lines = item.lines()
    line_height = item.font_size * LINE_HEIGHT_FACTOR / factor
    start_y = -(len(lines) - 1) * line_height / 2
    middle_to_baseline = (metrics.ascent() - metrics.descent()) / 2

    path = QPainterPath()
    for index, line in enumerate(lines):
        if not line:
            continue
        advance = metrics.horizontalAdvance(line)
        baseline = start_y + index * line_height + middle_to_baseline
        path.addText(QPointF(-advance / 2, baseline), font, line)

    if factor != 1.0:
        path = QTransform.fromScale(factor, factor).map(path)
    return path


def item_transform(item: TextItem, offset_x: float = 0.0) -> QTransform:
    """Local-to-canvas transform: translate, rotate (degrees), scale."""
    t = QTransform()
    t.translate(item.x + offset_x, item.y)
    t.rotate(item.rotation)
    t.scale(item.scale_x, item.scale_y)
    return t


def rotate_point(x: float, y: float, cx: float, cy: float, degrees: float) -> Tuple[float, float]:
    """Rotate (x, y) about (cx, cy) by *degrees* (canvas orientation, y down)."""
    angle = math.radians(degrees)
    cos = math.cos(angle)
    sin = math.sin(angle)
    dx = x - cx
    dy = y - cy
    return cx + dx * cos - dy * sin, cy + dx * sin + dy * cos


def pointer_angle(x: float, y: float, cx: float, cy: float) -> float:
    """Angle in degrees of the vector from (cx, cy) to (x, y)."""
    return math.degrees(math.atan2(y - cy, x - cx))
