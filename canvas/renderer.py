"""
canvas/renderer.py

Layer renderer: draws the text items of one layer with their own
transform, the layer color and a soft drop shadow. Also draws the
selection transform controls used as an on-screen overlay.
"""

from __future__ import annotations

import math
from typing import Optional

from PyQt6.QtCore import QPoint, QPointF, QRectF, QSize, Qt
from PyQt6.QtGui import QBrush, QColor, QImage, QPainter, QPainterPath, QPen

from models import (
    HANDLE_SIZE,
    SHADOW_ALPHA,
    SHADOW_BLUR,
    SHADOW_OFFSET,
    Bounds,
)
from canvas.geometry import item_transform, text_path
from canvas.hit_test import handle_positions, rotate_handle_position
from canvas.store import TextStore
from settings import get_settings
from utils import blur_qimage, hex_to_qcolor
from debug_trace import trace


def render_layer(painter: QPainter, store: TextStore, layer: str, color: QColor,
                 offset_x: float = 0.0) -> None:
    """Draw every drawable item of *layer* onto *painter*.

    Items are positioned at ``(x + offset_x, y)``, rotated by their
    rotation in degrees and scaled by ``(scale_x, scale_y)``.
    """
    brush = QBrush(color)
    for item in store.items_of(layer):
        path = text_path(item)
        if path.isEmpty():
            continue
        transform = item_transform(item, offset_x)
        trace(f"render item {item.id} layer={layer} at ({item.x:.1f}, {item.y:.1f})", "PAINT")

        _draw_shadow(painter, transform.map(path))

        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setTransform(transform, True)
        painter.fillPath(path, brush)
        painter.restore()


def _draw_shadow(painter: QPainter, path: QPainterPath) -> None:
    """Blurred, offset copy of *path* in translucent black.

    The shadow is rasterised into a scratch image cropped to the path so
    the blur stays cheap, then drawn under the glyphs. Its offset is in
    layer space and does not rotate with the item.
    """
    rect = path.boundingRect()
    if rect.isEmpty():
        return
    sigma = SHADOW_BLUR / 2
    margin = int(math.ceil(sigma * 3)) + 1
    origin = QPoint(int(math.floor(rect.left())) - margin, int(math.floor(rect.top())) - margin)
    size = QSize(int(math.ceil(rect.width())) + 2 * margin + 2,
                 int(math.ceil(rect.height())) + 2 * margin + 2)

    scratch = QImage(size, QImage.Format.Format_ARGB32_Premultiplied)
    scratch.fill(Qt.GlobalColor.transparent)
    p = QPainter(scratch)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    p.translate(-origin.x(), -origin.y())
    p.fillPath(path, QColor(0, 0, 0, round(255 * SHADOW_ALPHA)))
    p.end()

    dx, dy = SHADOW_OFFSET
    painter.drawImage(QPointF(origin.x() + dx, origin.y() + dy), blur_qimage(scratch, sigma))


# ─────────────────────────────────────────────────────────
# Selection overlay
# ─────────────────────────────────────────────────────────


def draw_transform_controls(painter: QPainter, bounds: Optional[Bounds]) -> None:
    """Dashed selection box, eight resize handles and the rotate handle."""
    if bounds is None:
        return
    colors = get_settings().settings.handles
    outline = hex_to_qcolor(colors.outline_color, QColor("#007BFF"))
    fill = hex_to_qcolor(colors.fill_color, QColor("#007BFF"))
    border = hex_to_qcolor(colors.border_color, QColor("#FFFFFF"))
    rotate_fill = hex_to_qcolor(colors.rotate_color, QColor("#28A745"))

    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    # Dash pattern is in pen-width units: 5px on, 5px off at width 2
    box_pen = QPen(outline, 2)
    box_pen.setDashPattern([2.5, 2.5])
    painter.setPen(box_pen)
    painter.setBrush(Qt.BrushStyle.NoBrush)
    painter.drawRect(QRectF(bounds.left, bounds.top, bounds.width, bounds.height))

    half = HANDLE_SIZE / 2
    painter.setPen(QPen(border, 2))
    painter.setBrush(QBrush(fill))
    for hx, hy in handle_positions(bounds).values():
        painter.drawRect(QRectF(hx - half, hy - half, HANDLE_SIZE, HANDLE_SIZE))

    rx, ry = rotate_handle_position(bounds)
    painter.setPen(QPen(outline, 2))
    painter.drawLine(QPointF(bounds.center_x, bounds.top), QPointF(rx, ry))

    painter.setPen(QPen(border, 2))
    painter.setBrush(QBrush(rotate_fill))
    radius = half + 4
    painter.drawEllipse(QPointF(rx, ry), radius, radius)

    painter.restore()
