"""
canvas/compositor.py

Produces the stereoscopic image: background layer at full opacity, the
foreground layer shifted by the compositing delta and blended at reduced
opacity, then a blur-and-restack depth pass.
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QImage, QPainter

from models import (
    DEFAULT_BG_COLOR,
    DEFAULT_BG_TEXT_COLOR,
    DEFAULT_FG_TEXT_COLOR,
    DEPTH_PASSES,
    Layer,
    RenderConfig,
)
from canvas.renderer import render_layer
from canvas.store import TextStore
from utils import blur_qimage, hex_to_qcolor
from debug_trace import trace_call

log = logging.getLogger(__name__)

_FORMAT = QImage.Format.Format_ARGB32_Premultiplied


class ExportError(RuntimeError):
    """Raised when the composited image cannot be written."""


class Compositor:
    """
    Renders a TextStore through a RenderConfig.

    The config is read on every call, so callers may edit its fields
    between renders.
    """

    def __init__(self, store: TextStore, config: Optional[RenderConfig] = None):
        self.store = store
        self.config = config or RenderConfig()

    def _new_surface(self) -> QImage:
        image = QImage(self.config.width, self.config.height, _FORMAT)
        image.fill(Qt.GlobalColor.transparent)
        return image

    @trace_call("RENDER")
    def generate_image(self) -> QImage:
        """Render the full composite as a new QImage."""
        cfg = self.config
        target = self._new_surface()
        target.fill(Qt.GlobalColor.white)

        painter = QPainter(target)
        try:
            # Base depth plane
            painter.fillRect(0, 0, cfg.width, cfg.height, hex_to_qcolor(cfg.bg_color, QColor(DEFAULT_BG_COLOR)))
            render_layer(painter, self.store, Layer.BACKGROUND,
                         hex_to_qcolor(cfg.bg_text_color, QColor(DEFAULT_BG_TEXT_COLOR)))

            # Foreground plane, shifted and translucent
            foreground = self._new_surface()
            fg_painter = QPainter(foreground)
            try:
                render_layer(fg_painter, self.store, Layer.FOREGROUND,
                             hex_to_qcolor(cfg.fg_text_color, QColor(DEFAULT_FG_TEXT_COLOR)),
                             offset_x=cfg.offset)
            finally:
                fg_painter.end()

            painter.setOpacity(max(0.0, min(1.0, cfg.opacity)))
            painter.drawImage(0, 0, foreground)
            painter.setOpacity(1.0)
        finally:
            painter.end()

        scratch = target.copy()
        painter = QPainter(target)
        try:
            self._apply_depth_pass(painter, scratch)
        finally:
            painter.end()
        return target

    def _apply_depth_pass(self, painter: QPainter, scratch: QImage) -> None:
        """Restack blurred, slightly shifted copies, then the sharp image on top."""
        for radius, dx, dy, opacity in DEPTH_PASSES:
            painter.setOpacity(opacity)
            painter.drawImage(QPointF(dx, dy), blur_qimage(scratch, radius))
        painter.setOpacity(1.0)
        painter.drawImage(0, 0, scratch)

    def set_canvas_size(self, width: int, height: int) -> None:
        """Resize the canvas; items left outside are recentered."""
        self.config.width = width
        self.config.height = height
        self.store.fit_to_canvas(width, height)

    def export_png(self, path: str) -> QImage:
        """Render and write a PNG.

        Raises:
            ExportError: If the file cannot be written.
        """
        image = self.generate_image()
        if not image.save(path, "PNG"):
            raise ExportError(f"Failed to save PNG: {path}")
        log.info("Exported %dx%d image to %s", image.width(), image.height(), path)
        return image
