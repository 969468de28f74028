"""
canvas/view.py

Widget that shows the composited image, overlays the selection controls
and routes mouse, keyboard and focus events to the interaction controller.
"""

from __future__ import annotations

from typing import Optional, Tuple

from PyQt6.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QImage, QPainter
from PyQt6.QtWidgets import QSizePolicy, QWidget

from canvas.compositor import Compositor
from canvas.interaction import InteractionController
from canvas.renderer import draw_transform_controls
from debug_trace import trace


class StereoCanvasView(QWidget):
    """
    Displays the composite scaled to fit while keeping its aspect ratio.

    Pointer positions are mapped back to canvas pixels before they reach
    the controller. The composite is cached and rebuilt only after
    ``refresh()``.

    Signals:
        changed(): Emitted after any user manipulation that re-rendered.
    """

    changed = pyqtSignal()

    def __init__(self, compositor: Compositor, controller: InteractionController, parent=None):
        super().__init__(parent)
        self.compositor = compositor
        self.controller = controller
        self._image: Optional[QImage] = None
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(270, 270)

    # -------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------

    def refresh(self):
        """Re-render the composite and repaint."""
        self._image = self.compositor.generate_image()
        self.update()

    def image(self) -> QImage:
        if self._image is None:
            self._image = self.compositor.generate_image()
        return self._image

    def _target_rect(self) -> Tuple[QRectF, float]:
        """Where the canvas is drawn in widget coordinates, and its scale."""
        cfg = self.compositor.config
        scale = min(self.width() / cfg.width, self.height() / cfg.height)
        w = cfg.width * scale
        h = cfg.height * scale
        return QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h), scale

    def map_to_canvas(self, pos: QPointF) -> Tuple[float, float]:
        rect, scale = self._target_rect()
        if scale <= 0:
            return pos.x(), pos.y()
        return (pos.x() - rect.left()) / scale, (pos.y() - rect.top()) / scale

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#2b2b2b"))
        rect, scale = self._target_rect()
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.drawImage(rect, self.image())

        # Controls are an overlay only; they never reach the exported PNG
        painter.translate(rect.topLeft())
        painter.scale(scale, scale)
        selected = self.compositor.store.selected_item
        if selected is not None and not selected.is_blank():
            draw_transform_controls(painter, self.compositor.store.selected_bounds)
        painter.end()

    # -------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------

    def _dispatch(self, handled: bool):
        if handled:
            self.refresh()
            self.changed.emit()

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        x, y = self.map_to_canvas(event.position())
        trace(f"pointer down at ({x:.1f}, {y:.1f})", "INPUT")
        self._dispatch(self.controller.pointer_down(x, y))
        self.setCursor(self.controller.cursor_at(x, y))
        event.accept()

    def mouseMoveEvent(self, event):
        x, y = self.map_to_canvas(event.position())
        self._dispatch(self.controller.pointer_move(x, y))
        self.setCursor(self.controller.cursor_at(x, y))

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        if self.controller.pointer_up():
            self.changed.emit()
        x, y = self.map_to_canvas(event.position())
        self.setCursor(self.controller.cursor_at(x, y))
        event.accept()

    def leaveEvent(self, event):
        if self.controller.cancel():
            self.changed.emit()
        self.unsetCursor()
        super().leaveEvent(event)

    def focusOutEvent(self, event):
        if self.controller.cancel():
            self.changed.emit()
        super().focusOutEvent(event)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Delete:
            self._dispatch(self.controller.delete_selected())
            return
        super().keyPressEvent(event)
