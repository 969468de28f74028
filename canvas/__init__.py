"""
canvas package

Text store, hit testing, interaction, rendering and compositing for the
naked-eye 3D text canvas.
"""

from canvas.store import TextStore
from canvas.geometry import compute_bounds
from canvas.hit_test import hit_control, hit_test
from canvas.interaction import InteractionController, InteractionSession
from canvas.compositor import Compositor, ExportError
from canvas.view import StereoCanvasView

__all__ = [
    "TextStore",
    "compute_bounds",
    "hit_control",
    "hit_test",
    "InteractionController",
    "InteractionSession",
    "Compositor",
    "ExportError",
    "StereoCanvasView",
]
