"""Tests for canvas/hit_test.py - body hits and control-point priority."""
from __future__ import annotations

import pytest
from PyQt6.QtCore import Qt

from conftest import box_measure
from canvas.hit_test import (
    cursor_for,
    handle_positions,
    hit_control,
    hit_test,
    rotate_handle_position,
)
from canvas.store import TextStore
from models import RESIZE_HANDLES, Bounds, ControlHit, Layer, TransformMode


@pytest.fixture()
def store():
    return TextStore(measure=box_measure(100, 40))


# ─────────────────────────────────────────────────────────
# Body hit test
# ─────────────────────────────────────────────────────────

class TestHitTest:

    def test_topmost_item_wins(self, store):
        store.add_item(Layer.BACKGROUND, "under", 40, 200, 200)
        top = store.add_item(Layer.BACKGROUND, "over", 40, 210, 200)
        assert hit_test(store, 205, 200) is top

    def test_layer_does_not_change_order(self, store):
        fg = store.add_item(Layer.FOREGROUND, "fg", 40, 200, 200)
        bg = store.add_item(Layer.BACKGROUND, "bg", 40, 200, 200)
        assert hit_test(store, 200, 200) is bg
        store.remove_item(bg.id)
        assert hit_test(store, 200, 200) is fg

    def test_tolerance_margin(self, store):
        store.add_item(Layer.BACKGROUND, "A", 40, 200, 200)
        # bounds right edge is 250
        assert hit_test(store, 254, 200) is not None
        assert hit_test(store, 256, 200) is None

    def test_blank_items_are_not_hittable(self, store):
        store.add_item(Layer.BACKGROUND, "  \n ", 40, 200, 200)
        assert hit_test(store, 200, 200) is None

    def test_rotated_item_uses_local_frame(self, store):
        item = store.add_item(Layer.BACKGROUND, "A", 40, 200, 200)
        assert hit_test(store, 200, 240) is None
        item.rotation = 90
        assert hit_test(store, 200, 240) is item
        assert hit_test(store, 240, 200) is None

    def test_empty_store(self, store):
        assert hit_test(store, 0, 0) is None


# ─────────────────────────────────────────────────────────
# Control points
# ─────────────────────────────────────────────────────────

BOX = Bounds(100, 100, 300, 200)


class TestControls:

    def test_handle_layout(self):
        handles = handle_positions(BOX)
        assert tuple(handles) == RESIZE_HANDLES
        assert handles["nw"] == (100, 100)
        assert handles["se"] == (300, 200)
        assert handles["n"] == (200, 100)
        assert handles["e"] == (300, 150)
        assert rotate_handle_position(BOX) == (200, 70)

    def test_rotate_handle(self):
        assert hit_control(200, 70, BOX) == ControlHit(TransformMode.ROTATE)

    def test_rotate_beats_resize(self):
        # within reach of both the rotate handle and the "n" handle
        assert hit_control(200, 86, BOX) == ControlHit(TransformMode.ROTATE)

    def test_resize_handles(self):
        assert hit_control(310, 210, BOX) == ControlHit(TransformMode.RESIZE, "se")
        assert hit_control(110, 150, BOX) == ControlHit(TransformMode.RESIZE, "w")
        assert hit_control(200, 199, BOX) == ControlHit(TransformMode.RESIZE, "s")

    def test_handle_reach(self):
        assert hit_control(316, 200, BOX) == ControlHit(TransformMode.RESIZE, "se")
        assert hit_control(317, 200, BOX) is None

    def test_move_zone(self):
        assert hit_control(200, 150, BOX) == ControlHit(TransformMode.MOVE)
        # inside the box but in the 20 px border, away from handles
        assert hit_control(150, 105, BOX) is None

    def test_no_selection(self):
        assert hit_control(200, 150, None) is None

    def test_cursor_shapes(self):
        assert cursor_for(None) == Qt.CursorShape.ArrowCursor
        assert cursor_for(ControlHit(TransformMode.ROTATE)) == Qt.CursorShape.CrossCursor
        assert cursor_for(ControlHit(TransformMode.MOVE)) == Qt.CursorShape.OpenHandCursor
        assert cursor_for(ControlHit(TransformMode.RESIZE, "nw")) == Qt.CursorShape.SizeFDiagCursor
        assert cursor_for(ControlHit(TransformMode.RESIZE, "sw")) == Qt.CursorShape.SizeBDiagCursor
        assert cursor_for(ControlHit(TransformMode.RESIZE, "n")) == Qt.CursorShape.SizeVerCursor
        assert cursor_for(ControlHit(TransformMode.RESIZE, "e")) == Qt.CursorShape.SizeHorCursor
