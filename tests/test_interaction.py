"""Tests for canvas/interaction.py - the move/resize/rotate state machine.

Items use a fixed 100 x 40 footprint so the arithmetic is exact.
"""
from __future__ import annotations

import math

import pytest
from PyQt6.QtCore import Qt

from conftest import box_measure
from canvas.interaction import InteractionController
from canvas.store import TextStore
from models import InteractionState, Layer


@pytest.fixture()
def store():
    return TextStore(measure=box_measure(100, 40))


@pytest.fixture()
def controller(store):
    return InteractionController(store)


@pytest.fixture()
def item(store):
    # bounds (150, 180) - (250, 220), selected on creation
    return store.add_item(Layer.FOREGROUND, "Hello", 40, 200, 200)


class TestResize:

    def test_corner_drag_scales_both_axes(self, controller, item):
        assert controller.pointer_down(250, 220)
        assert controller.state == InteractionState.RESIZING
        controller.pointer_move(300, 270)
        assert item.scale_x == pytest.approx(1.5)
        assert item.scale_y == pytest.approx(2.25)
        controller.pointer_up()
        assert controller.state == InteractionState.IDLE

    def test_edge_handle_scales_one_axis(self, controller, item):
        controller.pointer_down(250, 200)  # "e"
        controller.pointer_move(300, 260)
        assert item.scale_x == pytest.approx(1.5)
        assert item.scale_y == 1.0

    def test_west_handle_grows_when_dragged_left(self, controller, item):
        controller.pointer_down(150, 200)
        controller.pointer_move(100, 200)
        assert item.scale_x == pytest.approx(1.5)

    def test_north_handle_shrinks_when_dragged_down(self, controller, item):
        controller.pointer_down(200, 180)
        controller.pointer_move(200, 190)
        assert item.scale_y == pytest.approx(0.75)

    def test_scale_floor(self, controller, item):
        controller.pointer_down(250, 220)
        controller.pointer_move(-500, -500)
        assert item.scale_x == pytest.approx(0.1)
        assert item.scale_y == pytest.approx(0.1)

    def test_factors_relative_to_press(self, controller, item):
        item.scale_x = 2.0
        controller.store.refresh_selection()
        # bounds now 200 wide: (100, 180) - (300, 220)
        controller.pointer_down(300, 220)
        controller.pointer_move(400, 220)
        assert item.scale_x == pytest.approx(3.0)

    def test_bounds_follow_resize(self, controller, store, item):
        controller.pointer_down(250, 220)
        controller.pointer_move(300, 270)
        assert store.selected_bounds.width == pytest.approx(150)


class TestRotate:

    def test_rotate_a_quarter_turn(self, controller, item):
        # rotate handle sits 30 px above the top edge
        assert controller.pointer_down(200, 150)
        assert controller.state == InteractionState.ROTATING
        controller.pointer_move(250, 200)
        assert item.rotation == pytest.approx(90)

    def test_rotation_is_relative_to_grab(self, controller, item):
        item.rotation = 10
        controller.pointer_down(200, 150)
        controller.pointer_move(200, 150)
        assert item.rotation == pytest.approx(10)

    def test_rotation_keeps_anchor(self, controller, item):
        controller.pointer_down(200, 150)
        controller.pointer_move(120, 260)
        assert (item.x, item.y) == (200, 200)


class TestMove:

    def test_drag_from_move_zone(self, controller, item):
        assert controller.pointer_down(205, 200)
        assert controller.state == InteractionState.MOVING
        controller.pointer_move(265, 230)
        assert (item.x, item.y) == (260, 230)
        assert controller.store.selected_bounds.center_x == 260

    def test_click_unselected_body_selects_without_drag(self, controller, store, item):
        store.deselect()
        assert controller.pointer_down(160, 200)
        assert store.selected_id == item.id
        assert controller.state == InteractionState.IDLE

    def test_click_unselected_center_starts_drag(self, controller, store, item):
        store.deselect()
        controller.pointer_down(200, 200)
        assert controller.state == InteractionState.MOVING

    def test_click_other_item_switches_selection(self, controller, store, item):
        other = store.add_item(Layer.BACKGROUND, "Other", 40, 400, 400)
        controller.pointer_down(200, 200)
        assert store.selected_id == item.id
        assert controller.active_item is item
        assert other.x == 400

    def test_click_empty_deselects(self, controller, store, item):
        assert controller.pointer_down(10, 10) is True
        assert store.selected_id is None
        assert controller.pointer_down(10, 10) is False


class TestSessionLifecycle:

    def test_move_while_idle_is_a_noop(self, controller, item):
        assert controller.pointer_move(300, 300) is False
        assert (item.x, item.y) == (200, 200)

    def test_pointer_up_while_idle(self, controller):
        assert controller.pointer_up() is False

    def test_cancel_ends_session(self, controller, item):
        controller.pointer_down(200, 200)
        assert controller.cancel() is True
        assert not controller.is_active
        controller.pointer_move(300, 300)
        assert (item.x, item.y) == (200, 200)

    def test_item_deleted_mid_drag(self, controller, store, item):
        controller.pointer_down(200, 200)
        store.remove_item(item.id)
        assert controller.pointer_move(300, 300) is False
        assert controller.state == InteractionState.IDLE

    def test_stale_session_replaced_on_press(self, controller, item):
        controller.pointer_down(200, 150)  # rotate
        controller.pointer_down(200, 200)  # release was missed
        assert controller.state == InteractionState.MOVING

    def test_delete_selected(self, controller, store, item):
        assert controller.delete_selected() is True
        assert len(store) == 0
        assert controller.delete_selected() is False

    def test_item_changed_callback(self, controller, item):
        seen = []
        controller.on_item_changed = seen.append
        controller.pointer_down(200, 200)
        controller.pointer_move(210, 200)
        assert seen == [item]

    def test_blank_selection_has_no_controls(self, controller, store, item):
        item.text = "   "
        store.refresh_selection()
        controller.pointer_down(250, 220)
        assert controller.state == InteractionState.IDLE


class TestCursor:

    def test_cursor_over_controls(self, controller, item):
        assert controller.cursor_at(250, 220) == Qt.CursorShape.SizeFDiagCursor
        assert controller.cursor_at(200, 150) == Qt.CursorShape.CrossCursor
        assert controller.cursor_at(10, 10) == Qt.CursorShape.ArrowCursor

    def test_cursor_during_drag(self, controller, item):
        controller.pointer_down(200, 200)
        assert controller.cursor_at(10, 10) == Qt.CursorShape.ClosedHandCursor

    def test_cursor_does_not_mutate(self, controller, store, item):
        controller.cursor_at(250, 220)
        assert controller.state == InteractionState.IDLE
        assert store.selected_id == item.id


class TestProperties:

    def test_unrotated_item_hit_at_anchor(self, controller, store, item):
        from canvas.hit_test import hit_test
        assert hit_test(store, item.x, item.y) is item

    def test_full_revolution_restores_rotation(self, controller, item):
        item.rotation = 15
        controller.pointer_down(200, 150)
        # sweep the pointer once around the anchor
        for step in range(1, 13):
            angle = -90 + step * 30
            controller.pointer_move(200 + 60 * math.cos(math.radians(angle)),
                                    200 + 60 * math.sin(math.radians(angle)))
        assert item.rotation % 360 == pytest.approx(15)

    def test_move_depends_only_on_last_position(self, controller, store, item):
        other = store.add_item(Layer.FOREGROUND, "Twin", 40, 200, 200)
        controller.pointer_down(200, 200)
        for x, y in ((10, 10), (400, 30), (250, 260)):
            controller.pointer_move(x, y)
        controller.pointer_up()

        store.remove_item(other.id)
        store.select(item.id)
        controller.pointer_down(200, 200)
        controller.pointer_move(250, 260)
        assert (item.x, item.y) == (other.x, other.y) == (250, 260)

    def test_nothing_hittable_after_clear(self, controller, store, item):
        from canvas.hit_test import hit_test
        store.clear_all()
        assert hit_test(store, 200, 200) is None
        assert controller.pointer_down(200, 200) is False
