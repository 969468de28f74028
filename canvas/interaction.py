"""
canvas/interaction.py

Pointer interaction state machine for moving, resizing and rotating the
selected text item.

One controller drives one store; a single InteractionSession holds the
reference values captured on pointer-down, so at most one item is ever
under manipulation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from PyQt6.QtCore import Qt

from models import (
    MIN_SCALE,
    ControlHit,
    InteractionState,
    TextItem,
    TransformMode,
)
from canvas.geometry import pointer_angle
from canvas.hit_test import cursor_for, hit_control, hit_test, in_move_zone
from canvas.store import TextStore

log = logging.getLogger(__name__)

_STATE_FOR_MODE = {
    TransformMode.MOVE: InteractionState.MOVING,
    TransformMode.RESIZE: InteractionState.RESIZING,
    TransformMode.ROTATE: InteractionState.ROTATING,
}


@dataclass
class InteractionSession:
    """Reference values captured when a manipulation starts."""
    state: str = InteractionState.IDLE
    item_id: Optional[int] = None
    # Moving: pointer minus anchor
    offset_x: float = 0.0
    offset_y: float = 0.0
    # Resizing
    handle: Optional[str] = None
    press_x: float = 0.0
    press_y: float = 0.0
    initial_scale_x: float = 1.0
    initial_scale_y: float = 1.0
    initial_width: float = 0.0
    initial_height: float = 0.0
    # Rotating
    center_x: float = 0.0
    center_y: float = 0.0
    initial_angle: float = 0.0


class InteractionController:
    """
    Converts pointer events into transform updates on a TextStore.

    Every handler returns True when the canvas needs to be re-rendered.
    """

    def __init__(self, store: TextStore):
        self.store = store
        self.session = InteractionSession()
        # Called with the item after each transform update
        self.on_item_changed: Optional[Callable[[TextItem], None]] = None

    @property
    def state(self) -> str:
        return self.session.state

    @property
    def is_active(self) -> bool:
        return self.session.state != InteractionState.IDLE

    @property
    def active_item(self) -> Optional[TextItem]:
        if not self.is_active:
            return None
        return self.store.get(self.session.item_id)

    # -------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> bool:
        if self.is_active:
            # A release was missed; drop the stale session first
            self._reset()

        control = self._control_at(x, y)
        if control is not None:
            self._begin(control, self.store.selected_item, x, y)
            return True

        clicked = hit_test(self.store, x, y)
        if clicked is not None:
            self.store.select(clicked.id)
            bounds = self.store.selected_bounds
            if bounds is not None and in_move_zone(bounds, x, y):
                self._begin(ControlHit(TransformMode.MOVE), clicked, x, y)
            return True

        had_selection = self.store.selected_id is not None
        self.store.deselect()
        return had_selection

    def pointer_move(self, x: float, y: float) -> bool:
        s = self.session
        if s.state == InteractionState.IDLE:
            return False
        item = self.store.get(s.item_id)
        if item is None:
            # Item was deleted mid-drag
            self._reset()
            return False

        if s.state == InteractionState.MOVING:
            item.x = x - s.offset_x
            item.y = y - s.offset_y
        elif s.state == InteractionState.ROTATING:
            item.rotation = pointer_angle(x, y, s.center_x, s.center_y) - s.initial_angle
        elif s.state == InteractionState.RESIZING:
            self._apply_resize(item, x - s.press_x, y - s.press_y)

        if self.store.selected_id == item.id:
            self.store.refresh_selection()
        if self.on_item_changed:
            self.on_item_changed(item)
        return True

    def pointer_up(self) -> bool:
        if not self.is_active:
            return False
        log.debug("Finished %s on item %s", self.session.state, self.session.item_id)
        self._reset()
        return True

    def cancel(self) -> bool:
        """Implicit pointer-up for pointer-leave or focus loss."""
        return self.pointer_up()

    def delete_selected(self) -> bool:
        """Delete-key handler: remove the selected item, if any."""
        item_id = self.store.selected_id
        if item_id is None:
            return False
        self._reset()
        self.store.remove_item(item_id)
        return True

    def cursor_at(self, x: float, y: float) -> Qt.CursorShape:
        """Cursor feedback for the pointer position; never mutates."""
        s = self.session
        if s.state == InteractionState.MOVING:
            return Qt.CursorShape.ClosedHandCursor
        if s.state == InteractionState.ROTATING:
            return Qt.CursorShape.CrossCursor
        if s.state == InteractionState.RESIZING:
            return cursor_for(ControlHit(TransformMode.RESIZE, s.handle))

        control = self._control_at(x, y)
        if control is not None:
            return cursor_for(control)
        if hit_test(self.store, x, y) is not None:
            return Qt.CursorShape.PointingHandCursor
        return Qt.CursorShape.ArrowCursor

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------

    def _control_at(self, x: float, y: float) -> Optional[ControlHit]:
        item = self.store.selected_item
        if item is None or item.is_blank():
            return None
        return hit_control(x, y, self.store.selected_bounds)

    def _begin(self, control: ControlHit, item: TextItem, x: float, y: float):
        s = InteractionSession(state=_STATE_FOR_MODE[control.mode], item_id=item.id)
        if control.mode == TransformMode.MOVE:
            s.offset_x = x - item.x
            s.offset_y = y - item.y
        elif control.mode == TransformMode.RESIZE:
            bounds = self.store.selected_bounds or self.store.measure(item)
            s.handle = control.handle
            s.press_x = x
            s.press_y = y
            s.initial_scale_x = item.scale_x
            s.initial_scale_y = item.scale_y
            s.initial_width = bounds.width
            s.initial_height = bounds.height
        elif control.mode == TransformMode.ROTATE:
            s.center_x = item.x
            s.center_y = item.y
            s.initial_angle = pointer_angle(x, y, item.x, item.y) - item.rotation
        self.session = s
        log.debug("Started %s on item %d", s.state, item.id)

    def _apply_resize(self, item: TextItem, dx: float, dy: float):
        s = self.session
        handle = s.handle or ""
        factor_x = 1.0
        factor_y = 1.0

        if "e" in handle:
            factor_x = 1 + dx / s.initial_width
        elif "w" in handle:
            factor_x = 1 - dx / s.initial_width

        if "s" in handle:
            factor_y = 1 + dy / s.initial_height
        elif "n" in handle:
            factor_y = 1 - dy / s.initial_height

        factor_x = max(MIN_SCALE, factor_x)
        factor_y = max(MIN_SCALE, factor_y)
        item.scale_x = max(MIN_SCALE, s.initial_scale_x * factor_x)
        item.scale_y = max(MIN_SCALE, s.initial_scale_y * factor_y)

    def _reset(self):
        self.session = InteractionSession()
