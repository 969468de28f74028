"""
canvas/store.py

Ordered collection of text items plus the single selection slot.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterator, List, Optional

from models import (
    DEFAULT_SEED_COUNT,
    DEFAULT_TEXT_POOL,
    SYSTEM_FONT,
    Bounds,
    Layer,
    TextItem,
)
from canvas.geometry import compute_bounds

log = logging.getLogger(__name__)


class TextStore:
    """
    Owns every TextItem. Insertion order is paint order: later items are
    drawn on top and hit-tested first.

    Args:
        measure: Bounds function used for the cached selection bounds.
            Defaults to font-metrics based ``compute_bounds``.
    """

    def __init__(self, measure: Callable[[TextItem], Bounds] = compute_bounds):
        self.measure = measure
        self._items: List[TextItem] = []
        self._next_id = 0
        self._selected_id: Optional[int] = None
        self._selected_bounds: Optional[Bounds] = None
        # Called after membership or selection changes
        self.on_changed: Optional[Callable[[], None]] = None

    def __iter__(self) -> Iterator[TextItem]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def _notify_changed(self):
        if self.on_changed:
            self.on_changed()

    # -------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------

    def add_item(self, layer: str, text: str, font_size: float, x: float, y: float,
                 font_family: str = SYSTEM_FONT) -> TextItem:
        """Create an item on top of the paint order and select it."""
        if layer not in Layer.ALL:
            raise ValueError(f"unknown layer: {layer!r}")
        item = TextItem(
            id=self._next_id,
            layer=layer,
            text=text,
            font_size=font_size,
            x=x,
            y=y,
            font_family=font_family,
        )
        self._next_id += 1
        self._items.append(item)
        log.debug("Added text item %d on layer %s", item.id, layer)
        self.select(item.id)
        return item

    def remove_item(self, item_id: int) -> None:
        """Remove by id; unknown ids are ignored."""
        before = len(self._items)
        self._items = [it for it in self._items if it.id != item_id]
        if len(self._items) == before:
            return
        if self._selected_id == item_id:
            self._selected_id = None
            self._selected_bounds = None
        self._notify_changed()

    def clear_all(self) -> None:
        self._items = []
        self._selected_id = None
        self._selected_bounds = None
        self._notify_changed()

    def reset(self) -> None:
        """Clear everything and restart id numbering."""
        self._next_id = 0
        self.clear_all()

    def get(self, item_id: Optional[int]) -> Optional[TextItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def items_of(self, layer: str) -> List[TextItem]:
        """Drawable items of *layer* in insertion order."""
        return [it for it in self._items if it.layer == layer and not it.is_blank()]

    # -------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------

    @property
    def selected_id(self) -> Optional[int]:
        return self._selected_id

    @property
    def selected_item(self) -> Optional[TextItem]:
        return self.get(self._selected_id)

    @property
    def selected_bounds(self) -> Optional[Bounds]:
        return self._selected_bounds

    def select(self, item_id: int) -> None:
        item = self.get(item_id)
        if item is None:
            self._selected_id = None
            self._selected_bounds = None
        else:
            self._selected_id = item.id
            self._selected_bounds = self.measure(item)
        self._notify_changed()

    def deselect(self) -> None:
        if self._selected_id is None:
            return
        self._selected_id = None
        self._selected_bounds = None
        self._notify_changed()

    def refresh_selection(self) -> None:
        """Recompute cached bounds after the selected item's geometry changed."""
        item = self.selected_item
        self._selected_bounds = self.measure(item) if item is not None else None

    # -------------------------------------------------------------------
    # Bulk edits
    # -------------------------------------------------------------------

    def set_font_family_all(self, family: str) -> None:
        for item in self._items:
            item.font_family = family
        self.refresh_selection()

    def fit_to_canvas(self, width: int, height: int) -> List[TextItem]:
        """Recenter items whose anchor lies outside the canvas.

        Returns:
            The items that were moved.
        """
        cx = width / 2
        cy = height / 2
        moved = []
        for item in self._items:
            if item.x < 0 or item.x > width or item.y < 0 or item.y > height:
                item.x = cx
                item.y = cy
                moved.append(item)
        if moved:
            log.debug("Recentered %d item(s) for %dx%d canvas", len(moved), width, height)
            self.refresh_selection()
        return moved

    def seed_defaults(self, width: int, height: int, count: int = DEFAULT_SEED_COUNT,
                      rng: Optional[random.Random] = None,
                      font_family: str = SYSTEM_FONT) -> List[TextItem]:
        """Populate with random words from the default pool.

        Each word gets a random layer, a font size in [40, 80] and a
        position at least one font size away from every edge.
        """
        rng = rng or random.Random()
        created = []
        for _ in range(count):
            text = rng.choice(DEFAULT_TEXT_POOL)
            layer = Layer.BACKGROUND if rng.random() < 0.5 else Layer.FOREGROUND
            font_size = rng.randint(40, 80)
            margin = font_size
            x = margin + rng.random() * max(0, width - 2 * margin)
            y = margin + rng.random() * max(0, height - 2 * margin)
            created.append(self.add_item(layer, text, font_size, x, y, font_family))
        return created
