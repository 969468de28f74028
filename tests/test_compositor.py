"""Tests for canvas/compositor.py - layer stacking, offset, opacity and export."""
from __future__ import annotations

import pytest
from PyQt6.QtGui import QColor, QImage

from canvas.compositor import Compositor, ExportError
from canvas.store import TextStore
from models import Layer, RenderConfig


def _config(**kw) -> RenderConfig:
    base = dict(width=200, height=100, bg_color="#0000FF", bg_text_color="#00FF00",
                fg_text_color="#FF0000", offset=0, opacity=0.8)
    base.update(kw)
    return RenderConfig(**base)


def _pixels(image: QImage):
    for y in range(image.height()):
        for x in range(image.width()):
            yield x, y, image.pixelColor(x, y)


def _max_red(image: QImage) -> int:
    return max(c.red() for _, _, c in _pixels(image))


def _left_edge(image: QImage, threshold: int = 100) -> int:
    return min(x for x, _, c in _pixels(image) if c.red() > threshold)


@pytest.fixture()
def store():
    return TextStore()


class TestComposite:

    def test_empty_store_is_background(self, qapp, store):
        image = Compositor(store, _config()).generate_image()
        assert (image.width(), image.height()) == (200, 100)
        assert image.pixelColor(0, 0) == QColor("#0000FF")
        assert image.pixelColor(199, 99) == QColor("#0000FF")
        assert image.pixelColor(100, 50) == QColor("#0000FF")

    def test_config_is_read_each_render(self, qapp, store):
        comp = Compositor(store, _config())
        comp.generate_image()
        comp.config.bg_color = "#00FF00"
        assert comp.generate_image().pixelColor(5, 5) == QColor("#00FF00")

    def test_foreground_never_fully_occludes(self, qapp, store, require_fonts):
        store.add_item(Layer.FOREGROUND, "WWW", 80, 100, 50)
        image = Compositor(store, _config(opacity=0.8)).generate_image()
        red = _max_red(image)
        # 0.8 * 255 ~ 204: the blue background still shows through
        assert 190 <= red <= 215
        x, y, c = next((x, y, c) for x, y, c in _pixels(image) if c.red() == red)
        assert c.blue() >= 40

    def test_full_opacity_foreground(self, qapp, store, require_fonts):
        store.add_item(Layer.FOREGROUND, "WWW", 80, 100, 50)
        image = Compositor(store, _config(opacity=1.0)).generate_image()
        assert _max_red(image) >= 250

    def test_offset_shifts_foreground_only(self, qapp, store, require_fonts):
        store.add_item(Layer.FOREGROUND, "I", 60, 80, 50)
        comp = Compositor(store, _config(opacity=1.0))
        base = _left_edge(comp.generate_image())
        comp.config.offset = 20
        shifted = _left_edge(comp.generate_image())
        assert shifted - base == pytest.approx(20, abs=1)

    def test_background_layer_ignores_offset(self, qapp, store, require_fonts):
        store.add_item(Layer.BACKGROUND, "I", 60, 80, 50)
        comp = Compositor(store, _config(bg_text_color="#FF0000"))
        base = _left_edge(comp.generate_image())
        comp.config.offset = 20
        assert _left_edge(comp.generate_image()) == base

    def test_blank_text_draws_nothing(self, qapp, store):
        store.add_item(Layer.FOREGROUND, "  ", 80, 100, 50)
        image = Compositor(store, _config()).generate_image()
        assert _max_red(image) == 0

    def test_selection_not_baked_into_image(self, qapp, store):
        store.add_item(Layer.BACKGROUND, "Hi", 40, 100, 50)
        comp = Compositor(store, _config())
        selected = comp.generate_image()
        store.deselect()
        assert comp.generate_image() == selected


class TestCanvasSize:

    def test_resize_recenters_outside_items(self, qapp, store):
        item = store.add_item(Layer.BACKGROUND, "A", 40, 500, 900)
        comp = Compositor(store, _config())
        comp.set_canvas_size(300, 200)
        assert (item.x, item.y) == (150, 100)
        image = comp.generate_image()
        assert (image.width(), image.height()) == (300, 200)


class TestExport:

    def test_export_png(self, qapp, store, tmp_path):
        store.add_item(Layer.BACKGROUND, "Hi", 40, 100, 50)
        path = tmp_path / "out.png"
        Compositor(store, _config()).export_png(str(path))
        loaded = QImage(str(path))
        assert (loaded.width(), loaded.height()) == (200, 100)

    def test_export_failure_raises(self, qapp, store, tmp_path):
        with pytest.raises(ExportError):
            Compositor(store, _config()).export_png(str(tmp_path / "missing" / "out.png"))


class TestTwoLayerScene:

    def test_background_and_foreground_together(self, qapp, store, require_fonts):
        store.add_item(Layer.BACKGROUND, "A", 60, 100, 50)
        store.add_item(Layer.FOREGROUND, "B", 60, 100, 50)
        comp = Compositor(store, _config(bg_text_color="#00FF00", opacity=0.8))
        base = comp.generate_image()
        comp.config.offset = 20
        shifted = comp.generate_image()

        # foreground is translucent over both the backdrop and the background text
        assert 190 <= _max_red(shifted) <= 215
        assert max(c.green() for _, _, c in _pixels(shifted)) >= 200
        assert _left_edge(shifted) - _left_edge(base) == pytest.approx(20, abs=1)
