"""
properties/effects.py

Global controls: layer colors and presets, canvas size, the compositing
offset and foreground opacity, and the global font.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QColorDialog,
    QComboBox,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from models import COLOR_PRESETS, FONT_CHOICES, SIZE_PRESETS, SYSTEM_FONT, RenderConfig
from utils import contrast_color, hex_to_qcolor, qcolor_to_hex

MAX_OFFSET = 30
MAX_CANVAS_SIDE = 4096


class EffectPanel(QWidget):
    """
    Edits a RenderConfig in place.

    Signals:
        config_changed(): A color, offset or opacity value changed.
        canvas_size_changed(int, int): New width and height requested.
        font_family_changed(str): Global font selection changed.
    """

    config_changed = pyqtSignal()
    canvas_size_changed = pyqtSignal(int, int)
    font_family_changed = pyqtSignal(str)

    def __init__(self, config: RenderConfig, parent=None):
        super().__init__(parent)
        self.config = config
        self._syncing = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._build_color_group())
        layout.addWidget(self._build_size_group())
        layout.addWidget(self._build_effect_group())
        layout.addStretch(1)

        self.set_config(config)

    # -------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------

    def _build_color_group(self) -> QGroupBox:
        group = QGroupBox("Colors")
        layout = QVBoxLayout(group)

        presets = QGridLayout()
        for index, (name, bg, fg) in enumerate(COLOR_PRESETS):
            btn = QPushButton(name)
            btn.setToolTip(f"Background {bg}, foreground text {fg}")
            btn.setStyleSheet(f"background-color: {bg}; color: {fg}; font-weight: bold;")
            btn.clicked.connect(lambda _checked, b=bg, f=fg: self.apply_color_preset(b, f))
            presets.addWidget(btn, index // 2, index % 2)
        layout.addLayout(presets)

        form = QFormLayout()
        self.bg_color_btn = QPushButton()
        self.bg_text_color_btn = QPushButton()
        self.fg_text_color_btn = QPushButton()
        self.bg_color_btn.clicked.connect(lambda: self._pick("bg_color", "Background Color"))
        self.bg_text_color_btn.clicked.connect(lambda: self._pick("bg_text_color", "Background Text Color"))
        self.fg_text_color_btn.clicked.connect(lambda: self._pick("fg_text_color", "Foreground Text Color"))
        form.addRow("Background:", self.bg_color_btn)
        form.addRow("Background text:", self.bg_text_color_btn)
        form.addRow("Foreground text:", self.fg_text_color_btn)
        layout.addLayout(form)
        return group

    def _build_size_group(self) -> QGroupBox:
        group = QGroupBox("Canvas Size")
        layout = QVBoxLayout(group)

        row = QHBoxLayout()
        self._size_buttons = []
        for name, w, h in SIZE_PRESETS:
            btn = QPushButton(name)
            btn.setCheckable(True)
            btn.setToolTip(f"{w} x {h}")
            btn.clicked.connect(lambda _checked, ww=w, hh=h: self._request_size(ww, hh))
            self._size_buttons.append((btn, w, h))
            row.addWidget(btn)
        layout.addLayout(row)

        dims = QHBoxLayout()
        self.width_spin = QSpinBox()
        self.height_spin = QSpinBox()
        for spin in (self.width_spin, self.height_spin):
            spin.setRange(1, MAX_CANVAS_SIDE)
            spin.setSuffix(" px")
            spin.editingFinished.connect(self._on_size_edited)
        dims.addWidget(QLabel("W"))
        dims.addWidget(self.width_spin)
        dims.addWidget(QLabel("H"))
        dims.addWidget(self.height_spin)
        layout.addLayout(dims)
        return group

    def _build_effect_group(self) -> QGroupBox:
        group = QGroupBox("3D Effect")
        form = QFormLayout(group)

        self.offset_slider = QSlider(Qt.Orientation.Horizontal)
        self.offset_slider.setRange(0, MAX_OFFSET)
        self.offset_label = QLabel()
        self.offset_slider.valueChanged.connect(self._on_offset_changed)
        offset_row = QHBoxLayout()
        offset_row.addWidget(self.offset_slider)
        offset_row.addWidget(self.offset_label)
        form.addRow("Offset:", offset_row)

        # Slider works in hundredths
        self.opacity_slider = QSlider(Qt.Orientation.Horizontal)
        self.opacity_slider.setRange(10, 100)
        self.opacity_label = QLabel()
        self.opacity_slider.valueChanged.connect(self._on_opacity_changed)
        opacity_row = QHBoxLayout()
        opacity_row.addWidget(self.opacity_slider)
        opacity_row.addWidget(self.opacity_label)
        form.addRow("Opacity:", opacity_row)

        self.font_combo = QComboBox()
        for label, family in FONT_CHOICES:
            self.font_combo.addItem(label, family)
        self.font_combo.currentIndexChanged.connect(self._on_font_changed)
        form.addRow("Font (all):", self.font_combo)
        return group

    # -------------------------------------------------------------------
    # Sync
    # -------------------------------------------------------------------

    def set_config(self, config: RenderConfig):
        """Show *config* in the widgets without emitting change signals."""
        self.config = config
        self._syncing = True
        try:
            self._set_swatch(self.bg_color_btn, config.bg_color)
            self._set_swatch(self.bg_text_color_btn, config.bg_text_color)
            self._set_swatch(self.fg_text_color_btn, config.fg_text_color)
            self.width_spin.setValue(config.width)
            self.height_spin.setValue(config.height)
            self.offset_slider.setValue(config.offset)
            self.offset_label.setText(f"{config.offset}px")
            self.opacity_slider.setValue(round(config.opacity * 100))
            self.opacity_label.setText(f"{config.opacity:.2f}")
            self._update_size_focus()
        finally:
            self._syncing = False

    def set_font_family(self, family: str):
        index = self.font_combo.findData(family)
        self._syncing = True
        try:
            self.font_combo.setCurrentIndex(index if index >= 0 else self.font_combo.findData(SYSTEM_FONT))
        finally:
            self._syncing = False

    def current_font_family(self) -> str:
        return self.font_combo.currentData() or SYSTEM_FONT

    def _set_swatch(self, btn: QPushButton, hex_color: str):
        color = hex_to_qcolor(hex_color, QColor("#000000"))
        btn.setText(qcolor_to_hex(color))
        text = contrast_color(qcolor_to_hex(color))
        btn.setStyleSheet(f"background-color: {qcolor_to_hex(color)}; color: {text}; border: 1px solid #444;")

    def _update_size_focus(self):
        for btn, w, h in self._size_buttons:
            btn.setChecked(w == self.config.width and h == self.config.height)

    # -------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------

    def apply_color_preset(self, bg: str, fg: str):
        """Preset sets background and foreground text; background text contrasts."""
        self.config.bg_color = bg
        self.config.fg_text_color = fg
        self.config.bg_text_color = contrast_color(bg)
        self.set_config(self.config)
        self.config_changed.emit()

    def _pick(self, field_name: str, title: str):
        initial = hex_to_qcolor(getattr(self.config, field_name), QColor("#000000"))
        color = self._pick_color(initial, title)
        if color is None:
            return
        setattr(self.config, field_name, qcolor_to_hex(color))
        self.set_config(self.config)
        self.config_changed.emit()

    def _pick_color(self, initial: QColor, title: str) -> Optional[QColor]:
        """Show color picker dialog."""
        c = QColorDialog.getColor(initial, self, title)
        if not c.isValid():
            return None
        return c

    def _request_size(self, width: int, height: int):
        self.canvas_size_changed.emit(width, height)

    def _on_size_edited(self):
        if self._syncing:
            return
        width = self.width_spin.value()
        height = self.height_spin.value()
        if (width, height) != (self.config.width, self.config.height):
            self._request_size(width, height)

    def _on_offset_changed(self, value: int):
        self.offset_label.setText(f"{value}px")
        if self._syncing:
            return
        self.config.offset = value
        self.config_changed.emit()

    def _on_opacity_changed(self, value: int):
        opacity = value / 100
        self.opacity_label.setText(f"{opacity:.2f}")
        if self._syncing:
            return
        self.config.opacity = opacity
        self.config_changed.emit()

    def _on_font_changed(self, _index: int):
        if self._syncing:
            return
        self.font_family_changed.emit(self.current_font_family())
