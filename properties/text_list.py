"""
properties/text_list.py

Text item list and editor for the selected item: content, font, base
font size, plus position and effective size readouts.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from models import FONT_CHOICES, SYSTEM_FONT, Layer, TextItem
from canvas.store import TextStore

LAYER_BADGES = {
    Layer.BACKGROUND: "BG",
    Layer.FOREGROUND: "FG",
}

ID_ROLE = Qt.ItemDataRole.UserRole


def item_caption(item: TextItem) -> str:
    """One-line list caption: layer badge, 1-based number, first line of text."""
    first = item.lines()[0] if item.text else ""
    if len(first) > 24:
        first = first[:23] + "…"
    return f"[{LAYER_BADGES.get(item.layer, '?')}] Text #{item.id + 1}  {first}"


class TextPanel(QWidget):
    """
    Lists the store's items and edits the selected one.

    Signals:
        add_requested(str): Add a new item on the given layer.
        clear_requested(): Remove all items.
        selection_requested(int): User picked an item in the list.
        delete_requested(int): Delete the item with the given id.
        item_edited(): Text, font or size of the selected item changed.
    """

    add_requested = pyqtSignal(str)
    clear_requested = pyqtSignal()
    selection_requested = pyqtSignal(int)
    delete_requested = pyqtSignal(int)
    item_edited = pyqtSignal()

    def __init__(self, store: TextStore, parent=None):
        super().__init__(parent)
        self.store = store
        self._syncing = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # Add / clear row
        add_row = QHBoxLayout()
        self.layer_combo = QComboBox()
        self.layer_combo.addItem("Background layer", Layer.BACKGROUND)
        self.layer_combo.addItem("Foreground layer", Layer.FOREGROUND)
        self.add_btn = QPushButton("Add Text")
        self.clear_btn = QPushButton("Clear All")
        self.add_btn.clicked.connect(lambda: self.add_requested.emit(self.layer_combo.currentData()))
        self.clear_btn.clicked.connect(self.clear_requested.emit)
        add_row.addWidget(self.layer_combo, 1)
        add_row.addWidget(self.add_btn)
        add_row.addWidget(self.clear_btn)
        layout.addLayout(add_row)

        self.list = QListWidget()
        self.list.currentItemChanged.connect(self._on_current_changed)
        layout.addWidget(self.list, 1)

        layout.addWidget(self._build_editor())
        self.set_item(None)

    def _build_editor(self) -> QGroupBox:
        group = QGroupBox("Selected Text")
        form = QFormLayout(group)

        self.text_edit = QPlainTextEdit()
        self.text_edit.setPlaceholderText("Enter text...")
        self.text_edit.setFixedHeight(64)
        self.text_edit.textChanged.connect(self._on_text_changed)
        form.addRow("Text:", self.text_edit)

        self.font_combo = QComboBox()
        for label, family in FONT_CHOICES:
            self.font_combo.addItem(label, family)
        self.font_combo.currentIndexChanged.connect(self._on_font_changed)
        form.addRow("Font:", self.font_combo)

        self.size_spin = QSpinBox()
        self.size_spin.setRange(10, 200)
        self.size_spin.setSuffix(" px")
        self.size_spin.valueChanged.connect(self._on_size_changed)
        form.addRow("Font size:", self.size_spin)

        self.effective_label = QLabel("-")
        form.addRow("Effective size:", self.effective_label)
        self.position_label = QLabel("-")
        form.addRow("Position (x, y):", self.position_label)
        self.transform_label = QLabel("-")
        form.addRow("Rotation / scale:", self.transform_label)

        self.delete_btn = QPushButton("Delete")
        self.delete_btn.clicked.connect(self._on_delete_clicked)
        form.addRow("", self.delete_btn)
        hint = QLabel("Drag text on the canvas to move; use the handles to resize or rotate.")
        hint.setWordWrap(True)
        form.addRow(hint)

        self._editor_widgets = (self.text_edit, self.font_combo, self.size_spin, self.delete_btn)
        return group

    # -------------------------------------------------------------------
    # Sync from store
    # -------------------------------------------------------------------

    def rebuild(self):
        """Rebuild the list from the store and reselect the selected item."""
        items = list(self.store)
        self._syncing = True
        try:
            row_ids = [self.list.item(row).data(ID_ROLE) for row in range(self.list.count())]
            if row_ids == [item.id for item in items]:
                # Same membership: only captions may have changed
                for row, item in enumerate(items):
                    self.list.item(row).setText(item_caption(item))
            else:
                self.list.clear()
                for item in items:
                    row = QListWidgetItem(item_caption(item))
                    row.setData(ID_ROLE, item.id)
                    self.list.addItem(row)
        finally:
            self._syncing = False
        self.sync_selection()

    def sync_selection(self):
        """Mirror the store's selection in the list and editor."""
        selected_id = self.store.selected_id
        self._syncing = True
        try:
            self.list.setCurrentRow(-1)
            for row in range(self.list.count()):
                if self.list.item(row).data(ID_ROLE) == selected_id:
                    self.list.setCurrentRow(row)
                    break
        finally:
            self._syncing = False
        self.set_item(self.store.selected_item)

    def set_item(self, item: Optional[TextItem]):
        """Show *item* in the editor, or disable the editor for None."""
        self._syncing = True
        try:
            for w in self._editor_widgets:
                w.setEnabled(item is not None)
            if item is None:
                self.text_edit.setPlainText("")
                self.effective_label.setText("-")
                self.position_label.setText("-")
                self.transform_label.setText("-")
                return
            if self.text_edit.toPlainText() != item.text:
                self.text_edit.setPlainText(item.text)
            index = self.font_combo.findData(item.font_family)
            self.font_combo.setCurrentIndex(index if index >= 0 else self.font_combo.findData(SYSTEM_FONT))
            self.size_spin.setValue(int(round(item.font_size)))
        finally:
            self._syncing = False
        self.update_readouts(item)

    def update_readouts(self, item: TextItem):
        """Refresh the live position/size readouts during manipulation."""
        if item.id != self.store.selected_id:
            return
        self.effective_label.setText(f"{item.effective_font_size()}px")
        self.position_label.setText(f"({round(item.x)}, {round(item.y)})")
        self.transform_label.setText(
            f"{item.rotation:.1f}° / {item.scale_x:.2f} x {item.scale_y:.2f}"
        )

    # -------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------

    def _on_current_changed(self, current: Optional[QListWidgetItem], _previous):
        if self._syncing or current is None:
            return
        self.selection_requested.emit(current.data(ID_ROLE))

    def _edit_selected(self, apply):
        item = self.store.selected_item
        if self._syncing or item is None:
            return
        apply(item)
        self.store.refresh_selection()
        self.update_readouts(item)
        row = self.list.currentItem()
        if row is not None:
            row.setText(item_caption(item))
        self.item_edited.emit()

    def _on_text_changed(self):
        text = self.text_edit.toPlainText()
        self._edit_selected(lambda item: setattr(item, "text", text))

    def _on_font_changed(self, _index: int):
        family = self.font_combo.currentData() or SYSTEM_FONT
        self._edit_selected(lambda item: setattr(item, "font_family", family))

    def _on_size_changed(self, value: int):
        self._edit_selected(lambda item: setattr(item, "font_size", value))

    def _on_delete_clicked(self):
        if self.store.selected_id is not None:
            self.delete_requested.emit(self.store.selected_id)
