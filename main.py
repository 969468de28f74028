"""
main.py

StereoText - Naked-Eye 3D Text Generator

PyQt6 application for composing two layers of text into a stereoscopic
image:
- Background and foreground text layers with per-item move/resize/rotate
- Foreground offset and opacity controls for the depth illusion
- Color and canvas size presets
- PNG export

Usage:
    python main.py

Dependencies:
    pip install PyQt6 pillow platformdirs tomli-w
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QActionGroup, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSplitter,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from models import NEW_TEXT_DEFAULTS, Layer
from canvas import Compositor, ExportError, InteractionController, StereoCanvasView, TextStore
from properties import EffectPanel, TextPanel
from styles import STYLES, DEFAULT_STYLE
from settings import AppSettings, SettingsManager, get_settings
from debug_trace import configure_logging, trace, trace_exception, close_log

log = logging.getLogger(__name__)


def default_export_name() -> str:
    """File name used for PNG export: naked-eye-3d-<epoch millis>.png"""
    return f"naked-eye-3d-{int(time.time() * 1000)}.png"


class MainWindow(QMainWindow):
    """Main application window for the naked-eye 3D text generator.

    Args:
        settings_manager: The SettingsManager instance for application settings.
    """

    def __init__(self, settings_manager: SettingsManager):
        super().__init__()
        self.settings_manager = settings_manager
        self.setWindowTitle("StereoText - Naked-Eye 3D Text Generator")
        settings = settings_manager.settings

        # Model, renderer and interaction
        self.store = TextStore()
        self.compositor = Compositor(self.store, settings.render_config())
        self.controller = InteractionController(self.store)
        self.view = StereoCanvasView(self.compositor, self.controller)

        # Side panel: effect controls above the text list
        self.effects = EffectPanel(self.compositor.config)
        self.effects.set_font_family(settings.text.font_family)
        self.texts = TextPanel(self.store)

        side = QWidget()
        side_layout = QVBoxLayout(side)
        side_layout.addWidget(self.effects)
        side_layout.addWidget(self.texts, 1)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(side)

        self.main_splitter = QSplitter(Qt.Orientation.Horizontal)
        self.main_splitter.addWidget(self.view)
        self.main_splitter.addWidget(scroll)
        self.main_splitter.setStretchFactor(0, 3)  # Canvas gets more space
        self.main_splitter.setStretchFactor(1, 1)
        self.setCentralWidget(self.main_splitter)

        self._build_menus()
        self._build_toolbar()

        # Connect signals
        self.store.on_changed = self._on_store_changed
        self.controller.on_item_changed = self.texts.update_readouts
        self.view.changed.connect(self.texts.sync_selection)

        self.effects.config_changed.connect(self.view.refresh)
        self.effects.canvas_size_changed.connect(self.set_canvas_size)
        self.effects.font_family_changed.connect(self.set_font_family_all)

        self.texts.add_requested.connect(self.add_text)
        self.texts.clear_requested.connect(self.clear_all)
        self.texts.delete_requested.connect(self.delete_item)
        self.texts.selection_requested.connect(self._on_list_selection)
        self.texts.item_edited.connect(self.view.refresh)

        self.seed_texts()
        self.statusBar().showMessage("Drag text to move it; use the handles to resize or rotate.")

    def _build_menus(self):
        """Build the application menu bar."""
        file_menu = self.menuBar().addMenu("&File")

        self.export_act = QAction("&Export PNG...", self)
        self.export_act.setShortcut(QKeySequence("Ctrl+E"))
        self.export_act.triggered.connect(self.export_png_dialog)
        file_menu.addAction(self.export_act)

        file_menu.addSeparator()
        quit_act = QAction("&Quit", self)
        quit_act.setShortcut(QKeySequence.StandardKey.Quit)
        quit_act.triggered.connect(self.close)
        file_menu.addAction(quit_act)

        edit_menu = self.menuBar().addMenu("&Edit")

        self.add_bg_act = QAction("Add &Background Text", self)
        self.add_bg_act.triggered.connect(lambda: self.add_text(Layer.BACKGROUND))
        edit_menu.addAction(self.add_bg_act)

        self.add_fg_act = QAction("Add &Foreground Text", self)
        self.add_fg_act.triggered.connect(lambda: self.add_text(Layer.FOREGROUND))
        edit_menu.addAction(self.add_fg_act)

        edit_menu.addSeparator()

        self.clear_act = QAction("&Clear All", self)
        self.clear_act.triggered.connect(self.clear_all)
        edit_menu.addAction(self.clear_act)

        self.reset_act = QAction("&Reset All", self)
        self.reset_act.triggered.connect(self.reset_all)
        edit_menu.addAction(self.reset_act)

        view_menu = self.menuBar().addMenu("&View")
        theme_menu = view_menu.addMenu("Theme")
        theme_group = QActionGroup(self)
        theme_group.setExclusive(True)
        current = self.settings_manager.settings.theme
        for name in STYLES:
            act = QAction(name, self)
            act.setCheckable(True)
            act.setChecked(name == current)
            act.triggered.connect(lambda _checked, n=name: self.apply_theme(n))
            theme_group.addAction(act)
            theme_menu.addAction(act)

    def _build_toolbar(self):
        tb = QToolBar("Tools")
        tb.setMovable(False)
        self.addToolBar(tb)
        tb.addAction(self.add_bg_act)
        tb.addAction(self.add_fg_act)
        tb.addSeparator()
        tb.addAction(self.clear_act)
        tb.addAction(self.reset_act)
        tb.addSeparator()
        tb.addAction(self.export_act)

    # -------------------------------------------------------------------
    # Store sync
    # -------------------------------------------------------------------

    def _on_store_changed(self):
        self.texts.rebuild()

    def _on_list_selection(self, item_id: int):
        self.store.select(item_id)
        self.view.refresh()

    def refresh_all(self):
        self.texts.rebuild()
        self.view.refresh()

    # -------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------

    def seed_texts(self):
        """Fill the canvas with random default words."""
        cfg = self.compositor.config
        text = self.settings_manager.settings.text
        self.store.seed_defaults(cfg.width, cfg.height, count=text.seed_count,
                                 font_family=self.effects.current_font_family())
        self.refresh_all()

    def add_text(self, layer: str):
        """Add a default text item at the canvas center."""
        text, font_size = NEW_TEXT_DEFAULTS[layer]
        cfg = self.compositor.config
        item = self.store.add_item(layer, text, font_size, cfg.width / 2, cfg.height / 2,
                                   self.effects.current_font_family())
        self.view.refresh()
        self.statusBar().showMessage(f"Added text #{item.id + 1}", 3000)

    def delete_item(self, item_id: int):
        if self.controller.is_active:
            self.controller.cancel()
        self.store.remove_item(item_id)
        self.view.refresh()

    def clear_all(self):
        self.controller.cancel()
        self.store.clear_all()
        self.view.refresh()
        self.statusBar().showMessage("All text cleared", 3000)

    def reset_all(self):
        """Restore default settings and reseed the canvas."""
        self.controller.cancel()
        defaults = AppSettings()
        cfg = self.compositor.config
        fresh = defaults.render_config()
        for name in ("width", "height", "bg_color", "bg_text_color", "fg_text_color", "offset", "opacity"):
            setattr(cfg, name, getattr(fresh, name))
        self.effects.set_config(cfg)
        self.effects.set_font_family(defaults.text.font_family)
        self.store.reset()
        self.seed_texts()
        self.statusBar().showMessage("Reset to defaults", 3000)

    def set_canvas_size(self, width: int, height: int):
        self.compositor.set_canvas_size(width, height)
        self.effects.set_config(self.compositor.config)
        self.refresh_all()
        self.statusBar().showMessage(f"Canvas size {width} x {height}", 3000)

    def set_font_family_all(self, family: str):
        self.store.set_font_family_all(family)
        self.settings_manager.settings.text.font_family = family
        self.refresh_all()

    def apply_theme(self, name: str):
        app = QApplication.instance()
        if app is None or name not in STYLES:
            return
        app.setStyleSheet(STYLES[name])
        self.settings_manager.settings.theme = name

    def export_png_dialog(self):
        export_dir = self.settings_manager.get_export_dir()
        default_path = str(export_dir / default_export_name())
        path, _ = QFileDialog.getSaveFileName(self, "Export PNG", default_path, "PNG Images (*.png)")
        if not path:
            return
        self.export_png(path)

    def export_png(self, path: str) -> bool:
        try:
            self.compositor.export_png(path)
        except ExportError as e:
            log.error("%s", e)
            QMessageBox.critical(self, "Export failed", str(e))
            return False
        self.settings_manager.settings.export_dir = str(Path(path).parent)
        self.statusBar().showMessage(f"Exported {path}", 5000)
        return True

    def keyPressEvent(self, event):
        """Delete removes the selected text unless a text field has focus."""
        if event.key() == Qt.Key.Key_Delete and not self.texts.text_edit.hasFocus():
            if self.controller.delete_selected():
                self.view.refresh()
                return
        super().keyPressEvent(event)


def run():
    """Create the application and enter the Qt event loop."""
    configure_logging()
    trace("Application starting", "MAIN")
    app = QApplication(sys.argv)

    # Load settings (use singleton to ensure single instance)
    trace("Loading settings", "MAIN")
    settings_manager = get_settings()

    # Ensure settings file has all sections
    settings_manager.ensure_file_complete()

    # Apply saved theme (or default if not set)
    initial_style = settings_manager.settings.theme
    if initial_style not in STYLES:
        initial_style = DEFAULT_STYLE
        settings_manager.settings.theme = initial_style
    app.setStyleSheet(STYLES[initial_style])

    trace("Creating MainWindow", "MAIN")
    w = MainWindow(settings_manager)

    # Save settings on application quit
    def save_on_quit():
        trace("Saving settings on quit", "MAIN")
        settings_manager.settings.update_from_config(w.compositor.config)
        try:
            settings_manager.save()
        except OSError as e:
            log.warning("Could not save settings: %s", e)
        close_log()

    app.aboutToQuit.connect(save_on_quit)

    w.resize(1200, 900)
    w.show()
    trace("Entering event loop", "MAIN")
    sys.exit(app.exec())


def excepthook(exc_type, exc_value, exc_tb):
    """Trace uncaught exceptions before handing them to the default hook."""
    import traceback
    trace("UNCAUGHT EXCEPTION:", "CRASH")
    trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), "CRASH")
    close_log()
    sys.__excepthook__(exc_type, exc_value, exc_tb)


def main():
    """Application entry point (also used by the installed launcher)."""
    # Set up global exception handler to catch crashes
    sys.excepthook = excepthook

    try:
        run()
    except Exception as e:
        trace(f"FATAL: {type(e).__name__}: {e}", "CRASH")
        trace_exception("Fatal exception")
        close_log()
        raise


if __name__ == "__main__":
    main()
