"""
styles.py

Application stylesheets - light and dark themes.
"""

LIGHT_STYLE = """
/* === Base Colors === */
QMainWindow {
    background-color: #f5f5f5;
}

QWidget {
    background-color: #ffffff;
    color: #363636;
    font-family: "Segoe UI", "SF Pro Display", sans-serif;
    font-size: 13px;
}

/* === Menu Bar === */
QMenuBar {
    background-color: #ffffff;
    border-bottom: 1px solid #dbdbdb;
    padding: 2px;
}

QMenuBar::item {
    background-color: transparent;
    padding: 6px 12px;
    border-radius: 4px;
}

QMenuBar::item:selected {
    background-color: #e8f0fe;
}

QMenu {
    background-color: #ffffff;
    border: 1px solid #dbdbdb;
}

QMenu::item:selected {
    background-color: #007bff;
    color: #ffffff;
}

/* === Group Boxes === */
QGroupBox {
    border: 1px solid #dbdbdb;
    border-radius: 6px;
    margin-top: 12px;
    padding-top: 8px;
    font-weight: bold;
}

QGroupBox::title {
    subcontrol-origin: margin;
    left: 8px;
    padding: 0 4px;
}

/* === Buttons === */
QPushButton {
    background-color: #ffffff;
    border: 1px solid #dbdbdb;
    border-radius: 4px;
    padding: 5px 10px;
}

QPushButton:hover {
    border-color: #007bff;
}

QPushButton:checked {
    background-color: #007bff;
    color: #ffffff;
    border-color: #007bff;
}

QPushButton:disabled {
    color: #b5b5b5;
}

/* === Inputs === */
QPlainTextEdit, QSpinBox, QComboBox, QListWidget {
    background-color: #ffffff;
    border: 1px solid #dbdbdb;
    border-radius: 4px;
    padding: 3px;
}

QPlainTextEdit:focus, QSpinBox:focus, QComboBox:focus {
    border-color: #007bff;
}

QListWidget::item:selected {
    background-color: #007bff;
    color: #ffffff;
}

QSlider::groove:horizontal {
    height: 4px;
    background: #dbdbdb;
    border-radius: 2px;
}

QSlider::handle:horizontal {
    background: #007bff;
    width: 14px;
    margin: -6px 0;
    border-radius: 7px;
}

/* === Tool Bar / Status Bar === */
QToolBar {
    background-color: #ffffff;
    border-bottom: 1px solid #dbdbdb;
    spacing: 4px;
}

QStatusBar {
    background-color: #f5f5f5;
    color: #4a4a4a;
}
"""

DARK_STYLE = """
/* === Base Colors === */
QMainWindow {
    background-color: #1e1e1e;
}

QWidget {
    background-color: #252526;
    color: #cccccc;
    font-family: "Segoe UI", "SF Pro Display", sans-serif;
    font-size: 13px;
}

/* === Menu Bar === */
QMenuBar {
    background-color: #333333;
    border-bottom: 1px solid #404040;
    padding: 2px;
}

QMenuBar::item {
    background-color: transparent;
    padding: 6px 12px;
    border-radius: 4px;
}

QMenuBar::item:selected {
    background-color: #094771;
}

QMenu {
    background-color: #2d2d30;
    border: 1px solid #404040;
}

QMenu::item:selected {
    background-color: #094771;
}

/* === Group Boxes === */
QGroupBox {
    border: 1px solid #404040;
    border-radius: 6px;
    margin-top: 12px;
    padding-top: 8px;
    font-weight: bold;
}

QGroupBox::title {
    subcontrol-origin: margin;
    left: 8px;
    padding: 0 4px;
}

/* === Buttons === */
QPushButton {
    background-color: #3c3c3c;
    border: 1px solid #505050;
    border-radius: 4px;
    padding: 5px 10px;
}

QPushButton:hover {
    border-color: #0e639c;
}

QPushButton:checked {
    background-color: #0e639c;
    color: #ffffff;
}

QPushButton:disabled {
    color: #6d6d6d;
}

/* === Inputs === */
QPlainTextEdit, QSpinBox, QComboBox, QListWidget {
    background-color: #1e1e1e;
    border: 1px solid #404040;
    border-radius: 4px;
    padding: 3px;
}

QPlainTextEdit:focus, QSpinBox:focus, QComboBox:focus {
    border-color: #0e639c;
}

QListWidget::item:selected {
    background-color: #094771;
}

QSlider::groove:horizontal {
    height: 4px;
    background: #404040;
    border-radius: 2px;
}

QSlider::handle:horizontal {
    background: #0e639c;
    width: 14px;
    margin: -6px 0;
    border-radius: 7px;
}

/* === Tool Bar / Status Bar === */
QToolBar {
    background-color: #333333;
    border-bottom: 1px solid #404040;
    spacing: 4px;
}

QStatusBar {
    background-color: #007acc;
    color: #ffffff;
}
"""

# Style registry for easy access
STYLES = {
    "Light": LIGHT_STYLE,
    "Dark": DARK_STYLE,
}

DEFAULT_STYLE = "Light"
