"""Shared fixtures.

GUI tests run on the offscreen Qt platform unless QT_QPA_PLATFORM is
already set.  Run with:
    python -m pytest tests -v
"""
from __future__ import annotations

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from PyQt6.QtGui import QFontDatabase
from PyQt6.QtWidgets import QApplication

from models import Bounds


@pytest.fixture(scope="session")
def qapp():
    """Provide a single QApplication for the entire test session."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture()
def require_fonts(qapp):
    """Skip pixel-level tests on machines without any installed font."""
    if not QFontDatabase.families():
        pytest.skip("no fonts installed")


def box_measure(width: float = 100.0, height: float = 40.0):
    """Bounds function with a fixed footprint, scaled like real text."""
    def measure(item):
        w = width * item.scale_x
        h = height * item.scale_y
        return Bounds.from_rect(item.x - w / 2, item.y - h / 2, w, h)
    return measure
