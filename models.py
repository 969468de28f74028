"""
models.py

Data models and constants for the StereoText naked-eye 3D generator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


# ----------------------------
# Layer / mode constants
# ----------------------------

class Layer:
    """Logical depth planes composited into the stereoscopic image."""
    BACKGROUND = "bg"
    FOREGROUND = "fg"

    ALL = (BACKGROUND, FOREGROUND)


class TransformMode:
    """Manipulation kinds started from the selection controls."""
    MOVE = "move"
    RESIZE = "resize"
    ROTATE = "rotate"


class InteractionState:
    """States of the pointer interaction state machine."""
    IDLE = "idle"
    MOVING = "moving"
    RESIZING = "resizing"
    ROTATING = "rotating"


# Resize handle names, in hit-test order
RESIZE_HANDLES = ("nw", "ne", "sw", "se", "n", "s", "w", "e")


# ----------------------------
# Geometry constants
# ----------------------------

SYSTEM_FONT = "system"        # sentinel: use the system default family
DEFAULT_FONT_FAMILY = "Arial"  # what SYSTEM_FONT resolves to
FALLBACK_FONT_FAMILY = "sans-serif"

BOUNDS_PADDING = 10.0          # added on all sides of a text footprint
LINE_HEIGHT_FACTOR = 1.2       # line height = font size * factor
HIT_TOLERANCE = 5.0            # body hit-test slack
HANDLE_SIZE = 16.0             # drawn handle square
HANDLE_TOLERANCE = 8.0         # slack around the handle square
ROTATE_HANDLE_DISTANCE = 30.0  # rotate handle sits above the box top
MOVE_ZONE_INSET = 20.0         # inner zone that starts a drag
MIN_SCALE = 0.1

# Drop shadow applied to every glyph run (rgba(0,0,0,0.3), blur 5, offset 2/2)
SHADOW_ALPHA = 0.3
SHADOW_BLUR = 5.0
SHADOW_OFFSET = (2.0, 2.0)

# Depth pass: (blur radius, dx, dy, opacity)
DEPTH_PASSES = (
    (1.5, 2, 2, 0.6),
    (0.8, -1, -1, 0.4),
)


# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CANVAS_WIDTH = 540
DEFAULT_CANVAS_HEIGHT = 960
DEFAULT_BG_COLOR = "#0500FB"
DEFAULT_BG_TEXT_COLOR = "#020F5F"
DEFAULT_FG_TEXT_COLOR = "#FE0191"
DEFAULT_OFFSET = 5
DEFAULT_OPACITY = 0.8
DEFAULT_SEED_COUNT = 8

DEFAULT_TEXT_POOL = ("JueJin", "Vibe Coding", "Trae", "掘金MCP")

# layer -> (text, font size) for the "Add text" action
NEW_TEXT_DEFAULTS: Dict[str, Tuple[str, int]] = {
    Layer.BACKGROUND: ("New Background Text", 60),
    Layer.FOREGROUND: ("New Foreground Text", 60),
}

# Display label -> font family value (CSS-style fallback lists are allowed)
FONT_CHOICES: List[Tuple[str, str]] = [
    ("System default", SYSTEM_FONT),
    ("Noto Sans SC", "'Noto Sans SC', sans-serif"),
    ("Noto Serif SC", "'Noto Serif SC', serif"),
    ("Ma Shan Zheng", "'Ma Shan Zheng', cursive"),
    ("ZCOOL XiaoWei", "'ZCOOL XiaoWei', serif"),
    ("ZCOOL KuaiLe", "'ZCOOL KuaiLe', cursive"),
    ("Liu Jian Mao Cao", "'Liu Jian Mao Cao', cursive"),
    ("Zhi Mang Xing", "'Zhi Mang Xing', cursive"),
]

# Name -> (background color, foreground text color)
COLOR_PRESETS: List[Tuple[str, str, str]] = [
    ("Classic blue", "#0500FB", "#FE0191"),
    ("Red / cyan", "#FF0000", "#00FFFF"),
    ("Green / magenta", "#00C853", "#FF00FF"),
    ("Yellow / violet", "#FFD600", "#6200EA"),
    ("Black / white", "#000000", "#FFFFFF"),
]

# Name -> (width, height)
SIZE_PRESETS: List[Tuple[str, int, int]] = [
    ("9:16", 540, 960),
    ("3:4", 720, 960),
    ("1:1", 800, 800),
    ("4:3", 960, 720),
    ("16:9", 960, 540),
]


# ----------------------------
# Text item model
# ----------------------------

@dataclass
class TextItem:
    """A positioned, rotatable, scalable text object on one layer.

    ``x``/``y`` is the anchor (center) about which rotation and scale
    are applied. ``scale_x``/``scale_y`` are never below ``MIN_SCALE``.
    """
    id: int
    layer: str
    text: str
    font_size: float
    x: float
    y: float
    font_family: str = SYSTEM_FONT
    rotation: float = 0.0   # degrees
    scale_x: float = 1.0
    scale_y: float = 1.0

    def is_blank(self) -> bool:
        """Whitespace-only text is neither drawn nor hit-testable."""
        return not self.text.strip()

    def lines(self) -> List[str]:
        return self.text.split("\n")

    def effective_font_size(self) -> int:
        """Font size shown to the user after vertical scaling."""
        return round(self.font_size * self.scale_y)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box in canvas coordinates."""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_rect(cls, left: float, top: float, width: float, height: float) -> "Bounds":
        return cls(left, top, left + width, top + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def expanded(self, margin: float) -> "Bounds":
        return Bounds(self.left - margin, self.top - margin,
                      self.right + margin, self.bottom + margin)

    def inset(self, margin: float) -> "Bounds":
        return self.expanded(-margin)


@dataclass(frozen=True)
class ControlHit:
    """Result of a control hit test on the selected item."""
    mode: str
    handle: Optional[str] = None


@dataclass
class RenderConfig:
    """Scalar inputs re-read by the compositor on every render."""
    width: int = DEFAULT_CANVAS_WIDTH
    height: int = DEFAULT_CANVAS_HEIGHT
    bg_color: str = DEFAULT_BG_COLOR
    bg_text_color: str = DEFAULT_BG_TEXT_COLOR
    fg_text_color: str = DEFAULT_FG_TEXT_COLOR
    offset: int = DEFAULT_OFFSET        # foreground pixel delta
    opacity: float = DEFAULT_OPACITY    # foreground global alpha

    def text_color(self, layer: str) -> str:
        return self.bg_text_color if layer == Layer.BACKGROUND else self.fg_text_color
