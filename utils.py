"""
utils.py

Color and raster conversion helpers shared by the renderer and the UI.
"""

from __future__ import annotations

from typing import Tuple

from PIL import Image, ImageFilter
from PyQt6.QtGui import QColor, QImage


def qcolor_to_hex(c: QColor, include_alpha: bool = False) -> str:
    """
    Convert a QColor to a hex string.

    Args:
        c: The QColor to convert
        include_alpha: If True, include alpha channel as 4th byte

    Returns:
        Hex string like "#RRGGBB" or "#RRGGBBAA"
    """
    if include_alpha:
        return "#{:02X}{:02X}{:02X}{:02X}".format(c.red(), c.green(), c.blue(), c.alpha())
    return "#{:02X}{:02X}{:02X}".format(c.red(), c.green(), c.blue())


def parse_hex(s: str) -> Tuple[int, int, int, int]:
    """
    Parse "#RRGGBB" or "#RRGGBBAA" into an (r, g, b, a) tuple.

    Raises:
        ValueError: If the string is not a 6 or 8 digit hex color.
    """
    s = (s or "").strip().lstrip("#")
    if len(s) not in (6, 8):
        raise ValueError(f"not a hex color: {s!r}")
    r = int(s[0:2], 16)
    g = int(s[2:4], 16)
    b = int(s[4:6], 16)
    a = int(s[6:8], 16) if len(s) == 8 else 255
    return r, g, b, a


def hex_to_qcolor(s: str, fallback: QColor) -> QColor:
    """
    Parse a hex string to a QColor.

    Args:
        s: Hex string like "#RRGGBB" or "#RRGGBBAA"
        fallback: Color to return if parsing fails

    Returns:
        Parsed QColor or fallback
    """
    try:
        r, g, b, a = parse_hex(s)
    except ValueError:
        return QColor(fallback)
    return QColor(r, g, b, a)


def contrast_color(hex_color: str) -> str:
    """Black or white, whichever reads better on *hex_color*.

    Uses the YIQ brightness formula with a threshold of 128.
    """
    r, g, b, _ = parse_hex(hex_color)
    brightness = (r * 299 + g * 587 + b * 114) / 1000
    return "#000000" if brightness > 128 else "#FFFFFF"


def complementary_color(hex_color: str) -> str:
    """RGB complement of *hex_color*."""
    r, g, b, _ = parse_hex(hex_color)
    return "#{:02X}{:02X}{:02X}".format(255 - r, 255 - g, 255 - b)


# ─────────────────────────────────────────────────────────
# QImage <-> Pillow
# ─────────────────────────────────────────────────────────


def qimage_to_pil(image: QImage) -> Image.Image:
    """Copy a QImage into a Pillow RGBA image (straight alpha)."""
    img = image.convertToFormat(QImage.Format.Format_RGBA8888)
    ptr = img.constBits()
    ptr.setsize(img.sizeInBytes())
    return Image.frombuffer(
        "RGBA", (img.width(), img.height()), bytes(ptr), "raw", "RGBA", img.bytesPerLine(), 1
    ).copy()


def pil_to_qimage(image: Image.Image) -> QImage:
    """Copy a Pillow image into a QImage in premultiplied ARGB32."""
    rgba = image.convert("RGBA")
    data = rgba.tobytes("raw", "RGBA")
    qimg = QImage(data, rgba.width, rgba.height, rgba.width * 4, QImage.Format.Format_RGBA8888)
    # copy() detaches from the Python buffer before it is released
    return qimg.convertToFormat(QImage.Format.Format_ARGB32_Premultiplied).copy()


def blur_qimage(image: QImage, radius: float) -> QImage:
    """Gaussian-blur a QImage with Pillow.

    Canvas-style blur lengths are standard deviations, which is what
    ``ImageFilter.GaussianBlur`` takes as its radius.
    """
    if radius <= 0:
        return image.copy()
    blurred = qimage_to_pil(image).filter(ImageFilter.GaussianBlur(radius))
    return pil_to_qimage(blurred)
