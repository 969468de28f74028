"""
settings.py

Persistent settings management for StereoText.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/stereotext/settings.toml
    - macOS: ~/Library/Application Support/stereotext/settings.toml
    - Linux: ~/.config/stereotext/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from models import (
    DEFAULT_BG_COLOR,
    DEFAULT_BG_TEXT_COLOR,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FG_TEXT_COLOR,
    DEFAULT_OFFSET,
    DEFAULT_OPACITY,
    DEFAULT_SEED_COUNT,
    SYSTEM_FONT,
    RenderConfig,
)
from utils import parse_hex

APP_NAME = "stereotext"

log = logging.getLogger(__name__)

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Canvas / Render Settings
# =============================================================================

@dataclass
class CanvasSizeSettings:
    """Canvas size in pixels.

    Defaults:
        width: 540
        height: 960
    """
    width: int = DEFAULT_CANVAS_WIDTH    # Default: 540 pixels
    height: int = DEFAULT_CANVAS_HEIGHT  # Default: 960 pixels (9:16)


@dataclass
class ColorSettings:
    """Layer colors.

    Defaults:
        background: "#0500FB"
        background_text: "#020F5F"
        foreground_text: "#FE0191"
    """
    background: str = DEFAULT_BG_COLOR            # Default: blue
    background_text: str = DEFAULT_BG_TEXT_COLOR  # Default: navy
    foreground_text: str = DEFAULT_FG_TEXT_COLOR  # Default: pink


@dataclass
class EffectSettings:
    """Stereoscopic effect parameters.

    Defaults:
        offset: 5
        opacity: 0.8
    """
    offset: int = DEFAULT_OFFSET      # Default: 5 pixels
    opacity: float = DEFAULT_OPACITY  # Default: 0.8


@dataclass
class TextSettings:
    """Text defaults.

    Defaults:
        font_family: "system"
        seed_count: 8
    """
    font_family: str = SYSTEM_FONT         # Default: "system"
    seed_count: int = DEFAULT_SEED_COUNT   # Default: 8 random words on start


@dataclass
class HandleSettings:
    """Selection control colors.

    Defaults:
        outline_color: "#007BFF"
        fill_color: "#007BFF"
        border_color: "#FFFFFF"
        rotate_color: "#28A745"
    """
    outline_color: str = "#007BFF"   # Default: blue
    fill_color: str = "#007BFF"      # Default: blue
    border_color: str = "#FFFFFF"    # Default: white
    rotate_color: str = "#28A745"    # Default: green


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        theme: The UI theme name (must match a key in styles.STYLES).
        export_dir: Default directory for PNG export (empty = ~/Pictures).
        canvas: Canvas size settings.
        colors: Layer color settings.
        effect: Offset/opacity settings.
        text: Text default settings.
        handles: Selection control colors.
    """
    theme: str = "Light"  # Default: "Light"
    export_dir: str = ""

    canvas: CanvasSizeSettings = field(default_factory=CanvasSizeSettings)
    colors: ColorSettings = field(default_factory=ColorSettings)
    effect: EffectSettings = field(default_factory=EffectSettings)
    text: TextSettings = field(default_factory=TextSettings)
    handles: HandleSettings = field(default_factory=HandleSettings)

    def render_config(self) -> RenderConfig:
        """Build a RenderConfig from the persisted values."""
        return RenderConfig(
            width=self.canvas.width,
            height=self.canvas.height,
            bg_color=self.colors.background,
            bg_text_color=self.colors.background_text,
            fg_text_color=self.colors.foreground_text,
            offset=self.effect.offset,
            opacity=self.effect.opacity,
        )

    def update_from_config(self, config: RenderConfig) -> None:
        """Copy the live render configuration back for persistence."""
        self.canvas.width = config.width
        self.canvas.height = config.height
        self.colors.background = config.bg_color
        self.colors.background_text = config.bg_text_color
        self.colors.foreground_text = config.fg_text_color
        self.effect.offset = config.offset
        self.effect.opacity = config.opacity


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Override for the config directory (tests).
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)

            return self._parse_toml(data)
        except Exception as e:
            log.warning("Ignoring unreadable settings file %s: %s", self.settings_file, e)
            return AppSettings()

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Values of the wrong type (or sections that are not tables) keep
        their defaults.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        general = _section(data, "general")
        settings.theme = _str(general.get("theme"), settings.theme)
        settings.export_dir = _str(general.get("export_dir"), settings.export_dir)

        canvas = _section(data, "canvas")
        settings.canvas.width = _positive_int(canvas.get("width"), settings.canvas.width)
        settings.canvas.height = _positive_int(canvas.get("height"), settings.canvas.height)

        colors = _section(data, "colors")
        settings.colors.background = _color(colors.get("background"), settings.colors.background)
        settings.colors.background_text = _color(colors.get("background_text"), settings.colors.background_text)
        settings.colors.foreground_text = _color(colors.get("foreground_text"), settings.colors.foreground_text)

        effect = _section(data, "effect")
        settings.effect.offset = _int(effect.get("offset"), settings.effect.offset)
        opacity = _float(effect.get("opacity"), settings.effect.opacity)
        settings.effect.opacity = min(1.0, max(0.0, opacity))

        text = _section(data, "text")
        settings.text.font_family = _str(text.get("font_family"), settings.text.font_family) or SYSTEM_FONT
        settings.text.seed_count = max(0, _int(text.get("seed_count"), settings.text.seed_count))

        handles = _section(data, "handles")
        settings.handles.outline_color = _color(handles.get("outline_color"), settings.handles.outline_color)
        settings.handles.fill_color = _color(handles.get("fill_color"), settings.handles.fill_color)
        settings.handles.border_color = _color(handles.get("border_color"), settings.handles.border_color)
        settings.handles.rotate_color = _color(handles.get("rotate_color"), settings.handles.rotate_color)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "general": {
                "theme": s.theme,
                "export_dir": s.export_dir,
            },
            "canvas": {
                "width": s.canvas.width,
                "height": s.canvas.height,
            },
            "colors": {
                "background": s.colors.background,
                "background_text": s.colors.background_text,
                "foreground_text": s.colors.foreground_text,
            },
            "effect": {
                "offset": s.effect.offset,
                "opacity": s.effect.opacity,
            },
            "text": {
                "font_family": s.text.font_family,
                "seed_count": s.text.seed_count,
            },
            "handles": {
                "outline_color": s.handles.outline_color,
                "fill_color": s.handles.fill_color,
                "border_color": s.handles.border_color,
                "rotate_color": s.handles.rotate_color,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        return tomli_w.dumps(self._to_toml_dict())

    def get_export_dir(self) -> Path:
        """Get the resolved export directory path.

        Returns:
            Path to export directory. Falls back to ~/Pictures if the
            export_dir setting is empty.
        """
        if self.settings.export_dir:
            return Path(self.settings.export_dir)
        return Path.home() / "Pictures"

    def get_settings_path(self) -> Path:
        """Get the path to the settings file."""
        return self.settings_file


def _positive_int(value: Any, default: int) -> int:
    """Coerce a TOML value to a positive int, keeping *default* otherwise."""
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """A TOML table by name; anything else reads as empty."""
    value = data.get(name, {})
    if not isinstance(value, dict):
        log.warning("Settings section [%s] is not a table, using defaults", name)
        return {}
    return value


def _str(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def _color(value: Any, default: str) -> str:
    """Keep *value* only if it parses as a hex color."""
    if not isinstance(value, str):
        return default
    try:
        parse_hex(value)
    except ValueError:
        return default
    return value


def _int(value: Any, default: int) -> int:
    # bool is an int subclass but never a meaningful setting here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def _float(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)
