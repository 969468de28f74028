"""Tests for settings.py - TOML persistence and defaults."""
from __future__ import annotations

from settings import AppSettings, SettingsManager
from models import RenderConfig


def test_missing_file_uses_defaults(tmp_path):
    sm = SettingsManager(settings_dir=tmp_path)
    assert sm.settings == AppSettings()
    assert not sm.get_settings_path().exists()
    sm.ensure_file_complete()
    assert sm.get_settings_path().exists()


def test_round_trip(tmp_path):
    sm = SettingsManager(settings_dir=tmp_path)
    sm.settings.theme = "Dark"
    sm.settings.canvas.width = 800
    sm.settings.colors.background = "#FF0000"
    sm.settings.effect.offset = 12
    sm.settings.effect.opacity = 0.5
    sm.settings.text.font_family = "'Noto Serif SC', serif"
    sm.save()

    loaded = SettingsManager(settings_dir=tmp_path).settings
    assert loaded.theme == "Dark"
    assert loaded.canvas.width == 800
    assert loaded.colors.background == "#FF0000"
    assert loaded.effect.offset == 12
    assert loaded.effect.opacity == 0.5
    assert loaded.text.font_family == "'Noto Serif SC', serif"


def test_corrupt_file_falls_back(tmp_path):
    (tmp_path / "settings.toml").write_text("this is [not toml", encoding="utf-8")
    assert SettingsManager(settings_dir=tmp_path).settings == AppSettings()


def test_bad_values_are_sanitized(tmp_path):
    (tmp_path / "settings.toml").write_text(
        "[canvas]\nwidth = -5\nheight = \"tall\"\n\n[effect]\nopacity = 3.0\n",
        encoding="utf-8",
    )
    settings = SettingsManager(settings_dir=tmp_path).settings
    assert settings.canvas.width == 540
    assert settings.canvas.height == 960
    assert settings.effect.opacity == 1.0


def test_render_config_round_trip():
    settings = AppSettings()
    config = settings.render_config()
    assert config == RenderConfig()
    config.offset = 20
    config.width = 720
    settings.update_from_config(config)
    assert settings.effect.offset == 20
    assert settings.canvas.width == 720


def test_export_dir(tmp_path):
    sm = SettingsManager(settings_dir=tmp_path)
    assert sm.get_export_dir().name == "Pictures"
    sm.settings.export_dir = str(tmp_path)
    assert sm.get_export_dir() == tmp_path


def test_to_toml_has_all_sections(tmp_path):
    text = SettingsManager(settings_dir=tmp_path).to_toml()
    for section in ("[general]", "[canvas]", "[colors]", "[effect]", "[text]", "[handles]"):
        assert section in text


def test_wrong_value_types_fall_back(tmp_path):
    (tmp_path / "settings.toml").write_text(
        "canvas = 5\n\n"
        "[general]\ntheme = 3\n\n"
        "[colors]\nbackground = 5\nforeground_text = \"#GG0000\"\nbackground_text = \"#112233\"\n\n"
        "[effect]\noffset = \"far\"\nopacity = true\n\n"
        "[text]\nfont_family = 5\nseed_count = [1, 2]\n\n"
        "[handles]\nrotate_color = {}\n",
        encoding="utf-8",
    )
    settings = SettingsManager(settings_dir=tmp_path).settings
    defaults = AppSettings()
    assert settings.canvas == defaults.canvas
    assert settings.theme == defaults.theme
    assert settings.colors.background == defaults.colors.background
    assert settings.colors.foreground_text == defaults.colors.foreground_text
    assert settings.colors.background_text == "#112233"
    assert settings.effect == defaults.effect
    assert settings.text == defaults.text
    assert settings.handles == defaults.handles


def test_sanitized_settings_render_and_seed(qapp, tmp_path):
    from canvas.compositor import Compositor
    from canvas.store import TextStore

    (tmp_path / "settings.toml").write_text(
        "[colors]\nbackground = 5\n\n[text]\nfont_family = 5\n", encoding="utf-8",
    )
    settings = SettingsManager(settings_dir=tmp_path).settings
    store = TextStore()
    store.seed_defaults(200, 200, count=2, font_family=settings.text.font_family)
    config = settings.render_config()
    config.width = config.height = 200
    image = Compositor(store, config).generate_image()
    assert image.width() == 200
