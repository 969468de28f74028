"""
properties package

Control panels for the global 3D effect settings and the text item list.
"""

from properties.effects import EffectPanel
from properties.text_list import TextPanel

__all__ = ["EffectPanel", "TextPanel"]
