"""Seeded palette generation and contrast-aware theming for card templates."""
from .models import BackgroundPattern, CardTemplate, ColorPalette, Layer
from .palette import generate_palette
from .theme import ThemeApplier, analyze_template, apply_palette
from .variations import generate_variations

__version__ = "0.1.0"

__all__ = [
    "BackgroundPattern",
    "CardTemplate",
    "ColorPalette",
    "Layer",
    "ThemeApplier",
    "analyze_template",
    "apply_palette",
    "generate_palette",
    "generate_variations",
]
