"""
Apply a ColorPalette to a CardTemplate.

Layers are colored back to front. Every shape's assigned fill is remembered
so layers painted on top of it are judged against the color they will
actually sit on, not the card background.
"""
import logging

from ..capabilities import can_be_surface
from ..contrast import (
    AA_NORMAL,
    BLACK,
    BRAND_TEXT,
    INDISTINGUISHABLE,
    SOFT_WHITE,
    WHITE,
    best_text_polarity,
    contrast_ratio,
    most_contrasting,
    prefers_light_text,
)
from ..models import TRANSPARENT, BackgroundPattern, is_transparent
from .context import analyze_template, walk_background

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 16
LARGE_TITLE_SIZE = 18

PATTERN_COLOR_DARK = "rgba(255,255,255,0.07)"
PATTERN_COLOR_LIGHT = "rgba(0,0,0,0.05)"


def update_background(background, palette):
    """Recolor the card background according to its type."""
    if background is None:
        return BackgroundPattern(type="solid", color1=palette.background)

    if background.type == "solid":
        return background.clone(color1=palette.background)

    if background.type == "gradient":
        return background.clone(
            color1=palette.background,
            color2=palette.primary if palette.is_dark else palette.secondary,
        )

    if background.type == "pattern":
        return background.clone(
            color1=palette.background,
            pattern_color=PATTERN_COLOR_DARK if palette.is_dark else PATTERN_COLOR_LIGHT,
        )

    if background.type == "texture":
        return background.clone(overlay_color=palette.background, color1=palette.background)

    return background.clone()


def shape_fill(original_fill, effective_bg, palette):
    """Fill for a shape sitting on ``effective_bg``.

    Transparent shapes stay transparent. Otherwise the brand primary is used
    unless it would vanish into the background, in which case the
    complementary secondary takes over; if both collide, the most legible
    neutral wins.
    """
    if is_transparent(original_fill):
        return TRANSPARENT
    if contrast_ratio(effective_bg, palette.primary) >= INDISTINGUISHABLE:
        return palette.primary
    if contrast_ratio(effective_bg, palette.secondary) >= INDISTINGUISHABLE:
        return palette.secondary
    return most_contrasting(effective_bg, [palette.text, best_text_polarity(effective_bg)])


def text_fill(effective_bg, palette, font_size=None):
    """Legible text color for a text layer on ``effective_bg``."""
    if font_size is None:
        font_size = DEFAULT_FONT_SIZE

    # Large titles may carry the brand color when it reads well enough
    if font_size > LARGE_TITLE_SIZE and contrast_ratio(effective_bg, palette.primary) > BRAND_TEXT:
        return palette.primary

    if prefers_light_text(effective_bg):
        if contrast_ratio(effective_bg, SOFT_WHITE) < AA_NORMAL:
            return WHITE
        return SOFT_WHITE

    if contrast_ratio(effective_bg, palette.text) > AA_NORMAL:
        return palette.text
    return BLACK


class ThemeApplier:
    """Map a palette onto a template, returning a new template.

    Args:
        logo_resolver: Optional callable ``(template_id, background_hex) ->
            {"path": ..., "src": ...}`` used to swap logo artwork for the
            colorway that suits the resolved background. Without one, logo
            layers are left untouched.
    """

    def __init__(self, logo_resolver=None):
        self.logo_resolver = logo_resolver

    def apply(self, template, palette, context_map=None):
        if context_map is None:
            context_map = analyze_template(template)

        surface_colors = {}
        layers = []
        for layer in template.layers:
            new_layer = layer.clone()
            effective_bg = walk_background(
                layer.id, context_map, surface_colors, palette.background
            )

            if new_layer.is_logo_layer:
                self._apply_logo(template.id, new_layer, effective_bg)
            elif new_layer.is_text:
                new_layer.paint.fill = text_fill(effective_bg, palette, new_layer.font_size)
            elif new_layer.is_shape:
                new_layer.paint.fill = shape_fill(layer.paint.fill, effective_bg, palette)
                if not is_transparent(new_layer.paint.stroke):
                    new_layer.paint.stroke = palette.secondary
            elif new_layer.is_line:
                new_layer.paint.fill = palette.primary
                new_layer.paint.stroke = palette.primary
            # Images and unknown node types pass through unchanged

            if can_be_surface(new_layer):
                surface_colors[new_layer.id] = new_layer.paint.fill
            layers.append(new_layer)

        return template.clone(
            id=f"{template.id}_{palette.id}",
            name=f"{template.name} ({palette.name})",
            colors=[palette.background, palette.primary, palette.secondary],
            background=update_background(template.background, palette),
            layers=layers,
        )

    def _apply_logo(self, template_id, layer, background_hex):
        if self.logo_resolver is None:
            return
        resolved = self.logo_resolver(template_id, background_hex) or {}
        if "src" in resolved:
            layer.src = resolved["src"]
        if "path" in resolved:
            layer.path = resolved["path"]
        logger.debug(
            "Logo %s on %s resolved to %s", layer.id, background_hex, resolved or "no change"
        )


def apply_palette(template, palette, logo_resolver=None, context_map=None):
    """Functional shortcut for ``ThemeApplier(logo_resolver).apply(...)``."""
    return ThemeApplier(logo_resolver).apply(template, palette, context_map)
