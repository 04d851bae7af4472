from .color import hex_to_rgb

# Contrast thresholds (WCAG-style conventions)
AA_NORMAL = 4.5  # Body text
AA_LARGE = 3.0  # Large text, minimum we ever accept for text
BRAND_TEXT = 3.5  # Large titles may use the brand color above this
INDISTINGUISHABLE = 1.6  # Below this a shape vanishes into what is behind it

WHITE = "#FFFFFF"
BLACK = "#000000"
SOFT_WHITE = "#F8FAFC"  # Slate-50
SOFT_BLACK = "#0F172A"  # Slate-900
MUTED_LIGHT = "#CBD5E1"  # Slate-300, subtext on dark backgrounds
MUTED_DARK = "#64748B"  # Slate-500, subtext on light backgrounds


def luminance(hex_color):
    """BT.709 luma on raw 0-255 channels.

    Not the gamma-linearized WCAG relative luminance. Every threshold in
    this module is calibrated against this value.
    """
    r, g, b = hex_to_rgb(hex_color)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def luminance_contrast(lum1, lum2):
    """Contrast ratio between two 0-255 luminances"""
    lighter = max(lum1, lum2) / 255
    darker = min(lum1, lum2) / 255
    return (lighter + 0.05) / (darker + 0.05)


def contrast_ratio(color_a, color_b):
    """Contrast ratio between two hex colors, from 1.0 (identical) to 21.0."""
    return luminance_contrast(luminance(color_a), luminance(color_b))


def prefers_light_text(background):
    """True when white text beats black text on this background."""
    return contrast_ratio(background, WHITE) > contrast_ratio(background, BLACK)


def best_text_polarity(background):
    """Return WHITE or BLACK, whichever contrasts more with the background."""
    return WHITE if prefers_light_text(background) else BLACK


def meets_aa(background, foreground, large=False):
    required = AA_LARGE if large else AA_NORMAL
    return contrast_ratio(background, foreground) >= required


def most_contrasting(background, candidates):
    """Pick the candidate color with the highest contrast against background."""
    return max(candidates, key=lambda c: contrast_ratio(background, c))
