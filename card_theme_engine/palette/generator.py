"""
Procedural palette generation.

A palette is drawn from a string seed: a tone category constrains the brand
hue, a background mode decides whether the card reads light, dark or bold,
and the text colors are then chosen for contrast against that background.
The order of the random draws below is fixed; changing it changes every
palette ever generated from a seed.
"""
from collections import namedtuple

from ..color import HSL, hsl_to_hex, rotate_hsl
from ..contrast import (
    AA_NORMAL,
    BLACK,
    MUTED_DARK,
    MUTED_LIGHT,
    SOFT_BLACK,
    SOFT_WHITE,
    WHITE,
    contrast_ratio,
)
from ..models import ColorPalette
from ..seeded import SeededRandom, random_seed

Tone = namedtuple("Tone", ["name", "hue_range", "saturation_range", "lightness_range"])

CORPORATE = Tone("Corporate", (180, 270), (30, 60), (40, 60))  # blue / cyan / teal
MODERN = Tone("Modern", (240, 320), (50, 80), (30, 50))  # purple / violet
CREATIVE = Tone("Creative", (0, 60), (60, 80), (50, 75))  # warm

TONES = {tone.name: tone for tone in (CORPORATE, MODERN, CREATIVE)}
TONE_WEIGHTS = [(CORPORATE, 0.4), (MODERN, 0.4), (CREATIVE, 0.2)]

LIGHT = "Light"
DARK = "Dark"
BOLD = "Bold"
BACKGROUND_MODE_WEIGHTS = [(LIGHT, 0.3), (DARK, 0.4), (BOLD, 0.3)]

# Accent ("pop") color envelope, shared by every tone
ACCENT_SATURATION = (70, 95)
ACCENT_LIGHTNESS = (45, 60)

DARK_HUE_DRIFT = 15


def _background_for_mode(mode, base_hue, rng):
    if mode == LIGHT:
        # Near-white, tinted with the brand hue
        return HSL(base_hue, rng.range(5, 20), rng.range(92, 98))
    if mode == DARK:
        # Near-black, hue allowed to drift a little (navy / charcoal)
        hue = (base_hue + rng.range(-DARK_HUE_DRIFT, DARK_HUE_DRIFT) + 360) % 360
        return HSL(hue, rng.range(10, 30), rng.range(5, 15))
    # Bold: the background is the brand color itself
    return HSL(base_hue, rng.range(60, 90), rng.range(25, 45))


def choose_text_colors(background):
    """Pick (text, subtext, light_text) for a background hex color.

    Softened slate tones are preferred while they still clear AA for normal
    text; otherwise pure white or black is used.
    """
    white_contrast = contrast_ratio(background, WHITE)
    black_contrast = contrast_ratio(background, BLACK)

    if white_contrast > black_contrast:
        text = SOFT_WHITE if contrast_ratio(background, SOFT_WHITE) >= AA_NORMAL else WHITE
        return text, MUTED_LIGHT, True

    text = SOFT_BLACK if contrast_ratio(background, SOFT_BLACK) >= AA_NORMAL else BLACK
    return text, MUTED_DARK, False


def generate_palette(seed=None):
    """Generate a palette deterministically from a seed string.

    Args:
        seed: Seed string. When omitted or empty a random 7 character base36
            seed is used, so the palette is fresh on every call.

    Returns:
        ColorPalette with id ``gen_<seed>``
    """
    if not seed:
        seed = random_seed()
    rng = SeededRandom(seed)

    # 1. Tone category and brand hue
    tone = rng.weighted(TONE_WEIGHTS)
    base_hue = rng.range(*tone.hue_range)

    # 2. Accent: monochromatic, high saturation; doubles as the primary
    accent_hsl = HSL(base_hue, rng.range(*ACCENT_SATURATION), rng.range(*ACCENT_LIGHTNESS))
    primary_hsl = accent_hsl

    # 3. Background surface
    mode = rng.weighted(BACKGROUND_MODE_WEIGHTS)
    background_hsl = _background_for_mode(mode, base_hue, rng)

    # 4. Complementary secondary
    secondary_hsl = rotate_hsl(primary_hsl, 180)

    background = hsl_to_hex(*background_hsl)
    primary = hsl_to_hex(*primary_hsl)

    # 5. Light cards read light; dark and bold (saturated brand color) cards read dark
    is_dark = mode != LIGHT

    # 6. Text colors follow whichever polarity reads best on the background
    text, subtext, _ = choose_text_colors(background)

    return ColorPalette(
        id=f"gen_{seed}",
        name=f"{tone.name} {'Dark' if is_dark else 'Light'}",
        primary=primary,
        secondary=hsl_to_hex(*secondary_hsl),
        accent=hsl_to_hex(*accent_hsl),
        background=background,
        text=text,
        subtext=subtext,
        is_dark=is_dark,
    )


def describe_palette(seed):
    """Return (tone name, background mode) the generator picks for a seed.

    Replays only the draws that decide the tone and background mode.
    """
    rng = SeededRandom(seed)
    tone = rng.weighted(TONE_WEIGHTS)
    rng.range(*tone.hue_range)
    rng.range(*ACCENT_SATURATION)
    rng.range(*ACCENT_LIGHTNESS)
    mode = rng.weighted(BACKGROUND_MODE_WEIGHTS)
    return tone.name, mode
