import colorsys
import logging
import math
import re
from collections import namedtuple

logger = logging.getLogger(__name__)

HSL = namedtuple("HSL", ["h", "s", "l"])

FALLBACK_RGB = (0, 0, 0)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")
_STRICT_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def is_hex_color(value):
    """True for a well-formed #RRGGBB string."""
    return isinstance(value, str) and bool(_STRICT_HEX_RE.match(value))


def _clamp_channel(value):
    return max(0, min(255, value))


def rgb_to_hex(r, g, b):
    return f"#{_clamp_channel(r):02x}{_clamp_channel(g):02x}{_clamp_channel(b):02x}"


def hex_to_rgb(hex_color):
    """Decode #RRGGBB (or #RGB) to an (r, g, b) tuple.

    Anything that does not parse decodes to black instead of raising, so a
    broken color in a template never aborts theme application.
    """
    if not isinstance(hex_color, str):
        logger.debug("Non-string color %r, using black", hex_color)
        return FALLBACK_RGB
    match = _HEX_RE.match(hex_color.strip())
    if not match:
        logger.debug("Malformed color %r, using black", hex_color)
        return FALLBACK_RGB
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))


def rgb_to_hsl(r, g, b):
    r, g, b = r / 255, g / 255, b / 255
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return HSL(h * 360, s * 100, l * 100)


def hex_to_hsl(hex_color):
    return rgb_to_hsl(*hex_to_rgb(hex_color))


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def hsl_to_rgb(h, s, l):
    """Convert HSL (h 0-360, s/l 0-100) to integer RGB.

    Uses the chroma / intermediate / match construction with half-up
    rounding after adding the match value.
    """
    h = h % 360
    s = max(0.0, min(100.0, s)) / 100
    l = max(0.0, min(100.0, l)) / 100

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs(((h / 60) % 2) - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0
    elif h < 120:
        r, g, b = x, c, 0
    elif h < 180:
        r, g, b = 0, c, x
    elif h < 240:
        r, g, b = 0, x, c
    elif h < 300:
        r, g, b = x, 0, c
    else:
        r, g, b = c, 0, x

    return tuple(_clamp_channel(_round_half_up((v + m) * 255)) for v in (r, g, b))


def hsl_to_hex(h, s, l):
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def rotate_hsl(hsl, degrees):
    return HSL((hsl.h + degrees + 360) % 360, hsl.s, hsl.l)


def rotate_hue(color, degrees):
    """Rotate the hue of a color, keeping saturation and lightness.

    Accepts either an HSL tuple (returns HSL) or a hex string (returns hex).
    """
    if isinstance(color, HSL):
        return rotate_hsl(color, degrees)
    return hsl_to_hex(*rotate_hsl(hex_to_hsl(color), degrees))


def hue_distance(a, b):
    """Shortest angular distance between two hues in degrees."""
    diff = abs(a - b) % 360
    return 360 - diff if diff > 180 else diff
