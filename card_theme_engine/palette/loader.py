import json

from ..color import is_hex_color
from ..errors import CardThemeError
from ..models import ColorPalette


def load_palette_from_json(json_path):
    """Load a palette exported by ``export_palette_json``.

    Args:
        json_path: Path to palette JSON file

    Returns:
        ColorPalette
    """
    with open(json_path) as f:
        data = json.load(f)

    # Skip metadata keys
    data = {key: value for key, value in data.items() if not key.startswith("_")}

    try:
        palette = ColorPalette.from_dict(data)
    except KeyError as e:
        raise CardThemeError(f"{json_path}: palette is missing {e}") from e

    for role, value in palette.colors().items():
        if not is_hex_color(value):
            raise CardThemeError(f"{json_path}: {role} is not a #RRGGBB color: {value!r}")

    return palette
