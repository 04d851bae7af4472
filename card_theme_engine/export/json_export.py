import json

from ..theme.context import context_map_to_dict


def export_palette_json(palette, filepath, seed=None):
    """Export a palette as JSON with metadata.

    Args:
        palette: The ColorPalette
        filepath: Output file path
        seed: Seed the palette was generated from, for reproduction
    """
    data = palette.to_dict()

    if seed is not None:
        data["_seed"] = seed

    data["_gtk_color_scheme"] = "prefer-dark" if palette.is_dark else "prefer-light"

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2)


def export_template_json(template, filepath, context_map=None):
    """Export a (themed) template in the editor's JSON layout.

    Args:
        template: The CardTemplate
        filepath: Output file path
        context_map: Optional context map, stored under ``_context`` for
            inspection; the editor ignores underscore keys
    """
    data = template.to_dict()
    if context_map is not None:
        data["_context"] = context_map_to_dict(context_map)

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2)


def export_variations_json(templates, filepath):
    """Export a list of variations as one JSON array."""
    with open(filepath, "w") as f:
        json.dump([t.to_dict() for t in templates], f, indent=2)
