from .json_export import export_palette_json, export_template_json, export_variations_json
from .preview import render_template, save_preview, save_variation_sheet
from .report import generate_contrast_report, print_palette

__all__ = [
    "export_palette_json",
    "export_template_json",
    "export_variations_json",
    "generate_contrast_report",
    "print_palette",
    "render_template",
    "save_preview",
    "save_variation_sheet",
]
