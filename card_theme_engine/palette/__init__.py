from .generator import TONES, choose_text_colors, generate_palette
from .loader import load_palette_from_json

__all__ = ["TONES", "choose_text_colors", "generate_palette", "load_palette_from_json"]
