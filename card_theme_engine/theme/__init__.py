from .applier import ThemeApplier, apply_palette
from .context import LayerContext, analyze_template, resolve_effective_backgrounds
from .logo import CatalogLogoResolver, LogoFamily, LogoVariant, best_logo_variant

__all__ = [
    "CatalogLogoResolver",
    "LayerContext",
    "LogoFamily",
    "LogoVariant",
    "ThemeApplier",
    "analyze_template",
    "apply_palette",
    "best_logo_variant",
    "resolve_effective_backgrounds",
]
