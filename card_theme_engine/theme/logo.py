"""
Logo resolution.

The applier only knows the resolver contract::

    resolve_logo(template_id, background_hex) -> {"path": ..., "src": ...}

Any callable with that signature can be injected. ``CatalogLogoResolver`` is
the default implementation backed by an in-memory catalog of logo families,
each available in several colorways.
"""
import logging
from collections import namedtuple

from ..contrast import luminance

logger = logging.getLogger(__name__)

LogoVariant = namedtuple("LogoVariant", ["color", "path", "src"], defaults=[None])
LogoFamily = namedtuple("LogoFamily", ["id", "variants"])

DARK_BACKGROUND_LUMA = 128


def best_logo_variant(background_hex, family):
    """Pick the colorway that reads best on the given background.

    Dark backgrounds prefer the White variant, light ones the Black variant;
    failing that, any variant that is not the opposite extreme.
    """
    if not family.variants:
        return None

    if luminance(background_hex) < DARK_BACKGROUND_LUMA:
        preferred, avoided = "White", "Black"
    else:
        preferred, avoided = "Black", "White"

    for variant in family.variants:
        if variant.color == preferred:
            return variant
    for variant in family.variants:
        if variant.color != avoided:
            return variant
    return family.variants[0]


class CatalogLogoResolver:
    """Resolve logos from a mapping of template id -> LogoFamily."""

    def __init__(self, families=None):
        self.families = dict(families or {})

    def __call__(self, template_id, background_hex):
        family = self.families.get(template_id)
        if family is None:
            logger.debug("No logo family for template %s", template_id)
            return {}

        variant = best_logo_variant(background_hex, family)
        if variant is None:
            return {}

        result = {"path": variant.path}
        if variant.src is not None:
            result["src"] = variant.src
        return result

    @classmethod
    def from_dict(cls, data):
        """Build from ``{template_id: {"id": ..., "variants": [{color, path, src}]}}``."""
        families = {}
        for template_id, family in data.items():
            variants = [
                LogoVariant(v["color"], v["path"], v.get("src"))
                for v in family.get("variants", [])
            ]
            families[template_id] = LogoFamily(family.get("id", template_id), variants)
        return cls(families)
