"""
Generate themed variations of a base template.

The base template is always returned first, followed by up to nine themed
copies built from freshly generated palettes. Running out of attempts
before nine unique palettes turn up simply yields a shorter list.
"""
import logging

from .palette.generator import generate_palette
from .seeded import SeededRandom
from .theme.applier import ThemeApplier
from .theme.context import analyze_template

logger = logging.getLogger(__name__)

MAX_VARIANTS = 10  # including the base template
MAX_ATTEMPTS = 15


def derive_seeds(master_seed, count, length=7):
    """Reproducible list of base36 palette seeds derived from one seed string."""
    rng = SeededRandom(master_seed)
    return [rng.base36(length) for _ in range(count)]


def generate_variations(
    template,
    seeds=None,
    max_variants=MAX_VARIANTS,
    max_attempts=MAX_ATTEMPTS,
    applier=None,
):
    """Build themed variations of a template.

    Args:
        template: Base CardTemplate, returned unchanged as the first item
        seeds: Optional iterable of palette seeds. When given the result is
            reproducible and generation stops once the seeds run out;
            otherwise every attempt uses a random seed.
        max_variants: Upper bound on the returned list, base included
        max_attempts: Palette generation attempts before giving up
        applier: ThemeApplier to use (one without a logo resolver by default)

    Returns:
        list of CardTemplate, 1 to max_variants long, with unique ids
    """
    if applier is None:
        applier = ThemeApplier()

    variations = [template]
    seen_palette_ids = set()
    seed_iter = iter(seeds) if seeds is not None else None
    context_map = None

    attempts = 0
    while len(variations) < max_variants and attempts < max_attempts:
        if seed_iter is not None:
            seed = next(seed_iter, None)
            if seed is None:
                break
        else:
            seed = None
        attempts += 1

        palette = generate_palette(seed)
        if palette.id in seen_palette_ids:
            logger.debug("Skipping duplicate palette %s", palette.id)
            continue
        seen_palette_ids.add(palette.id)

        # Geometry is the same for every attempt, analyze once
        if context_map is None:
            context_map = analyze_template(template)

        variations.append(applier.apply(template, palette, context_map))

    logger.info(
        "Generated %d variations of %s in %d attempts",
        len(variations) - 1,
        template.id,
        attempts,
    )
    return variations
