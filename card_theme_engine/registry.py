"""
Template registry: base templates plus their generated variations.

The registry is the one place that caches generated variants. The cache is
keyed by a hash of each base template's content, so editing a template's
layers or background invalidates its variants automatically.
"""
import hashlib
import json
import logging
import random
import threading

from .variations import MAX_ATTEMPTS, MAX_VARIANTS, generate_variations

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("popular", "newest", "name")

AVAILABLE_COLORS = ["Blue", "Red", "Green", "Yellow", "Purple", "Dark", "Light", "Gradient"]


def template_content_hash(template):
    """Stable hash of everything in a template that affects theming."""
    payload = json.dumps(template.to_dict(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class TemplateRegistry:
    """Retrieve, filter and sort templates and their variations.

    Args:
        base_templates: Iterable of CardTemplate
        max_variants / max_attempts: Passed to generate_variations
        applier: Optional ThemeApplier (e.g. with a logo resolver)
        shuffle_seed: When set, the combined list is shuffled with this seed
            so variations of one template are not grouped together
        seeds_for: Optional callable template -> iterable of palette seeds,
            for reproducible catalogs
    """

    def __init__(
        self,
        base_templates=(),
        max_variants=MAX_VARIANTS,
        max_attempts=MAX_ATTEMPTS,
        applier=None,
        shuffle_seed=None,
        seeds_for=None,
    ):
        self._base = {t.id: t.clone() for t in base_templates}
        self.max_variants = max_variants
        self.max_attempts = max_attempts
        self.applier = applier
        self.shuffle_seed = shuffle_seed
        self.seeds_for = seeds_for

        self._lock = threading.Lock()
        self._variants = {}  # content hash -> list of CardTemplate
        self._templates = None
        self._built_keys = None  # base id -> content hash of the last build

    def _variations_for(self, template, key):
        cached = self._variants.get(key)
        if cached is None:
            seeds = self.seeds_for(template) if self.seeds_for else None
            cached = generate_variations(
                template,
                seeds=seeds,
                max_variants=self.max_variants,
                max_attempts=self.max_attempts,
                applier=self.applier,
            )
            self._variants[key] = cached
        return cached

    def _ensure_built(self):
        with self._lock:
            # Bases handed out as variant 0 can be edited in place, so rehash
            current_keys = {
                template_id: template_content_hash(template)
                for template_id, template in self._base.items()
            }
            if self._templates is not None and current_keys == self._built_keys:
                return self._templates

            live_keys = set()
            templates = []
            for template_id, template in self._base.items():
                key = current_keys[template_id]
                variations = self._variations_for(template, key)
                live_keys.add(key)
                templates.extend(variations)

            # Drop variants of templates whose content has changed
            for stale in set(self._variants) - live_keys:
                del self._variants[stale]

            if self.shuffle_seed is not None:
                random.Random(self.shuffle_seed).shuffle(templates)

            logger.info(
                "Registry built: %d templates from %d bases", len(templates), len(self._base)
            )
            self._templates = templates
            self._built_keys = current_keys
            return templates

    def update_template(self, template):
        """Add or replace a base template."""
        with self._lock:
            self._base[template.id] = template.clone()
            self._templates = None

    def remove_template(self, template_id):
        with self._lock:
            self._base.pop(template_id, None)
            self._templates = None

    def invalidate(self):
        """Forget every cached variation."""
        with self._lock:
            self._variants.clear()
            self._templates = None

    def get_all_templates(self):
        return list(self._ensure_built())

    def get_template_by_id(self, template_id):
        for template in self._ensure_built():
            if template.id == template_id:
                return template
        return None

    def get_templates(
        self, category=None, tone=None, color=None, search=None, tags=None, sort_by=None
    ):
        """Filter and sort the catalog.

        Args:
            category: Exact category match ("All" disables the filter)
            tone: Exact tone match ("All" disables the filter)
            color: Substring of a template color or exact tag match
            search: Case-insensitive substring of name, tags or category
            tags: Every listed tag must be present
            sort_by: "popular", "newest" or "name"
        """
        results = list(self._ensure_built())

        if search:
            query = search.lower()
            results = [
                t
                for t in results
                if query in t.name.lower()
                or any(query in tag.lower() for tag in t.tags)
                or query in (t.category or "").lower()
            ]

        if category and category != "All":
            results = [t for t in results if t.category == category]

        if tone and tone != "All":
            results = [t for t in results if t.tone == tone]

        if color:
            color_query = color.lower()
            results = [
                t
                for t in results
                if any(color_query in c.lower() for c in t.colors)
                or any(tag.lower() == color_query for tag in t.tags)
            ]

        if tags:
            wanted = {tag.lower() for tag in tags}
            results = [t for t in results if wanted <= {tag.lower() for tag in t.tags}]

        if sort_by == "name":
            results.sort(key=lambda t: t.name)
        elif sort_by == "newest":
            # Ids are assigned in creation order
            results.sort(key=lambda t: t.id, reverse=True)
        elif sort_by == "popular":
            # No usage data yet; longer (more descriptive) names first
            results.sort(key=lambda t: len(t.name), reverse=True)
        elif sort_by is not None:
            raise ValueError(f"sort_by must be one of {SORT_OPTIONS}, got {sort_by!r}")

        return results

    def get_categories(self):
        return sorted({t.category for t in self._ensure_built() if t.category})

    def get_available_colors(self):
        return list(AVAILABLE_COLORS)
