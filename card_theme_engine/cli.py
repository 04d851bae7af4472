import argparse
import json
import logging
import os

from .config import load_config
from .errors import CardThemeError
from .export import (
    export_palette_json,
    export_template_json,
    export_variations_json,
    generate_contrast_report,
    print_palette,
    save_preview,
    save_variation_sheet,
)
from .palette import generate_palette, load_palette_from_json
from .seeded import random_seed
from .store import load_template
from .theme import CatalogLogoResolver, ThemeApplier, analyze_template
from .theme.context import context_map_to_dict
from .variations import derive_seeds, generate_variations


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate color palettes and themed variations of card templates"
    )
    parser.add_argument("--config", metavar="YAML", help="Configuration file")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log debug output to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    palette_parser = subparsers.add_parser("palette", help="Generate a palette")
    palette_parser.add_argument("--seed", help="Seed string (default: random)")
    palette_parser.add_argument("--json", metavar="PATH", help="Write palette JSON here")

    analyze_parser = subparsers.add_parser(
        "analyze", help="Print which surface each layer sits on"
    )
    analyze_parser.add_argument("template", help="Template JSON file")

    apply_parser = subparsers.add_parser("apply", help="Theme a template with one palette")
    apply_parser.add_argument("template", help="Template JSON file")
    source = apply_parser.add_mutually_exclusive_group()
    source.add_argument("--seed", help="Palette seed (default: random)")
    source.add_argument("--from-palette", metavar="JSON", help="Use an exported palette")
    _add_output_arguments(apply_parser)

    variations_parser = subparsers.add_parser(
        "variations", help="Generate themed variations of a template"
    )
    variations_parser.add_argument("template", help="Template JSON file")
    variations_parser.add_argument(
        "--seed", help="Master seed; makes the whole variation set reproducible"
    )
    _add_output_arguments(variations_parser)

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except CardThemeError as e:
        parser.error(str(e))

    level = logging.DEBUG if args.verbose else config["logging"]["level"]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "palette":
            _run_palette(args)
        elif args.command == "analyze":
            _run_analyze(args)
        elif args.command == "apply":
            _run_apply(args, config)
        elif args.command == "variations":
            _run_variations(args, config)
    except (CardThemeError, OSError) as e:
        parser.exit(1, f"error: {e}\n")


def _add_output_arguments(subparser):
    subparser.add_argument(
        "--output", "-o",
        metavar="DIR",
        default=None,
        help="Output directory (default: same as the template)",
    )
    subparser.add_argument(
        "--logos",
        metavar="JSON",
        help="Logo catalog: {template_id: {variants: [{color, path, src}]}}",
    )
    subparser.add_argument(
        "--no-preview", action="store_true", help="Skip PNG preview rendering"
    )


def _make_applier(args):
    if not args.logos:
        return ThemeApplier()
    with open(args.logos) as f:
        return ThemeApplier(CatalogLogoResolver.from_dict(json.load(f)))


def _output_dir(args):
    output_dir = args.output or os.path.dirname(args.template) or "."
    os.makedirs(output_dir, exist_ok=True)
    return output_dir


def _run_palette(args):
    """Generate and print a single palette."""
    seed = args.seed or random_seed()
    palette = generate_palette(seed)
    print_palette(palette)
    print(f"\nSeed: {seed}")

    if args.json:
        export_palette_json(palette, args.json, seed=seed)
        print(f"Exported: {args.json}")


def _run_analyze(args):
    """Print the spatial context map of a template."""
    template = load_template(args.template)
    context_map = analyze_template(template)
    print(json.dumps(context_map_to_dict(context_map), indent=2))


def _run_apply(args, config):
    """Theme one template with one palette and export the result."""
    template = load_template(args.template)
    output_dir = _output_dir(args)

    if args.from_palette:
        palette = load_palette_from_json(args.from_palette)
        seed = None
    else:
        seed = args.seed or random_seed()
        palette = generate_palette(seed)

    print(f"Theming: {template.id} with {palette.name} ({palette.id})")
    print_palette(palette)

    context_map = analyze_template(template)
    themed = _make_applier(args).apply(template, palette, context_map)

    report, issues = generate_contrast_report(
        themed, context_map, large_text_size=config["report"]["large_text_size"]
    )
    print("\n" + report)

    # Export paths
    template_path = os.path.join(output_dir, f"{themed.id}.json")
    palette_path = os.path.join(output_dir, f"palette-{palette.id}.json")
    report_path = os.path.join(output_dir, f"readability_report-{themed.id}.txt")
    preview_path = os.path.join(output_dir, f"{themed.id}.png")

    export_template_json(themed, template_path, context_map=context_map)
    export_palette_json(palette, palette_path, seed=seed)
    with open(report_path, "w") as f:
        f.write(report)
    exported = [template_path, palette_path, report_path]

    if not args.no_preview:
        save_preview(themed, preview_path, scale=config["preview"]["scale"])
        exported.append(preview_path)

    print("\n" + "=" * 60)
    print("Exported:")
    for path in exported:
        print(f"  - {path}")
    print("=" * 60)


def _run_variations(args, config):
    """Generate the variation set for a template and export it."""
    template = load_template(args.template)
    output_dir = _output_dir(args)
    limits = config["variations"]

    seeds = None
    if args.seed:
        seeds = derive_seeds(args.seed, limits["max_attempts"])

    variations = generate_variations(
        template,
        seeds=seeds,
        max_variants=limits["max_variants"],
        max_attempts=limits["max_attempts"],
        applier=_make_applier(args),
    )

    print(f"Generated {len(variations) - 1} variations of {template.id}:")
    for variant in variations[1:]:
        print(f"  {variant.id:36} {variant.name}")

    variations_path = os.path.join(output_dir, f"{template.id}-variations.json")
    export_variations_json(variations, variations_path)
    exported = [variations_path]

    context_map = analyze_template(template)
    failing = 0
    for variant in variations[1:]:
        _, issues = generate_contrast_report(
            variant, context_map, large_text_size=config["report"]["large_text_size"]
        )
        failing += bool(issues)
    if failing:
        print(f"\n{failing} variations have contrast issues; run `apply` for details")

    if not args.no_preview:
        preview = config["preview"]
        sheet_path = os.path.join(output_dir, f"{template.id}-variations.png")
        save_variation_sheet(
            variations,
            sheet_path,
            columns=preview["columns"],
            scale=preview["scale"] * 0.5,
            padding=preview["padding"],
        )
        exported.append(sheet_path)

    print("\n" + "=" * 60)
    print("Exported:")
    for path in exported:
        print(f"  - {path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
