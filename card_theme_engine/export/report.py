from ..capabilities import can_be_surface
from ..contrast import AA_LARGE, AA_NORMAL, INDISTINGUISHABLE, contrast_ratio
from ..models import is_transparent
from ..theme.context import analyze_template, resolve_effective_backgrounds

LARGE_TEXT_SIZE = 18  # px; larger text is held to the AA large threshold


def generate_contrast_report(template, context_map=None, large_text_size=LARGE_TEXT_SIZE):
    """Generate a readability report for a themed template.

    Every text layer is checked against AA (large or normal, by font size)
    and every filled shape against the indistinguishable threshold, each
    measured against the color it actually sits on.

    Returns:
        tuple: (report text, list of (layer id, fill, achieved, required))
    """
    if context_map is None:
        context_map = analyze_template(template)
    backgrounds = resolve_effective_backgrounds(template, context_map)

    report = []
    report.append("=" * 70)
    report.append("READABILITY REPORT")
    report.append("=" * 70)
    report.append(f"Template: {template.id} ({template.name})")
    if template.background is not None:
        report.append(f"Background:  {template.background.color1} ({template.background.type})")
    report.append("")

    issues = []

    def check(layer, required, note=""):
        fill = layer.paint.fill
        bg = backgrounds[layer.id]
        achieved = contrast_ratio(bg, fill)
        status = "✓" if achieved >= required else "✗ FAIL"
        if achieved < required:
            issues.append((layer.id, fill, achieved, required))
        on = context_map[layer.id].background_layer_id if layer.id in context_map else "main_bg"
        report.append(
            f"  {layer.id:18} {fill}  on {bg} ({on}): {achieved:4.1f}:1 {note}{status}"
        )

    text_layers = [l for l in template.layers if l.is_text and not is_transparent(l.paint.fill)]
    report.append(f"TEXT (min: {AA_NORMAL}:1, large: {AA_LARGE}:1)")
    report.append("-" * 50)
    for layer in text_layers:
        large = (layer.font_size or 0) > large_text_size
        check(layer, AA_LARGE if large else AA_NORMAL, "[large] " if large else "")

    shape_layers = [
        l for l in template.layers if can_be_surface(l) and not is_transparent(l.paint.fill)
    ]
    report.append(f"\nSHAPES (min: {INDISTINGUISHABLE}:1)")
    report.append("-" * 50)
    for layer in shape_layers:
        check(layer, INDISTINGUISHABLE)

    report.append("\n" + "=" * 70)
    if issues:
        report.append(f"ISSUES FOUND: {len(issues)}")
        for layer_id, fill, achieved, required in issues:
            report.append(f"  - {layer_id}: {fill} has {achieved:.1f}:1, needs {required}:1")
    else:
        report.append("ALL LAYERS PASS CONTRAST REQUIREMENTS ✓")
    report.append("=" * 70)

    return "\n".join(report), issues


def print_palette(palette):
    """Print palette info"""
    print("\n" + "=" * 60)
    print(f"{palette.name.upper()} PALETTE ({palette.id})")
    print("=" * 60)
    for role, value in palette.colors().items():
        contrast = contrast_ratio(value, palette.background)
        print(f"  {role:12} {value}  (contrast: {contrast:.1f}:1)")
