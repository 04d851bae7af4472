#!/usr/bin/env python3
"""
Generate variations for every template in templates/.
Consolidates variation sheets into out/sheets/ folder.
"""

import argparse
import shutil
import subprocess
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(
        description="Generate themed variations for all templates"
    )
    parser.add_argument(
        "--seed",
        default=None,
        help="Master seed for reproducible variation sets",
    )
    parser.add_argument(
        "--logos",
        default=None,
        help="Logo catalog JSON passed through to every run",
    )
    args = parser.parse_args()

    root = Path(__file__).parent
    templates_dir = root / "templates"
    out_dir = root / "out"
    sheets_dir = out_dir / "sheets"

    sheets_dir.mkdir(parents=True, exist_ok=True)

    templates = []
    if templates_dir.exists():
        templates = [f for f in templates_dir.iterdir() if f.suffix.lower() == ".json"]

    if not templates:
        print(f"No templates in {templates_dir}")
        return

    print(f"Found {len(templates)} templates to process\n")

    for template_path in sorted(templates):
        name = template_path.stem
        template_out_dir = out_dir / name

        print(f"{'=' * 60}")
        print(f"Generating variations: {name}")
        print(f"{'=' * 60}")

        cmd = [
            "uv",
            "run",
            "card-theme-engine",
            "variations",
            str(template_path),
            "-o",
            str(template_out_dir),
        ]
        if args.seed is not None:
            cmd.extend(["--seed", f"{args.seed}:{name}"])
        if args.logos is not None:
            cmd.extend(["--logos", args.logos])

        result = subprocess.run(cmd, cwd=root)

        if result.returncode != 0:
            print(f"Error generating {name}")
            continue

        _copy_sheets(template_out_dir, sheets_dir)
        print()

    print(f"{'=' * 60}")
    print("Done! All variation sheets consolidated in:")
    print(f"  {sheets_dir}")
    print(f"{'=' * 60}")


def _copy_sheets(template_out_dir, sheets_dir):
    """Copy generated contact sheets to the consolidated directory."""
    for sheet in template_out_dir.glob("*-variations.png"):
        shutil.copy(sheet, sheets_dir / sheet.name)
        print(f"Copied {sheet.name} to {sheets_dir}")


if __name__ == "__main__":
    main()
