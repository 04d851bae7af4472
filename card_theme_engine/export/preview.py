"""
PNG previews of themed templates (Pillow).

This is a thumbnail renderer for eyeballing generated variations, not a
faithful canvas: shapes are drawn as their boxes or ellipses, paths and
icons as their bounding boxes, and text with Pillow's default font.
"""
import math

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..color import hex_to_rgb
from ..models import is_transparent
from ..theme.context import layer_bounds

ELLIPSE_TYPES = ("Circle", "Ellipse")


def _rgb(color, default=(0, 0, 0)):
    if is_transparent(color):
        return None
    try:
        return ImageColor.getrgb(color)[:3]
    except ValueError:
        return hex_to_rgb(color) if color.startswith("#") else default


def _gradient(width, height, color1, color2, rotation=0):
    """Linear gradient between two colors along ``rotation`` degrees."""
    start = np.array(_rgb(color1) or (255, 255, 255), dtype=float)
    end = np.array(_rgb(color2) or start, dtype=float)
    theta = math.radians(rotation or 0)
    yy, xx = np.mgrid[0:height, 0:width].astype(float)
    projection = xx * math.cos(theta) + yy * math.sin(theta)
    span = projection.max() - projection.min()
    t = (projection - projection.min()) / span if span else np.zeros_like(projection)
    pixels = start + (end - start) * t[..., None]
    return Image.fromarray(np.clip(pixels, 0, 255).astype(np.uint8), "RGB")


def _paint_background(template, width, height):
    bg = template.background
    if bg is None:
        return Image.new("RGB", (width, height), (255, 255, 255))
    if bg.type == "gradient" and bg.color2:
        return _gradient(width, height, bg.color1, bg.color2, bg.rotation)
    return Image.new("RGB", (width, height), _rgb(bg.color1) or (255, 255, 255))


def render_template(template, scale=1.0):
    """Render a template to a Pillow RGB image.

    Args:
        template: CardTemplate to draw
        scale: Output scale relative to the template's own size

    Returns:
        PIL.Image.Image
    """
    width = max(1, int(round(template.width * scale)))
    height = max(1, int(round(template.height * scale)))
    image = _paint_background(template, width, height)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    for layer in template.layers:
        if not layer.visible:
            continue
        x0, y0, x1, y1 = (v * scale for v in layer_bounds(layer))
        box = [x0, y0, max(x0, x1), max(y0, y1)]
        fill = _rgb(layer.paint.fill)
        outline = _rgb(layer.paint.stroke)
        stroke_width = max(1, int(round((layer.paint.stroke_width or 1) * scale)))

        if layer.is_text:
            draw.text((x0, y0), layer.text or "", fill=fill or (0, 0, 0), font=font)
        elif layer.is_line:
            draw.line([(x0, y0), (x1, y1)], fill=outline or fill or (0, 0, 0), width=stroke_width)
        elif layer.type in ELLIPSE_TYPES:
            draw.ellipse(box, fill=fill, outline=outline, width=stroke_width)
        elif layer.is_shape:
            draw.rectangle(box, fill=fill, outline=outline, width=stroke_width)
        else:
            # Images and unknown nodes: placeholder frame
            draw.rectangle(box, outline=(160, 160, 160), width=1)

    return image


def save_preview(template, output_path, scale=1.0):
    render_template(template, scale=scale).save(output_path, "PNG")


def save_variation_sheet(templates, output_path, columns=5, scale=0.5, padding=16):
    """Contact sheet of variations laid out in a grid."""
    images = [render_template(t, scale=scale) for t in templates]
    if not images:
        raise ValueError("no templates to render")

    cell_w = max(img.width for img in images)
    cell_h = max(img.height for img in images)
    columns = max(1, min(columns, len(images)))
    rows = math.ceil(len(images) / columns)

    sheet = Image.new(
        "RGB",
        (columns * cell_w + (columns + 1) * padding, rows * cell_h + (rows + 1) * padding),
        (235, 235, 235),
    )
    for index, img in enumerate(images):
        row, col = divmod(index, columns)
        sheet.paste(img, (padding + col * (cell_w + padding), padding + row * (cell_h + padding)))
    sheet.save(output_path, "PNG")
