"""
Spatial context: which surface is each layer painted on top of?

Layers are stacked in list order (index 0 is at the back). For every layer
we look downwards through the stack for the nearest fillable shape whose
bounding box encloses it; text and shapes are then colored against that
shape's color instead of the card background.
"""
import logging
import math
from collections import namedtuple

import numpy as np

from ..capabilities import can_be_surface
from ..models import MAIN_BG, is_transparent

logger = logging.getLogger(__name__)

LayerContext = namedtuple("LayerContext", ["background_layer_id"])

CONTAINMENT_TOLERANCE = 0.5  # px
MOSTLY_OVERLAPS = 0.8  # share of the target's area a surface must cover

# Konva positions these node types by their center
CENTERED_TYPES = ("Circle", "Ellipse", "Star", "RegularPolygon")


def _layer_size(layer):
    """Width and height, falling back to radius props for round shapes."""
    width, height = layer.geometry.width, layer.geometry.height
    props = layer.props
    if width is None:
        radius = props.get("radiusX", props.get("outerRadius", props.get("radius")))
        width = 2 * float(radius) if radius is not None else 0.0
    if height is None:
        radius = props.get("radiusY", props.get("outerRadius", props.get("radius")))
        height = 2 * float(radius) if radius is not None else 0.0
    return float(width), float(height)


def layer_bounds(layer):
    """Axis-aligned bounding box (x0, y0, x1, y1) of a layer.

    Rotation is in degrees about the node origin, which is the top-left
    corner for most nodes and the center for CENTERED_TYPES.
    """
    width, height = _layer_size(layer)
    if layer.type in CENTERED_TYPES:
        corners = np.array(
            [
                [-width / 2, -height / 2],
                [width / 2, -height / 2],
                [width / 2, height / 2],
                [-width / 2, height / 2],
            ]
        )
    else:
        corners = np.array([[0.0, 0.0], [width, 0.0], [width, height], [0.0, height]])

    theta = math.radians(layer.geometry.rotation or 0.0)
    if theta:
        rotation = np.array(
            [[math.cos(theta), -math.sin(theta)], [math.sin(theta), math.cos(theta)]]
        )
        corners = corners @ rotation.T

    corners = corners + np.array([layer.geometry.x, layer.geometry.y])
    x0, y0 = corners.min(axis=0)
    x1, y1 = corners.max(axis=0)
    return float(x0), float(y0), float(x1), float(y1)


def _bounds_matrix(layers):
    return np.array([layer_bounds(layer) for layer in layers], dtype=float).reshape(-1, 4)


def _qualifying_surfaces(layers):
    """Boolean matrix: [i, j] is True when layer j can act as layer i's surface."""
    boxes = _bounds_matrix(layers)
    x0, y0, x1, y1 = boxes.T
    area = (x1 - x0) * (y1 - y0)

    # Rows are targets, columns are candidates
    contains = (
        (x0[None, :] <= x0[:, None] + CONTAINMENT_TOLERANCE)
        & (y0[None, :] <= y0[:, None] + CONTAINMENT_TOLERANCE)
        & (x1[None, :] >= x1[:, None] - CONTAINMENT_TOLERANCE)
        & (y1[None, :] >= y1[:, None] - CONTAINMENT_TOLERANCE)
    )
    inter_w = np.clip(np.minimum(x1[:, None], x1[None, :]) - np.maximum(x0[:, None], x0[None, :]), 0, None)
    inter_h = np.clip(np.minimum(y1[:, None], y1[None, :]) - np.maximum(y0[:, None], y0[None, :]), 0, None)
    mostly = (area[:, None] > 0) & (inter_w * inter_h >= MOSTLY_OVERLAPS * area[:, None])

    surfaces = np.array([can_be_surface(layer) for layer in layers], dtype=bool) & (area > 0)
    n = len(layers)
    beneath = np.tril(np.ones((n, n), dtype=bool), k=-1)

    return (contains | mostly) & surfaces[None, :] & beneath


def analyze_template(template):
    """Map every layer id to the nearest enclosing surface beneath it.

    Args:
        template: CardTemplate to analyze

    Returns:
        dict of layer id -> LayerContext; ``background_layer_id`` is either
        a layer id or ``"main_bg"`` for the card background
    """
    layers = template.layers
    if not layers:
        return {}

    qualifies = _qualifying_surfaces(layers)
    context_map = {}
    for i, layer in enumerate(layers):
        candidates = np.flatnonzero(qualifies[i])
        background_id = layers[candidates[-1]].id if candidates.size else MAIN_BG
        context_map[layer.id] = LayerContext(background_id)

    logger.debug(
        "Analyzed template %s: %d of %d layers sit on a shape",
        template.id,
        sum(1 for ctx in context_map.values() if ctx.background_layer_id != MAIN_BG),
        len(layers),
    )
    return context_map


def context_map_to_dict(context_map):
    """JSON-friendly form: {layer_id: {"backgroundLayerId": ...}}"""
    return {
        layer_id: {"backgroundLayerId": ctx.background_layer_id}
        for layer_id, ctx in context_map.items()
    }


def _background_id(context_map, layer_id):
    ctx = context_map.get(layer_id)
    return ctx.background_layer_id if ctx is not None else MAIN_BG


def walk_background(layer_id, context_map, surface_colors, base_color):
    """Color painted directly beneath a layer.

    Transparent surfaces are looked through to whatever lies beneath them;
    reaching ``main_bg`` yields ``base_color``.
    """
    seen = {layer_id}
    background_id = _background_id(context_map, layer_id)
    while background_id != MAIN_BG and background_id not in seen:
        seen.add(background_id)
        color = surface_colors.get(background_id)
        if not is_transparent(color):
            return color
        background_id = _background_id(context_map, background_id)
    return base_color


def resolve_effective_backgrounds(template, context_map=None):
    """Effective background hex for every layer of an (already themed) template."""
    if context_map is None:
        context_map = analyze_template(template)
    base_color = template.background.color1 if template.background else "#FFFFFF"
    surface_colors = {
        layer.id: layer.paint.fill for layer in template.layers if can_be_surface(layer)
    }
    return {
        layer.id: walk_background(layer.id, context_map, surface_colors, base_color)
        for layer in template.layers
    }
