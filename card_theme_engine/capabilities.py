from collections import namedtuple

NodeCapabilities = namedtuple(
    "NodeCapabilities",
    ["has_fill", "has_stroke", "can_edit_text", "has_crop", "is_surface"],
)

DEFAULT_CAPABILITIES = NodeCapabilities(
    has_fill=True,
    has_stroke=True,
    can_edit_text=False,
    has_crop=False,
    is_surface=False,
)

_CAPABILITIES = {
    "Text": DEFAULT_CAPABILITIES._replace(has_stroke=False, can_edit_text=True),
    "Image": DEFAULT_CAPABILITIES._replace(has_fill=False, has_crop=True),
    # Lines are stroke only
    "Line": DEFAULT_CAPABILITIES._replace(has_fill=False),
    "Arrow": DEFAULT_CAPABILITIES._replace(has_fill=False),
}
for _shape in ("Rect", "Circle", "Ellipse", "Star", "RegularPolygon", "Path", "Icon", "ComplexShape"):
    _CAPABILITIES[_shape] = DEFAULT_CAPABILITIES._replace(is_surface=True)


def get_node_capabilities(layer_type):
    """What the editor lets a node type do; unknown types get the defaults."""
    return _CAPABILITIES.get(layer_type, DEFAULT_CAPABILITIES)


def can_be_surface(layer):
    """True when other layers can be painted on top of this layer's fill."""
    return (
        get_node_capabilities(layer.type).is_surface
        and layer.visible
        and not layer.is_logo_layer
    )
