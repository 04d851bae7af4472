"""
Value types shared by the theming pipeline.

Templates are read from and written to the editor's JSON layout, where each
layer keeps its drawing attributes in a flat ``props`` dict. In memory the
attributes the engine cares about are split into typed fields; everything
else rides along untouched in ``props`` / ``attrs`` so nothing is dropped on
the way through.
"""
import copy
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from .errors import TemplateFormatError

MAIN_BG = "main_bg"

TEXT = "Text"
IMAGE = "Image"
LINE_TYPES = ("Line", "Arrow")
SHAPE_TYPES = (
    "Rect",
    "Circle",
    "Ellipse",
    "Star",
    "RegularPolygon",
    "Path",
    "Icon",
    "ComplexShape",
)
LAYER_TYPES = (TEXT, IMAGE) + LINE_TYPES + SHAPE_TYPES

RESERVED_LOGO_IDS = frozenset({"logo", "company_logo", "brand_logo"})

TRANSPARENT = "transparent"

_GEOMETRY_KEYS = ("x", "y", "width", "height", "rotation")
_PAINT_KEYS = {"fill": "fill", "stroke": "stroke", "strokeWidth": "stroke_width"}
_LAYER_PROP_KEYS = {
    "fontSize": "font_size",
    "text": "text",
    "src": "src",
    "path": "path",
    "visible": "visible",
}


class ColorPalette(NamedTuple):
    id: str
    name: str
    primary: str
    secondary: str
    accent: str
    background: str
    text: str
    subtext: str
    is_dark: bool

    def colors(self):
        """Role name -> hex for every color field."""
        return {
            "primary": self.primary,
            "secondary": self.secondary,
            "accent": self.accent,
            "background": self.background,
            "text": self.text,
            "subtext": self.subtext,
        }

    def to_dict(self):
        data = {"id": self.id, "name": self.name}
        data.update(self.colors())
        data["isDark"] = self.is_dark
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data["id"],
            name=data["name"],
            primary=data["primary"],
            secondary=data["secondary"],
            accent=data.get("accent", data["primary"]),
            background=data["background"],
            text=data["text"],
            subtext=data["subtext"],
            is_dark=bool(data.get("isDark", data.get("is_dark", False))),
        )


def is_transparent(color):
    return not color or color == TRANSPARENT


@dataclass
class Geometry:
    x: float = 0.0
    y: float = 0.0
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: float = 0.0

    def clone(self):
        return Geometry(self.x, self.y, self.width, self.height, self.rotation)


@dataclass
class Paint:
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None

    def clone(self):
        return Paint(self.fill, self.stroke, self.stroke_width)


@dataclass
class Layer:
    id: str
    type: str
    geometry: Geometry = field(default_factory=Geometry)
    paint: Paint = field(default_factory=Paint)
    is_logo: bool = False
    font_size: Optional[float] = None
    text: Optional[str] = None
    src: Optional[str] = None
    path: Optional[str] = None
    visible: bool = True
    props: dict = field(default_factory=dict)
    attrs: dict = field(default_factory=dict)

    @property
    def is_text(self):
        return self.type == TEXT

    @property
    def is_shape(self):
        return self.type in SHAPE_TYPES

    @property
    def is_line(self):
        return self.type in LINE_TYPES

    @property
    def is_logo_layer(self):
        return self.is_logo or self.id in RESERVED_LOGO_IDS

    def clone(self):
        return Layer(
            id=self.id,
            type=self.type,
            geometry=self.geometry.clone(),
            paint=self.paint.clone(),
            is_logo=self.is_logo,
            font_size=self.font_size,
            text=self.text,
            src=self.src,
            path=self.path,
            visible=self.visible,
            props=copy.deepcopy(self.props),
            attrs=copy.deepcopy(self.attrs),
        )

    @classmethod
    def from_dict(cls, data):
        """Build a layer from editor JSON (flat ``props``) or the split
        ``geometry`` / ``paint`` layout."""
        if "id" not in data or "type" not in data:
            raise TemplateFormatError(f"Layer is missing id or type: {data!r}")

        props = dict(data.get("props") or {})
        props.update(data.get("geometry") or {})
        paint_data = data.get("paint") or {}
        for key in ("fill", "stroke"):
            if key in paint_data:
                props[key] = paint_data[key]
        if "stroke_width" in paint_data or "strokeWidth" in paint_data:
            props["strokeWidth"] = paint_data.get("strokeWidth", paint_data.get("stroke_width"))

        geometry = Geometry(
            x=float(props.pop("x", 0) or 0),
            y=float(props.pop("y", 0) or 0),
            width=_optional_float(props.pop("width", None)),
            height=_optional_float(props.pop("height", None)),
            rotation=float(props.pop("rotation", 0) or 0),
        )
        paint = Paint(
            fill=props.pop("fill", None),
            stroke=props.pop("stroke", None),
            stroke_width=props.pop("strokeWidth", None),
        )
        fields = {attr: props.pop(key) for key, attr in _LAYER_PROP_KEYS.items() if key in props}
        if "font_size" in fields:
            fields["font_size"] = _optional_float(fields["font_size"])
        if "visible" in fields:
            fields["visible"] = fields["visible"] is not False

        attrs = {
            k: copy.deepcopy(v)
            for k, v in data.items()
            if k not in ("id", "type", "props", "geometry", "paint", "isLogo")
        }
        return cls(
            id=str(data["id"]),
            type=data["type"],
            geometry=geometry,
            paint=paint,
            is_logo=bool(data.get("isLogo", False)),
            props=props,
            attrs=attrs,
            **fields,
        )

    def to_dict(self):
        props = copy.deepcopy(self.props)
        for key in _GEOMETRY_KEYS:
            value = getattr(self.geometry, key)
            if value is not None:
                props[key] = value
        for key, attr in _PAINT_KEYS.items():
            value = getattr(self.paint, attr)
            if value is not None:
                props[key] = value
        for key, attr in _LAYER_PROP_KEYS.items():
            value = getattr(self, attr)
            if attr == "visible":
                if not value:
                    props[key] = False
            elif value is not None:
                props[key] = value

        data = {"id": self.id, "type": self.type, "props": props}
        if self.is_logo:
            data["isLogo"] = True
        data.update(copy.deepcopy(self.attrs))
        return data


def _optional_float(value):
    return None if value is None else float(value)


_BACKGROUND_KEYS = {
    "color2": "color2",
    "patternImageURL": "pattern_image_url",
    "patternColor": "pattern_color",
    "overlayColor": "overlay_color",
    "scale": "scale",
    "rotation": "rotation",
    "opacity": "opacity",
}


@dataclass
class BackgroundPattern:
    type: str = "solid"
    color1: str = "#FFFFFF"
    color2: Optional[str] = None
    pattern_image_url: Optional[str] = None
    pattern_color: Optional[str] = None
    overlay_color: Optional[str] = None
    scale: Optional[float] = None
    rotation: Optional[float] = None
    opacity: Optional[float] = None
    attrs: dict = field(default_factory=dict)

    def clone(self, **changes):
        values = {
            "type": self.type,
            "color1": self.color1,
            "attrs": copy.deepcopy(self.attrs),
        }
        for attr in _BACKGROUND_KEYS.values():
            values[attr] = getattr(self, attr)
        values.update(changes)
        return BackgroundPattern(**values)

    @classmethod
    def from_dict(cls, data):
        known = {"type", "color1"} | set(_BACKGROUND_KEYS)
        return cls(
            type=data.get("type", "solid"),
            color1=data.get("color1", "#FFFFFF"),
            attrs={k: copy.deepcopy(v) for k, v in data.items() if k not in known},
            **{attr: data.get(key) for key, attr in _BACKGROUND_KEYS.items()},
        )

    def to_dict(self):
        data = {"type": self.type, "color1": self.color1}
        for key, attr in _BACKGROUND_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        data.update(copy.deepcopy(self.attrs))
        return data


@dataclass
class CardTemplate:
    id: str
    name: str
    width: float
    height: float
    layers: list = field(default_factory=list)
    background: Optional[BackgroundPattern] = None
    category: Optional[str] = None
    tone: Optional[str] = None
    tags: list = field(default_factory=list)
    colors: list = field(default_factory=list)
    orientation: Optional[str] = None
    thumbnail: Optional[str] = None
    attrs: dict = field(default_factory=dict)

    def layer_by_id(self, layer_id):
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def clone(self, **changes):
        values = {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "layers": [layer.clone() for layer in self.layers],
            "background": self.background.clone() if self.background else None,
            "category": self.category,
            "tone": self.tone,
            "tags": list(self.tags),
            "colors": list(self.colors),
            "orientation": self.orientation,
            "thumbnail": self.thumbnail,
            "attrs": copy.deepcopy(self.attrs),
        }
        values.update(changes)
        return CardTemplate(**values)

    @classmethod
    def from_dict(cls, data):
        try:
            layers = [Layer.from_dict(item) for item in data.get("layers", [])]
            template = cls(
                id=str(data["id"]),
                name=data.get("name", str(data["id"])),
                width=float(data.get("width", 0)),
                height=float(data.get("height", 0)),
                layers=layers,
                background=(
                    BackgroundPattern.from_dict(data["background"])
                    if data.get("background")
                    else None
                ),
                category=data.get("category"),
                tone=data.get("tone"),
                tags=list(data.get("tags") or []),
                colors=list(data.get("colors") or []),
                orientation=data.get("orientation"),
                thumbnail=data.get("thumbnail"),
                attrs={
                    k: copy.deepcopy(v)
                    for k, v in data.items()
                    if k not in _TEMPLATE_KEYS
                },
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TemplateFormatError(f"Invalid template: {e}") from e

        seen = set()
        for layer in layers:
            if layer.id in seen:
                raise TemplateFormatError(
                    f"Duplicate layer id {layer.id!r} in template {template.id!r}"
                )
            seen.add(layer.id)
        return template

    def to_dict(self):
        data = {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
        }
        if self.background is not None:
            data["background"] = self.background.to_dict()
        data["layers"] = [layer.to_dict() for layer in self.layers]
        for key in ("category", "tone", "orientation", "thumbnail"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.tags:
            data["tags"] = list(self.tags)
        if self.colors:
            data["colors"] = list(self.colors)
        data.update(copy.deepcopy(self.attrs))
        return data


_TEMPLATE_KEYS = {
    "id",
    "name",
    "width",
    "height",
    "layers",
    "background",
    "category",
    "tone",
    "tags",
    "colors",
    "orientation",
    "thumbnail",
}
