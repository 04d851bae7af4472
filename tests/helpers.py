"""Template builders shared by the test modules."""
from card_theme_engine.models import BackgroundPattern, CardTemplate, Layer


def layer(layer_id, layer_type, x=0, y=0, width=10, height=10, is_logo=False, **props):
    data = {
        "id": layer_id,
        "type": layer_type,
        "props": dict(x=x, y=y, width=width, height=height, rotation=0, **props),
    }
    if is_logo:
        data["isLogo"] = True
    return Layer.from_dict(data)


def template(layers, background=None, template_id="tpl", width=600, height=350, **extra):
    return CardTemplate(
        id=template_id,
        name="Test Card",
        width=width,
        height=height,
        layers=list(layers),
        background=background or BackgroundPattern(type="solid", color1="#FFFFFF"),
        **extra,
    )


def business_card():
    """Side panel with text on it, title text on the card, a chip inside a frame."""
    return template(
        [
            layer("panel", "Rect", 0, 0, 220, 350, fill="#1E3A8A"),
            layer("company", "Text", 20, 280, 180, 30, fontSize=16, text="ACME"),
            layer("name", "Text", 250, 60, 320, 40, fontSize=32, text="Jordan Avery"),
            layer("title", "Text", 250, 110, 320, 24, fontSize=14, text="Designer"),
            layer("divider", "Line", 250, 150, 300, 0, stroke="#1E3A8A", strokeWidth=2),
            layer("frame", "Rect", 240, 180, 340, 150, fill="transparent", stroke="#999999"),
            layer("chip", "Rect", 260, 200, 120, 60, fill="#F59E0B"),
            layer("chip_label", "Text", 270, 215, 100, 20, fontSize=12, text="NEW"),
            layer("contact", "Text", 400, 200, 160, 80, fontSize=14, text="hi@acme.test"),
            layer("photo", "Image", 30, 30, 80, 80, src="/img/photo.png"),
        ]
    )
