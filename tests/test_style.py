from pytest import raises

from textmesh import TextStyle, TextAlignment, VerticalAlignment, OverflowMode
from textmesh.styles import Material


def test_defaults():
    style = TextStyle()
    assert style.font_size == 32
    assert style.fill == 0xFFFFFF
    assert style.align == "left"
    assert style.align == TextAlignment.left
    assert style.vertical_align == VerticalAlignment.top
    assert style.overflow_mode == OverflowMode.overflow
    assert style.word_wrap is False
    assert style.word_wrap_width == 400
    assert style.word_wrapping_ratios == 0.4
    assert style.font_style == ""
    assert style.font_style_flags == ()
    assert style.material is None


def test_keyword_only():
    with raises(TypeError):
        TextStyle(20)


def test_font_size():
    style = TextStyle(font_size=20)
    assert style.font_size == 20
    with raises(ValueError):
        style.font_size = 0
    with raises(ValueError):
        TextStyle(font_size=-3)


def test_fill():
    assert TextStyle(fill=0x123456).fill == 0x123456
    assert TextStyle(fill="#ff0000").fill == 0xFF0000
    assert TextStyle(fill=(0, 1, 0)).fill == 0x00FF00
    with raises(ValueError):
        TextStyle(fill=0x1000000)
    with raises(TypeError):
        TextStyle(fill=True)


def test_font_style():
    style = TextStyle(font_style="Bold, ITALIC")
    assert style.font_style == "bold italic"
    assert style.font_style_flags == ("bold", "italic")
    style.font_style = "normal"
    assert style.font_style == ""
    with raises(ValueError):
        style.font_style = "bold fancy"
    with raises(TypeError):
        style.font_style = 3


def test_enum_properties():
    style = TextStyle(align="CENTER", vertical_align="Middle", overflow_mode="ellipsis")
    assert style.align == TextAlignment.center
    assert style.vertical_align == VerticalAlignment.middle
    assert style.overflow_mode == OverflowMode.ellipsis

    style.align = None
    assert style.align == "left"

    with raises(ValueError) as err:
        style.align = "sideways"
    assert "sideways" in str(err.value)
    with raises(TypeError):
        style.align = 3
    with raises(ValueError):
        style.vertical_align = "up"
    with raises(ValueError):
        style.overflow_mode = "scroll"


def test_numeric_validation():
    with raises(ValueError):
        TextStyle(container_height=-1)
    with raises(ValueError):
        TextStyle(word_wrap_width=-1)
    with raises(ValueError):
        TextStyle(line_height=-1)
    with raises(ValueError):
        TextStyle(padding=-1)
    with raises(ValueError):
        TextStyle(word_wrapping_ratios=1.5)
    with raises(ValueError):
        TextStyle(sharpness=2)

    style = TextStyle(letter_spacing=-2, margin_left="5")
    assert style.letter_spacing == -2
    assert style.margin_left == 5


def test_material():
    style = TextStyle(material="Glow")
    assert style.material == "Glow"
    style.material = {"outlineWidth": 0.1}
    assert isinstance(style.material, Material)
    assert style.material.outline_width == 0.1
    material = Material()
    style.material = material
    assert style.material is material
    with raises(TypeError):
        style.material = 42


def test_update_events():
    style = TextStyle()
    events = []

    @style.add_event_handler("update")
    def on_update(event):
        events.append(event.property)

    style.font_size = 20
    style.align = "right"
    assert events == ["font_size", "align"]

    # Setting the same value emits nothing
    style.font_size = 20
    style.align = "RIGHT"
    assert len(events) == 2

    assert events[0] == "font_size"
    assert style.font_size == 20


def test_no_events_during_init():
    events = []

    class RecordingStyle(TextStyle):
        def dispatch_event(self, type, **kwargs):
            events.append(kwargs)
            return super().dispatch_event(type, **kwargs)

    RecordingStyle(font_size=20, align="center")
    assert events == []


def test_copy():
    style = TextStyle(font_size=20, align="center", word_wrap=True)
    events = []
    style.add_event_handler(lambda e: events.append(e), "update")

    other = style.copy(font_size=40)
    assert other is not style
    assert other.font_size == 40
    assert other.align == "center"
    assert other.word_wrap is True
    assert style.font_size == 20

    other.font_size = 50
    assert events == []


def test_to_dict():
    d = TextStyle(font_size=20).to_dict()
    assert d["font_size"] == 20
    assert d["align"] == "left"
    assert "material" in d
    assert TextStyle(**d).to_dict() == d
