from pytest import raises
import numpy as np

from textmesh.utils.color import (
    Color,
    NAMED_COLORS,
    parse_color,
    parse_alpha,
    lerp_color_int,
)


class TColor(Color):
    def matches(self, r, g, b, a):
        eps = 0.501 / 255
        rgba = r, g, b, a
        return all(abs(v1 - v2) < eps for v1, v2 in zip(self.rgba, rgba))


def test_color_basics():
    c = Color(0.1, 0.2, 0.3)
    assert repr(c) == "Color(0.1, 0.2, 0.3, 1.0)"

    d = Color(c)
    assert list(c) == list(d)
    assert len(c) == 4


def test_color_tuples():
    assert TColor(0).matches(0, 0, 0, 1)
    assert TColor(1).matches(1, 1, 1, 1)
    assert TColor(0.5, 0.8).matches(0.5, 0.5, 0.5, 0.8)
    assert TColor(0.1, 0.2, 0.3).matches(0.1, 0.2, 0.3, 1)
    assert TColor((0.1, 0.2, 0.3, 0.8)).matches(0.1, 0.2, 0.3, 0.8)
    assert TColor([0.1, 0.2, 0.3]).matches(0.1, 0.2, 0.3, 1)

    with raises(ValueError):
        Color()
    with raises(ValueError):
        Color(1, 2, 3, 4, 5)


def test_color_strings():
    assert TColor("#f00").matches(1, 0, 0, 1)
    assert TColor("#f008").matches(1, 0, 0, 0.5333)
    assert TColor("#00ff00").matches(0, 1, 0, 1)
    assert TColor("#0000ff80").matches(0, 0, 1, 0.502)
    assert TColor("0xff0000").matches(1, 0, 0, 1)
    assert TColor(" Red ").matches(1, 0, 0, 1)
    assert TColor("rgb(255, 0, 0)").matches(1, 0, 0, 1)
    assert TColor("rgba(100%, 0%, 0%, 0.5)").matches(1, 0, 0, 0.5)
    assert TColor("hsl(120deg, 100%, 50%)").matches(0, 1, 0, 1)
    assert TColor("hsv(0, 1, 1)").matches(1, 0, 0, 1)

    with raises(ValueError):
        Color("#12")
    with raises(ValueError):
        Color("#xyz")
    with raises(ValueError):
        Color("notacolor")
    with raises(ValueError):
        Color("rgb(1, 2)")


def test_color_hsluv():
    c = Color.from_hsluv(0.5, 0.5, 0.5)
    h, s, light = c.to_hsluv()
    assert abs(h - 0.5) < 0.01
    assert abs(s - 0.5) < 0.01
    assert abs(light - 0.5) < 0.01

    assert TColor("hsluv(0, 0%, 100%)").matches(1, 1, 1, 1)


def test_color_int_conversion():
    assert Color.from_int(0xFF8000).to_int() == 0xFF8000
    assert Color("#123456").to_int() == 0x123456
    assert Color("#123456").hex == "#123456"
    assert Color(1, 0, 0, 0.5).hexa == "#ff000080"

    # Out of range values are clipped
    assert Color(2, -1, 0).to_int() == 0xFF0000

    c = Color.from_int(0x00FF00, 0.25)
    assert abs(c.a - 0.25) < 1e-6


def test_color_compare_and_array():
    assert Color("red") == "#f00"
    assert Color("red") != Color("blue")
    assert len({Color("red"), Color("#ff0000")}) == 1

    a = np.array(Color(0.25, 0.5, 0.75, 1))
    assert a.dtype == np.float32
    assert a.tolist() == [0.25, 0.5, 0.75, 1.0]


def test_color_lerp():
    c = Color("black").lerp("white", 0.5)
    assert TColor(c).matches(0.5, 0.5, 0.5, 1)


def test_parse_color():
    assert parse_color("red") == 0xFF0000
    assert parse_color("GREY") == 0x808080
    assert parse_color("#ffcc00") == 0xFFCC00
    assert parse_color("#fc0") == 0xFFCC00
    # Alpha is discarded
    assert parse_color("#ffcc0080") == 0xFFCC00
    assert parse_color("0x00ff00") == 0x00FF00

    for value in ["", "#ff", "bogus", "#gggggg"]:
        with raises(ValueError):
            parse_color(value)

    for name, value in NAMED_COLORS.items():
        assert parse_color(name) == value


def test_parse_alpha():
    assert parse_alpha("#FF") == 1.0
    assert parse_alpha("#00") == 0.0
    assert abs(parse_alpha("#80") - 128 / 255) < 1e-9
    assert abs(parse_alpha("80") - 128 / 255) < 1e-9

    for value in ["", "#", "#fff", "#zz"]:
        with raises(ValueError):
            parse_alpha(value)


def test_lerp_color_int():
    assert lerp_color_int(0xFF0000, 0x0000FF, 0) == 0xFF0000
    assert lerp_color_int(0xFF0000, 0x0000FF, 1) == 0x0000FF
    assert lerp_color_int(0xFF0000, 0x0000FF, 0.5) == 0x800080
    assert lerp_color_int(0x000000, 0x0A0A0A, 0.25) == 0x030303
