import json

from pytest import raises

from textmesh.fonts import (
    FontAsset,
    FontRegistry,
    Glyph,
    GlyphMetrics,
    load_font_data,
    is_font_data_file,
)


FONT_DATA = {
    "info": {
        "face": "Test Sans",
        "size": 32,
        "lineHeight": 38,
        "base": 4,
        "ascent": 30,
        "descent": -8,
        "underlineOffset": -3,
        "tabWidth": 40,
    },
    "pages": [{"id": 0, "file": "test_sans.png"}],
    "glyphs": [
        {"id": 65, "x": 0, "y": 0, "width": 20, "height": 24, "xOffset": 1, "yOffset": 6, "xAdvance": 21},
        {"id": 86, "x": 22, "y": 0, "width": 20, "height": 24, "xAdvance": 20, "page": 0},
        {"id": 32, "x": 0, "y": 0, "width": 0, "height": 0, "xAdvance": 8},
    ],
    "kernings": [
        {"first": 65, "second": 86, "amount": -2},
        {"first": 86, "second": 999, "amount": -1},
    ],
    "fallbackFonts": ["Other"],
}


def test_glyph():
    assert Glyph(0, 1, 2, 3, 4) == Glyph(0, 1, 2, 3, 4)
    assert Glyph(0, 1, 2, 3, 4) != Glyph(1, 1, 2, 3, 4)


def test_glyph_metrics():
    m = GlyphMetrics(ord("A"), 1, 2, 10, Glyph(0, 0, 0, 8, 12), {"V": -1.5})
    assert m.char == "A"
    assert (m.width, m.height) == (8, 12)
    assert m.get_kerning("V") == -1.5
    assert m.get_kerning("X") == 0

    m = GlyphMetrics(32, x_advance=5)
    assert m.glyph is None
    assert (m.width, m.height) == (0, 0)


def test_font_asset_validation():
    with raises(ValueError):
        FontAsset("x", 0, 10)
    with raises(TypeError):
        FontAsset(3, 32, 10)
    with raises(TypeError):
        FontAsset("x", 32, 10, foo_line=3)

    font = FontAsset("x", 32, 40, cap_line=20)
    assert font.cap_line == 20
    assert font.bold_spacing == 7
    assert font.chars == {}


def test_from_data():
    font = FontAsset.from_data(FONT_DATA)
    assert font.family == "Test Sans"
    assert font.size == 32
    assert font.line_height == 38
    assert font.base_line_offset == 4
    assert (font.ascent, font.descent) == (30, -8)
    assert font.underline_offset == -3
    assert font.tab_width == 40
    assert font.fallback_fonts == ["Other"]
    assert font.pages == ["test_sans.png"]

    a = font.get_char("A")
    assert (a.x_offset, a.y_offset, a.x_advance) == (1, 6, 21)
    assert a.glyph == Glyph(0, 0, 0, 20, 24)
    assert font.get_char("V").get_kerning("A") == -2
    assert font.get_char("Z") is None


def test_from_data_invalid():
    with raises(ValueError):
        FontAsset.from_data({"info": {"size": 32, "lineHeight": 40}})


def test_monospace():
    font = FontAsset.monospace()
    assert font.size == 32
    assert font.line_height == 40
    assert font.get_char(" ").glyph is None
    a = font.get_char("A")
    assert a.x_advance == 10
    assert (a.width, a.height) == (10, 20)
    assert font.get_char("\u2026") is None

    font = FontAsset.monospace("small", size=16, advance=5, charset="ab")
    assert font.family == "small"
    assert sorted(font.chars) == ["a", "b"]


def test_fallback():
    registry = FontRegistry()
    main = FontAsset.monospace("main", charset="ab")
    second = FontAsset.monospace("second", charset="cd")
    third = FontAsset.monospace("third", charset="e")
    main.fallback_fonts = ["second", "missing"]
    second.fallback_fonts = ["third"]
    registry.register("Second", second)
    registry.register("Third", third)

    metrics, font = main.get_char_with_fallback("a", registry)
    assert font is main
    metrics, font = main.get_char_with_fallback("c", registry)
    assert font is second
    assert metrics.char == "c"
    metrics, font = main.get_char_with_fallback("e", registry)
    assert font is third

    assert main.get_char_with_fallback("z", registry) is None
    assert main.get_char_with_fallback("c") is None


def test_fallback_cycle():
    registry = FontRegistry()
    a = FontAsset.monospace("a", charset="a")
    b = FontAsset.monospace("b", charset="b")
    a.fallback_fonts = ["b"]
    b.fallback_fonts = ["a"]
    registry.register("a", a)
    registry.register("b", b)

    assert a.get_char_with_fallback("b", registry)[1] is b
    assert a.get_char_with_fallback("z", registry) is None


def test_font_registry():
    registry = FontRegistry()
    font = FontAsset.monospace()
    registry.register("Mono", font)
    assert len(registry) == 1
    assert "mono" in registry
    assert "MONO" in registry
    assert registry.get("mOnO") is font
    assert list(registry) == [font]
    assert registry.get("other") is None

    with raises(TypeError):
        registry.register("x", "not a font")
    with raises(TypeError):
        registry.register(None, font)

    assert registry.unregister("MONO")
    assert not registry.unregister("mono")
    assert len(registry) == 0


def test_is_font_data_file():
    assert is_font_data_file("font.tmpfont.json")
    assert is_font_data_file("FONT.TMPFONT")
    assert not is_font_data_file("font.json")
    assert not is_font_data_file("font.ttf")


def test_load_font_data(tmp_path):
    filename = tmp_path / "test.tmpfont.json"
    filename.write_text(json.dumps(FONT_DATA), encoding="utf-8")

    font = load_font_data(filename)
    assert font.family == "Test Sans"
    assert font.pages == [str(tmp_path / "test_sans.png")]
    assert font.get_char("A") is not None


def test_load_font_data_invalid(tmp_path):
    filename = tmp_path / "other.json"
    filename.write_text(json.dumps({"foo": 1}), encoding="utf-8")
    with raises(ValueError):
        load_font_data(filename)
