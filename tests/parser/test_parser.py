import math

from textmesh.parser import RichTextParser, try_parse_tag, MAX_TAG_LENGTH
from textmesh.parser.tags import NBSP, OBJECT_REPLACEMENT
from textmesh.styles import StyleSheet


def parse(text, **kwargs):
    return RichTextParser(**kwargs).parse(text)


def text_of(chars):
    return "".join(pc.char for pc in chars)


def test_try_parse_tag():
    tag = try_parse_tag("<size=12>", 0)
    assert tag.name == "size"
    assert tag.value == "12"
    assert not tag.is_closing
    assert tag.length == 9

    tag = try_parse_tag("ab</B>", 2)
    assert tag.name == "b"
    assert tag.is_closing
    assert tag.length == 4

    tag = try_parse_tag('<link="a b">', 0)
    assert tag.name == "link"
    assert tag.value == "a b"

    tag = try_parse_tag("<u color=#00ff00>", 0)
    assert tag.name == "u"
    assert tag.value == "color=#00ff00"

    assert try_parse_tag("x<b>", 0) is None
    assert try_parse_tag("<>", 0) is None
    assert try_parse_tag("< >", 0) is None
    assert try_parse_tag("<b", 0) is None
    assert try_parse_tag("<=3>", 0) is None


def test_tag_length_limit():
    name = "x" * MAX_TAG_LENGTH
    text = f"<{name}>"
    assert try_parse_tag(text, 0) is None
    chars = parse(f"<color={'f' * 200}>A")
    assert text_of(chars).endswith(">A")
    assert chars[0].char == "<"


def test_empty_text():
    assert parse("") == []


def test_plain_text():
    chars = parse("Hello")
    assert text_of(chars) == "Hello"
    assert [pc.original_index for pc in chars] == [0, 1, 2, 3, 4]
    assert all(pc.color == 0xFFFFFF for pc in chars)
    assert all(pc.font_size == 32 for pc in chars)


def test_base_values():
    chars = RichTextParser().parse("A", 20, 0x00FF00, "Serif")
    assert chars[0].font_size == 20
    assert chars[0].color == 0x00FF00
    assert chars[0].font_family == "Serif"


def test_order_preservation():
    chars = parse("H<b>e</b>l<size=10>l</size>o")
    assert text_of(chars) == "Hello"
    indices = [pc.original_index for pc in chars]
    assert indices == sorted(indices)
    assert indices[:2] == [0, 4]


def test_unknown_tags_are_literal():
    for text in ["<foo>bar</foo>", "a <unknown=1> b", "x < y > z", "<b", "<>", "1 <2"]:
        chars = parse(text)
        assert text_of(chars) == text


def test_color_scenario():
    chars = parse("A<color=#ff0000>B</color>C")
    assert text_of(chars) == "ABC"
    assert [pc.color for pc in chars] == [0xFFFFFF, 0xFF0000, 0xFFFFFF]


def test_nested_colors():
    chars = parse("<color=red>A<color=blue>B</color>C</color>D")
    assert [pc.color for pc in chars] == [0xFF0000, 0x0000FF, 0xFF0000, 0xFFFFFF]


def test_color_shorthand():
    chars = parse("<#00ff00>A</#>B<#f00>C")
    assert text_of(chars) == "ABC"
    assert [pc.color for pc in chars] == [0x00FF00, 0xFFFFFF, 0xFF0000]

    # Not hex: literal
    chars = parse("<#xyz>A")
    assert text_of(chars) == "<#xyz>A"


def test_invalid_color_keeps_state():
    chars = parse('<color="nope">A</color>B')
    assert text_of(chars) == "AB"
    assert [pc.color for pc in chars] == [0xFFFFFF, 0xFFFFFF]


def test_alpha():
    chars = parse("<alpha=#80>A</alpha>B")
    assert abs(chars[0].alpha - 128 / 255) < 1e-9
    assert chars[1].alpha == 1.0


def test_bold_counter_scenario():
    chars = parse("A<b><b></b>B</b>C")
    assert text_of(chars) == "ABC"
    assert [pc.bold for pc in chars] == [False, True, False]


def test_unbalanced_closers():
    chars = parse("A</b></color></size></i>B")
    assert text_of(chars) == "AB"
    b = chars[1]
    assert not b.bold and not b.italic
    assert b.color == 0xFFFFFF
    assert b.font_size == 32

    # An extra close does not leave the counter negative
    chars = parse("</b><b>X</b>Y")
    assert [pc.bold for pc in chars] == [True, False]


def test_case_insensitive_tags():
    chars = parse("<B>x</B><COLOR=RED>y</COLOR>")
    assert chars[0].bold
    assert chars[1].color == 0xFF0000


def test_formatting_extras():
    chars = parse("<u color=#00ff00>A</u><s>B</s><i angle=15>C</i>D")
    a, b, c, d = chars
    assert a.underline and a.underline_color == 0x00FF00
    assert b.strikethrough and b.strikethrough_color == -1
    assert c.italic and c.italic_angle == 15
    assert not d.underline and not d.strikethrough and not d.italic
    assert d.underline_color == -1
    assert d.italic_angle == 0


def test_mark_scenario():
    chars = parse("<mark=#ffff0080>A</mark>B")
    assert chars[0].mark_color >> 24 == 0x80
    assert chars[0].mark_color & 0xFFFFFF == 0xFFFF00
    assert chars[1].mark_color == 0

    chars = parse("<mark=#ffcc00>A</mark>")
    assert chars[0].mark_color == (0xFF << 24) | 0xFFCC00

    chars = parse("<mark>A</mark>")
    assert chars[0].mark_color == (0xFF << 24) | 0xFFFF00


def test_sizes():
    chars = parse("<size=20>A</size><size=150%>B</size><size=+4>C</size><size=1.5em>D</size>E")
    assert [pc.font_size for pc in chars] == [20, 48, 36, 48, 32]

    chars = parse("<size=big>A</size>B")
    assert [pc.font_size for pc in chars] == [32, 32]


def test_sup_sub():
    chars = parse("x<sup>2</sup><sub>i</sub>y")
    x, sup, sub, y = chars
    assert sup.is_superscript and sup.font_size == 16
    assert sup.voffset < 0
    assert sub.is_subscript and sub.voffset > 0
    assert not y.is_superscript and not y.is_subscript
    assert y.font_size == 32 and y.voffset == 0


def test_spacing_tags():
    chars = parse("<cspace=5>A</cspace><mspace=20>B</mspace><voffset=1em>C</voffset>D")
    a, b, c, d = chars
    assert a.cspace == 5
    assert b.mspace == 20
    assert c.voffset == 32
    assert (d.cspace, d.mspace, d.voffset) == (0, 0, 0)


def test_layout_tags():
    chars = parse(
        "<align=center>A</align><indent=10%>B</indent><line-height=50>C</line-height>"
        "<width=100>D</width><nobr>E</nobr>F"
    )
    a, b, c, d, e, f = chars
    assert a.align == "center"
    assert b.indent == 3.2
    assert c.line_height_override == 50
    assert d.width_constraint == 100
    assert e.is_no_break
    assert f.align == "" and f.indent == 0 and not f.is_no_break

    chars = parse("<align=sideways>A</align>B")
    assert chars[0].align == ""


def test_margins_restore():
    chars = parse("<margin=10>A<margin-left=5>B</margin-left>C</margin>D")
    margins = [(pc.margin_left, pc.margin_right) for pc in chars]
    assert margins == [(10, 10), (5, 10), (10, 10), (0, 0)]


def test_case_transforms():
    chars = parse("<uppercase>ab</uppercase>c<lowercase>DE</lowercase>")
    assert text_of(chars) == "ABcde"

    chars = parse("<smallcaps>aB</smallcaps>")
    assert text_of(chars) == "AB"
    assert abs(chars[0].font_size - 32 * 0.8) < 1e-9
    assert chars[1].font_size == 32

    # A transform that yields more than one character is not applied
    chars = parse("<uppercase>ß</uppercase>")
    assert text_of(chars) == "ß"


def test_links():
    chars = parse('<link="home">Go</link>!<a href="http://x.org">X</a>')
    g, o, excl, x = chars
    assert g.is_link and g.link_id == "home"
    assert o.link_id == "home"
    assert not excl.is_link and excl.link_id == ""
    assert x.is_link and x.link_id == "http://x.org"


def test_font_and_material_tags():
    chars = parse('<font="Serif" material="Glow">A</font><material=Red>B</material>C')
    a, b, c = chars
    assert a.font_family == "Serif"
    assert a.material == "Glow"
    assert b.font_family == "" and b.material == "Red"
    assert c.material == ""


def test_transform_tags():
    chars = parse("<scale=2>A</scale><rotate=45>B</rotate><rotate=x>C</rotate>D")
    a, b, c, d = chars
    assert a.char_scale == 2
    assert b.rotation == 45
    assert c.rotation == 0
    assert d.char_scale == 1 and d.rotation == 0


def test_line_break_and_special_chars():
    chars = parse("A<br>B\nC")
    assert text_of(chars) == "A\nB\nC"
    assert [pc.is_line_break for pc in chars] == [False, True, False, True, False]
    assert chars[1].original_index == 1

    chars = parse("A<nbsp>B")
    assert chars[1].char == NBSP
    assert chars[1].is_no_break

    chars = parse("A\r\nB")
    assert text_of(chars) == "A\nB"


def test_space_and_pos():
    chars = parse("A<space=20>B<pos=50%>C")
    a, b, c = chars
    assert a.extra_space == 0
    assert b.extra_space == 20
    assert not b.has_fixed_position
    assert c.fixed_position == 16
    assert c.has_fixed_position
    assert math.isnan(a.fixed_position)

    # Pending modifiers skip line breaks
    chars = parse("A<space=5>\nB")
    assert chars[1].extra_space == 0
    assert chars[2].extra_space == 5


def test_noparse():
    chars = parse("<noparse><b>x</b></noparse><b>y</b>")
    assert text_of(chars) == "<b>x</b>y"
    assert not any(pc.bold for pc in chars[:-1])
    assert chars[-1].bold


def test_sprite_records():
    chars = parse('A<sprite="icons" name="coin">B<sprite index=3 tint=#ff0000>')
    assert text_of(chars) == f"A{OBJECT_REPLACEMENT}B{OBJECT_REPLACEMENT}"
    sprite1, sprite2 = chars[1], chars[3]
    assert sprite1.is_sprite
    assert sprite1.sprite_asset == "icons"
    assert sprite1.sprite_name == "coin"
    assert sprite1.sprite_index == -1
    assert sprite2.sprite_asset == "" and sprite2.sprite_name == ""
    assert sprite2.sprite_index == 3
    assert sprite2.sprite_tint == 0xFF0000
    assert not chars[2].is_sprite


def test_style_presets():
    sheet = StyleSheet.from_dict(
        {"H1": ("<b><size=48>", "</size></b>"), "warn": {"open": "<color=red>", "close": "</color>"}}
    )
    chars = parse("<style=h1>T</style>x<style=WARN>!</style>", style_sheet=sheet)
    t, x, excl = chars
    assert t.bold and t.font_size == 48
    assert not x.bold and x.font_size == 32
    assert excl.color == 0xFF0000

    # Unknown preset: the tag is consumed, nothing changes
    chars = parse("<style=nope>A</style>B", style_sheet=sheet)
    assert text_of(chars) == "AB"
    assert not chars[0].bold


def test_recursive_style_presets():
    sheet = StyleSheet()
    sheet.set("a", ("<style=b>", "</style>"))
    sheet.set("b", ("<style=a><i>", "</i></style>"))
    chars = parse("<style=a>T</style>x", style_sheet=sheet)
    assert chars[0].italic
    assert not chars[1].italic


def test_state_is_reset_per_parse():
    parser = RichTextParser()
    chars = parser.parse("<b><color=red>A")
    assert chars[0].bold
    chars = parser.parse("B")
    assert not chars[0].bold
    assert chars[0].color == 0xFFFFFF


def test_balanced_restoration():
    parser = RichTextParser()
    tags = [
        "b", "i", "u", "s", "mark=#ff0000", "color=#123456", "alpha=#40",
        "size=12", "cspace=3", "mspace=9", "voffset=4", "align=right",
        "indent=7", "margin=3", "line-height=60", "line-indent=2", "width=30",
        "nobr", "uppercase", "lowercase", "smallcaps", "sup", "sub",
        "link=x", "font=Serif", "font-weight=700", "material=M", "scale=2",
        "rotate=10", "gradient=#ff0000,#00ff00",
    ]  # fmt: skip
    for tag in tags:
        name = tag.split("=")[0]
        chars = parser.parse(f"a<{tag}>b</{name}>c")
        before, after = chars[0].snapshot(), chars[-1].snapshot()
        assert before == after, tag
