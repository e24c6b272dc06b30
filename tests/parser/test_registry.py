from pytest import raises

from textmesh.parser import RichTextParser, TagRegistry, hash_tag_name


def noop(*args):
    pass


def test_hash_tag_name():
    # FNV-1a, 32 bit
    assert hash_tag_name("") == 0x811C9DC5
    assert hash_tag_name("a") == 0xE40C292C
    assert hash_tag_name("color") != hash_tag_name("colour")


def test_registry_register():
    registry = TagRegistry()
    assert len(registry) == 0

    registry.register("Wave", noop, noop)
    assert "wave" in registry
    assert registry.has("WAVE")
    assert registry.get_by_name("wave").name == "wave"
    assert registry.get_by_hash(hash_tag_name("wave")).on_open is noop
    assert registry.get_by_name("other") is None
    assert list(registry) == ["wave"]

    assert registry.unregister("wave")
    assert not registry.unregister("wave")
    assert len(registry) == 0


def test_registry_register_fails():
    registry = TagRegistry()
    with raises(ValueError):
        registry.register("", noop, noop)
    with raises(ValueError):
        registry.register(None, noop, noop)
    with raises(TypeError):
        registry.register("x", noop, "not callable")


def test_builtin_tags_are_registered():
    registry = RichTextParser().registry
    for name in ["b", "i", "u", "s", "color", "size", "mark", "gradient", "link"]:
        assert name in registry
    for name in ["br", "nbsp", "sprite", "noparse", "style", "pos", "space"]:
        assert name in registry


def test_override_builtin_tag():
    parser = RichTextParser()
    calls = []

    def on_open(state, value, base_font_size):
        calls.append(value)
        state.color = 0x123456

    parser.registry.register("b", on_open, noop)
    chars = parser.parse("<b=1>x</b>")
    assert calls == ["1"]
    assert chars[0].color == 0x123456
    assert not chars[0].bold


def test_get_by_hash_checks_name():
    registry = TagRegistry()
    registry.register("wave", noop, noop)
    h = hash_tag_name("wave")
    assert registry.get_by_hash(h).name == "wave"
    assert registry.get_by_hash(h, "wave").name == "wave"
    assert registry.get_by_hash(h, "wobble") is None


def test_colliding_tag_is_literal(monkeypatch):
    parser = RichTextParser()
    calls = []
    parser.registry.register("wave", lambda *args: calls.append(args), noop)

    # Make every parsed tag name hash like "wave"
    wave_hash = hash_tag_name("wave")
    monkeypatch.setattr(
        "textmesh.parser._parser.hash_tag_name", lambda name: wave_hash
    )

    chars = parser.parse("<wobble>x</wobble>")
    assert "".join(pc.char for pc in chars) == "<wobble>x</wobble>"
    assert calls == []

    chars = parser.parse("<wave>x</wave>")
    assert "".join(pc.char for pc in chars) == "x"
    assert len(calls) == 1
