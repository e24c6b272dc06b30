from textmesh.layout import CharacterInfoPool, CharacterInfo, TextInfo
from textmesh.fonts import Glyph


def test_pool_acquire_release():
    pool = CharacterInfoPool()
    assert len(pool) == 0
    ci = pool.acquire()
    assert isinstance(ci, CharacterInfo)

    ci.glyph = Glyph(0, 1, 2, 3, 4)
    pool.release([ci])
    assert len(pool) == 1
    assert ci.glyph is None

    assert pool.acquire() is ci
    assert len(pool) == 0


def test_pool_clear():
    pool = CharacterInfoPool()
    pool.release([CharacterInfo(), CharacterInfo()])
    assert len(pool) == 2
    pool.clear()
    assert len(pool) == 0


def test_text_info_release():
    pool = CharacterInfoPool()
    info = TextInfo([CharacterInfo() for i in range(3)], width=10, height=20)
    assert info.character_count == 3
    info.release(pool)
    assert len(pool) == 3
    assert info.character_count == 0
    assert info.line_count == 0


def test_character_info_reset():
    ci = CharacterInfo()
    ci.x = 5
    ci.char = "A"
    ci.is_visible = True
    ci.reset()
    assert ci.x == 0
    assert ci.char == ""
    assert not ci.is_visible
    assert ci.underline_color == -1
