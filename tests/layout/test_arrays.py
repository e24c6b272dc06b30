import numpy as np

from textmesh import RichTextParser, TextStyle
from textmesh.fonts import FontAsset
from textmesh.layout import LayoutEngine, CharacterInfoPool, TextInfo, glyph_arrays


def arrays_for(text):
    chars = RichTextParser().parse(text)
    info = LayoutEngine(pool=CharacterInfoPool()).layout(
        chars, FontAsset.monospace(), TextStyle()
    )
    return glyph_arrays(info)


def test_glyph_arrays():
    arrays = arrays_for("A B")
    assert arrays["positions"].dtype == np.float32
    assert arrays["positions"].shape == (2, 2)
    assert arrays["positions"].tolist() == [[0, 0], [20, 0]]
    assert arrays["sizes"].tolist() == [[10, 20], [10, 20]]
    assert arrays["colors"].tolist() == [[1, 1, 1, 1], [1, 1, 1, 1]]
    assert arrays["indices"].tolist() == [0, 2]
    assert arrays["line_indices"].tolist() == [0, 0]
    assert arrays["pages"].tolist() == [0, 0]
    # Printable ASCII starts at 32, each glyph is 10 wide in the atlas
    assert arrays["atlas_regions"].tolist() == [[330, 0, 10, 20], [340, 0, 10, 20]]


def test_glyph_arrays_colors():
    arrays = arrays_for("<color=#ff0000>A</color><alpha=#00>B")
    assert arrays["colors"][0].tolist() == [1, 0, 0, 1]
    assert arrays["colors"][1].tolist() == [1, 1, 1, 0]


def test_glyph_arrays_rotation():
    arrays = arrays_for("<rotate=45>A")
    assert arrays["rotations"].tolist() == [45]


def test_glyph_arrays_empty():
    arrays = glyph_arrays(TextInfo())
    assert arrays["positions"].shape == (0, 2)
    assert arrays["colors"].shape == (0, 4)
    assert arrays["indices"].shape == (0,)
