"""
The records that make up a layout result.
"""

from ..utils.enums import ElementType


class CharacterInfo:
    """A positioned character (or sprite) in a layout.

    Instances are managed by a `CharacterInfoPool`; don't keep references to
    the records of a layout that has been released.

    The ``x`` and ``y`` attributes are the top-left of the glyph quad in text
    space, with y pointing down. The ``origin`` and ``x_advance`` are the pen
    positions before and after the character.
    """

    __slots__ = [
        "alpha",
        "ascender",
        "bold",
        "char",
        "char_scale",
        "color",
        "descender",
        "element_type",
        "glyph",
        "height",
        "index",
        "is_visible",
        "italic",
        "line_index",
        "mark_color",
        "material",
        "origin",
        "rotation",
        "scale",
        "strikethrough",
        "strikethrough_color",
        "underline",
        "underline_color",
        "width",
        "word_index",
        "x",
        "x_advance",
        "y",
    ]

    def __init__(self):
        self.reset()

    def __repr__(self):
        return f"<CharacterInfo {self.char!r} ({self.x:0.5g}, {self.y:0.5g}) line {self.line_index}>"

    def reset(self):
        self.index = 0
        self.char = ""
        self.is_visible = False
        self.glyph = None
        self.x = 0.0
        self.y = 0.0
        self.width = 0.0
        self.height = 0.0
        self.scale = 0.0
        self.color = 0xFFFFFF
        self.alpha = 1.0
        self.bold = False
        self.italic = False
        self.underline = False
        self.strikethrough = False
        self.underline_color = -1
        self.strikethrough_color = -1
        self.mark_color = 0
        self.char_scale = 1.0
        self.rotation = 0.0
        self.line_index = 0
        self.word_index = 0
        self.origin = 0.0
        self.x_advance = 0.0
        self.ascender = 0.0
        self.descender = 0.0
        self.element_type = ElementType.character
        self.material = ""


class LineInfo:
    """The metrics of a line in a layout."""

    __slots__ = [
        "alignment",
        "alignment_offset",
        "ascender",
        "baseline",
        "character_count",
        "descender",
        "first_char_index",
        "first_visible_char_index",
        "height",
        "last_char_index",
        "last_visible_char_index",
        "max_advance",
        "space_count",
        "visible_character_count",
        "width",
        "y",
    ]

    def __init__(self, first_char_index=0, y=0.0, height=0.0, alignment="left"):
        self.first_char_index = first_char_index
        self.last_char_index = first_char_index
        self.character_count = 0
        self.width = 0.0
        self.height = height
        self.baseline = y + height
        self.y = y
        self.alignment_offset = 0.0
        self.alignment = alignment
        self.space_count = 0
        self.ascender = 0.0
        self.descender = 0.0
        self.first_visible_char_index = -1
        self.last_visible_char_index = -1
        self.visible_character_count = 0
        self.max_advance = 0.0

    def __repr__(self):
        return (
            f"<LineInfo chars {self.first_char_index}-{self.last_char_index} "
            f"y={self.y:0.5g} width={self.width:0.5g}>"
        )


class WordInfo:
    """A word: a run of characters that moves to a new line as a whole."""

    __slots__ = [
        "character_count",
        "first_char_index",
        "last_char_index",
        "line_index",
        "width",
    ]

    def __init__(
        self, first_char_index, last_char_index, character_count, width, line_index
    ):
        self.first_char_index = first_char_index
        self.last_char_index = last_char_index
        self.character_count = character_count
        self.width = width
        self.line_index = line_index

    def __repr__(self):
        return f"<WordInfo chars {self.first_char_index}-{self.last_char_index} line {self.line_index}>"


class Rect:
    __slots__ = ["height", "width", "x", "y"]

    def __init__(self, x=0.0, y=0.0, width=0.0, height=0.0):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def __repr__(self):
        return f"<Rect({self.x:0.5g}, {self.y:0.5g}, {self.width:0.5g}, {self.height:0.5g})>"

    def contains(self, x, y):
        """Get whether the point lies inside the rect (edges included)."""
        return (
            self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height
        )

    def shift(self, dx, dy):
        self.x += dx
        self.y += dy


class LinkInfo:
    """A link region, with one rect per line that it spans."""

    __slots__ = ["first_char_index", "last_char_index", "link_id", "rects"]

    def __init__(self, link_id, first_char_index, last_char_index, rects=None):
        self.link_id = link_id
        self.first_char_index = first_char_index
        self.last_char_index = last_char_index
        self.rects = list(rects or [])

    def __repr__(self):
        return f"<LinkInfo {self.link_id!r} with {len(self.rects)} rects>"

    def contains(self, x, y):
        return any(rect.contains(x, y) for rect in self.rects)


class DecorationSpan:
    """A rectangle for an underline, strikethrough or highlight."""

    __slots__ = ["color", "height", "line_index", "type", "width", "x", "y"]

    def __init__(self, type, color, x, y, width, height, line_index):
        self.type = type
        self.color = color
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.line_index = line_index

    def __repr__(self):
        return (
            f"<DecorationSpan {self.type} ({self.x:0.5g}, {self.y:0.5g}, "
            f"{self.width:0.5g}, {self.height:0.5g})>"
        )


class TextInfo:
    """The result of a layout.

    The character records are borrowed from a `CharacterInfoPool`. Call
    ``release()`` when the layout is no longer needed.
    """

    __slots__ = [
        "character_info",
        "height",
        "line_info",
        "link_info",
        "width",
        "word_info",
    ]

    def __init__(
        self,
        character_info=None,
        line_info=None,
        word_info=None,
        link_info=None,
        width=0.0,
        height=0.0,
    ):
        self.character_info = character_info if character_info is not None else []
        self.line_info = line_info if line_info is not None else []
        self.word_info = word_info if word_info is not None else []
        self.link_info = link_info if link_info is not None else []
        self.width = width
        self.height = height

    def __repr__(self):
        return (
            f"<TextInfo {self.character_count} chars, {self.line_count} lines, "
            f"{self.width:0.5g}x{self.height:0.5g}>"
        )

    @property
    def character_count(self):
        return len(self.character_info)

    @property
    def line_count(self):
        return len(self.line_info)

    @property
    def word_count(self):
        return len(self.word_info)

    @property
    def link_count(self):
        return len(self.link_info)

    def release(self, pool=None):
        """Return the character records to the pool, and clear this result."""
        from ._pool import default_pool

        pool = default_pool if pool is None else pool
        pool.release(self.character_info)
        self.character_info = []
        self.line_info = []
        self.word_info = []
        self.link_info = []
