import math


class StyleState:
    """The currently resolved style while parsing markup.

    A single instance is mutated in place by the tag handlers during a parse,
    and copied field by field into every emitted `ParsedChar`.
    """

    __slots__ = [
        "color",
        "alpha",
        "font_size",
        "font_family",
        "font_weight",
        "bold",
        "italic",
        "underline",
        "strikethrough",
        "italic_angle",
        "underline_color",
        "strikethrough_color",
        "mark_color",
        "mark_padding",
        "cspace",
        "mspace",
        "voffset",
        "align",
        "indent",
        "margin_left",
        "margin_right",
        "line_height_override",
        "line_indent",
        "is_all_caps",
        "is_lowercase",
        "is_small_caps",
        "is_superscript",
        "is_subscript",
        "is_no_break",
        "is_link",
        "link_id",
        "char_scale",
        "rotation",
        "gradient_colors",
        "width_constraint",
        "material",
    ]

    def __init__(self, font_size=32.0, color=0xFFFFFF, font_family=""):
        self.color = color
        self.alpha = 1.0
        self.font_size = font_size
        self.font_family = font_family
        self.font_weight = ""
        self.bold = False
        self.italic = False
        self.underline = False
        self.strikethrough = False
        self.italic_angle = 0.0
        self.underline_color = -1
        self.strikethrough_color = -1
        self.mark_color = 0
        self.mark_padding = ()
        self.cspace = 0.0
        self.mspace = 0.0
        self.voffset = 0.0
        self.align = ""
        self.indent = 0.0
        self.margin_left = 0.0
        self.margin_right = 0.0
        self.line_height_override = 0.0
        self.line_indent = 0.0
        self.is_all_caps = False
        self.is_lowercase = False
        self.is_small_caps = False
        self.is_superscript = False
        self.is_subscript = False
        self.is_no_break = False
        self.is_link = False
        self.link_id = ""
        self.char_scale = 1.0
        self.rotation = 0.0
        self.gradient_colors = ()
        self.width_constraint = 0.0
        self.material = ""

    def __repr__(self):
        return f"<StyleState size={self.font_size} color={self.color:#08x}>"

    def snapshot(self):
        """Get a dict with the values of all fields."""
        return {name: getattr(self, name) for name in StyleState.__slots__}


class ParsedChar(StyleState):
    """A styled character record, as produced by the markup parser.

    Holds a snapshot of the `StyleState` at the moment the character was
    emitted, plus per-character fields. Synthetic records (line breaks,
    no-break spaces, sprites, ...) carry the source index of the tag that
    produced them.
    """

    __slots__ = [
        "char",
        "char_code",
        "original_index",
        "is_sprite",
        "sprite_asset",
        "sprite_name",
        "sprite_index",
        "sprite_tint",
        "is_line_break",
        "extra_space",
        "fixed_position",
    ]

    def __init__(self, char, original_index=0, state=None):
        if state is None:
            StyleState.__init__(self)
        else:
            for name in StyleState.__slots__:
                setattr(self, name, getattr(state, name))
        self.char = char
        self.char_code = ord(char)
        self.original_index = original_index
        self.is_sprite = False
        self.sprite_asset = ""
        self.sprite_name = ""
        self.sprite_index = -1
        self.sprite_tint = -1
        self.is_line_break = char == "\n"
        self.extra_space = 0.0
        self.fixed_position = math.nan

    @classmethod
    def from_state(cls, char, original_index, state):
        """Create a record for ``char`` with a copy of the given style state."""
        return cls(char, original_index, state)

    def __repr__(self):
        return f"<ParsedChar {self.char!r} @{self.original_index}>"

    def set_char(self, char):
        """Replace the character (e.g. after a case transform)."""
        self.char = char
        self.char_code = ord(char)

    @property
    def has_fixed_position(self):
        """Whether a ``<pos>`` tag set an absolute x position for this character."""
        return not math.isnan(self.fixed_position)
