"""
The configuration of a piece of text.
"""

from .utils import Color, EventTarget, EventType
from .utils.enums import TextAlignment, VerticalAlignment, OverflowMode
from .styles import Material


FONT_STYLE_FLAGS = ("bold", "italic", "underline", "strikethrough")


class TextStyle(EventTarget):
    """The base style and layout settings for a piece of text.

    All arguments are keyword arguments that set the property of the same
    name. Setting a property to a new value emits an "update" event, with
    the name of the property as ``event.property``.

    .. code-block:: py

        style = TextStyle(font_size=24, word_wrap=True, word_wrap_width=300)

        @style.add_event_handler("update")
        def on_update(event):
            print(event.property, "changed")

    """

    def __init__(
        self,
        *,
        font_size=32,
        fill=0xFFFFFF,
        font_family="",
        font_style="",
        align="left",
        vertical_align="top",
        container_height=0,
        word_wrap=False,
        word_wrap_width=400,
        break_words=False,
        line_height=0,
        line_spacing_adjustment=0,
        letter_spacing=0,
        word_spacing=0,
        paragraph_spacing=0,
        character_spacing=0,
        overflow_mode="overflow",
        word_wrapping_ratios=0.4,
        margin_left=0,
        margin_top=0,
        margin_right=0,
        margin_bottom=0,
        padding=0,
        sharpness=0,
        override_color_tags=False,
        material=None,
    ):
        super().__init__()
        self._dispatching = False
        kwargs = locals()
        for name in self._property_names():
            setattr(self, name, kwargs[name])
        self._dispatching = True

    def __repr__(self):
        return f"<TextStyle size={self.font_size:g} align={self.align}>"

    @classmethod
    def _property_names(cls):
        return [
            name
            for name in cls.__init__.__code__.co_varnames[
                1 : cls.__init__.__code__.co_argcount
                + cls.__init__.__code__.co_kwonlyargcount
            ]
        ]

    def _set(self, name, value):
        attr = "_" + name
        old = getattr(self, attr, None)
        setattr(self, attr, value)
        if self._dispatching and old != value:
            self.dispatch_event(EventType.UPDATE, property=name)

    def copy(self, **overrides):
        """Create a copy of this style, with the given properties changed.

        Event handlers are not copied.
        """
        kwargs = {name: getattr(self, name) for name in self._property_names()}
        kwargs.update(overrides)
        return TextStyle(**kwargs)

    def to_dict(self):
        """Get the values of all properties."""
        return {name: getattr(self, name) for name in self._property_names()}

    # --- font properties

    @property
    def font_size(self):
        """The base font size, in pixels. Default 32."""
        return self._font_size

    @font_size.setter
    def font_size(self, value):
        value = float(value)
        if value <= 0:
            raise ValueError(f"Font size must be larger than zero. Got {value}.")
        self._set("font_size", value)

    @property
    def fill(self):
        """The base text color, as a packed ``0xRRGGBB`` int.

        Can be set with an int, or anything that `Color` accepts.
        """
        return self._fill

    @fill.setter
    def fill(self, value):
        if isinstance(value, bool):
            raise TypeError("Text fill must be an int or a color.")
        if isinstance(value, int):
            if not 0 <= value <= 0xFFFFFF:
                raise ValueError(f"Text fill must be in range 0..0xFFFFFF. Got {value:#x}.")
        else:
            value = Color(value).to_int()
        self._set("fill", value)

    @property
    def font_family(self):
        """The name of the font family. Empty to use the family of the font. Default ""."""
        return self._font_family

    @font_family.setter
    def font_family(self, value):
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise TypeError("Font family must be a None or str.")
        self._set("font_family", value)

    @property
    def font_style(self):
        """Style flags applied to the whole text, e.g. "bold italic".

        Any combination of bold, italic, underline and strikethrough.
        """
        return self._font_style

    @font_style.setter
    def font_style(self, value):
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise TypeError("Font style must be a None or str.")
        flags = value.lower().replace(",", " ").split()
        for flag in flags:
            if flag not in FONT_STYLE_FLAGS and flag != "normal":
                raise ValueError(
                    f"Font style flags must be in {FONT_STYLE_FLAGS}. Got {flag!r}."
                )
        self._set("font_style", " ".join(f for f in flags if f != "normal"))

    @property
    def font_style_flags(self):
        """The font style as a tuple of flags."""
        return tuple(self._font_style.split())

    # --- alignment

    @property
    def align(self):
        """The horizontal alignment of the lines. Default "left".

        See :obj:`textmesh.utils.enums.TextAlignment`.
        """
        return self._align

    @align.setter
    def align(self, align):
        if align is None:
            align = "left"
        if not isinstance(align, str):
            raise TypeError("Text align must be a None or str.")
        align = align.lower()
        if align not in TextAlignment.values():
            raise ValueError(
                f"Text align must be one of {TextAlignment.values()}. Got {align!r}."
            )
        self._set("align", TextAlignment(align))

    @property
    def vertical_align(self):
        """The vertical alignment within the container height. Default "top".

        See :obj:`textmesh.utils.enums.VerticalAlignment`. Only has effect when
        ``container_height`` is set.
        """
        return self._vertical_align

    @vertical_align.setter
    def vertical_align(self, align):
        if align is None:
            align = "top"
        if not isinstance(align, str):
            raise TypeError("Vertical align must be a None or str.")
        align = align.lower()
        if align not in VerticalAlignment.values():
            raise ValueError(
                f"Vertical align must be one of {VerticalAlignment.values()}. Got {align!r}."
            )
        self._set("vertical_align", VerticalAlignment(align))

    @property
    def container_height(self):
        """The height of the container, used for vertical alignment and overflow.
        Zero means unbounded. Default 0.
        """
        return self._container_height

    @container_height.setter
    def container_height(self, value):
        self._set("container_height", _non_negative("Container height", value))

    @property
    def overflow_mode(self):
        """What happens with lines that exceed the container height. Default "overflow".

        See :obj:`textmesh.utils.enums.OverflowMode`.
        """
        return self._overflow_mode

    @overflow_mode.setter
    def overflow_mode(self, mode):
        if mode is None:
            mode = "overflow"
        if not isinstance(mode, str):
            raise TypeError("Overflow mode must be a None or str.")
        mode = mode.lower()
        if mode not in OverflowMode.values():
            raise ValueError(
                f"Overflow mode must be one of {OverflowMode.values()}. Got {mode!r}."
            )
        self._set("overflow_mode", OverflowMode(mode))

    # --- wrapping

    @property
    def word_wrap(self):
        """Whether words wrap to a new line at ``word_wrap_width``. Default False."""
        return self._word_wrap

    @word_wrap.setter
    def word_wrap(self, value):
        self._set("word_wrap", bool(value))

    @property
    def word_wrap_width(self):
        """The width at which words wrap. Also the width that lines are
        aligned in when wrapping is on. Default 400.
        """
        return self._word_wrap_width

    @word_wrap_width.setter
    def word_wrap_width(self, value):
        self._set("word_wrap_width", _non_negative("Word wrap width", value))

    @property
    def break_words(self):
        """Whether words that do not fit on a line are broken. Default False."""
        return self._break_words

    @break_words.setter
    def break_words(self, value):
        self._set("break_words", bool(value))

    @property
    def word_wrapping_ratios(self):
        """How justified text distributes the slack: 0 puts it all between
        words, 1 all between characters. Default 0.4.
        """
        return self._word_wrapping_ratios

    @word_wrapping_ratios.setter
    def word_wrapping_ratios(self, value):
        value = float(value)
        if not 0 <= value <= 1:
            raise ValueError(f"Word wrapping ratios must be between 0 and 1. Got {value}.")
        self._set("word_wrapping_ratios", value)

    # --- spacing

    @property
    def line_height(self):
        """The distance between lines in pixels. Zero to use the font's line height. Default 0."""
        return self._line_height

    @line_height.setter
    def line_height(self, value):
        self._set("line_height", _non_negative("Line height", value))

    @property
    def line_spacing_adjustment(self):
        """Extra space between lines, in pixels. Default 0."""
        return self._line_spacing_adjustment

    @line_spacing_adjustment.setter
    def line_spacing_adjustment(self, value):
        self._set("line_spacing_adjustment", float(value))

    @property
    def letter_spacing(self):
        """Extra space between characters, in font units. Default 0."""
        return self._letter_spacing

    @letter_spacing.setter
    def letter_spacing(self, value):
        self._set("letter_spacing", float(value))

    @property
    def word_spacing(self):
        """Extra space after each breakable space, in pixels. Default 0."""
        return self._word_spacing

    @word_spacing.setter
    def word_spacing(self, value):
        self._set("word_spacing", float(value))

    @property
    def paragraph_spacing(self):
        """Extra space after explicit line breaks, in hundredths of an em. Default 0."""
        return self._paragraph_spacing

    @paragraph_spacing.setter
    def paragraph_spacing(self, value):
        self._set("paragraph_spacing", float(value))

    @property
    def character_spacing(self):
        """Extra space between characters, in hundredths of an em. Default 0."""
        return self._character_spacing

    @character_spacing.setter
    def character_spacing(self, value):
        self._set("character_spacing", float(value))

    # --- margins

    @property
    def margin_left(self):
        return self._margin_left

    @margin_left.setter
    def margin_left(self, value):
        self._set("margin_left", float(value))

    @property
    def margin_top(self):
        return self._margin_top

    @margin_top.setter
    def margin_top(self, value):
        self._set("margin_top", float(value))

    @property
    def margin_right(self):
        return self._margin_right

    @margin_right.setter
    def margin_right(self, value):
        self._set("margin_right", float(value))

    @property
    def margin_bottom(self):
        """The bottom margin, which reduces the height available to the
        overflow handling.
        """
        return self._margin_bottom

    @margin_bottom.setter
    def margin_bottom(self, value):
        self._set("margin_bottom", float(value))

    # --- rendering hints

    @property
    def padding(self):
        """Extra space around each glyph quad, for effects in the renderer. Default 0."""
        return self._padding

    @padding.setter
    def padding(self, value):
        self._set("padding", _non_negative("Padding", value))

    @property
    def sharpness(self):
        """The edge sharpness for the renderer, between -1 and 1. Default 0."""
        return self._sharpness

    @sharpness.setter
    def sharpness(self, value):
        value = float(value)
        if not -1 <= value <= 1:
            raise ValueError(f"Sharpness must be between -1 and 1. Got {value}.")
        self._set("sharpness", value)

    @property
    def override_color_tags(self):
        """Whether the fill color overrides the colors set in markup. Default False."""
        return self._override_color_tags

    @override_color_tags.setter
    def override_color_tags(self, value):
        self._set("override_color_tags", bool(value))

    @property
    def material(self):
        """The base `Material` for the renderer, the name of a registered material, or None."""
        return self._material

    @material.setter
    def material(self, material):
        if isinstance(material, dict):
            material = Material.from_dict(material)
        elif material is not None and not isinstance(material, (str, Material)):
            raise TypeError(
                f"Text material must be None, a name, a dict or a Material. Got {material.__class__.__name__}."
            )
        self._set("material", material)


def _non_negative(what, value):
    value = float(value or 0)
    if value < 0:
        raise ValueError(f"{what} must not be negative. Got {value}.")
    return value
