"""
The text object that ties the parser, the layout engine and a style together.
"""

from . import utils
from .utils import EventTarget, EventType, log_exception
from .parser import RichTextParser, StyleState, ParsedChar
from .fonts import FontAsset
from .layout import (
    LayoutEngine,
    Rect,
    build_decorations,
    glyph_arrays,
    auto_size_font_size,
)
from ._style import TextStyle


FONT_STYLE_TAGS = {
    "bold": "b",
    "italic": "i",
    "underline": "u",
    "strikethrough": "s",
}


class RichText(EventTarget):
    """A piece of rich text with a cached layout.

    The layout (a `TextInfo`) is computed lazily when ``text_info`` is
    accessed, and is invalidated when the text, font, style or any of the
    other properties change. The character records of an invalidated layout
    are returned to the pool.

    Parameters
    ----------
    text : str
        The text, which may contain markup tags.
    font : FontAsset | None
        The font that provides the metrics. Default a monospace font built in
        memory (see `FontAsset.monospace`).
    style : TextStyle | dict | None
        The style, or a dict with arguments for a new `TextStyle`.
    anchor : float | tuple
        The fraction of the text's width and height that is placed at the
        local origin, e.g. (0.5, 0.5) to center the text. Default (0, 0).
    rich_text : bool
        Whether to parse markup. When False, tags are shown as literal text.
    fonts : FontRegistry | None
        The registry with fallback fonts.
    sprites : SpriteRegistry | None
        The registry used to resolve ``<sprite>`` tags.
    style_sheet : StyleSheet | None
        The presets used to resolve ``<style>`` tags.
    pool : CharacterInfoPool | None
        The pool for character records. Default the module-level pool.

    """

    def __init__(
        self,
        text="",
        font=None,
        style=None,
        *,
        anchor=0,
        rich_text=True,
        fonts=None,
        sprites=None,
        style_sheet=None,
        pool=None,
    ):
        super().__init__()
        self._text = ""
        self._font = None
        self._style = None
        self._anchor = (0.0, 0.0)
        self._rich_text = bool(rich_text)
        self._parser = RichTextParser(style_sheet)
        self._engine = LayoutEngine(fonts, sprites, pool)

        self._text_info = None
        self._decorations = None
        self._auto_size = False
        self._auto_size_min = 1.0
        self._auto_size_max = 500.0
        self._used_font_size = 0.0
        self._max_visible_characters = -1
        self._max_visible_words = -1
        self._max_visible_lines = -1
        self._hover_link = None

        self.font = FontAsset.monospace() if font is None else font
        self.style = style
        self.anchor = anchor
        self.text = text

    def __repr__(self):
        text = self._text if len(self._text) < 20 else self._text[:17] + "..."
        return f"<RichText {text!r} at {hex(id(self))}>"

    # --- content

    @property
    def text(self):
        """The text, which may contain markup tags."""
        return self._text

    @text.setter
    def text(self, text):
        if text is None:
            text = ""
        if not isinstance(text, str):
            raise TypeError("Text must be a None or str.")
        if text != self._text:
            self._text = text
            self._invalidate()

    @property
    def font(self):
        """The `FontAsset` that provides the glyph metrics."""
        return self._font

    @font.setter
    def font(self, font):
        if not isinstance(font, FontAsset):
            raise TypeError(f"Text font must be a FontAsset. Got {font.__class__.__name__}.")
        if font is not self._font:
            self._font = font
            self._invalidate()

    @property
    def style(self):
        """The `TextStyle`. Changes to the style invalidate the layout."""
        return self._style

    @style.setter
    def style(self, style):
        if style is None:
            style = TextStyle()
        elif isinstance(style, dict):
            style = TextStyle(**style)
        elif not isinstance(style, TextStyle):
            raise TypeError(
                f"Text style must be None, a dict or a TextStyle. Got {style.__class__.__name__}."
            )
        if self._style is not None:
            self._style.remove_event_handler(self._on_style_update, EventType.UPDATE)
        self._style = style
        self._style.add_event_handler(self._on_style_update, EventType.UPDATE)
        self._invalidate()

    @property
    def rich_text(self):
        """Whether markup is parsed. When False the text is shown literally. Default True."""
        return self._rich_text

    @rich_text.setter
    def rich_text(self, value):
        value = bool(value)
        if value != self._rich_text:
            self._rich_text = value
            self._invalidate()

    @property
    def parser(self):
        """The `RichTextParser`. Register custom tags on its ``registry``."""
        return self._parser

    @property
    def style_sheet(self):
        """The `StyleSheet` used for ``<style>`` tags, or None."""
        return self._parser.style_sheet

    @style_sheet.setter
    def style_sheet(self, style_sheet):
        self._parser.style_sheet = style_sheet
        self._invalidate()

    @property
    def fonts(self):
        return self._engine.fonts

    @fonts.setter
    def fonts(self, fonts):
        self._engine.fonts = fonts
        self._invalidate()

    @property
    def sprites(self):
        return self._engine.sprites

    @sprites.setter
    def sprites(self, sprites):
        self._engine.sprites = sprites
        self._invalidate()

    @property
    def anchor(self):
        """The anchor as an (x, y) tuple of fractions of the text size.

        Can be set with a single number to use for both dimensions.
        """
        return self._anchor

    @anchor.setter
    def anchor(self, anchor):
        if isinstance(anchor, (int, float)):
            anchor = (anchor, anchor)
        try:
            ax, ay = anchor
            anchor = float(ax), float(ay)
        except (TypeError, ValueError):
            raise TypeError(f"Text anchor must be a number or a pair. Got {anchor!r}.")
        self._anchor = anchor

    # --- auto size

    @property
    def auto_size(self):
        """Whether the font size is chosen to fit the text in ``word_wrap_width``
        by ``container_height`` of the style. Default False.
        """
        return self._auto_size

    @auto_size.setter
    def auto_size(self, value):
        value = bool(value)
        if value != self._auto_size:
            self._auto_size = value
            self._invalidate()

    @property
    def auto_size_min(self):
        """The smallest font size for auto size. Default 1."""
        return self._auto_size_min

    @auto_size_min.setter
    def auto_size_min(self, value):
        self._auto_size_min = float(value)
        if self._auto_size:
            self._invalidate()

    @property
    def auto_size_max(self):
        """The largest font size for auto size. Default 500."""
        return self._auto_size_max

    @auto_size_max.setter
    def auto_size_max(self, value):
        self._auto_size_max = float(value)
        if self._auto_size:
            self._invalidate()

    @property
    def font_size(self):
        """The font size that the current layout was made with.

        This is the style's font size, unless auto size picked another one.
        """
        self._ensure_layout()
        return self._used_font_size

    # --- visibility

    @property
    def max_visible_characters(self):
        """The maximum number of characters to show, or -1 to show all."""
        return self._max_visible_characters

    @max_visible_characters.setter
    def max_visible_characters(self, value):
        self._max_visible_characters = _visible_limit("characters", value)

    @property
    def max_visible_words(self):
        """The maximum number of words to show, or -1 to show all."""
        return self._max_visible_words

    @max_visible_words.setter
    def max_visible_words(self, value):
        self._max_visible_words = _visible_limit("words", value)

    @property
    def max_visible_lines(self):
        """The maximum number of lines to show, or -1 to show all."""
        return self._max_visible_lines

    @max_visible_lines.setter
    def max_visible_lines(self, value):
        self._max_visible_lines = _visible_limit("lines", value)

    @property
    def visible_character_count(self):
        """The number of leading character records that are shown, taking
        the character, word and line limits into account.
        """
        info = self.text_info
        count = info.character_count
        if self._max_visible_characters >= 0:
            count = min(count, self._max_visible_characters)
        for limit, items in [
            (self._max_visible_words, info.word_info),
            (self._max_visible_lines, info.line_info),
        ]:
            if limit < 0 or not items:
                continue
            if limit == 0:
                count = 0
            elif limit <= len(items):
                count = min(count, items[limit - 1].last_char_index + 1)
        return count

    # --- results

    @property
    def text_info(self):
        """The `TextInfo` with the layout of the text."""
        self._ensure_layout()
        return self._text_info

    @property
    def decorations(self):
        """The list of `DecorationSpan` objects for the current layout."""
        self._ensure_layout()
        if self._decorations is None:
            self._decorations = build_decorations(
                self._text_info, self._font, self._used_font_size
            )
        return self._decorations

    @property
    def bounds(self):
        """The bounding `Rect` of the text in local coordinates, with the anchor applied."""
        info = self.text_info
        ax, ay = self._anchor
        return Rect(-ax * info.width, -ay * info.height, info.width, info.height)

    def contains_point(self, x, y):
        """Get whether a local point is inside the bounds."""
        return self.bounds.contains(x, y)

    def get_glyph_arrays(self):
        """Get the glyph arrays (see `glyph_arrays`) of the visible characters,
        with the anchor applied to the positions.
        """
        arrays = glyph_arrays(self.text_info)
        mask = arrays["indices"] < self.visible_character_count
        arrays = {key: value[mask] for key, value in arrays.items()}
        info = self._text_info
        ax, ay = self._anchor
        arrays["positions"][:, 0] -= ax * info.width
        arrays["positions"][:, 1] -= ay * info.height
        return arrays

    def get_link_at_point(self, x, y):
        """Get the `LinkInfo` at the given local point, or None."""
        info = self.text_info
        ax, ay = self._anchor
        px = x + ax * info.width
        py = y + ay * info.height
        for link in info.link_info:
            if link.contains(px, py):
                return link
        return None

    def handle_pointer(self, kind, x, y):
        """Process a pointer event at a local position.

        The ``kind`` is "down" or "move". A "down" on a link emits a
        "link_click" event. A "move" emits "link_hover" while the pointer is
        over a link, and "link_leave" when it leaves the link. Returns the
        `LinkInfo` at the position, or None.
        """
        if kind not in ("down", "move"):
            raise ValueError(f"Pointer kind must be 'down' or 'move'. Got {kind!r}.")
        link = self.get_link_at_point(x, y)
        if kind == "down":
            if link is not None:
                self._emit_link_event(EventType.LINK_CLICK, link, x, y)
            return link

        previous = self._hover_link
        if previous is not None and (link is None or link.link_id != previous.link_id):
            self._emit_link_event(EventType.LINK_LEAVE, previous, x, y)
        self._hover_link = link
        if link is not None:
            self._emit_link_event(EventType.LINK_HOVER, link, x, y)
        return link

    def force_update(self):
        """Redo the layout now."""
        self._invalidate()
        self._ensure_layout()

    def release(self):
        """Return the character records of the current layout to the pool."""
        self._invalidate()

    # --- private methods

    def _emit_link_event(self, type, link, x, y):
        with log_exception(f"Error in {type} handler"):
            self.dispatch_event(type, link_id=link.link_id, link=link, x=x, y=y)

    def _on_style_update(self, event):
        self._invalidate()

    def _invalidate(self):
        if self._text_info is not None:
            self._text_info.release(self._engine.pool)
            self._text_info = None
        self._decorations = None
        self._hover_link = None

    def _ensure_layout(self):
        if self._text_info is None:
            self._text_info = self._create_layout()

    def _get_effective_text(self):
        text = self._text
        flags = self._style.font_style_flags
        if not flags or not self._rich_text:
            return text
        tags = [FONT_STYLE_TAGS[flag] for flag in FONT_STYLE_TAGS if flag in flags]
        prefix = "".join(f"<{tag}>" for tag in tags)
        suffix = "".join(f"</{tag}>" for tag in reversed(tags))
        return prefix + text + suffix

    def _parse_literal(self, text, font_size, family):
        style = self._style
        state = StyleState(font_size, style.fill, family)
        for flag in style.font_style_flags:
            setattr(state, flag, True)
        return [
            ParsedChar(char, i, state) for i, char in enumerate(text) if char != "\r"
        ]

    def _create_layout(self):
        style = self._style
        font = self._font
        text = self._get_effective_text()
        family = style.font_family or font.family

        font_size = style.font_size
        if self._auto_size and style.word_wrap_width > 0 and style.container_height > 0:
            font_size = auto_size_font_size(
                text,
                font,
                style,
                style.word_wrap_width,
                style.container_height,
                min_size=self._auto_size_min,
                max_size=self._auto_size_max,
                parser=self._parser,
                engine=self._engine,
            )
            utils.logger.debug(f"Auto size picked font size {font_size}")
            style = style.copy(font_size=font_size)
        self._used_font_size = font_size

        if self._rich_text:
            parsed = self._parser.parse(text, font_size, style.fill, family)
        else:
            parsed = self._parse_literal(text, font_size, family)

        if style.override_color_tags:
            for pc in parsed:
                pc.color = style.fill
                pc.gradient_colors = ()

        return self._engine.layout(parsed, font, style)


def _visible_limit(what, value):
    value = int(value)
    if value < -1:
        raise ValueError(f"Max visible {what} must be -1 or larger. Got {value}.")
    return value
