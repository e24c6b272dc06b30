import re
import math
from collections import namedtuple

from .. import utils
from ..utils.color import parse_color
from ..utils.units import parse_unit
from ._registry import TagRegistry, hash_tag_name
from ._stack import AttributeStacks
from ._state import StyleState, ParsedChar
from ._gradient import apply_gradients
from .tags import register_builtin_tags, parse_sprite_tag, STRUCTURAL_TAGS
from .tags import NBSP, OBJECT_REPLACEMENT


MAX_TAG_LENGTH = 128
SMALL_CAPS_SCALE = 0.8

_hex_color_pattern = re.compile(r"[0-9a-fA-F]{3,8}")

TagParseResult = namedtuple(
    "TagParseResult", ["name", "name_hash", "value", "is_closing", "length"]
)
TagParseResult.__doc__ = """A recognized ``<...>`` tag.

The name is lowercased, ``length`` is the number of source characters the tag
spans (including the brackets).
"""


def try_parse_tag(text, pos):
    """Try to parse a tag starting at ``text[pos]``.

    Returns a `TagParseResult`, or None if there is no closing ``>``, the tag
    is longer than 128 characters, or the tag body or name is empty.
    """
    if text[pos : pos + 1] != "<":
        return None
    close = text.find(">", pos + 1)
    if close < 0:
        return None
    length = close - pos + 1
    if length > MAX_TAG_LENGTH:
        return None
    inner = text[pos + 1 : close].strip()
    if not inner:
        return None

    is_closing = inner[0] == "/"
    content = inner[1:].strip() if is_closing else inner

    eq = content.find("=")
    space = content.find(" ")
    value = ""
    if eq >= 0 and (space < 0 or eq < space):
        name = content[:eq].strip()
        value = content[eq + 1 :].strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
    elif space >= 0:
        name = content[:space].strip()
        value = content[space + 1 :].strip()
    else:
        name = content.strip()

    if not name:
        return None
    name = name.lower()
    return TagParseResult(name, hash_tag_name(name), value, is_closing, length)


class RichTextParser:
    """Parser that turns tagged markup into a flat list of styled characters.

    The parser makes a single left-to-right pass over the text. Tags update a
    mutable `StyleState` through the handlers in its `registry`; every
    character that is emitted gets a snapshot of that state. Markup that is
    not understood is kept as literal text.

    Parameters
    ----------
    style_sheet : StyleSheet | None
        The presets used to resolve ``<style=name>`` tags.

    """

    def __init__(self, style_sheet=None):
        self._stacks = AttributeStacks()
        self._registry = TagRegistry()
        register_builtin_tags(self._registry, self._stacks)
        self.style_sheet = style_sheet

        self._pending_space = 0.0
        self._pending_pos = math.nan
        self._noparse = False

    @property
    def registry(self):
        """The `TagRegistry` with the tag handlers. Register custom tags here."""
        return self._registry

    @property
    def stacks(self):
        """The `AttributeStacks` that the built-in handlers operate on."""
        return self._stacks

    def parse(
        self, text, base_font_size=32.0, base_color=0xFFFFFF, base_font_family=""
    ):
        """Parse the given markup into a list of `ParsedChar` records.

        The attribute stacks are reset to the given base values at the start
        of each call. Gradient colors are interpolated before returning.
        """
        self._stacks.reset(base_font_size, base_color, base_font_family)
        state = StyleState(base_font_size, base_color, base_font_family)
        self._pending_space = 0.0
        self._pending_pos = math.nan

        result = []
        self._noparse = False
        i = 0
        n = len(text)

        while i < n:
            char = text[i]

            if char == "<":
                if self._noparse:
                    if text[i : i + 10].lower() == "</noparse>":
                        self._noparse = False
                        i += 10
                    else:
                        self._emit_text(result, char, i, state)
                        i += 1
                    continue
                consumed = self._handle_tag(result, text, i, state, base_font_size)
                if consumed:
                    i += consumed
                else:
                    utils.logger.debug(f"Emitting '<' at {i} as literal text")
                    self._emit_text(result, char, i, state)
                    i += 1
                continue

            if char == "\n":
                result.append(ParsedChar("\n", i, state))
            elif char != "\r":
                self._emit_text(result, char, i, state)
            i += 1

        return apply_gradients(result)

    # %% Emitting

    def _apply_pending(self, pc):
        if self._pending_space:
            pc.extra_space = self._pending_space
            self._pending_space = 0.0
        if not math.isnan(self._pending_pos):
            pc.fixed_position = self._pending_pos
            self._pending_pos = math.nan

    def _emit(self, result, char, index, state):
        pc = ParsedChar(char, index, state)
        if not pc.is_line_break:
            self._apply_pending(pc)
        result.append(pc)
        return pc

    def _emit_text(self, result, char, index, state):
        pc = self._emit(result, char, index, state)
        if state.is_all_caps:
            new_char = char.upper()
        elif state.is_lowercase:
            new_char = char.lower()
        elif state.is_small_caps:
            new_char = char.upper()
            if new_char != char and len(new_char) == 1:
                pc.font_size *= SMALL_CAPS_SCALE
        else:
            return pc
        if len(new_char) == 1:
            pc.set_char(new_char)
        return pc

    # %% Tags

    def _handle_tag(self, result, text, i, state, base_font_size):
        """Handle a tag at ``text[i]``.

        Returns the number of characters consumed, 0 when the ``<`` is not
        the start of a recognized tag.
        """
        consumed = self._handle_color_shorthand(text, i, state)
        if consumed:
            return consumed

        tag = try_parse_tag(text, i)
        if tag is None:
            return 0
        name = tag.name

        if not tag.is_closing:
            if name in STRUCTURAL_TAGS:
                pc = self._emit(result, STRUCTURAL_TAGS[name], i, state)
                if name == "nbsp":
                    pc.is_no_break = True
                return tag.length
            elif name == "noparse":
                self._noparse = True
                return tag.length
            elif name == "space":
                self._pending_space += parse_unit(tag.value, base_font_size)
                return tag.length
            elif name == "pos":
                self._pending_pos = parse_unit(tag.value, base_font_size)
                return tag.length
            elif name == "sprite":
                self._emit_sprite(result, tag.value, i, state)
                return tag.length

        if name == "style" and self.style_sheet is not None:
            if tag.is_closing:
                self._close_style(state, base_font_size, set())
            else:
                self._open_style(tag.value, state, base_font_size, set())
            return tag.length

        entry = self._registry.get_by_hash(tag.name_hash, tag.name)
        if entry is None:
            return 0
        if tag.is_closing:
            entry.on_close(state)
        else:
            entry.on_open(state, tag.value, base_font_size)
        return tag.length

    def _handle_color_shorthand(self, text, i, state):
        # <#rgb> ... <#rrggbbaa> push a color, </#> pops it
        if text[i + 1 : i + 2] == "#":
            close = text.find(">", i + 2)
            if close >= 0:
                digits = text[i + 2 : close].strip()
                if _hex_color_pattern.fullmatch(digits):
                    try:
                        color = parse_color("#" + digits)
                    except ValueError:
                        return 0
                    state.color = self._stacks.color.push(color)
                    return close - i + 1
        elif text[i + 1 : i + 4] == "/#>":
            state.color = self._stacks.color.pop()
            return 4
        return 0

    def _emit_sprite(self, result, value, i, state):
        sprite = parse_sprite_tag(value)
        pc = self._emit(result, OBJECT_REPLACEMENT, i, state)
        pc.is_sprite = True
        pc.sprite_asset = sprite.atlas_name
        pc.sprite_name = sprite.sprite_name
        pc.sprite_index = sprite.index
        pc.sprite_tint = sprite.tint
        return pc

    # %% Style presets

    def _open_style(self, name, state, base_font_size, visited):
        key = name.strip().lower()
        preset = self.style_sheet.get(name)
        if preset is None or key in visited:
            utils.logger.debug(f"Skipping style preset {name!r}")
            return
        self._stacks.style_name.push(name)
        self._apply_markup(preset.open, state, base_font_size, visited | {key})

    def _close_style(self, state, base_font_size, visited):
        name = self._stacks.style_name.current
        self._stacks.style_name.pop()
        if not name:
            return
        key = name.strip().lower()
        preset = self.style_sheet.get(name)
        if preset is None or key in visited:
            return
        self._apply_markup(preset.close, state, base_font_size, visited | {key})

    def _apply_markup(self, markup, state, base_font_size, visited):
        """Apply the tags in a preset's markup to the live state.

        Text outside of tags is ignored.
        """
        j = 0
        while j < len(markup):
            if markup[j] != "<":
                j += 1
                continue
            consumed = self._handle_color_shorthand(markup, j, state)
            if consumed:
                j += consumed
                continue
            tag = try_parse_tag(markup, j)
            if tag is None:
                j += 1
                continue
            if tag.name == "style":
                if tag.is_closing:
                    self._close_style(state, base_font_size, visited)
                else:
                    self._open_style(tag.value, state, base_font_size, visited)
            else:
                entry = self._registry.get_by_hash(tag.name_hash, tag.name)
                if entry is not None:
                    if tag.is_closing:
                        entry.on_close(state)
                    else:
                        entry.on_open(state, tag.value, base_font_size)
            j += tag.length
