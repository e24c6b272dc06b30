"""Bold, italic, underline, strikethrough and mark (highlight) tags.

The four toggles are reference counted: ``<b><b></b>`` keeps bold on until
every open has been closed, and an extra ``</b>`` cannot drive the count
below zero. The per-toggle extras (italic angle, decoration colors) are kept
on their own stacks so that closing a tag restores the enclosing value.
"""

import re

from ...utils.color import parse_color
from ...utils.units import parse_float
from ._base import get_attribute


_padding_pattern = re.compile(r"padding\s*=\s*\"?([^\"'>]+)\"?", re.IGNORECASE)

DEFAULT_MARK_COLOR = 0xFFFF00


def parse_color_attribute(value):
    """Get the packed ``color=`` attribute of a tag value, or -1."""
    color = get_attribute(value, "color")
    if color is None:
        return -1
    try:
        return parse_color(color)
    except ValueError:
        return -1


def parse_padding_attribute(value):
    """Get the ``padding=`` attribute as (left, right, top, bottom), or an empty tuple."""
    match = _padding_pattern.search(value)
    if not match:
        return ()
    parts = [parse_float(s.strip(), 0.0) for s in match.group(1).split(",")]
    if len(parts) == 1:
        return tuple(parts * 4)
    elif len(parts) == 4:
        return tuple(parts)
    return ()


def parse_mark_color(value):
    """Get the packed mark color ``(alpha << 24) | rgb`` for a mark value.

    Returns None if the color cannot be parsed.
    """
    word = value.split()[0] if value.strip() else ""
    if not word or "=" in word:
        return (0xFF << 24) | DEFAULT_MARK_COLOR
    digits = word.lstrip("#")
    if digits[:2].lower() == "0x":
        digits = digits[2:]
    try:
        if len(digits) == 8:
            return (int(digits[6:8], 16) << 24) | int(digits[:6], 16)
        return (0xFF << 24) | parse_color(word)
    except ValueError:
        return None


def register_formatting_tags(registry, stacks):
    def open_bold(state, value, base_font_size):
        state.bold = stacks.increment("bold")

    def close_bold(state):
        state.bold = stacks.decrement("bold")

    def open_italic(state, value, base_font_size):
        state.italic = stacks.increment("italic")
        angle = parse_float(get_attribute(value, "angle") or "", 0.0)
        state.italic_angle = stacks.italic_angle.push(angle or state.italic_angle)

    def close_italic(state):
        state.italic = stacks.decrement("italic")
        state.italic_angle = stacks.italic_angle.pop()

    def open_underline(state, value, base_font_size):
        state.underline = stacks.increment("underline")
        color = parse_color_attribute(value)
        state.underline_color = stacks.underline_color.push(
            color if color != -1 else state.underline_color
        )

    def close_underline(state):
        state.underline = stacks.decrement("underline")
        state.underline_color = stacks.underline_color.pop()

    def open_strikethrough(state, value, base_font_size):
        state.strikethrough = stacks.increment("strikethrough")
        color = parse_color_attribute(value)
        state.strikethrough_color = stacks.strikethrough_color.push(
            color if color != -1 else state.strikethrough_color
        )

    def close_strikethrough(state):
        state.strikethrough = stacks.decrement("strikethrough")
        state.strikethrough_color = stacks.strikethrough_color.pop()

    def open_mark(state, value, base_font_size):
        color = parse_mark_color(value)
        if color is None:
            color = state.mark_color
        state.mark_color = stacks.mark.push(color)
        padding = parse_padding_attribute(value)
        state.mark_padding = stacks.mark_padding.push(padding or state.mark_padding)

    def close_mark(state):
        state.mark_color = stacks.mark.pop()
        state.mark_padding = stacks.mark_padding.pop()

    registry.register("b", open_bold, close_bold)
    registry.register("i", open_italic, close_italic)
    registry.register("u", open_underline, close_underline)
    registry.register("underline", open_underline, close_underline)
    registry.register("s", open_strikethrough, close_strikethrough)
    registry.register("strikethrough", open_strikethrough, close_strikethrough)
    registry.register("mark", open_mark, close_mark)
