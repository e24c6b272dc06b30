from ...utils.enums import TextAlignment
from ...utils.units import parse_unit
from ._base import register_stack_tag, register_flag_tag


def _unit(value, base_font_size, state):
    return parse_unit(value, base_font_size, None)


def _align(value, base_font_size, state):
    value = value.strip().lower()
    if value not in TextAlignment.values():
        return None
    return value


def register_layout_tags(registry, stacks):
    """Alignment, offsets, indents, margins, line height, width and ``<nobr>``."""

    register_stack_tag(registry, "align", stacks.align, "align", _align)
    register_stack_tag(registry, "voffset", stacks.voffset, "voffset", _unit)
    register_stack_tag(registry, "indent", stacks.indent, "indent", _unit)
    register_stack_tag(
        registry, "line-height", stacks.line_height, "line_height_override", _unit
    )
    register_stack_tag(
        registry, "line-indent", stacks.line_indent, "line_indent", _unit
    )
    register_stack_tag(registry, "width", stacks.width, "width_constraint", _unit)
    register_flag_tag(registry, "nobr", stacks.nobr, "is_no_break")

    # The margins are one stack of (left, right) pairs, so that a one-sided
    # margin tag restores both sides when it closes.

    def set_margins(state, margins):
        state.margin_left, state.margin_right = margins

    def open_margin(state, value, base_font_size):
        margin = parse_unit(value, base_font_size, None)
        if margin is None:
            margin = state.margin_left
            right = state.margin_right
        else:
            right = margin
        set_margins(state, stacks.margin.push((margin, right)))

    def open_margin_left(state, value, base_font_size):
        margin = parse_unit(value, base_font_size, state.margin_left)
        set_margins(state, stacks.margin.push((margin, state.margin_right)))

    def open_margin_right(state, value, base_font_size):
        margin = parse_unit(value, base_font_size, state.margin_right)
        set_margins(state, stacks.margin.push((state.margin_left, margin)))

    def close_margin(state):
        set_margins(state, stacks.margin.pop())

    registry.register("margin", open_margin, close_margin)
    registry.register("padding", open_margin, close_margin)
    registry.register("margin-left", open_margin_left, close_margin)
    registry.register("margin-right", open_margin_right, close_margin)
