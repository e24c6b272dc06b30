"""
Decoration spans: the rectangles for underlines, strikethroughs and
highlights. They are derived from a layout on demand.
"""

from ..utils.enums import DecorationType
from ._records import DecorationSpan


def get_decoration_metrics(font, base_font_size):
    """Get the (underline_y, underline_height, strike_y, strike_height) for a
    font at the given size, relative to the top of a line.

    Font metrics are used when present, otherwise a heuristic based on the
    line height.
    """
    scale = base_font_size / font.size
    if font.underline_offset:
        underline_y = -font.underline_offset * scale
    else:
        underline_y = font.line_height * scale * 0.85
    if font.underline_thickness:
        underline_h = font.underline_thickness * scale
    else:
        underline_h = max(1.0, base_font_size * 0.05)
    if font.strikethrough_offset:
        strike_y = -font.strikethrough_offset * scale
    else:
        strike_y = font.line_height * scale * 0.55
    if font.strikethrough_thickness:
        strike_h = font.strikethrough_thickness * scale
    else:
        strike_h = underline_h
    return underline_y, underline_h, strike_y, strike_h


def build_decorations(text_info, font, base_font_size):
    """Build the decoration spans for a layout.

    For each kind of decoration, a span runs over consecutive characters
    that have the decoration, and ends where the decoration stops or changes,
    or at the end of a line. Spans never cross lines.

    Returns a list of `DecorationSpan` objects.
    """
    chars = text_info.character_info
    lines = text_info.line_info
    spans = []
    if not chars:
        return spans

    underline_y, underline_h, strike_y, strike_h = get_decoration_metrics(
        font, base_font_size
    )

    def line_y(line_index):
        return lines[line_index].y if line_index < len(lines) else 0.0

    def line_height(line_index):
        if line_index < len(lines):
            return lines[line_index].height
        return base_font_size

    # Per kind: the value that keeps a span going, and how to make the span
    kinds = [
        (
            DecorationType.underline,
            lambda ci: ci.underline_color if ci.underline else None,
            lambda li: (line_y(li) + underline_y, underline_h),
        ),
        (
            DecorationType.strikethrough,
            lambda ci: ci.strikethrough_color if ci.strikethrough else None,
            lambda li: (line_y(li) + strike_y, strike_h),
        ),
        (
            DecorationType.mark,
            lambda ci: ci.mark_color or None,
            lambda li: (line_y(li), line_height(li)),
        ),
    ]

    for kind, get_value, get_geometry in kinds:
        start = -1
        value = None

        def close_span(end):
            first, last = chars[start], chars[end]
            if kind == DecorationType.mark:
                color = value
            else:
                # -1 means the decoration takes the color of the text
                color = first.color if value < 0 else value
            y, height = get_geometry(first.line_index)
            spans.append(
                DecorationSpan(
                    kind,
                    color,
                    first.x,
                    y,
                    (last.x + last.width) - first.x,
                    height,
                    first.line_index,
                )
            )

        for i, ci in enumerate(chars):
            new_value = get_value(ci)
            if start >= 0:
                line_changed = ci.line_index != chars[start].line_index
                if line_changed or new_value != value:
                    close_span(i - 1)
                    start = -1
            if start < 0 and new_value is not None:
                start = i
                value = new_value
        if start >= 0:
            close_span(len(chars) - 1)

    return spans
