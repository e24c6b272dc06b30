"""
The passes that run after the lines have been formed: horizontal alignment,
overflow handling and vertical alignment. They modify the records in place.
"""

from .. import utils
from ..utils.enums import TextAlignment, OverflowMode, VerticalAlignment, ElementType


ELLIPSIS = "\u2026"


def apply_alignment(lines, chars, container_width, default_align, ratio):
    """Align the lines horizontally within the container width.

    Center and right alignment shift a line as a whole. Justified and flush
    alignment spread the slack over the gaps between words and characters;
    ``ratio`` is the share that goes to the characters (0 puts everything
    between words). Justified text leaves the last line of a paragraph
    alone, unless it is wider than the container.
    """
    n_chars = len(chars)
    for li, line in enumerate(lines):
        align = line.alignment or default_align
        offset = 0.0

        if align == TextAlignment.center:
            offset = (container_width - line.width) / 2
        elif align == TextAlignment.right:
            offset = container_width - line.width
        elif align in (TextAlignment.justified, TextAlignment.flush):
            is_last_line = li == len(lines) - 1
            ends_with_break = (
                0 <= line.last_char_index < n_chars
                and chars[line.last_char_index].char == "\n"
            )
            if (
                (not is_last_line and not ends_with_break)
                or align == TextAlignment.flush
                or line.max_advance > container_width
            ):
                if _justify_line(line, chars, container_width, ratio):
                    continue
            # Otherwise the line stays left aligned

        if offset:
            line.alignment_offset = offset
            for i in range(line.first_char_index, min(line.last_char_index + 1, n_chars)):
                chars[i].x += offset


def _justify_line(line, chars, container_width, ratio):
    gap = container_width - line.width
    if gap <= 0:
        return False

    line_chars = chars[line.first_char_index : line.last_char_index + 1]
    visible = [ci for ci in line_chars if ci.is_visible]
    n_spaces = sum(1 for ci in line_chars if ci.char == " ")
    n_visible = max(len(visible) - 1, 0)

    # Without spaces, all slack goes between the characters
    ratio = ratio if n_spaces > 0 else 1.0
    space_extra = gap * (1 - ratio) / max(n_spaces, 1)
    char_extra = gap * ratio / max(n_visible, 1)

    cumulative = 0.0
    seen_visible = False
    for i, ci in enumerate(line_chars):
        if i > 0:
            if ci.char == " ":
                cumulative += space_extra
            elif ci.is_visible and seen_visible:
                cumulative += char_extra
        if ci.is_visible:
            seen_visible = True
        ci.x += cumulative

    line.width = container_width
    line.alignment_offset = 0.0
    return True


def apply_overflow(lines, chars, words, container_height, mode, font, scale, pool):
    """Drop the lines that do not fit in the container height.

    The first line is always kept. In ellipsis mode, characters are removed
    from the end of the last kept line until an ellipsis fits, and the
    ellipsis is appended. Removed records are returned to the pool.
    """
    if not lines:
        return

    last_fitting = 0
    for i, line in enumerate(lines):
        if line.y + line.height <= container_height:
            last_fitting = i
        else:
            break

    last_line = lines[last_fitting]
    cut_index = last_line.last_char_index + 1
    pool.release(chars[cut_index:])
    del chars[cut_index:]
    del lines[last_fitting + 1 :]
    while words and words[-1].first_char_index >= cut_index:
        words.pop()

    if mode == OverflowMode.ellipsis and cut_index > 0:
        _add_ellipsis(last_line, chars, font, scale, pool)

    last_line.last_char_index = len(chars) - 1
    last_line.character_count = last_line.last_char_index - last_line.first_char_index + 1
    for word in words:
        if word.last_char_index >= len(chars):
            word.last_char_index = len(chars) - 1
            word.character_count = max(word.last_char_index - word.first_char_index + 1, 0)


def _add_ellipsis(line, chars, font, scale, pool):
    char, metrics = ELLIPSIS, font.get_char(ELLIPSIS)
    if metrics is None:
        char, metrics = ".", font.get_char(".")
    if metrics is None:
        utils.logger.debug("Font has no ellipsis or period glyph, truncating instead")
        return

    dot_width = metrics.x_advance * scale
    removed = []
    removed_width = 0.0
    while len(chars) > line.first_char_index and removed_width < dot_width:
        ci = chars.pop()
        removed_width += ci.width or dot_width / 3
        removed.append(ci)

    if len(chars) > line.first_char_index:
        anchor = chars[-1]
        x = anchor.x + anchor.width
        origin = anchor.x_advance
    elif removed:
        # The whole line was removed; put the ellipsis where it started
        anchor = removed[-1]
        x = origin = anchor.origin
    else:
        return

    ci = pool.acquire()
    ci.reset()
    ci.index = anchor.index
    ci.char = char
    ci.glyph = metrics.glyph
    ci.is_visible = metrics.glyph is not None
    ci.x = x
    ci.y = anchor.y
    ci.width = metrics.width * scale if metrics.glyph is not None else dot_width
    ci.height = metrics.height * scale if metrics.glyph is not None else anchor.height
    ci.scale = scale
    ci.color = anchor.color
    ci.alpha = anchor.alpha
    ci.bold = anchor.bold
    ci.italic = anchor.italic
    ci.line_index = anchor.line_index
    ci.word_index = anchor.word_index
    ci.origin = origin
    ci.x_advance = origin + dot_width
    ci.ascender = anchor.ascender
    ci.descender = anchor.descender
    ci.element_type = ElementType.character
    chars.append(ci)
    pool.release(removed)


def apply_vertical_alignment(
    lines, chars, mode, container_height, total_height, font, size_ratio
):
    """Shift all records vertically to position the text in the container.

    Returns the applied offset.
    """
    if mode == VerticalAlignment.top or container_height <= 0:
        return 0.0

    offset = 0.0
    if mode == VerticalAlignment.middle:
        offset = (container_height - total_height) / 2
    elif mode == VerticalAlignment.bottom:
        offset = container_height - total_height
    elif mode == VerticalAlignment.baseline:
        if lines:
            offset = container_height / 2 - (lines[0].y + lines[0].ascender)
    elif mode == VerticalAlignment.midline:
        offset = container_height / 2 - font.mean_line * size_ratio
    elif mode == VerticalAlignment.capline:
        offset = container_height / 2 - font.cap_line * size_ratio
    elif mode == VerticalAlignment.geometry:
        visible = [ci for ci in chars if ci.is_visible]
        if visible:
            min_y = min(ci.y for ci in visible)
            max_y = max(ci.y + ci.height for ci in visible)
            offset = (container_height - (max_y - min_y)) / 2 - min_y

    if offset:
        for ci in chars:
            ci.y += offset
        for line in lines:
            line.y += offset
            line.baseline += offset
    return offset
