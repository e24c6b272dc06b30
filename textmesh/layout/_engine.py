"""
The layout engine: turns styled character records into positioned glyphs.

The layout is a single forward pass over the parsed records. Visible
characters are collected in a word buffer, with positions relative to the
start of the word. When the word ends (at a breakable space, a line break,
a tab, a zero-width space or the end of the text) it is placed on the
current line, or on a new line if it does not fit. The passes for
alignment, overflow and vertical alignment run on the finished lines.
"""

import math

from .. import utils
from ..utils.enums import TextAlignment, OverflowMode, ElementType
from ..parser.tags import SOFT_HYPHEN, ZWSP, ZWJ, NBSP
from ._records import LineInfo, WordInfo, TextInfo
from ._pool import default_pool
from ._alignment import apply_alignment, apply_overflow, apply_vertical_alignment
from ._links import build_link_info


# Justified text may overflow the wrap width by 5% before a word wraps
JUSTIFIED_TOLERANCE = 1.05


class LayoutEngine:
    """Lays out parsed records using font metrics and a `TextStyle`.

    Parameters
    ----------
    fonts : FontRegistry | None
        The registry used to resolve fallback fonts.
    sprites : SpriteRegistry | None
        The registry used to resolve ``<sprite>`` records.
    pool : CharacterInfoPool | None
        The pool that character records are taken from. Default the
        module-level pool.

    """

    def __init__(self, fonts=None, sprites=None, pool=None):
        self.fonts = fonts
        self.sprites = sprites
        self.pool = default_pool if pool is None else pool

    def _find_sprite(self, pc):
        if self.sprites is None:
            return None
        if pc.sprite_index >= 0:
            if pc.sprite_asset:
                return self.sprites.get_sprite_by_index(pc.sprite_asset, pc.sprite_index)
            return self.sprites.find_sprite_by_index(pc.sprite_index)
        if pc.sprite_asset:
            return self.sprites.get_sprite(pc.sprite_asset, pc.sprite_name)
        return self.sprites.find_sprite(pc.sprite_name)

    def _new_record(self, index, pc, glyph, scale, x, y, width, height):
        ci = self.pool.acquire()
        ci.reset()
        ci.index = index
        ci.char = pc.char
        ci.glyph = glyph
        ci.x = x
        ci.y = y
        ci.width = width
        ci.height = height
        ci.scale = scale
        ci.color = pc.color
        ci.alpha = pc.alpha
        ci.bold = pc.bold
        ci.italic = pc.italic
        ci.underline = pc.underline
        ci.strikethrough = pc.strikethrough
        ci.underline_color = pc.underline_color
        ci.strikethrough_color = pc.strikethrough_color
        ci.mark_color = pc.mark_color
        ci.char_scale = pc.char_scale
        ci.rotation = pc.rotation
        ci.element_type = ElementType.sprite if pc.is_sprite else ElementType.character
        ci.material = pc.material
        return ci

    def layout(self, chars, font, style):
        """Lay out a list of `ParsedChar` records. Returns a `TextInfo`."""

        if not chars:
            return TextInfo()

        base_size = font.size
        size_ratio = style.font_size / base_size
        margin_left = style.margin_left
        margin_right = style.margin_right
        word_spacing = style.word_spacing

        base_line_height = (
            style.line_height if style.line_height > 0 else font.line_height * size_ratio
        ) + style.line_spacing_adjustment
        current_line_height = base_line_height

        records = []
        lines = []
        words = []

        cursor_x = margin_left
        cursor_y = font.base_line_offset + style.margin_top
        line_index = 0
        word_index = 0
        max_width = 0.0
        current_line = None

        # Per-line state
        line_max_ascender = -math.inf
        line_min_descender = math.inf
        line_space_count = 0
        line_visible_count = 0
        is_first_word = True

        # The word buffer; its records have x, origin and x_advance relative
        # to the start of the word, and y relative to the line top.
        word_buffer = []
        word_width = 0.0
        soft_hyphen_index = -1
        previous_char = None

        def get_align(pc):
            return pc.align or style.align

        def get_wrap_width(pc):
            width = pc.width_constraint if pc.width_constraint > 0 else style.word_wrap_width
            return width - pc.margin_left - pc.margin_right - margin_left - margin_right

        def get_tolerance(pc):
            if get_align(pc) in (TextAlignment.justified, TextAlignment.flush):
                return JUSTIFIED_TOLERANCE
            return 1.0

        def start_line(pc, use_indent=True, use_line_indent=False):
            nonlocal cursor_x, current_line, is_first_word
            cursor_x = margin_left
            if pc is not None:
                if use_indent and pc.indent > 0:
                    cursor_x += pc.indent
                if pc.margin_left > 0:
                    cursor_x += pc.margin_left
                if use_line_indent and pc.line_indent > 0:
                    cursor_x += pc.line_indent
            align = get_align(pc) if pc is not None else style.align
            current_line = LineInfo(len(records), cursor_y, current_line_height, align)
            is_first_word = True

        def end_line(extra=0.0):
            # Finalize the current line and move the cursor down
            nonlocal cursor_y, line_index, max_width
            nonlocal line_max_ascender, line_min_descender
            nonlocal line_space_count, line_visible_count
            finalize_line(
                current_line,
                records,
                cursor_x,
                line_space_count,
                line_visible_count,
                line_max_ascender,
                line_min_descender,
            )
            lines.append(current_line)
            max_width = max(max_width, current_line.width)
            line_index += 1
            if line_max_ascender > -math.inf and line_min_descender < math.inf:
                cursor_y += line_max_ascender - line_min_descender + extra
            else:
                cursor_y += current_line_height + extra
            line_space_count = 0
            line_visible_count = 0
            line_max_ascender = -math.inf
            line_min_descender = math.inf

        def update_line_end():
            current_line.last_char_index = len(records) - 1
            current_line.character_count = (
                current_line.last_char_index - current_line.first_char_index + 1
            )

        def place(ci):
            nonlocal line_max_ascender, line_min_descender, line_visible_count
            ci.x += cursor_x
            ci.origin += cursor_x
            ci.x_advance += cursor_x
            ci.y += cursor_y
            ci.line_index = line_index
            ci.word_index = word_index
            records.append(ci)
            if ci.is_visible:
                line_max_ascender = max(line_max_ascender, ci.ascender)
                line_min_descender = min(line_min_descender, ci.descender)
                line_visible_count += 1

        def add_marker(i, pc):
            # An invisible zero-width record at the cursor
            ci = self._new_record(i, pc, None, 0.0, cursor_x, cursor_y, 0.0, 0.0)
            ci.origin = ci.x_advance = cursor_x
            ci.line_index = line_index
            ci.word_index = word_index
            records.append(ci)
            update_line_end()

        def flush_word():
            nonlocal cursor_x, word_index, word_width, soft_hyphen_index, is_first_word
            if not word_buffer:
                return
            first_pc = chars[word_buffer[0].index]
            wrap_width = get_wrap_width(first_pc) * get_tolerance(first_pc)
            if not is_first_word and style.word_wrap and cursor_x + word_width > wrap_width:
                end_line()
                start_line(first_pc)

            first_index = len(records)
            for ci in word_buffer:
                place(ci)
            update_line_end()
            cursor_x += word_width
            current_line.width = cursor_x
            is_first_word = False

            words.append(
                WordInfo(
                    first_index,
                    len(records) - 1,
                    len(word_buffer),
                    word_width,
                    line_index,
                )
            )
            word_index += 1
            word_buffer.clear()
            word_width = 0.0
            soft_hyphen_index = -1

        def split_at_soft_hyphen(pc):
            # Break the buffered word at the soft hyphen, with a visible
            # hyphen at the end of the first part. Returns False if the font
            # has no hyphen.
            nonlocal cursor_x, word_index, word_width, soft_hyphen_index
            hyphen = font.get_char("-")
            if hyphen is None:
                return False

            prev = word_buffer[soft_hyphen_index - 1]
            prev_pc = chars[prev.index]
            scale = prev_pc.font_size / base_size
            ci = self._new_record(
                prev.index,
                prev_pc,
                hyphen.glyph,
                scale,
                prev.x_advance + hyphen.x_offset * scale,
                hyphen.y_offset * scale,
                hyphen.width * scale,
                hyphen.height * scale,
            )
            ci.char = "-"
            ci.is_visible = hyphen.glyph is not None
            ci.char_scale = 1.0
            ci.rotation = 0.0
            ci.origin = prev.x_advance
            ci.x_advance = prev.x_advance + hyphen.x_advance * scale
            ci.ascender = font.ascent * scale
            ci.descender = font.descent * scale

            first_part = word_buffer[:soft_hyphen_index] + [ci]
            rest = word_buffer[soft_hyphen_index:]
            first_width = ci.x_advance

            first_index = len(records)
            for c in first_part:
                place(c)
            update_line_end()
            words.append(
                WordInfo(
                    first_index, len(records) - 1, len(first_part), first_width, line_index
                )
            )
            word_index += 1
            cursor_x += first_width
            current_line.width = cursor_x
            end_line()
            start_line(pc, use_indent=False)

            # The rest of the word starts the new line
            offset = rest[0].origin
            for c in rest:
                c.x -= offset
                c.origin -= offset
                c.x_advance -= offset
            word_buffer[:] = rest
            word_width -= offset
            soft_hyphen_index = -1
            return True

        start_line(chars[0], use_line_indent=True)

        for i, pc in enumerate(chars):
            if pc.line_height_override > 0:
                current_line_height = pc.line_height_override

            # Line break
            if pc.is_line_break:
                flush_word()
                add_marker(i, pc)
                end_line(style.paragraph_spacing * style.font_size * 0.01)
                current_line_height = base_line_height
                next_pc = chars[i + 1] if i + 1 < len(chars) else None
                start_line(next_pc, use_line_indent=True)
                previous_char = None
                continue

            # Tab: move to the next tab stop
            if pc.char == "\t":
                flush_word()
                if font.tab_width > 0:
                    tab_width = font.tab_width * size_ratio
                else:
                    tab_width = style.font_size * 4
                if tab_width > 0:
                    cursor_x = math.ceil(cursor_x / tab_width) * tab_width or tab_width
                add_marker(i, pc)
                current_line.width = cursor_x
                previous_char = None
                continue

            if pc.extra_space > 0:
                if word_buffer:
                    word_width += pc.extra_space
                else:
                    cursor_x += pc.extra_space

            if pc.has_fixed_position:
                flush_word()
                cursor_x = pc.fixed_position

            if pc.font_size <= 0:
                utils.logger.debug(f"Skipping {pc.char!r} at {pc.original_index}: size 0")
                continue

            # Inline sprite
            if pc.is_sprite:
                sprite = self._find_sprite(pc)
                if sprite is None:
                    utils.logger.debug(
                        f"Sprite not found: {pc.sprite_asset!r} {pc.sprite_name!r} {pc.sprite_index}"
                    )
                else:
                    scale = pc.font_size / base_size
                    glyph = sprite.glyph
                    width = sprite.width or (glyph.width if glyph is not None else 0.0)
                    height = sprite.height or (glyph.height if glyph is not None else 0.0)
                    advance = (sprite.x_advance or width) * scale
                    y_offset = sprite.y_offset * scale
                    ci = self._new_record(
                        i,
                        pc,
                        glyph,
                        scale,
                        word_width + sprite.x_offset * scale,
                        y_offset,
                        width * scale,
                        height * scale,
                    )
                    ci.is_visible = True
                    ci.origin = word_width
                    ci.x_advance = word_width + advance
                    ci.ascender = -y_offset
                    ci.descender = -y_offset - height * scale
                    if pc.sprite_tint >= 0:
                        ci.color = pc.sprite_tint
                    word_buffer.append(ci)
                    word_width += advance
                previous_char = None
                continue

            # Soft hyphen: a break opportunity that is not rendered
            if pc.char == SOFT_HYPHEN:
                soft_hyphen_index = len(word_buffer)
                previous_char = pc.char
                continue

            # Zero-width space: a break opportunity without advance
            if pc.char == ZWSP:
                flush_word()
                add_marker(i, pc)
                previous_char = None
                continue

            # Zero-width joiner: no advance and no break opportunity
            if pc.char == ZWJ:
                ci = self._new_record(i, pc, None, 0.0, word_width, 0.0, 0.0, 0.0)
                ci.origin = ci.x_advance = word_width
                word_buffer.append(ci)
                continue

            char_scale = pc.font_size / base_size
            total_scale = char_scale * pc.char_scale

            voffset = pc.voffset
            if pc.is_superscript and font.superscript_offset:
                voffset = font.superscript_offset * char_scale
            elif pc.is_subscript and font.subscript_offset:
                voffset = font.subscript_offset * char_scale

            found = font.get_char_with_fallback(pc.char, self.fonts)
            if found is not None:
                metrics = found[0]
            else:
                metrics = font.get_char(" ")
                utils.logger.debug(f"No glyph for {pc.char!r} in {font.family!r}")
            if metrics is None:
                previous_char = pc.char
                continue

            kerning = metrics.get_kerning(previous_char) if previous_char else 0.0
            em_spacing = style.character_spacing * pc.font_size * 0.01
            letter_spacing = (style.letter_spacing + pc.cspace + em_spacing) * (
                base_size / pc.font_size
            )
            bold_extra = font.bold_spacing / base_size * total_scale if pc.bold else 0.0
            if pc.mspace > 0:
                advance = pc.mspace * pc.char_scale
            else:
                advance = (
                    metrics.x_advance + kerning + letter_spacing
                ) * total_scale + bold_extra

            is_space = pc.char.isspace()
            no_break = pc.is_no_break or pc.char == NBSP

            if is_space and not no_break:
                flush_word()
                ci = self._new_record(i, pc, None, char_scale, cursor_x, cursor_y, 0.0, 0.0)
                ci.origin = cursor_x
                ci.x_advance = cursor_x + advance + word_spacing
                ci.ascender = font.ascent * char_scale
                ci.descender = font.descent * char_scale
                ci.line_index = line_index
                ci.word_index = word_index
                records.append(ci)
                cursor_x += advance + word_spacing
                current_line.width = cursor_x
                update_line_end()
                line_space_count += 1

            elif is_space:
                # A space inside <nobr> is part of the word
                ci = self._new_record(i, pc, None, char_scale, word_width, 0.0, 0.0, 0.0)
                ci.origin = word_width
                ci.x_advance = word_width + advance
                ci.ascender = font.ascent * char_scale
                ci.descender = font.descent * char_scale
                word_buffer.append(ci)
                word_width += advance

            else:
                wrap_width = get_wrap_width(pc) * get_tolerance(pc)
                if (
                    style.break_words
                    and style.word_wrap
                    and word_buffer
                    and cursor_x + word_width + advance > wrap_width
                ):
                    if 0 < soft_hyphen_index < len(word_buffer) and split_at_soft_hyphen(pc):
                        pass
                    else:
                        if not is_first_word:
                            # Try the whole word on a new line first
                            end_line()
                            start_line(chars[word_buffer[0].index])
                        if cursor_x + word_width + advance > wrap_width:
                            flush_word()
                            end_line()
                            start_line(pc, use_indent=False)

                glyph = metrics.glyph
                bold_expand = font.bold_style * total_scale if pc.bold else 0.0
                if glyph is not None:
                    width = metrics.width * total_scale + bold_expand
                    height = metrics.height * total_scale + bold_expand
                else:
                    width = height = 0.0
                x_offset = metrics.x_offset * total_scale - bold_expand * 0.5
                y_offset = (metrics.y_offset + voffset) * total_scale - bold_expand * 0.5

                ci = self._new_record(
                    i,
                    pc,
                    glyph,
                    char_scale,
                    word_width + x_offset + kerning * char_scale,
                    y_offset,
                    width,
                    height,
                )
                ci.is_visible = glyph is not None
                ci.origin = word_width
                ci.x_advance = word_width + advance
                ci.ascender = max(font.ascent * total_scale, metrics.y_offset * total_scale)
                ci.descender = min(
                    font.descent * total_scale,
                    (metrics.y_offset - metrics.height) * total_scale,
                )
                word_buffer.append(ci)
                word_width += advance

            previous_char = pc.char

        flush_word()
        finalize_line(
            current_line,
            records,
            cursor_x,
            line_space_count,
            line_visible_count,
            line_max_ascender,
            line_min_descender,
        )
        lines.append(current_line)
        max_width = max(max_width, current_line.width)

        total_height = cursor_y + current_line_height - font.base_line_offset

        # Align against the wrap width, or the widest line when not wrapping
        alignment_width = style.word_wrap_width if style.word_wrap else max_width
        apply_alignment(
            lines, records, alignment_width, style.align, style.word_wrapping_ratios
        )

        container_height = style.container_height - style.margin_bottom
        if (
            style.overflow_mode != OverflowMode.overflow
            and container_height > 0
            and total_height > container_height
        ):
            apply_overflow(
                lines,
                records,
                words,
                container_height,
                style.overflow_mode,
                font,
                size_ratio,
                self.pool,
            )
            max_width = max(line.width for line in lines)
            total_height = lines[-1].y + lines[-1].height - font.base_line_offset

        apply_vertical_alignment(
            lines,
            records,
            style.vertical_align,
            style.container_height,
            total_height,
            font,
            size_ratio,
        )

        links = build_link_info(chars, records, lines)
        return TextInfo(records, lines, words, links, max_width, total_height)


def finalize_line(line, records, width, space_count, visible_count, ascender, descender):
    """Set the final metrics of a line. Trailing spaces don't count for its width."""
    trimmed_width = width
    for i in range(len(records) - 1, line.first_char_index - 1, -1):
        if records[i].char == " ":
            trimmed_width = records[i].x
        else:
            break
    line.width = trimmed_width if trimmed_width > 0 else width
    line.space_count = space_count
    line.ascender = ascender if ascender > -math.inf else 0.0
    line.descender = descender if descender < math.inf else 0.0
    line.visible_character_count = visible_count

    if len(records) > line.first_char_index:
        line.last_char_index = len(records) - 1
        line.character_count = line.last_char_index - line.first_char_index + 1
        line.max_advance = records[line.last_char_index].x_advance
        line.first_visible_char_index = -1
        line.last_visible_char_index = -1
        for i in range(line.first_char_index, line.last_char_index + 1):
            if records[i].is_visible:
                if line.first_visible_char_index < 0:
                    line.first_visible_char_index = i
                line.last_visible_char_index = i
    else:
        # No records on this line
        line.last_char_index = line.first_char_index - 1
        line.character_count = 0


def layout(chars, font, style=None, *, fonts=None, sprites=None, pool=None):
    """Lay out parsed records with a (temporary) `LayoutEngine`.

    When no style is given, a default `TextStyle` is used.
    """
    if style is None:
        from .._style import TextStyle

        style = TextStyle()
    return LayoutEngine(fonts, sprites, pool).layout(chars, font, style)
