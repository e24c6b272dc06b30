"""
Building font assets from TrueType/OpenType files with FreeType.

Relevant links:
* https://freetype.org/freetype2/docs/glyphs/glyphs-3.html
* https://freetype-py.readthedocs.io

"""

import os

import freetype

from .. import utils
from ._font import FontAsset, Glyph, GlyphMetrics


# Printable ASCII, no-break space and the ellipsis
DEFAULT_CHARSET = "".join(chr(i) for i in range(32, 127)) + chr(0xA0) + chr(0x2026)

# The width of the (virtual) atlas that glyph regions are packed into
ATLAS_WIDTH = 1024
ATLAS_PADDING = 2


def get_ft_face(font_filename, size):
    face = freetype.Face(os.fspath(font_filename))
    face.set_pixel_sizes(size, size)
    return face


def load_font_file(filename, size=48, charset=None):
    """Create a `FontAsset` from a font file, for the characters in ``charset``.

    Glyph regions are packed row by row in a virtual atlas of 1024 pixels
    wide; rasterizing the glyphs into it is up to the renderer. Characters
    that the font has no glyph for are left out.
    """
    size = int(size)
    if size <= 0:
        raise ValueError(f"Font size must be larger than zero. Got {size}.")
    charset = DEFAULT_CHARSET if charset is None else charset
    face = get_ft_face(filename, size)

    # The size metrics are in 26.6 fixed point
    ascender = face.size.ascender / 64
    descender = face.size.descender / 64
    line_height = face.size.height / 64
    units_scale = size / face.units_per_EM

    chars = {}
    missing = []
    pen_x = pen_y = row_height = 0
    for char in dict.fromkeys(charset):
        if face.get_char_index(char) == 0 and char != " ":
            missing.append(char)
            continue
        face.load_char(char, freetype.FT_LOAD_DEFAULT)
        m = face.glyph.metrics
        width, height = m.width / 64, m.height / 64
        bearing_x, bearing_y = m.horiBearingX / 64, m.horiBearingY / 64

        glyph = None
        if width > 0 and height > 0:
            if pen_x + width > ATLAS_WIDTH:
                pen_x = 0
                pen_y += row_height + ATLAS_PADDING
                row_height = 0
            glyph = Glyph(0, pen_x, pen_y, width, height)
            pen_x += width + ATLAS_PADDING
            row_height = max(row_height, height)

        chars[char] = GlyphMetrics(
            ord(char),
            bearing_x,
            ascender - bearing_y,
            face.glyph.advance.x / 64,
            glyph,
        )

    if missing:
        utils.logger.warning(
            f"Font {os.path.basename(os.fspath(filename))} has no glyphs for "
            f"{len(missing)} characters: {''.join(missing[:20])!r}"
        )

    if face.has_kerning:
        for right, metrics in chars.items():
            for left in chars:
                kerning = face.get_kerning(left, right).x / 64
                if kerning:
                    metrics.kerning[left] = kerning

    metrics = {
        "underline_offset": face.underline_position * units_scale,
        "underline_thickness": face.underline_thickness * units_scale,
    }
    for key, char in (("cap_line", "H"), ("mean_line", "x")):
        if face.get_char_index(char):
            face.load_char(char, freetype.FT_LOAD_DEFAULT)
            metrics[key] = face.glyph.metrics.horiBearingY / 64
    if " " in chars:
        metrics["tab_width"] = chars[" "].x_advance * 4

    family = face.family_name.decode("utf-8", "replace") if face.family_name else ""
    return FontAsset(
        family,
        size,
        line_height,
        0,
        ascender,
        descender,
        chars,
        **metrics,
    )
