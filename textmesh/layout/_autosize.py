import math

from ..parser import RichTextParser
from ._engine import LayoutEngine


def auto_size_font_size(
    text,
    font,
    style,
    container_width,
    container_height,
    min_size=1,
    max_size=500,
    parser=None,
    engine=None,
):
    """Find the largest font size at which the text fits in a container.

    The text is wrapped at the container width. A binary search (with a
    tolerance of half a pixel) finds the size for which the layout is not
    wider or higher than the container. Returns the size rounded down.
    """
    if min_size > max_size:
        raise ValueError(f"min_size ({min_size}) must not exceed max_size ({max_size}).")
    parser = RichTextParser() if parser is None else parser
    engine = LayoutEngine() if engine is None else engine
    test_style = style.copy(word_wrap=True, word_wrap_width=container_width)
    family = test_style.font_family or font.family

    lo, hi = float(min_size), float(max_size)
    while hi - lo > 0.5:
        mid = (lo + hi) / 2
        test_style.font_size = mid
        parsed = parser.parse(text, mid, test_style.fill, family)
        info = engine.layout(parsed, font, test_style)
        fits = info.width <= container_width and info.height <= container_height
        info.release(engine.pool)
        if fits:
            lo = mid
        else:
            hi = mid

    return math.floor(lo)
