"""
Text layout: positioning parsed characters into lines.

.. currentmodule:: textmesh.layout

.. autosummary::
    :toctree: layout/

    LayoutEngine
    layout
    TextInfo
    CharacterInfo
    LineInfo
    WordInfo
    LinkInfo
    DecorationSpan
    CharacterInfoPool
    build_decorations
    glyph_arrays
    auto_size_font_size

"""

# flake8: noqa

from ._records import (
    CharacterInfo,
    LineInfo,
    WordInfo,
    LinkInfo,
    Rect,
    DecorationSpan,
    TextInfo,
)
from ._pool import CharacterInfoPool, default_pool
from ._alignment import apply_alignment, apply_overflow, apply_vertical_alignment
from ._links import build_link_info
from ._decorations import build_decorations, get_decoration_metrics
from ._engine import LayoutEngine, layout, finalize_line, JUSTIFIED_TOLERANCE
from ._arrays import glyph_arrays
from ._autosize import auto_size_font_size
