"""
Fonts and their metrics.

.. currentmodule:: textmesh.fonts

.. autosummary::
    :toctree: fonts/

    FontAsset
    FontRegistry
    GlyphMetrics
    Glyph
    load_font_data
    load_font_file

"""

# flake8: noqa

from ._font import Glyph, GlyphMetrics, FontAsset, FontRegistry
from ._loader import load_font_data, is_font_data_file
from ._freetype import load_font_file
