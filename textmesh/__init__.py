"""Rich text markup parsing and glyph layout."""

# flake8: noqa

from ._version import __version__, version_info

from . import utils
from .utils import Color, logger, enums
from .utils.enums import *

from .parser import RichTextParser, ParsedChar, StyleState, TagRegistry
from .fonts import (
    FontAsset,
    FontRegistry,
    GlyphMetrics,
    Glyph,
    load_font_data,
    load_font_file,
)
from .sprites import SpriteEntry, SpriteAtlas, SpriteRegistry
from .styles import StylePreset, StyleSheet, Material, MaterialRegistry
from .layout import (
    LayoutEngine,
    TextInfo,
    CharacterInfo,
    LineInfo,
    WordInfo,
    LinkInfo,
    DecorationSpan,
    CharacterInfoPool,
    build_decorations,
    glyph_arrays,
    auto_size_font_size,
)

from ._style import TextStyle
from ._text import RichText
