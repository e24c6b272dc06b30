"""
Font assets: per-character metrics plus the font-wide metrics used by layout.

All distances are in font units at the font's base size (``FontAsset.size``).
The layout engine scales them by ``font_size / font.size``.
"""

import string


class Glyph:
    """A reference to a glyph region in a texture atlas.

    Parameters
    ----------
    page : int
        The index of the atlas page (texture) that holds the glyph.
    x, y : float
        The top-left corner of the region, in atlas pixels.
    width, height : float
        The size of the region, in atlas pixels.

    """

    __slots__ = ["height", "page", "width", "x", "y"]

    def __init__(self, page=0, x=0.0, y=0.0, width=0.0, height=0.0):
        self.page = page
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def __repr__(self):
        return f"<Glyph page={self.page} ({self.x}, {self.y}, {self.width}, {self.height})>"

    def __eq__(self, other):
        if not isinstance(other, Glyph):
            return NotImplemented
        return (self.page, self.x, self.y, self.width, self.height) == (
            other.page,
            other.x,
            other.y,
            other.width,
            other.height,
        )


class GlyphMetrics:
    """The metrics of a single character in a font.

    Parameters
    ----------
    codepoint : int
        The Unicode codepoint.
    x_offset : float
        Horizontal offset of the glyph quad from the pen position.
    y_offset : float
        Vertical offset of the glyph quad from the line top.
    x_advance : float
        How far the pen moves after this character.
    glyph : Glyph | None
        The atlas region. None for characters that draw nothing (e.g. space).
    kerning : dict | None
        Kerning amounts keyed by the *preceding* character.

    """

    __slots__ = ["codepoint", "glyph", "kerning", "x_advance", "x_offset", "y_offset"]

    def __init__(
        self, codepoint, x_offset=0.0, y_offset=0.0, x_advance=0.0, glyph=None, kerning=None
    ):
        self.codepoint = int(codepoint)
        self.x_offset = float(x_offset)
        self.y_offset = float(y_offset)
        self.x_advance = float(x_advance)
        self.glyph = glyph
        self.kerning = dict(kerning or {})

    def __repr__(self):
        return f"<GlyphMetrics {chr(self.codepoint)!r} advance={self.x_advance}>"

    @property
    def char(self):
        """The character as a string."""
        return chr(self.codepoint)

    @property
    def width(self):
        """The width of the glyph quad, 0 when there is no glyph."""
        return self.glyph.width if self.glyph is not None else 0.0

    @property
    def height(self):
        """The height of the glyph quad, 0 when there is no glyph."""
        return self.glyph.height if self.glyph is not None else 0.0

    def get_kerning(self, previous_char):
        """Get the kerning to apply when this character follows ``previous_char``."""
        return self.kerning.get(previous_char, 0.0)


class FontAsset:
    """A font with the metrics needed by the layout engine.

    Parameters
    ----------
    family : str
        The font family name.
    size : float
        The base size that all metrics are measured at.
    line_height : float
        The distance between two baselines at the base size.
    base_line_offset : float
        The y position of the first line.
    ascent : float
        The font ascender.
    descent : float
        The font descender.
    chars : dict | None
        The `GlyphMetrics` keyed by character.
    **metrics
        Any of the optional font-wide metric attributes (``cap_line``,
        ``mean_line``, ``superscript_offset``, ``underline_offset``,
        ``tab_width``, ``bold_spacing``, ...).

    """

    METRICS = {
        "cap_line": 0.0,
        "mean_line": 0.0,
        "superscript_offset": 0.0,
        "superscript_size": 0.5,
        "subscript_offset": 0.0,
        "subscript_size": 0.5,
        "underline_offset": 0.0,
        "underline_thickness": 0.0,
        "strikethrough_offset": 0.0,
        "strikethrough_thickness": 0.0,
        "tab_width": 0.0,
        "font_scale": 1.0,
        "bold_style": 0.75,
        "bold_spacing": 7.0,
    }

    def __init__(
        self,
        family,
        size,
        line_height,
        base_line_offset=0.0,
        ascent=0.0,
        descent=0.0,
        chars=None,
        *,
        fallback_fonts=(),
        sprite_sheets=(),
        distance_field=None,
        pages=(),
        **metrics,
    ):
        if not isinstance(family, str):
            raise TypeError("Font family must be str.")
        size = float(size)
        if size <= 0:
            raise ValueError(f"Font size must be larger than zero. Got {size}.")
        unknown = set(metrics).difference(self.METRICS)
        if unknown:
            raise TypeError(f"Unknown font metrics: {', '.join(sorted(unknown))}")

        self.family = family
        self.size = size
        self.line_height = float(line_height)
        self.base_line_offset = float(base_line_offset)
        self.ascent = float(ascent)
        self.descent = float(descent)
        self.chars = dict(chars or {})
        self.fallback_fonts = list(fallback_fonts)
        self.sprite_sheets = list(sprite_sheets)
        self.distance_field = distance_field or {"type": "none", "range": 0}
        self.pages = list(pages)
        for key, default in self.METRICS.items():
            setattr(self, key, float(metrics.get(key, default)))

    def __repr__(self):
        return f"<FontAsset '{self.family}' size={self.size:g} chars={len(self.chars)}>"

    def get_char(self, char):
        """Get the `GlyphMetrics` for a character, or None."""
        return self.chars.get(char)

    def get_char_with_fallback(self, char, registry=None, _visited=None):
        """Look up a character in this font, then in the fallback fonts.

        The fallback fonts are resolved by name in the given `FontRegistry`.
        A font is never visited twice, so fallback cycles end the search.

        Returns a ``(metrics, font)`` tuple, or None if no font has the char.
        """
        metrics = self.chars.get(char)
        if metrics is not None:
            return metrics, self
        if registry is None or not self.fallback_fonts:
            return None

        visited = set() if _visited is None else _visited
        visited.add(id(self))
        for name in self.fallback_fonts:
            font = registry.get(name)
            if font is None or id(font) in visited:
                continue
            result = font.get_char_with_fallback(char, registry, visited)
            if result is not None:
                return result
        return None

    # %% Constructors

    @classmethod
    def from_data(cls, data):
        """Create a font from a font description dict.

        The dict has the layout of a ``.tmpfont.json`` file: an ``info`` dict
        with the font metrics, a ``glyphs`` list, and optional ``kernings``,
        ``distanceField``, ``spriteSheets`` and ``fallbackFonts``.
        """
        try:
            info = data["info"]
            glyphs = data["glyphs"]
        except KeyError as err:
            raise ValueError(f"Font data is missing the {err} field.") from None

        chars = {}
        for g in glyphs:
            codepoint = int(g["id"])
            glyph = Glyph(g.get("page", 0), g["x"], g["y"], g["width"], g["height"])
            chars[chr(codepoint)] = GlyphMetrics(
                codepoint,
                g.get("xOffset", 0),
                g.get("yOffset", 0),
                g.get("xAdvance", 0),
                glyph,
            )

        # Kerning is stored on the second char, keyed by the first
        for k in data.get("kernings") or ():
            second = chars.get(chr(int(k["second"])))
            if second is not None:
                second.kerning[chr(int(k["first"]))] = float(k["amount"])

        json_names = {
            "cap_line": "capLine",
            "mean_line": "meanLine",
            "superscript_offset": "superscriptOffset",
            "superscript_size": "superscriptSize",
            "subscript_offset": "subscriptOffset",
            "subscript_size": "subscriptSize",
            "underline_offset": "underlineOffset",
            "underline_thickness": "underlineThickness",
            "strikethrough_offset": "strikethroughOffset",
            "strikethrough_thickness": "strikethroughThickness",
            "tab_width": "tabWidth",
            "font_scale": "scale",
            "bold_style": "boldStyle",
            "bold_spacing": "boldSpacing",
        }
        metrics = {
            key: info[name]
            for key, name in json_names.items()
            if info.get(name) is not None
        }

        return cls(
            info.get("face", ""),
            info["size"],
            info["lineHeight"],
            info.get("base", 0),
            info.get("ascent", 0),
            info.get("descent", 0),
            chars,
            fallback_fonts=data.get("fallbackFonts") or (),
            sprite_sheets=data.get("spriteSheets") or (),
            distance_field=data.get("distanceField"),
            pages=[page["file"] for page in data.get("pages") or ()],
            **metrics,
        )

    @classmethod
    def monospace(
        cls,
        family="monospace",
        size=32,
        advance=10,
        glyph_size=(10, 20),
        line_height=40,
        ascent=30,
        descent=10,
        charset=None,
        **metrics,
    ):
        """Create an in-memory font in which every character has the same metrics.

        Each character of ``charset`` (printable ASCII by default) advances by
        ``advance`` and draws a glyph of ``glyph_size``; the space draws
        nothing. Useful for measuring text without font files.
        """
        if charset is None:
            charset = "".join(chr(i) for i in range(32, 127))
        w, h = glyph_size
        chars = {}
        for i, char in enumerate(charset):
            glyph = None if char in string.whitespace else Glyph(0, i * w, 0, w, h)
            chars[char] = GlyphMetrics(ord(char), 0, 0, advance, glyph)
        return cls(family, size, line_height, 0, ascent, descent, chars, **metrics)


class FontRegistry:
    """A collection of fonts by name, used to resolve fallback fonts and
    ``<font>`` tags. Names are case insensitive.
    """

    def __init__(self):
        self._fonts = {}

    def __len__(self):
        return len(self._fonts)

    def __contains__(self, name):
        return self.has(name)

    def __iter__(self):
        return iter(self._fonts.values())

    def register(self, name, font):
        """Register a font under the given name."""
        if not isinstance(name, str):
            raise TypeError("Font name must be str.")
        if not isinstance(font, FontAsset):
            raise TypeError(f"Expected a FontAsset, got {font.__class__.__name__}.")
        self._fonts[name.lower()] = font

    def unregister(self, name):
        """Remove a font. Returns whether it was registered."""
        return self._fonts.pop(name.lower(), None) is not None

    def get(self, name):
        """Get a font by name, or None."""
        return self._fonts.get(name.lower())

    def has(self, name):
        return name.lower() in self._fonts

    def clear(self):
        self._fonts.clear()
