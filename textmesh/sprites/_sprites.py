"""
Inline sprites: small images that are laid out as if they were characters,
using the ``<sprite>`` tag.

.. code-block:: py

    atlas = SpriteAtlas({"coin": SpriteEntry(24, 24), "heart": SpriteEntry(24, 24)})
    sprites = SpriteRegistry()
    sprites.register("icons", atlas)

    # Then in markup: 'Earn <sprite="icons" name="coin"> gold!'

"""

from ..fonts import Glyph


class SpriteEntry:
    """A single sprite in an atlas.

    Parameters
    ----------
    width, height : float
        The display size in pixels. When 0, the size of the glyph region is used.
    x_advance : float
        How far the pen moves after the sprite. When 0, the width is used.
    x_offset : float
        Horizontal offset from the pen position.
    y_offset : float
        Vertical offset from the baseline.
    glyph : Glyph | None
        The region of the atlas texture that holds the sprite.

    """

    __slots__ = ["glyph", "height", "width", "x_advance", "x_offset", "y_offset"]

    def __init__(
        self, width=0.0, height=0.0, x_advance=0.0, x_offset=0.0, y_offset=0.0, glyph=None
    ):
        self.width = float(width)
        self.height = float(height)
        self.x_advance = float(x_advance)
        self.x_offset = float(x_offset)
        self.y_offset = float(y_offset)
        self.glyph = glyph

    def __repr__(self):
        return f"<SpriteEntry {self.width}x{self.height}>"

    @classmethod
    def from_glyph(cls, glyph, **overrides):
        """Create an entry that takes its size from an atlas region."""
        return cls(
            overrides.get("width", glyph.width),
            overrides.get("height", glyph.height),
            overrides.get("x_advance", 0),
            overrides.get("x_offset", 0),
            overrides.get("y_offset", 0),
            glyph,
        )


class SpriteAtlas:
    """A named collection of sprites that share one texture.

    Parameters
    ----------
    sprites : dict
        The `SpriteEntry` objects by name. The order defines the sprite indices.
    file : str
        The filename of the atlas texture, if any.

    """

    def __init__(self, sprites=None, file=""):
        self.sprites = dict(sprites or {})
        self.file = file
        for name, entry in self.sprites.items():
            if not isinstance(entry, SpriteEntry):
                raise TypeError(
                    f"Sprite {name!r} must be a SpriteEntry, got {entry.__class__.__name__}."
                )

    def __repr__(self):
        return f"<SpriteAtlas with {len(self.sprites)} sprites>"

    def __len__(self):
        return len(self.sprites)

    def get(self, name):
        """Get a sprite by name, or None."""
        return self.sprites.get(name)

    def get_by_index(self, index):
        """Get the n-th sprite in insertion order, or None."""
        if 0 <= index < len(self.sprites):
            return list(self.sprites.values())[index]
        return None

    @classmethod
    def from_data(cls, data):
        """Create an atlas from a sprite sheet dict as found in the
        ``spriteSheets`` field of a font description.
        """
        sprites = {}
        for g in data.get("glyphs") or ():
            glyph = Glyph(0, g["x"], g["y"], g["width"], g["height"])
            sprites[g["name"]] = SpriteEntry(
                g["width"],
                g["height"],
                g.get("xAdvance", 0),
                g.get("xOffset", 0),
                g.get("yOffset", 0),
                glyph,
            )
        return cls(sprites, data.get("file", ""))


class SpriteRegistry:
    """The sprite atlases that ``<sprite>`` tags can refer to.

    Atlas names are case insensitive; sprite names are not. Global lookups
    (without an atlas name) search the atlases in registration order.
    """

    def __init__(self):
        self._atlases = {}

    def __len__(self):
        return len(self._atlases)

    def __contains__(self, name):
        return self.has(name)

    def register(self, name, atlas):
        """Register an atlas under the given name."""
        if not isinstance(name, str):
            raise TypeError("Atlas name must be str.")
        if not isinstance(atlas, SpriteAtlas):
            raise TypeError(f"Expected a SpriteAtlas, got {atlas.__class__.__name__}.")
        self._atlases[name.lower()] = atlas

    def unregister(self, name):
        """Remove an atlas. Returns whether it was registered."""
        return self._atlases.pop(name.lower(), None) is not None

    def has(self, name):
        return name.lower() in self._atlases

    def get_atlas(self, name):
        return self._atlases.get(name.lower())

    def get_sprite(self, atlas_name, sprite_name):
        """Get a sprite by atlas and sprite name, or None."""
        atlas = self._atlases.get(atlas_name.lower())
        return None if atlas is None else atlas.get(sprite_name)

    def find_sprite(self, sprite_name):
        """Get the first sprite with the given name in any atlas, or None."""
        for atlas in self._atlases.values():
            entry = atlas.get(sprite_name)
            if entry is not None:
                return entry
        return None

    def get_sprite_by_index(self, atlas_name, index):
        """Get the n-th sprite of an atlas, or None."""
        atlas = self._atlases.get(atlas_name.lower())
        return None if atlas is None else atlas.get_by_index(index)

    def find_sprite_by_index(self, index):
        """Get a sprite by its global index, counting across all atlases."""
        if index < 0:
            return None
        offset = 0
        for atlas in self._atlases.values():
            if index - offset < len(atlas):
                return atlas.get_by_index(index - offset)
            offset += len(atlas)
        return None

    def clear(self):
        self._atlases.clear()
