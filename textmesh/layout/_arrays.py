import numpy as np


def glyph_arrays(text_info):
    """Get the visible glyphs of a layout as numpy arrays, for a renderer.

    Returns a dict with:

    * ``positions``: float32 (n, 2), the top-left corner of each quad.
    * ``sizes``: float32 (n, 2), the width and height of each quad.
    * ``colors``: float32 (n, 4), RGBA in 0..1.
    * ``rotations``: float32 (n,), in degrees.
    * ``atlas_regions``: float32 (n, 4), the (x, y, w, h) of the glyph in the
      atlas, zeros for records without a glyph.
    * ``pages``: int32 (n,), the atlas page of each glyph.
    * ``line_indices``: int32 (n,).
    * ``indices``: int32 (n,), the index of each glyph in ``character_info``.

    """
    indices = [i for i, ci in enumerate(text_info.character_info) if ci.is_visible]
    n = len(indices)

    positions = np.zeros((n, 2), np.float32)
    sizes = np.zeros((n, 2), np.float32)
    colors = np.zeros((n, 4), np.float32)
    rotations = np.zeros((n,), np.float32)
    atlas_regions = np.zeros((n, 4), np.float32)
    pages = np.zeros((n,), np.int32)
    line_indices = np.zeros((n,), np.int32)

    for j, i in enumerate(indices):
        ci = text_info.character_info[i]
        positions[j] = ci.x, ci.y
        sizes[j] = ci.width, ci.height
        colors[j, :3] = (
            (ci.color >> 16) & 0xFF,
            (ci.color >> 8) & 0xFF,
            ci.color & 0xFF,
        )
        colors[j, 3] = ci.alpha
        rotations[j] = ci.rotation
        if ci.glyph is not None:
            g = ci.glyph
            atlas_regions[j] = g.x, g.y, g.width, g.height
            pages[j] = g.page
        line_indices[j] = ci.line_index

    colors[:, :3] /= 255

    return {
        "positions": positions,
        "sizes": sizes,
        "colors": colors,
        "rotations": rotations,
        "atlas_regions": atlas_regions,
        "pages": pages,
        "line_indices": line_indices,
        "indices": np.array(indices, np.int32),
    }
