import re
from collections import namedtuple

from ...utils.color import parse_color


SpriteTag = namedtuple("SpriteTag", ["atlas_name", "sprite_name", "index", "tint"])
SpriteTag.__doc__ = """The parsed value of a ``<sprite>`` tag.

An empty atlas name means all atlases are searched. Index and tint are -1
when not given.
"""

_name_pattern = re.compile(r"name\s*=\s*[\"']?([^\"'\s>]+)", re.IGNORECASE)
_index_pattern = re.compile(r"index\s*=\s*[\"']?(\d+)", re.IGNORECASE)
_tint_pattern = re.compile(r"tint\s*=\s*[\"']?#?([0-9a-fA-F]{3,8})", re.IGNORECASE)


def _strip_edge_quotes(s):
    return re.sub(r"^[\"']|[\"']$", "", s)


def parse_sprite_tag(value):
    """Parse the value of a sprite tag.

    Supported forms::

        <sprite="atlas" name="coin">    a sprite in a specific atlas
        <sprite name="coin">            search all atlases
        <sprite="coin">                 shorthand for a sprite name
        <sprite index=3 tint=#ff0000>   by global index, tinted

    """
    value = value.strip()
    atlas_name = sprite_name = ""

    match = _name_pattern.search(value)
    if match:
        sprite_name = match.group(1)
        if match.start() > 0:
            atlas_name = _strip_edge_quotes(value[: match.start()].strip())
    else:
        leading = value.split(" ", 1)[0]
        sprite_name = _strip_edge_quotes(leading)
        if _index_pattern.match(leading) or _tint_pattern.match(leading):
            sprite_name = ""

    match = _index_pattern.search(value)
    index = int(match.group(1)) if match else -1

    tint = -1
    match = _tint_pattern.search(value)
    if match:
        try:
            tint = parse_color("#" + match.group(1))
        except ValueError:
            tint = -1

    return SpriteTag(atlas_name, sprite_name, index, tint)
