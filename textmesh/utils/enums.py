"""
The enums used in textmesh. The enums are all available from the root ``textmesh`` namespace.

Each enum derives from ``str``, so its members compare equal to their values:
``TextAlignment.center == "center"``.

.. currentmodule:: textmesh.utils.enums

.. autosummary::
    :toctree: utils/enums

    TextAlignment
    VerticalAlignment
    OverflowMode
    ElementType
    DecorationType

"""

from enum import Enum as _Enum


__all__ = [
    "TextAlignment",
    "VerticalAlignment",
    "OverflowMode",
    "ElementType",
    "DecorationType",
]


class Enum(str, _Enum):
    """Enum base class for textmesh."""

    def __str__(self):
        return self.value

    @classmethod
    def values(cls):
        """The tuple of accepted string values."""
        return tuple(member.value for member in cls)


class TextAlignment(Enum):
    """How the lines of a text are aligned horizontally."""

    left = "left"  #: Lines start at the left margin.
    center = "center"  #: Lines are centered in the container width.
    right = "right"  #: Lines end at the container width.
    justified = "justified"  #: Lines are stretched to the container width, except the last line of a paragraph.
    flush = "flush"  #: All lines are stretched to the container width.


class VerticalAlignment(Enum):
    """How a text block is positioned within its container height."""

    top = "top"  #: The first line starts at the top.
    middle = "middle"  #: The block is centered using its total height.
    bottom = "bottom"  #: The block ends at the bottom.
    baseline = "baseline"  #: The first baseline is placed at the container center.
    midline = "midline"  #: The font's mean line is placed at the container center.
    capline = "capline"  #: The font's cap line is placed at the container center.
    geometry = "geometry"  #: The actual glyph extents are centered.


class OverflowMode(Enum):
    """What happens with lines that do not fit the container height."""

    overflow = "overflow"  #: Lines are kept.
    truncate = "truncate"  #: Lines that do not fit are dropped.
    ellipsis = "ellipsis"  #: Lines are dropped and the last kept line ends with an ellipsis.


class ElementType(Enum):
    """The kind of element a layout record represents."""

    character = "character"  #: A glyph from a font (or an invisible character).
    sprite = "sprite"  #: An inline sprite.


class DecorationType(Enum):
    """The kind of decoration span."""

    underline = "underline"
    strikethrough = "strikethrough"
    mark = "mark"  #: A highlight behind the text.
