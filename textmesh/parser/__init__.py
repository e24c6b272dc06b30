"""
The markup parser.

.. currentmodule:: textmesh.parser

.. autosummary::
    :toctree: parser/

    RichTextParser
    ParsedChar
    StyleState
    TagRegistry
    TagStack
    AttributeStacks
    apply_gradients

"""

# flake8: noqa

from ._registry import TagRegistry, TagEntry, hash_tag_name
from ._stack import TagStack, AttributeStacks
from ._state import StyleState, ParsedChar
from ._gradient import apply_gradients
from ._parser import RichTextParser, TagParseResult, try_parse_tag, MAX_TAG_LENGTH
from .tags import SpriteTag, parse_sprite_tag
