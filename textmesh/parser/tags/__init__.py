"""
The built-in tag handlers.

Each family registers ``on_open(state, value, base_font_size)`` and
``on_close(state)`` handlers in a `TagRegistry`, operating on the attribute
stacks of one parser. Custom tags are added the same way:

.. code-block:: py

    parser = RichTextParser()
    stack = TagStack(0.0)

    def on_open(state, value, base_font_size):
        state.voffset = stack.push(-base_font_size * 0.5)

    def on_close(state):
        state.voffset = stack.pop()

    parser.registry.register("raise", on_open, on_close)

"""

# flake8: noqa

from ._base import get_attribute, strip_quotes, register_stack_tag, register_flag_tag
from ._color import register_color_tags
from ._formatting import register_formatting_tags, parse_mark_color
from ._size import register_size_tags
from ._layout import register_layout_tags
from ._case import register_case_tags
from ._link import register_link_tags
from ._font import register_font_tags, parse_font_value
from ._transform import register_transform_tags
from ._gradient import register_gradient_tags, parse_gradient_value
from ._sprite import SpriteTag, parse_sprite_tag
from ._special import register_special_tags, STRUCTURAL_TAGS
from ._special import NBSP, ZWSP, SOFT_HYPHEN, EN_SPACE, EM_SPACE, ZWJ, OBJECT_REPLACEMENT


def register_builtin_tags(registry, stacks):
    """Register all built-in tag families, operating on the given `AttributeStacks`."""
    register_special_tags(registry)
    register_color_tags(registry, stacks)
    register_formatting_tags(registry, stacks)
    register_size_tags(registry, stacks)
    register_layout_tags(registry, stacks)
    register_case_tags(registry, stacks)
    register_link_tags(registry, stacks)
    register_font_tags(registry, stacks)
    register_transform_tags(registry, stacks)
    register_gradient_tags(registry, stacks)
