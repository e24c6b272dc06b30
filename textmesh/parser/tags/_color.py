from ...utils.color import parse_color, parse_alpha
from ._base import register_stack_tag


def _color(value, base_font_size, state):
    try:
        return parse_color(value)
    except ValueError:
        return None


def _alpha(value, base_font_size, state):
    try:
        return parse_alpha(value)
    except ValueError:
        return None


def register_color_tags(registry, stacks):
    """``<color=red>``, ``<color=#ff000080>``, ``<alpha=#80>``."""
    register_stack_tag(registry, "color", stacks.color, "color", _color)
    register_stack_tag(registry, "alpha", stacks.alpha, "alpha", _alpha)
