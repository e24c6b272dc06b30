from ...utils.units import parse_float
from ._base import register_stack_tag


def _number(value, base_font_size, state):
    return parse_float(value)


def register_transform_tags(registry, stacks):
    """Per-character ``<scale=N>`` multiplier and ``<rotate=N>`` in degrees."""
    register_stack_tag(registry, "scale", stacks.char_scale, "char_scale", _number)
    register_stack_tag(registry, "rotate", stacks.rotation, "rotation", _number)
