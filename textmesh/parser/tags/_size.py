from ...utils.units import parse_float, parse_unit
from ._base import register_stack_tag


def _size(value, base_font_size, state):
    value = value.strip()
    if value.startswith(("+", "-")):
        delta = parse_float(value)
        if delta is None:
            return None
        return state.font_size + delta
    return parse_unit(value, base_font_size, None)


def _spacing(value, base_font_size, state):
    return parse_unit(value, base_font_size, None)


def register_size_tags(registry, stacks):
    """``<size=24>``, ``<size=150%>``, ``<size=1.5em>``, ``<size=+4>``,
    ``<cspace=N>``, ``<mspace=N>`` and its alias ``<duospace=N>``.
    """
    register_stack_tag(registry, "size", stacks.size, "font_size", _size)
    register_stack_tag(registry, "cspace", stacks.cspace, "cspace", _spacing)
    register_stack_tag(registry, "mspace", stacks.mspace, "mspace", _spacing)
    register_stack_tag(registry, "duospace", stacks.mspace, "mspace", _spacing)
