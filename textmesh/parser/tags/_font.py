import re

from ._base import strip_quotes, register_stack_tag


_material_pattern = re.compile(r"[\"']?\s+material\s*=\s*[\"']?", re.IGNORECASE)


def parse_font_value(value):
    """Split a ``<font>`` value into ``(font_name, material_name)``.

    Handles ``"Dimbo SDF" material="Strong"`` and the forms it takes after
    the tag parser stripped its outer quotes.
    """
    match = _material_pattern.search(value)
    if match is None:
        return strip_quotes(value), ""
    return strip_quotes(value[: match.start()]), strip_quotes(value[match.end() :])


def register_font_tags(registry, stacks):
    """``<font="name" material="m">``, ``<font-weight=N>`` and ``<material=m>``."""

    def open_font(state, value, base_font_size):
        font_name, material_name = parse_font_value(value)
        state.font_family = stacks.font.push(font_name)
        stacks.font_material.push(bool(material_name))
        if material_name:
            state.material = stacks.material.push(material_name)

    def close_font(state):
        state.font_family = stacks.font.pop()
        pushed_material = stacks.font_material.current
        stacks.font_material.pop()
        if pushed_material:
            state.material = stacks.material.pop()

    registry.register("font", open_font, close_font)

    register_stack_tag(
        registry,
        "font-weight",
        stacks.font_weight,
        "font_weight",
        lambda value, base, state: strip_quotes(value),
    )
    register_stack_tag(
        registry,
        "material",
        stacks.material,
        "material",
        lambda value, base, state: strip_quotes(value),
    )
