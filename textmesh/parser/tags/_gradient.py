from ...utils.color import parse_color
from ._base import register_stack_tag


def parse_gradient_value(value):
    """Parse ``"#ff0000,#0000ff"`` into ``(0xFF0000, 0x0000FF)``.

    Returns None unless at least two colors parse.
    """
    try:
        colors = tuple(parse_color(s) for s in value.split(",") if s.strip())
    except ValueError:
        return None
    if len(colors) < 2:
        return None
    return colors[:2]


def register_gradient_tags(registry, stacks):
    """``<gradient=#a,#b>`` marks characters with two endpoint colors; the
    interpolation itself happens in `apply_gradients` after parsing.
    """
    register_stack_tag(
        registry,
        "gradient",
        stacks.gradient,
        "gradient_colors",
        lambda value, base, state: parse_gradient_value(value),
    )
