from ._base import register_flag_tag


SCRIPT_SIZE = 0.5
SUPERSCRIPT_OFFSET = -0.35
SUBSCRIPT_OFFSET = 0.15


def register_case_tags(registry, stacks):
    """Case transforms and ``<sup>``/``<sub>``.

    The case flags are applied by the parser when a character is emitted.
    Super- and subscript halve the current size and shift the baseline by a
    fraction of the base size; the layout engine replaces both with the
    font's own metrics when the font defines them.
    """
    register_flag_tag(registry, "allcaps", stacks.all_caps, "is_all_caps")
    register_flag_tag(registry, "uppercase", stacks.all_caps, "is_all_caps")
    register_flag_tag(registry, "lowercase", stacks.lowercase, "is_lowercase")
    register_flag_tag(registry, "smallcaps", stacks.small_caps, "is_small_caps")

    def make_script_tag(name, stack, attr, offset_factor):
        def on_open(state, value, base_font_size):
            setattr(state, attr, stack.push(True))
            state.font_size = stacks.size.push(state.font_size * SCRIPT_SIZE)
            state.voffset = stacks.voffset.push(base_font_size * offset_factor)

        def on_close(state):
            setattr(state, attr, stack.pop())
            state.font_size = stacks.size.pop()
            state.voffset = stacks.voffset.pop()

        registry.register(name, on_open, on_close)

    make_script_tag("sup", stacks.superscript, "is_superscript", SUPERSCRIPT_OFFSET)
    make_script_tag("sub", stacks.subscript, "is_subscript", SUBSCRIPT_OFFSET)
