"""Helpers shared by the tag handler families."""

import re

from ... import utils


_attribute_patterns = {}


def strip_quotes(s):
    """Strip matching (or dangling) quotes from a value."""
    s = s.strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in "\"'":
        return s[1:-1]
    if s.endswith(('"', "'")):
        s = s[:-1]
    if s.startswith(('"', "'")):
        s = s[1:]
    return s.strip()


def get_attribute(value, name):
    """Get the value of ``name=...`` inside a tag value, or None."""
    pattern = _attribute_patterns.get(name)
    if pattern is None:
        pattern = re.compile(
            rf"\b{re.escape(name)}\s*=\s*[\"']?([^\s,>\"']+)", re.IGNORECASE
        )
        _attribute_patterns[name] = pattern
    match = pattern.search(value)
    return match.group(1) if match else None


def register_stack_tag(registry, name, stack, attr, convert):
    """Register a tag that pushes a converted value onto a stack and sets
    ``state.<attr>``. The converter is called as ``convert(value, base_font_size, state)``
    and returns None for an invalid value, in which case the current value is
    pushed so that the matching close tag stays balanced.
    """

    def on_open(state, value, base_font_size):
        new_value = convert(value, base_font_size, state)
        if new_value is None:
            utils.logger.debug(f"Ignoring invalid <{name}> value: {value!r}")
            new_value = stack.current
        setattr(state, attr, stack.push(new_value))

    def on_close(state):
        setattr(state, attr, stack.pop())

    registry.register(name, on_open, on_close)


def register_flag_tag(registry, name, stack, attr):
    """Register a tag without value that turns a boolean attribute on."""
    register_stack_tag(registry, name, stack, attr, lambda value, base, state: True)


def noop(*args):
    """Handler for tags whose effect is handled by the parser itself."""
