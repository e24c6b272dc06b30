"""Parsing of numeric markup values."""

import re


_LEADING_FLOAT = re.compile(r"\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_float(value, default=None):
    """Parse the leading number of a string, e.g. "12.5px" -> 12.5.

    Returns ``default`` if the string does not start with a number.
    """
    match = _LEADING_FLOAT.match(value)
    if match is None:
        return default
    return float(match.group(0))


def parse_unit(value, base_font_size, default=0.0):
    """Parse a size value relative to the base font size.

    * ``"50%"`` -> half the base size.
    * ``"1.5em"`` -> 1.5 times the base size.
    * ``"12px"`` or ``"12"`` -> 12.

    Returns ``default`` if the value has no leading number.
    """
    value = value.strip()
    number = parse_float(value)
    if number is None:
        return default
    if value.endswith("%"):
        return base_font_size * number / 100
    elif value.endswith("em"):
        return base_font_size * number
    return number
