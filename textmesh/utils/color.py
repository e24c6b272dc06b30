"""Provides utilities to deal with color.

Colors travel through the pipeline as packed ints (``0xRRGGBB``), which is
what the markup produces and what the layout records carry. The ``Color``
class is the boundary type: it accepts the many ways a user may write a color
and converts to and from the packed representation.
"""

import ctypes
import colorsys

import hsluv

F4 = ctypes.c_float * 4


def _float_from_css_value(v, i, is_hue=False):
    v = v.strip()
    if not is_hue:
        if v.endswith("%"):
            return float(v[:-1]) / 100
        elif i < 3:
            return float(v) / 255
        else:
            return float(v)
    else:
        # Hue can be in degrees or a raw number between 0 and 1
        if i == 0:
            return float(v[:-3]) / 360 if v.endswith("deg") else float(v)
        else:
            return float(v[:-1]) / 100 if v.endswith("%") else float(v)


def _channel_to_byte(v):
    return int(max(0.0, min(1.0, v)) * 255 + 0.5)


class Color:
    """A representation of color (in the sRGB colorspace).

    Internally the color is stored using 4 32-bit floats (rgba). It can be
    instantiated in a variety of ways. E.g. by providing the color components as
    values between 0 and 1:

        * `Color(r, g, b, a)` providing rgba values.
        * `Color(r, g, b)` providing rgb, alpha is 1.
        * `Color(gray, a)` grayscale intensity and alpha.
        * `Color(gray)` grayscale intensity.

    The above variations can also be supplied as a single tuple/list.

    Strings:

        * `Color("red")` one of the `NAMED_COLORS`.
        * `Color("#ff0000")`, `Color("#ff0000ff")`, `Color("#f00")`, `Color("#f00f")`.
        * `Color("0xff0000")` hex with a C-style prefix.
        * `Color("rgb(255, 0, 0)")` or `Color("rgba(100%, 0%, 0%, 0.5)")`.
        * `Color("hsl(120deg, 100%, 50%)")`, `Color("hsv(0.333, 1, 0.5)")`,
          `Color("hsluv(120deg, 50%, 50%)")` and their alpha variants.

    Packed integers (as used by the layout records) are converted with
    `Color.from_int()` and `Color.to_int()`.

    Parameters
    ----------
    args : tuple, float, str
        The color specification.

    """

    __slots__ = ["_val"]

    def __init__(self, *args):
        if len(args) == 1:
            color = args[0]
            if isinstance(color, Color):
                self._set_from_tuple(color.rgba)
            elif isinstance(color, (int, float)):
                self._set_from_tuple(args)
            elif isinstance(color, str):
                self._set_from_str(color)
            else:
                # Assume it's an iterable,
                # may raise TypeError 'object is not iterable'
                self._set_from_tuple(color)
        else:
            self._set_from_tuple(args)

    def __repr__(self):
        f = lambda v: f"{v:0.4f}".rstrip("0").ljust(3, "0")
        return f"Color({f(self.r)}, {f(self.g)}, {f(self.b)}, {f(self.a)})"

    @property
    def __array_interface__(self):
        # Numpy can wrap our memory in an array without copying
        readonly = True
        ptr = ctypes.addressof(self._val)
        x = dict(version=3, shape=(4,), typestr="<f4", data=(ptr, readonly))
        return x

    def __len__(self):
        return 4

    def __getitem__(self, index):
        return self._val[index]

    def __iter__(self):
        return self.rgba.__iter__()

    def __eq__(self, other):
        if not isinstance(other, Color):
            other = Color(other)
        return all(self._val[i] == other._val[i] for i in range(4))

    def __hash__(self):
        return hash(self.rgba)

    def _set_from_rgba(self, r, g, b, a):
        a = max(0.0, min(1.0, float(a)))
        self._val = F4(float(r), float(g), float(b), a)

    def _set_from_tuple(self, color):
        color = tuple(float(c) for c in color)
        if len(color) == 4:
            self._set_from_rgba(*color)
        elif len(color) == 3:
            self._set_from_rgba(*color, 1)
        elif len(color) == 2:
            self._set_from_rgba(color[0], color[0], color[0], color[1])
        elif len(color) == 1:
            self._set_from_rgba(color[0], color[0], color[0], 1)
        else:
            raise ValueError(f"Cannot parse color tuple with {len(color)} values")

    def _set_from_hex(self, digits):
        try:
            values = [int(c, 16) for c in digits]
        except ValueError:
            raise ValueError(f"Invalid hex color: '#{digits}'") from None
        if len(digits) in (3, 4):
            channels = [v / 15 for v in values]
        elif len(digits) in (6, 8):
            channels = [
                (values[i] * 16 + values[i + 1]) / 255
                for i in range(0, len(digits), 2)
            ]
        else:
            raise ValueError(
                f"Expecting 3, 4, 6, or 8 hex digits in a color, got {len(digits)}."
            )
        if len(channels) == 3:
            channels.append(1)
        self._set_from_rgba(*channels)

    def _set_from_str(self, color):
        color = color.strip().lower()
        if color.startswith("#"):
            self._set_from_hex(color[1:])
        elif color.startswith("0x"):
            self._set_from_hex(color[2:])
        elif color.startswith(("rgb(", "rgba(")):
            # A CSS color 'function'
            parts = color.split("(")[1].split(")")[0].split(",")
            parts = [_float_from_css_value(p, i) for i, p in enumerate(parts)]
            if len(parts) == 3:
                self._set_from_rgba(parts[0], parts[1], parts[2], 1)
            elif len(parts) == 4:
                self._set_from_rgba(parts[0], parts[1], parts[2], parts[3])
            else:
                raise ValueError(
                    f"CSS color {color.split('(')[0]}(..) must have 3 or 4 elements, not {len(parts)} "
                )
        elif color.startswith(("hsl(", "hsla(", "hsv(", "hsva(", "hsluv(", "hsluva(")):
            parts = color.split("(")[1].split(")")[0].split(",")
            parts = [
                _float_from_css_value(p, i, is_hue=True) for i, p in enumerate(parts)
            ]
            if len(parts) not in (3, 4):
                raise ValueError(
                    f"CSS color {color.split('(')[0]}(..) must have 3 or 4 elements, not {len(parts)} "
                )
            if color.startswith(("hsl(", "hsla(")):
                color = Color.from_hsl(*parts)
            elif color.startswith(("hsv(", "hsva(")):
                color = Color.from_hsv(*parts)
            else:
                color = Color.from_hsluv(*parts)
            self._set_from_rgba(*color.rgba)
        else:
            try:
                color_int = NAMED_COLORS[color]
            except KeyError:
                raise ValueError(f"Unknown color: '{color}'") from None
            else:
                self._set_from_rgba(*Color.from_int(color_int).rgba)

    @property
    def rgba(self):
        """The RGBA tuple (values between 0 and 1)."""
        return self._val[0], self._val[1], self._val[2], self._val[3]

    @property
    def rgb(self):
        """The RGB tuple (values between 0 and 1)."""
        return self._val[0], self._val[1], self._val[2]

    @property
    def r(self):
        """The red value."""
        return self._val[0]

    @property
    def g(self):
        """The green value."""
        return self._val[1]

    @property
    def b(self):
        """The blue value."""
        return self._val[2]

    @property
    def a(self):
        """The alpha (transparency) value, between 0 and 1."""
        return self._val[3]

    @property
    def hex(self):
        """The CSS hex string, e.g. "#00ff00". The alpha channel is ignored.
        Values are clipped to 00 an ff.
        """
        return "#" + hex(self.to_int())[2:].rjust(6, "0")

    @property
    def hexa(self):
        """The hex string including alpha, e.g. "#00ff00ff"."""
        i = (self.to_int() << 8) + _channel_to_byte(self.a)
        return "#" + hex(i)[2:].rjust(8, "0")

    @classmethod
    def from_int(cls, value, alpha=1):
        """Create a Color from a packed ``0xRRGGBB`` integer."""
        value = int(value)
        return Color(
            ((value >> 16) & 0xFF) / 255,
            ((value >> 8) & 0xFF) / 255,
            (value & 0xFF) / 255,
            alpha,
        )

    def to_int(self):
        """Get the color as a packed ``0xRRGGBB`` integer. Alpha is ignored."""
        r, g, b = (_channel_to_byte(v) for v in self.rgb)
        return (r << 16) | (g << 8) | b

    @classmethod
    def from_hsv(cls, hue, saturation, value, alpha=1):
        """Create a Color object from a color in the HSV (a.k.a. HSB) colorspace."""
        color = Color(colorsys.hsv_to_rgb(hue, saturation, value))
        color._val[3] = alpha
        return color

    def to_hsv(self):
        """Get the color represented in the HSV colorspace, as 3 floats."""
        return colorsys.rgb_to_hsv(*self.rgb)

    @classmethod
    def from_hsl(cls, hue, saturation, lightness, alpha=1):
        """Create a Color object from a color in the HSL colorspace."""
        color = Color(colorsys.hls_to_rgb(hue, lightness, saturation))
        color._val[3] = alpha
        return color

    def to_hsl(self):
        """Get the color represented in the HSL colorspace, as 3 floats."""
        hue, lightness, saturation = colorsys.rgb_to_hls(*self.rgb)
        return hue, saturation, lightness

    @classmethod
    def from_hsluv(cls, hue, saturation, lightness, alpha=1):
        """Create a Color object from a color in the HSLuv colorspace.

        HSLuv is a human-friendly alternative to HSL with perceptually uniform
        brightness and saturation. All components range from 0 to 1.
        """
        h, s, light = 360.0 * hue, 100.0 * saturation, 100.0 * lightness
        color = Color(hsluv.hsluv_to_rgb((h, s, light)))
        color._val[3] = alpha
        return color

    def to_hsluv(self):
        """Get the color represented in the HSLuv colorspace, as 3 floats."""
        h, s, light = hsluv.rgb_to_hsluv(self.rgb)
        return h / 360.0, s / 100.0, light / 100.0

    def lerp(self, target, t):
        """Linear interpolate from this color towards target color with factor t in RGBA space."""
        if not isinstance(target, Color):
            target = Color(target)
        return Color(
            self.r + (target.r - self.r) * t,
            self.g + (target.g - self.g) * t,
            self.b + (target.b - self.b) * t,
            self.a + (target.a - self.a) * t,
        )


def parse_color(value):
    """Parse a markup color value into a packed ``0xRRGGBB`` int.

    Accepts the named colors, ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``
    (alpha is discarded), the same with a ``0x`` prefix, and the CSS color
    functions understood by `Color`. Raises ValueError for anything else.
    """
    value = value.strip().lower()
    if value in NAMED_COLORS:
        return NAMED_COLORS[value]
    return Color(value).to_int()


def parse_alpha(value):
    """Parse a ``#XX`` alpha byte into a float between 0 and 1.

    Raises ValueError when the value is not a hex byte.
    """
    digits = value.strip().lstrip("#")
    if not digits or len(digits) > 2:
        raise ValueError(f"Invalid alpha value: '{value}'")
    return int(digits, 16) / 255


def lerp_color_int(a, b, t):
    """Interpolate between two packed ``0xRRGGBB`` colors, rounding per channel."""
    result = 0
    for shift in (16, 8, 0):
        ca = (a >> shift) & 0xFF
        cb = (b >> shift) & 0xFF
        result |= int(ca + (cb - ca) * t + 0.5) << shift
    return result


NAMED_COLORS = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
    "yellow": 0xFFFF00,
    "cyan": 0x00FFFF,
    "magenta": 0xFF00FF,
    "orange": 0xFF8000,
    "purple": 0xA020F0,
    "lightblue": 0xADD8E6,
    "grey": 0x808080,
    "gray": 0x808080,
}
