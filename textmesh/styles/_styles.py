"""
Named style presets for the ``<style>`` tag, and named material presets for
the ``<font material=...>`` and ``<material>`` tags.
"""

import re

from ..utils import Color


class StylePreset:
    """A named style: the markup that ``<style=name>`` and ``</style>`` expand to.

    Parameters
    ----------
    open : str
        The opening markup, e.g. ``"<color=#ff0000><b>"``.
    close : str
        The closing markup, e.g. ``"</b></color>"``.

    """

    __slots__ = ["close", "open"]

    def __init__(self, open="", close=""):
        if not isinstance(open, str) or not isinstance(close, str):
            raise TypeError("Style preset markup must be str.")
        self.open = open
        self.close = close

    def __repr__(self):
        return f"<StylePreset {self.open!r} {self.close!r}>"

    def __eq__(self, other):
        if not isinstance(other, StylePreset):
            return NotImplemented
        return self.open == other.open and self.close == other.close


class StyleSheet:
    """A collection of style presets by name. Names are case insensitive.

    .. code-block:: py

        sheet = StyleSheet.from_dict({
            "warning": {"open": "<color=#ff4400><b>", "close": "</b></color>"},
        })
        parser = RichTextParser(style_sheet=sheet)
        parser.parse("<style=warning>DANGER!</style> Normal text.")

    """

    def __init__(self):
        self._styles = {}

    def __len__(self):
        return len(self._styles)

    def __contains__(self, name):
        return self.has(name)

    def get(self, name):
        """Get a preset by name, or None."""
        return self._styles.get(name.strip().lower())

    def set(self, name, preset):
        """Set a preset. Accepts a `StylePreset`, a dict or an (open, close) tuple."""
        if not isinstance(name, str):
            raise TypeError("Style name must be str.")
        if isinstance(preset, dict):
            preset = StylePreset(preset.get("open", ""), preset.get("close", ""))
        elif isinstance(preset, (tuple, list)):
            preset = StylePreset(*preset)
        elif not isinstance(preset, StylePreset):
            raise TypeError(
                f"Expected a StylePreset, got {preset.__class__.__name__}."
            )
        self._styles[name.strip().lower()] = preset

    def has(self, name):
        return name.strip().lower() in self._styles

    def delete(self, name):
        """Remove a preset. Returns whether it existed."""
        return self._styles.pop(name.strip().lower(), None) is not None

    def clear(self):
        self._styles.clear()

    @classmethod
    def from_dict(cls, data):
        """Create a style sheet from a dict that maps names to presets."""
        sheet = cls()
        for name, preset in data.items():
            sheet.set(name, preset)
        return sheet


def _snake_case(name):
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class Material:
    """A bundle of effect parameters for a signed distance field renderer.

    Materials are referenced by name in markup and carried on the layout
    records; rendering them is up to the renderer. All parameters are keyword
    arguments. Color parameters accept anything that `Color` accepts, and are
    stored as packed ``0xRRGGBB`` ints.
    """

    DEFAULTS = {
        "outline_width": 0.0,
        "outline_color": 0x000000,
        "outline_softness": 0.0,
        "outline_alpha": 1.0,
        "shadow_offset_x": 0.0,
        "shadow_offset_y": 0.0,
        "shadow_color": 0x000000,
        "shadow_dilate": 0.0,
        "shadow_softness": 0.5,
        "shadow_alpha": 0.5,
        "glow_color": 0x000000,
        "glow_offset": 0.0,
        "glow_inner": 0.0,
        "glow_outer": 0.0,
        "glow_power": 1.0,
        "glow_alpha": 1.0,
        "face_dilate": 0.0,
        "bevel_width": 0.0,
        "bevel_offset": 0.5,
        "bevel_color": 0xFFFFFF,
        "bevel_alpha": 1.0,
        "sharpness": 0.0,
    }

    __slots__ = list(DEFAULTS)

    def __init__(self, **kwargs):
        unknown = set(kwargs).difference(self.DEFAULTS)
        if unknown:
            raise TypeError(f"Unknown material parameters: {', '.join(sorted(unknown))}")
        for key, default in self.DEFAULTS.items():
            value = kwargs.get(key, default)
            if key.endswith("_color"):
                value = self._normalize_color(value)
            else:
                value = float(value)
            setattr(self, key, value)

    def __repr__(self):
        changed = [k for k, v in self.DEFAULTS.items() if getattr(self, k) != v]
        return f"<Material {' '.join(changed) or 'default'}>"

    def __eq__(self, other):
        if not isinstance(other, Material):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def _normalize_color(value):
        if isinstance(value, int):
            return value
        if isinstance(value, str) and not value.startswith(("#", "0x")):
            # Bare hex digits, as in "5A3000"
            try:
                return int(value, 16)
            except ValueError:
                pass
        return Color(value).to_int()

    def to_dict(self):
        """Get the parameters as a dict."""
        return {key: getattr(self, key) for key in self.DEFAULTS}

    @classmethod
    def from_dict(cls, data):
        """Create a material from a dict; camelCase keys are accepted too."""
        return cls(**{_snake_case(key): value for key, value in data.items()})


class MaterialRegistry:
    """A collection of materials by name. Names are case insensitive."""

    def __init__(self):
        self._materials = {}

    def __len__(self):
        return len(self._materials)

    def __contains__(self, name):
        return self.has(name)

    def register(self, name, material):
        if not isinstance(name, str):
            raise TypeError("Material name must be str.")
        if isinstance(material, dict):
            material = Material.from_dict(material)
        elif not isinstance(material, Material):
            raise TypeError(
                f"Expected a Material, got {material.__class__.__name__}."
            )
        self._materials[name.lower()] = material

    def unregister(self, name):
        """Remove a material. Returns whether it was registered."""
        return self._materials.pop(name.lower(), None) is not None

    def get(self, name):
        """Get a material by name, or None."""
        return self._materials.get(name.lower())

    def has(self, name):
        return name.lower() in self._materials

    def clear(self):
        self._materials.clear()

    @classmethod
    def from_dict(cls, data):
        """Create a registry from a dict that maps names to material parameters."""
        registry = cls()
        for name, params in data.items():
            registry.register(name, params)
        return registry
