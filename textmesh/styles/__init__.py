"""
Style and material presets.

.. currentmodule:: textmesh.styles

.. autosummary::
    :toctree: styles/

    StylePreset
    StyleSheet
    Material
    MaterialRegistry

"""

# flake8: noqa

from ._styles import StylePreset, StyleSheet, Material, MaterialRegistry
