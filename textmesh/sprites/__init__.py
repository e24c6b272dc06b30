"""
Inline sprite atlases.

.. currentmodule:: textmesh.sprites

.. autosummary::
    :toctree: sprites/

    SpriteEntry
    SpriteAtlas
    SpriteRegistry

"""

# flake8: noqa

from ._sprites import SpriteEntry, SpriteAtlas, SpriteRegistry
