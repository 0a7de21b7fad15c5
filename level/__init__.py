"""
level - Level Data Store
========================

Modules
-------
model
    :class:`LevelData` snapshot, :class:`Direction` codes, archetypes.
atlas
    Tile-ID → atlas rectangle addressing.
store
    Local JSON load / save.
gateway
    File, in-memory and HTTP persistence gateways.
samples
    Procedurally built demo level.
"""

from .model import (
    CARDINALS,
    Direction,
    EntityConfig,
    Layer,
    LevelData,
    LevelDataError,
    blank_level,
    default_entity_configs,
    with_default_configs,
)
from .store import LevelLoadError, load_level, save_level

__all__ = [
    "CARDINALS",
    "Direction",
    "EntityConfig",
    "Layer",
    "LevelData",
    "LevelDataError",
    "LevelLoadError",
    "blank_level",
    "default_entity_configs",
    "load_level",
    "save_level",
    "with_default_configs",
]
