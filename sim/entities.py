#!/usr/bin/env python3
"""
sim/entities.py
===============
Dense entity storage.

Cars and pedestrians are rows of a numpy structured array
(:data:`ENTITY_DTYPE`).  Rows are value records updated in place by the
motion engine; an entity is addressed by its row index, never by object
identity.  Runtime only: nothing here is persisted.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

ENTITY_DTYPE = np.dtype([
    ("id", np.int32),
    ("x", np.float64),          # continuous pixel position
    ("y", np.float64),
    ("tx", np.float64),         # target pixel position
    ("ty", np.float64),
    ("vx", np.int8),            # grid-aligned heading, each in {-1, 0, 1}
    ("vy", np.int8),
    ("speed", np.float64),      # pixels per tick
    ("archetype", np.int16),    # index into LevelData.entity_configs, -1 = none
    ("pedestrian", np.bool_),
    ("color", np.uint8, (3,)),
])

NO_ARCHETYPE = -1


def empty_table(n: int = 0) -> np.ndarray:
    table = np.zeros(n, dtype=ENTITY_DTYPE)
    table["archetype"] = NO_ARCHETYPE
    return table


def make_table(rows: Sequence[Tuple]) -> np.ndarray:
    """Build a table from ``ENTITY_DTYPE``-ordered tuples."""
    if not rows:
        return empty_table()
    return np.array(list(rows), dtype=ENTITY_DTYPE)


def entity_row(
    entity_id: int,
    x: float,
    y: float,
    speed: float,
    *,
    target: Optional[Tuple[float, float]] = None,
    heading: Tuple[int, int] = (0, 0),
    archetype: int = NO_ARCHETYPE,
    pedestrian: bool = False,
    color: Tuple[int, int, int] = (255, 255, 255),
) -> Tuple:
    """One ``ENTITY_DTYPE`` tuple; the target defaults to the position."""
    tx, ty = target if target is not None else (x, y)
    return (
        entity_id, x, y, tx, ty, heading[0], heading[1],
        speed, archetype, pedestrian, color,
    )


def facing(vx: float, vy: float) -> str:
    """Sprite facing for a heading: vertical only when |vy| > |vx|."""
    if abs(vy) > abs(vx):
        return "down" if vy > 0 else "up"
    return "left" if vx < 0 else "right"
