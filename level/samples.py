#!/usr/bin/env python3
"""
level/samples.py
================
Procedurally built levels for the demo and the simulation tests.
"""

from __future__ import annotations

from typing import List

from level.model import Direction, EntityConfig, Layer, LevelData

# Tile IDs used by the demo level (placeholder atlas colours).
GRASS = 1
ROAD = 2
SIDEWALK = 3
TREE = 26
CAR_A = (49, 50)
CAR_B = (51, 52)
CAR_C = (53, 54)
CAR_V_A = (73, 97)
CAR_V_B = (75, 99)


def build_demo_level(width: int = 24, height: int = 16, margin: int = 3) -> LevelData:
    """A one-way clockwise ring road framed by sidewalks.

    The ring is one tile wide, ``margin`` tiles in from the map edge.
    Road cells carry the direction a car must take when leaving them,
    so cars circulate clockwise without ever reaching a dead end.
    Sidewalks run on both sides of the ring and are walkable.
    """
    n = width * height
    ground: List[int] = [GRASS] * n
    objects: List[int] = [0] * n
    drivable: List[int] = [0] * n
    walkable: List[int] = [0] * n

    left, top = margin, margin
    right, bottom = width - 1 - margin, height - 1 - margin

    def idx(x: int, y: int) -> int:
        return y * width + x

    for x in range(left, right + 1):
        for y in range(top, bottom + 1):
            on_ring = x in (left, right) or y in (top, bottom)
            if not on_ring:
                continue
            ground[idx(x, y)] = ROAD
            if y == top and x < right:
                drivable[idx(x, y)] = int(Direction.RIGHT)
            elif x == right and y < bottom:
                drivable[idx(x, y)] = int(Direction.DOWN)
            elif y == bottom and x > left:
                drivable[idx(x, y)] = int(Direction.LEFT)
            else:
                drivable[idx(x, y)] = int(Direction.UP)

    for x in range(left - 1, right + 2):
        for y in range(top - 1, bottom + 2):
            outer = x in (left - 1, right + 1) or y in (top - 1, bottom + 1)
            inner = (left + 1 <= x <= right - 1 and y in (top + 1, bottom - 1)) or \
                    (top + 1 <= y <= bottom - 1 and x in (left + 1, right - 1))
            if (outer or inner) and drivable[idx(x, y)] == 0:
                ground[idx(x, y)] = SIDEWALK
                walkable[idx(x, y)] = 1

    for x, y in ((1, 1), (width - 2, 1), (1, height - 2), (width - 2, height - 2)):
        objects[idx(x, y)] = TREE

    configs = (
        EntityConfig(id=0, type="car", right=list(CAR_A), left=list(reversed(CAR_A)),
                     up=list(CAR_V_A), down=list(reversed(CAR_V_A))),
        EntityConfig(id=1, type="car", right=list(CAR_B), left=list(reversed(CAR_B)),
                     up=list(CAR_V_B), down=list(reversed(CAR_V_B))),
        EntityConfig(id=2, type="car", right=list(CAR_C), left=list(reversed(CAR_C)),
                     up=[0, 0], down=[0, 0]),
        EntityConfig(id=3, type="train", right=[0, 0, 0, 0], left=[0, 0, 0, 0],
                     up=[0, 0, 0, 0], down=[0, 0, 0, 0]),
    )

    return LevelData(
        width=width,
        height=height,
        tile_size=8,
        layers=(Layer("Ground", ground), Layer("Objects", objects)),
        drivable=drivable,
        walkable=walkable,
        entity_configs=configs,
    )
