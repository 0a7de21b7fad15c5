#!/usr/bin/env python3
"""
sim/physics.py
==============
Low-level geometry helpers used by :mod:`sim.motion` and :mod:`sim.collision`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

import math
from typing import Tuple


def sign(v: float) -> int:
    """-1, 0 or +1 (``Math.sign`` semantics for finite values)."""
    if v > 0:
        return 1
    if v < 0:
        return -1
    return 0


def pixel_to_cell(x: float, y: float, tile_px: float) -> Tuple[int, int]:
    """Grid cell containing the pixel position *(x, y)*."""
    return math.floor(x / tile_px), math.floor(y / tile_px)


def cell_center(gx: int, gy: int, tile_px: float) -> Tuple[float, float]:
    return gx * tile_px + tile_px / 2, gy * tile_px + tile_px / 2


def step_toward(
    x: float, y: float, tx: float, ty: float, speed: float,
) -> Tuple[float, float, bool]:
    """Advance *(x, y)* by *speed* toward *(tx, ty)*.

    Returns
    -------
    tuple
        ``(new_x, new_y, arrived)``.  When the remaining distance is below
        *speed* the point snaps exactly onto the target and ``arrived`` is
        True; the unused part of the step is dropped.
    """
    dx = tx - x
    dy = ty - y
    dist = math.hypot(dx, dy)
    if dist < speed or dist == 0.0:
        return tx, ty, True
    return x + dx / dist * speed, y + dy / dist * speed, False
