#!/usr/bin/env python3
"""
sim/collision.py
================
Collision/Yield Controller for vehicles.

A moving car projects a look-ahead point ``lookahead_px`` ahead along the
sign of each heading component.  If any *other* car currently sits
closer than ``block_radius_px`` to that point, the car is blocked for
this tick (hard stop).  Pedestrians never take part.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from sim.physics import sign


def lookahead_point(
    x: float, y: float, vx: int, vy: int, lookahead_px: float,
) -> Tuple[float, float]:
    return x + sign(vx) * lookahead_px, y + sign(vy) * lookahead_px


def is_blocked(
    cars: np.ndarray,
    i: int,
    lookahead_px: float,
    block_radius_px: float,
) -> bool:
    """True when row *i* of *cars* must hold position this tick.

    Positions are read as they are at call time, so cars earlier in the
    iteration order have already moved.
    """
    rec = cars[i]
    vx, vy = int(rec["vx"]), int(rec["vy"])
    if vx == 0 and vy == 0:
        return False
    if len(cars) < 2:
        return False

    px, py = lookahead_point(float(rec["x"]), float(rec["y"]), vx, vy, lookahead_px)
    dist = np.hypot(px - cars["x"], py - cars["y"])
    dist[i] = np.inf
    return bool((dist < block_radius_px).any())


def blocked_mask(
    cars: np.ndarray,
    lookahead_px: float,
    block_radius_px: float,
) -> np.ndarray:
    """Vectorised :func:`is_blocked` for every car at one instant.

    Used by the debug overlay; the tick loop evaluates cars one by one.
    """
    n = len(cars)
    if n == 0:
        return np.zeros(0, dtype=bool)
    sx = np.sign(cars["vx"]).astype(np.float64)
    sy = np.sign(cars["vy"]).astype(np.float64)
    px = cars["x"] + sx * lookahead_px
    py = cars["y"] + sy * lookahead_px
    dist = np.hypot(px[:, None] - cars["x"][None, :], py[:, None] - cars["y"][None, :])
    np.fill_diagonal(dist, np.inf)
    moving = (sx != 0) | (sy != 0)
    return moving & (dist < block_radius_px).any(axis=1)
