#!/usr/bin/env python3
"""
sim/motion.py
=============
Entity Motion Engine: per-tick integration and tile-boundary decisions.

An entity is either TRAVELLING (interpolating toward its target) or has
ARRIVED (within one speed step of it).  Arrival snaps the entity onto the
target and immediately runs :func:`decide` in the same tick.

Decision rules
--------------
* Candidates are the four orthogonal moves in the fixed order
  up, right, down, left.
* A car on a tile with code 1–4 only considers that one direction.
* Candidates must stay in bounds and land on a tile whose mask value is
  nonzero (``drivable`` for cars, ``walkable`` for pedestrians).
* No candidate → the entity stalls on its tile and retries next tick.
* Pedestrians and freshly spawned cars pick uniformly at random.  Moving
  cars avoid the reversing move unless it is the only one left.
"""

from __future__ import annotations

import random
from typing import List, Sequence

import numpy as np

from level.model import CARDINALS, Direction
from sim.physics import cell_center, pixel_to_cell, sign, step_toward
from sim.policy import SimPolicy


def candidate_moves(
    mask: Sequence[int],
    width: int,
    height: int,
    gx: int,
    gy: int,
    is_pedestrian: bool,
) -> List[Direction]:
    """Valid moves out of cell *(gx, gy)*, in enumeration order."""
    moves: Sequence[Direction] = CARDINALS
    if 0 <= gx < width and 0 <= gy < height:
        code = mask[gy * width + gx]
        if not is_pedestrian and 1 <= code <= 4:
            moves = (Direction(code),)

    valid: List[Direction] = []
    for move in moves:
        dx, dy = move.delta
        nx, ny = gx + dx, gy + dy
        if nx < 0 or nx >= width or ny < 0 or ny >= height:
            continue
        if mask[ny * width + nx] > 0:
            valid.append(move)
    return valid


def choose_move(
    moves: Sequence[Direction],
    vx: int,
    vy: int,
    is_pedestrian: bool,
    rng: random.Random,
) -> Direction:
    """Pick one of the non-empty *moves* for an entity heading *(vx, vy)*."""
    if is_pedestrian or (vx == 0 and vy == 0):
        return rng.choice(list(moves))

    reverse = (-sign(vx), -sign(vy))
    forward = [m for m in moves if m.delta != reverse]
    if forward:
        return rng.choice(forward)
    return moves[0]


def decide(
    table: np.ndarray,
    i: int,
    mask: Sequence[int],
    width: int,
    height: int,
    rng: random.Random,
    policy: SimPolicy,
) -> bool:
    """Set a new target for row *i*; ``False`` when the entity stalls."""
    rec = table[i]
    tile = policy.tile_px
    is_ped = bool(rec["pedestrian"])
    gx, gy = pixel_to_cell(float(rec["x"]), float(rec["y"]), tile)

    moves = candidate_moves(mask, width, height, gx, gy, is_ped)
    if not moves:
        rec["tx"] = rec["x"]
        rec["ty"] = rec["y"]
        return False

    move = choose_move(moves, int(rec["vx"]), int(rec["vy"]), is_ped, rng)
    dx, dy = move.delta
    tx, ty = cell_center(gx + dx, gy + dy, tile)
    if is_ped:
        tx += (rng.random() - 0.5) * policy.scatter_px
        ty += (rng.random() - 0.5) * policy.scatter_px
    rec["tx"] = tx
    rec["ty"] = ty
    rec["vx"] = dx
    rec["vy"] = dy
    return True


def integrate(
    table: np.ndarray,
    i: int,
    mask: Sequence[int],
    width: int,
    height: int,
    rng: random.Random,
    policy: SimPolicy,
) -> bool:
    """Advance row *i* by one tick; ``True`` when it arrived this tick."""
    rec = table[i]
    x, y, arrived = step_toward(
        float(rec["x"]), float(rec["y"]),
        float(rec["tx"]), float(rec["ty"]),
        float(rec["speed"]),
    )
    rec["x"] = x
    rec["y"] = y
    if arrived:
        decide(table, i, mask, width, height, rng, policy)
    return arrived
