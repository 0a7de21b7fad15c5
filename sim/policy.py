#!/usr/bin/env python3
"""
sim/policy.py
=============
Tunable spawn, motion and yield parameters for the city simulation.
Every constant lives in the frozen :class:`SimPolicy` dataclass so that
experiments can swap policies without touching code.
"""

from __future__ import annotations

from dataclasses import dataclass

from config import (
    ACTUAL_TILE_SIZE,
    CAR_SPAWN_ATTEMPTS,
    PEDESTRIAN_COUNT,
    PEDESTRIAN_ID_BASE,
)


@dataclass(frozen=True)
class SimPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: geometry, spawn envelope, speeds, yield controller,
    pedestrian scatter.  Distances are in rendered pixels or in tiles
    (``*_tiles``); speeds in pixels per tick.
    """

    # ── Geometry ──────────────────────────────────────────────────────────
    tile_px: float = float(ACTUAL_TILE_SIZE)
    """Rendered size of one tile in pixels."""

    # ── Spawn envelope ────────────────────────────────────────────────────
    car_spawn_attempts: int = CAR_SPAWN_ATTEMPTS
    """Spawn attempts for cars; crowded attempts are skipped, not retried."""

    spawn_min_gap_tiles: float = 1.0
    """A car spawn is skipped when another car's tile is closer than this."""

    pedestrian_count: int = PEDESTRIAN_COUNT
    """Pedestrians spawned per session."""

    pedestrian_id_base: int = PEDESTRIAN_ID_BASE
    """First pedestrian ID; cars use 0..attempts-1."""

    # ── Speeds (px / tick) ────────────────────────────────────────────────
    car_speed_min: float = 0.5
    car_speed_span: float = 1.5
    pedestrian_speed_min: float = 0.2
    pedestrian_speed_span: float = 0.3

    # ── Yield controller ──────────────────────────────────────────────────
    lookahead_tiles: float = 1.5
    """Distance of the look-ahead point in front of a moving car."""

    block_radius_tiles: float = 1.0
    """Another car closer than this to the look-ahead point blocks."""

    # ── Pedestrian scatter ────────────────────────────────────────────────
    scatter_tiles: float = 0.5
    """Width of the uniform offset window around a pedestrian target."""

    @property
    def lookahead_px(self) -> float:
        return self.tile_px * self.lookahead_tiles

    @property
    def block_radius_px(self) -> float:
        return self.tile_px * self.block_radius_tiles

    @property
    def scatter_px(self) -> float:
        return self.tile_px * self.scatter_tiles

    @property
    def spawn_min_gap_px(self) -> float:
        return self.tile_px * self.spawn_min_gap_tiles
