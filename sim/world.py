#!/usr/bin/env python3
"""
sim/world.py
============
Tile-grid city world.

:class:`CityWorld` owns one :class:`~level.model.LevelData` snapshot, the
car and pedestrian tables, the spawn logic and the per-tick update.
Entities are spawned once per session (and again on :meth:`reset`) and
are never removed; they wander the map indefinitely.
"""

from __future__ import annotations

import colorsys
import logging
import math
import random
from typing import Iterator, List, Optional, Tuple

import numpy as np

from level.model import EntityConfig, LevelData
from sim.collision import is_blocked
from sim.entities import empty_table, entity_row, make_table
from sim.motion import integrate
from sim.policy import SimPolicy

log = logging.getLogger("world")

ColorRGB = Tuple[int, int, int]


def _hsl_color(rng: random.Random, saturation: float, lightness: float) -> ColorRGB:
    r, g, b = colorsys.hls_to_rgb(rng.random(), lightness, saturation)
    return int(r * 255), int(g * 255), int(b * 255)


class CityWorld:
    """Micro-simulation of cars and pedestrians on a tile map.

    Parameters
    ----------
    level : LevelData
        Map snapshot; never mutated by the simulation.
    policy : SimPolicy or None
        Tunable constants; uses defaults when *None*.
    seed : int or None
        Random seed for reproducibility.
    """

    def __init__(
        self,
        level: LevelData,
        policy: Optional[SimPolicy] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.level = level
        self.policy = policy or SimPolicy()
        self._rng = random.Random(seed)
        self.cars: np.ndarray = empty_table()
        self.pedestrians: np.ndarray = empty_table()
        self.blocked_last_tick: int = 0
        self._tick_count: int = 0
        self._spawn()

    # ── initialisation / reset ────────────────────────────────────────────

    def _spawn(self) -> None:
        self.cars = self._spawn_cars()
        self.pedestrians = self._spawn_pedestrians()
        self.blocked_last_tick = 0
        self._tick_count = 0
        log.info(
            "Spawned %d cars and %d pedestrians on %dx%d map",
            len(self.cars), len(self.pedestrians),
            self.level.width, self.level.height,
        )

    def reset(self) -> None:
        """Re-spawn every entity so the session starts over."""
        self._spawn()

    def _spawn_cells(self, mask: List[int], eligible) -> List[Tuple[float, float]]:
        tile = self.policy.tile_px
        width = self.level.width
        return [
            ((i % width) * tile, (i // width) * tile)
            for i, value in enumerate(mask)
            if eligible(value)
        ]

    def _spawn_cars(self) -> np.ndarray:
        configs = self.level.car_configs()
        spawn_points = self._spawn_cells(self.level.drivable, lambda v: v > 0)
        if not configs or not spawn_points:
            return empty_table()

        tile = self.policy.tile_px
        half = tile / 2
        centres: List[Tuple[float, float]] = []
        rows = []
        for idx in range(self.policy.car_spawn_attempts):
            sx, sy = self._rng.choice(spawn_points)
            archetype, _cfg = self._rng.choice(configs)
            too_close = any(
                math.hypot(cx - sx, cy - sy) < self.policy.spawn_min_gap_px
                for cx, cy in centres
            )
            if too_close:
                continue
            speed = self.policy.car_speed_min + self._rng.random() * self.policy.car_speed_span
            centres.append((sx + half, sy + half))
            rows.append(entity_row(
                idx, sx + half, sy + half, speed,
                archetype=archetype,
                color=_hsl_color(self._rng, 0.85, 0.60),
            ))
        return make_table(rows)

    def _spawn_pedestrians(self) -> np.ndarray:
        spawn_points = self._spawn_cells(self.level.walkable, lambda v: v == 1)
        if not spawn_points:
            return empty_table()

        half = self.policy.tile_px / 2
        scatter = self.policy.scatter_px
        rows = []
        for idx in range(self.policy.pedestrian_count):
            sx, sy = self._rng.choice(spawn_points)
            ox = (self._rng.random() - 0.5) * scatter
            oy = (self._rng.random() - 0.5) * scatter
            speed = (self.policy.pedestrian_speed_min
                     + self._rng.random() * self.policy.pedestrian_speed_span)
            rows.append(entity_row(
                self.policy.pedestrian_id_base + idx,
                sx + half + ox, sy + half + oy, speed,
                pedestrian=True,
                color=_hsl_color(self._rng, 0.60, 0.70),
            ))
        return make_table(rows)

    # ── queries ───────────────────────────────────────────────────────────

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def config_for(self, archetype: int) -> Optional[EntityConfig]:
        configs = self.level.entity_configs or ()
        if 0 <= archetype < len(configs):
            return configs[archetype]
        return None

    def iter_cars(self) -> Iterator[Tuple[np.void, Optional[EntityConfig]]]:
        for rec in self.cars:
            yield rec, self.config_for(int(rec["archetype"]))

    # ── tick ──────────────────────────────────────────────────────────────

    def tick(self) -> None:
        """One simulation step: yield checks and integration for cars in
        index order, then integration for pedestrians."""
        self._tick_count += 1
        level = self.level
        policy = self.policy
        lookahead = policy.lookahead_px
        radius = policy.block_radius_px

        blocked = 0
        for i in range(len(self.cars)):
            if is_blocked(self.cars, i, lookahead, radius):
                blocked += 1
                continue
            integrate(self.cars, i, level.drivable, level.width, level.height,
                      self._rng, policy)

        for i in range(len(self.pedestrians)):
            integrate(self.pedestrians, i, level.walkable, level.width, level.height,
                      self._rng, policy)

        self.blocked_last_tick = blocked
        if self._tick_count % 600 == 1:
            log.debug("TICK %d cars=%d peds=%d blocked=%d",
                      self._tick_count, len(self.cars), len(self.pedestrians), blocked)
