#!/usr/bin/env python3
"""Car sprite trains and pedestrian discs (mixin)."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pygame

from level.model import EntityConfig
from sim.collision import blocked_mask
from sim.entities import facing

from .types import MapViewport


def sprite_train(
    config: Optional[EntityConfig],
    vx: float,
    vy: float,
) -> Tuple[List[int], bool]:
    """Tile sequence for a heading and whether it stacks vertically.

    An empty list means the car is not drawn (no archetype, or every slot
    of that facing is still 0).
    """
    side = facing(vx, vy)
    vertical = side in ("up", "down")
    if config is None:
        return [], vertical
    tiles = list(config.sequence(side))
    if all(t == 0 for t in tiles):
        return [], vertical
    return tiles, vertical


def train_origin(
    x: float, y: float, count: int, vertical: bool, tile_px: int,
) -> Tuple[float, float]:
    """Top-left pixel of a *count*-tile train centred on *(x, y)*."""
    total = count * tile_px
    if vertical:
        return x - tile_px / 2, y - total / 2
    return x - total / 2, y - tile_px / 2


class EntityRenderer:
    """Mixin that draws the simulation's moving entities."""

    def draw_cars(self, surface: pygame.Surface, world, vp: MapViewport) -> None:
        if self.atlas is None:
            return
        tile_px = self.TILE_PX
        for rec, config in world.iter_cars():
            tiles, vertical = sprite_train(config, int(rec["vx"]), int(rec["vy"]))
            if not tiles:
                continue
            wx, wy = vp.world_to_screen(float(rec["x"]), float(rec["y"]))
            sx, sy = train_origin(wx, wy, len(tiles), vertical, tile_px)
            for idx, tile_id in enumerate(tiles):
                if tile_id == 0:
                    continue
                img = self.atlas.tile(tile_id)
                if img is None:
                    continue
                if vertical:
                    surface.blit(img, (int(sx), int(sy + idx * tile_px)))
                else:
                    surface.blit(img, (int(sx + idx * tile_px), int(sy)))

    def draw_pedestrians(
        self, surface: pygame.Surface, pedestrians: np.ndarray, vp: MapViewport,
    ) -> None:
        outer = self.SCALE
        inner = max(1, round(self.SCALE * self.PEDESTRIAN_INNER_RATIO))
        for rec in pedestrians:
            wx, wy = vp.world_to_screen(float(rec["x"]), float(rec["y"]))
            centre = (int(wx), int(wy))
            pygame.draw.circle(surface, self.PEDESTRIAN_RIM_COLOR, centre, outer)
            r, g, b = (int(c) for c in rec["color"])
            pygame.draw.circle(surface, (r, g, b), centre, inner)

    def draw_blocked_markers(self, surface: pygame.Surface, world, vp: MapViewport) -> None:
        """Outline every car that is yielding at this instant (debug view)."""
        policy = world.policy
        mask = blocked_mask(world.cars, policy.lookahead_px, policy.block_radius_px)
        tile_px = self.TILE_PX
        half = tile_px // 2
        for rec, blocked in zip(world.cars, mask):
            if not blocked:
                continue
            wx, wy = vp.world_to_screen(float(rec["x"]), float(rec["y"]))
            rect = pygame.Rect(int(wx) - half, int(wy) - half, tile_px, tile_px)
            pygame.draw.rect(surface, self.WARNING_COLOR, rect, width=1)
