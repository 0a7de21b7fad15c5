#!/usr/bin/env python3
"""Tile layers, grid lines, mask overlays and the brush cursor (mixin)."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

import pygame

from level.model import Direction, LevelData

from .helpers import draw_arrow
from .types import ColorRGBA, MapViewport


class TileRenderer:
    """Mixin that draws everything bound to grid cells."""

    # ------------------------------------------------------------------ #
    #  Visibility                                                          #
    # ------------------------------------------------------------------ #

    def _visible_cells(
        self, level: LevelData, vp: MapViewport, clip: pygame.Rect,
    ) -> Tuple[int, int, int, int]:
        """Half-open cell range ``(x0, x1, y0, y1)`` intersecting *clip*."""
        tile = vp.tile_px
        x0 = max(0, (clip.left - vp.origin_x + vp.scroll_x) // tile)
        y0 = max(0, (clip.top - vp.origin_y + vp.scroll_y) // tile)
        x1 = min(level.width, (clip.right - vp.origin_x + vp.scroll_x) // tile + 1)
        y1 = min(level.height, (clip.bottom - vp.origin_y + vp.scroll_y) // tile + 1)
        return x0, x1, y0, y1

    def _cell_fill(self, rgba: ColorRGBA, inset: int = 0) -> pygame.Surface:
        """Cached translucent tile-sized stamp."""
        cache: Dict[Tuple[ColorRGBA, int], pygame.Surface] = self._cell_fill_cache
        key = (rgba, inset)
        stamp = cache.get(key)
        if stamp is None:
            stamp = pygame.Surface((self.TILE_PX, self.TILE_PX), pygame.SRCALPHA)
            size = self.TILE_PX - 2 * inset
            stamp.fill(rgba, pygame.Rect(inset, inset, size, size))
            cache[key] = stamp
        return stamp

    # ------------------------------------------------------------------ #
    #  Layers                                                              #
    # ------------------------------------------------------------------ #

    def draw_layer(
        self,
        surface: pygame.Surface,
        level: LevelData,
        layer_index: int,
        vp: MapViewport,
        clip: pygame.Rect,
    ) -> None:
        if self.atlas is None or not 0 <= layer_index < len(level.layers):
            return
        data = level.layers[layer_index].data
        width = level.width
        x0, x1, y0, y1 = self._visible_cells(level, vp, clip)
        for gy in range(y0, y1):
            row = gy * width
            for gx in range(x0, x1):
                tile_id = data[row + gx]
                if tile_id == 0:
                    continue
                img = self.atlas.tile(tile_id)
                if img is not None:
                    surface.blit(img, vp.cell_to_screen(gx, gy))

    def draw_layers(
        self,
        surface: pygame.Surface,
        level: LevelData,
        layers: Iterable[int],
        vp: MapViewport,
        clip: pygame.Rect,
    ) -> None:
        for layer_index in layers:
            self.draw_layer(surface, level, layer_index, vp, clip)

    # ------------------------------------------------------------------ #
    #  Simulation debug overlay                                            #
    # ------------------------------------------------------------------ #

    def draw_debug_overlay(
        self,
        surface: pygame.Surface,
        level: LevelData,
        vp: MapViewport,
        clip: pygame.Rect,
    ) -> None:
        drivable = self._cell_fill(self.DEBUG_DRIVABLE_RGBA)
        walkable = self._cell_fill(self.DEBUG_WALKABLE_RGBA)
        x0, x1, y0, y1 = self._visible_cells(level, vp, clip)
        for gy in range(y0, y1):
            for gx in range(x0, x1):
                i = gy * level.width + gx
                pos = vp.cell_to_screen(gx, gy)
                if level.drivable[i]:
                    surface.blit(drivable, pos)
                if level.walkable[i]:
                    surface.blit(walkable, pos)

    # ------------------------------------------------------------------ #
    #  Editor overlays                                                     #
    # ------------------------------------------------------------------ #

    def draw_grid(
        self,
        surface: pygame.Surface,
        level: LevelData,
        vp: MapViewport,
        clip: pygame.Rect,
    ) -> None:
        x0, x1, y0, y1 = self._visible_cells(level, vp, clip)
        lines = pygame.Surface(clip.size, pygame.SRCALPHA)
        ox, oy = clip.topleft
        top = vp.cell_to_screen(0, y0)[1] - oy
        bottom = vp.cell_to_screen(0, y1)[1] - oy
        left = vp.cell_to_screen(x0, 0)[0] - ox
        right = vp.cell_to_screen(x1, 0)[0] - ox
        for gx in range(x0, x1 + 1):
            sx = vp.cell_to_screen(gx, 0)[0] - ox
            pygame.draw.line(lines, self.GRID_RGBA, (sx, top), (sx, bottom))
        for gy in range(y0, y1 + 1):
            sy = vp.cell_to_screen(0, gy)[1] - oy
            pygame.draw.line(lines, self.GRID_RGBA, (left, sy), (right, sy))
        surface.blit(lines, clip.topleft)

    def draw_direction_overlay(
        self,
        surface: pygame.Surface,
        level: LevelData,
        vp: MapViewport,
        clip: pygame.Rect,
    ) -> None:
        """Colour every drivable cell by its direction code, with an arrow."""
        half = self.TILE_PX // 2
        x0, x1, y0, y1 = self._visible_cells(level, vp, clip)
        for gy in range(y0, y1):
            for gx in range(x0, x1):
                code = level.drivable[gy * level.width + gx]
                if code == 0:
                    continue
                r, g, b = self.DIRECTION_COLORS[code]
                sx, sy = vp.cell_to_screen(gx, gy)
                surface.blit(self._cell_fill((r, g, b, self.OVERLAY_ALPHA)), (sx, sy))
                draw_arrow(
                    surface, (255, 255, 255),
                    (sx + half, sy + half), Direction(code).delta, half,
                )

    def draw_walkable_overlay(
        self,
        surface: pygame.Surface,
        level: LevelData,
        vp: MapViewport,
        clip: pygame.Rect,
    ) -> None:
        stamp = self._cell_fill(self.WALKABLE_OVERLAY_RGBA, self.WALKABLE_INSET_PX)
        x0, x1, y0, y1 = self._visible_cells(level, vp, clip)
        for gy in range(y0, y1):
            for gx in range(x0, x1):
                if level.walkable[gy * level.width + gx]:
                    surface.blit(stamp, vp.cell_to_screen(gx, gy))

    def draw_cursor(
        self,
        surface: pygame.Surface,
        cells: Iterable[Tuple[int, int]],
        vp: MapViewport,
        erase: bool = False,
        preview_tile: Optional[int] = None,
    ) -> None:
        """Brush footprint; shows the selected tile when painting."""
        stamp = self._cell_fill(self.CURSOR_ERASE_RGBA if erase else self.CURSOR_RGBA)
        img = None
        if preview_tile and self.atlas is not None and not erase:
            img = self.atlas.tile(preview_tile)
            if img is not None:
                img = img.copy()
                img.set_alpha(150)
        for gx, gy in cells:
            pos = vp.cell_to_screen(gx, gy)
            if img is not None:
                surface.blit(img, pos)
            surface.blit(stamp, pos)
            pygame.draw.rect(
                surface, (255, 255, 255),
                pygame.Rect(pos, (self.TILE_PX, self.TILE_PX)), width=1,
            )
