#!/usr/bin/env python3
"""
level/atlas.py
==============
Sprite addressing into the fixed-column tile atlas.

Tile ID ``0`` is reserved for "absent" on every layer and mask; tile ID
``t > 0`` lives at sheet index ``t - 1``.  Pure functions only, so the
editor, the simulation renderer and the tests share one definition.
"""

from __future__ import annotations

from typing import Optional, Tuple

from config import TILE_SIZE, TILEMAP_COLS, TILEMAP_ROWS

Rect = Tuple[int, int, int, int]


def sheet_position(tile_id: int, cols: int = TILEMAP_COLS) -> Optional[Tuple[int, int]]:
    """``(column, row)`` of *tile_id* in the atlas, or ``None`` for tile 0."""
    if tile_id <= 0:
        return None
    sheet_index = tile_id - 1
    return sheet_index % cols, sheet_index // cols


def source_rect(
    tile_id: int,
    cols: int = TILEMAP_COLS,
    tile_size: int = TILE_SIZE,
) -> Optional[Rect]:
    """Source rectangle ``(x, y, w, h)`` of *tile_id* in atlas pixels."""
    pos = sheet_position(tile_id, cols)
    if pos is None:
        return None
    column, row = pos
    return column * tile_size, row * tile_size, tile_size, tile_size


def tile_id_at(
    column: int,
    row: int,
    cols: int = TILEMAP_COLS,
    rows: int = TILEMAP_ROWS,
) -> Optional[int]:
    """Tile ID under a palette cell, or ``None`` outside the atlas."""
    if not (0 <= column < cols and 0 <= row < rows):
        return None
    return row * cols + column + 1


def cell_origin(index: int, width: int, tile_px: int) -> Tuple[int, int]:
    """Top-left pixel of grid cell *index* on a map *width* tiles wide."""
    return (index % width) * tile_px, (index // width) * tile_px
