"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class MapViewport:
    """Placement of the tile map on screen.

    ``origin`` is the screen pixel of the map's top-left corner before
    scrolling; ``scroll_x`` / ``scroll_y`` shift the map left / up.
    """
    origin_x: int
    origin_y: int
    tile_px: int
    scroll_x: int = 0
    scroll_y: int = 0

    def cell_to_screen(self, gx: int, gy: int) -> Tuple[int, int]:
        return (
            self.origin_x + gx * self.tile_px - self.scroll_x,
            self.origin_y + gy * self.tile_px - self.scroll_y,
        )

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        return (
            self.origin_x + wx - self.scroll_x,
            self.origin_y + wy - self.scroll_y,
        )

    def screen_to_cell(self, sx: int, sy: int) -> Tuple[int, int]:
        """Grid cell under a screen pixel (may lie off the map)."""
        return (
            (sx - self.origin_x + self.scroll_x) // self.tile_px,
            (sy - self.origin_y + self.scroll_y) // self.tile_px,
        )

    def clamp_scroll(self, map_w: int, map_h: int, view_w: int, view_h: int) -> None:
        self.scroll_x = max(0, min(self.scroll_x, max(0, map_w - view_w)))
        self.scroll_y = max(0, min(self.scroll_y, max(0, map_h - view_h)))


@dataclass
class ButtonRect:
    """Stores a button's screen rect and label for click detection."""
    label: str
    x: int
    y: int
    w: int
    h: int
    action: Optional[str] = None
    active: bool = False

    def contains(self, mx: int, my: int) -> bool:
        return self.x <= mx <= self.x + self.w and self.y <= my <= self.y + self.h
