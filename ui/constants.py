#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Dict, Sequence

from config import ACTUAL_TILE_SIZE, SCALE

from .types import ColorRGB, ColorRGBA


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    TILE_PX: int = ACTUAL_TILE_SIZE
    SCALE: int = SCALE

    BG_COLOR: ColorRGB = (24, 24, 27)
    VIEWPORT_BG_COLOR: ColorRGB = (16, 16, 18)
    MAP_BG_COLOR: ColorRGB = (0, 0, 0)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    TEXT_COLOR: ColorRGB = (230, 230, 235)
    MUTED_TEXT_COLOR: ColorRGB = (140, 140, 150)
    ACCENT_COLOR: ColorRGB = (59, 130, 246)
    WARNING_COLOR: ColorRGB = (255, 60, 60)
    OK_COLOR: ColorRGB = (0, 255, 127)

    # Simulation debug overlay (15 % alpha)
    DEBUG_DRIVABLE_RGBA: ColorRGBA = (0, 255, 100, 38)
    DEBUG_WALKABLE_RGBA: ColorRGBA = (0, 100, 255, 38)

    # Editor overlays (40 % alpha)
    OVERLAY_ALPHA = 102
    DIRECTION_COLORS: Dict[int, ColorRGB] = {
        1: (0, 255, 100),     # up
        2: (255, 165, 0),     # right
        3: (0, 100, 255),     # down
        4: (255, 0, 100),     # left
    }
    WALKABLE_OVERLAY_RGBA: ColorRGBA = (0, 100, 255, 102)
    WALKABLE_INSET_PX = 4
    GRID_RGBA: ColorRGBA = (255, 255, 255, 26)
    CURSOR_RGBA: ColorRGBA = (255, 255, 255, 60)
    CURSOR_ERASE_RGBA: ColorRGBA = (255, 60, 60, 60)

    PEDESTRIAN_RIM_COLOR: ColorRGB = (255, 255, 255)
    PEDESTRIAN_INNER_RATIO = 0.6

    TOOLBAR_H = 44
    PALETTE_W = 320
    ENTITY_ROW_H = 110
    SCROLL_STEP_PX = ACTUAL_TILE_SIZE * 2

    SIM_KEY_HINTS: Sequence[str] = (
        "E      Editor",
        "F3/D   Debug overlay",
        "R      Respawn",
        "ARROWS Scroll",
        "ESC    Quit",
    )
