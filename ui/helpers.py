"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
alpha-surface drawing, text, the scaled tile atlas, and the
:class:`ViewHelpers` mixin (fonts and map sizing).
"""

from __future__ import annotations

import colorsys
import logging
from typing import Dict, Optional, Tuple

import pygame

from config import SCALE, TILE_SIZE, TILEMAP_COLS, TILEMAP_ROWS
from level.atlas import source_rect

log = logging.getLogger("ui")

# ── Alpha drawing helpers ────────────────────────────────────────────────────


def draw_alpha_rect(
    target: pygame.Surface,
    color: Tuple[int, ...],
    rect: pygame.Rect,
    border_radius: int = 0,
) -> None:
    """Draw a semi-transparent rectangle (colour tuple with 4 channels)."""
    tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), border_radius=border_radius)
    target.blit(tmp, rect.topleft)


def draw_arrow(
    target: pygame.Surface,
    color: Tuple[int, ...],
    centre: Tuple[int, int],
    delta: Tuple[int, int],
    size: int,
) -> None:
    """Filled triangle pointing along the grid *delta*."""
    cx, cy = centre
    dx, dy = delta
    half = size // 2
    tip = (cx + dx * half, cy + dy * half)
    # Perpendicular of (dx, dy) is (-dy, dx).
    base_x = cx - dx * half
    base_y = cy - dy * half
    left = (base_x - dy * half, base_y + dx * half)
    right = (base_x + dy * half, base_y - dx * half)
    pygame.draw.polygon(target, color, (tip, left, right))


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect


# ── Tile atlas ───────────────────────────────────────────────────────────────


class TileAtlas:
    """Fixed-column sprite sheet with per-tile scaled surfaces.

    Parameters
    ----------
    sheet : pygame.Surface
        The packed atlas image.
    tile_size : int
        Source tile size in atlas pixels.
    scale : int
        Integer upscale applied when drawing.
    cols : int
        Atlas columns.
    """

    def __init__(
        self,
        sheet: pygame.Surface,
        tile_size: int = TILE_SIZE,
        scale: int = SCALE,
        cols: int = TILEMAP_COLS,
    ) -> None:
        self.sheet = sheet
        self.tile_size = tile_size
        self.scale = scale
        self.cols = cols
        self.rows = sheet.get_height() // tile_size
        self._cache: Dict[Tuple[int, int], Optional[pygame.Surface]] = {}

    @property
    def tile_px(self) -> int:
        return self.tile_size * self.scale

    def tile(self, tile_id: int, scale: Optional[int] = None) -> Optional[pygame.Surface]:
        """Scaled surface of *tile_id*; ``None`` for 0 or IDs off the sheet."""
        scale = self.scale if scale is None else scale
        key = (tile_id, scale)
        if key in self._cache:
            return self._cache[key]
        surf = None
        rect = source_rect(tile_id, self.cols, self.tile_size)
        if rect is not None:
            x, y, w, h = rect
            if x + w <= self.sheet.get_width() and y + h <= self.sheet.get_height():
                sub = self.sheet.subsurface(pygame.Rect(rect))
                surf = pygame.transform.scale(sub, (w * scale, h * scale))
        self._cache[key] = surf
        return surf

    def scaled_sheet(self, zoom: float) -> pygame.Surface:
        """Whole sheet scaled by *zoom* (palette display)."""
        w = max(1, int(self.sheet.get_width() * zoom))
        h = max(1, int(self.sheet.get_height() * zoom))
        return pygame.transform.scale(self.sheet, (w, h))


def make_placeholder_atlas(
    cols: int = TILEMAP_COLS,
    rows: int = TILEMAP_ROWS,
    tile_size: int = TILE_SIZE,
) -> pygame.Surface:
    """Procedural atlas: one flat hue per tile with a darker rim."""
    sheet = pygame.Surface((cols * tile_size, rows * tile_size), pygame.SRCALPHA)
    total = cols * rows
    for idx in range(total):
        col, row = idx % cols, idx // cols
        r, g, b = colorsys.hsv_to_rgb((idx * 0.618) % 1.0, 0.45, 0.55 + 0.35 * (row % 2))
        fill = (int(r * 255), int(g * 255), int(b * 255), 255)
        rim = (fill[0] // 2, fill[1] // 2, fill[2] // 2, 255)
        rect = pygame.Rect(col * tile_size, row * tile_size, tile_size, tile_size)
        sheet.fill(rim, rect)
        sheet.fill(fill, rect.inflate(-2, -2))
    return sheet


def load_atlas(path: str) -> Optional[TileAtlas]:
    """Load the atlas image; logs and returns ``None`` on failure."""
    try:
        sheet = pygame.image.load(path)
    except (pygame.error, FileNotFoundError, OSError) as exc:
        log.error("Failed to load tile atlas %s: %s", path, exc)
        return None
    if pygame.display.get_surface() is not None:
        sheet = sheet.convert_alpha()
    log.info("Loaded tile atlas %s (%dx%d)", path, sheet.get_width(), sheet.get_height())
    return TileAtlas(sheet)


# ── Mixin ────────────────────────────────────────────────────────────────────


class ViewHelpers:
    """Mixin with font loading and map-size helpers."""

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        for name in ("consolas", "menlo", "dejavusansmono", "couriernew"):
            path = pygame.font.match_font(name, bold=bold)
            if path:
                return pygame.font.Font(path, size)
        return pygame.font.Font(None, size + 4)

    def _init_fonts(self) -> None:
        self.font_small = self._load_font(13)
        self.font_tiny = self._load_font(11)
        self.font_title = self._load_font(24, bold=True)

    def _map_pixel_size(self) -> Tuple[int, int]:
        level = self.level
        if level is None:
            return 0, 0
        return level.width * self.TILE_PX, level.height * self.TILE_PX
