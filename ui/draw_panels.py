#!/usr/bin/env python3
"""Editor side panels: tile palette and archetype slot grid (mixin)."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pygame

from config import TILE_SIZE, TILEMAP_COLS, TILEMAP_ROWS
from level.atlas import sheet_position, tile_id_at
from level.model import FACINGS, EntityConfig

from .helpers import render_text

SlotHit = Tuple[pygame.Rect, int, str, int]

PALETTE_HEADER_H = 28
PALETTE_PAD = 12
SLOT_PX = 40
SLOT_PREVIEW_SCALE = 4


class PanelRenderer:
    """Mixin for the palette sidebar and the entity configuration panel."""

    # ------------------------------------------------------------------ #
    #  Palette                                                             #
    # ------------------------------------------------------------------ #

    def palette_rect(self) -> pygame.Rect:
        return pygame.Rect(0, self.TOOLBAR_H, self.PALETTE_W, self.height - self.TOOLBAR_H)

    def _palette_sheet_origin(self) -> Tuple[int, int]:
        area = self.palette_rect()
        return (
            area.x + PALETTE_PAD,
            area.y + PALETTE_HEADER_H + PALETTE_PAD - self.palette_scroll,
        )

    def palette_tile_at(self, mx: int, my: int) -> Optional[int]:
        """Tile ID under a screen pixel of the palette, if any."""
        area = self.palette_rect()
        if not area.collidepoint(mx, my) or my < area.y + PALETTE_HEADER_H:
            return None
        ox, oy = self._palette_sheet_origin()
        cell = TILE_SIZE * self.palette_zoom
        if mx < ox or my < oy:
            return None
        return tile_id_at(int((mx - ox) // cell), int((my - oy) // cell),
                          TILEMAP_COLS, TILEMAP_ROWS)

    def draw_palette(self, surface: pygame.Surface, selected_tile: int) -> None:
        area = self.palette_rect()
        pygame.draw.rect(surface, self.HUD_BG_COLOR, area)
        pygame.draw.line(surface, self.HUD_BORDER_COLOR, area.topright, area.bottomright)
        if self.font_tiny is not None:
            render_text(surface, self.font_tiny, "PALETTE (CTRL+WHEEL TO ZOOM)",
                        (area.x + 10, area.y + 8), self.MUTED_TEXT_COLOR)
            render_text(surface, self.font_tiny, f"Scale: {self.palette_zoom:g}x",
                        (area.right - 10, area.y + 8), self.TEXT_COLOR, anchor="topright")
        if self.atlas is None:
            return

        zoom = self.palette_zoom
        cached = self._palette_cache
        if cached is None or cached[0] != zoom:
            cached = (zoom, self.atlas.scaled_sheet(zoom))
            self._palette_cache = cached
        sheet = cached[1]

        body = pygame.Rect(area.x, area.y + PALETTE_HEADER_H,
                           area.w - 1, area.h - PALETTE_HEADER_H)
        ox, oy = self._palette_sheet_origin()
        previous_clip = surface.get_clip()
        surface.set_clip(body)
        surface.blit(sheet, (ox, oy))
        pos = sheet_position(selected_tile, TILEMAP_COLS)
        if pos is not None:
            cell = TILE_SIZE * zoom
            col, row = pos
            marker = pygame.Rect(int(ox + col * cell), int(oy + row * cell),
                                 int(cell), int(cell))
            pygame.draw.rect(surface, self.WARNING_COLOR, marker, width=2)
        surface.set_clip(previous_clip)

    def scroll_palette(self, delta_px: int) -> None:
        content = int(TILEMAP_ROWS * TILE_SIZE * self.palette_zoom) + 2 * PALETTE_PAD
        visible = self.palette_rect().h - PALETTE_HEADER_H
        self.palette_scroll = max(0, min(self.palette_scroll + delta_px,
                                         max(0, content - visible)))

    # ------------------------------------------------------------------ #
    #  Entity configuration                                                #
    # ------------------------------------------------------------------ #

    def entity_slot_rects(
        self, configs: Sequence[EntityConfig], area: pygame.Rect,
    ) -> List[SlotHit]:
        """``(rect, config index, facing, part)`` for every archetype slot."""
        hits: List[SlotHit] = []
        column_w = max(1, (area.w - 48) // len(FACINGS))
        y = area.y + 56 - self.entity_scroll
        for idx, config in enumerate(configs):
            slots_y = y + 44
            for col, side in enumerate(FACINGS):
                parts = config.sequence(side)
                row_w = len(parts) * (SLOT_PX + 4) - 4
                x = area.x + 24 + col * column_w + (column_w - row_w) // 2
                for part in range(len(parts)):
                    hits.append((pygame.Rect(x, slots_y, SLOT_PX, SLOT_PX), idx, side, part))
                    x += SLOT_PX + 4
            y += self.ENTITY_ROW_H
        return hits

    def draw_entity_panel(
        self,
        surface: pygame.Surface,
        configs: Sequence[EntityConfig],
        area: pygame.Rect,
        hover: Optional[Tuple[int, int]] = None,
    ) -> None:
        pygame.draw.rect(surface, self.VIEWPORT_BG_COLOR, area)
        previous_clip = surface.get_clip()
        surface.set_clip(area)
        if self.font_title is not None:
            render_text(surface, self.font_title, "Entity Configuration",
                        (area.x + 24, area.y + 16 - self.entity_scroll), self.TEXT_COLOR)

        y = area.y + 56 - self.entity_scroll
        column_w = max(1, (area.w - 48) // len(FACINGS))
        for idx, config in enumerate(configs):
            card = pygame.Rect(area.x + 16, y, area.w - 32, self.ENTITY_ROW_H - 12)
            pygame.draw.rect(surface, self.HUD_BG_COLOR, card, border_radius=8)
            pygame.draw.rect(surface, self.HUD_BORDER_COLOR, card, width=1, border_radius=8)
            if self.font_small is not None:
                badge = (202, 138, 4) if config.type == "train" else (37, 99, 235)
                pygame.draw.circle(surface, badge, (card.x + 20, card.y + 16), 10)
                render_text(surface, self.font_small, str(idx + 1),
                            (card.x + 20, card.y + 16), self.TEXT_COLOR, anchor="center")
                render_text(surface, self.font_small, config.type.upper(),
                            (card.x + 38, card.y + 8), self.TEXT_COLOR)
            if self.font_tiny is not None:
                for col, side in enumerate(FACINGS):
                    render_text(surface, self.font_tiny, side.upper(),
                                (area.x + 24 + col * column_w + column_w // 2, y + 30),
                                self.MUTED_TEXT_COLOR, anchor="center")
            y += self.ENTITY_ROW_H

        for rect, idx, side, part in self.entity_slot_rects(configs, area):
            tile_id = configs[idx].sequence(side)[part]
            pygame.draw.rect(surface, (38, 38, 42), rect, border_radius=4)
            img = self.atlas.tile(tile_id, SLOT_PREVIEW_SCALE) if self.atlas else None
            if img is not None:
                surface.blit(img, img.get_rect(center=rect.center))
            hovered = hover is not None and rect.collidepoint(hover)
            border = (249, 115, 22) if hovered else (82, 82, 91)
            pygame.draw.rect(surface, border, rect, width=1, border_radius=4)
        surface.set_clip(previous_clip)

    def entity_slot_at(
        self, configs: Sequence[EntityConfig], area: pygame.Rect, mx: int, my: int,
    ) -> Optional[Tuple[int, str, int]]:
        if not area.collidepoint(mx, my):
            return None
        for rect, idx, side, part in self.entity_slot_rects(configs, area):
            if rect.collidepoint(mx, my):
                return idx, side, part
        return None
