#!/usr/bin/env python3
"""Loading screen, simulation HUD, editor toolbar and notice banner (mixin)."""

from __future__ import annotations

from typing import List, Optional, Sequence

import pygame

from .helpers import draw_alpha_rect, render_text
from .types import ButtonRect


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Loading screen                                                      #
    # ------------------------------------------------------------------ #

    def draw_loading(self, surface: pygame.Surface) -> None:
        surface.fill(self.BG_COLOR)
        if self.font_small is None:
            return
        render_text(
            surface, self.font_small, "Loading City Data...",
            (self.width // 2, self.height // 2),
            self.MUTED_TEXT_COLOR, anchor="center",
        )

    # ------------------------------------------------------------------ #
    #  Simulation HUD                                                      #
    # ------------------------------------------------------------------ #

    def draw_sim_hud(
        self,
        surface: pygame.Surface,
        hovered_tile: Optional[int],
        cars: int,
        pedestrians: int,
        blocked: int,
        show_debug: bool,
    ) -> None:
        if self.font_tiny is None:
            return
        chips = [
            f"Tile ID: {hovered_tile if hovered_tile is not None else '-'}",
            f"Cars {cars}  Peds {pedestrians}  Blocked {blocked}",
            "Debug ON" if show_debug else "Debug OFF",
        ]
        x = self.width - 16
        for text in reversed(chips):
            img = self.font_tiny.render(text, True, self.TEXT_COLOR)
            rect = img.get_rect(topright=(x, 16)).inflate(16, 10)
            rect.topright = (x, 12)
            draw_alpha_rect(surface, (*self.HUD_BG_COLOR, 230), rect, border_radius=6)
            pygame.draw.rect(surface, self.HUD_BORDER_COLOR, rect, width=1, border_radius=6)
            surface.blit(img, img.get_rect(center=rect.center))
            x = rect.left - 8

        if show_debug:
            self._draw_fps(surface)

    def _draw_fps(self, surface: pygame.Surface) -> None:
        fps = self.clock.get_fps() if self.clock else 0.0
        lines = [f"FPS  {fps:.1f}", f"TICK {self.world.tick_count}" if self.world else "TICK -"]
        lines.extend(self.SIM_KEY_HINTS)
        y = 16
        for line in lines:
            render_text(surface, self.font_tiny, line, (16, y), self.OK_COLOR)
            y += 14

    # ------------------------------------------------------------------ #
    #  Editor toolbar                                                      #
    # ------------------------------------------------------------------ #

    def draw_toolbar(
        self,
        surface: pygame.Surface,
        buttons: Sequence[ButtonRect],
        status: str,
    ) -> None:
        bar = pygame.Rect(0, 0, self.width, self.TOOLBAR_H)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, bar)
        pygame.draw.line(surface, self.HUD_BORDER_COLOR, bar.bottomleft, bar.bottomright)
        if self.font_small is None:
            return
        for button in buttons:
            rect = pygame.Rect(button.x, button.y, button.w, button.h)
            if button.action is None:
                render_text(surface, self.font_small, button.label, rect.center,
                            self.MUTED_TEXT_COLOR, anchor="center")
                continue
            fill = self.ACCENT_COLOR if button.active else (38, 38, 42)
            pygame.draw.rect(surface, fill, rect, border_radius=5)
            render_text(surface, self.font_small, button.label, rect.center,
                        self.TEXT_COLOR, anchor="center")
        if status and self.font_tiny is not None:
            render_text(surface, self.font_tiny, status,
                        (self.width - 12, self.TOOLBAR_H // 2),
                        self.MUTED_TEXT_COLOR, anchor="midright")

    def layout_toolbar(self, entries: Sequence[ButtonRect]) -> List[ButtonRect]:
        """Place toolbar entries left to right; sizes follow the label text."""
        x = 12
        placed: List[ButtonRect] = []
        for entry in entries:
            text_w = self.font_small.size(entry.label)[0] if self.font_small else 8 * len(entry.label)
            w = text_w + 18
            placed.append(ButtonRect(entry.label, x, 8, w, self.TOOLBAR_H - 16,
                                     action=entry.action, active=entry.active))
            x += w + 6
        return placed

    # ------------------------------------------------------------------ #
    #  Blocking notice                                                     #
    # ------------------------------------------------------------------ #

    def draw_notice(self, surface: pygame.Surface, message: str, ok: bool) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        surface.blit(overlay, (0, 0))
        if self.font_title is None or self.font_tiny is None:
            return
        box = pygame.Rect(0, 0, 360, 120)
        box.center = (self.width // 2, self.height // 2)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, box, border_radius=8)
        pygame.draw.rect(
            surface, self.OK_COLOR if ok else self.WARNING_COLOR, box, width=2, border_radius=8,
        )
        render_text(surface, self.font_title, message,
                    (box.centerx, box.centery - 14), self.TEXT_COLOR, anchor="center")
        render_text(surface, self.font_tiny, "Press any key or click to continue",
                    (box.centerx, box.bottom - 22), self.MUTED_TEXT_COLOR, anchor="center")
