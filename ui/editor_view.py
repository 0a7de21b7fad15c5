#!/usr/bin/env python3
"""
Map editor view.

Toolbar on top, tile palette on the left, map canvas (or the archetype
slot panel while the entities tool is active) on the right.  All edits
go through :class:`~editor.session.EditorSession`; this class only maps
pygame events to grid cells and draws the result.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import pygame

from config import (
    PALETTE_ZOOM_DEFAULT,
    PALETTE_ZOOM_MAX,
    PALETTE_ZOOM_MIN,
    PALETTE_ZOOM_STEP,
    TARGET_FPS,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from editor.session import EditorSession, PointerState
from editor.tools import DrivableTool, EntitiesTool, PaintTool, WalkableTool
from level.model import LevelData
from level.store import LevelLoadError

from .constants import ViewConstants
from .draw_panels import PanelRenderer
from .draw_tiles import TileRenderer
from .helpers import TileAtlas, ViewHelpers, load_atlas
from .hud import HudRenderer
from .types import ButtonRect, MapViewport

log = logging.getLogger("ui.editor")

RESULT_QUIT = "quit"
RESULT_SIMULATION = "simulation"

SAVE_OK_MESSAGE = "Level saved!"
SAVE_FAILED_MESSAGE = "Failed to save."

CANVAS_PAD = 32


class PygameEditorView(
    ViewConstants,
    ViewHelpers,
    TileRenderer,
    PanelRenderer,
    HudRenderer,
):
    """Interactive tile-map editor.

    Parameters
    ----------
    gateway
        Object with ``fetch()`` and ``save(level) -> bool``.
    atlas : TileAtlas or None
        Ready atlas; when *None* it is loaded from *atlas_path*.
    fallback : LevelData or None
        Level to edit when the gateway has no document yet.
    """

    def __init__(
        self,
        gateway,
        atlas: Optional[TileAtlas] = None,
        atlas_path: Optional[str] = None,
        fallback: Optional[LevelData] = None,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        fps: int = TARGET_FPS,
    ):
        self.gateway = gateway
        self.atlas = atlas
        self.atlas_path = atlas_path
        self.fallback = fallback
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None
        self._cell_fill_cache = {}
        self._palette_cache = None

        self.session: Optional[EditorSession] = None
        self.viewport = MapViewport(0, 0, self.TILE_PX)
        self.show_grid = True
        self.show_overlays = True
        self.palette_zoom = PALETTE_ZOOM_DEFAULT
        self.palette_scroll = 0
        self.entity_scroll = 0
        self.mouse_pos: Tuple[int, int] = (0, 0)
        self.notice: Optional[Tuple[str, bool]] = None
        self.buttons: List[ButtonRect] = []
        self.running = False
        self.result = RESULT_QUIT

    # ------------------------------------------------------------------ #
    #  Loading                                                             #
    # ------------------------------------------------------------------ #

    @property
    def level(self) -> Optional[LevelData]:
        return self.session.level if self.session is not None else None

    @property
    def loading(self) -> bool:
        return self.session is None or self.atlas is None

    def load(self) -> bool:
        if self.atlas is None and self.atlas_path:
            self.atlas = load_atlas(self.atlas_path)
        try:
            level = self.gateway.fetch()
        except LevelLoadError as exc:
            if self.fallback is None:
                log.error("Failed to load level data: %s", exc)
                return False
            log.info("No level document yet; starting a blank %dx%d map",
                     self.fallback.width, self.fallback.height)
            level = self.fallback
        self.set_level(level)
        return not self.loading

    def set_level(self, level: LevelData) -> None:
        if self.session is None:
            self.session = EditorSession(level)
        else:
            self.session.replace_level(level)
        self._layout_viewport()

    def canvas_rect(self) -> pygame.Rect:
        return pygame.Rect(
            self.PALETTE_W, self.TOOLBAR_H,
            max(1, self.width - self.PALETTE_W), max(1, self.height - self.TOOLBAR_H),
        )

    def _layout_viewport(self) -> None:
        area = self.canvas_rect()
        map_w, map_h = self._map_pixel_size()
        self.viewport.origin_x = area.x + max(CANVAS_PAD, (area.w - map_w) // 2)
        self.viewport.origin_y = area.y + max(CANVAS_PAD, (area.h - map_h) // 2)
        self.viewport.clamp_scroll(
            map_w + 2 * CANVAS_PAD, map_h + 2 * CANVAS_PAD, area.w, area.h,
        )

    # ------------------------------------------------------------------ #
    #  Toolbar                                                             #
    # ------------------------------------------------------------------ #

    def _toolbar_entries(self) -> List[ButtonRect]:
        session = self.session
        tool = session.tool
        entries = [
            ButtonRect("Paint", 0, 0, 0, 0, "tool:paint", isinstance(tool, PaintTool)),
            ButtonRect("Drivable", 0, 0, 0, 0, "tool:drivable", isinstance(tool, DrivableTool)),
            ButtonRect("Walkable", 0, 0, 0, 0, "tool:walkable", isinstance(tool, WalkableTool)),
            ButtonRect("Entities", 0, 0, 0, 0, "tool:entities", isinstance(tool, EntitiesTool)),
        ]
        if not isinstance(tool, EntitiesTool):
            entries.append(ButtonRect(f"Brush: {session.brush_size}", 0, 0, 0, 0))
        if isinstance(tool, PaintTool):
            entries.append(ButtonRect("Layer:", 0, 0, 0, 0))
            for idx, layer in enumerate(session.committed.layers):
                entries.append(ButtonRect(layer.name, 0, 0, 0, 0, f"layer:{idx}",
                                          tool.layer == idx))
        entries.extend([
            ButtonRect("Grid", 0, 0, 0, 0, "toggle:grid", self.show_grid),
            ButtonRect("Overlays", 0, 0, 0, 0, "toggle:overlays", self.show_overlays),
            ButtonRect("Save", 0, 0, 0, 0, "save"),
        ])
        return entries

    def _status_text(self) -> str:
        session = self.session
        parts = [f"Tile {session.selected_tile}"]
        if isinstance(session.tool, DrivableTool):
            parts.append(f"Dir {session.direction.name}")
        if session.hover is not None:
            parts.append(f"({session.hover[0]}, {session.hover[1]})")
        if session.unsaved:
            parts.append("* unsaved")
        return "  ".join(parts)

    def click_button(self, action: str) -> None:
        session = self.session
        if action == "tool:paint":
            session.select_tool(PaintTool(layer=0))
        elif action == "tool:drivable":
            session.select_tool(DrivableTool())
        elif action == "tool:walkable":
            session.select_tool(WalkableTool())
        elif action == "tool:entities":
            session.select_tool(EntitiesTool())
        elif action.startswith("layer:"):
            session.select_layer(int(action.split(":", 1)[1]))
        elif action == "toggle:grid":
            self.show_grid = not self.show_grid
        elif action == "toggle:overlays":
            self.show_overlays = not self.show_overlays
        elif action == "save":
            self.save()

    def save(self) -> bool:
        ok = self.session.save(self.gateway)
        self.notice = (SAVE_OK_MESSAGE if ok else SAVE_FAILED_MESSAGE, ok)
        return ok

    # ------------------------------------------------------------------ #
    #  Rendering                                                           #
    # ------------------------------------------------------------------ #

    def render(self, surface: pygame.Surface) -> None:
        if self.loading:
            self.draw_loading(surface)
            return
        session = self.session
        level = session.level
        surface.fill(self.BG_COLOR)
        area = self.canvas_rect()

        if isinstance(session.tool, EntitiesTool):
            self.draw_entity_panel(surface, level.entity_configs or (), area, self.mouse_pos)
        else:
            self._draw_canvas(surface, level, area)

        self.draw_palette(surface, session.selected_tile)
        self.buttons = self.layout_toolbar(self._toolbar_entries())
        self.draw_toolbar(surface, self.buttons, self._status_text())
        if self.notice is not None:
            self.draw_notice(surface, *self.notice)

    def _draw_canvas(self, surface: pygame.Surface, level: LevelData, area: pygame.Rect) -> None:
        vp = self.viewport
        session = self.session
        pygame.draw.rect(surface, self.VIEWPORT_BG_COLOR, area)
        previous_clip = surface.get_clip()
        surface.set_clip(area)

        map_w, map_h = self._map_pixel_size()
        map_rect = pygame.Rect(vp.cell_to_screen(0, 0), (map_w, map_h))
        surface.fill((17, 17, 17), map_rect.clip(area))

        self.draw_layers(surface, level, range(len(level.layers)), vp, area)
        if self.show_grid:
            self.draw_grid(surface, level, vp, area)
        if self.show_overlays:
            self.draw_direction_overlay(surface, level, vp, area)
            self.draw_walkable_overlay(surface, level, vp, area)
        preview = session.selected_tile if isinstance(session.tool, PaintTool) else None
        self.draw_cursor(surface, session.cursor_cells(), vp,
                         erase=session.erasing, preview_tile=preview)
        surface.set_clip(previous_clip)

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #

    def _cell_under(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        if not self.canvas_rect().collidepoint(pos):
            return None
        return self.viewport.screen_to_cell(*pos)

    def adjust_palette_zoom(self, direction: int) -> float:
        zoom = self.palette_zoom + PALETTE_ZOOM_STEP * direction
        self.palette_zoom = max(PALETTE_ZOOM_MIN, min(PALETTE_ZOOM_MAX, zoom))
        self.scroll_palette(0)
        return self.palette_zoom

    def _on_mouse_down(self, event: pygame.event.Event) -> None:
        session = self.session
        if event.button not in (1, 3):
            return
        for button in self.buttons:
            if button.action and button.contains(*event.pos):
                if event.button == 1:
                    self.click_button(button.action)
                return
        if event.button == 1:
            tile_id = self.palette_tile_at(*event.pos)
            if tile_id is not None:
                session.select_tile(tile_id)
                return
        if isinstance(session.tool, EntitiesTool):
            if event.button == 1:
                level = session.committed
                slot = self.entity_slot_at(level.entity_configs or (), self.canvas_rect(),
                                           *event.pos)
                if slot is not None:
                    session.set_entity_tile(*slot)
            return
        cell = self._cell_under(event.pos)
        if cell is not None:
            session.pointer_down(cell[0], cell[1], erase=event.button == 3)

    def _on_mouse_motion(self, event: pygame.event.Event) -> None:
        self.mouse_pos = event.pos
        session = self.session
        cell = self._cell_under(event.pos)
        if cell is None:
            if session.hover is not None or session.state is PointerState.DRAWING:
                session.pointer_leave()
            return
        session.pointer_move(*cell)

    def _on_wheel(self, event: pygame.event.Event) -> None:
        ctrl = pygame.key.get_mods() & pygame.KMOD_CTRL
        step = 1 if event.y > 0 else -1
        if self.palette_rect().collidepoint(self.mouse_pos):
            if ctrl:
                self.adjust_palette_zoom(step)
            else:
                self.scroll_palette(-step * self.SCROLL_STEP_PX)
            return
        if ctrl:
            return
        if isinstance(self.session.tool, EntitiesTool):
            self.entity_scroll = max(0, self.entity_scroll - step * self.SCROLL_STEP_PX)
        else:
            self.session.adjust_brush(step)

    def scroll(self, dx: int, dy: int) -> None:
        area = self.canvas_rect()
        map_w, map_h = self._map_pixel_size()
        self.viewport.scroll_x += dx
        self.viewport.scroll_y += dy
        self.viewport.clamp_scroll(
            map_w + 2 * CANVAS_PAD, map_h + 2 * CANVAS_PAD, area.w, area.h,
        )

    def stop(self, result: str = RESULT_QUIT) -> None:
        if self.session is not None:
            self.session.pointer_up()
        self.result = result
        self.running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.stop(RESULT_QUIT)
            return
        if event.type == pygame.VIDEORESIZE:
            self._handle_resize(event.w, event.h)
            return
        if self.loading:
            return
        if self.notice is not None:
            # Blocking notice: swallow input until dismissed.
            if event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN):
                self.notice = None
            return

        if event.type == pygame.MOUSEBUTTONDOWN:
            self._on_mouse_down(event)
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button in (1, 3):
                self.session.pointer_up()
        elif event.type == pygame.MOUSEMOTION:
            self._on_mouse_motion(event)
        elif event.type == pygame.MOUSEWHEEL:
            self._on_wheel(event)
        elif event.type == pygame.WINDOWLEAVE:
            self.session.pointer_leave()
        elif event.type == pygame.KEYDOWN:
            self._on_key(event)

    def _on_key(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_s and event.mod & pygame.KMOD_CTRL:
            self.save()
        elif event.key == pygame.K_ESCAPE:
            self.stop(RESULT_QUIT)
        elif event.key == pygame.K_TAB:
            self.stop(RESULT_SIMULATION)
        elif event.key == pygame.K_g:
            self.show_grid = not self.show_grid
        elif event.key == pygame.K_o:
            self.show_overlays = not self.show_overlays
        elif event.key == pygame.K_LEFT:
            self.scroll(-self.SCROLL_STEP_PX, 0)
        elif event.key == pygame.K_RIGHT:
            self.scroll(self.SCROLL_STEP_PX, 0)
        elif event.key == pygame.K_UP:
            self.scroll(0, -self.SCROLL_STEP_PX)
        elif event.key == pygame.K_DOWN:
            self.scroll(0, self.SCROLL_STEP_PX)

    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(640, new_w)
        self.height = max(400, new_h)
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        if self.session is not None:
            self._layout_viewport()

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #

    def run(self) -> str:
        """Run until quit or simulation switch; returns the exit reason."""
        pygame.init()
        pygame.display.set_caption("CITY EDITOR")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self._init_fonts()

        self.draw_loading(self.screen)
        pygame.display.flip()
        self.load()

        self.running = True
        while self.running:
            self.clock.tick(self.fps)
            for event in pygame.event.get():
                self.handle_event(event)
            self.render(self.screen)
            pygame.display.flip()

        if self.session is not None and self.session.unsaved:
            log.warning("Editor closed with unsaved changes")
        return self.result


def run_editor_view(gateway, **kwargs) -> str:
    view = PygameEditorView(gateway, **kwargs)
    return view.run()
