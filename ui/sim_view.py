#!/usr/bin/env python3
"""
Simulation view: combines the UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, MapViewport, ButtonRect
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – ViewHelpers mixin, TileAtlas, alpha drawing
    ├── draw_tiles.py      – TileRenderer mixin (layers, overlays, cursor)
    ├── draw_entities.py   – EntityRenderer mixin (car trains, pedestrians)
    ├── draw_panels.py     – PanelRenderer mixin (palette, archetype slots)
    ├── hud.py             – HudRenderer mixin (loading, HUD, toolbar, notice)
    ├── sim_view.py        – PygameCityView (this file – simulation loop)
    └── editor_view.py     – PygameEditorView (map editor loop)

Every frame runs exactly one :meth:`CityWorld.tick` followed by one
render pass.  Draw order: layer 0, cars, pedestrians, layers 1..n,
debug overlay and blocked-car outlines, HUD.
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from config import TARGET_FPS, WINDOW_HEIGHT, WINDOW_WIDTH
from level.model import LevelData
from level.store import LevelLoadError
from sim.policy import SimPolicy
from sim.world import CityWorld

from .constants import ViewConstants
from .draw_entities import EntityRenderer
from .draw_tiles import TileRenderer
from .helpers import TileAtlas, ViewHelpers, load_atlas
from .hud import HudRenderer
from .types import MapViewport

log = logging.getLogger("ui.sim")

RESULT_QUIT = "quit"
RESULT_EDITOR = "editor"


class PygameCityView(
    ViewConstants,
    ViewHelpers,
    TileRenderer,
    EntityRenderer,
    HudRenderer,
):
    """City micro-simulation visualiser powered by Pygame.

    Parameters
    ----------
    gateway
        Object with ``fetch() -> LevelData`` (see :mod:`level.gateway`).
    atlas : TileAtlas or None
        Ready atlas; when *None* it is loaded from *atlas_path*.
    atlas_path : str or None
        Atlas image path used when *atlas* is not given.
    seed : int or None
        Simulation random seed.
    """

    def __init__(
        self,
        gateway,
        atlas: Optional[TileAtlas] = None,
        atlas_path: Optional[str] = None,
        seed: Optional[int] = None,
        policy: Optional[SimPolicy] = None,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        fps: int = TARGET_FPS,
    ):
        self.gateway = gateway
        self.atlas = atlas
        self.atlas_path = atlas_path
        self.seed = seed
        self.policy = policy or SimPolicy(tile_px=float(self.TILE_PX))
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None
        self._cell_fill_cache = {}

        self.level: Optional[LevelData] = None
        self.world: Optional[CityWorld] = None
        self.viewport = MapViewport(0, 0, self.TILE_PX)
        self.show_debug = False
        self.hovered_tile: Optional[int] = None
        self.running = False
        self.result = RESULT_QUIT

    # ------------------------------------------------------------------ #
    #  Loading                                                             #
    # ------------------------------------------------------------------ #

    @property
    def loading(self) -> bool:
        return self.world is None or self.atlas is None

    def load(self) -> bool:
        """Fetch the level and atlas; on failure the view keeps loading."""
        if self.atlas is None and self.atlas_path:
            self.atlas = load_atlas(self.atlas_path)
        try:
            level = self.gateway.fetch()
        except LevelLoadError as exc:
            log.error("City data unavailable: %s", exc)
            return False
        self.set_level(level)
        return not self.loading

    def set_level(self, level: LevelData) -> None:
        self.level = level
        self.world = CityWorld(level, policy=self.policy, seed=self.seed)
        self._layout_viewport()

    def _layout_viewport(self) -> None:
        map_w, map_h = self._map_pixel_size()
        self.viewport.origin_x = max(0, (self.width - map_w) // 2)
        self.viewport.origin_y = max(0, (self.height - map_h) // 2)
        self.viewport.clamp_scroll(map_w, map_h, self.width, self.height)

    # ------------------------------------------------------------------ #
    #  Frame                                                               #
    # ------------------------------------------------------------------ #

    def step(self, surface: pygame.Surface) -> None:
        """One frame: a single simulation tick, then one render pass."""
        if not self.loading:
            self.world.tick()
        self.render(surface)

    def render(self, surface: pygame.Surface) -> None:
        if self.loading:
            self.draw_loading(surface)
            return
        level = self.level
        world = self.world
        vp = self.viewport
        clip = surface.get_rect()

        surface.fill(self.VIEWPORT_BG_COLOR)
        map_w, map_h = self._map_pixel_size()
        map_rect = pygame.Rect(vp.cell_to_screen(0, 0), (map_w, map_h)).clip(clip)
        surface.fill(self.MAP_BG_COLOR, map_rect)

        self.draw_layer(surface, level, 0, vp, clip)
        self.draw_cars(surface, world, vp)
        self.draw_pedestrians(surface, world.pedestrians, vp)
        self.draw_layers(surface, level, range(1, len(level.layers)), vp, clip)
        if self.show_debug:
            self.draw_debug_overlay(surface, level, vp, clip)
            self.draw_blocked_markers(surface, world, vp)

        self.draw_sim_hud(
            surface, self.hovered_tile,
            len(world.cars), len(world.pedestrians), world.blocked_last_tick,
            self.show_debug,
        )

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #

    def update_hover(self, mx: int, my: int) -> None:
        if self.level is None:
            return
        gx, gy = self.viewport.screen_to_cell(mx, my)
        level = self.level
        if level.in_bounds(gx, gy) and level.layers:
            self.hovered_tile = level.layers[0].data[level.index(gx, gy)]

    def scroll(self, dx: int, dy: int) -> None:
        self.viewport.scroll_x += dx
        self.viewport.scroll_y += dy
        map_w, map_h = self._map_pixel_size()
        self.viewport.clamp_scroll(map_w, map_h, self.width, self.height)

    def stop(self, result: str = RESULT_QUIT) -> None:
        """Detach the frame loop; the in-flight frame still completes."""
        self.result = result
        self.running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.stop(RESULT_QUIT)
        elif event.type == pygame.VIDEORESIZE:
            self._handle_resize(event.w, event.h)
        elif event.type == pygame.MOUSEMOTION:
            self.update_hover(*event.pos)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.stop(RESULT_QUIT)
            elif event.key == pygame.K_e:
                self.stop(RESULT_EDITOR)
            elif event.key in (pygame.K_F3, pygame.K_d):
                self.show_debug = not self.show_debug
            elif event.key == pygame.K_r and self.world is not None:
                self.world.reset()
            elif event.key == pygame.K_LEFT:
                self.scroll(-self.SCROLL_STEP_PX, 0)
            elif event.key == pygame.K_RIGHT:
                self.scroll(self.SCROLL_STEP_PX, 0)
            elif event.key == pygame.K_UP:
                self.scroll(0, -self.SCROLL_STEP_PX)
            elif event.key == pygame.K_DOWN:
                self.scroll(0, self.SCROLL_STEP_PX)

    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(400, new_w)
        self.height = max(300, new_h)
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self._layout_viewport()

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #

    def run(self) -> str:
        """Run until quit or editor switch; returns ``"quit"`` / ``"editor"``."""
        pygame.init()
        pygame.display.set_caption("TILE CITY")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self._init_fonts()

        # First frame shows the loading screen while data is fetched.
        self.draw_loading(self.screen)
        pygame.display.flip()
        self.load()

        self.running = True
        while self.running:
            self.clock.tick(self.fps)
            for event in pygame.event.get():
                self.handle_event(event)
            self.step(self.screen)
            pygame.display.flip()

        log.info("Simulation view closed (%s)", self.result)
        return self.result


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_city_view(gateway, **kwargs) -> str:
    view = PygameCityView(gateway, **kwargs)
    return view.run()
