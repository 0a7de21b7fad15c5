#!/usr/bin/env python3
"""
Headless smoke tests for the Pygame views (SDL dummy video driver).
"""

from __future__ import annotations

import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402

from editor.tools import DrivableTool, EntitiesTool  # noqa: E402
from level.gateway import MemoryGateway  # noqa: E402
from level.model import EntityConfig, blank_level  # noqa: E402
from level.samples import GRASS, build_demo_level  # noqa: E402
from ui.draw_entities import sprite_train, train_origin  # noqa: E402
from ui.editor_view import (  # noqa: E402
    RESULT_SIMULATION,
    SAVE_FAILED_MESSAGE,
    SAVE_OK_MESSAGE,
    PygameEditorView,
)
from ui.helpers import TileAtlas, make_placeholder_atlas  # noqa: E402
from ui.sim_view import RESULT_EDITOR, PygameCityView  # noqa: E402

WIDTH, HEIGHT = 1000, 700


class _RefusingGateway:
    def __init__(self, level) -> None:
        self.level = level

    def fetch(self):
        return self.level

    def save(self, level) -> bool:
        return False


def _key(key: int, mod: int = 0) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod)


def _click(pos, button: int = 1) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos)


def _release(pos, button: int = 1) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEBUTTONUP, button=button, pos=pos)


def _motion(pos) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(1, 0, 0))


class SpriteTrainTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = EntityConfig(id=0, type="car", right=[5, 6], left=[6, 5],
                                   up=[7, 8], down=[0, 0])

    def test_facing_selects_sequence(self) -> None:
        self.assertEqual(sprite_train(self.config, 1, 0), ([5, 6], False))
        self.assertEqual(sprite_train(self.config, -1, 0), ([6, 5], False))
        self.assertEqual(sprite_train(self.config, 0, -1), ([7, 8], True))

    def test_stationary_car_faces_right(self) -> None:
        self.assertEqual(sprite_train(self.config, 0, 0), ([5, 6], False))

    def test_unset_facing_or_archetype_is_not_drawn(self) -> None:
        self.assertEqual(sprite_train(self.config, 0, 1)[0], [])
        self.assertEqual(sprite_train(None, 1, 0)[0], [])

    def test_train_is_centred(self) -> None:
        self.assertEqual(train_origin(100.0, 50.0, 2, False, 24), (76.0, 38.0))
        self.assertEqual(train_origin(100.0, 50.0, 2, True, 24), (88.0, 26.0))


class _PygameCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        pygame.init()
        cls.atlas = TileAtlas(make_placeholder_atlas())

    @classmethod
    def tearDownClass(cls) -> None:
        pygame.quit()

    def setUp(self) -> None:
        self.surface = pygame.Surface((WIDTH, HEIGHT))


class CityViewTests(_PygameCase):
    def _view(self, gateway) -> PygameCityView:
        view = PygameCityView(gateway, atlas=self.atlas, seed=3, width=WIDTH, height=HEIGHT)
        view._init_fonts()
        return view

    def test_missing_data_stays_on_loading_screen(self) -> None:
        view = self._view(MemoryGateway())
        self.assertFalse(view.load())
        self.assertTrue(view.loading)
        view.step(self.surface)
        self.assertEqual(self.surface.get_at((5, 5))[:3], view.BG_COLOR)

    def test_frame_ticks_once(self) -> None:
        view = self._view(MemoryGateway(build_demo_level()))
        self.assertTrue(view.load())
        for _ in range(3):
            view.step(self.surface)
        self.assertEqual(view.world.tick_count, 3)

    def test_hover_reports_ground_tile(self) -> None:
        view = self._view(MemoryGateway(build_demo_level()))
        view.load()
        sx, sy = view.viewport.cell_to_screen(0, 0)
        view.handle_event(_motion((sx + 2, sy + 2)))
        self.assertEqual(view.hovered_tile, GRASS)

    def test_keys(self) -> None:
        view = self._view(MemoryGateway(build_demo_level()))
        view.load()
        view.handle_event(_key(pygame.K_F3))
        self.assertTrue(view.show_debug)
        view.step(self.surface)
        view.handle_event(_key(pygame.K_r))
        self.assertEqual(view.world.tick_count, 0)
        view.running = True
        view.handle_event(_key(pygame.K_e))
        self.assertFalse(view.running)
        self.assertEqual(view.result, RESULT_EDITOR)


class EditorViewTests(_PygameCase):
    def _view(self, gateway, **kwargs) -> PygameEditorView:
        view = PygameEditorView(gateway, atlas=self.atlas, width=WIDTH, height=HEIGHT, **kwargs)
        view._init_fonts()
        return view

    def _cell_pos(self, view, gx: int, gy: int):
        sx, sy = view.viewport.cell_to_screen(gx, gy)
        half = view.TILE_PX // 2
        return sx + half, sy + half

    def test_fallback_level_when_no_document(self) -> None:
        view = self._view(MemoryGateway(), fallback=blank_level(5, 5))
        self.assertTrue(view.load())
        self.assertEqual((view.level.width, view.level.height), (5, 5))

    def test_no_fallback_keeps_loading(self) -> None:
        view = self._view(MemoryGateway())
        self.assertFalse(view.load())
        view.render(self.surface)
        self.assertTrue(view.loading)

    def test_drag_paints_cells(self) -> None:
        view = self._view(MemoryGateway(blank_level(10, 8)))
        view.load()
        view.render(self.surface)
        view.handle_event(_click(self._cell_pos(view, 1, 1)))
        view.handle_event(_motion(self._cell_pos(view, 4, 1)))
        view.handle_event(_release(self._cell_pos(view, 4, 1)))
        level = view.session.committed
        row = [level.layers[0].data[level.index(x, 1)] for x in range(6)]
        self.assertEqual(row, [0, 1, 1, 1, 1, 0])
        view.render(self.surface)

    def test_palette_click_selects_tile(self) -> None:
        view = self._view(MemoryGateway(blank_level(10, 8)))
        view.load()
        view.handle_event(_click((52, 108)))
        self.assertEqual(view.session.selected_tile, 27)

    def test_wheel_changes_brush_over_canvas(self) -> None:
        view = self._view(MemoryGateway(blank_level(10, 8)))
        view.load()
        view.handle_event(_motion(self._cell_pos(view, 2, 2)))
        view.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1))
        self.assertEqual(view.session.brush_size, 2)

    def test_palette_zoom_is_clamped(self) -> None:
        view = self._view(MemoryGateway(blank_level(4, 4)))
        view.load()
        for _ in range(40):
            view.adjust_palette_zoom(1)
        self.assertEqual(view.palette_zoom, 8.0)
        for _ in range(40):
            view.adjust_palette_zoom(-1)
        self.assertEqual(view.palette_zoom, 1.0)

    def test_save_notice_blocks_input(self) -> None:
        gateway = MemoryGateway(blank_level(6, 6))
        view = self._view(gateway)
        view.load()
        view.handle_event(_key(pygame.K_s, pygame.KMOD_CTRL))
        self.assertEqual(view.notice, (SAVE_OK_MESSAGE, True))
        self.assertEqual(gateway.saves, 1)
        view.render(self.surface)
        view.running = True
        view.handle_event(_key(pygame.K_TAB))
        self.assertIsNone(view.notice)
        self.assertTrue(view.running)
        view.handle_event(_key(pygame.K_TAB))
        self.assertFalse(view.running)
        self.assertEqual(view.result, RESULT_SIMULATION)

    def test_failed_save_notice(self) -> None:
        view = self._view(_RefusingGateway(blank_level(6, 6)))
        view.load()
        self.assertFalse(view.save())
        self.assertEqual(view.notice, (SAVE_FAILED_MESSAGE, False))

    def test_entities_panel_assigns_slot(self) -> None:
        view = self._view(MemoryGateway(blank_level(6, 6)))
        view.load()
        view.session.select_tool(EntitiesTool())
        view.session.select_tile(12)
        view.render(self.surface)
        configs = view.session.committed.entity_configs
        rect, idx, side, part = view.entity_slot_rects(configs, view.canvas_rect())[0]
        view.handle_event(_click(rect.center))
        self.assertEqual(view.session.committed.entity_configs[idx].sequence(side)[part], 12)

    def test_overlays_render_for_every_tool(self) -> None:
        view = self._view(MemoryGateway(build_demo_level()))
        view.load()
        view.session.select_tool(DrivableTool())
        view.handle_event(_motion(self._cell_pos(view, 3, 3)))
        view.handle_event(_key(pygame.K_g))
        self.assertFalse(view.show_grid)
        view.render(self.surface)


if __name__ == "__main__":
    unittest.main()
