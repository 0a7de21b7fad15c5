#!/usr/bin/env python3
"""
editor/session.py
=================
Editing state behind the map editor view.

:class:`EditorSession` owns the committed :class:`~level.model.LevelData`
snapshot and the in-flight :class:`~editor.brush.StrokeBuffer`.  The view
feeds it grid-cell pointer events; the session turns them into brush
stamps and commits one snapshot per stroke.

Pointer state machine::

    IDLE --down--> DRAWING --move*--> DRAWING --up / leave--> IDLE
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from config import MAX_BRUSH_SIZE
from level.model import Direction, LevelData, with_default_configs
from editor.brush import StrokeBuffer, apply_brush, apply_line, brush_cells
from editor.tools import EntitiesTool, GridWrite, PaintTool, Tool, resolve_write, tool_label

log = logging.getLogger("editor")

Cell = Tuple[int, int]


class PointerState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"


class EditorSession:
    """Mutable editor state around an immutable level snapshot.

    Parameters
    ----------
    level : LevelData
        Starting snapshot; default archetypes are filled in when the
        document carries none.
    """

    def __init__(self, level: LevelData) -> None:
        self._committed = with_default_configs(level)
        self.tool: Tool = PaintTool(layer=0)
        self.selected_tile: int = 1
        self.brush_size: int = 1
        self.direction: Direction = Direction.UP
        self.hover: Optional[Cell] = None
        self.state = PointerState.IDLE
        self.erasing = False
        self.unsaved = False
        self.strokes_committed = 0
        self._stroke: Optional[StrokeBuffer] = None
        self._last_cell: Optional[Cell] = None

    # ── snapshots ─────────────────────────────────────────────────────────

    @property
    def level(self) -> LevelData:
        """Committed snapshot, or the stroke preview while drawing."""
        if self._stroke is not None:
            return self._stroke.view()
        return self._committed

    @property
    def committed(self) -> LevelData:
        return self._committed

    def replace_level(self, level: LevelData) -> None:
        """Swap in a freshly loaded document, dropping any open stroke."""
        self._abort_stroke()
        self._committed = with_default_configs(level)
        self.unsaved = False
        if isinstance(self.tool, PaintTool) and self.tool.layer >= len(level.layers):
            self.tool = PaintTool(layer=0)

    # ── selection ─────────────────────────────────────────────────────────

    def select_tool(self, tool: Tool) -> None:
        if self.state is PointerState.DRAWING:
            self._finish_stroke()
        self.tool = tool
        log.debug("Tool -> %s", tool_label(tool))

    def select_layer(self, layer: int) -> None:
        if 0 <= layer < len(self._committed.layers):
            self.select_tool(PaintTool(layer=layer))

    def select_tile(self, tile_id: Optional[int]) -> None:
        if tile_id is not None and tile_id > 0:
            self.selected_tile = tile_id

    def adjust_brush(self, delta: int) -> int:
        self.brush_size = max(1, min(MAX_BRUSH_SIZE, self.brush_size + delta))
        return self.brush_size

    # ── pointer input ─────────────────────────────────────────────────────

    def pointer_down(self, gx: int, gy: int, erase: bool = False) -> None:
        if isinstance(self.tool, EntitiesTool):
            return
        self.state = PointerState.DRAWING
        self.erasing = erase
        self._last_cell = None
        self._stroke = StrokeBuffer(self._committed)
        self.pointer_move(gx, gy)

    def pointer_move(self, gx: int, gy: int) -> None:
        self.hover = (gx, gy)
        if self.state is not PointerState.DRAWING or self._stroke is None:
            return
        if not self._committed.in_bounds(gx, gy):
            return

        if self._last_cell is not None:
            lx, ly = self._last_cell
            step = Direction.from_drag(gx - lx, gy - ly)
            if step is not Direction.NONE:
                self.direction = step
            write = self._resolve()
            apply_line(self._stroke, write, lx, ly, gx, gy, self.brush_size)
        else:
            apply_brush(self._stroke, self._resolve(), gx, gy, self.brush_size)
        self._last_cell = (gx, gy)

    def pointer_up(self) -> Optional[LevelData]:
        return self._finish_stroke()

    def pointer_leave(self) -> Optional[LevelData]:
        self.hover = None
        return self._finish_stroke()

    def _resolve(self) -> Optional[GridWrite]:
        return resolve_write(
            self.tool,
            tile_id=self.selected_tile,
            direction=self.direction,
            erase=self.erasing,
        )

    def _finish_stroke(self) -> Optional[LevelData]:
        self.state = PointerState.IDLE
        self.erasing = False
        self._last_cell = None
        stroke, self._stroke = self._stroke, None
        if stroke is None:
            return None
        changed = stroke.changed_cells
        level = stroke.commit()
        if level is not self._committed:
            self._committed = level
            self.unsaved = True
            self.strokes_committed += 1
            log.debug("Committed stroke: %d cell writes, %d arrays cloned",
                      changed, stroke.copies)
        return level

    def _abort_stroke(self) -> None:
        self.state = PointerState.IDLE
        self.erasing = False
        self._last_cell = None
        self._stroke = None

    # ── archetypes ────────────────────────────────────────────────────────

    def set_entity_tile(
        self, config: int, facing: str, part: int, tile_id: Optional[int] = None,
    ) -> LevelData:
        """Write a tile into one archetype slot (selected tile by default).

        Returns the committed snapshot, which is the previous one when the
        slot already holds that tile.
        """
        level = self._committed
        configs = level.entity_configs or ()
        if not 0 <= config < len(configs):
            return level
        value = self.selected_tile if tile_id is None else tile_id
        current = configs[config]
        if not 0 <= part < len(current.sequence(facing)):
            return level
        updated = current.with_tile(facing, part, value)
        if updated is current:
            return level
        new_configs = configs[:config] + (updated,) + configs[config + 1:]
        self._committed = LevelData(
            width=level.width,
            height=level.height,
            tile_size=level.tile_size,
            layers=level.layers,
            drivable=level.drivable,
            walkable=level.walkable,
            entity_configs=new_configs,
        )
        self.unsaved = True
        return self._committed

    # ── cursor ────────────────────────────────────────────────────────────

    def cursor_cells(self) -> List[Cell]:
        """In-bounds cells under the brush at the hover position."""
        if self.hover is None or isinstance(self.tool, EntitiesTool):
            return []
        level = self._committed
        gx, gy = self.hover
        return list(brush_cells(gx, gy, self.brush_size, level.width, level.height))

    # ── persistence ───────────────────────────────────────────────────────

    def save(self, gateway) -> bool:
        """Persist the committed snapshot; edits stay in memory on failure."""
        if self.state is PointerState.DRAWING:
            self._finish_stroke()
        ok = gateway.save(self._committed)
        if ok:
            self.unsaved = False
            log.info("Level saved (%dx%d)", self._committed.width, self._committed.height)
        else:
            log.warning("Level save failed; keeping in-memory edits")
        return ok
