#!/usr/bin/env python3
"""
editor/brush.py
===============
Square brush application with copy-on-write snapshots.

A :class:`StrokeBuffer` sits on top of one committed
:class:`~level.model.LevelData`.  The first write that actually changes
a value in an array clones that array once; later writes in the same
stroke mutate the clone.  Arrays the stroke never changes stay shared
with the base snapshot, and a stroke that changes nothing commits the
base snapshot itself.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterator, List, Optional, Tuple

from level.model import Direction, Layer, LevelData
from editor.raster import bresenham_line
from editor.tools import GridWrite, Target, Tool, resolve_write


def brush_cells(
    cx: int, cy: int, size: int, width: int, height: int,
) -> Iterator[Tuple[int, int]]:
    """Cells of a *size*-wide square brush centred on *(cx, cy)*.

    The square starts ``(size - 1) // 2`` cells up-left of the centre;
    cells outside the grid are skipped.
    """
    offset = (size - 1) // 2
    for bx in range(size):
        for by in range(size):
            gx = cx - offset + bx
            gy = cy - offset + by
            if gx < 0 or gx >= width or gy < 0 or gy >= height:
                continue
            yield gx, gy


class StrokeBuffer:
    """Copy-on-write view over a base snapshot for one brush stroke."""

    def __init__(self, base: LevelData) -> None:
        self.base = base
        self._layers: Dict[int, List[int]] = {}
        self._drivable: Optional[List[int]] = None
        self._walkable: Optional[List[int]] = None
        self.copies = 0
        self.changed_cells = 0

    @property
    def dirty(self) -> bool:
        return self.copies > 0

    def _current(self, write: GridWrite) -> List[int]:
        if write.target is Target.LAYER:
            owned = self._layers.get(write.layer)
            return owned if owned is not None else self.base.layers[write.layer].data
        if write.target is Target.DRIVABLE:
            return self._drivable if self._drivable is not None else self.base.drivable
        return self._walkable if self._walkable is not None else self.base.walkable

    def _owned(self, write: GridWrite) -> List[int]:
        if write.target is Target.LAYER:
            if write.layer not in self._layers:
                self._layers[write.layer] = list(self.base.layers[write.layer].data)
                self.copies += 1
            return self._layers[write.layer]
        if write.target is Target.DRIVABLE:
            if self._drivable is None:
                self._drivable = list(self.base.drivable)
                self.copies += 1
            return self._drivable
        if self._walkable is None:
            self._walkable = list(self.base.walkable)
            self.copies += 1
        return self._walkable

    def write(self, write: GridWrite, index: int) -> bool:
        """Store ``write.value`` at *index*; ``False`` when already equal."""
        if self._current(write)[index] == write.value:
            return False
        self._owned(write)[index] = write.value
        self.changed_cells += 1
        return True

    def view(self) -> LevelData:
        """Snapshot aliasing the in-flight arrays (preview while drawing)."""
        if not self.dirty:
            return self.base
        layers = tuple(
            Layer(layer.name, self._layers[i]) if i in self._layers else layer
            for i, layer in enumerate(self.base.layers)
        )
        return replace(
            self.base,
            layers=layers,
            drivable=self._drivable if self._drivable is not None else self.base.drivable,
            walkable=self._walkable if self._walkable is not None else self.base.walkable,
        )

    def commit(self) -> LevelData:
        """Final snapshot of the stroke; the buffer must not be reused."""
        level = self.view()
        self._layers = {}
        self._drivable = None
        self._walkable = None
        self.base = level
        return level


def apply_brush(
    buffer: StrokeBuffer,
    write: Optional[GridWrite],
    cx: int,
    cy: int,
    size: int,
) -> int:
    """Apply one brush stamp; returns how many cells changed."""
    if write is None:
        return 0
    base = buffer.base
    if write.target is Target.LAYER and not 0 <= write.layer < len(base.layers):
        return 0
    changed = 0
    for gx, gy in brush_cells(cx, cy, size, base.width, base.height):
        if buffer.write(write, gy * base.width + gx):
            changed += 1
    return changed


def apply_line(
    buffer: StrokeBuffer,
    write: Optional[GridWrite],
    x0: int, y0: int, x1: int, y1: int,
    size: int,
) -> int:
    """Stamp the brush on every cell of the Bresenham line."""
    changed = 0
    for gx, gy in bresenham_line(x0, y0, x1, y1):
        changed += apply_brush(buffer, write, gx, gy, size)
    return changed


def paint(
    level: LevelData,
    tool: Tool,
    cx: int,
    cy: int,
    *,
    brush_size: int = 1,
    tile_id: int = 1,
    direction: Direction = Direction.UP,
    erase: bool = False,
) -> LevelData:
    """One discrete click as a complete stroke.

    Returns *level* itself when nothing changes.
    """
    buffer = StrokeBuffer(level)
    write = resolve_write(tool, tile_id=tile_id, direction=direction, erase=erase)
    apply_brush(buffer, write, cx, cy, brush_size)
    return buffer.commit()


def paint_line(
    level: LevelData,
    tool: Tool,
    start: Tuple[int, int],
    end: Tuple[int, int],
    *,
    brush_size: int = 1,
    tile_id: int = 1,
    direction: Direction = Direction.UP,
    erase: bool = False,
) -> LevelData:
    buffer = StrokeBuffer(level)
    write = resolve_write(tool, tile_id=tile_id, direction=direction, erase=erase)
    apply_line(buffer, write, start[0], start[1], end[0], end[1], brush_size)
    return buffer.commit()
