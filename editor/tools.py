#!/usr/bin/env python3
"""
editor/tools.py
===============
Editor tools as a closed tagged union.

Each tool names a distinct write target:

* :class:`PaintTool`: tile ID into one layer
* :class:`DrivableTool`: direction code 1–4 into the drivable mask
* :class:`WalkableTool`: 1 into the walkable mask
* :class:`EntitiesTool`: archetype sprite slots (never the grid)

:func:`resolve_write` is the single dispatch point turning a tool plus
the editor state into the concrete :class:`GridWrite` for one cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from level.model import Direction


@dataclass(frozen=True)
class PaintTool:
    layer: int = 0


@dataclass(frozen=True)
class DrivableTool:
    pass


@dataclass(frozen=True)
class WalkableTool:
    pass


@dataclass(frozen=True)
class EntitiesTool:
    pass


Tool = Union[PaintTool, DrivableTool, WalkableTool, EntitiesTool]


class Target(Enum):
    LAYER = "layer"
    DRIVABLE = "drivable"
    WALKABLE = "walkable"


@dataclass(frozen=True)
class GridWrite:
    """Value to store in every brushed cell of one array."""

    target: Target
    value: int
    layer: int = 0


def resolve_write(
    tool: Tool,
    *,
    tile_id: int,
    direction: Direction,
    erase: bool,
) -> Optional[GridWrite]:
    """Grid write performed by *tool*, or ``None`` for grid-less tools.

    Erasing always writes the tool's empty value ``0``.
    """
    if isinstance(tool, PaintTool):
        return GridWrite(Target.LAYER, 0 if erase else tile_id, tool.layer)
    if isinstance(tool, DrivableTool):
        return GridWrite(Target.DRIVABLE, 0 if erase else int(direction))
    if isinstance(tool, WalkableTool):
        return GridWrite(Target.WALKABLE, 0 if erase else 1)
    if isinstance(tool, EntitiesTool):
        return None
    raise TypeError(f"unknown editor tool: {tool!r}")


def tool_label(tool: Tool) -> str:
    if isinstance(tool, PaintTool):
        return "Paint"
    if isinstance(tool, DrivableTool):
        return "Drivable"
    if isinstance(tool, WalkableTool):
        return "Walkable"
    if isinstance(tool, EntitiesTool):
        return "Entities"
    raise TypeError(f"unknown editor tool: {tool!r}")
