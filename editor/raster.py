#!/usr/bin/env python3
"""Integer Bresenham rasterisation of pointer drags between grid cells."""

from __future__ import annotations

from typing import List, Tuple

Cell = Tuple[int, int]


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Cell]:
    """Every cell from *(x0, y0)* to *(x1, y1)*, both ends included.

    Consecutive cells are 8-connected, so a fast drag leaves no gaps.
    """
    cells: List[Cell] = []
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    while True:
        cells.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
    return cells
