"""
editor - Map editing core
=========================

Modules
-------
session
    :class:`EditorSession` pointer state machine and stroke commits.
brush
    Square brush stamps over a copy-on-write :class:`StrokeBuffer`.
raster
    Bresenham line rasterisation for pointer drags.
tools
    Tool tagged union and the :func:`resolve_write` dispatch point.
"""
