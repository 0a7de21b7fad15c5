"""
sim - Simulation core
=====================

Modules
-------
world
    :class:`CityWorld` entity manager, spawn logic and tick loop.
motion
    Per-entity integration and tile-boundary decision step.
collision
    Look-ahead yield check between cars.
entities
    Dense numpy record storage for cars and pedestrians.
policy
    :class:`SimPolicy` tunable constants.
physics
    Low-level geometry helpers.
"""
