"""
server - Level persistence API
==============================

Modules
-------
api
    FastAPI application factories :func:`create_app` (used by
    ``main.py serve``) and :func:`get_app` (environment-configured).
"""
