#!/usr/bin/env python3
"""
level/gateway.py
================
Persistence gateways consumed by the views.

Both gateways expose the same two calls:

* ``fetch()`` → :class:`~level.model.LevelData` (raises
  :class:`~level.store.LevelLoadError`)
* ``save(level)`` → ``bool``

:class:`FileGateway` reads and writes a local JSON file;
:class:`HttpGateway` talks to the save server in :mod:`server.api`.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from config import DATA_ROUTE, HTTP_TIMEOUT_S, SAVE_ROUTE
from level.model import LevelData
from level.store import LevelLoadError, load_level, parse_level, save_level

log = logging.getLogger("level.gateway")


class FileGateway:
    """Gateway over a JSON file on disk."""

    def __init__(self, path: str) -> None:
        self.path = path

    def fetch(self) -> LevelData:
        return load_level(self.path)

    def save(self, level: LevelData) -> bool:
        return save_level(self.path, level)

    def __repr__(self) -> str:
        return f"FileGateway({self.path!r})"


class MemoryGateway:
    """Gateway holding the level in memory (demo runs, tests)."""

    def __init__(self, level: Optional[LevelData] = None) -> None:
        self.level = level
        self.saves = 0

    def fetch(self) -> LevelData:
        if self.level is None:
            raise LevelLoadError("no level stored")
        return self.level

    def save(self, level: LevelData) -> bool:
        self.level = level
        self.saves += 1
        return True


class HttpGateway:
    """Gateway over the HTTP save server.

    Parameters
    ----------
    base_url : str
        Server root, e.g. ``http://127.0.0.1:8000``.
    timeout : float
        Per-request timeout in seconds.
    session : requests.Session or None
        Injected session (tests); a private one is created when *None*.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = HTTP_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self) -> LevelData:
        url = self.base_url + DATA_ROUTE
        try:
            resp = self._session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            log.error("Failed to load map data from %s: %s", url, exc)
            raise LevelLoadError(str(exc)) from exc
        try:
            level = parse_level(resp.text)
        except LevelLoadError as exc:
            log.error("Failed to parse map data from %s: %s", url, exc)
            raise
        log.info("Fetched level from %s (%dx%d)", url, level.width, level.height)
        return level

    def save(self, level: LevelData) -> bool:
        url = self.base_url + SAVE_ROUTE
        try:
            resp = self._session.post(url, json=level.to_dict(), timeout=self.timeout)
        except requests.RequestException:
            log.exception("Save request to %s failed", url)
            return False
        if not resp.ok:
            log.error("Save rejected by %s: HTTP %d", url, resp.status_code)
            return False
        try:
            body = resp.json()
        except ValueError:
            log.error("Save response from %s is not JSON", url)
            return False
        ok = bool(body.get("success")) if isinstance(body, dict) else False
        if not ok:
            log.error("Save reported failure by %s", url)
        return ok

    def __repr__(self) -> str:
        return f"HttpGateway({self.base_url!r})"
