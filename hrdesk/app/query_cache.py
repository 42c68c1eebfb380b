"""Snapshot cache for API resources with explicit invalidation messages.

Pages read resources through :class:`QueryCache`; mutations publish an
:class:`Invalidation` for the resource they touched so the next read
re-fetches. View models never see the cache, only the snapshots it returns.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

LOGGER = logging.getLogger(__name__)

RESOURCE_DASHBOARD_STATS = "dashboard_stats"
RESOURCE_EMPLOYEES = "employees"
RESOURCE_ROLES = "roles"
RESOURCE_DEPARTMENTS = "departments"
RESOURCE_CURRENT_USER = "current_user"
RESOURCE_HOLIDAYS = "holidays"
RESOURCE_LEAVE_TYPES = "leave_types"


@dataclass(frozen=True)
class Invalidation:
    """Message asking every reader of ``resource`` to re-fetch."""

    resource: str


@dataclass(frozen=True)
class Snapshot:
    """Most recently fetched, possibly stale, copy of one resource."""

    resource: str
    data: Any = None
    error: Optional[Exception] = None
    is_loading: bool = False
    fetched_at: Optional[float] = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return not self.is_loading and self.error is None


Loader = Callable[[], Any]
Subscriber = Callable[[Invalidation], None]


class QueryCache:
    """Keeps one snapshot per resource name."""

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._snapshots: Dict[str, Snapshot] = {}
        self._subscribers: List[Subscriber] = []

    def read(self, resource: str, loader: Loader) -> Snapshot:
        """Return the cached snapshot, calling ``loader`` when missing or stale.

        Loader failures are logged and stored on the snapshot's ``error``.
        """
        cached = self._snapshots.get(resource)
        if cached is not None and not cached.stale:
            return cached
        try:
            data = loader()
        except Exception as exc:
            LOGGER.warning("Loading %s failed: %s", resource, exc)
            snapshot = Snapshot(resource=resource, error=exc, fetched_at=self._clock())
        else:
            LOGGER.debug("Loaded %s", resource)
            snapshot = Snapshot(resource=resource, data=data, fetched_at=self._clock())
        self._snapshots[resource] = snapshot
        return snapshot

    def peek(self, resource: str) -> Snapshot:
        """Return the current snapshot without loading anything."""
        cached = self._snapshots.get(resource)
        if cached is None:
            return Snapshot(resource=resource, is_loading=True)
        return cached

    def invalidate(self, resource: str) -> None:
        self.publish(Invalidation(resource))

    def publish(self, message: Invalidation) -> None:
        cached = self._snapshots.get(message.resource)
        if cached is not None:
            self._snapshots[message.resource] = replace(cached, stale=True)
        LOGGER.debug("Invalidated %s", message.resource)
        for callback in list(self._subscribers):
            callback(message)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for invalidations; returns an unsubscribe hook."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def clear(self) -> None:
        self._snapshots.clear()


__all__ = [
    "Invalidation",
    "QueryCache",
    "RESOURCE_CURRENT_USER",
    "RESOURCE_DASHBOARD_STATS",
    "RESOURCE_DEPARTMENTS",
    "RESOURCE_EMPLOYEES",
    "RESOURCE_HOLIDAYS",
    "RESOURCE_LEAVE_TYPES",
    "RESOURCE_ROLES",
    "Snapshot",
]
