"""In-memory persistence backend.

``InMemoryStore`` keeps one ordered dict per table, keyed by primary
key.  Entities are the same Django model classes the ORM backend uses,
kept unsaved; every read hands out a deep copy so callers can only change
stored state through a repository ``save``.

Concurrency model: one process-wide re-entrant lock.  ``atomic()``
holds it for the whole block and snapshots the tables on entry; an
exception restores the snapshot, which gives the same all-or-nothing
behaviour as a database transaction (nested blocks act as savepoints).
"""

from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional
from uuid import UUID

import structlog
from django.utils import timezone

from modules.core.repositories.interfaces import IUnitOfWork

logger = structlog.get_logger(__name__)

TABLES = ("materials", "orders", "order_items", "projects", "status_updates", "users")


def as_uuid(value: Any) -> Optional[UUID]:
    """Coerce *value* to ``UUID``; ``None`` when it is not a valid id."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class InMemoryStore:
    """Process-local tables guarded by a single re-entrant lock."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._tables: Dict[str, Dict[Any, Any]] = {name: {} for name in TABLES}

    # ------------------------------------------------------------------
    # Table access
    # ------------------------------------------------------------------

    def get(self, name: str, key: Any) -> Optional[Any]:
        with self.lock:
            entity = self._tables[name].get(key)
            return copy.deepcopy(entity) if entity is not None else None

    def all(self, name: str) -> List[Any]:
        """Every row of *name* in insertion order (copies)."""
        with self.lock:
            return [copy.deepcopy(row) for row in self._tables[name].values()]

    def put(self, name: str, key: Any, entity: Any) -> Any:
        """Store a copy of *entity*, stamping timestamps like ``auto_now``."""
        now = timezone.now()
        if hasattr(entity, "created_at") and entity.created_at is None:
            entity.created_at = now
        if hasattr(entity, "updated_at"):
            entity.updated_at = now
        with self.lock:
            self._tables[name][key] = copy.deepcopy(entity)
        return entity

    def remove(self, name: str, key: Any) -> bool:
        with self.lock:
            return self._tables[name].pop(key, None) is not None

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Dict[Any, Any]]:
        with self.lock:
            return copy.deepcopy(self._tables)

    def restore(self, snapshot: Dict[str, Dict[Any, Any]]) -> None:
        with self.lock:
            self._tables = snapshot

    def clear(self) -> None:
        with self.lock:
            self._tables = {name: {} for name in TABLES}


class InMemoryUnitOfWork(IUnitOfWork):
    """Lock + snapshot/rollback unit of work over an ``InMemoryStore``.

    Each nesting level keeps its own snapshot and pending ``on_commit``
    callbacks; a committed inner level hands its callbacks to the level
    above, and the outermost level runs them after releasing the lock.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._local = threading.local()

    @property
    def _pending(self) -> List[List[Callable[[], None]]]:
        if not hasattr(self._local, "pending"):
            self._local.pending = []
        return self._local.pending

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._store.lock:
            snapshot = self._store.snapshot()
            self._pending.append([])
            try:
                yield
            except BaseException:
                self._store.restore(snapshot)
                self._pending.pop()
                logger.info("memory_store.rolled_back", depth=len(self._pending))
                raise
            callbacks = self._pending.pop()
            if self._pending:
                self._pending[-1].extend(callbacks)
                callbacks = []
        for callback in callbacks:
            callback()

    def on_commit(self, callback: Callable[[], None]) -> None:
        if self._pending:
            self._pending[-1].append(callback)
        else:
            callback()
