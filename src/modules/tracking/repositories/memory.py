"""In-memory status update log.

Rows are kept in insertion order, so "oldest first" is table order and
the newest row per column is the last one seen.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from modules.core.repositories.memory import InMemoryStore, as_uuid
from modules.tracking.constants import COLUMNS
from modules.tracking.models import StatusUpdate
from modules.tracking.repositories.interfaces import IStatusUpdateRepository


class StatusUpdateMemoryRepository(IStatusUpdateRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def add(self, update: StatusUpdate) -> StatusUpdate:
        return self._store.put("status_updates", update.id, update)

    def for_project(self, project_id: Any) -> List[StatusUpdate]:
        key = as_uuid(project_id)
        rows = [u for u in self._store.all("status_updates") if u.project_id == key]
        # Stable sort keeps insertion order for equal timestamps.
        return sorted(rows, key=lambda u: u.created_at)

    def latest(self, project_id: Any) -> Dict[str, Optional[StatusUpdate]]:
        result: Dict[str, Optional[StatusUpdate]] = {column: None for column in COLUMNS}
        for update in self.for_project(project_id):
            current = result.get(update.status_type)
            if current is None or update.created_at >= current.created_at:
                result[update.status_type] = update
        return result

    def delete_for_project(self, project_id: Any) -> int:
        with self._store.lock:
            rows = self.for_project(project_id)
            for update in rows:
                self._store.remove("status_updates", update.id)
        return len(rows)
