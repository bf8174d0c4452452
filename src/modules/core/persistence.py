"""Persistence backend selection.

``PERSISTENCE_BACKEND`` (``django`` or ``memory``) is read once; the
resulting bundle of repositories and unit of work is cached for the
life of the process.  There is no runtime failover between backends.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

import structlog
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from modules.accounts.repositories.interfaces import IUserRepository
from modules.core.repositories.interfaces import IUnitOfWork
from modules.materials.repositories.interfaces import IMaterialRepository
from modules.orders.repositories.interfaces import IOrderRepository
from modules.projects.repositories.interfaces import IProjectRepository
from modules.tracking.repositories.interfaces import IStatusUpdateRepository

logger = structlog.get_logger(__name__)

DJANGO = "django"
MEMORY = "memory"
BACKENDS = (DJANGO, MEMORY)


@dataclass(frozen=True)
class Persistence:
    backend: str
    unit_of_work: IUnitOfWork
    materials: IMaterialRepository
    orders: IOrderRepository
    projects: IProjectRepository
    status_updates: IStatusUpdateRepository
    users: IUserRepository
    store: Optional[Any] = None


def build_persistence(backend: str) -> Persistence:
    """Wire every repository for *backend*."""
    if backend == DJANGO:
        from modules.accounts.repositories import UserDjangoRepository
        from modules.core.repositories.django_repository import DjangoUnitOfWork
        from modules.materials.repositories import MaterialDjangoRepository
        from modules.orders.repositories import OrderDjangoRepository
        from modules.projects.repositories import ProjectDjangoRepository
        from modules.tracking.repositories import StatusUpdateDjangoRepository

        return Persistence(
            backend=DJANGO,
            unit_of_work=DjangoUnitOfWork(),
            materials=MaterialDjangoRepository(),
            orders=OrderDjangoRepository(),
            projects=ProjectDjangoRepository(),
            status_updates=StatusUpdateDjangoRepository(),
            users=UserDjangoRepository(),
        )
    if backend == MEMORY:
        from modules.accounts.repositories import UserDjangoRepository, UserMemoryRepository
        from modules.core.repositories.memory import InMemoryStore, InMemoryUnitOfWork
        from modules.materials.repositories import MaterialMemoryRepository
        from modules.orders.repositories import OrderMemoryRepository
        from modules.projects.repositories import ProjectMemoryRepository
        from modules.tracking.repositories import StatusUpdateMemoryRepository

        store = InMemoryStore()
        return Persistence(
            backend=MEMORY,
            unit_of_work=InMemoryUnitOfWork(store),
            materials=MaterialMemoryRepository(store),
            orders=OrderMemoryRepository(store),
            projects=ProjectMemoryRepository(store),
            status_updates=StatusUpdateMemoryRepository(store),
            users=UserMemoryRepository(store, directory=UserDjangoRepository()),
            store=store,
        )
    raise ImproperlyConfigured(
        f"PERSISTENCE_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}."
    )


@lru_cache(maxsize=None)
def get_persistence() -> Persistence:
    backend = getattr(settings, "PERSISTENCE_BACKEND", DJANGO)
    persistence = build_persistence(backend)
    logger.info("persistence.selected", backend=backend)
    return persistence
