"""Generic repository and unit-of-work interfaces (Dependency Inversion).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend, and ``IUnitOfWork``, the
transaction boundary every mutating service call runs inside.
Service-layer code depends on these abstractions, never on Django ORM
or the in-memory store directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, ContextManager, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Material``, ``Order``).  Look-ups return ``None``
    for missing or malformed ids; the service decides which
    ``NotFound`` subclass to raise.
    """

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[T], int]:
        """Return one page of entities and the total matching count."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def delete(self, id: Any) -> bool:
        """Hard-delete an entity by ID. Returns ``False`` if it was absent."""


class IUnitOfWork(ABC):
    """Transaction boundary.

    ``atomic()`` returns a context manager; everything written inside it
    is committed together or not at all.  Blocks may nest.
    """

    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        """Open a (possibly nested) atomic block."""

    @abstractmethod
    def on_commit(self, callback: Callable[[], None]) -> None:
        """Run *callback* once the outermost block commits.

        Called outside any block, the callback runs immediately.  Rolled
        back blocks drop their callbacks.
        """
