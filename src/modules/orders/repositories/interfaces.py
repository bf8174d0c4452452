"""Order repository interface.

Extends ``IRepository[Order]`` with methods required by the Order
aggregate: atomic creation with items, row locking, and the line-level
read model used by order detail and supplier analytics.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.dtos import OrderLine
    from modules.orders.models import Order, OrderItem


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children; deleting an
    order deletes its items.

    Supported ``list`` filter keys: ``status``, ``kind``, ``owner_id``,
    ``created_from`` and ``created_to`` (inclusive dates).  Listings are
    newest first.
    """

    @abstractmethod
    def create(self, order: Order, items: List[OrderItem]) -> Order:
        """Persist a new order together with its items."""

    @abstractmethod
    def get_for_update(self, id: Any) -> Optional[Order]:
        """Retrieve an order holding a row lock until the transaction ends."""

    @abstractmethod
    def items_for(self, order_id: Any) -> List[OrderItem]:
        """Items of an order in line order."""

    @abstractmethod
    def lines(
        self,
        order_id: Any = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[OrderLine]:
        """Line read model, for one order or for every order matching *filters*.

        Extra filter key ``exclude_status`` removes orders in that status.
        """

    @abstractmethod
    def count_by_status(self) -> Dict[str, int]:
        """Number of orders per status (statuses with no orders omitted)."""

    @abstractmethod
    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Order], int]:
        """Return one page of orders and the total matching count."""
