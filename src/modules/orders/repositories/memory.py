"""In-memory implementation of the Order repository.

Orders and their items live in separate tables of the shared
``InMemoryStore``; items point back through ``order_id``.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from modules.core.dtos import page_bounds
from modules.core.repositories.memory import InMemoryStore, as_uuid
from modules.orders.dtos import OrderLine, resolve_supplier
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository


def _matches(order: Order, filters: Dict[str, Any]) -> bool:
    for key in ("status", "kind", "owner_id"):
        if filters.get(key) is not None and getattr(order, key) != filters[key]:
            return False
    created = order.created_at.date()
    if filters.get("created_from") and created < filters["created_from"]:
        return False
    if filters.get("created_to") and created > filters["created_to"]:
        return False
    if filters.get("exclude_status") and order.status == filters["exclude_status"]:
        return False
    return True


class OrderMemoryRepository(IOrderRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def create(self, order: Order, items: List[OrderItem]) -> Order:
        with self._store.lock:
            self._store.put("orders", order.id, order)
            for item in items:
                item.order_id = order.id
                self._store.put("order_items", item.id, item)
        return order

    def get_by_id(self, id: Any) -> Optional[Order]:
        key = as_uuid(id)
        return self._store.get("orders", key) if key else None

    def get_for_update(self, id: Any) -> Optional[Order]:
        # The unit of work already holds the store lock.
        return self.get_by_id(id)

    def items_for(self, order_id: Any) -> List[OrderItem]:
        key = as_uuid(order_id)
        items = [i for i in self._store.all("order_items") if i.order_id == key]
        return sorted(items, key=lambda i: i.position)

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Order], int]:
        filters = filters or {}
        rows = [o for o in self._store.all("orders") if _matches(o, filters)]
        rows.sort(key=lambda o: (o.created_at, o.id), reverse=True)
        start, end = page_bounds(page, limit)
        return rows[start:end], len(rows)

    def lines(
        self,
        order_id: Any = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[OrderLine]:
        filters = filters or {}
        with self._store.lock:
            orders = {o.id: o for o in self._store.all("orders") if _matches(o, filters)}
            materials = {m.id: m for m in self._store.all("materials")}
            items = self._store.all("order_items")
        if order_id is not None:
            key = as_uuid(order_id)
            items = [i for i in items if i.order_id == key]
        result = []
        ordered = sorted(
            (i for i in items if i.order_id in orders),
            key=lambda i: (orders[i.order_id].created_at, i.order_id, i.position),
        )
        for item in ordered:
            order = orders[item.order_id]
            material = materials.get(item.material_id)
            result.append(
                OrderLine(
                    id=item.id,
                    order_id=order.id,
                    order_status=order.status,
                    order_kind=order.kind,
                    material_id=item.material_id,
                    material_name=material.name if material else "",
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    supplier=resolve_supplier(
                        item.supplier, material.supplier if material else None
                    ),
                )
            )
        return result

    def count_by_status(self) -> Dict[str, int]:
        return dict(Counter(o.status for o in self._store.all("orders")))

    def save(self, entity: Order) -> Order:
        return self._store.put("orders", entity.id, entity)

    def delete(self, id: Any) -> bool:
        key = as_uuid(id)
        if key is None:
            return False
        with self._store.lock:
            for item in self.items_for(key):
                self._store.remove("order_items", item.id)
            return self._store.remove("orders", key)
