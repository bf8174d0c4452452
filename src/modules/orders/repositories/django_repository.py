"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Callers
wrap writes in the unit of work; ``get_for_update`` relies on that
surrounding transaction for its row lock.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.db.models import Count, QuerySet

from modules.core.dtos import page_bounds
from modules.orders.dtos import OrderLine, resolve_supplier
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def _apply_filters(queryset: QuerySet, filters: Dict[str, Any], prefix: str = "") -> QuerySet:
    lookups = {
        "status": "status",
        "kind": "kind",
        "owner_id": "owner_id",
        "created_from": "created_at__date__gte",
        "created_to": "created_at__date__lte",
    }
    for key, lookup in lookups.items():
        if filters.get(key) is not None:
            queryset = queryset.filter(**{prefix + lookup: filters[key]})
    if filters.get("exclude_status"):
        queryset = queryset.exclude(**{prefix + "status": filters["exclude_status"]})
    return queryset


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    def create(self, order: Order, items: List[OrderItem]) -> Order:
        order.save(force_insert=True)
        for item in items:
            item.order = order
        OrderItem.objects.bulk_create(items)
        logger.info("order.persisted", order_id=str(order.id), item_count=len(items))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: Any) -> Optional[Order]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Order.objects.prefetch_related("items").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: Any) -> Optional[Order]:
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def items_for(self, order_id: Any) -> List[OrderItem]:
        return list(OrderItem.objects.filter(order_id=order_id).order_by("position"))

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Order], int]:
        queryset = _apply_filters(Order.objects.all(), filters or {})
        start, end = page_bounds(page, limit)
        return list(queryset[start:end]), queryset.count()

    def lines(
        self,
        order_id: Any = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[OrderLine]:
        queryset = OrderItem.objects.select_related("order", "material")
        if order_id is not None:
            try:
                queryset = queryset.filter(order_id=order_id)
            except (ValueError, ValidationError):
                return []
        queryset = _apply_filters(queryset, filters or {}, prefix="order__")
        queryset = queryset.order_by("order__created_at", "order_id", "position")
        return [
            OrderLine(
                id=item.id,
                order_id=item.order_id,
                order_status=item.order.status,
                order_kind=item.order.kind,
                material_id=item.material_id,
                material_name=item.material.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                supplier=resolve_supplier(item.supplier, item.material.supplier),
            )
            for item in queryset
        ]

    def count_by_status(self) -> Dict[str, int]:
        rows = Order.objects.order_by().values("status").annotate(count=Count("id"))
        return {row["status"]: row["count"] for row in rows}

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        return entity

    def delete(self, id: Any) -> bool:
        """Hard-delete an order; items cascade at the database level."""
        try:
            deleted, _ = Order.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        return deleted > 0
