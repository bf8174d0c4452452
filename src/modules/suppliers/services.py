"""Supplier analytics (read-only).

Groups order lines by supplier.  The supplier of a line is its snapshot,
else the material's current supplier, else ``"Unknown Supplier"``; the
order repository resolves it when building ``OrderLine`` rows.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import OrderNotFound
from modules.suppliers.dtos import (
    OrderSupplierSummary,
    SupplierGroup,
    SupplierStat,
    SupplierStatistics,
)

if TYPE_CHECKING:
    from modules.orders.dtos import OrderLine
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

TOP_SUPPLIERS = 5


class SupplierService:
    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def statistics(
        self,
        kind: Optional[str] = None,
        owner_id: Optional[int] = None,
        include_cancelled: bool = False,
    ) -> SupplierStatistics:
        """Per-supplier order count, line count and amount.

        ``order_count`` counts distinct orders, ``item_count`` counts
        lines.  Cancelled orders are left out unless *include_cancelled*.
        """
        filters: Dict[str, Any] = {"kind": kind, "owner_id": owner_id}
        if not include_cancelled:
            filters["exclude_status"] = OrderStatus.CANCELLED
        lines = self._order_repo.lines(filters={k: v for k, v in filters.items() if v})

        orders: Dict[str, set] = defaultdict(set)
        items: Dict[str, int] = defaultdict(int)
        amounts: Dict[str, Decimal] = defaultdict(Decimal)
        for line in lines:
            orders[line.supplier].add(line.order_id)
            items[line.supplier] += 1
            amounts[line.supplier] += line.subtotal

        stats = sorted(
            (
                SupplierStat(
                    supplier=name,
                    order_count=len(orders[name]),
                    item_count=items[name],
                    total_amount=amounts[name],
                )
                for name in orders
            ),
            key=lambda s: (-s.total_amount, s.supplier),
        )
        logger.debug("suppliers.statistics", suppliers=len(stats), lines=len(lines))
        return SupplierStatistics(
            total_suppliers=len(stats),
            suppliers=stats,
            top_suppliers=stats[:TOP_SUPPLIERS],
        )

    def order_summary(self, order_id: Any) -> OrderSupplierSummary:
        """Lines of one order grouped by supplier, in first-seen order."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.", order_id=str(order_id))
        lines: List[OrderLine] = self._order_repo.lines(order_id=order.id)

        groups: Dict[str, List[OrderLine]] = {}
        for line in lines:
            groups.setdefault(line.supplier, []).append(line)

        summary = [
            SupplierGroup(
                supplier=name,
                item_count=len(group),
                total_value=sum((line.subtotal for line in group), Decimal("0")),
                items=[line.material_name for line in group],
            )
            for name, group in groups.items()
        ]
        return OrderSupplierSummary(
            order_id=order.id,
            suppliers=summary,
            total_value=sum((group.total_value for group in summary), Decimal("0")),
            has_multiple_suppliers=len(summary) > 1,
        )
