"""Order service layer (Use Cases).

Orchestrates the core business logic for order creation, confirmation,
status management, cancellation, deletion and renaming.  All write
operations run inside the unit of work; the service defines the
transaction boundary.

Business rules enforced:
- Order kind gates who may order and which material type each line needs.
- Stock reservation is all-or-nothing, locking materials in id order.
- Every order gets a tracking project at creation (ON_CREATE preset);
  confirmation re-spawns it with the ON_CONFIRM preset if it is missing.
- Status changes follow ``VALID_TRANSITIONS`` one step at a time.
- Cancellation is allowed from PENDING or CONFIRMED only and restores
  every line's stock.
- Administrative delete never restores stock.
"""

from __future__ import annotations

from decimal import Decimal
from functools import partial
from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.utils import timezone

from modules.accounts.constants import ORDER_READER_ROLES, STATUS_WRITER_ROLES
from modules.core.dtos import Page, clamp_paging
from modules.materials.exceptions import MaterialNotFound, WrongMaterialType
from modules.orders.constants import (
    CANCELLABLE_STATES,
    KIND_CREATOR_ROLES,
    KIND_MATERIAL_TYPE,
    ORDER_NAME_MAX_LENGTH,
    TRACKED_STATES,
    OrderStatus,
)
from modules.orders.dtos import OrderDetail, OrderStatistics
from modules.orders.events import (
    OrderCancelled,
    OrderConfirmed,
    OrderCreated,
    OrderDeleted,
    OrderStatusChanged,
)
from modules.orders.exceptions import (
    InvalidOrderName,
    InvalidOrderState,
    InvalidOrderStatus,
    OrderNotFound,
    OrderPermissionDenied,
)
from modules.orders.models import Order, OrderItem
from modules.tracking.constants import ON_CONFIRM, ON_CREATE
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from modules.accounts.actors import Actor
    from modules.core.repositories.interfaces import IUnitOfWork
    from modules.materials.ledger import InventoryLedger
    from modules.materials.repositories.interfaces import IMaterialRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.projects.services import ProjectService
    from modules.tracking.services import StatusWorkflowService

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and collaborating services via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        material_repository: IMaterialRepository,
        ledger: InventoryLedger,
        projects: ProjectService,
        workflow: StatusWorkflowService,
        unit_of_work: IUnitOfWork,
    ) -> None:
        self._order_repo = order_repository
        self._material_repo = material_repository
        self._ledger = ledger
        self._projects = projects
        self._workflow = workflow
        self._uow = unit_of_work

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, actor: Actor, dto: CreateOrderDTO) -> Order:
        """Create a new order with atomic stock reservation.

        Steps:
        1. Check the actor may place an order of ``dto.kind``.
        2. For each item (sorted by material id to avoid deadlocks):
           - Look the material up and check its type against the kind.
           - Reserve stock through the ledger (row lock).
           - Snapshot price and supplier.
        3. Persist order + items with status PENDING.
        4. Spawn the project and write the ON_CREATE preset.

        Any failure rolls back every reservation made by this call.

        Raises:
            OrderPermissionDenied: role may not place this kind of order.
            MaterialNotFound: a material does not exist.
            WrongMaterialType: a material does not match the order kind.
            InsufficientStock: not enough stock for a line.
        """
        log = logger.bind(actor_id=actor.id, kind=str(dto.kind))
        allowed = KIND_CREATOR_ROLES.get(dto.kind)
        if allowed is not None and actor.role not in allowed:
            log.warning("order.create_forbidden", role=actor.role)
            raise OrderPermissionDenied(
                f"Role {actor.role} may not create {dto.kind} orders.",
                role=actor.role,
                kind=str(dto.kind),
            )

        required_type = KIND_MATERIAL_TYPE.get(dto.kind)
        positions = {item.material_id: index for index, item in enumerate(dto.items)}
        log.info("order.creation_started", item_count=len(dto.items))

        with self._uow.atomic():
            items = []
            for item_dto in sorted(dto.items, key=lambda i: str(i.material_id)):
                material = self._material_repo.get_by_id(item_dto.material_id)
                if material is None:
                    raise MaterialNotFound(
                        f"Material {item_dto.material_id} not found.",
                        material_id=str(item_dto.material_id),
                    )
                if required_type and material.type != required_type:
                    raise WrongMaterialType(
                        f"Material {material.name} is {material.type}; "
                        f"{dto.kind} orders accept {required_type} only.",
                        material_id=str(material.id),
                        material_type=str(material.type),
                        expected_type=str(required_type),
                    )
                material = self._ledger.reserve(material.id, item_dto.quantity)
                items.append(
                    OrderItem(
                        material_id=material.id,
                        quantity=item_dto.quantity,
                        unit_price=material.price,
                        supplier=material.supplier or "",
                        position=positions[item_dto.material_id],
                    )
                )

            items.sort(key=lambda i: i.position)
            total = sum((item.subtotal for item in items), Decimal("0"))
            order = self._order_repo.create(
                Order(
                    owner_id=actor.id,
                    name=dto.name,
                    kind=dto.kind,
                    status=OrderStatus.PENDING,
                    total_amount=total,
                ),
                items,
            )
            self._projects.ensure_for_order(order, ON_CREATE, actor)
            self._publish(
                OrderCreated(
                    aggregate_id=order.id, kind=str(order.kind), total_amount=str(total)
                )
            )

        log.info("order.created", order_id=str(order.id), total_amount=str(total))
        return order

    def confirm(self, order_id: Any, actor: Actor) -> Order:
        """Owner confirms a PENDING order.

        Raises:
            OrderNotFound: order does not exist.
            OrderPermissionDenied: actor does not own the order.
            InvalidOrderState: order is not PENDING.
        """
        with self._uow.atomic():
            order = self._lock(order_id)
            if not actor.owns(order.owner_id):
                raise OrderPermissionDenied(
                    "Only the order owner may confirm it.", order_id=str(order.id)
                )
            if order.status != OrderStatus.PENDING:
                raise InvalidOrderState(
                    f"Cannot confirm order in status {order.status}.",
                    order_id=str(order.id),
                    status=str(order.status),
                )
            order.status = OrderStatus.CONFIRMED
            order = self._order_repo.save(order)
            self._projects.ensure_for_order(order, ON_CONFIRM, actor)
            self._publish(OrderConfirmed(aggregate_id=order.id))

        logger.info("order.confirmed", order_id=str(order.id), actor_id=actor.id)
        return order

    def update_status(self, order_id: Any, new_status: str, actor: Actor) -> Order:
        """Move an order one step along ``VALID_TRANSITIONS``.

        Cancellation must go through ``cancel`` so stock is restored, and
        COMPLETED / CANCELLED orders are frozen.

        Raises:
            OrderPermissionDenied: actor is neither WAREHOUSE nor ADMIN.
            InvalidOrderStatus: unknown status value.
            OrderNotFound: order does not exist.
            InvalidOrderState: CANCELLED requested, order is terminal, or
                the move is not a valid transition.
        """
        if actor.role not in STATUS_WRITER_ROLES:
            raise OrderPermissionDenied(
                "Only warehouse staff or administrators may set order status.",
                role=actor.role,
            )
        if new_status not in OrderStatus.values:
            raise InvalidOrderStatus(
                f"Unknown order status {new_status!r}.",
                field="status",
                status=new_status,
            )

        with self._uow.atomic():
            order = self._lock(order_id)
            log = logger.bind(
                order_id=str(order.id),
                current_status=str(order.status),
                new_status=new_status,
            )
            if new_status == OrderStatus.CANCELLED:
                raise InvalidOrderState(
                    "Use cancel to cancel an order.", order_id=str(order.id)
                )
            if order.is_terminal:
                log.warning("order.invalid_transition")
                raise InvalidOrderState(
                    f"Order in status {order.status} can no longer change.",
                    order_id=str(order.id),
                    status=str(order.status),
                )
            if not order.can_transition_to(new_status):
                log.warning("order.invalid_transition")
                raise InvalidOrderState(
                    f"Cannot move order from {order.status} to {new_status}.",
                    order_id=str(order.id),
                    status=str(order.status),
                )
            old_status = order.status
            order.status = new_status
            order = self._order_repo.save(order)
            if new_status in TRACKED_STATES:
                self._projects.ensure_for_order(order, ON_CONFIRM, actor)
            self._publish(
                OrderStatusChanged(
                    aggregate_id=order.id,
                    old_status=str(old_status),
                    new_status=new_status,
                )
            )

        log.info("order.status_updated")
        return order

    def cancel(self, order_id: Any, actor: Actor) -> Order:
        """Cancel an order and restore the stock of every line.

        Locks the order first so concurrent cancellations cannot restore
        stock twice.

        Raises:
            OrderNotFound: order does not exist.
            OrderPermissionDenied: actor is neither owner nor ADMIN.
            InvalidOrderState: order is not PENDING or CONFIRMED.
        """
        with self._uow.atomic():
            order = self._lock(order_id)
            log = logger.bind(order_id=str(order.id), current_status=str(order.status))
            if not (actor.owns(order.owner_id) or actor.is_admin):
                raise OrderPermissionDenied(
                    "Only the owner or an administrator may cancel the order.",
                    order_id=str(order.id),
                )
            if order.status not in CANCELLABLE_STATES:
                log.warning("order.cancel_not_allowed")
                raise InvalidOrderState(
                    f"Cannot cancel order in status {order.status}.",
                    order_id=str(order.id),
                    status=str(order.status),
                )

            items = sorted(self._order_repo.items_for(order.id), key=lambda i: str(i.material_id))
            for item in items:
                self._ledger.restore(item.material_id, item.quantity)

            order.status = OrderStatus.CANCELLED
            order = self._order_repo.save(order)
            self._projects.cancel_for_order(order.id)
            self._publish(OrderCancelled(aggregate_id=order.id))

        log.info("order.cancelled", restored_lines=len(items))
        return order

    def delete(self, order_id: Any, actor: Actor) -> None:
        """Administrative hard delete of the order, its project and log.

        Stock is not restored; cancel first if it should be.
        """
        if not actor.is_admin:
            raise OrderPermissionDenied(
                "Only administrators may delete orders.", role=actor.role
            )
        with self._uow.atomic():
            order = self._lock(order_id)
            self._projects.delete_for_order(order.id)
            self._order_repo.delete(order.id)
            self._publish(OrderDeleted(aggregate_id=order.id))

        logger.info("order.deleted", order_id=str(order.id), status=str(order.status))

    def rename(self, order_id: Any, actor: Actor, name: str) -> Order:
        """Set the display name.

        Raises:
            InvalidOrderName: name empty after stripping or over 100 chars.
            OrderNotFound: order does not exist.
            OrderPermissionDenied: actor is neither owner nor ADMIN.
        """
        cleaned = (name or "").strip()
        if not cleaned or len(cleaned) > ORDER_NAME_MAX_LENGTH:
            raise InvalidOrderName(
                f"Order name must be 1 to {ORDER_NAME_MAX_LENGTH} characters.",
                field="name",
            )
        with self._uow.atomic():
            order = self._lock(order_id)
            if not (actor.owns(order.owner_id) or actor.is_admin):
                raise OrderPermissionDenied(
                    "Only the owner or an administrator may rename the order.",
                    order_id=str(order.id),
                )
            order.name = cleaned
            order = self._order_repo.save(order)

        logger.info("order.renamed", order_id=str(order.id))
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: Any, actor: Actor) -> Order:
        """Retrieve a single order visible to *actor*.

        Raises:
            OrderNotFound: if the order does not exist.
            OrderPermissionDenied: actor is not owner, WAREHOUSE or ADMIN.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.", order_id=str(order_id))
        if not (actor.owns(order.owner_id) or actor.role in ORDER_READER_ROLES):
            raise OrderPermissionDenied(
                "You may not view this order.", order_id=str(order.id)
            )
        return order

    def get_order_detail(self, order_id: Any, actor: Actor) -> OrderDetail:
        order = self.get_order(order_id, actor)
        project = self._projects.find_by_order(order.id)
        return OrderDetail(
            order=order,
            lines=self._order_repo.lines(order_id=order.id),
            project=project,
            latest_status=self._workflow.latest(project.id) if project else {},
        )

    def list_orders(
        self,
        actor: Actor,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page:
        """Return a page of orders; non-privileged actors see only their own."""
        filters = dict(filters or {})
        if actor.role not in ORDER_READER_ROLES:
            filters["owner_id"] = actor.id
        page, limit = clamp_paging(page, limit)
        items, total = self._order_repo.list(filters, page, limit)
        return Page(items=items, total=total, page=page, limit=limit)

    def statistics(self) -> OrderStatistics:
        counts = self._order_repo.count_by_status()
        by_status = {status: counts.get(status, 0) for status in OrderStatus.values}
        return OrderStatistics(
            total=sum(by_status.values()),
            by_status=by_status,
            generated_at=timezone.now(),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lock(self, order_id: Any) -> Order:
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.", order_id=str(order_id))
        return order

    def _publish(self, event: Any) -> None:
        self._uow.on_commit(partial(event_bus.publish, event))
