"""Unit tests for OrderService.

Covers:
- Order creation with stock reservation and project spawning.
- Kind-based role and material type checks.
- Atomicity: a failing line rolls back every reservation.
- Confirmation, privileged status set, cancellation with stock
  restoration, administrative delete and renaming.
- Visibility of orders per role.
"""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.materials.constants import MaterialType
from modules.materials.dtos import UpdateMaterialDTO
from modules.materials.exceptions import InsufficientStock, MaterialNotFound, WrongMaterialType
from modules.orders.constants import OrderKind, OrderStatus
from modules.orders.dtos import UNKNOWN_SUPPLIER, CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    InvalidOrderName,
    InvalidOrderState,
    InvalidOrderStatus,
    OrderNotFound,
    OrderPermissionDenied,
)
from modules.projects.constants import ProjectStatus
from modules.projects.exceptions import ProjectNotFound
from modules.tracking.constants import StatusType

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


class TestCreateOrder:
    def test_create_reserves_stock_and_totals(self, services, plain_user, make_material, place_order):
        material = make_material(quantity=50, price="100.50")

        order = place_order(plain_user, (material, 2))

        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Decimal("201.00")
        assert order.owner_id == plain_user.id
        assert services.materials.get_material(material.id).quantity == 48

    def test_create_spawns_project_with_pending_order_column(
        self, services, plain_user, make_material, place_order
    ):
        material = make_material(quantity=50, price="100.50")

        order = place_order(plain_user, (material, 2))

        project = services.projects.get_by_order(order.id)
        assert project.overall_status == ProjectStatus.ACTIVE
        history = services.workflow.history(project.id)
        assert len(history) == 4
        summary = services.workflow.summary(project.id)
        assert summary.order == "PENDING"
        assert (summary.pickup, summary.delivery, summary.check) == ("", "", "")
        assert summary.completed is False

    def test_lines_snapshot_price_and_supplier(
        self, services, admin, plain_user, make_material, place_order
    ):
        material = make_material(quantity=10, price="10.00", supplier="Jin Hardware")
        order = place_order(plain_user, (material, 1))

        services.materials.update_material(
            admin, material.id, UpdateMaterialDTO(price=Decimal("99"), supplier="Other")
        )

        [line] = services.orders.get_order_detail(order.id, plain_user).lines
        assert line.unit_price == Decimal("10.00")
        assert line.supplier == "Jin Hardware"

    def test_items_keep_input_order(self, services, plain_user, make_material, place_order):
        first = make_material(name="First")
        second = make_material(name="Second")
        third = make_material(name="Third")

        order = place_order(plain_user, (third, 1), (first, 1), (second, 1))

        lines = services.orders.get_order_detail(order.id, plain_user).lines
        assert [line.material_name for line in lines] == ["Third", "First", "Second"]

    def test_line_without_supplier_reports_unknown(
        self, services, plain_user, make_material, place_order
    ):
        material = make_material(supplier="")

        order = place_order(plain_user, (material, 1))

        [line] = services.orders.get_order_detail(order.id, plain_user).lines
        assert line.supplier == UNKNOWN_SUPPLIER

    def test_insufficient_stock_creates_nothing(
        self, services, admin, plain_user, make_material, place_order
    ):
        material = make_material(quantity=50)

        with pytest.raises(InsufficientStock):
            place_order(plain_user, (material, 51))

        assert services.materials.get_material(material.id).quantity == 50
        assert services.orders.list_orders(admin).total == 0
        assert services.projects.list_projects().total == 0

    def test_failing_line_rolls_back_earlier_reservations(
        self, services, plain_user, make_material, place_order
    ):
        plenty = make_material(name="Plenty", quantity=100)
        scarce = make_material(name="Scarce", quantity=1)

        with pytest.raises(InsufficientStock):
            place_order(plain_user, (plenty, 10), (scarce, 5))

        assert services.materials.get_material(plenty.id).quantity == 100
        assert services.materials.get_material(scarce.id).quantity == 1

    def test_unknown_material_raises(self, services, plain_user, make_material, place_order):
        material = make_material(quantity=10)
        missing = SimpleNamespace(id=uuid4())

        with pytest.raises(MaterialNotFound):
            place_order(plain_user, (material, 1), (missing, 1))

        assert services.materials.get_material(material.id).quantity == 10

    def test_auxiliary_order_requires_pm_or_admin(self, am, make_material, place_order):
        material = make_material(type=MaterialType.AUXILIARY)

        with pytest.raises(OrderPermissionDenied):
            place_order(am, (material, 1), kind=OrderKind.AUXILIARY)

    def test_finished_order_requires_am_or_admin(self, pm, make_material, place_order):
        material = make_material(type=MaterialType.FINISHED)

        with pytest.raises(OrderPermissionDenied):
            place_order(pm, (material, 1), kind=OrderKind.FINISHED)

    def test_auxiliary_order_rejects_finished_material(
        self, services, pm, make_material, place_order
    ):
        material = make_material(type=MaterialType.FINISHED, quantity=10)

        with pytest.raises(WrongMaterialType) as exc_info:
            place_order(pm, (material, 1), kind=OrderKind.AUXILIARY)

        assert exc_info.value.kind == "WrongMaterialType"
        assert services.materials.get_material(material.id).quantity == 10

    def test_general_order_accepts_both_types(self, plain_user, make_material, place_order):
        aux = make_material(name="Screws", type=MaterialType.AUXILIARY)
        fin = make_material(name="Door", type=MaterialType.FINISHED)

        order = place_order(plain_user, (aux, 1), (fin, 1))

        assert order.kind == OrderKind.GENERAL

    def test_project_name_uses_kind_prefix(self, services, pm, make_material, place_order):
        material = make_material(type=MaterialType.AUXILIARY)

        order = place_order(pm, (material, 1), kind=OrderKind.AUXILIARY)

        project = services.projects.get_by_order(order.id)
        assert project.project_name.startswith("輔材專案-")
        assert project.project_name.endswith(str(order.id)[:8])


class TestCreateOrderDTO:
    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError):
            CreateOrderDTO(items=[])

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            CreateOrderItemDTO(material_id=uuid4(), quantity=0)

    def test_duplicate_materials_rejected(self):
        material_id = uuid4()
        with pytest.raises(ValidationError):
            CreateOrderDTO(
                items=[
                    CreateOrderItemDTO(material_id=material_id, quantity=1),
                    CreateOrderItemDTO(material_id=material_id, quantity=2),
                ]
            )

    def test_name_is_stripped(self):
        dto = CreateOrderDTO(
            name="  Kitchen  ", items=[CreateOrderItemDTO(material_id=uuid4(), quantity=1)]
        )
        assert dto.name == "Kitchen"


# ---------------------------------------------------------------------------
# Confirm
# ---------------------------------------------------------------------------


class TestConfirm:
    def test_owner_confirms_pending_order(self, services, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))

        confirmed = services.orders.confirm(order.id, plain_user)

        assert confirmed.status == OrderStatus.CONFIRMED

    def test_confirm_twice_raises(self, services, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))
        services.orders.confirm(order.id, plain_user)

        with pytest.raises(InvalidOrderState) as exc_info:
            services.orders.confirm(order.id, plain_user)

        assert exc_info.value.kind == "InvalidState"

    def test_non_owner_cannot_confirm(
        self, services, plain_user, make_actor, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 1))
        other = make_actor()

        with pytest.raises(OrderPermissionDenied):
            services.orders.confirm(order.id, other)

    def test_confirm_unknown_order_raises(self, services, plain_user):
        with pytest.raises(OrderNotFound):
            services.orders.confirm(uuid4(), plain_user)

    def test_confirm_keeps_existing_project(self, services, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))
        project = services.projects.get_by_order(order.id)

        services.orders.confirm(order.id, plain_user)

        assert services.projects.get_by_order(order.id).id == project.id
        assert len(services.workflow.history(project.id)) == 4

    def test_confirm_respawns_missing_project(self, services, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))
        services.projects.delete_for_order(order.id)

        services.orders.confirm(order.id, plain_user)

        project = services.projects.get_by_order(order.id)
        summary = services.workflow.summary(project.id)
        assert (summary.order, summary.pickup, summary.delivery, summary.check) == (
            "PENDING",
            "PENDING",
            "PENDING",
            "PENDING",
        )


# ---------------------------------------------------------------------------
# Privileged status set
# ---------------------------------------------------------------------------


FORWARD_PATH = (OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.COMPLETED)


def advance(services, order, target, actor):
    """Walk *order* along the forward path until it reaches *target*."""
    for status in FORWARD_PATH:
        order = services.orders.update_status(order.id, status, actor)
        if status == target:
            return order
    raise AssertionError(f"{target} is not on the forward path")


class TestUpdateStatus:
    def test_warehouse_steps_to_processing(
        self, services, warehouse, plain_user, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 1))

        updated = advance(services, order, OrderStatus.PROCESSING, warehouse)

        assert updated.status == OrderStatus.PROCESSING
        assert services.projects.get_by_order(order.id) is not None

    def test_skipping_ahead_is_rejected(
        self, services, admin, plain_user, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 1))

        with pytest.raises(InvalidOrderState):
            services.orders.update_status(order.id, OrderStatus.COMPLETED, admin)

        assert services.orders.get_order(order.id, admin).status == OrderStatus.PENDING

    def test_processing_cannot_step_back_to_pending(
        self, services, admin, plain_user, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 1))
        advance(services, order, OrderStatus.PROCESSING, admin)

        with pytest.raises(InvalidOrderState):
            services.orders.update_status(order.id, OrderStatus.PENDING, admin)
        with pytest.raises(InvalidOrderState):
            services.orders.cancel(order.id, plain_user)

        assert services.orders.get_order(order.id, admin).status == OrderStatus.PROCESSING

    def test_same_status_is_rejected(
        self, services, admin, plain_user, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 1))

        with pytest.raises(InvalidOrderState):
            services.orders.update_status(order.id, OrderStatus.PENDING, admin)

    def test_non_privileged_role_is_forbidden(self, services, pm, make_material, place_order):
        order = place_order(pm, (make_material(), 1))

        with pytest.raises(OrderPermissionDenied):
            services.orders.update_status(order.id, OrderStatus.PROCESSING, pm)

    def test_unknown_status_rejected(self, services, admin, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))

        with pytest.raises(InvalidOrderStatus):
            services.orders.update_status(order.id, "SHIPPED", admin)

    def test_cancelled_must_use_cancel(
        self, services, admin, plain_user, make_material, place_order
    ):
        material = make_material(quantity=10)
        order = place_order(plain_user, (material, 4))

        with pytest.raises(InvalidOrderState):
            services.orders.update_status(order.id, OrderStatus.CANCELLED, admin)

        assert services.materials.get_material(material.id).quantity == 6

    def test_terminal_order_is_frozen(self, services, admin, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))
        advance(services, order, OrderStatus.COMPLETED, admin)

        with pytest.raises(InvalidOrderState):
            services.orders.update_status(order.id, OrderStatus.PENDING, admin)

    def test_unknown_order_raises(self, services, admin):
        with pytest.raises(OrderNotFound):
            services.orders.update_status(uuid4(), OrderStatus.PROCESSING, admin)


# ---------------------------------------------------------------------------
# Cancel
# ---------------------------------------------------------------------------


class TestCancel:
    def test_cancel_confirmed_order_restores_every_line(
        self, services, plain_user, make_material, place_order
    ):
        first = make_material(name="First", quantity=10)
        second = make_material(name="Second", quantity=20)
        order = place_order(plain_user, (first, 3), (second, 5))
        services.orders.confirm(order.id, plain_user)

        cancelled = services.orders.cancel(order.id, plain_user)

        assert cancelled.status == OrderStatus.CANCELLED
        assert services.materials.get_material(first.id).quantity == 10
        assert services.materials.get_material(second.id).quantity == 20

    def test_cancel_marks_project_cancelled(self, services, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))

        services.orders.cancel(order.id, plain_user)

        project = services.projects.get_by_order(order.id)
        assert project.overall_status == ProjectStatus.CANCELLED

    def test_admin_may_cancel_any_order(self, services, admin, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))

        assert services.orders.cancel(order.id, admin).status == OrderStatus.CANCELLED

    def test_other_user_cannot_cancel(
        self, services, plain_user, warehouse, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 1))

        with pytest.raises(OrderPermissionDenied):
            services.orders.cancel(order.id, warehouse)

    def test_cancel_twice_does_not_restore_twice(
        self, services, plain_user, make_material, place_order
    ):
        material = make_material(quantity=10)
        order = place_order(plain_user, (material, 4))
        services.orders.cancel(order.id, plain_user)

        with pytest.raises(InvalidOrderState):
            services.orders.cancel(order.id, plain_user)

        assert services.materials.get_material(material.id).quantity == 10

    @pytest.mark.parametrize("status", [OrderStatus.PROCESSING, OrderStatus.COMPLETED])
    def test_cannot_cancel_after_confirmation_stage(
        self, services, admin, plain_user, make_material, place_order, status
    ):
        order = place_order(plain_user, (make_material(), 1))
        advance(services, order, status, admin)

        with pytest.raises(InvalidOrderState):
            services.orders.cancel(order.id, plain_user)


# ---------------------------------------------------------------------------
# Delete / Rename
# ---------------------------------------------------------------------------


class TestDelete:
    def test_admin_delete_removes_order_and_project_without_restock(
        self, services, admin, plain_user, make_material, place_order
    ):
        material = make_material(quantity=10)
        order = place_order(plain_user, (material, 3))

        services.orders.delete(order.id, admin)

        with pytest.raises(OrderNotFound):
            services.orders.get_order(order.id, admin)
        with pytest.raises(ProjectNotFound):
            services.projects.get_by_order(order.id)
        assert services.materials.get_material(material.id).quantity == 7

    def test_non_admin_cannot_delete(self, services, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))

        with pytest.raises(OrderPermissionDenied):
            services.orders.delete(order.id, plain_user)


class TestRename:
    def test_owner_renames(self, services, plain_user, make_material, place_order):
        order = place_order(plain_user, (make_material(), 1))

        renamed = services.orders.rename(order.id, plain_user, "  Kitchen refit ")

        assert renamed.name == "Kitchen refit"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 101])
    def test_invalid_names_rejected(self, services, plain_user, make_material, place_order, name):
        order = place_order(plain_user, (make_material(), 1))

        with pytest.raises(InvalidOrderName):
            services.orders.rename(order.id, plain_user, name)

    def test_other_user_cannot_rename(
        self, services, plain_user, make_actor, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 1))

        with pytest.raises(OrderPermissionDenied):
            services.orders.rename(order.id, make_actor(), "Mine now")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_plain_user_only_sees_own_orders(
        self, services, plain_user, make_actor, make_material, place_order
    ):
        material = make_material(quantity=10)
        other = make_actor()
        place_order(plain_user, (material, 1))
        place_order(other, (material, 1))

        page = services.orders.list_orders(plain_user)

        assert page.total == 1
        assert page.items[0].owner_id == plain_user.id

    def test_warehouse_sees_every_order(
        self, services, warehouse, plain_user, make_actor, make_material, place_order
    ):
        material = make_material(quantity=10)
        place_order(plain_user, (material, 1))
        place_order(make_actor(), (material, 1))

        assert services.orders.list_orders(warehouse).total == 2

    def test_list_filters_by_status(self, services, admin, plain_user, make_material, place_order):
        material = make_material(quantity=10)
        first = place_order(plain_user, (material, 1))
        place_order(plain_user, (material, 1))
        services.orders.confirm(first.id, plain_user)

        page = services.orders.list_orders(admin, {"status": OrderStatus.CONFIRMED})

        assert [o.id for o in page.items] == [first.id]

    def test_other_user_cannot_view_order(
        self, services, plain_user, make_actor, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 1))

        with pytest.raises(OrderPermissionDenied):
            services.orders.get_order(order.id, make_actor())

    def test_detail_includes_project_and_latest_status(
        self, services, plain_user, make_material, place_order
    ):
        order = place_order(plain_user, (make_material(), 2))

        detail = services.orders.get_order_detail(order.id, plain_user)

        assert detail.project.order_id == order.id
        assert detail.latest_status[StatusType.ORDER].status_value == "PENDING"
        assert len(detail.lines) == 1

    def test_statistics_counts_every_status(
        self, services, admin, plain_user, make_material, place_order
    ):
        material = make_material(quantity=10)
        place_order(plain_user, (material, 1))
        cancelled = place_order(plain_user, (material, 1))
        services.orders.cancel(cancelled.id, plain_user)

        stats = services.orders.statistics()

        assert stats.total == 2
        assert stats.by_status[OrderStatus.PENDING] == 1
        assert stats.by_status[OrderStatus.CANCELLED] == 1
        assert stats.by_status[OrderStatus.COMPLETED] == 0
