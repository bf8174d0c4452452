"""Order API views.

Exposes ``OrderService`` via HTTP using a DRF ViewSet.  Domain
exceptions are not caught here: ``api_exception_handler`` maps them to
HTTP statuses by kind.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.accounts.actors import actor_from_user
from modules.core.container import get_services
from modules.core.pagination import paginated_response, paging_params
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderFilterSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    RenameOrderSerializer,
    order_detail_data,
)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``: all data access goes through
    the service/repository layer.
    """

    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        services = get_services()
        self._service = services.orders
        self._suppliers = services.suppliers

    def get_throttles(self) -> list[BaseThrottle]:
        """Throttle scopes per action."""
        if self.action == "create":
            self.throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve"}:
            self.throttle_scope = "order_listing"
        else:
            self.throttle_scope = None
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        payload = CreateOrderSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data
        dto = CreateOrderDTO(
            kind=data["kind"],
            name=data.get("name", ""),
            items=[
                CreateOrderItemDTO(material_id=item["material_id"], quantity=item["quantity"])
                for item in data["items"]
            ],
        )
        actor = actor_from_user(request.user)
        order = self._service.create_order(actor, dto)
        detail = self._service.get_order_detail(order.id, actor)
        return Response(order_detail_data(detail), status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/ (non-privileged callers only see their own)."""
        filters = OrderFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        page, limit = paging_params(request)
        result = self._service.list_orders(
            actor_from_user(request.user), dict(filters.validated_data), page, limit
        )
        return paginated_response(result, OrderSerializer)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        detail = self._service.get_order_detail(pk, actor_from_user(request.user))
        return Response(order_detail_data(detail))

    @action(detail=False, methods=["get"])
    def statistics(self, request: Request) -> Response:
        return Response(self._service.statistics().model_dump(mode="json"))

    @action(detail=True, methods=["get"])
    def suppliers(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/suppliers/"""
        order = self._service.get_order(pk, actor_from_user(request.user))
        return Response(self._suppliers.order_summary(order.id).model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def confirm(self, request: Request, pk: str | None = None) -> Response:
        order = self._service.confirm(pk, actor_from_user(request.user))
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status/

        Cancellations are **not** allowed via this endpoint; use
        ``POST /orders/{id}/cancel/`` instead.
        """
        payload = OrderStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        order = self._service.update_status(
            pk, payload.validated_data["status"], actor_from_user(request.user)
        )
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/cancel/ (restores stock)."""
        order = self._service.cancel(pk, actor_from_user(request.user))
        return Response(OrderSerializer(order).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/ renames the order."""
        payload = RenameOrderSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        order = self._service.rename(
            pk, actor_from_user(request.user), payload.validated_data["name"]
        )
        return Response(OrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/ (administrators only, no stock restore)."""
        self._service.delete(pk, actor_from_user(request.user))
        return Response(status=status.HTTP_204_NO_CONTENT)
