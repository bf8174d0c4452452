"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).  Business
logic lives in the Service Layer, which receives Pydantic DTOs from
``dtos.py``.
"""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from modules.orders.constants import ORDER_NAME_MAX_LENGTH, OrderKind, OrderStatus
from modules.orders.models import Order

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    material_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    kind = serializers.ChoiceField(choices=OrderKind.choices, default=OrderKind.GENERAL)
    items = CreateOrderItemSerializer(many=True, allow_empty=False)
    name = serializers.CharField(
        required=False, default="", allow_blank=True, max_length=ORDER_NAME_MAX_LENGTH
    )


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class RenameOrderSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, trim_whitespace=False)


class OrderFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    kind = serializers.ChoiceField(choices=OrderKind.choices, required=False)
    owner_id = serializers.IntegerField(required=False)
    created_from = serializers.DateField(required=False)
    created_to = serializers.DateField(required=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderSerializer(serializers.ModelSerializer):
    """Order header without lines."""

    class Meta:
        model = Order
        fields = [
            "id",
            "owner_id",
            "name",
            "kind",
            "status",
            "total_amount",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderLineSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    material_id = serializers.UUIDField()
    material_name = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=18, decimal_places=4)
    subtotal = serializers.DecimalField(max_digits=18, decimal_places=4)
    supplier = serializers.CharField()


def order_detail_data(detail: Any) -> Dict[str, Any]:
    """Render an ``OrderDetail`` (order, lines, project, latest status)."""
    from modules.projects.serializers import ProjectSerializer
    from modules.tracking.serializers import StatusUpdateSerializer

    data = dict(OrderSerializer(detail.order).data)
    data["items"] = OrderLineSerializer(detail.lines, many=True).data
    data["project"] = ProjectSerializer(detail.project).data if detail.project else None
    data["latest_status"] = {
        str(column): StatusUpdateSerializer(update).data if update else None
        for column, update in detail.latest_status.items()
    }
    return data
