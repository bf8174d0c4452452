"""Supplier analytics API."""

from __future__ import annotations

from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.container import get_services
from modules.orders.constants import OrderKind


class SupplierStatisticsQuerySerializer(serializers.Serializer):
    kind = serializers.ChoiceField(choices=OrderKind.choices, required=False)
    owner_id = serializers.IntegerField(required=False)
    include_cancelled = serializers.BooleanField(required=False, default=False)


class SupplierStatisticsView(APIView):
    """GET /api/v1/suppliers/statistics"""

    def get(self, request: Request) -> Response:
        query = SupplierStatisticsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        stats = get_services().suppliers.statistics(**query.validated_data)
        return Response(stats.model_dump(mode="json"))
