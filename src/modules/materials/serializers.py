"""Material DRF serializers for API input/output."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.materials.constants import PRICE_DECIMAL_PLACES, PRICE_MAX_DIGITS, MaterialType
from modules.materials.models import Material

MIN_PRICE = Decimal("0.0001")

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateMaterialSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=100)
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES, min_value=MIN_PRICE
    )
    quantity = serializers.IntegerField(min_value=0, default=0)
    supplier = serializers.CharField(
        max_length=255, required=False, allow_blank=True, allow_null=True, default=""
    )
    type = serializers.ChoiceField(choices=MaterialType.choices)


class UpdateMaterialSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    category = serializers.CharField(max_length=100, required=False)
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        min_value=MIN_PRICE,
        required=False,
    )
    supplier = serializers.CharField(max_length=255, required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=MaterialType.choices, required=False)


class MaterialQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=0)


class MaterialFilterSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=MaterialType.choices, required=False)
    category = serializers.CharField(required=False)
    supplier = serializers.CharField(required=False)
    search = serializers.CharField(required=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class MaterialSerializer(serializers.ModelSerializer):
    class Meta:
        model = Material
        fields = [
            "id",
            "name",
            "category",
            "price",
            "quantity",
            "supplier",
            "type",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
