"""Status workflow serializers."""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from modules.tracking.constants import STATUS_VALUE_MAX_LENGTH, StatusType
from modules.tracking.models import StatusUpdate


class AppendStatusSerializer(serializers.Serializer):
    """Either a ready ``status_value`` or ``primary``/``secondary`` parts.

    Parts are composed per column (ORDER: ``"a - b"``, PICKUP: ``"a b"``).
    """

    status_type = serializers.ChoiceField(choices=StatusType.choices)
    status_value = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        max_length=STATUS_VALUE_MAX_LENGTH,
    )
    primary = serializers.CharField(required=False, allow_blank=True)
    secondary = serializers.CharField(required=False, allow_blank=True)
    additional_data = serializers.JSONField(required=False, allow_null=True)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        if "status_value" not in attrs and "primary" not in attrs:
            raise serializers.ValidationError(
                {"status_value": "Provide status_value or primary."}
            )
        data = attrs.get("additional_data")
        if data is not None and not isinstance(data, dict):
            raise serializers.ValidationError(
                {"additional_data": "Additional data must be an object."}
            )
        return attrs


class StatusUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = StatusUpdate
        fields = [
            "id",
            "project_id",
            "author_id",
            "author_role",
            "status_type",
            "status_value",
            "additional_data",
            "created_at",
        ]
        read_only_fields = fields


class StatusHistorySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    status_type = serializers.CharField()
    status_value = serializers.CharField()
    additional_data = serializers.JSONField()
    author_id = serializers.IntegerField(allow_null=True)
    author_username = serializers.CharField(allow_null=True)
    author_role = serializers.CharField()
    created_at = serializers.DateTimeField()
