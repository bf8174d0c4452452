"""Project serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.projects.constants import ProjectStatus
from modules.projects.models import Project


class ProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = [
            "id",
            "order_id",
            "project_name",
            "overall_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProjectFilterSerializer(serializers.Serializer):
    overall_status = serializers.ChoiceField(choices=ProjectStatus.choices, required=False)
    order_id = serializers.UUIDField(required=False)
