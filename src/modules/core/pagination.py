"""Pagination helpers for views backed by service-level ``Page`` objects."""

from __future__ import annotations

from typing import Tuple, Type

from django.conf import settings
from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response

from modules.core.dtos import Page, clamp_paging


def paging_params(request: Request) -> Tuple[int, int]:
    """Read ``page`` / ``limit`` query params, falling back to defaults."""
    default_limit = settings.REST_FRAMEWORK.get("PAGE_SIZE", 20)
    try:
        page = int(request.query_params.get("page", 1))
        limit = int(request.query_params.get("limit", default_limit))
    except (TypeError, ValueError) as exc:
        raise serializers.ValidationError(
            {"page": "page and limit must be integers."}
        ) from exc
    return clamp_paging(page, limit)


def paginated_response(
    page: Page, serializer_class: Type[serializers.BaseSerializer]
) -> Response:
    return Response(
        {
            "count": page.total,
            "page": page.page,
            "limit": page.limit,
            "total_pages": page.total_pages,
            "results": serializer_class(page.items, many=True).data,
        }
    )
