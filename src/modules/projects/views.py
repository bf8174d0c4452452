"""Project and status workflow API views.

Reads are open to every authenticated user; appending to a status
column is restricted by ``StatusWorkflowService`` to warehouse staff and
administrators.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.actors import actor_from_user
from modules.core.container import get_services
from modules.core.pagination import paginated_response, paging_params
from modules.projects.serializers import ProjectFilterSerializer, ProjectSerializer
from modules.tracking.constants import StatusType
from modules.tracking.rules import compose_order_value, compose_pickup_value
from modules.tracking.serializers import (
    AppendStatusSerializer,
    StatusHistorySerializer,
    StatusUpdateSerializer,
)


class ProjectViewSet(GenericViewSet):
    """``/api/v1/projects/`` plus the status column endpoints."""

    serializer_class = ProjectSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        services = get_services()
        self._service = services.projects
        self._workflow = services.workflow

    def list(self, request: Request) -> Response:
        filters = ProjectFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        page, limit = paging_params(request)
        result = self._service.list_projects(dict(filters.validated_data), page, limit)
        return paginated_response(result, ProjectSerializer)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(ProjectSerializer(self._service.get_project(pk)).data)

    @action(detail=False, methods=["get"])
    def statistics(self, request: Request) -> Response:
        return Response(self._service.statistics().model_dump(mode="json"))

    @action(detail=False, methods=["get"], url_path=r"by-order/(?P<order_id>[^/.]+)")
    def by_order(self, request: Request, order_id: str | None = None) -> Response:
        return Response(ProjectSerializer(self._service.get_by_order(order_id)).data)

    # ------------------------------------------------------------------
    # Status columns
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get", "post"], url_path="status")
    def column_status(self, request: Request, pk: str | None = None) -> Response:
        """GET: latest value per column.  POST: append a value."""
        if request.method == "GET":
            latest = self._workflow.latest(pk)
            return Response(
                {
                    str(column): StatusUpdateSerializer(update).data if update else None
                    for column, update in latest.items()
                }
            )

        payload = AppendStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data
        status_type = data["status_type"]
        value = data.get("status_value")
        if value is None:
            if status_type == StatusType.PICKUP:
                value = compose_pickup_value(data["primary"], data.get("secondary", ""))
            elif status_type == StatusType.ORDER:
                value = compose_order_value(data["primary"], data.get("secondary", ""))
            else:
                value = data["primary"]
        update = self._workflow.append(
            pk,
            actor_from_user(request.user),
            status_type,
            value,
            data.get("additional_data"),
        )
        return Response(StatusUpdateSerializer(update).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def history(self, request: Request, pk: str | None = None) -> Response:
        return Response(StatusHistorySerializer(self._workflow.history(pk), many=True).data)

    @action(detail=True, methods=["get"])
    def summary(self, request: Request, pk: str | None = None) -> Response:
        return Response(self._workflow.summary(pk).model_dump(mode="json"))
