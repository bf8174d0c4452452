"""Material API views.

Thin adapters over ``MaterialService``: validate the payload with a DRF
serializer, build a DTO, call the service with the caller's ``Actor``.
Domain errors propagate to ``api_exception_handler``.
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
from modules.materials.dtos import CreateMaterialDTO, UpdateMaterialDTO
from modules.materials.serializers import (
    CreateMaterialSerializer,
    MaterialFilterSerializer,
    MaterialQuantitySerializer,
    MaterialSerializer,
    UpdateMaterialSerializer,
)


class MaterialViewSet(GenericViewSet):
    """Material catalog endpoints (``/api/v1/materials/``)."""

    serializer_class = MaterialSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_services().materials

    def list(self, request: Request) -> Response:
        filters = MaterialFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        page, limit = paging_params(request)
        result = self._service.list_materials(dict(filters.validated_data), page, limit)
        return paginated_response(result, MaterialSerializer)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(MaterialSerializer(self._service.get_material(pk)).data)

    def create(self, request: Request) -> Response:
        payload = CreateMaterialSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        material = self._service.create_material(
            actor_from_user(request.user), CreateMaterialDTO(**payload.validated_data)
        )
        return Response(MaterialSerializer(material).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        payload = UpdateMaterialSerializer(data=request.data, partial=True)
        payload.is_valid(raise_exception=True)
        material = self._service.update_material(
            actor_from_user(request.user), pk, UpdateMaterialDTO(**payload.validated_data)
        )
        return Response(MaterialSerializer(material).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_material(actor_from_user(request.user), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["put"])
    def quantity(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/materials/{pk}/quantity/ (stock overwrite)."""
        payload = MaterialQuantitySerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        material = self._service.set_quantity(
            actor_from_user(request.user), pk, payload.validated_data["quantity"]
        )
        return Response(MaterialSerializer(material).data)

    @action(detail=False, methods=["get"])
    def categories(self, request: Request) -> Response:
        return Response(self._service.list_categories(request.query_params.get("type")))

    @action(detail=False, methods=["get"])
    def suppliers(self, request: Request) -> Response:
        return Response(self._service.list_suppliers(request.query_params.get("type")))
