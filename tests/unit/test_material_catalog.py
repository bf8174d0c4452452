"""Unit tests for MaterialService (catalog management)."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.materials.constants import MaterialType
from modules.materials.dtos import CreateMaterialDTO, UpdateMaterialDTO
from modules.materials.exceptions import (
    CatalogPermissionDenied,
    InvalidQuantity,
    MaterialInUse,
    MaterialNotFound,
)

pytestmark = pytest.mark.unit


def _dto(**overrides) -> CreateMaterialDTO:
    data = {
        "name": "Oak cabinet door",
        "category": "Doors",
        "price": Decimal("2450.00"),
        "quantity": 40,
        "supplier": "Hsinchu Woodworks",
        "type": MaterialType.FINISHED,
    }
    data.update(overrides)
    return CreateMaterialDTO(**data)


class TestCreateMaterial:
    def test_warehouse_creates_material(self, services, warehouse):
        material = services.materials.create_material(warehouse, _dto())

        stored = services.materials.get_material(material.id)
        assert stored.name == "Oak cabinet door"
        assert stored.quantity == 40
        assert stored.price == Decimal("2450.00")
        assert stored.type == MaterialType.FINISHED

    def test_missing_supplier_is_stored_blank(self, services, warehouse):
        material = services.materials.create_material(warehouse, _dto(supplier=None))

        assert services.materials.get_material(material.id).supplier == ""

    @pytest.mark.parametrize("role_fixture", ["pm", "am", "plain_user"])
    def test_other_roles_may_not_create(self, services, request, role_fixture):
        actor = request.getfixturevalue(role_fixture)

        with pytest.raises(CatalogPermissionDenied) as exc_info:
            services.materials.create_material(actor, _dto())

        assert exc_info.value.kind == "Forbidden"

    def test_dto_rejects_non_positive_price(self):
        with pytest.raises(ValidationError):
            _dto(price=Decimal("0"))

    def test_dto_rejects_negative_quantity(self):
        with pytest.raises(ValidationError):
            _dto(quantity=-1)


class TestUpdateMaterial:
    def test_partial_update_changes_only_given_fields(self, services, warehouse, make_material):
        material = make_material(price="10.00", supplier="Old Supplier")

        services.materials.update_material(
            warehouse, material.id, UpdateMaterialDTO(price=Decimal("12.5"))
        )

        stored = services.materials.get_material(material.id)
        assert stored.price == Decimal("12.5")
        assert stored.supplier == "Old Supplier"
        assert stored.quantity == material.quantity

    def test_update_unknown_material_raises(self, services, warehouse):
        with pytest.raises(MaterialNotFound):
            services.materials.update_material(
                warehouse, uuid4(), UpdateMaterialDTO(name="Renamed")
            )

    def test_set_quantity_requires_catalog_writer(self, services, pm, make_material):
        material = make_material(quantity=10)

        with pytest.raises(CatalogPermissionDenied):
            services.materials.set_quantity(pm, material.id, 99)

    def test_set_quantity_rejects_negative(self, services, warehouse, make_material):
        material = make_material(quantity=10)

        with pytest.raises(InvalidQuantity):
            services.materials.set_quantity(warehouse, material.id, -1)


class TestDeleteMaterial:
    def test_delete_unreferenced_material(self, services, admin, make_material):
        material = make_material()

        services.materials.delete_material(admin, material.id)

        with pytest.raises(MaterialNotFound):
            services.materials.get_material(material.id)

    def test_delete_referenced_material_is_blocked(
        self, services, admin, plain_user, make_material, place_order
    ):
        material = make_material(quantity=10)
        place_order(plain_user, (material, 1))

        with pytest.raises(MaterialInUse) as exc_info:
            services.materials.delete_material(admin, material.id)

        assert exc_info.value.kind == "InvalidState"
        assert services.materials.get_material(material.id).quantity == 9


class TestCatalogQueries:
    def test_list_filters_by_type(self, services, make_material):
        make_material(name="Screws", type=MaterialType.AUXILIARY)
        make_material(name="Door", type=MaterialType.FINISHED)

        page = services.materials.list_materials({"type": MaterialType.FINISHED})

        assert page.total == 1
        assert [m.name for m in page.items] == ["Door"]

    def test_list_search_matches_name(self, services, make_material):
        make_material(name="Wood glue")
        make_material(name="Glass shelf")

        page = services.materials.list_materials({"search": "glue"})

        assert [m.name for m in page.items] == ["Wood glue"]

    def test_list_paginates(self, services, make_material):
        for index in range(5):
            make_material(name=f"Item {index}")

        page = services.materials.list_materials(page=2, limit=2)

        assert page.total == 5
        assert page.total_pages == 3
        assert len(page.items) == 2

    def test_categories_are_distinct_and_sorted(self, services, make_material):
        make_material(name="A", category="Fasteners")
        make_material(name="B", category="Adhesives")
        make_material(name="C", category="Fasteners")

        assert services.materials.list_categories() == ["Adhesives", "Fasteners"]

    def test_suppliers_skip_blank(self, services, make_material):
        make_material(name="A", supplier="Jin Hardware")
        make_material(name="B", supplier="")
        make_material(name="C", supplier="Da-An Supply")

        assert services.materials.list_suppliers() == ["Da-An Supply", "Jin Hardware"]
