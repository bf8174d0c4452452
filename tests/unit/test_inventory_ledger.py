"""Unit tests for InventoryLedger.

Covers:
- Reservation decrements stock and refuses to go negative.
- Restoration increments stock.
- Administrative overwrite.
- Quantity validation and unknown materials.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.materials.exceptions import InsufficientStock, InvalidQuantity, MaterialNotFound

pytestmark = pytest.mark.unit


class TestReserve:
    def test_reserve_decrements_stock(self, services, make_material):
        material = make_material(quantity=50)

        result = services.ledger.reserve(material.id, 2)

        assert result.quantity == 48
        assert services.materials.get_material(material.id).quantity == 48

    def test_reserve_entire_stock(self, services, make_material):
        material = make_material(quantity=5)

        services.ledger.reserve(material.id, 5)

        assert services.materials.get_material(material.id).quantity == 0

    def test_reserve_more_than_available_raises(self, services, make_material):
        material = make_material(quantity=50)

        with pytest.raises(InsufficientStock) as exc_info:
            services.ledger.reserve(material.id, 51)

        assert exc_info.value.kind == "InsufficientStock"
        assert exc_info.value.context["requested"] == 51
        assert exc_info.value.context["available"] == 50
        assert services.materials.get_material(material.id).quantity == 50

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_reserve_non_positive_quantity_raises(self, services, make_material, quantity):
        material = make_material(quantity=10)

        with pytest.raises(InvalidQuantity):
            services.ledger.reserve(material.id, quantity)

    def test_reserve_unknown_material_raises(self, services):
        with pytest.raises(MaterialNotFound):
            services.ledger.reserve(uuid4(), 1)


class TestRestore:
    def test_restore_increments_stock(self, services, make_material):
        material = make_material(quantity=10)

        result = services.ledger.restore(material.id, 3)

        assert result.quantity == 13

    def test_restore_unknown_material_raises(self, services):
        with pytest.raises(MaterialNotFound):
            services.ledger.restore(uuid4(), 3)

    def test_restore_zero_raises(self, services, make_material):
        material = make_material(quantity=10)

        with pytest.raises(InvalidQuantity):
            services.ledger.restore(material.id, 0)


class TestSetQuantity:
    def test_overwrites_stock(self, services, make_material):
        material = make_material(quantity=10)

        services.ledger.set_quantity(material.id, 250)

        assert services.materials.get_material(material.id).quantity == 250

    def test_zero_is_allowed(self, services, make_material):
        material = make_material(quantity=10)

        services.ledger.set_quantity(material.id, 0)

        assert services.materials.get_material(material.id).quantity == 0

    def test_negative_raises(self, services, make_material):
        material = make_material(quantity=10)

        with pytest.raises(InvalidQuantity):
            services.ledger.set_quantity(material.id, -5)

        assert services.materials.get_material(material.id).quantity == 10
