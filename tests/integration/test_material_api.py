"""Integration tests for the material catalog API."""

import pytest

from modules.accounts.constants import Role
from modules.materials.models import Material

pytestmark = pytest.mark.integration

URL = "/api/v1/materials/"


class TestMaterialAPI:
    def test_warehouse_creates_material(self, warehouse_client):
        response = warehouse_client.post(
            URL,
            {
                "name": "Oak cabinet door",
                "category": "Doors",
                "price": "2450.00",
                "quantity": 40,
                "supplier": "Hsinchu Woodworks",
                "type": "FINISHED",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["price"] == "2450.0000"
        assert Material.objects.filter(id=data["id"]).exists()

    def test_pm_cannot_create_material(self, client_for):
        response = client_for(Role.PM).post(
            URL,
            {"name": "X", "category": "Y", "price": "1.00", "type": "AUXILIARY"},
            format="json",
        )

        assert response.status_code == 403
        assert response.json()["errors"][0]["code"] == "catalog_permission_denied"

    def test_invalid_payload_returns_400(self, warehouse_client):
        response = warehouse_client.post(
            URL, {"name": "X", "category": "Y", "price": "-1", "type": "OTHER"}, format="json"
        )

        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "validation_error"
        attrs = {error["attr"] for error in data["errors"]}
        assert {"price", "type"} <= attrs

    def test_list_and_filter(self, user_client, material):
        response = user_client.get(URL, {"type": "AUXILIARY"})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["id"] == str(material.id)

    def test_retrieve_unknown_returns_404(self, user_client):
        response = user_client.get(f"{URL}00000000-0000-7000-8000-000000000000/")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "material_not_found"

    def test_set_quantity(self, warehouse_client, material):
        response = warehouse_client.put(
            f"{URL}{material.id}/quantity/", {"quantity": 75}, format="json"
        )

        assert response.status_code == 200
        material.refresh_from_db()
        assert material.quantity == 75

    def test_categories_and_suppliers(self, user_client, material):
        assert user_client.get(f"{URL}categories/").json() == ["Adhesives"]
        assert user_client.get(f"{URL}suppliers/").json() == ["Jin Hardware"]

    def test_delete(self, client_for, material):
        response = client_for(Role.ADMIN).delete(f"{URL}{material.id}/")

        assert response.status_code == 204
        assert not Material.objects.filter(id=material.id).exists()
