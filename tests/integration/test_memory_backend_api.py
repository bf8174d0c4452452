"""The full HTTP workflow with ``PERSISTENCE_BACKEND=memory``."""

import pytest

from modules.accounts.constants import Role
from modules.core.container import get_services
from modules.core.persistence import MEMORY, get_persistence
from modules.orders.models import Order

pytestmark = pytest.mark.integration


@pytest.fixture()
def memory_backend(settings):
    settings.PERSISTENCE_BACKEND = MEMORY
    get_persistence.cache_clear()
    get_services.cache_clear()
    yield
    get_persistence.cache_clear()
    get_services.cache_clear()


@pytest.fixture()
def project_id(memory_backend, warehouse_client, user_client):
    material = warehouse_client.post(
        "/api/v1/materials/",
        {
            "name": "Wood glue 1L",
            "category": "Adhesives",
            "price": "100.50",
            "quantity": 50,
            "supplier": "Jin Hardware",
            "type": "AUXILIARY",
        },
        format="json",
    )
    assert material.status_code == 201
    order = user_client.post(
        "/api/v1/orders/",
        {"items": [{"material_id": material.json()["id"], "quantity": 2}]},
        format="json",
    )
    assert order.status_code == 201
    return order.json()["project"]["id"]


class TestMemoryBackendWorkflow:
    def test_health_reports_memory_backend(self, memory_backend, client):
        data = client.get("/health").json()

        assert data["services"]["persistence"] == {"status": "up", "backend": "memory"}

    def test_orders_stay_out_of_the_database(self, project_id):
        assert Order.objects.count() == 0

    def test_status_columns_advance_to_completion(self, project_id, warehouse_client, user_client):
        url = f"/api/v1/projects/{project_id}/status/"
        steps = [
            {"status_type": "ORDER", "status_value": "Ordered"},
            {"status_type": "PICKUP", "status_value": "Picked"},
            {
                "status_type": "DELIVERY",
                "status_value": "Delivered",
                "additional_data": {
                    "time": "2024-03-02 10:00",
                    "address": "No. 7, Section 2, Zhongshan Rd",
                    "po": "PO-1001",
                    "deliveredBy": "Chen",
                },
            },
            {"status_type": "CHECK", "status_value": "(C.B)"},
        ]

        for step in steps:
            response = warehouse_client.post(url, step, format="json")
            assert response.status_code == 201, response.json()

        summary = user_client.get(f"/api/v1/projects/{project_id}/summary/").json()
        assert summary["completed"] is True
        assert summary["pickup"] == "Picked"

    def test_history_names_the_django_author(self, project_id, warehouse_client, user_client):
        warehouse_client.post(
            f"/api/v1/projects/{project_id}/status/",
            {"status_type": "ORDER", "status_value": "Ordered"},
            format="json",
        )

        history = user_client.get(f"/api/v1/projects/{project_id}/history/").json()

        assert history[0]["author_username"] == "api-user"
        assert history[-1]["author_username"] == "api-warehouse"
        assert history[-1]["author_role"] == Role.WAREHOUSE
