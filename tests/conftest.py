import itertools
from decimal import Decimal

import pytest
from django.contrib.auth.models import Group
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.accounts.actors import Actor
from modules.accounts.constants import Role
from modules.core.container import build_services
from modules.core.persistence import BACKENDS, DJANGO, build_persistence
from modules.materials.constants import MaterialType
from modules.materials.dtos import CreateMaterialDTO
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _reset_throttle_cache():
    """Throttle counters live in the default cache; start every test clean."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Workflow fixtures (run against both persistence backends)
# ---------------------------------------------------------------------------


@pytest.fixture(params=BACKENDS)
def persistence(request):
    return build_persistence(request.param)


@pytest.fixture()
def services(persistence):
    return build_services(persistence)


@pytest.fixture()
def make_actor(persistence, django_user_model):
    """Create a user with *role* in the active backend and return its ``Actor``."""
    ids = itertools.count(1)

    def _make(role: str = Role.USER, username: str | None = None) -> Actor:
        number = next(ids)
        username = username or f"{str(role).lower()}-{number}"
        if persistence.backend == DJANGO:
            user = django_user_model.objects.create_user(username=username, password="pass12345")
            if role != Role.USER:
                group, _ = Group.objects.get_or_create(name=role)
                user.groups.add(group)
            return Actor(id=user.pk, role=role)
        persistence.users.register(number, username, role)
        return Actor(id=number, role=role)

    return _make


@pytest.fixture()
def admin(make_actor):
    return make_actor(Role.ADMIN, "admin")


@pytest.fixture()
def warehouse(make_actor):
    return make_actor(Role.WAREHOUSE, "warehouse")


@pytest.fixture()
def pm(make_actor):
    return make_actor(Role.PM, "pm")


@pytest.fixture()
def am(make_actor):
    return make_actor(Role.AM, "am")


@pytest.fixture()
def plain_user(make_actor):
    return make_actor(Role.USER, "plain")


@pytest.fixture()
def make_material(services, admin):
    def _make(
        name: str = "Wood screws",
        quantity: int = 100,
        price: str = "10.00",
        supplier: str = "Jin Hardware",
        type: str = MaterialType.AUXILIARY,
        category: str = "Fasteners",
    ):
        return services.materials.create_material(
            admin,
            CreateMaterialDTO(
                name=name,
                category=category,
                price=Decimal(price),
                quantity=quantity,
                supplier=supplier,
                type=type,
            ),
        )

    return _make


@pytest.fixture()
def place_order(services):
    """Place an order of ``(material, quantity)`` lines for *actor*."""

    def _place(actor, *lines, kind: str = "GENERAL", name: str = ""):
        dto = CreateOrderDTO(
            kind=kind,
            name=name,
            items=[
                CreateOrderItemDTO(material_id=material.id, quantity=quantity)
                for material, quantity in lines
            ],
        )
        return services.orders.create_order(actor, dto)

    return _place
