from decimal import Decimal

import pytest
from django.contrib.auth.models import Group
from rest_framework.test import APIClient

from modules.accounts.constants import Role
from modules.materials.constants import MaterialType
from modules.materials.models import Material


@pytest.fixture()
def client_for(django_user_model):
    """Return an APIClient force-authenticated as a new user with *role*."""

    def _client(role: str = Role.USER, username: str | None = None):
        user = django_user_model.objects.create_user(
            username=username or f"api-{str(role).lower()}", password="pass12345"
        )
        if role != Role.USER:
            group, _ = Group.objects.get_or_create(name=role)
            user.groups.add(group)
        client = APIClient()
        client.force_authenticate(user=user)
        client.user = user
        return client

    return _client


@pytest.fixture()
def warehouse_client(client_for):
    return client_for(Role.WAREHOUSE)


@pytest.fixture()
def user_client(client_for):
    return client_for(Role.USER)


@pytest.fixture()
def material():
    return Material.objects.create(
        name="Wood glue 1L",
        category="Adhesives",
        price=Decimal("100.50"),
        quantity=50,
        supplier="Jin Hardware",
        type=MaterialType.AUXILIARY,
    )
