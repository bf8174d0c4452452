"""Unit tests for actor and role resolution."""

from __future__ import annotations

import pytest
from django.contrib.auth.models import Group

from modules.accounts.actors import Actor, actor_from_user, resolve_role
from modules.accounts.constants import Role
from modules.accounts.repositories import UserDjangoRepository, UserMemoryRepository
from modules.core.repositories.memory import InMemoryStore

pytestmark = pytest.mark.unit


class TestResolveRole:
    def test_no_groups_is_plain_user(self):
        assert resolve_role([]) == Role.USER

    def test_superuser_is_admin(self):
        assert resolve_role([], is_superuser=True) == Role.ADMIN

    @pytest.mark.parametrize(
        "groups,expected",
        [
            (["PM"], Role.PM),
            (["AM", "PM"], Role.PM),
            (["PM", "WAREHOUSE"], Role.WAREHOUSE),
            (["WAREHOUSE", "ADMIN"], Role.ADMIN),
            (["staff"], Role.USER),
        ],
    )
    def test_precedence(self, groups, expected):
        assert resolve_role(groups) == expected


class TestActor:
    def test_owns_compares_ids_loosely(self):
        actor = Actor(id=7, role=Role.USER)

        assert actor.owns(7)
        assert actor.owns("7")
        assert not actor.owns(8)
        assert not actor.owns(None)

    def test_is_admin(self):
        assert Actor(id=1, role=Role.ADMIN).is_admin
        assert not Actor(id=1, role=Role.WAREHOUSE).is_admin

    def test_from_django_user(self, django_user_model):
        user = django_user_model.objects.create_user(username="wh", password="pass12345")
        user.groups.add(Group.objects.create(name=Role.WAREHOUSE))

        actor = actor_from_user(user)

        assert actor == Actor(id=user.pk, role=Role.WAREHOUSE)


class TestUserMemoryRepository:
    @pytest.fixture()
    def directory(self):
        return UserMemoryRepository(InMemoryStore(), directory=UserDjangoRepository())

    def test_registered_user_wins(self, directory):
        directory.register(5, "pm", Role.PM)

        assert directory.get_by_id(5).username == "pm"

    def test_unregistered_user_resolves_through_django(self, directory, django_user_model):
        user = django_user_model.objects.create_user(username="wh", password="pass12345")
        user.groups.add(Group.objects.create(name=Role.WAREHOUSE))

        summary = directory.get_by_id(user.pk)

        assert summary.username == "wh"
        assert summary.role == Role.WAREHOUSE

    def test_batch_lookup_mixes_registered_and_django_users(self, directory, django_user_model):
        user = django_user_model.objects.create_user(username="am", password="pass12345")
        directory.register(user.pk + 1000, "pm", Role.PM)

        found = directory.get_many([user.pk, user.pk + 1000, user.pk + 2000])

        assert {uid: s.username for uid, s in found.items()} == {
            user.pk: "am",
            user.pk + 1000: "pm",
        }

    def test_unknown_user_is_none(self, directory):
        assert directory.get_by_id(987654) is None

    def test_without_directory_only_registered_users_resolve(self, django_user_model):
        user = django_user_model.objects.create_user(username="am", password="pass12345")

        assert UserMemoryRepository(InMemoryStore()).get_by_id(user.pk) is None
