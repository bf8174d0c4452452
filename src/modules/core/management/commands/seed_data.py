from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand

from modules.accounts.actors import actor_from_user
from modules.accounts.constants import Role
from modules.core.container import get_services
from modules.materials.constants import MaterialType
from modules.materials.dtos import CreateMaterialDTO
from modules.materials.models import Material

ROLE_GROUPS = (Role.PM, Role.AM, Role.WAREHOUSE, Role.ADMIN)

DEMO_USERS = (
    ("pm", "pm12345", Role.PM),
    ("am", "am12345", Role.AM),
    ("warehouse", "warehouse123", Role.WAREHOUSE),
    ("admin", "admin123", Role.ADMIN),
    ("user", "user123", None),
)

SEED_MATERIALS = (
    ("Wood screws 4x40", "Fasteners", "0.3500", 5000, "Jin Hardware", MaterialType.AUXILIARY),
    ("Wood glue 1L", "Adhesives", "180.0000", 120, "Jin Hardware", MaterialType.AUXILIARY),
    ("Sanding paper #240", "Abrasives", "12.5000", 800, "Da-An Supply", MaterialType.AUXILIARY),
    ("Edge banding 22mm", "Trims", "3.2000", 2500, "", MaterialType.AUXILIARY),
    ("Oak cabinet door", "Doors", "2450.0000", 40, "Hsinchu Woodworks", MaterialType.FINISHED),
    ("Laminate countertop", "Countertops", "6800.0000", 15, "Hsinchu Woodworks", MaterialType.FINISHED),
    ("Drawer module 60cm", "Modules", "3200.5000", 25, "Taichung Modular", MaterialType.FINISHED),
    ("Glass shelf 80cm", "Shelving", "980.0000", 60, "", MaterialType.FINISHED),
)


class Command(BaseCommand):
    help = "Seed database with role groups, demo users and a material catalog."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        groups = self._seed_groups()
        users_created = self._seed_users(groups)
        materials_created = self._seed_materials()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"groups={len(groups)}, "
                f"users={users_created}, "
                f"materials={materials_created}"
            )
        )

    def _seed_groups(self) -> dict[str, Group]:
        return {role: Group.objects.get_or_create(name=role)[0] for role in ROLE_GROUPS}

    def _seed_users(self, groups: dict[str, Group]) -> int:
        User = get_user_model()
        created = 0
        for username, password, role in DEMO_USERS:
            if User.objects.filter(username=username).exists():
                continue
            user = User.objects.create_user(
                username, password=password, is_staff=role == Role.ADMIN
            )
            if role is not None:
                user.groups.add(groups[role])
            created += 1
        return created

    def _seed_materials(self) -> int:
        self.stdout.write("Creating materials...")
        admin = get_user_model().objects.get(username="admin")
        actor = actor_from_user(admin)
        catalog = get_services().materials
        created = 0
        for name, category, price, quantity, supplier, type_ in SEED_MATERIALS:
            if Material.objects.filter(name=name).exists():
                continue
            catalog.create_material(
                actor,
                CreateMaterialDTO(
                    name=name,
                    category=category,
                    price=Decimal(price),
                    quantity=quantity,
                    supplier=supplier,
                    type=type_,
                ),
            )
            created += 1
        return created
