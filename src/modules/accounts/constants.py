"""Account roles.

Roles are modelled as Django auth groups of the same name; a superuser
is always ``ADMIN``.
"""

from django.db import models


class Role(models.TextChoices):
    PM = "PM", "Project manager"
    AM = "AM", "Account manager"
    WAREHOUSE = "WAREHOUSE", "Warehouse"
    ADMIN = "ADMIN", "Administrator"
    USER = "USER", "User"


# Checked in this order when a user belongs to several role groups.
ROLE_PRECEDENCE: tuple[str, ...] = (Role.ADMIN, Role.WAREHOUSE, Role.PM, Role.AM)

STATUS_WRITER_ROLES: frozenset[str] = frozenset({Role.WAREHOUSE, Role.ADMIN})
CATALOG_WRITER_ROLES: frozenset[str] = frozenset({Role.WAREHOUSE, Role.ADMIN})
ORDER_READER_ROLES: frozenset[str] = frozenset({Role.WAREHOUSE, Role.ADMIN})
