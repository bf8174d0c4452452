"""Service wiring (composition root).

Builds every application service over one ``Persistence`` bundle so
that they share a single unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from modules.core.persistence import Persistence, get_persistence
from modules.materials.ledger import InventoryLedger
from modules.materials.services import MaterialService
from modules.orders.services import OrderService
from modules.projects.services import ProjectService
from modules.suppliers.services import SupplierService
from modules.tracking.services import StatusWorkflowService


@dataclass(frozen=True)
class Services:
    ledger: InventoryLedger
    materials: MaterialService
    orders: OrderService
    projects: ProjectService
    workflow: StatusWorkflowService
    suppliers: SupplierService


def build_services(persistence: Persistence) -> Services:
    uow = persistence.unit_of_work
    ledger = InventoryLedger(persistence.materials, uow)
    workflow = StatusWorkflowService(
        persistence.status_updates, persistence.projects, persistence.users, uow
    )
    projects = ProjectService(
        persistence.projects, persistence.orders, persistence.status_updates, workflow, uow
    )
    return Services(
        ledger=ledger,
        materials=MaterialService(persistence.materials, ledger, uow),
        orders=OrderService(
            persistence.orders, persistence.materials, ledger, projects, workflow, uow
        ),
        projects=projects,
        workflow=workflow,
        suppliers=SupplierService(persistence.orders),
    )


@lru_cache(maxsize=None)
def get_services() -> Services:
    return build_services(get_persistence())
