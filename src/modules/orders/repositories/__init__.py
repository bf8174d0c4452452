"""Order repositories package."""

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.repositories.interfaces import IOrderRepository
from modules.orders.repositories.memory import OrderMemoryRepository

__all__ = ["IOrderRepository", "OrderDjangoRepository", "OrderMemoryRepository"]
