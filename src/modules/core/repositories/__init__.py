"""Core persistence contracts and backends."""

from modules.core.repositories.interfaces import IRepository, IUnitOfWork

__all__ = ["IRepository", "IUnitOfWork"]
