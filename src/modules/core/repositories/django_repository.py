"""Django ORM unit of work."""

from __future__ import annotations

from typing import Callable, ContextManager

from django.db import transaction

from modules.core.repositories.interfaces import IUnitOfWork


class DjangoUnitOfWork(IUnitOfWork):
    """``transaction.atomic`` wrapper; nested blocks become savepoints."""

    def __init__(self, using: str | None = None) -> None:
        self._using = using

    def atomic(self) -> ContextManager[None]:
        return transaction.atomic(using=self._using)

    def on_commit(self, callback: Callable[[], None]) -> None:
        transaction.on_commit(callback, using=self._using)
