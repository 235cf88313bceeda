"""
Unit of Work - Django implementation.

Runs several repository operations inside one database transaction.

Responsibilities:
- Start/finish the transaction
- Coordinated commit/rollback

The transaction is a ``transaction.atomic()`` block entered by hand, so it
nests correctly inside an outer atomic block (a request or a test case)
as a savepoint.
"""

from typing import Optional
import logging

from django.db import transaction

from src.core.shared.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Django implementation of the Unit of Work.

    Example:
        with DjangoUnitOfWork() as uow:
            repo.add_company(company)
            repo.save_employee(employee)
        # committed here

    Example with rollback:
        with DjangoUnitOfWork():
            repo.add_company(company)
            raise ValidationError("...")
        # rolled back, the exception propagates
    """

    def __init__(self, using: Optional[str] = None):
        """
        Args:
            using: Database alias (default database when None)
        """
        super().__init__()
        self._using = using
        self._atomic = None
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        if self._atomic is not None:
            raise RuntimeError("Unit of work already in progress")

        self._committed = False
        self._rolled_back = False
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """Leave the atomic block normally, committing (or releasing the savepoint)."""
        if self._atomic is None:
            logger.warning("Commit without an active transaction")
            return

        atomic, self._atomic = self._atomic, None
        atomic.__exit__(None, None, None)
        self._committed = True
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        """
        Leave the atomic block as if it raised, discarding every change.

        Called automatically when the ``with`` block raises.
        """
        if self._atomic is None:
            return

        atomic, self._atomic = self._atomic, None
        transaction.set_rollback(True, using=self._using)
        atomic.__exit__(None, None, None)
        self._rolled_back = True
        logger.debug("Transaction rolled back")

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back


class InMemoryUnitOfWork(UnitOfWork):
    """
    In-memory Unit of Work for tests.

    Persists nothing; only records whether it committed or rolled back.

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            repo.add_company(company)

        assert uow.committed
    """

    def __init__(self):
        super().__init__()
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        pass

    def commit(self) -> None:
        self._committed = True

    def rollback(self) -> None:
        self._rolled_back = True

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    def reset(self) -> None:
        self._committed = False
        self._rolled_back = False
