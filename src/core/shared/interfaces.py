"""
Interfaces (Ports) - Contracts between Core and Adapters.

The core defines the interfaces; adapters implement them. Dependencies
always point towards the core.

Ports defined here:
- UnitOfWork: transactional boundary for write use cases
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Unit of Work - coordinates atomic transactions.

    Several persistence operations run as one unit: either all of them
    are stored or none is.

    Pattern: Context Manager
        with uow:
            repo.add_company(company)
            repo.save_employee(employee)
        # Commit when the block exits normally
        # Rollback when it raises

    Example:
        class DjangoUnitOfWork(UnitOfWork):
            def commit(self):
                ...
    """

    def __enter__(self) -> "UnitOfWork":
        """
        Start the transaction context.

        Returns:
            Self so it can be used as a context manager
        """
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """
        Finish the transaction context.

        Returns:
            False so exceptions propagate
        """
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False

    @abstractmethod
    def _begin_transaction(self) -> None:
        """Start a new transaction."""
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """Persist every change made inside the context."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """
        Undo every change made inside the context.

        Called automatically when the `with` block raises.
        """
        raise NotImplementedError


# Type alias
UoW = UnitOfWork
