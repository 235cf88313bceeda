"""
Repository Base - shared plumbing for Django ORM repositories.

Provides what every repository needs:
- Entity <-> Model conversion hooks
- Ordering from resolved SortClause lists
- Paging into PagedResultDTO

Principles:
- Repositories are stateless
- No business logic
- Only persistence and queries
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Sequence, Type, TypeVar
import logging

from django.db import models
from django.db.models import QuerySet

from src.core.companies.dtos import PagedResultDTO
from src.core.sorting import SortClause

logger = logging.getLogger(__name__)

T = TypeVar("T")  # Entity type
M = TypeVar("M", bound=models.Model)  # Model type


def apply_sort(qs: QuerySet, sort_clauses: Sequence[SortClause], default: Sequence[str]) -> QuerySet:
    """
    Order a queryset by resolved sort clauses.

    Args:
        qs: Base queryset
        sort_clauses: Clauses from PropertyMapping.sort_clauses()
        default: Ordering used when no clause is given

    Returns:
        Ordered queryset
    """
    order_by = [clause.order_by for clause in sort_clauses] or list(default)
    return qs.order_by(*order_by)


class BaseRepository(ABC, Generic[T, M]):
    """
    Abstract base for Django repositories.

    Type Parameters:
        T: Domain entity type
        M: Django model type

    Example:
        class EmployeeStore(BaseRepository[EmployeeEntity, EmployeeModel]):
            model_class = EmployeeModel

            def to_entity(self, model):
                return EmployeeMapper.to_entity(model)

            def to_model(self, entity):
                return EmployeeMapper.to_model(entity)
    """

    model_class: Type[M]

    # Ordering when the client asks for none
    default_ordering: Sequence[str] = ("id",)

    @abstractmethod
    def to_entity(self, model: M) -> T:
        raise NotImplementedError

    @abstractmethod
    def to_model(self, entity: T) -> M:
        raise NotImplementedError

    def _get_base_queryset(self) -> QuerySet:
        return self.model_class.objects.all()

    def _save(self, entity: T) -> None:
        """Insert or update the row of ``entity`` (update_or_create by id)."""
        model = self.to_model(entity)

        defaults = {
            field.attname: getattr(model, field.attname)
            for field in model._meta.concrete_fields
            if not field.primary_key
        }
        self.model_class.objects.update_or_create(id=model.pk, defaults=defaults)

        logger.debug(f"{self.model_class.__name__} saved: {model.pk}")

    def _get(self, **lookup) -> Optional[T]:
        try:
            return self.to_entity(self._get_base_queryset().get(**lookup))
        except self.model_class.DoesNotExist:
            return None

    def _list(self, qs: QuerySet, sort_clauses: Sequence[SortClause]) -> List[T]:
        qs = apply_sort(qs, sort_clauses, self.default_ordering)
        return [self.to_entity(model) for model in qs]

    def _paginate(
        self,
        qs: QuerySet,
        sort_clauses: Sequence[SortClause],
        page_number: int,
        page_size: int,
    ) -> PagedResultDTO:
        """
        Sort, count and slice a queryset.

        Returns:
            Page of entities with paging metadata
        """
        qs = apply_sort(qs, sort_clauses, self.default_ordering)
        total = qs.count()

        offset = (page_number - 1) * page_size
        items = [self.to_entity(model) for model in qs[offset:offset + page_size]]

        return PagedResultDTO(
            items=items,
            total_count=total,
            current_page=page_number,
            page_size=page_size,
        )
