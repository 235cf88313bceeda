"""
Django ORM implementation of CompanyRepository.

Sorting arrives as SortClause lists already resolved by the property
mapping, so ``orderBy=name`` reaches the database as
``ORDER BY first_name, last_name``.
"""

from typing import Iterable, List, Optional, Sequence
import logging

from django.db.models import Q

from src.core.companies.dtos import PagedResultDTO
from src.core.companies.entities import CompanyEntity, EmployeeEntity, Gender
from src.core.sorting import SortClause

from src.adapters.django_app.shared.repository import BaseRepository

from .mappers import CompanyMapper, EmployeeMapper
from .models import CompanyModel, EmployeeModel

logger = logging.getLogger(__name__)


class DjangoEmployeeRepository(BaseRepository[EmployeeEntity, EmployeeModel]):
    """Employee rows; used through DjangoCompanyRepository."""

    model_class = EmployeeModel
    default_ordering = ("employee_no",)

    def to_entity(self, model):
        return EmployeeMapper.to_entity(model)

    def to_model(self, entity):
        return EmployeeMapper.to_model(entity)

    def list_for_company(
        self,
        company_id: str,
        gender: Optional[Gender],
        q: Optional[str],
        sort_clauses: Sequence[SortClause],
    ) -> List[EmployeeEntity]:
        qs = self._get_base_queryset().filter(company_id=company_id)

        if gender is not None:
            qs = qs.filter(gender=gender.value)

        if q and q.strip():
            term = q.strip()
            qs = qs.filter(
                Q(employee_no__icontains=term)
                | Q(first_name__icontains=term)
                | Q(last_name__icontains=term)
            )

        return self._list(qs, sort_clauses)

    def get_for_company(self, company_id: str, employee_id: str) -> Optional[EmployeeEntity]:
        return self._get(id=employee_id, company_id=company_id)

    def save(self, employee: EmployeeEntity) -> None:
        self._save(employee)

    def delete(self, employee_id: str) -> bool:
        deleted, _ = self.model_class.objects.filter(id=employee_id).delete()
        return deleted > 0


class DjangoCompanyRepository(BaseRepository[CompanyEntity, CompanyModel]):
    """
    Company aggregate persistence with the Django ORM.

    Example:
        repo = DjangoCompanyRepository()
        page = repo.list_companies(None, "internet", clauses, 1, 5)
    """

    model_class = CompanyModel
    default_ordering = ("name",)

    def __init__(self, employee_repo: Optional[DjangoEmployeeRepository] = None):
        self.employee_repo = employee_repo or DjangoEmployeeRepository()

    def to_entity(self, model):
        return CompanyMapper.to_entity(model)

    def to_model(self, entity):
        return CompanyMapper.to_model(entity)

    # =========================================================================
    # Companies
    # =========================================================================

    def list_companies(
        self,
        company_name: Optional[str],
        search_term: Optional[str],
        sort_clauses: Sequence[SortClause],
        page_number: int,
        page_size: int,
    ) -> PagedResultDTO:
        qs = self._get_base_queryset()

        if company_name and company_name.strip():
            qs = qs.filter(name=company_name.strip())

        if search_term and search_term.strip():
            term = search_term.strip()
            qs = qs.filter(Q(name__icontains=term) | Q(introduction__icontains=term))

        return self._paginate(qs, sort_clauses, page_number, page_size)

    def get_company(self, company_id: str) -> Optional[CompanyEntity]:
        return self._get(id=company_id)

    def get_companies(self, company_ids: Iterable[str]) -> List[CompanyEntity]:
        models = self._get_base_queryset().filter(id__in=list(company_ids))
        return CompanyMapper.to_entity_list(models)

    def company_exists(self, company_id: str) -> bool:
        return self.model_class.objects.filter(id=company_id).exists()

    def add_company(self, company: CompanyEntity) -> None:
        self._save(company)
        for employee in company.employees:
            self.employee_repo.save(employee)

    def delete_company(self, company_id: str) -> None:
        deleted, per_model = self.model_class.objects.filter(id=company_id).delete()
        logger.debug(f"Company {company_id} deleted ({per_model})")

    # =========================================================================
    # Employees
    # =========================================================================

    def list_employees(
        self,
        company_id: str,
        gender: Optional[Gender],
        q: Optional[str],
        sort_clauses: Sequence[SortClause],
    ) -> List[EmployeeEntity]:
        return self.employee_repo.list_for_company(company_id, gender, q, sort_clauses)

    def get_employee(self, company_id: str, employee_id: str) -> Optional[EmployeeEntity]:
        return self.employee_repo.get_for_company(company_id, employee_id)

    def save_employee(self, employee: EmployeeEntity) -> None:
        self.employee_repo.save(employee)

    def delete_employee(self, employee: EmployeeEntity) -> None:
        self.employee_repo.delete(employee.id)
