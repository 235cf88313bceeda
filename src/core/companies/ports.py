"""
Ports (Interfaces) of the Companies domain.

Defines the contract the persistence adapters implement.

Principle:
    Core defines interfaces -> Adapters implement them
    Dependencies always point towards the Core

Sorting is expressed as SortClause lists already resolved through the
property mapping; repositories never see client field names.
"""

from enum import Enum
from typing import Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from src.core.sorting import SortClause, SortDirection

from .dtos import PagedResultDTO
from .entities import CompanyEntity, EmployeeEntity, Gender


@runtime_checkable
class CompanyRepository(Protocol):
    """
    Persistence interface of the Company aggregate.

    Implementations:
    - DjangoCompanyRepository (Django ORM)
    - InMemoryCompanyRepository (tests)
    """

    def list_companies(
        self,
        company_name: Optional[str],
        search_term: Optional[str],
        sort_clauses: Sequence[SortClause],
        page_number: int,
        page_size: int,
    ) -> PagedResultDTO:
        """
        Filter, search, sort and page companies.

        Args:
            company_name: Exact name filter (trimmed, optional)
            search_term: Substring searched in name and introduction
            sort_clauses: Resolved ordering; empty means default order
            page_number: 1-based page
            page_size: Items per page

        Returns:
            Page of CompanyEntity
        """
        ...

    def get_company(self, company_id: str) -> Optional[CompanyEntity]:
        """Return the company (without employees) or None."""
        ...

    def get_companies(self, company_ids: Iterable[str]) -> List[CompanyEntity]:
        """Return the existing companies among ``company_ids``."""
        ...

    def company_exists(self, company_id: str) -> bool:
        ...

    def add_company(self, company: CompanyEntity) -> None:
        """Persist a new company together with its employees."""
        ...

    def delete_company(self, company_id: str) -> None:
        """Remove a company and, in cascade, its employees."""
        ...

    def list_employees(
        self,
        company_id: str,
        gender: Optional[Gender],
        q: Optional[str],
        sort_clauses: Sequence[SortClause],
    ) -> List[EmployeeEntity]:
        """
        Filter, search and sort the employees of a company.

        Args:
            company_id: Owning company
            gender: Gender filter (optional)
            q: Substring searched in employee number, first and last name
            sort_clauses: Resolved ordering; empty means default order
        """
        ...

    def get_employee(self, company_id: str, employee_id: str) -> Optional[EmployeeEntity]:
        ...

    def save_employee(self, employee: EmployeeEntity) -> None:
        """Insert or update an employee."""
        ...

    def delete_employee(self, employee: EmployeeEntity) -> None:
        ...


def _sort_key(value):
    if isinstance(value, Enum):
        value = value.value
    return (value is None, value if value is not None else "")


def sort_in_memory(items: List, sort_clauses: Sequence[SortClause], default_field: str) -> List:
    """
    Sort entities by clauses, mimicking ``QuerySet.order_by``.

    Applies stable sorts from the last clause to the first.
    """
    clauses = list(sort_clauses) or [SortClause(default_field)]
    result = list(items)
    for clause in reversed(clauses):
        result.sort(
            key=lambda item: _sort_key(getattr(item, clause.field)),
            reverse=clause.direction is SortDirection.DESC,
        )
    return result


class InMemoryCompanyRepository:
    """
    In-memory implementation of CompanyRepository.

    Useful for:
    - Unit tests
    - Prototyping

    Do not use in production!

    Example:
        repo = InMemoryCompanyRepository()
        repo.add_company(company)
        found = repo.get_company(company.id)
    """

    def __init__(self):
        self._companies: dict[str, CompanyEntity] = {}
        self._employees: dict[str, EmployeeEntity] = {}

    def list_companies(self, company_name, search_term, sort_clauses, page_number, page_size):
        companies = list(self._companies.values())

        if company_name and company_name.strip():
            name = company_name.strip()
            companies = [c for c in companies if c.name == name]

        if search_term and search_term.strip():
            term = search_term.strip().casefold()
            companies = [
                c for c in companies
                if term in c.name.casefold() or term in (c.introduction or "").casefold()
            ]

        companies = sort_in_memory(companies, sort_clauses, "name")
        start = (page_number - 1) * page_size
        return PagedResultDTO(
            items=companies[start:start + page_size],
            total_count=len(companies),
            current_page=page_number,
            page_size=page_size,
        )

    def get_company(self, company_id):
        return self._companies.get(company_id)

    def get_companies(self, company_ids):
        return [self._companies[i] for i in company_ids if i in self._companies]

    def company_exists(self, company_id):
        return company_id in self._companies

    def add_company(self, company):
        self._companies[company.id] = company
        for employee in company.employees:
            employee.company_id = company.id
            self._employees[employee.id] = employee

    def delete_company(self, company_id):
        self._companies.pop(company_id, None)
        self._employees = {
            key: employee for key, employee in self._employees.items()
            if employee.company_id != company_id
        }

    def list_employees(self, company_id, gender, q, sort_clauses):
        employees = [e for e in self._employees.values() if e.company_id == company_id]

        if gender is not None:
            employees = [e for e in employees if e.gender == gender]

        if q and q.strip():
            term = q.strip().casefold()
            employees = [
                e for e in employees
                if term in e.employee_no.casefold()
                or term in e.first_name.casefold()
                or term in e.last_name.casefold()
            ]

        return sort_in_memory(employees, sort_clauses, "employee_no")

    def get_employee(self, company_id, employee_id):
        employee = self._employees.get(employee_id)
        if employee is None or employee.company_id != company_id:
            return None
        return employee

    def save_employee(self, employee):
        self._employees[employee.id] = employee

    def delete_employee(self, employee):
        self._employees.pop(employee.id, None)

    def clear(self) -> None:
        """Remove everything (handy in tests)."""
        self._companies.clear()
        self._employees.clear()
