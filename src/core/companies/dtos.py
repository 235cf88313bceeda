"""
Data Transfer Objects (DTOs) of the Companies domain.

DTOs are plain structures that carry data between layers, keeping
entities from leaking to the outer layers.

DTO kinds:
- Input DTOs: validated input (from Forms/APIs)
- Output DTOs: response representations; serialized in camelCase
- Query DTOs: list filters, search, paging, sorting and shaping

Output DTOs expose ``field_names()`` so the property checker can validate
``fields`` requests against them.
"""

from dataclasses import dataclass, field, fields as dataclass_fields
from datetime import date
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from .entities import CompanyEntity, EmployeeEntity


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


class CamelCaseOutputMixin:
    """Serializes a dataclass with camelCase keys in declaration order."""

    @classmethod
    def field_names(cls) -> List[str]:
        return [_camel_case(f.name) for f in dataclass_fields(cls)]

    def to_dict(self) -> Dict[str, Any]:
        return {_camel_case(f.name): getattr(self, f.name) for f in dataclass_fields(self)}


# =============================================================================
# INPUT DTOs
# =============================================================================

@dataclass(frozen=True)
class EmployeeAddInputDTO:
    """
    Input DTO for creating (or fully replacing) an employee.

    Attributes:
        employee_no: Employee number
        first_name: First name
        last_name: Last name
        gender: Gender name or value ("Male", "female", 0, 1)
        date_of_birth: Date of birth
    """

    employee_no: str
    first_name: str
    last_name: str
    gender: Any
    date_of_birth: date

    def to_dict(self) -> dict:
        return {
            "employee_no": self.employee_no,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "gender": self.gender,
            "date_of_birth": self.date_of_birth.isoformat(),
        }


# PUT carries the same payload as POST
EmployeeUpdateInputDTO = EmployeeAddInputDTO


@dataclass(frozen=True)
class CompanyAddInputDTO:
    """
    Input DTO for creating a company, optionally with its employees.

    Attributes:
        name: Company name
        country / industry / product / introduction: Optional details
        employees: Employees created together with the company
    """

    name: str
    country: Optional[str] = None
    industry: Optional[str] = None
    product: Optional[str] = None
    introduction: Optional[str] = None
    employees: Tuple[EmployeeAddInputDTO, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "country": self.country,
            "industry": self.industry,
            "product": self.product,
            "introduction": self.introduction,
            "employees": [employee.to_dict() for employee in self.employees],
        }


# =============================================================================
# OUTPUT DTOs
# =============================================================================

@dataclass(frozen=True)
class CompanyOutputDTO(CamelCaseOutputMixin):
    """Friendly representation of a company (id and name only)."""

    id: str
    company_name: str

    @classmethod
    def from_entity(cls, entity: CompanyEntity) -> "CompanyOutputDTO":
        return cls(id=entity.id, company_name=entity.name)


@dataclass(frozen=True)
class CompanyFullOutputDTO(CamelCaseOutputMixin):
    """Full representation of a company (vendor ``full`` media type)."""

    id: str
    name: str
    country: Optional[str]
    industry: Optional[str]
    product: Optional[str]
    introduction: Optional[str]

    @classmethod
    def from_entity(cls, entity: CompanyEntity) -> "CompanyFullOutputDTO":
        return cls(
            id=entity.id,
            name=entity.name,
            country=entity.country,
            industry=entity.industry,
            product=entity.product,
            introduction=entity.introduction,
        )


@dataclass(frozen=True)
class EmployeeOutputDTO(CamelCaseOutputMixin):
    """
    Output DTO of an employee.

    ``name`` joins first and last name; ``age`` is derived from the date of
    birth. Both are sortable through the employee property mapping.
    """

    id: str
    company_id: str
    employee_no: str
    name: str
    gender_display: str
    age: int

    @classmethod
    def from_entity(cls, entity: EmployeeEntity) -> "EmployeeOutputDTO":
        return cls(
            id=entity.id,
            company_id=entity.company_id,
            employee_no=entity.employee_no,
            name=entity.name,
            gender_display=entity.gender.display,
            age=entity.age,
        )


# =============================================================================
# QUERY DTOs
# =============================================================================

@dataclass(frozen=True)
class CompanyQueryDTO:
    """
    Query parameters of the company list.

    Attributes:
        company_name: Exact name filter (optional)
        search_term: Substring searched in name and introduction (optional)
        page_number: 1-based page number
        page_size: Items per page (capped at max_page_size)
        order_by: ``orderBy`` value, resolved through the company mapping
        fields: Data shaping field list (optional)
        max_page_size: Upper bound of page_size
    """

    company_name: Optional[str] = None
    search_term: Optional[str] = None
    page_number: int = 1
    page_size: int = 5
    order_by: str = "CompanyName"
    fields: Optional[str] = None
    max_page_size: int = 20

    def __post_init__(self):
        object.__setattr__(self, "page_number", max(1, self.page_number))
        object.__setattr__(self, "page_size", max(1, min(self.page_size, self.max_page_size)))

    def to_dict(self) -> dict:
        return {
            "company_name": self.company_name,
            "search_term": self.search_term,
            "page_number": self.page_number,
            "page_size": self.page_size,
            "order_by": self.order_by,
            "fields": self.fields,
        }


@dataclass(frozen=True)
class EmployeeQueryDTO:
    """
    Query parameters of a company's employee list.

    Attributes:
        company_id: Owning company
        gender: Gender filter (name or value, optional)
        q: Substring searched in employee number and names (optional)
        order_by: ``orderBy`` value, resolved through the employee mapping
        fields: Data shaping field list (optional)
    """

    company_id: str
    gender: Optional[str] = None
    q: Optional[str] = None
    order_by: str = "Name"
    fields: Optional[str] = None


T = TypeVar("T")


@dataclass
class PagedResultDTO(Generic[T]):
    """
    A page of results.

    Attributes:
        items: Items of the current page
        total_count: Total item count (without paging)
        current_page: Current page (1-based)
        page_size: Items per page
    """

    items: List[T]
    total_count: int
    current_page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def map(self, func) -> "PagedResultDTO":
        """Return a page with the same metadata and transformed items."""
        return PagedResultDTO(
            items=[func(item) for item in self.items],
            total_count=self.total_count,
            current_page=self.current_page,
            page_size=self.page_size,
        )

    def pagination_metadata(self) -> dict:
        return {
            "totalCount": self.total_count,
            "pageSize": self.page_size,
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
        }
