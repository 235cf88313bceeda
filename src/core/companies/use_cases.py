"""
Use Cases (Application Services) of the Companies domain.

Use cases implemented:
- ListCompaniesService / GetCompanyService / GetCompanyCollectionService
- CreateCompanyService / CreateCompanyCollectionService / DeleteCompanyService
- ListEmployeesService / GetEmployeeService / CreateEmployeeService
- UpdateEmployeeService / PatchEmployeeService / DeleteEmployeeService

Responsibilities:
- Validate ``orderBy`` through the property mapping registry
- Validate ``fields`` through the property checker
- Coordinate entities and the repository
- Manage transactions (via UoW) on writes
- Return output DTOs

Principles:
- One use case = one business operation
- Dependencies injected (DI)
- No infrastructure logic
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from src.core.shared.exceptions import (
    EntityNotFoundError,
    InvalidFieldsError,
    InvalidQueryError,
    ValidationError,
)
from src.core.shared.interfaces import UnitOfWork
from src.core.shared.shaping import PropertyCheckerService
from src.core.sorting import PropertyMappingService, SortClause

from .dtos import (
    CompanyAddInputDTO,
    CompanyFullOutputDTO,
    CompanyOutputDTO,
    CompanyQueryDTO,
    EmployeeAddInputDTO,
    EmployeeOutputDTO,
    EmployeeQueryDTO,
    EmployeeUpdateInputDTO,
    PagedResultDTO,
)
from .entities import CompanyEntity, EmployeeEntity, Gender
from .ports import CompanyRepository
from .property_mappings import Shape

logger = logging.getLogger(__name__)


def _parse_gender(value: Any, error_class: type = ValidationError) -> Gender:
    try:
        return Gender.from_value(value)
    except ValueError:
        raise error_class(f"Invalid gender: {value}", field="gender")


def _check_fields(checker: PropertyCheckerService, dto_type: type, fields: Optional[str]) -> None:
    if not checker.type_has_properties(dto_type, fields):
        raise InvalidFieldsError(fields, resource=dto_type.__name__)


def _company_not_found(company_id: str) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"Company {company_id} not found",
        entity_type="Company",
        entity_id=company_id,
    )


def _employee_not_found(employee_id: str) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"Employee {employee_id} not found",
        entity_type="Employee",
        entity_id=employee_id,
    )


def _build_employee(company_id: str, input_dto: EmployeeAddInputDTO, employee_id: str = None) -> EmployeeEntity:
    return EmployeeEntity.create(
        company_id=company_id,
        employee_no=input_dto.employee_no,
        first_name=input_dto.first_name,
        last_name=input_dto.last_name,
        gender=_parse_gender(input_dto.gender),
        date_of_birth=input_dto.date_of_birth,
        employee_id=employee_id,
    )


# =============================================================================
# COMPANIES
# =============================================================================

class ListCompaniesService:
    """
    Use Case: list companies with filtering, search, sorting and paging.

    Flow:
    1. Resolve ``orderBy`` into sort clauses (400 on unknown fields)
    2. Validate ``fields`` against CompanyOutputDTO
    3. Query the repository
    4. Return a page of output DTOs

    Example:
        service = ListCompaniesService(repo, mapping_service, checker)
        page = service.execute(CompanyQueryDTO(order_by="country desc"))
    """

    def __init__(
        self,
        company_repo: CompanyRepository,
        property_mapping_service: PropertyMappingService,
        property_checker: PropertyCheckerService,
    ):
        self.company_repo = company_repo
        self.property_mapping_service = property_mapping_service
        self.property_checker = property_checker

    def execute(self, query: CompanyQueryDTO) -> PagedResultDTO:
        """
        Raises:
            UnknownSortFieldError: If ``order_by`` names an unmapped field
            InvalidQueryError: If ``order_by`` is malformed
            InvalidFieldsError: If ``fields`` names an unknown property
            AmbiguousOrMissingMappingError: If the registry is misconfigured
        """
        mapping = self.property_mapping_service.get_property_mapping(Shape.COMPANY_DTO, Shape.COMPANY)
        sort_clauses = mapping.sort_clauses(query.order_by)
        _check_fields(self.property_checker, CompanyOutputDTO, query.fields)

        page = self.company_repo.list_companies(
            company_name=query.company_name,
            search_term=query.search_term,
            sort_clauses=sort_clauses,
            page_number=query.page_number,
            page_size=query.page_size,
        )
        logger.debug(
            f"Companies listed: page {page.current_page}/{page.total_pages}, "
            f"order [{', '.join(str(c) for c in sort_clauses)}]"
        )
        return page.map(CompanyOutputDTO.from_entity)


class GetCompanyService:
    """Use Case: fetch one company in its friendly or full representation."""

    def __init__(self, company_repo: CompanyRepository, property_checker: PropertyCheckerService):
        self.company_repo = company_repo
        self.property_checker = property_checker

    def execute(self, company_id: str, fields: Optional[str] = None, full: bool = False):
        """
        Args:
            company_id: Company id
            fields: Data shaping field list (validated against the chosen DTO)
            full: Return CompanyFullOutputDTO instead of CompanyOutputDTO

        Raises:
            InvalidFieldsError: If ``fields`` names an unknown property
            EntityNotFoundError: If the company does not exist
        """
        dto_type = CompanyFullOutputDTO if full else CompanyOutputDTO
        _check_fields(self.property_checker, dto_type, fields)

        company = self.company_repo.get_company(company_id)
        if not company:
            raise _company_not_found(company_id)

        return dto_type.from_entity(company)


class GetCompanyCollectionService:
    """Use Case: fetch several companies by id, all or nothing."""

    def __init__(self, company_repo: CompanyRepository):
        self.company_repo = company_repo

    def execute(self, company_ids: Sequence[str]) -> List[CompanyOutputDTO]:
        """
        Returns:
            DTOs in the order of ``company_ids``

        Raises:
            InvalidQueryError: If no id is given
            EntityNotFoundError: If any id is unknown
        """
        if not company_ids:
            raise InvalidQueryError("At least one company id is required", field="ids")

        found = {company.id: company for company in self.company_repo.get_companies(company_ids)}
        missing = [company_id for company_id in company_ids if company_id not in found]
        if missing:
            raise EntityNotFoundError(
                f"Companies not found: {', '.join(missing)}",
                entity_type="Company",
                entity_id=missing[0],
            )

        return [CompanyOutputDTO.from_entity(found[company_id]) for company_id in company_ids]


class CreateCompanyService:
    """
    Use Case: create a company, optionally with employees.

    Flow:
    1. Build and validate the entities
    2. Persist everything inside one transaction
    3. Return the output DTO
    """

    def __init__(self, company_repo: CompanyRepository, uow: UnitOfWork):
        self.company_repo = company_repo
        self.uow = uow

    def execute(self, input_dto: CompanyAddInputDTO) -> CompanyOutputDTO:
        """
        Raises:
            ValidationError: If the company or an employee is invalid
        """
        company = self._build(input_dto)

        with self.uow:
            self.company_repo.add_company(company)

        logger.info(f"Company created: {company.id} ({len(company.employees)} employees)")
        return CompanyOutputDTO.from_entity(company)

    @staticmethod
    def _build(input_dto: CompanyAddInputDTO) -> CompanyEntity:
        company = CompanyEntity.create(
            name=input_dto.name,
            country=input_dto.country,
            industry=input_dto.industry,
            product=input_dto.product,
            introduction=input_dto.introduction,
        )
        for employee_dto in input_dto.employees:
            company.add_employee(_build_employee(company.id, employee_dto))
        return company


class CreateCompanyCollectionService:
    """Use Case: create several companies in a single transaction."""

    def __init__(self, company_repo: CompanyRepository, uow: UnitOfWork):
        self.company_repo = company_repo
        self.uow = uow

    def execute(self, input_dtos: Sequence[CompanyAddInputDTO]) -> List[CompanyOutputDTO]:
        if not input_dtos:
            raise ValidationError("At least one company is required", field="companies")

        companies = [CreateCompanyService._build(input_dto) for input_dto in input_dtos]

        with self.uow:
            for company in companies:
                self.company_repo.add_company(company)

        logger.info(f"Company collection created: {len(companies)} companies")
        return [CompanyOutputDTO.from_entity(company) for company in companies]


class DeleteCompanyService:
    """Use Case: delete a company and its employees."""

    def __init__(self, company_repo: CompanyRepository, uow: UnitOfWork):
        self.company_repo = company_repo
        self.uow = uow

    def execute(self, company_id: str) -> None:
        with self.uow:
            if not self.company_repo.company_exists(company_id):
                raise _company_not_found(company_id)
            self.company_repo.delete_company(company_id)

        logger.info(f"Company deleted: {company_id}")


# =============================================================================
# EMPLOYEES
# =============================================================================

class ListEmployeesService:
    """
    Use Case: list the employees of a company.

    ``orderBy`` is resolved through the employee mapping, so ``name`` sorts
    by first then last name and ``age desc`` sorts by date of birth
    ascending.
    """

    def __init__(
        self,
        company_repo: CompanyRepository,
        property_mapping_service: PropertyMappingService,
        property_checker: PropertyCheckerService,
    ):
        self.company_repo = company_repo
        self.property_mapping_service = property_mapping_service
        self.property_checker = property_checker

    def resolve_sort(self, order_by: Optional[str]) -> List[SortClause]:
        mapping = self.property_mapping_service.get_property_mapping(Shape.EMPLOYEE_DTO, Shape.EMPLOYEE)
        return mapping.sort_clauses(order_by)

    def execute(self, query: EmployeeQueryDTO) -> List[EmployeeOutputDTO]:
        """
        Raises:
            UnknownSortFieldError: If ``order_by`` names an unmapped field
            InvalidFieldsError: If ``fields`` names an unknown property
            EntityNotFoundError: If the company does not exist
        """
        sort_clauses = self.resolve_sort(query.order_by)
        _check_fields(self.property_checker, EmployeeOutputDTO, query.fields)
        gender = _parse_gender(query.gender, InvalidQueryError) if query.gender else None

        if not self.company_repo.company_exists(query.company_id):
            raise _company_not_found(query.company_id)

        employees = self.company_repo.list_employees(
            company_id=query.company_id,
            gender=gender,
            q=query.q,
            sort_clauses=sort_clauses,
        )
        return [EmployeeOutputDTO.from_entity(employee) for employee in employees]


class GetEmployeeService:
    """Use Case: fetch one employee of a company."""

    def __init__(self, company_repo: CompanyRepository, property_checker: PropertyCheckerService):
        self.company_repo = company_repo
        self.property_checker = property_checker

    def execute(self, company_id: str, employee_id: str, fields: Optional[str] = None) -> EmployeeOutputDTO:
        _check_fields(self.property_checker, EmployeeOutputDTO, fields)

        if not self.company_repo.company_exists(company_id):
            raise _company_not_found(company_id)

        employee = self.company_repo.get_employee(company_id, employee_id)
        if not employee:
            raise _employee_not_found(employee_id)

        return EmployeeOutputDTO.from_entity(employee)


class CreateEmployeeService:
    """Use Case: add an employee to an existing company."""

    def __init__(self, company_repo: CompanyRepository, uow: UnitOfWork):
        self.company_repo = company_repo
        self.uow = uow

    def execute(self, company_id: str, input_dto: EmployeeAddInputDTO) -> EmployeeOutputDTO:
        with self.uow:
            if not self.company_repo.company_exists(company_id):
                raise _company_not_found(company_id)

            employee = _build_employee(company_id, input_dto)
            self.company_repo.save_employee(employee)

        logger.info(f"Employee created: {employee.id} in company {company_id}")
        return EmployeeOutputDTO.from_entity(employee)


class UpdateEmployeeService:
    """
    Use Case: replace an employee (PUT).

    Upsert semantics: an unknown employee id is created with that id.
    """

    def __init__(self, company_repo: CompanyRepository, uow: UnitOfWork):
        self.company_repo = company_repo
        self.uow = uow

    def execute(
        self,
        company_id: str,
        employee_id: str,
        input_dto: EmployeeUpdateInputDTO,
    ) -> Tuple[EmployeeOutputDTO, bool]:
        """
        Returns:
            (employee DTO, created) where ``created`` is True on insert

        Raises:
            EntityNotFoundError: If the company does not exist
            ValidationError: If the new values are invalid
        """
        with self.uow:
            if not self.company_repo.company_exists(company_id):
                raise _company_not_found(company_id)

            employee = self.company_repo.get_employee(company_id, employee_id)
            created = employee is None

            if created:
                employee = _build_employee(company_id, input_dto, employee_id=employee_id)
            else:
                employee.update(
                    employee_no=input_dto.employee_no,
                    first_name=input_dto.first_name,
                    last_name=input_dto.last_name,
                    gender=_parse_gender(input_dto.gender),
                    date_of_birth=input_dto.date_of_birth,
                )

            self.company_repo.save_employee(employee)

        logger.info(f"Employee {'created' if created else 'replaced'}: {employee_id}")
        return EmployeeOutputDTO.from_entity(employee), created


class PatchEmployeeService:
    """
    Use Case: partially update an employee (merge patch).

    ``changes`` holds only the provided values, keyed by entity attribute
    (employee_no, first_name, last_name, gender, date_of_birth). They are
    merged over the current values and the result is re-validated. As with
    PUT, an unknown employee id is created from the patch alone.
    """

    PATCHABLE_FIELDS = ("employee_no", "first_name", "last_name", "gender", "date_of_birth")

    def __init__(self, company_repo: CompanyRepository, uow: UnitOfWork):
        self.company_repo = company_repo
        self.uow = uow

    def execute(
        self,
        company_id: str,
        employee_id: str,
        changes: Dict[str, Any],
    ) -> Tuple[EmployeeOutputDTO, bool]:
        unknown = sorted(set(changes) - set(self.PATCHABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Fields cannot be patched: {', '.join(unknown)}", field=unknown[0])

        with self.uow:
            if not self.company_repo.company_exists(company_id):
                raise _company_not_found(company_id)

            employee = self.company_repo.get_employee(company_id, employee_id)
            created = employee is None

            current = {} if created else {
                "employee_no": employee.employee_no,
                "first_name": employee.first_name,
                "last_name": employee.last_name,
                "gender": employee.gender,
                "date_of_birth": employee.date_of_birth,
            }
            merged = {**current, **changes}
            input_dto = EmployeeUpdateInputDTO(
                employee_no=merged.get("employee_no"),
                first_name=merged.get("first_name"),
                last_name=merged.get("last_name"),
                gender=merged.get("gender"),
                date_of_birth=merged.get("date_of_birth"),
            )

            if created:
                employee = _build_employee(company_id, input_dto, employee_id=employee_id)
            else:
                employee.update(
                    employee_no=input_dto.employee_no,
                    first_name=input_dto.first_name,
                    last_name=input_dto.last_name,
                    gender=_parse_gender(input_dto.gender),
                    date_of_birth=input_dto.date_of_birth,
                )

            self.company_repo.save_employee(employee)

        logger.info(f"Employee patched: {employee_id} ({', '.join(sorted(changes)) or 'no changes'})")
        return EmployeeOutputDTO.from_entity(employee), created


class DeleteEmployeeService:
    """Use Case: remove an employee from a company."""

    def __init__(self, company_repo: CompanyRepository, uow: UnitOfWork):
        self.company_repo = company_repo
        self.uow = uow

    def execute(self, company_id: str, employee_id: str) -> None:
        with self.uow:
            if not self.company_repo.company_exists(company_id):
                raise _company_not_found(company_id)

            employee = self.company_repo.get_employee(company_id, employee_id)
            if not employee:
                raise _employee_not_found(employee_id)

            self.company_repo.delete_employee(employee)

        logger.info(f"Employee deleted: {employee_id}")
