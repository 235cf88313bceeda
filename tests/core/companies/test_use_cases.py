"""
Unit tests for the use cases of the Companies domain.

Strategy:
- InMemoryCompanyRepository (fake) for isolation
- InMemoryUnitOfWork to check transactions
- The real property mapping registry, injected

Coverage:
- ListCompaniesService / GetCompanyService / GetCompanyCollectionService
- CreateCompanyService / CreateCompanyCollectionService / DeleteCompanyService
- ListEmployeesService / GetEmployeeService / CreateEmployeeService
- UpdateEmployeeService / PatchEmployeeService / DeleteEmployeeService
"""

from datetime import date
from unittest.mock import Mock
import uuid

import pytest

from src.core.companies.dtos import (
    CompanyAddInputDTO,
    CompanyFullOutputDTO,
    CompanyQueryDTO,
    EmployeeQueryDTO,
)
from src.core.companies.entities import CompanyEntity, EmployeeEntity, Gender
from src.core.companies.use_cases import (
    CreateCompanyCollectionService,
    CreateCompanyService,
    CreateEmployeeService,
    DeleteCompanyService,
    DeleteEmployeeService,
    GetCompanyCollectionService,
    GetCompanyService,
    GetEmployeeService,
    ListCompaniesService,
    ListEmployeesService,
    PatchEmployeeService,
    UpdateEmployeeService,
)
from src.core.shared.exceptions import (
    AmbiguousOrMissingMappingError,
    EntityNotFoundError,
    InvalidFieldsError,
    InvalidQueryError,
    UnknownSortFieldError,
    ValidationError,
)
from src.core.sorting import PropertyMappingService


# =============================================================================
# Fixtures
# =============================================================================

COMPANIES = [
    ("Microsoft", "USA", "Great Company"),
    ("AC Milan", "Italy", "Football Club"),
    ("Baidu", "China", "From Beijing"),
    ("Youtube", "USA", "Blocked"),
    ("Twitter", "USA", "Blocked"),
    ("Tencent", "China", "From Shenzhen"),
]


@pytest.fixture
def companies(inmemory_company_repo):
    """Six companies in the fake repository, keyed by name."""
    created = {}
    for name, country, introduction in COMPANIES:
        company = CompanyEntity.create(name=name, country=country, introduction=introduction)
        inmemory_company_repo.add_company(company)
        created[name] = company
    return created


@pytest.fixture
def google(inmemory_company_repo):
    """A company with two employees of different gender and age."""
    company = CompanyEntity.create(name="Google", country="USA")
    company.add_employee(EmployeeEntity.create(
        company_id=company.id, employee_no="G003", first_name="Mary", last_name="King",
        gender=Gender.FEMALE, date_of_birth=date(1986, 11, 4),
    ))
    company.add_employee(EmployeeEntity.create(
        company_id=company.id, employee_no="G097", first_name="Kevin", last_name="Richardson",
        gender=Gender.MALE, date_of_birth=date(1977, 4, 6),
    ))
    company.add_employee(EmployeeEntity.create(
        company_id=company.id, employee_no="G100", first_name="Kevin", last_name="Adams",
        gender=Gender.MALE, date_of_birth=date(1990, 2, 1),
    ))
    inmemory_company_repo.add_company(company)
    return company


@pytest.fixture
def list_companies(inmemory_company_repo, mapping_service, property_checker):
    return ListCompaniesService(inmemory_company_repo, mapping_service, property_checker)


@pytest.fixture
def list_employees(inmemory_company_repo, mapping_service, property_checker):
    return ListEmployeesService(inmemory_company_repo, mapping_service, property_checker)


# =============================================================================
# Companies
# =============================================================================

class TestListCompaniesService:

    def test_default_order_is_company_name(self, list_companies, companies):
        page = list_companies.execute(CompanyQueryDTO(page_size=20))

        assert [c.company_name for c in page.items] == sorted(name for name, _, _ in COMPANIES)

    def test_order_by_translates_client_names(self, list_companies, companies):
        page = list_companies.execute(CompanyQueryDTO(order_by="country desc, companyName", page_size=20))

        assert [c.company_name for c in page.items] == [
            "Microsoft", "Twitter", "Youtube", "AC Milan", "Baidu", "Tencent",
        ]

    def test_unknown_sort_field_never_reaches_repository(self, mapping_service, property_checker):
        repo = Mock()
        service = ListCompaniesService(repo, mapping_service, property_checker)

        with pytest.raises(UnknownSortFieldError) as exc_info:
            service.execute(CompanyQueryDTO(order_by="salary"))

        assert exc_info.value.sort_field == "salary"
        repo.list_companies.assert_not_called()

    def test_repository_receives_resolved_clauses(self, mapping_service, property_checker):
        repo = Mock()
        repo.list_companies.return_value.map.return_value = "page"
        service = ListCompaniesService(repo, mapping_service, property_checker)

        result = service.execute(CompanyQueryDTO(order_by="companyName desc"))

        clauses = repo.list_companies.call_args.kwargs["sort_clauses"]
        assert [str(c) for c in clauses] == ["name DESC"]
        assert result == "page"

    def test_unknown_shaping_field(self, list_companies, companies):
        with pytest.raises(InvalidFieldsError):
            list_companies.execute(CompanyQueryDTO(fields="id,country"))

    def test_missing_mapping_is_a_configuration_error(self, inmemory_company_repo, property_checker):
        service = ListCompaniesService(inmemory_company_repo, PropertyMappingService(), property_checker)

        with pytest.raises(AmbiguousOrMissingMappingError):
            service.execute(CompanyQueryDTO())

    def test_paging(self, list_companies, companies):
        page = list_companies.execute(CompanyQueryDTO(page_number=2, page_size=4))

        assert [c.company_name for c in page.items] == ["Twitter", "Youtube"]
        assert page.total_count == 6
        assert page.total_pages == 2
        assert page.has_previous
        assert not page.has_next

    def test_page_size_is_capped(self):
        query = CompanyQueryDTO(page_number=0, page_size=100, max_page_size=20)

        assert query.page_number == 1
        assert query.page_size == 20

    def test_filter_and_search(self, list_companies, companies):
        by_name = list_companies.execute(CompanyQueryDTO(company_name=" Baidu "))
        searched = list_companies.execute(CompanyQueryDTO(search_term="blocked"))

        assert [c.company_name for c in by_name.items] == ["Baidu"]
        assert [c.company_name for c in searched.items] == ["Twitter", "Youtube"]


class TestGetCompanyService:

    def test_friendly(self, inmemory_company_repo, property_checker, companies):
        service = GetCompanyService(inmemory_company_repo, property_checker)

        dto = service.execute(companies["Baidu"].id)

        assert dto.to_dict() == {"id": companies["Baidu"].id, "companyName": "Baidu"}

    def test_full(self, inmemory_company_repo, property_checker, companies):
        service = GetCompanyService(inmemory_company_repo, property_checker)

        dto = service.execute(companies["Baidu"].id, fields="country", full=True)

        assert isinstance(dto, CompanyFullOutputDTO)
        assert dto.country == "China"

    def test_fields_checked_against_chosen_representation(self, inmemory_company_repo, property_checker, companies):
        service = GetCompanyService(inmemory_company_repo, property_checker)

        with pytest.raises(InvalidFieldsError):
            service.execute(companies["Baidu"].id, fields="country")

    def test_not_found(self, inmemory_company_repo, property_checker):
        service = GetCompanyService(inmemory_company_repo, property_checker)

        with pytest.raises(EntityNotFoundError):
            service.execute(str(uuid.uuid4()))


class TestGetCompanyCollectionService:

    def test_keeps_requested_order(self, inmemory_company_repo, companies):
        service = GetCompanyCollectionService(inmemory_company_repo)
        ids = [companies["Youtube"].id, companies["Baidu"].id]

        result = service.execute(ids)

        assert [c.company_name for c in result] == ["Youtube", "Baidu"]

    def test_any_missing_id_fails(self, inmemory_company_repo, companies):
        service = GetCompanyCollectionService(inmemory_company_repo)

        with pytest.raises(EntityNotFoundError):
            service.execute([companies["Baidu"].id, str(uuid.uuid4())])

    def test_empty_ids(self, inmemory_company_repo):
        with pytest.raises(InvalidQueryError):
            GetCompanyCollectionService(inmemory_company_repo).execute([])


class TestCreateCompanyService:

    def test_creates_company_with_employees(self, inmemory_company_repo, inmemory_uow, employee_input):
        service = CreateCompanyService(inmemory_company_repo, inmemory_uow)

        dto = service.execute(CompanyAddInputDTO(name="Contoso", employees=(employee_input(),)))

        assert dto.company_name == "Contoso"
        assert inmemory_uow.committed
        employees = inmemory_company_repo.list_employees(dto.id, None, None, [])
        assert [e.name for e in employees] == ["Mary King"]

    def test_invalid_employee_persists_nothing(self, inmemory_company_repo, inmemory_uow, employee_input):
        service = CreateCompanyService(inmemory_company_repo, inmemory_uow)

        with pytest.raises(ValidationError):
            service.execute(CompanyAddInputDTO(
                name="Contoso",
                employees=(employee_input(first_name="King"),),
            ))

        assert not inmemory_uow.committed
        assert inmemory_company_repo.list_companies(None, None, [], 1, 10).total_count == 0

    def test_invalid_gender(self, inmemory_company_repo, inmemory_uow, employee_input):
        service = CreateCompanyService(inmemory_company_repo, inmemory_uow)

        with pytest.raises(ValidationError) as exc_info:
            service.execute(CompanyAddInputDTO(name="Contoso", employees=(employee_input(gender="x"),)))

        assert exc_info.value.field == "gender"

    def test_collection(self, inmemory_company_repo, inmemory_uow):
        service = CreateCompanyCollectionService(inmemory_company_repo, inmemory_uow)

        result = service.execute([CompanyAddInputDTO(name="One"), CompanyAddInputDTO(name="Two")])

        assert [c.company_name for c in result] == ["One", "Two"]
        assert inmemory_company_repo.list_companies(None, None, [], 1, 10).total_count == 2

    def test_empty_collection(self, inmemory_company_repo, inmemory_uow):
        with pytest.raises(ValidationError):
            CreateCompanyCollectionService(inmemory_company_repo, inmemory_uow).execute([])


class TestDeleteCompanyService:

    def test_deletes_company_and_employees(self, inmemory_company_repo, inmemory_uow, google):
        DeleteCompanyService(inmemory_company_repo, inmemory_uow).execute(google.id)

        assert not inmemory_company_repo.company_exists(google.id)
        assert inmemory_company_repo.list_employees(google.id, None, None, []) == []

    def test_not_found_rolls_back(self, inmemory_company_repo, inmemory_uow):
        with pytest.raises(EntityNotFoundError):
            DeleteCompanyService(inmemory_company_repo, inmemory_uow).execute(str(uuid.uuid4()))

        assert inmemory_uow.rolled_back


# =============================================================================
# Employees
# =============================================================================

class TestListEmployeesService:

    def names(self, service, company, **query):
        return [e.name for e in service.execute(EmployeeQueryDTO(company_id=company.id, **query))]

    def test_default_order_is_name(self, list_employees, google):
        assert self.names(list_employees, google) == ["Kevin Adams", "Kevin Richardson", "Mary King"]

    def test_name_desc_expands_to_both_fields(self, list_employees, google):
        assert self.names(list_employees, google, order_by="name desc") == [
            "Mary King", "Kevin Richardson", "Kevin Adams",
        ]

    def test_age_desc_lists_oldest_first(self, list_employees, google):
        assert self.names(list_employees, google, order_by="age desc") == [
            "Kevin Richardson", "Mary King", "Kevin Adams",
        ]

    def test_age_lists_youngest_first(self, list_employees, google):
        assert self.names(list_employees, google, order_by="Age") == [
            "Kevin Adams", "Mary King", "Kevin Richardson",
        ]

    def test_unknown_sort_field(self, list_employees, google):
        with pytest.raises(UnknownSortFieldError):
            self.names(list_employees, google, order_by="salary")

    def test_gender_filter(self, list_employees, google):
        assert self.names(list_employees, google, gender="female") == ["Mary King"]

    def test_invalid_gender_filter_is_a_query_error(self, list_employees, google):
        with pytest.raises(InvalidQueryError):
            self.names(list_employees, google, gender="robot")

    def test_search(self, list_employees, google):
        assert self.names(list_employees, google, q="kin") == ["Mary King"]

    def test_unknown_company(self, list_employees):
        with pytest.raises(EntityNotFoundError):
            list_employees.execute(EmployeeQueryDTO(company_id=str(uuid.uuid4())))


class TestGetEmployeeService:

    def test_found(self, inmemory_company_repo, property_checker, google):
        employee = google.employees[0]

        dto = GetEmployeeService(inmemory_company_repo, property_checker).execute(google.id, employee.id)

        assert dto.name == "Mary King"
        assert dto.gender_display == "Female"

    def test_employee_of_another_company(self, inmemory_company_repo, property_checker, google, companies):
        service = GetEmployeeService(inmemory_company_repo, property_checker)

        with pytest.raises(EntityNotFoundError):
            service.execute(companies["Baidu"].id, google.employees[0].id)


class TestCreateEmployeeService:

    def test_creates(self, inmemory_company_repo, inmemory_uow, google, employee_input):
        service = CreateEmployeeService(inmemory_company_repo, inmemory_uow)

        dto = service.execute(google.id, employee_input(employee_no="G200", first_name="Ann", last_name="Lee"))

        assert dto.company_id == google.id
        assert inmemory_company_repo.get_employee(google.id, dto.id).name == "Ann Lee"

    def test_unknown_company(self, inmemory_company_repo, inmemory_uow, employee_input):
        with pytest.raises(EntityNotFoundError):
            CreateEmployeeService(inmemory_company_repo, inmemory_uow).execute(str(uuid.uuid4()), employee_input())


class TestUpdateEmployeeService:

    def test_replaces_existing(self, inmemory_company_repo, inmemory_uow, google, employee_input):
        mary = google.employees[0]
        service = UpdateEmployeeService(inmemory_company_repo, inmemory_uow)

        dto, created = service.execute(google.id, mary.id, employee_input(last_name="Queen"))

        assert created is False
        assert dto.name == "Mary Queen"
        assert inmemory_company_repo.get_employee(google.id, mary.id).last_name == "Queen"

    def test_creates_unknown_id(self, inmemory_company_repo, inmemory_uow, google, employee_input):
        new_id = str(uuid.uuid4())

        dto, created = UpdateEmployeeService(inmemory_company_repo, inmemory_uow).execute(
            google.id, new_id, employee_input()
        )

        assert created is True
        assert dto.id == new_id


class TestPatchEmployeeService:

    def test_merges_changes(self, inmemory_company_repo, inmemory_uow, google):
        mary = google.employees[0]
        service = PatchEmployeeService(inmemory_company_repo, inmemory_uow)

        dto, created = service.execute(google.id, mary.id, {"first_name": "Maria"})

        assert created is False
        assert dto.name == "Maria King"
        assert dto.gender_display == "Female"

    def test_merged_result_is_validated(self, inmemory_company_repo, inmemory_uow, google):
        mary = google.employees[0]
        service = PatchEmployeeService(inmemory_company_repo, inmemory_uow)

        with pytest.raises(ValidationError):
            service.execute(google.id, mary.id, {"first_name": "King"})

        assert inmemory_company_repo.get_employee(google.id, mary.id).first_name == "Mary"

    def test_unknown_field(self, inmemory_company_repo, inmemory_uow, google):
        with pytest.raises(ValidationError):
            PatchEmployeeService(inmemory_company_repo, inmemory_uow).execute(
                google.id, google.employees[0].id, {"salary": 10}
            )

    def test_creates_unknown_id_from_complete_patch(self, inmemory_company_repo, inmemory_uow, google):
        changes = {
            "employee_no": "G300",
            "first_name": "Ann",
            "last_name": "Lee",
            "gender": Gender.FEMALE,
            "date_of_birth": date(1990, 1, 1),
        }

        dto, created = PatchEmployeeService(inmemory_company_repo, inmemory_uow).execute(
            google.id, str(uuid.uuid4()), changes
        )

        assert created is True
        assert dto.name == "Ann Lee"

    def test_incomplete_patch_of_unknown_id(self, inmemory_company_repo, inmemory_uow, google):
        with pytest.raises(ValidationError):
            PatchEmployeeService(inmemory_company_repo, inmemory_uow).execute(
                google.id, str(uuid.uuid4()), {"first_name": "Ann"}
            )


class TestDeleteEmployeeService:

    def test_deletes(self, inmemory_company_repo, inmemory_uow, google):
        mary = google.employees[0]

        DeleteEmployeeService(inmemory_company_repo, inmemory_uow).execute(google.id, mary.id)

        assert inmemory_company_repo.get_employee(google.id, mary.id) is None

    def test_not_found(self, inmemory_company_repo, inmemory_uow, google):
        with pytest.raises(EntityNotFoundError):
            DeleteEmployeeService(inmemory_company_repo, inmemory_uow).execute(google.id, str(uuid.uuid4()))
