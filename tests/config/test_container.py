"""
Tests for the Dependency Injection container.
"""

from src.config.container import Container, create_testing_container, get_container, reset_container
from src.core.companies.dtos import CompanyAddInputDTO, CompanyQueryDTO
from src.core.companies.ports import InMemoryCompanyRepository
from src.core.sorting import PropertyMappingService


class TestContainer:

    def test_declares_only_wired_providers(self):
        names = {name for name in Container.providers if not name.startswith("__")}

        assert names == {
            "property_mapping_service",
            "property_checker",
            "company_repository",
            "unit_of_work",
            "list_companies_service",
            "get_company_service",
            "get_company_collection_service",
            "create_company_service",
            "create_company_collection_service",
            "delete_company_service",
            "list_employees_service",
            "get_employee_service",
            "create_employee_service",
            "update_employee_service",
            "patch_employee_service",
            "delete_employee_service",
        }

    def test_mapping_registry_is_a_singleton(self):
        container = Container()

        registry = container.property_mapping_service()

        assert isinstance(registry, PropertyMappingService)
        assert container.property_mapping_service() is registry

    def test_global_container_reset(self):
        reset_container()
        first = get_container()

        assert get_container() is first
        reset_container()
        assert get_container() is not first
        reset_container()


class TestTestingContainer:

    def test_uses_in_memory_repository(self):
        container = create_testing_container()

        assert isinstance(container.company_repository(), InMemoryCompanyRepository)

    def test_services_share_the_repository(self):
        container = create_testing_container()

        container.create_company_service().execute(CompanyAddInputDTO(name="Contoso"))
        container.create_company_service().execute(CompanyAddInputDTO(name="Acme"))
        page = container.list_companies_service().execute(CompanyQueryDTO(order_by="CompanyName"))

        assert [company.company_name for company in page.items] == ["Acme", "Contoso"]
        assert page.total_count == 2
