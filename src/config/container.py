"""
Dependency Injection Container.

Configures and manages every application dependency with
dependency-injector.

Patterns:
- Singleton: one instance for the whole app (mapping registry, repositories)
- Factory: a new instance per call (use cases, UoW)

The property mapping registry is built once here and injected into the
use cases that sort; nothing reads it from module globals.
"""

from dependency_injector import containers, providers
from typing import Optional

from src.core.companies import use_cases
from src.core.companies.ports import InMemoryCompanyRepository
from src.core.companies.property_mappings import create_property_mapping_service
from src.core.shared.shaping import PropertyCheckerService


def _django_company_repository():
    # Lazy import: models need the app registry
    from src.adapters.django_app.companies.repositories import DjangoCompanyRepository
    return DjangoCompanyRepository()


def _django_unit_of_work():
    from src.adapters.django_app.shared.unit_of_work import DjangoUnitOfWork
    return DjangoUnitOfWork()


def _in_memory_unit_of_work():
    from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
    return InMemoryUnitOfWork()


class Container(containers.DeclarativeContainer):
    """
    Main Dependency Injection container.

    Layout:
    - Sorting / shaping: read-only services built once
    - Repositories: persistence
    - Unit of Work: transactions
    - Services: use cases

    Example:
        from src.config.container import Container

        container = Container()
        service = container.list_companies_service()
        page = service.execute(CompanyQueryDTO())
    """

    # =========================================================================
    # Sorting / shaping (Singleton, read-only after construction)
    # =========================================================================

    property_mapping_service = providers.Singleton(create_property_mapping_service)

    property_checker = providers.Singleton(PropertyCheckerService)

    # =========================================================================
    # Repositories (Singleton)
    # =========================================================================

    company_repository = providers.Singleton(_django_company_repository)

    # =========================================================================
    # Unit of Work (Factory - a new instance per operation)
    # =========================================================================

    unit_of_work = providers.Factory(_django_unit_of_work)

    # =========================================================================
    # Services / Use Cases (Factory)
    # =========================================================================

    list_companies_service = providers.Factory(
        use_cases.ListCompaniesService,
        company_repo=company_repository,
        property_mapping_service=property_mapping_service,
        property_checker=property_checker,
    )

    get_company_service = providers.Factory(
        use_cases.GetCompanyService,
        company_repo=company_repository,
        property_checker=property_checker,
    )

    get_company_collection_service = providers.Factory(
        use_cases.GetCompanyCollectionService,
        company_repo=company_repository,
    )

    create_company_service = providers.Factory(
        use_cases.CreateCompanyService,
        company_repo=company_repository,
        uow=unit_of_work,
    )

    create_company_collection_service = providers.Factory(
        use_cases.CreateCompanyCollectionService,
        company_repo=company_repository,
        uow=unit_of_work,
    )

    delete_company_service = providers.Factory(
        use_cases.DeleteCompanyService,
        company_repo=company_repository,
        uow=unit_of_work,
    )

    list_employees_service = providers.Factory(
        use_cases.ListEmployeesService,
        company_repo=company_repository,
        property_mapping_service=property_mapping_service,
        property_checker=property_checker,
    )

    get_employee_service = providers.Factory(
        use_cases.GetEmployeeService,
        company_repo=company_repository,
        property_checker=property_checker,
    )

    create_employee_service = providers.Factory(
        use_cases.CreateEmployeeService,
        company_repo=company_repository,
        uow=unit_of_work,
    )

    update_employee_service = providers.Factory(
        use_cases.UpdateEmployeeService,
        company_repo=company_repository,
        uow=unit_of_work,
    )

    patch_employee_service = providers.Factory(
        use_cases.PatchEmployeeService,
        company_repo=company_repository,
        uow=unit_of_work,
    )

    delete_employee_service = providers.Factory(
        use_cases.DeleteEmployeeService,
        company_repo=company_repository,
        uow=unit_of_work,
    )


# =============================================================================
# Global container (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Return the global container, creating it on first use.
    """
    global _container

    if _container is None:
        _container = Container()

    return _container


def reset_container() -> None:
    """
    Drop the global container (for tests).
    """
    global _container
    _container = None


# =============================================================================
# Testing container
# =============================================================================

def create_testing_container() -> Container:
    """
    Container whose repository and UoW are in-memory implementations.

    Example:
        container = create_testing_container()
        container.create_company_service().execute(input_dto)
        assert container.company_repository().get_company(...)
    """
    container = Container()
    container.company_repository.override(providers.Singleton(InMemoryCompanyRepository))
    container.unit_of_work.override(providers.Factory(_in_memory_unit_of_work))
    return container
