"""
Global Pytest configuration for the Routine API.

Loaded automatically by pytest. Configures Django (in-memory SQLite,
the companies app and the API middleware) and provides shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Project root on the path for the ``src.`` imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def pytest_configure(config):
    """Configure Django before the tests are collected."""
    import django
    from django.conf import settings

    config.addinivalue_line(
        "markers", "integration: marks tests that hit the database"
    )

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY='test-secret-key',
            DATABASES={
                'default': {
                    'ENGINE': 'django.db.backends.sqlite3',
                    'NAME': ':memory:',
                }
            },
            INSTALLED_APPS=[
                'django.contrib.contenttypes',
                'django.contrib.auth',
                'src.adapters.django_app.companies',
            ],
            MIDDLEWARE=[
                'django.middleware.http.ConditionalGetMiddleware',
                'src.adapters.django_app.shared.http_cache.HttpCacheHeadersMiddleware',
            ],
            ROOT_URLCONF='src.config.urls',
            APPEND_SLASH=False,
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
            USE_TZ=True,
            TIME_ZONE='UTC',
            PAGE_SIZE_MAX=20,
            HTTP_CACHE_MAX_AGE=60,
        )
        django.setup()


@pytest.fixture(scope="session")
def project_root():
    return Path(__file__).parent.parent


# =============================================================================
# Core fixtures
# =============================================================================

@pytest.fixture
def mapping_service():
    """Registry with the Companies domain tables."""
    from src.core.companies.property_mappings import create_property_mapping_service
    return create_property_mapping_service()


@pytest.fixture
def property_checker():
    from src.core.shared.shaping import PropertyCheckerService
    return PropertyCheckerService()


@pytest.fixture
def inmemory_company_repo():
    """In-memory repository for unit tests."""
    from src.core.companies.ports import InMemoryCompanyRepository
    return InMemoryCompanyRepository()


@pytest.fixture
def inmemory_uow():
    """In-memory Unit of Work for unit tests."""
    from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
    return InMemoryUnitOfWork()


@pytest.fixture
def employee_input():
    """Factory of valid employee input DTOs."""
    from src.core.companies.dtos import EmployeeAddInputDTO

    def build(**overrides):
        values = {
            'employee_no': 'E001',
            'first_name': 'Mary',
            'last_name': 'King',
            'gender': 'Female',
            'date_of_birth': date(1986, 11, 4),
        }
        values.update(overrides)
        return EmployeeAddInputDTO(**values)

    return build
