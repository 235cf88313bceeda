"""
Pytest configuration for the Django adapter tests.

The companies migrations seed 18 companies and 6 employees; tests that
request ``db`` see that data and their own changes are rolled back.
"""

import pytest

from src.config.container import reset_container


@pytest.fixture(autouse=True)
def reset_di_container():
    """Fresh container between tests."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def company_repo(db):
    from src.adapters.django_app.companies.repositories import DjangoCompanyRepository
    return DjangoCompanyRepository()


@pytest.fixture
def api(db, client):
    """Django test client with the seeded database."""
    return client
