"""
Mappers between Entities (Core) and Models (Django).

Principles:
- Mappers are stateless
- No business logic
- Only data conversion
"""

from typing import Iterable, List

from src.core.companies.entities import CompanyEntity, EmployeeEntity, Gender

from .models import CompanyModel, EmployeeModel


class CompanyMapper:
    """Conversion between CompanyEntity and CompanyModel."""

    @staticmethod
    def to_model(entity: CompanyEntity) -> CompanyModel:
        """Build an unsaved model; the repository calls save()."""
        return CompanyModel(
            id=entity.id,
            name=entity.name,
            introduction=entity.introduction,
            country=entity.country,
            industry=entity.industry,
            product=entity.product,
        )

    @staticmethod
    def to_entity(model: CompanyModel) -> CompanyEntity:
        """Employees are not loaded; the aggregate is read through its employee queries."""
        return CompanyEntity(
            id=model.id,
            name=model.name,
            introduction=model.introduction,
            country=model.country,
            industry=model.industry,
            product=model.product,
        )

    @staticmethod
    def to_entity_list(models: Iterable[CompanyModel]) -> List[CompanyEntity]:
        return [CompanyMapper.to_entity(model) for model in models]


class EmployeeMapper:
    """Conversion between EmployeeEntity and EmployeeModel."""

    @staticmethod
    def to_model(entity: EmployeeEntity) -> EmployeeModel:
        return EmployeeModel(
            id=entity.id,
            company_id=entity.company_id,
            employee_no=entity.employee_no,
            first_name=entity.first_name,
            last_name=entity.last_name,
            gender=entity.gender.value,
            date_of_birth=entity.date_of_birth,
        )

    @staticmethod
    def to_entity(model: EmployeeModel) -> EmployeeEntity:
        return EmployeeEntity(
            id=model.id,
            company_id=model.company_id,
            employee_no=model.employee_no,
            first_name=model.first_name,
            last_name=model.last_name,
            gender=Gender(model.gender),
            date_of_birth=model.date_of_birth,
        )
