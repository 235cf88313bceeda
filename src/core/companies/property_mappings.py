"""
Sortable fields of the Companies domain.

Each table maps the client-visible field names of an output DTO to the
storage fields of the entity they come from. Tables are registered in a
PropertyMappingService keyed by Shape pairs.

The company table also accepts the fields only the full representation
shows (Country, Industry, Product, Introduction), so friendly lists can be
ordered by them too.
"""

from enum import Enum

from src.core.sorting import PropertyMapping, PropertyMappingService, PropertyMappingValue


class Shape(Enum):
    """Tags identifying the two ends of a property mapping."""

    COMPANY_DTO = "CompanyDto"
    COMPANY = "Company"
    EMPLOYEE_DTO = "EmployeeDto"
    EMPLOYEE = "Employee"

    def __str__(self) -> str:
        return self.value


COMPANY_PROPERTY_MAPPING = PropertyMapping({
    "Id": PropertyMappingValue(["id"]),
    "CompanyName": PropertyMappingValue(["name"]),
    "Country": PropertyMappingValue(["country"]),
    "Industry": PropertyMappingValue(["industry"]),
    "Product": PropertyMappingValue(["product"]),
    "Introduction": PropertyMappingValue(["introduction"]),
})

EMPLOYEE_PROPERTY_MAPPING = PropertyMapping({
    "Id": PropertyMappingValue(["id"]),
    "CompanyId": PropertyMappingValue(["company_id"]),
    "EmployeeNo": PropertyMappingValue(["employee_no"]),
    "Name": PropertyMappingValue(["first_name", "last_name"]),
    "GenderDisplay": PropertyMappingValue(["gender"]),
    # older employees have earlier birth dates
    "Age": PropertyMappingValue(["date_of_birth"], revert=True),
})

# (source, destination, default orderBy) pairs the application resolves
REQUIRED_MAPPINGS = (
    (Shape.COMPANY_DTO, Shape.COMPANY, "CompanyName"),
    (Shape.EMPLOYEE_DTO, Shape.EMPLOYEE, "Name"),
)


def create_property_mapping_service() -> PropertyMappingService:
    """Build the registry holding every table of the domain."""
    service = PropertyMappingService()
    service.register(Shape.COMPANY_DTO, Shape.COMPANY, COMPANY_PROPERTY_MAPPING)
    service.register(Shape.EMPLOYEE_DTO, Shape.EMPLOYEE, EMPLOYEE_PROPERTY_MAPPING)
    return service
