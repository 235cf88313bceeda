"""
Companies Domain.

Companies and their employees, exposed through a REST API that supports
filtering, searching, sorting, paging and data shaping.
"""

from .entities import CompanyEntity, EmployeeEntity, Gender
from .property_mappings import Shape, create_property_mapping_service

__all__ = [
    "CompanyEntity",
    "EmployeeEntity",
    "Gender",
    "Shape",
    "create_property_mapping_service",
]
