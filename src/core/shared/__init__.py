"""
Shared Domain Components.

Components shared by every domain:
- Domain exceptions
- Interfaces (Ports)
- Data shaping helpers
"""

from .exceptions import (
    DomainException,
    ValidationError,
    InvalidQueryError,
    UnknownSortFieldError,
    InvalidFieldsError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    AmbiguousOrMissingMappingError,
)
from .interfaces import UnitOfWork
from .shaping import PropertyCheckerService, shape_data, shape_data_list

__all__ = [
    "DomainException",
    "ValidationError",
    "InvalidQueryError",
    "UnknownSortFieldError",
    "InvalidFieldsError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "AmbiguousOrMissingMappingError",
    "UnitOfWork",
    "PropertyCheckerService",
    "shape_data",
    "shape_data_list",
]
