"""
Sorting - translation of client ``orderBy`` values into storage clauses.

Framework free: the resulting SortClause objects are rendered by the
persistence adapters (Django ``QuerySet.order_by`` or in-memory sorts).
"""

from .property_mapping import (
    PropertyMapping,
    PropertyMappingService,
    PropertyMappingValue,
    SortClause,
    SortDirection,
    SortToken,
    parse_order_by,
)

__all__ = [
    "PropertyMapping",
    "PropertyMappingService",
    "PropertyMappingValue",
    "SortClause",
    "SortDirection",
    "SortToken",
    "parse_order_by",
]
