"""
Property mapping used to translate client sort keys into storage fields.

A client sorts a resource by the names it sees in the API
(``orderBy=name,age desc``). The database knows other names: ``name`` is
really ``first_name`` + ``last_name`` and ``age`` grows as
``date_of_birth`` shrinks. A PropertyMapping is the table that bridges
both worlds for one (source shape, destination shape) pair, and the
PropertyMappingService is the registry holding every table.

Components:
- SortDirection: ascending / descending
- SortClause: one (storage field, direction) pair for the ORM
- PropertyMappingValue: target fields of one client field (+ revert flag)
- PropertyMapping: case-insensitive table of PropertyMappingValue
- PropertyMappingService: registry keyed by (source, destination) shapes

Principles:
- Built once at startup, read-only afterwards (no locking needed)
- Pure in-memory lookups; no I/O
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Tuple
import logging

from src.core.shared.exceptions import (
    AmbiguousOrMissingMappingError,
    InvalidQueryError,
    UnknownSortFieldError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class SortDirection(Enum):
    """Sort direction of a clause."""

    ASC = "asc"
    DESC = "desc"

    @property
    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class SortClause:
    """One ORDER BY term expressed in storage field names."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def order_by(self) -> str:
        """Return the expression for QuerySet.order_by()."""
        prefix = "-" if self.direction is SortDirection.DESC else ""
        return f"{prefix}{self.field}"

    def __str__(self) -> str:
        return f"{self.field} {self.direction.value.upper()}"


@dataclass(frozen=True)
class SortToken:
    """A client field name plus the requested direction."""

    name: str
    direction: SortDirection = SortDirection.ASC


def parse_order_by(order_by: Optional[str]) -> List[SortToken]:
    """
    Parse an ``orderBy`` query value.

    Format: comma separated ``fieldName[ asc|desc]`` tokens. Blank tokens
    are skipped and the direction is case-insensitive.

    Args:
        order_by: Raw query string value

    Returns:
        Tokens in request order (empty for a blank value)

    Raises:
        InvalidQueryError: If a token has extra words or an unknown direction

    Example:
        parse_order_by("name, age desc")
        # [SortToken("name", ASC), SortToken("age", DESC)]
    """
    if not order_by or not order_by.strip():
        return []

    tokens = []
    for raw in order_by.split(","):
        parts = raw.split()
        if not parts:
            continue

        if len(parts) > 2:
            raise InvalidQueryError(f"Invalid sort expression: '{raw.strip()}'", field="orderBy")

        direction = SortDirection.ASC
        if len(parts) == 2:
            try:
                direction = SortDirection(parts[1].lower())
            except ValueError:
                raise InvalidQueryError(
                    f"Invalid sort direction '{parts[1]}' (use asc or desc)",
                    field="orderBy",
                )

        tokens.append(SortToken(name=parts[0], direction=direction))

    return tokens


@dataclass(frozen=True)
class PropertyMappingValue:
    """
    Target of one client-visible sortable field.

    Attributes:
        destination_properties: Storage fields, applied in order
        revert: Invert the requested direction (e.g. age vs date_of_birth)
    """

    destination_properties: Tuple[str, ...]
    revert: bool = False

    def __init__(self, destination_properties: Iterable[str], revert: bool = False):
        destinations = tuple(destination_properties)
        if not destinations:
            raise ValueError("destination_properties must not be empty")
        object.__setattr__(self, "destination_properties", destinations)
        object.__setattr__(self, "revert", revert)


class PropertyMapping:
    """
    Immutable, case-insensitive table of sortable fields for one shape pair.

    Example:
        mapping = PropertyMapping({
            "Id": PropertyMappingValue(["id"]),
            "Name": PropertyMappingValue(["first_name", "last_name"]),
            "Age": PropertyMappingValue(["date_of_birth"], revert=True),
        })
        mapping.sort_clauses("age desc")  # [date_of_birth ASC]
    """

    def __init__(self, mapping_dictionary: Mapping[str, PropertyMappingValue]):
        entries: Dict[str, Tuple[str, PropertyMappingValue]] = {}
        for name, value in mapping_dictionary.items():
            entries[name.casefold()] = (name, value)
        self._entries = MappingProxyType(entries)

    @property
    def mapping_dictionary(self) -> Mapping[str, PropertyMappingValue]:
        """Entries keyed by their registered (display) name."""
        return MappingProxyType({name: value for name, value in self._entries.values()})

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> Optional[PropertyMappingValue]:
        """Case-insensitive lookup; None when the field is not mapped."""
        entry = self._entries.get(name.casefold())
        return entry[1] if entry else None

    def has_fields(self, order_by: Optional[str]) -> bool:
        """True when every field named by ``order_by`` is mapped."""
        return all(token.name in self for token in parse_order_by(order_by))

    def sort_clauses(self, order_by: Optional[str]) -> List[SortClause]:
        """
        Translate ``order_by`` into storage sort clauses.

        Multi-field entries expand in declared order; an entry with
        ``revert`` flips the requested direction.

        Args:
            order_by: Raw ``orderBy`` value

        Returns:
            Clauses ready for the persistence layer

        Raises:
            UnknownSortFieldError: If a field is not mapped
            InvalidQueryError: If a token is malformed

        Example:
            mapping.sort_clauses("name,id desc")
            # [first_name ASC, last_name ASC, id DESC]
        """
        clauses: List[SortClause] = []
        for token in parse_order_by(order_by):
            value = self.get(token.name)
            if value is None:
                raise UnknownSortFieldError(token.name)

            direction = token.direction.flipped if value.revert else token.direction
            clauses.extend(
                SortClause(field=destination, direction=direction)
                for destination in value.destination_properties
            )
        return clauses


class PropertyMappingService:
    """
    Registry of PropertyMapping tables keyed by (source, destination).

    Built once at startup (see the DI container) and only read afterwards.
    Registration does not check for duplicates; lookup succeeds only when
    exactly one table matches the pair.

    Example:
        service = PropertyMappingService()
        service.register(Shape.EMPLOYEE_DTO, Shape.EMPLOYEE, employee_mapping)

        mapping = service.get_property_mapping(Shape.EMPLOYEE_DTO, Shape.EMPLOYEE)
        clauses = mapping.sort_clauses("name")
    """

    def __init__(self):
        self._property_mappings: List[Tuple[Hashable, Hashable, PropertyMapping]] = []

    def register(
        self,
        source: Hashable,
        destination: Hashable,
        mapping: PropertyMapping,
    ) -> None:
        """Add a table for the (source, destination) pair."""
        self._property_mappings.append((source, destination, mapping))
        logger.debug(f"Property mapping registered: <{source},{destination}> ({len(mapping)} fields)")

    def get_property_mapping(self, source: Hashable, destination: Hashable) -> PropertyMapping:
        """
        Return the only table registered for the pair.

        Raises:
            AmbiguousOrMissingMappingError: If zero or several tables match
        """
        matches = [
            mapping
            for mapping_source, mapping_destination, mapping in self._property_mappings
            if mapping_source == source and mapping_destination == destination
        ]
        if len(matches) == 1:
            return matches[0]

        raise AmbiguousOrMissingMappingError(source, destination, matches=len(matches))

    def valid_mapping_exists_for(
        self,
        source: Hashable,
        destination: Hashable,
        order_by: Optional[str],
    ) -> bool:
        """
        Check that every field of ``order_by`` is sortable for the pair.

        A blank ``order_by`` is always valid. Malformed tokens count as
        invalid.

        Raises:
            AmbiguousOrMissingMappingError: If the pair is misconfigured
        """
        mapping = self.get_property_mapping(source, destination)
        try:
            return mapping.has_fields(order_by)
        except ValidationError:
            return False
