"""
Domain exceptions for the Routine API.

This module defines the typed errors the core raises so that every layer
can tell configuration faults, client mistakes and missing data apart.

Hierarchy:
    DomainException (base)
    ├── ValidationError (bad input)
    │   └── InvalidQueryError (malformed query parameter)
    │       ├── UnknownSortFieldError (orderBy names an unmapped field)
    │       └── InvalidFieldsError (fields names an unknown DTO property)
    ├── EntityNotFoundError (entity does not exist)
    ├── BusinessRuleViolationError (business rule broken)
    └── AmbiguousOrMissingMappingError (mapping registry misconfigured)
"""


class DomainException(Exception):
    """
    Base exception for every domain error.

    Catching DomainException catches every error raised by the core.

    Example:
        try:
            service.execute(query)
        except DomainException as e:
            logger.error(f"Domain error: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serialize the exception (handy for APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Invalid input data.

    Raised when client supplied values do not meet the minimum
    requirements for processing.

    Example:
        if not employee_no:
            raise ValidationError("Employee number is required", field="employeeNo")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class InvalidQueryError(ValidationError):
    """
    A query parameter (orderBy, fields, filters, ids) is malformed.

    Unlike payload validation failures these are answered with 400.
    """


class UnknownSortFieldError(InvalidQueryError):
    """
    A client requested ordering by a field missing from the mapping table.

    Recoverable at the request boundary: the HTTP layer answers with a
    client error and the query never reaches the database.
    """

    def __init__(self, sort_field: str):
        self.sort_field = sort_field
        super().__init__(f"Cannot sort by unknown field: {sort_field}", field="orderBy")

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["sort_field"] = self.sort_field
        return result


class InvalidFieldsError(InvalidQueryError):
    """A data shaping request named properties the resource does not have."""

    def __init__(self, fields: str, resource: str = None):
        self.fields = fields
        self.resource = resource
        target = f" on {resource}" if resource else ""
        super().__init__(f"Unknown fields requested{target}: {fields}", field="fields")


class EntityNotFoundError(DomainException):
    """
    Entity not found in the repository.

    Example:
        company = repo.get_company(company_id)
        if not company:
            raise EntityNotFoundError(f"Company {company_id} not found")
    """

    def __init__(self, message: str, entity_type: str = None, entity_id: str = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class BusinessRuleViolationError(DomainException):
    """
    Business rule violation.

    Example:
        if employee.first_name == employee.last_name:
            raise BusinessRuleViolationError("First and last name must differ")
    """

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class AmbiguousOrMissingMappingError(DomainException):
    """
    Zero or several property mappings exist for a (source, destination) pair.

    This is a programming-time configuration fault, never a user error.
    Callers abort startup or log it as critical and answer with a 500.
    """

    def __init__(self, source, destination, matches: int = 0):
        self.source = source
        self.destination = destination
        self.matches = matches
        super().__init__(
            f"Cannot find exact property mapping instance for <{source},{destination}> "
            f"({matches} registered)",
            "AMBIGUOUS_OR_MISSING_MAPPING",
        )
