"""
Data shaping - lets clients pick which properties a response carries.

Clients send ``fields=id,companyName`` and receive only those keys.
Names are matched case-insensitively against the public fields of the
output DTO; the DTO's own spelling is kept in the result.

Components:
- PropertyCheckerService: validates a ``fields`` string against a DTO type
- shape_data / shape_data_list: project serialized DTOs onto those fields
"""

from typing import Any, Dict, Iterable, List, Optional


def split_fields(fields: Optional[str]) -> List[str]:
    """Split a comma separated ``fields`` string, dropping blanks."""
    if not fields:
        return []
    return [name.strip() for name in fields.split(",") if name.strip()]


class PropertyCheckerService:
    """
    Checks whether a DTO type exposes every requested property.

    The DTO type must provide a ``field_names()`` classmethod returning
    its public (serialized) property names.

    Example:
        checker = PropertyCheckerService()
        checker.type_has_properties(CompanyOutputDTO, "id,companyName")  # True
        checker.type_has_properties(CompanyOutputDTO, "salary")          # False
    """

    def type_has_properties(self, dto_type: type, fields: Optional[str]) -> bool:
        """
        Args:
            dto_type: Output DTO class
            fields: Comma separated property names (blank means "all")

        Returns:
            True when every name maps to a property of ``dto_type``
        """
        requested = split_fields(fields)
        if not requested:
            return True

        known = {name.casefold() for name in dto_type.field_names()}
        return all(name.casefold() in known for name in requested)


def _resolve_keys(available: Iterable[str], fields: Optional[str]) -> Optional[List[str]]:
    requested = split_fields(fields)
    if not requested:
        return None

    by_folded = {key.casefold(): key for key in available}
    keys = []
    for name in requested:
        key = by_folded.get(name.casefold())
        if key is None:
            raise KeyError(name)
        if key not in keys:
            keys.append(key)
    return keys


def shape_data(data: Dict[str, Any], fields: Optional[str]) -> Dict[str, Any]:
    """
    Keep only the requested keys of a serialized DTO.

    Args:
        data: Serialized DTO (``to_dict()`` output)
        fields: Comma separated names; blank returns ``data`` unchanged

    Returns:
        New dict with the requested keys, in request order

    Raises:
        KeyError: If a name is not a key of ``data``. Validate the
            request with PropertyCheckerService first.
    """
    keys = _resolve_keys(data.keys(), fields)
    if keys is None:
        return dict(data)
    return {key: data[key] for key in keys}


def shape_data_list(items: List[Dict[str, Any]], fields: Optional[str]) -> List[Dict[str, Any]]:
    """Apply :func:`shape_data` to every item of a list."""
    return [shape_data(item, fields) for item in items]
