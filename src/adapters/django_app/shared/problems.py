"""
RFC 7807 problem details responses.

Every error leaves the API as ``application/problem+json``:

    {
        "type": "https://tools.ietf.org/html/rfc7231#section-6.5.1",
        "title": "One or more validation errors occurred.",
        "status": 422,
        "detail": "See the errors field for details.",
        "instance": "/api/companies",
        "traceId": "4f0c...",
        "errors": {"name": ["This field is required."]}
    }
"""

from typing import Dict, List, Optional
import uuid

from django.http import HttpRequest, JsonResponse

from .negotiation import PROBLEM_JSON


PROBLEM_TYPES = {
    400: "https://tools.ietf.org/html/rfc7231#section-6.5.1",
    404: "https://tools.ietf.org/html/rfc7231#section-6.5.4",
    406: "https://tools.ietf.org/html/rfc7231#section-6.5.6",
    415: "https://tools.ietf.org/html/rfc7231#section-6.5.13",
    422: "https://tools.ietf.org/html/rfc4918#section-11.2",
    500: "https://tools.ietf.org/html/rfc7231#section-6.6.1",
}

PROBLEM_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    406: "Not Acceptable",
    415: "Unsupported Media Type",
    422: "One or more validation errors occurred.",
    500: "An error occurred while processing your request.",
}


class PayloadValidationError(Exception):
    """
    The request body failed form validation.

    Attributes:
        errors: Messages per field (``employees[0].firstName`` for nested items)
    """

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__(f"Invalid payload: {', '.join(errors)}")


class BadRequest(Exception):
    """Malformed request (unparseable JSON, bad ids...)."""


def trace_id(request: HttpRequest) -> str:
    """Request id from ``X-Request-ID``, or a fresh one."""
    if not hasattr(request, "_trace_id"):
        request._trace_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    return request._trace_id


def problem_response(
    request: HttpRequest,
    status: int,
    detail: Optional[str] = None,
    errors: Optional[Dict[str, List[str]]] = None,
    **extra,
) -> JsonResponse:
    """
    Build a problem details response.

    Args:
        request: Current request (used for ``instance`` and ``traceId``)
        status: HTTP status code
        detail: Human readable explanation
        errors: Validation messages per field
        **extra: Additional members (e.g. ``sortField``)
    """
    problem = {
        "type": PROBLEM_TYPES.get(status, "about:blank"),
        "title": PROBLEM_TITLES.get(status, "Error"),
        "status": status,
        "detail": detail,
        "instance": request.path,
        "traceId": trace_id(request),
    }
    if errors:
        problem["errors"] = errors
    problem.update(extra)

    return JsonResponse(problem, status=status, content_type=PROBLEM_JSON)


def validation_problem(request: HttpRequest, errors: Dict[str, List[str]]) -> JsonResponse:
    """422 response for form validation failures."""
    return problem_response(
        request,
        422,
        detail="See the errors field for details.",
        errors=errors,
    )
