"""
API Views of the Companies domain.

RESTful API with content negotiation (JSON, XML and vendor HATEOAS
media types), data shaping, sorting through the property mapping and
HTTP caching headers.

Endpoints:
- GET /api - Root document (links)
- GET, HEAD, OPTIONS /api/companies - List companies
- POST /api/companies - Create company (optionally with employees)
- GET /api/companies/<id> - Get company
- DELETE /api/companies/<id> - Delete company and its employees
- GET /api/companycollections/(<id>,<id>) - Get several companies
- POST /api/companycollections - Create several companies
- GET /api/companies/<id>/employees - List employees
- POST /api/companies/<id>/employees - Create employee
- GET /api/companies/<id>/employees/<id> - Get employee
- PUT /api/companies/<id>/employees/<id> - Replace (or create) employee
- PATCH /api/companies/<id>/employees/<id> - Merge patch employee
- DELETE /api/companies/<id>/employees/<id> - Delete employee

Format:
- Input: JSON (merge patch JSON for PATCH)
- Output: negotiated by Accept; errors as problem details
"""

import json
import logging
import uuid
from typing import List, Sequence

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.urls import reverse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.core.companies.dtos import CompanyQueryDTO, EmployeeQueryDTO
from src.core.shared.exceptions import (
    AmbiguousOrMissingMappingError,
    BusinessRuleViolationError,
    DomainException,
    EntityNotFoundError,
    InvalidQueryError,
    UnknownSortFieldError,
    ValidationError,
)
from src.core.shared.shaping import shape_data, shape_data_list
from src.config.container import get_container

from src.adapters.django_app.shared.http_cache import add_expiration_headers
from src.adapters.django_app.shared.negotiation import (
    COLLECTION_TYPES,
    COMPANY_TYPES,
    DEFAULT_TYPES,
    JSON,
    MERGE_PATCH_JSON,
    NotAcceptable,
    Representation,
    UnsupportedMediaType,
    negotiate,
    render,
    require_content_type,
)
from src.adapters.django_app.shared.problems import (
    BadRequest,
    PayloadValidationError,
    problem_response,
    validation_problem,
)

from . import forms, links

logger = logging.getLogger(__name__)

COMPANIES_MAX_AGE = 120
COMPANY_MAX_AGE = 1800


# =============================================================================
# Helpers
# =============================================================================

def parse_id(value: str, field: str = "id") -> str:
    """
    Normalize a GUID path segment.

    Raises:
        InvalidQueryError: If ``value`` is not a GUID
    """
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise InvalidQueryError(f"Invalid id: {value}", field=field)


def parse_ids(value: str) -> List[str]:
    """Parse a comma separated GUID list, skipping blanks."""
    return [parse_id(item.strip(), field="ids") for item in value.split(",") if item.strip()]


def query_int(request: HttpRequest, name: str, default: int) -> int:
    value = request.GET.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        raise InvalidQueryError(f"{name} must be an integer", field=name)


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    Base view of the API.

    Provides:
    - Content negotiation against ``media_types``
    - JSON body parsing with Content-Type checks
    - Access to the DI container
    - Problem details for every error
    """

    media_types: Sequence[str] = DEFAULT_TYPES

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except Exception as e:
            return self.handle_exception(e)

    def get_container(self):
        return get_container()

    def get_service(self, service_name: str):
        """Build a use case from the container."""
        return getattr(self.get_container(), service_name)()

    def negotiate(self, request: HttpRequest) -> Representation:
        return negotiate(request, self.media_types)

    def parse_body(self, request: HttpRequest, supported: Sequence[str] = (JSON,)):
        """
        Parse the JSON body.

        Raises:
            UnsupportedMediaType: If Content-Type is not in ``supported``
            BadRequest: If the body is empty or not valid JSON
        """
        require_content_type(request, supported)

        if not request.body:
            raise BadRequest("Request body is required")

        try:
            return json.loads(request.body)
        except ValueError as e:
            raise BadRequest(f"Malformed JSON: {e}")

    def handle_exception(self, e: Exception) -> HttpResponse:
        """
        Map an exception to a problem details response.

        - Payload validation -> 422 (with ``errors``)
        - Bad query parameters, malformed JSON -> 400
        - Missing entities -> 404
        - Mapping registry misconfiguration -> 500 (CRITICAL log)
        - Anything else -> 500 (traceback logged)
        """
        request = self.request

        if isinstance(e, PayloadValidationError):
            return validation_problem(request, e.errors)

        if isinstance(e, NotAcceptable):
            return problem_response(request, 406, str(e))

        if isinstance(e, UnsupportedMediaType):
            return problem_response(request, 415, str(e))

        if isinstance(e, BadRequest):
            return problem_response(request, 400, str(e))

        if isinstance(e, UnknownSortFieldError):
            return problem_response(
                request,
                400,
                e.message,
                errors={e.field: [e.message]},
                sortField=e.sort_field,
            )

        if isinstance(e, InvalidQueryError):
            return problem_response(request, 400, e.message, errors={e.field: [e.message]})

        if isinstance(e, ValidationError):
            return validation_problem(request, {e.field or "payload": [e.message]})

        if isinstance(e, BusinessRuleViolationError):
            return problem_response(request, 422, e.message, rule=e.rule)

        if isinstance(e, EntityNotFoundError):
            return problem_response(request, 404, e.message)

        if isinstance(e, AmbiguousOrMissingMappingError):
            logger.critical(f"Property mapping misconfigured: {e}")
            return problem_response(request, 500, "Server configuration error")

        if isinstance(e, DomainException):
            return problem_response(request, 400, e.message)

        logger.exception(f"Unexpected API error: {e}")
        return problem_response(request, 500, "Internal server error")


# =============================================================================
# Root
# =============================================================================

class RootAPIView(BaseAPIView):
    """GET /api - entry point listing the top level links."""

    media_types = COLLECTION_TYPES

    def get(self, request: HttpRequest) -> HttpResponse:
        representation = self.negotiate(request)
        return render(links.root_links(request), representation, root_name="Link")


# =============================================================================
# Companies
# =============================================================================

class CompanyListAPIView(BaseAPIView):
    """
    GET /api/companies - list companies
    POST /api/companies - create a company
    """

    media_types = COLLECTION_TYPES

    def get(self, request: HttpRequest) -> HttpResponse:
        """
        Query params:
        - companyName: exact name filter
        - searchTerm: search in name and introduction
        - pageNumber (default 1), pageSize (default 5, capped)
        - orderBy: e.g. "country desc,companyName" (default CompanyName)
        - fields: data shaping, e.g. "id,companyName"
        """
        representation = self.negotiate(request)

        query = CompanyQueryDTO(
            company_name=request.GET.get('companyName') or None,
            search_term=request.GET.get('searchTerm') or None,
            page_number=query_int(request, 'pageNumber', 1),
            page_size=query_int(request, 'pageSize', 5),
            order_by=request.GET.get('orderBy') or 'CompanyName',
            fields=request.GET.get('fields') or None,
            max_page_size=getattr(settings, 'PAGE_SIZE_MAX', 20),
        )
        page = self.get_service('list_companies_service').execute(query)

        pagination = page.pagination_metadata()
        items = shape_data_list([dto.to_dict() for dto in page.items], query.fields)

        if representation.include_links:
            for item, dto in zip(items, page.items):
                item['links'] = links.company_links(request, dto.id)
            body = {
                'value': items,
                'links': links.companies_collection_links(request, query, page.has_previous, page.has_next),
            }
        else:
            pagination['previousPageLink'] = (
                links.companies_page_uri(request, query, query.page_number - 1) if page.has_previous else None
            )
            pagination['nextPageLink'] = (
                links.companies_page_uri(request, query, query.page_number + 1) if page.has_next else None
            )
            body = items

        response = render(
            body,
            representation,
            root_name="Company",
            headers={'X-Pagination': json.dumps(pagination)},
        )
        add_expiration_headers(response, COMPANIES_MAX_AGE)
        return response

    def post(self, request: HttpRequest) -> HttpResponse:
        """
        Body JSON:
        {
            "name": "string (required)",
            "country": "string", "industry": "string", "product": "string",
            "introduction": "string",
            "employees": [{"employeeNo": ..., "firstName": ..., ...}]
        }
        """
        representation = self.negotiate(request)
        input_dto = forms.parse_company(self.parse_body(request))

        company = self.get_service('create_company_service').execute(input_dto)
        logger.info(f"API: Company created: {company.id}")

        body = company.to_dict()
        if representation.include_links:
            body['links'] = links.company_links(request, company.id)

        location = request.build_absolute_uri(
            reverse('companies:company_detail', kwargs={'company_id': company.id})
        )
        return render(body, representation, status=201, root_name="Company", headers={'Location': location})


class CompanyDetailAPIView(BaseAPIView):
    """
    GET /api/companies/<id> - friendly, full or hateoas representation
    DELETE /api/companies/<id> - delete company and employees
    """

    media_types = COMPANY_TYPES

    def get(self, request: HttpRequest, company_id: str) -> HttpResponse:
        representation = self.negotiate(request)
        company_id = parse_id(company_id, field="companyId")
        fields = request.GET.get('fields') or None

        dto = self.get_service('get_company_service').execute(
            company_id,
            fields=fields,
            full=representation.full,
        )

        body = shape_data(dto.to_dict(), fields)
        if representation.include_links:
            body['links'] = links.company_links(request, company_id, fields)

        response = render(body, representation, root_name="Company")
        add_expiration_headers(response, COMPANY_MAX_AGE)
        return response

    def delete(self, request: HttpRequest, company_id: str) -> HttpResponse:
        company_id = parse_id(company_id, field="companyId")
        self.get_service('delete_company_service').execute(company_id)
        logger.info(f"API: Company deleted: {company_id}")
        return HttpResponse(status=204)


class CompanyCollectionAPIView(BaseAPIView):
    """GET /api/companycollections/(<id>,<id>,...)"""

    def get(self, request: HttpRequest, ids: str) -> HttpResponse:
        representation = self.negotiate(request)
        companies = self.get_service('get_company_collection_service').execute(parse_ids(ids))
        return render([dto.to_dict() for dto in companies], representation, root_name="Company")


class CompanyCollectionCreateAPIView(BaseAPIView):
    """POST /api/companycollections - body is a JSON array of companies."""

    def post(self, request: HttpRequest) -> HttpResponse:
        representation = self.negotiate(request)
        input_dtos = forms.parse_company_collection(self.parse_body(request))

        companies = self.get_service('create_company_collection_service').execute(input_dtos)
        logger.info(f"API: {len(companies)} companies created")

        ids = ",".join(dto.id for dto in companies)
        location = request.build_absolute_uri(reverse('companies:company_collection', kwargs={'ids': ids}))
        return render(
            [dto.to_dict() for dto in companies],
            representation,
            status=201,
            root_name="Company",
            headers={'Location': location},
        )


# =============================================================================
# Employees
# =============================================================================

class EmployeeListAPIView(BaseAPIView):
    """
    GET /api/companies/<id>/employees - list employees
    POST /api/companies/<id>/employees - create employee
    """

    def get(self, request: HttpRequest, company_id: str) -> HttpResponse:
        """
        Query params:
        - gender: Female/Male/0/1
        - q: search in employee number, first and last name
        - orderBy: e.g. "name,age desc" (default Name)
        - fields: data shaping
        """
        representation = self.negotiate(request)

        query = EmployeeQueryDTO(
            company_id=parse_id(company_id, field="companyId"),
            gender=request.GET.get('gender') or None,
            q=request.GET.get('q') or None,
            order_by=request.GET.get('orderBy') or 'Name',
            fields=request.GET.get('fields') or None,
        )
        employees = self.get_service('list_employees_service').execute(query)

        body = shape_data_list([dto.to_dict() for dto in employees], query.fields)
        return render(body, representation, root_name="Employee")

    def post(self, request: HttpRequest, company_id: str) -> HttpResponse:
        """
        Body JSON:
        {
            "employeeNo": "string", "firstName": "string", "lastName": "string",
            "gender": "Female|Male|0|1", "dateOfBirth": "YYYY-MM-DD"
        }
        """
        representation = self.negotiate(request)
        company_id = parse_id(company_id, field="companyId")
        input_dto = forms.parse_employee(self.parse_body(request))

        employee = self.get_service('create_employee_service').execute(company_id, input_dto)
        logger.info(f"API: Employee created: {employee.id}")

        return render(
            employee.to_dict(),
            representation,
            status=201,
            root_name="Employee",
            headers={'Location': self._location(request, company_id, employee.id)},
        )

    @staticmethod
    def _location(request: HttpRequest, company_id: str, employee_id: str) -> str:
        return request.build_absolute_uri(reverse(
            'companies:employee_detail',
            kwargs={'company_id': company_id, 'employee_id': employee_id},
        ))


class EmployeeDetailAPIView(BaseAPIView):
    """
    GET / PUT / PATCH / DELETE /api/companies/<id>/employees/<id>

    PUT and PATCH create the employee when the id is unknown (201).
    """

    def get(self, request: HttpRequest, company_id: str, employee_id: str) -> HttpResponse:
        representation = self.negotiate(request)
        fields = request.GET.get('fields') or None

        employee = self.get_service('get_employee_service').execute(
            parse_id(company_id, field="companyId"),
            parse_id(employee_id, field="employeeId"),
            fields=fields,
        )
        return render(shape_data(employee.to_dict(), fields), representation, root_name="Employee")

    def put(self, request: HttpRequest, company_id: str, employee_id: str) -> HttpResponse:
        representation = self.negotiate(request)
        company_id = parse_id(company_id, field="companyId")
        employee_id = parse_id(employee_id, field="employeeId")
        input_dto = forms.parse_employee(self.parse_body(request))

        employee, created = self.get_service('update_employee_service').execute(
            company_id, employee_id, input_dto
        )
        return self._upsert_response(request, representation, company_id, employee, created)

    def patch(self, request: HttpRequest, company_id: str, employee_id: str) -> HttpResponse:
        representation = self.negotiate(request)
        company_id = parse_id(company_id, field="companyId")
        employee_id = parse_id(employee_id, field="employeeId")
        changes = forms.parse_employee_patch(self.parse_body(request, supported=(MERGE_PATCH_JSON, JSON)))

        employee, created = self.get_service('patch_employee_service').execute(
            company_id, employee_id, changes
        )
        return self._upsert_response(request, representation, company_id, employee, created)

    def delete(self, request: HttpRequest, company_id: str, employee_id: str) -> HttpResponse:
        self.get_service('delete_employee_service').execute(
            parse_id(company_id, field="companyId"),
            parse_id(employee_id, field="employeeId"),
        )
        return HttpResponse(status=204)

    def _upsert_response(self, request, representation, company_id, employee, created) -> HttpResponse:
        if not created:
            return HttpResponse(status=204)

        return render(
            employee.to_dict(),
            representation,
            status=201,
            root_name="Employee",
            headers={'Location': EmployeeListAPIView._location(request, company_id, employee.id)},
        )
