"""
HATEOAS links embedded by the ``*.hateoas+json`` media types.

A link is ``{"href": ..., "rel": ..., "method": ...}`` with an absolute
href.
"""

from typing import Dict, List, Optional
from urllib.parse import urlencode

from django.http import HttpRequest
from django.urls import reverse

from src.core.companies.dtos import CompanyQueryDTO


def link(request: HttpRequest, href: str, rel: str, method: str) -> Dict[str, str]:
    return {"href": request.build_absolute_uri(href), "rel": rel, "method": method}


def root_links(request: HttpRequest) -> List[Dict[str, str]]:
    companies = reverse("companies:company_list")
    return [
        link(request, reverse("companies:root"), "self", "GET"),
        link(request, companies, "companies", "GET"),
        link(request, companies, "create_company", "POST"),
    ]


def company_links(request: HttpRequest, company_id: str, fields: Optional[str] = None) -> List[Dict[str, str]]:
    """Links of a single company; ``self`` keeps the ``fields`` selection."""
    detail = reverse("companies:company_detail", kwargs={"company_id": company_id})
    employees = reverse("companies:employee_list", kwargs={"company_id": company_id})

    self_href = f"{detail}?{urlencode({'fields': fields})}" if fields else detail
    return [
        link(request, self_href, "self", "GET"),
        link(request, detail, "delete_company", "DELETE"),
        link(request, employees, "employees", "GET"),
        link(request, employees, "create_employee_for_company", "POST"),
    ]


def companies_page_uri(request: HttpRequest, query: CompanyQueryDTO, page_number: int) -> str:
    """Absolute URI of another page of the same company listing."""
    params = {
        "fields": query.fields,
        "orderBy": query.order_by,
        "pageNumber": page_number,
        "pageSize": query.page_size,
        "companyName": query.company_name,
        "searchTerm": query.search_term,
    }
    params = {key: value for key, value in params.items() if value not in (None, "")}
    return request.build_absolute_uri(f"{reverse('companies:company_list')}?{urlencode(params)}")


def companies_collection_links(
    request: HttpRequest,
    query: CompanyQueryDTO,
    has_previous: bool,
    has_next: bool,
) -> List[Dict[str, str]]:
    links = [{"href": companies_page_uri(request, query, query.page_number), "rel": "self", "method": "GET"}]
    if has_previous:
        links.append({
            "href": companies_page_uri(request, query, query.page_number - 1),
            "rel": "previous_page",
            "method": "GET",
        })
    if has_next:
        links.append({
            "href": companies_page_uri(request, query, query.page_number + 1),
            "rel": "next_page",
            "method": "GET",
        })
    return links
