"""
Tests for payload parsing (forms) and content negotiation helpers.
"""

from datetime import date

import pytest
from django.test import RequestFactory

from src.adapters.django_app.companies import forms
from src.adapters.django_app.shared.negotiation import (
    COMPANY_TYPES,
    FRIENDLY_HATEOAS,
    FULL,
    JSON,
    XML,
    NotAcceptable,
    negotiate,
    render_xml,
)
from src.adapters.django_app.shared.problems import PayloadValidationError
from src.core.companies.entities import Gender


EMPLOYEE = {
    "employeeNo": "G200",
    "firstName": "Ann",
    "lastName": "Lee",
    "gender": 0,
    "dateOfBirth": "1990-01-01",
}


class TestEmployeeForms:

    def test_parse_employee(self):
        dto = forms.parse_employee(EMPLOYEE)

        assert dto.first_name == "Ann"
        assert dto.gender is Gender.FEMALE
        assert dto.date_of_birth == date(1990, 1, 1)

    def test_gender_by_name(self):
        assert forms.parse_employee(dict(EMPLOYEE, gender="male")).gender is Gender.MALE

    def test_invalid_gender(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            forms.parse_employee(dict(EMPLOYEE, gender="robot"))

        assert "gender" in exc_info.value.errors

    @pytest.mark.parametrize("value", [19900101, 1.5, True, ["1990-01-01"], {"year": 1990}])
    def test_date_of_birth_must_be_a_string(self, value):
        with pytest.raises(PayloadValidationError) as exc_info:
            forms.parse_employee(dict(EMPLOYEE, dateOfBirth=value))

        assert list(exc_info.value.errors) == ["dateOfBirth"]

    def test_patch_date_of_birth_must_be_a_string(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            forms.parse_employee_patch({"dateOfBirth": 19900101})

        assert "dateOfBirth" in exc_info.value.errors

    def test_employee_no_equal_to_first_name(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            forms.parse_employee(dict(EMPLOYEE, employeeNo="Ann"))

        assert list(exc_info.value.errors) == ["employeeNo"]

    def test_max_length(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            forms.parse_employee(dict(EMPLOYEE, employeeNo="X" * 11))

        assert "employeeNo" in exc_info.value.errors

    def test_patch_returns_only_provided_values(self):
        changes = forms.parse_employee_patch({"lastName": "Smith", "dateOfBirth": "1991-02-03"})

        assert changes == {"last_name": "Smith", "date_of_birth": date(1991, 2, 3)}

    def test_patch_rejects_unknown_keys(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            forms.parse_employee_patch({"salary": 1})

        assert "payload" in exc_info.value.errors


class TestCompanyForms:

    def test_parse_company(self):
        dto = forms.parse_company({"name": "Contoso", "country": "", "employees": [EMPLOYEE]})

        assert dto.name == "Contoso"
        assert dto.country is None
        assert len(dto.employees) == 1

    def test_employees_must_be_a_list(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            forms.parse_company({"name": "Contoso", "employees": {"a": 1}})

        assert "employees" in exc_info.value.errors

    def test_collection_prefixes_errors(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            forms.parse_company_collection([
                {"name": "One"},
                {"name": "Two", "employees": [dict(EMPLOYEE, lastName="")]},
            ])

        assert list(exc_info.value.errors) == ["[1].employees[0].lastName"]

    def test_empty_collection(self):
        with pytest.raises(PayloadValidationError):
            forms.parse_company_collection([])


class TestNegotiation:

    @pytest.fixture
    def rf(self):
        return RequestFactory()

    def test_missing_accept_prefers_json(self, rf):
        assert negotiate(rf.get("/"), COMPANY_TYPES).media_type == JSON

    def test_wildcard_prefers_json(self, rf):
        assert negotiate(rf.get("/", headers={"accept": "*/*"}), COMPANY_TYPES).media_type == JSON

    def test_vendor_type_options(self, rf):
        friendly_hateoas = negotiate(rf.get("/", headers={"accept": FRIENDLY_HATEOAS}), COMPANY_TYPES)
        full = negotiate(rf.get("/", headers={"accept": FULL}), COMPANY_TYPES)

        assert friendly_hateoas.include_links and not friendly_hateoas.full
        assert full.full and not full.include_links

    def test_quality_values(self, rf):
        request = rf.get("/", headers={"accept": "application/json;q=0.5, application/xml"})

        assert negotiate(request).is_xml

    def test_not_acceptable(self, rf):
        with pytest.raises(NotAcceptable):
            negotiate(rf.get("/", headers={"accept": "text/html"}), (JSON, XML))

    def test_render_xml_nil_and_lists(self):
        content = render_xml({"id": "1", "country": None, "links": [{"rel": "self"}]}, "Company")

        assert '<country nil="true"></country>' in content
        assert "<links><link><rel>self</rel></link></links>" in content
