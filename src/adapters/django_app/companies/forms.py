"""
Django Forms validating API payloads.

Forms are DRIVING ADAPTERS: they validate JSON bodies before the data
reaches the use cases. Field names follow the camelCase JSON contract so
that error messages point at the keys the client sent.

Responsibilities:
- Structural validation (required fields, types, lengths)
- Cross-field rules reported per field (422 problem details)
- Conversion into input DTOs

Forms contain NO business logic; the entities re-check their invariants.
"""

from typing import Any, Dict, List

from django import forms
from django.core.exceptions import NON_FIELD_ERRORS

from src.core.companies.dtos import CompanyAddInputDTO, EmployeeAddInputDTO
from src.core.companies.entities import Gender

from src.adapters.django_app.shared.problems import PayloadValidationError


DATE_INPUT_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%SZ"]

EMPLOYEE_FIELD_ATTRIBUTES = {
    "employeeNo": "employee_no",
    "firstName": "first_name",
    "lastName": "last_name",
    "gender": "gender",
    "dateOfBirth": "date_of_birth",
}


def form_errors(form: forms.Form, prefix: str = "") -> Dict[str, List[str]]:
    """Flatten form errors into ``{"prefix.field": [messages]}``."""
    errors = {}
    for field, messages in form.errors.items():
        key = "payload" if field == NON_FIELD_ERRORS else field
        errors[f"{prefix}{key}"] = list(messages)
    return errors


class JSONDateField(forms.DateField):
    """DateField that only accepts the string form a JSON body can carry."""

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


class EmployeeAddForm(forms.Form):
    """
    Payload of POST/PUT employee requests.

    Rules:
    - employeeNo, firstName, lastName, gender and dateOfBirth are required
    - firstName and lastName must differ
    - employeeNo must differ from firstName
    """

    employeeNo = forms.CharField(
        max_length=10,
        error_messages={
            'required': 'Employee number is required',
            'max_length': 'Employee number must have at most 10 characters',
        },
    )

    firstName = forms.CharField(
        max_length=50,
        error_messages={
            'required': 'First name is required',
            'max_length': 'First name must have at most 50 characters',
        },
    )

    lastName = forms.CharField(
        max_length=50,
        error_messages={
            'required': 'Last name is required',
            'max_length': 'Last name must have at most 50 characters',
        },
    )

    gender = forms.CharField(
        error_messages={'required': 'Gender is required'},
    )

    dateOfBirth = JSONDateField(
        input_formats=DATE_INPUT_FORMATS,
        error_messages={
            'required': 'Date of birth is required',
            'invalid': 'Date of birth must be a date (YYYY-MM-DD)',
        },
    )

    def clean_gender(self) -> Gender:
        try:
            return Gender.from_value(self.cleaned_data['gender'])
        except ValueError:
            raise forms.ValidationError('Gender must be Female, Male, 0 or 1')

    def clean(self):
        cleaned = super().clean()
        first_name = cleaned.get('firstName')
        last_name = cleaned.get('lastName')
        employee_no = cleaned.get('employeeNo')

        if first_name and last_name and first_name == last_name:
            self.add_error('firstName', 'First name and last name must differ')
            self.add_error('lastName', 'First name and last name must differ')

        if employee_no and first_name and employee_no == first_name:
            self.add_error('employeeNo', 'Employee number must differ from first name')

        return cleaned

    def to_input_dto(self) -> EmployeeAddInputDTO:
        data = self.cleaned_data
        return EmployeeAddInputDTO(
            employee_no=data['employeeNo'],
            first_name=data['firstName'],
            last_name=data['lastName'],
            gender=data['gender'],
            date_of_birth=data['dateOfBirth'],
        )


class EmployeePatchForm(EmployeeAddForm):
    """
    Payload of PATCH employee requests (JSON merge patch).

    Every field is optional; only the keys present in the body are
    applied. Unknown keys are rejected.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False

    def clean_gender(self):
        if not self.cleaned_data.get('gender'):
            return None
        return super().clean_gender()

    def clean(self):
        cleaned = super().clean()
        unknown = sorted(set(self.data) - set(self.fields))
        if unknown:
            raise forms.ValidationError(f"Unknown fields: {', '.join(unknown)}")
        return cleaned

    def changes(self) -> Dict[str, Any]:
        """Provided values keyed by entity attribute."""
        return {
            EMPLOYEE_FIELD_ATTRIBUTES[name]: self.cleaned_data[name]
            for name in self.fields
            if name in self.data
        }


class CompanyAddForm(forms.Form):
    """
    Payload of POST company requests (employees validated separately).
    """

    name = forms.CharField(
        max_length=100,
        error_messages={
            'required': 'Company name is required',
            'max_length': 'Company name must have at most 100 characters',
        },
    )

    introduction = forms.CharField(
        max_length=500,
        required=False,
        error_messages={'max_length': 'Introduction must have at most 500 characters'},
    )

    country = forms.CharField(max_length=100, required=False)
    industry = forms.CharField(max_length=100, required=False)
    product = forms.CharField(max_length=100, required=False)


def _as_object(payload: Any, key: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise PayloadValidationError({key: ["Expected a JSON object"]})
    return payload


def parse_employee(payload: Any) -> EmployeeAddInputDTO:
    """
    Validate an employee payload.

    Raises:
        PayloadValidationError: With the messages per field
    """
    form = EmployeeAddForm(data=_as_object(payload, "payload"))
    if not form.is_valid():
        raise PayloadValidationError(form_errors(form))
    return form.to_input_dto()


def parse_employee_patch(payload: Any) -> Dict[str, Any]:
    """Validate a merge patch; returns the provided values by entity attribute."""
    form = EmployeePatchForm(data=_as_object(payload, "payload"))
    if not form.is_valid():
        raise PayloadValidationError(form_errors(form))
    return form.changes()


def parse_company(payload: Any, prefix: str = "") -> CompanyAddInputDTO:
    """
    Validate a company payload, including its nested ``employees`` list.

    Raises:
        PayloadValidationError: With every message of the company and its
            employees (``employees[1].lastName``)
    """
    payload = _as_object(payload, prefix.rstrip(".") or "payload")
    form = CompanyAddForm(data=payload)
    errors = {} if form.is_valid() else form_errors(form, prefix)

    raw_employees = payload.get("employees") or []
    employees = []
    if not isinstance(raw_employees, list):
        errors[f"{prefix}employees"] = ["Expected a JSON array"]
        raw_employees = []

    for index, raw in enumerate(raw_employees):
        item_prefix = f"{prefix}employees[{index}]."
        if not isinstance(raw, dict):
            errors[f"{prefix}employees[{index}]"] = ["Expected a JSON object"]
            continue
        employee_form = EmployeeAddForm(data=raw)
        if employee_form.is_valid():
            employees.append(employee_form.to_input_dto())
        else:
            errors.update(form_errors(employee_form, item_prefix))

    if errors:
        raise PayloadValidationError(errors)

    data = form.cleaned_data
    return CompanyAddInputDTO(
        name=data['name'],
        country=data['country'] or None,
        industry=data['industry'] or None,
        product=data['product'] or None,
        introduction=data['introduction'] or None,
        employees=tuple(employees),
    )


def parse_company_collection(payload: Any) -> List[CompanyAddInputDTO]:
    """Validate a JSON array of company payloads."""
    if not isinstance(payload, list) or not payload:
        raise PayloadValidationError({"payload": ["Expected a non-empty JSON array of companies"]})

    companies = []
    errors = {}
    for index, item in enumerate(payload):
        try:
            companies.append(parse_company(item, prefix=f"[{index}]."))
        except PayloadValidationError as e:
            errors.update(e.errors)

    if errors:
        raise PayloadValidationError(errors)
    return companies
