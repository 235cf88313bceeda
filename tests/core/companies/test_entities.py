"""
Unit tests for the entities of the Companies domain.

Tests the business rules encapsulated in the entities:
- Required fields and maximum lengths
- First/last name and employee number rules
- Derived values (name, age)
- Gender parsing
"""

from datetime import date

import pytest

from src.core.companies.entities import CompanyEntity, EmployeeEntity, Gender, _full_years
from src.core.shared.exceptions import ValidationError


def make_employee(**overrides):
    values = {
        'company_id': 'company-1',
        'employee_no': 'MSFT231',
        'first_name': 'Nick',
        'last_name': 'Carter',
        'gender': Gender.MALE,
        'date_of_birth': date(1976, 1, 2),
    }
    values.update(overrides)
    return EmployeeEntity.create(**values)


class TestGender:

    @pytest.mark.parametrize("value,expected", [
        (Gender.FEMALE, Gender.FEMALE),
        (0, Gender.FEMALE),
        (1, Gender.MALE),
        ("1", Gender.MALE),
        ("female", Gender.FEMALE),
        (" Male ", Gender.MALE),
    ])
    def test_from_value(self, value, expected):
        assert Gender.from_value(value) is expected

    @pytest.mark.parametrize("value", ["other", "", 2, None, True])
    def test_from_value_rejects(self, value):
        with pytest.raises(ValueError):
            Gender.from_value(value)

    def test_display(self):
        assert Gender.FEMALE.display == "Female"
        assert Gender.MALE.display == "Male"


class TestEmployeeEntity:

    def test_create(self):
        employee = make_employee()

        assert employee.id
        assert employee.company_id == 'company-1'
        assert employee.name == "Nick Carter"

    def test_create_strips_values(self):
        employee = make_employee(first_name="  Nick ", employee_no=" MSFT231 ")

        assert employee.first_name == "Nick"
        assert employee.employee_no == "MSFT231"

    def test_create_with_explicit_id(self):
        employee = make_employee(employee_id="4b501cb3-d168-4cc0-b375-48fb33f318a4")

        assert employee.id == "4b501cb3-d168-4cc0-b375-48fb33f318a4"

    @pytest.mark.parametrize("field,attribute", [
        ("employeeNo", "employee_no"),
        ("firstName", "first_name"),
        ("lastName", "last_name"),
    ])
    def test_required_fields(self, field, attribute):
        with pytest.raises(ValidationError) as exc_info:
            make_employee(**{attribute: "   "})

        assert exc_info.value.field == field

    def test_employee_no_max_length(self):
        with pytest.raises(ValidationError) as exc_info:
            make_employee(employee_no="X" * 11)

        assert exc_info.value.field == "employeeNo"

    def test_name_max_length(self):
        with pytest.raises(ValidationError):
            make_employee(last_name="C" * 51)

    def test_date_of_birth_required(self):
        with pytest.raises(ValidationError) as exc_info:
            make_employee(date_of_birth=None)

        assert exc_info.value.field == "dateOfBirth"

    def test_first_and_last_name_must_differ(self):
        with pytest.raises(ValidationError) as exc_info:
            make_employee(first_name="Carter", last_name="Carter")

        assert exc_info.value.field == "lastName"

    def test_employee_no_must_differ_from_first_name(self):
        with pytest.raises(ValidationError) as exc_info:
            make_employee(employee_no="Nick")

        assert exc_info.value.field == "employeeNo"

    def test_update_replaces_values(self):
        employee = make_employee()
        original_id = employee.id

        employee.update(
            employee_no="MSFT999",
            first_name="Vince",
            last_name="Carter",
            gender=Gender.MALE,
            date_of_birth=date(1981, 12, 5),
        )

        assert employee.id == original_id
        assert employee.name == "Vince Carter"
        assert employee.employee_no == "MSFT999"

    def test_invalid_update_leaves_entity_untouched(self):
        employee = make_employee()

        with pytest.raises(ValidationError):
            employee.update(
                employee_no="MSFT999",
                first_name="Same",
                last_name="Same",
                gender=Gender.MALE,
                date_of_birth=date(1981, 12, 5),
            )

        assert employee.name == "Nick Carter"
        assert employee.employee_no == "MSFT231"

    def test_full_years(self):
        born = date(1976, 1, 2)

        assert _full_years(born, date(2020, 1, 1)) == 43
        assert _full_years(born, date(2020, 1, 2)) == 44

    def test_age_is_not_negative_for_recent_birth(self):
        assert make_employee(date_of_birth=date.today()).age == 0

    def test_equality_by_id(self):
        employee = make_employee()
        same = make_employee(employee_id=employee.id, first_name="Other")

        assert employee == same
        assert employee != make_employee()


class TestCompanyEntity:

    def test_create(self):
        company = CompanyEntity.create(name="  Microsoft ", country="USA")

        assert company.id
        assert company.name == "Microsoft"
        assert company.country == "USA"
        assert company.employees == []

    def test_name_required(self):
        with pytest.raises(ValidationError) as exc_info:
            CompanyEntity.create(name="  ")

        assert exc_info.value.field == "name"

    def test_name_max_length(self):
        with pytest.raises(ValidationError):
            CompanyEntity.create(name="M" * 101)

    def test_introduction_max_length(self):
        with pytest.raises(ValidationError) as exc_info:
            CompanyEntity.create(name="Microsoft", introduction="i" * 501)

        assert exc_info.value.field == "introduction"

    def test_add_employee_sets_company(self):
        company = CompanyEntity.create(name="Microsoft")
        employee = make_employee(company_id="")

        company.add_employee(employee)

        assert employee.company_id == company.id
        assert company.employees == [employee]
