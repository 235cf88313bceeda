"""
Entities of the Companies domain.

Entities:
- CompanyEntity: aggregate root (a company and its employees)
- EmployeeEntity: a person employed by a company
- Gender: employee gender, stored as an integer

Business rules encapsulated:
- Required fields and maximum lengths
- First name and last name must differ
- Employee number must differ from first name
- Age derived from date of birth
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional
import uuid

from src.core.shared.exceptions import ValidationError


class Gender(Enum):
    """
    Employee gender.

    Stored as an integer column; rendered as its display name.
    """

    FEMALE = 0
    MALE = 1

    @property
    def display(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_value(cls, value) -> "Gender":
        """
        Parse a gender from its name, display name or integer value.

        Args:
            value: "male", "Female", 1, "0" or a Gender

        Returns:
            Matching Gender

        Raises:
            ValueError: If the value matches no gender
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)

        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls(int(text))
            try:
                return cls[text.upper()]
            except KeyError:
                pass

        raise ValueError(f"Invalid gender: {value}")


def _full_years(born: date, today: date) -> int:
    years = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        years -= 1
    return years


@dataclass
class EmployeeEntity:
    """
    Domain Entity: Employee.

    Invariants:
    - employee_no, first_name and last_name are required
    - first_name differs from last_name
    - employee_no differs from first_name

    Example:
        employee = EmployeeEntity.create(
            company_id=company.id,
            employee_no="MSFT231",
            first_name="Nick",
            last_name="Carter",
            gender=Gender.MALE,
            date_of_birth=date(1976, 1, 2),
        )
        employee.name  # "Nick Carter"
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    company_id: str = ""
    employee_no: str = ""
    first_name: str = ""
    last_name: str = ""
    gender: Gender = Gender.MALE
    date_of_birth: Optional[date] = None

    EMPLOYEE_NO_MAX_LENGTH = 10
    NAME_MAX_LENGTH = 50

    @classmethod
    def create(
        cls,
        company_id: str,
        employee_no: str,
        first_name: str,
        last_name: str,
        gender: Gender,
        date_of_birth: date,
        employee_id: Optional[str] = None,
    ) -> "EmployeeEntity":
        """
        Factory method that validates and builds an employee.

        Args:
            company_id: Owning company
            employee_no: Employee number (max 10 characters)
            first_name: First name (max 50 characters)
            last_name: Last name (max 50 characters)
            gender: Gender
            date_of_birth: Date of birth
            employee_id: Explicit id (upsert); a new UUID otherwise

        Raises:
            ValidationError: If any rule is broken
        """
        employee = cls(
            company_id=company_id,
            employee_no=(employee_no or "").strip(),
            first_name=(first_name or "").strip(),
            last_name=(last_name or "").strip(),
            gender=gender,
            date_of_birth=date_of_birth,
        )
        if employee_id:
            employee.id = employee_id

        employee.validate()
        return employee

    def validate(self) -> None:
        """Check every invariant; raises ValidationError on the first failure."""
        self._validate_required("employeeNo", self.employee_no, self.EMPLOYEE_NO_MAX_LENGTH)
        self._validate_required("firstName", self.first_name, self.NAME_MAX_LENGTH)
        self._validate_required("lastName", self.last_name, self.NAME_MAX_LENGTH)

        if self.date_of_birth is None:
            raise ValidationError("Date of birth is required", field="dateOfBirth")

        if self.first_name == self.last_name:
            raise ValidationError("First name and last name must differ", field="lastName")

        if self.employee_no == self.first_name:
            raise ValidationError("Employee number must differ from first name", field="employeeNo")

    @staticmethod
    def _validate_required(field_name: str, value: str, max_length: int) -> None:
        if not value:
            raise ValidationError(f"{field_name} is required", field=field_name)

        if len(value) > max_length:
            raise ValidationError(
                f"{field_name} must have at most {max_length} characters",
                field=field_name,
            )

    def update(
        self,
        employee_no: str,
        first_name: str,
        last_name: str,
        gender: Gender,
        date_of_birth: date,
    ) -> None:
        """
        Replace every mutable value, then re-validate.

        The entity is left untouched when validation fails.
        """
        candidate = EmployeeEntity.create(
            company_id=self.company_id,
            employee_no=employee_no,
            first_name=first_name,
            last_name=last_name,
            gender=gender,
            date_of_birth=date_of_birth,
            employee_id=self.id,
        )
        self.employee_no = candidate.employee_no
        self.first_name = candidate.first_name
        self.last_name = candidate.last_name
        self.gender = candidate.gender
        self.date_of_birth = candidate.date_of_birth

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def age(self) -> int:
        """Age in full years as of today."""
        return _full_years(self.date_of_birth, date.today())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmployeeEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass
class CompanyEntity:
    """
    Domain Entity: Company.

    Aggregate root of the domain. Employees only exist inside a company and
    are removed with it.

    Invariants:
    - name is required (max 100 characters)
    - introduction has at most 500 characters

    Example:
        company = CompanyEntity.create(name="Microsoft", country="USA")
        company.add_employee(employee)
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    country: Optional[str] = None
    industry: Optional[str] = None
    product: Optional[str] = None
    introduction: Optional[str] = None
    employees: List[EmployeeEntity] = field(default_factory=list)

    NAME_MAX_LENGTH = 100
    INTRODUCTION_MAX_LENGTH = 500

    @classmethod
    def create(
        cls,
        name: str,
        country: Optional[str] = None,
        industry: Optional[str] = None,
        product: Optional[str] = None,
        introduction: Optional[str] = None,
    ) -> "CompanyEntity":
        """
        Factory method that validates and builds a company.

        Raises:
            ValidationError: If name or introduction are invalid
        """
        cls._validate_name(name)
        cls._validate_introduction(introduction)

        return cls(
            name=name.strip(),
            country=country,
            industry=industry,
            product=product,
            introduction=introduction,
        )

    @classmethod
    def _validate_name(cls, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Company name is required", field="name")

        if len(name.strip()) > cls.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Company name must have at most {cls.NAME_MAX_LENGTH} characters",
                field="name",
            )

    @classmethod
    def _validate_introduction(cls, introduction: Optional[str]) -> None:
        if introduction and len(introduction) > cls.INTRODUCTION_MAX_LENGTH:
            raise ValidationError(
                f"Introduction must have at most {cls.INTRODUCTION_MAX_LENGTH} characters",
                field="introduction",
            )

    def add_employee(self, employee: EmployeeEntity) -> None:
        """Attach an employee to this company."""
        employee.company_id = self.id
        self.employees.append(employee)

    def __repr__(self) -> str:
        return f"CompanyEntity(id={self.id[:8]}..., name='{self.name}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompanyEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
