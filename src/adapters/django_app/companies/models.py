"""
Django Models of the Companies domain.

These models are ADAPTERS: they persist the entities defined in
src/core/companies/entities.py.

IMPORTANT:
- Models contain NO business logic
- Business logic lives in the Core entities
- Models are converted to/from entities by the mappers

Tables:
- CompanyModel: companies
- EmployeeModel: employees (FK to company, cascade delete)
"""

from django.db import models


class GenderChoices(models.IntegerChoices):
    """Mirrors Gender of the Core."""
    FEMALE = 0, 'Female'
    MALE = 1, 'Male'


class CompanyModel(models.Model):
    """
    Persistence of CompanyEntity.

    Fields:
        id: UUID string generated by the entity
        name: Company name
        introduction: Short description
        country / industry / product: Free text details
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="Company UUID"
    )

    name = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Company name"
    )

    introduction = models.CharField(
        max_length=500,
        null=True,
        blank=True,
    )

    country = models.CharField(max_length=100, null=True, blank=True)
    industry = models.CharField(max_length=100, null=True, blank=True)
    product = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        db_table = 'companies'
        verbose_name = 'Company'
        verbose_name_plural = 'Companies'

    def __str__(self) -> str:
        return self.name


class EmployeeModel(models.Model):
    """
    Persistence of EmployeeEntity.

    Fields:
        id: UUID string generated by the entity
        company: Owning company (deleted in cascade)
        employee_no: Employee number
        first_name / last_name: Names
        gender: GenderChoices value
        date_of_birth: Date of birth
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="Employee UUID"
    )

    company = models.ForeignKey(
        CompanyModel,
        on_delete=models.CASCADE,
        related_name='employees',
        db_index=True,
    )

    employee_no = models.CharField(max_length=10)
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)

    gender = models.IntegerField(
        choices=GenderChoices.choices,
        default=GenderChoices.MALE,
    )

    date_of_birth = models.DateField()

    class Meta:
        db_table = 'employees'
        verbose_name = 'Employee'
        verbose_name_plural = 'Employees'

    def __str__(self) -> str:
        return f"{self.employee_no} {self.first_name} {self.last_name}"
