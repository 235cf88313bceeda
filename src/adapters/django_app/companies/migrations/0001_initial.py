"""
Initial migration of the Companies domain.

Creates the tables:
- companies
- employees
"""

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    """Initial migration."""

    initial = True

    dependencies = [
    ]

    operations = [
        # =================================================================
        # Table: companies
        # =================================================================
        migrations.CreateModel(
            name='CompanyModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='Company UUID'
                )),
                ('name', models.CharField(
                    max_length=100,
                    db_index=True,
                    help_text='Company name'
                )),
                ('introduction', models.CharField(max_length=500, null=True, blank=True)),
                ('country', models.CharField(max_length=100, null=True, blank=True)),
                ('industry', models.CharField(max_length=100, null=True, blank=True)),
                ('product', models.CharField(max_length=100, null=True, blank=True)),
            ],
            options={
                'db_table': 'companies',
                'verbose_name': 'Company',
                'verbose_name_plural': 'Companies',
            },
        ),

        # =================================================================
        # Table: employees
        # =================================================================
        migrations.CreateModel(
            name='EmployeeModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='Employee UUID'
                )),
                ('employee_no', models.CharField(max_length=10)),
                ('first_name', models.CharField(max_length=50)),
                ('last_name', models.CharField(max_length=50)),
                ('gender', models.IntegerField(
                    choices=[(0, 'Female'), (1, 'Male')],
                    default=1
                )),
                ('date_of_birth', models.DateField()),
                ('company', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='employees',
                    to='companies.companymodel',
                    db_index=True
                )),
            ],
            options={
                'db_table': 'employees',
                'verbose_name': 'Employee',
                'verbose_name_plural': 'Employees',
            },
        ),
    ]
