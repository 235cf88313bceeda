#!/usr/bin/env python
"""
Quick setup for local development.

This script:
1. Configures Django settings
2. Checks the database connection
3. Runs migrations (the companies seed included)
4. Creates extra sample data (optional)

Usage:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

import os
import sys
import argparse

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configure Django for standalone use."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    import django
    django.setup()


def run_migrations():
    from django.core.management import call_command

    print("Running migrations...")
    call_command('migrate', verbosity=1)
    print("Migrations done.")


def create_sample_data():
    """Create a sample company with employees through the use case."""
    import datetime

    from src.config.container import get_container
    from src.core.companies.dtos import CompanyAddInputDTO, EmployeeAddInputDTO
    from src.core.companies.entities import Gender

    company = CompanyAddInputDTO(
        name="Contoso",
        country="USA",
        industry="Software",
        product="Sample Data",
        introduction="Fictional company created by quick_setup",
        employees=(
            EmployeeAddInputDTO(
                employee_no="C001",
                first_name="Ada",
                last_name="Lovelace",
                gender=Gender.FEMALE,
                date_of_birth=datetime.date(1985, 12, 10),
            ),
            EmployeeAddInputDTO(
                employee_no="C002",
                first_name="Alan",
                last_name="Turing",
                gender=Gender.MALE,
                date_of_birth=datetime.date(1982, 6, 23),
            ),
        ),
    )

    print("Creating sample company...")
    created = get_container().create_company_service().execute(company)
    print(f"   - {created.company_name} ({created.id})")


def check_connection():
    """Check the database connection."""
    from django.db import DatabaseError, connection

    print("Checking database connection...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("Connection OK.")
        return True
    except DatabaseError as e:
        print(f"Connection error: {e}")
        return False


def show_info():
    from django.conf import settings

    print("\n" + "=" * 60)
    print("Setup information")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\nNext steps:")
    print("   1. python manage.py runserver")
    print("   2. Open: http://localhost:8000/api")
    print("   3. Open: http://localhost:8000/api/companies?orderBy=country desc")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Quick setup for development')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Create extra sample data'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Only check the connection'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("Routine API - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    if args.check_only:
        check_connection()
        return

    if not check_connection():
        print("\nMake sure the database is running,")
        print("or unset DATABASE_URL / DATABASE_HOST to use SQLite.")
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
