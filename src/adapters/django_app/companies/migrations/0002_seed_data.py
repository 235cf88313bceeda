"""
Seed data: 18 companies and 6 employees.
"""

from datetime import date

from django.db import migrations


COMPANIES = [
    # (id, name, country, industry, product, introduction)
    ("bbdee09c-089b-4d30-bece-44df5923716c", "Microsoft", "USA", "Software", "Software", "Great Company"),
    ("bbdee09c-089b-4d30-bece-44df59237144", "AOL", "USA", "Internet", "Website", "Not Exists?"),
    ("5efc910b-2f45-43df-afae-620d40542833", "Amazon", "USA", "ECommerce", "Books", "Store"),
    ("6fb600c1-9011-4fd7-9234-881379716433", "NetEase", "China", "Internet", "Songs", "Music?"),
    ("bbdee09c-089b-4d30-bece-44df59237133", "Jingdong", "China", "ECommerce", "Goods", "Brothers"),
    ("5efc910b-2f45-43df-afae-620d40542822", "360", "China", "Security", "Security Product", "- -"),
    ("6fb600c1-9011-4fd7-9234-881379716422", "Youtube", "USA", "Internet", "Videos", "Blocked"),
    ("bbdee09c-089b-4d30-bece-44df59237122", "Twitter", "USA", "Internet", "Tweets", "Blocked"),
    ("5efc910b-2f45-43df-afae-620d40542811", "Suning", "China", "ECommerce", "Goods", "From Jiangsu"),
    ("6fb600c1-9011-4fd7-9234-881379716411", "AC Milan", "Italy", "Football", "Football Match", "Football Club"),
    ("bbdee09c-089b-4d30-bece-44df59237111", "SpaceX", "USA", "Technology", "Rocket", "Wow"),
    ("5efc910b-2f45-43df-afae-620d40542800", "Adobe", "USA", "Software", "Software", "Photoshop?"),
    ("6fb600c1-9011-4fd7-9234-881379716400", "Baidu", "China", "Internet", "Software", "From Beijing"),
    ("bbdee09c-089b-4d30-bece-44df59237100", "Tencent", "China", "ECommerce", "Software", "From Shenzhen"),
    ("5efc910b-2f45-43df-afae-620d40542853", "Alipapa", "China", "Internet", "Software", "Fubao Company"),
    ("6fb600c1-9011-4fd7-9234-881379716440", "Google", "USA", "Internet", "Software", "Don't be evil"),
    ("6fb600c1-9011-4fd7-9234-881379716444", "Yahoo", "USA", "Internet", "Mail", "Who?"),
    ("5efc910b-2f45-43df-afae-620d40542844", "Firefox", "USA", "Internet", "Browser", "Is it a company?"),
]

EMPLOYEES = [
    # (id, company_id, employee_no, first_name, last_name, gender, date_of_birth)
    ("4b501cb3-d168-4cc0-b375-48fb33f318a4", "bbdee09c-089b-4d30-bece-44df5923716c",
     "MSFT231", "Nick", "Carter", 1, date(1976, 1, 2)),
    ("7eaa532c-1be5-472c-a738-94fd26e5fad6", "bbdee09c-089b-4d30-bece-44df5923716c",
     "MSFT245", "Vince", "Carter", 1, date(1981, 12, 5)),
    ("72457e73-ea34-4e02-b575-8d384e82a481", "6fb600c1-9011-4fd7-9234-881379716440",
     "G003", "Mary", "King", 0, date(1986, 11, 4)),
    ("7644b71d-d74e-43e2-ac32-8cbadd7b1c3a", "6fb600c1-9011-4fd7-9234-881379716440",
     "G097", "Kevin", "Richardson", 1, date(1977, 4, 6)),
    ("679dfd33-32e4-4393-b061-f7abb8956f53", "5efc910b-2f45-43df-afae-620d40542853",
     "A009", "卡", "里", 0, date(1967, 1, 24)),
    ("1861341e-b42b-410c-ae21-cf11f36fc574", "5efc910b-2f45-43df-afae-620d40542853",
     "A404", "Not", "Man", 1, date(1957, 3, 8)),
]


def seed(apps, schema_editor):
    CompanyModel = apps.get_model('companies', 'CompanyModel')
    EmployeeModel = apps.get_model('companies', 'EmployeeModel')

    CompanyModel.objects.bulk_create([
        CompanyModel(
            id=company_id,
            name=name,
            country=country,
            industry=industry,
            product=product,
            introduction=introduction,
        )
        for company_id, name, country, industry, product, introduction in COMPANIES
    ])

    EmployeeModel.objects.bulk_create([
        EmployeeModel(
            id=employee_id,
            company_id=company_id,
            employee_no=employee_no,
            first_name=first_name,
            last_name=last_name,
            gender=gender,
            date_of_birth=born,
        )
        for employee_id, company_id, employee_no, first_name, last_name, gender, born in EMPLOYEES
    ])


def unseed(apps, schema_editor):
    CompanyModel = apps.get_model('companies', 'CompanyModel')
    CompanyModel.objects.filter(id__in=[row[0] for row in COMPANIES]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('companies', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed, unseed),
    ]
