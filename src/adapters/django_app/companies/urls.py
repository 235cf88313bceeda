"""
URL patterns of the Companies API (mounted under /api).

Endpoints:
- /api - Root document
- /api/companies - List / create companies
- /api/companies/<id> - Get / delete company
- /api/companycollections - Create several companies
- /api/companycollections/(<ids>) - Get several companies
- /api/companies/<id>/employees - List / create employees
- /api/companies/<id>/employees/<id> - Get / replace / patch / delete employee
"""

from django.urls import path
from . import api_views

app_name = 'companies'

urlpatterns = [
    path('', api_views.RootAPIView.as_view(), name='root'),

    # =========================================================================
    # Companies
    # =========================================================================

    path('/companies', api_views.CompanyListAPIView.as_view(), name='company_list'),
    path('/companies/<str:company_id>', api_views.CompanyDetailAPIView.as_view(), name='company_detail'),

    # Collections ("(id1,id2)" in the path)
    path('/companycollections', api_views.CompanyCollectionCreateAPIView.as_view(), name='company_collection_create'),
    path('/companycollections/(<str:ids>)', api_views.CompanyCollectionAPIView.as_view(), name='company_collection'),

    # =========================================================================
    # Employees
    # =========================================================================

    path('/companies/<str:company_id>/employees', api_views.EmployeeListAPIView.as_view(), name='employee_list'),
    path(
        '/companies/<str:company_id>/employees/<str:employee_id>',
        api_views.EmployeeDetailAPIView.as_view(),
        name='employee_detail',
    ),
]
