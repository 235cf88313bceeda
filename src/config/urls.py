"""
URL Configuration for the Routine API.

Structure:
- /api - Companies and employees API
- /health/ - Health check
"""

from django.http import JsonResponse
from django.urls import path, include


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    # Companies API
    path('api', include('src.adapters.django_app.companies.urls')),

    # Health check
    path('health/', health),
]
