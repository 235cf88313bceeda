"""
Project configuration of the Routine API.

Modules:
- settings: Django settings
- urls: Root routes
- wsgi: WSGI application
- container: Dependency Injection Container
"""
