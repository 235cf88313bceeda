"""
Core Domain Layer - the Hexagon.

Pure business logic with no framework dependencies:
- No Django / ORM imports
- Testable without a database
- Infrastructure agnostic
"""
