"""Service layer for business logic.

Services sit between the routes and the repositories:
    Routes (HTTP) -> Services (validation, rules) -> Repositories (SQL)

Each service function takes its repository as the first argument, checks
its input with ``core.validators`` and raises ``core.errors`` kinds. Services
know nothing about status codes or request objects.
"""
