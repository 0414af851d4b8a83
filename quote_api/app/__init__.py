"""
Application package initializer.

The project is organised into layers: ``models`` holds the domain
entity, ``core`` the configuration, logging and in‑memory store,
``services`` the business logic, ``schemas`` the API payloads and
``api/v1`` the HTTP routes.
"""

from .main import app  # noqa: F401
