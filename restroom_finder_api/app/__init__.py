"""
Application package.

Layout: ``core`` (config, logging, database, security, errors),
``models`` (entity records), ``repositories`` (table access),
``services`` (business logic), ``clients`` (third-party APIs),
``schemas`` (request/response models) and ``api`` (routers).
"""

from .main import app  # noqa: F401
