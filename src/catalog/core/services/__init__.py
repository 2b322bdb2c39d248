"""Core services exports."""

from .catalog_service import CatalogService

# Collaborator clients
from .clients import HttpEmailNotifier, HttpIsbnChecker, IsbnChecker, Notifier

# Database Service
from .database.db_session import DbSessionService

__all__ = [
    "CatalogService",
    # Collaborator clients
    "HttpEmailNotifier",
    "HttpIsbnChecker",
    "IsbnChecker",
    "Notifier",
    # Database Service
    "DbSessionService",
]
