"""
Storage Package

Provides the audit storage interface, storage exceptions and the
in-memory implementations used by the application.
"""

from nexus_manager.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    StorageError,
)
from nexus_manager.storage.memory import (
    BusinessStore,
    IdGenerator,
    InMemoryAuditStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "BusinessStore",
    "IdGenerator",
    "InMemoryAuditStorage",
]
