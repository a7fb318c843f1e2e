"""
Database package for the FairGrade application.

Provides the SQLAlchemy handle and the key/value storage used for users.
"""

from .local_storage import CURRENT_USER_KEY, USERS_STORAGE_KEY, LocalStorage
from .models import StorageItem, TimestampMixin, db

__all__ = [
    "db",
    "StorageItem",
    "TimestampMixin",
    "LocalStorage",
    "USERS_STORAGE_KEY",
    "CURRENT_USER_KEY",
]
