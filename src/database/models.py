"""
Database models for the FairGrade application.

Only a small key/value table is persisted; grading results are transient.
"""

from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import JSON, Column, DateTime, String

db = SQLAlchemy()


class TimestampMixin:
    """Mixin for adding timestamp fields to models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class StorageItem(db.Model, TimestampMixin):
    """A JSON document stored under a fixed key."""

    __tablename__ = "storage_items"

    key = Column(String(120), primary_key=True)
    value = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<StorageItem {self.key}>"
