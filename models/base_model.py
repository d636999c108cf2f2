#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixins for the Webhook Inbox API.

- UUID primary key (String(36)) with defaults
- created_at / updated_at timestamps (TimestampMixin)
- UTCDateTime column type: stored naive in UTC, always read back timezone-aware
- to_dict() that formats timestamps and removes SA internals

Timestamps are set application-side with microsecond precision so that
"most recent first" ordering does not depend on the database clock resolution.
"""

from __future__ import annotations

from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

from utils.security import utcnow

# Declarative base for all models
Base = declarative_base()


def _uuid_str() -> str:
    """Return a canonical UUIDv4 string (36 chars, with hyphens)."""
    return str(uuid.uuid4())


class UTCDateTime(TypeDecorator):
    """DateTime that accepts aware datetimes and returns them in UTC.

    SQLite drops tzinfo on the way back; normalising here keeps comparisons
    against utcnow() valid on every backend.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class BaseModel:
    """
    Base mixin for persistent models with a UUID primary key.
    """

    id = Column(String(36), primary_key=True, default=_uuid_str, nullable=False)

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)
        # Ensure an id exists if user passed none
        if getattr(self, "id", None) is None:
            self.id = _uuid_str()

    def __str__(self) -> str:
        """Human-friendly representation including id and fields."""
        return f"[{self.__class__.__name__}] ({self.id}) {self.to_dict()}"

    def to_dict(self) -> dict:
        """
        Return a dictionary of column values:
        - Formats datetimes as ISO-8601 with UTC offset
        - Removes SQLAlchemy internal state and the password hash
        """
        d = {k: v for k, v in self.__dict__.items() if k != "_sa_instance_state"}
        for key, value in d.items():
            if isinstance(value, datetime):
                d[key] = value.isoformat()
        d.pop("password_hash", None)
        return d


class TimestampMixin:
    """created_at / updated_at maintained by the application."""

    created_at = Column(UTCDateTime(), default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime(), default=utcnow, onupdate=utcnow, nullable=False)
