#!/usr/bin/env python3
"""
Shared SQLAlchemy base for the library catalog.

- UUID primary key (String(36)) assigned on construction, never reassigned
- created_at / updated_at timestamps set by the database
- url property built from the model's URL_SEGMENT

Models hold no reference to a storage handle; persistence goes through
DBStorage, which the application passes around explicitly.
"""

from __future__ import annotations

from datetime import date
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

URL_PREFIX = "/catalog"

# Declarative base for all models
Base = declarative_base()


def _uuid_str() -> str:
    """Return a canonical UUIDv4 string (36 chars, with hyphens)."""
    return str(uuid.uuid4())


def format_date_med(value: date | None) -> str:
    """Medium date format used on detail pages, e.g. 'Oct 4, 1983'."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


class BaseModel:
    """
    Base mixin for all persistent models.

    Subclasses set URL_SEGMENT to the singular route name ("author", "book", ...).
    """

    URL_SEGMENT = ""

    id = Column(String(36), primary_key=True, default=_uuid_str, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        DB defaults handle created_at/updated_at on insert.
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)
        # Ensure an id exists if caller passed none
        if getattr(self, "id", None) is None:
            self.id = _uuid_str()

    def __str__(self) -> str:
        return f"[{self.__class__.__name__}] ({self.id})"

    @property
    def url(self) -> str:
        """Canonical detail path for this entity."""
        return f"{URL_PREFIX}/{self.URL_SEGMENT}/{self.id}"

