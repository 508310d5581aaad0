# minicrm/errors.py
from __future__ import annotations

from typing import Optional


class ContactError(Exception):
    """Base error for contact stores."""


class NotFoundError(ContactError):
    """No contact with the requested id."""

    def __init__(self, contact_id: int) -> None:
        super().__init__(f"no contact with id {contact_id}")
        self.contact_id = contact_id


class ValidationError(ContactError):
    """Invalid field value (email format, empty value, duplicate id)."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class FormatError(ContactError):
    """Backing file exists but is not a valid contacts document."""


class PersistenceError(ContactError):
    """Backing file could not be read or written."""
