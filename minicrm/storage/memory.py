"""In-memory contact store. Nothing survives the process."""

from __future__ import annotations

from typing import Dict, List

import deal

from minicrm.errors import NotFoundError, ValidationError
from minicrm.models import Contact
from minicrm.storage.base import ContactStore
from minicrm.validation import require_non_empty, trim, validate_email


def _ascending(result: List[Contact]) -> bool:
    return all(a.id < b.id for a, b in zip(result, result[1:]))


def _checked_fields(contact: Contact) -> tuple[str, str]:
    name = require_non_empty(contact.name, "name")
    email = validate_email(contact.email)
    return name, email


class VolatileContactStore(ContactStore):
    """
    Contacts kept in a dict keyed by id.

    The id counter only moves forward: deleted ids are never reused.
    Ordering is produced at read time, the dict itself is unordered by contract.
    """

    def __init__(self) -> None:
        self._contacts: Dict[int, Contact] = {}
        self._next_id: int = 1

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._contacts)

    def __contains__(self, contact_id: object) -> bool:
        return contact_id in self._contacts

    @deal.pre(lambda self, contact: isinstance(contact, Contact), message="add expects a Contact")
    @deal.post(lambda result: isinstance(result, int) and result > 0, message="add returns a positive id")
    @deal.raises(ValidationError)
    def add(self, contact: Contact) -> int:
        name, email = _checked_fields(contact)
        contact_id = self._next_id
        self._contacts[contact_id] = contact.model_copy(update={"id": contact_id, "name": name, "email": email})
        self._next_id += 1
        return contact_id

    @deal.pre(lambda self, contact: isinstance(contact, Contact), message="insert expects a Contact")
    @deal.post(lambda result: isinstance(result, int) and result > 0, message="insert returns a positive id")
    @deal.raises(ValidationError)
    def insert(self, contact: Contact) -> int:
        contact_id = contact.id
        if contact_id <= 0:
            raise ValidationError("id must be a positive integer", field="id")
        if contact_id in self._contacts:
            raise ValidationError(f"a contact with id {contact_id} already exists", field="id")
        name, email = _checked_fields(contact)
        self._contacts[contact_id] = contact.model_copy(update={"name": name, "email": email})
        self._next_id = max(self._next_id, contact_id + 1)
        return contact_id

    @deal.post(_ascending, message="get_all must be ordered by id")
    @deal.raises()
    def get_all(self) -> List[Contact]:
        return [self._contacts[k].model_copy() for k in sorted(self._contacts)]

    @deal.pre(lambda self, contact_id: isinstance(contact_id, int), message="contact_id must be int")
    @deal.post(lambda result: isinstance(result, Contact))
    @deal.raises(NotFoundError)
    def get_by_id(self, contact_id: int) -> Contact:
        try:
            return self._contacts[contact_id].model_copy()
        except KeyError:
            raise NotFoundError(contact_id) from None

    @deal.pre(lambda self, contact_id, new_name="", new_email="": isinstance(contact_id, int), message="contact_id must be int")
    @deal.post(lambda result: result is None)
    @deal.raises(NotFoundError, ValidationError)
    def update(self, contact_id: int, new_name: str = "", new_email: str = "") -> None:
        current = self._contacts.get(contact_id)
        if current is None:
            raise NotFoundError(contact_id)

        changes: Dict[str, str] = {}
        name = trim(new_name or "")
        email = trim(new_email or "")
        # validate before touching the record: a rejected email leaves it as it was
        if email:
            changes["email"] = validate_email(email)
        if name:
            changes["name"] = name
        if changes:
            self._contacts[contact_id] = current.model_copy(update=changes)

    @deal.pre(lambda self, contact_id: isinstance(contact_id, int), message="contact_id must be int")
    @deal.post(lambda result: result is None)
    @deal.raises(NotFoundError)
    def delete(self, contact_id: int) -> None:
        if contact_id not in self._contacts:
            raise NotFoundError(contact_id)
        del self._contacts[contact_id]
