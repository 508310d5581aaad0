from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from minicrm.models import Contact


class ContactStore(ABC):
    """
    Contract every contact backend implements.

    Errors (minicrm.errors):
      - NotFoundError: get_by_id / update / delete on an unknown id
      - ValidationError: bad name/email, bad or duplicate caller-supplied id
      - PersistenceError: durable backends only, write failed (memory keeps the change)

    Reads return copies; the store owns the canonical records.
    """

    @property
    @abstractmethod
    def next_id(self) -> int:
        """Identifier the next add() will assign."""

    @abstractmethod
    def add(self, contact: Contact) -> int:
        """Store a copy of contact under a fresh id; return the id."""

    @abstractmethod
    def insert(self, contact: Contact) -> int:
        """Store a copy of contact under its own (caller-supplied) id."""

    @abstractmethod
    def get_all(self) -> List[Contact]:
        """All contacts, ascending by id."""

    @abstractmethod
    def get_by_id(self, contact_id: int) -> Contact:
        ...

    @abstractmethod
    def update(self, contact_id: int, new_name: str = "", new_email: str = "") -> None:
        """Overwrite only the non-empty fields."""

    @abstractmethod
    def delete(self, contact_id: int) -> None:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...
