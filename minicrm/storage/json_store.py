"""
JSON-file-backed contact store.

File layout (field names are fixed):

    {"next_id": 4, "contacts": [{"id": 1, "name": "Ann", "email": "ann@x.com"}, ...]}

Load rules:
  - missing file -> empty store, next_id = 1 (file created on first mutation)
  - unreadable file -> PersistenceError
  - not a contacts document -> FormatError; the file is left as it is
  - next_id missing or 0 -> max id + 1

Save rules: every mutation rewrites the whole document (sorted by id) to
"<path>.tmp" and os.replace()s it onto the path, so the path never holds a
torn write. If saving fails the mutation stays in memory and the caller gets
PersistenceError; the file keeps its previous content.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Union

import deal
from pydantic import ValidationError as PydanticValidationError

from minicrm.errors import FormatError, NotFoundError, PersistenceError, ValidationError
from minicrm.logging_config import log_store_event
from minicrm.models import Contact
from minicrm.storage.memory import VolatileContactStore

logger = logging.getLogger(__name__)


def _parse_document(raw: Any) -> tuple[Dict[int, Contact], int]:
    if not isinstance(raw, dict):
        raise FormatError("contacts file root must be a JSON object")

    records = raw.get("contacts")
    if records is None:
        records = []
    if not isinstance(records, list):
        raise FormatError("'contacts' must be a list")

    stored_next = raw.get("next_id", 0)
    if stored_next is None:
        stored_next = 0
    if isinstance(stored_next, bool) or not isinstance(stored_next, int):
        raise FormatError("'next_id' must be an integer")

    contacts: Dict[int, Contact] = {}
    for idx, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise FormatError(f"contact #{idx} must be an object")
        try:
            # no coercion: "2", true and 2.0 are not ids
            c = Contact.model_validate(rec, strict=True)
        except PydanticValidationError as e:
            raise FormatError(f"contact #{idx} is invalid: {e.errors()[0]['msg']}") from e
        if c.id <= 0:
            raise FormatError(f"contact #{idx} has no positive id")
        if c.id in contacts:
            raise FormatError(f"duplicate contact id {c.id}")
        contacts[c.id] = c

    max_id = max(contacts, default=0)
    if stored_next > 0:
        next_id = max(stored_next, max_id + 1)
    else:
        next_id = max_id + 1
    return contacts, next_id


class PersistentContactStore(VolatileContactStore):
    """Volatile store whose every mutation is mirrored to a JSON file."""

    @deal.pre(lambda self, path, fsync=True: str(path).strip() != "", message="path required")
    @deal.post(lambda result: result is None)
    @deal.raises(FormatError, PersistenceError)
    def __init__(self, path: Union[str, Path], fsync: bool = True) -> None:
        super().__init__()
        self._path: Path = Path(path)
        self._fsync: bool = bool(fsync)
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def tmp_path(self) -> Path:
        return self._path.with_name(self._path.name + ".tmp")

    # --- mutations: memory first, then the whole state to disk ---

    @deal.post(lambda result: isinstance(result, int) and result > 0)
    @deal.raises(ValidationError, PersistenceError)
    def add(self, contact: Contact) -> int:
        contact_id = super().add(contact)
        self.save()
        return contact_id

    @deal.post(lambda result: isinstance(result, int) and result > 0)
    @deal.raises(ValidationError, PersistenceError)
    def insert(self, contact: Contact) -> int:
        contact_id = super().insert(contact)
        self.save()
        return contact_id

    @deal.post(lambda result: result is None)
    @deal.raises(NotFoundError, ValidationError, PersistenceError)
    def update(self, contact_id: int, new_name: str = "", new_email: str = "") -> None:
        super().update(contact_id, new_name, new_email)
        self.save()

    @deal.post(lambda result: result is None)
    @deal.raises(NotFoundError, PersistenceError)
    def delete(self, contact_id: int) -> None:
        super().delete(contact_id)
        self.save()

    # --- persistence ---

    def snapshot(self) -> Dict[str, Any]:
        contacts: List[Dict[str, Any]] = [c.to_record() for c in self.get_all()]
        return {"next_id": self._next_id, "contacts": contacts}

    @deal.post(lambda result: result is None)
    @deal.raises(PersistenceError)
    def save(self) -> None:
        content = json.dumps(self.snapshot(), ensure_ascii=False, indent=2) + "\n"
        tmp = self.tmp_path
        try:
            with open(tmp, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
                f.flush()
                if self._fsync:
                    os.fsync(f.fileno())
            os.replace(str(tmp), str(self._path))
        except OSError as e:
            self._discard_tmp()
            raise PersistenceError(f"failed to save contacts to {self._path}: {e}") from e
        log_store_event(logger, "contacts saved", path=self._path, count=len(self), next_id=self._next_id)

    def _discard_tmp(self) -> None:
        try:
            self.tmp_path.unlink(missing_ok=True)
        except OSError:
            logger.debug("tmp cleanup suppressed for %s", self.tmp_path, exc_info=True)

    def _load(self) -> None:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("no contacts file at %s, starting empty", self._path)
            return
        except UnicodeDecodeError as e:
            raise FormatError(f"contacts file {self._path} is not UTF-8 text") from e
        except OSError as e:
            raise PersistenceError(f"failed to read contacts file {self._path}: {e}") from e

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise FormatError(f"contacts file {self._path} is not valid JSON: {e}") from e

        self._contacts, self._next_id = _parse_document(raw)
        log_store_event(logger, "contacts loaded", path=self._path, count=len(self), next_id=self._next_id)
