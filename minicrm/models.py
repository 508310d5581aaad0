from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Contact(BaseModel):
    """
    A contact record.

    id is assigned by the store (0 means "not stored yet"). Field checks
    (non-empty name, email format) happen in the store, so a Contact can be
    built from raw user input and rejected later with a store ValidationError.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(0, ge=0, description="Identifier assigned by the store")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")

    def to_record(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

    def describe(self) -> str:
        return f"- ID: {self.id} | Name: {self.name} | Email: {self.email}"
