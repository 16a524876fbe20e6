from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, field_validator


def scalar_to_text(value: Any) -> Any:
    """Numbers sent for text fields (e.g. a phone as 5551234) are kept as text."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class UserCreate(BaseModel):
    # Presence is checked by the record service so that a missing field
    # yields the service's own 400 message rather than a schema error.
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name", "email", "phone", "address", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return scalar_to_text(value)


class PetCreate(BaseModel):
    petName: Optional[str] = None
    species: Optional[str] = None
    breed: Optional[str] = None
    # number or numeric string; coerced to int by the service
    age: Any = None
    ownerName: Optional[str] = None
    ownerPhone: Optional[str] = None

    @field_validator("petName", "species", "breed", "ownerName", "ownerPhone", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return scalar_to_text(value)


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Make a stored document JSON-friendly: ObjectId -> str, datetime -> ISO string."""
    out = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            out[key] = str(value)
        elif isinstance(value, datetime):
            out[key] = value.isoformat()
        else:
            out[key] = value
    return out
