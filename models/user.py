# models/user.py
from datetime import datetime

from pydantic import BaseModel

USERS_COLLECTION = "users"


class UserRecord(BaseModel):
    name: str
    email: str
    phone: str
    address: str
    created: datetime  # set by the service at insert time

    def to_document(self) -> dict:
        return self.model_dump()
