# models/pet.py
from datetime import datetime

from pydantic import BaseModel, Field

PETS_COLLECTION = "pets"

MIN_PET_AGE = 0
MAX_PET_AGE = 50


class PetRecord(BaseModel):
    petName: str
    species: str
    breed: str
    age: int = Field(..., ge=MIN_PET_AGE, le=MAX_PET_AGE)
    ownerName: str
    ownerPhone: str
    created: datetime  # set by the service at insert time

    def to_document(self) -> dict:
        return self.model_dump()
