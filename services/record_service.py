"""
Record service: validation and persistence for the users and pets collections.

- list_records   -> find all, newest first
- create_user    -> presence check, duplicate-email check, INSERT
- create_pet     -> presence check, age range check, INSERT
- delete_user / delete_pet -> parse id, DELETE by id
- status         -> store ping, never raises

Validation is presence and range only. The duplicate-email check is a
read-then-write with no atomicity guarantee between concurrent requests.
"""
import logging
import math
from typing import Any, Dict, List, Tuple

from core.db import DocumentStore, parse_identifier, store_timestamp
from core.exceptions import MISSING_FIELDS, ConflictError, NotFoundError, ValidationError
from models.pet import MAX_PET_AGE, MIN_PET_AGE, PETS_COLLECTION, PetRecord
from models.schemas import PetCreate, UserCreate
from models.user import USERS_COLLECTION, UserRecord

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Email already exists"
INVALID_AGE = "Age must be between 0 and 50 years"

COLLECTIONS = (USERS_COLLECTION, PETS_COLLECTION)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def coerce_age(value: Any) -> int:
    """
    Accept an int, float or numeric string within [0, 50] and return it as int.
    Fractions are range-checked first, then truncated (50.5 is rejected, 7.9 -> 7).
    """
    if isinstance(value, bool):
        raise ValidationError(INVALID_AGE)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(INVALID_AGE)
    else:
        raise ValidationError(INVALID_AGE)

    if isinstance(number, float) and math.isnan(number):
        raise ValidationError(INVALID_AGE)
    if number < MIN_PET_AGE or number > MAX_PET_AGE:
        raise ValidationError(INVALID_AGE)
    return int(number)


class RecordService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_records(self, collection: str) -> List[Dict[str, Any]]:
        if collection not in COLLECTIONS:
            raise ValueError(f"unknown collection: {collection}")
        return await self.store.find_sorted(collection, "created", descending=True)

    async def create_user(self, fields: UserCreate) -> str:
        if any(_is_blank(v) for v in (fields.name, fields.email, fields.phone, fields.address)):
            raise ValidationError(MISSING_FIELDS)

        existing = await self.store.find_one(USERS_COLLECTION, {"email": fields.email})
        if existing:
            logger.info("Duplicate email rejected: %s", fields.email)
            raise ConflictError(DUPLICATE_EMAIL)

        record = UserRecord(
            name=fields.name,
            email=fields.email,
            phone=fields.phone,
            address=fields.address,
            created=store_timestamp(),
        )
        inserted_id = await self.store.insert_one(USERS_COLLECTION, record.to_document())
        logger.info("User %s added (%s)", inserted_id, record.email)
        return str(inserted_id)

    async def create_pet(self, fields: PetCreate) -> str:
        required = (
            fields.petName,
            fields.species,
            fields.breed,
            fields.age,
            fields.ownerName,
            fields.ownerPhone,
        )
        if any(_is_blank(v) for v in required):
            raise ValidationError(MISSING_FIELDS)

        age = coerce_age(fields.age)

        record = PetRecord(
            petName=fields.petName,
            species=fields.species,
            breed=fields.breed,
            age=age,
            ownerName=fields.ownerName,
            ownerPhone=fields.ownerPhone,
            created=store_timestamp(),
        )
        inserted_id = await self.store.insert_one(PETS_COLLECTION, record.to_document())
        logger.info("Pet %s added (%s)", inserted_id, record.petName)
        return str(inserted_id)

    async def _delete(self, collection: str, raw_id: str, not_found: str) -> None:
        object_id = parse_identifier(raw_id, not_found)
        deleted = await self.store.delete_one(collection, object_id)
        if deleted != 1:
            raise NotFoundError(not_found)
        logger.info("Deleted %s from %s", raw_id, collection)

    async def delete_user(self, raw_id: str) -> None:
        await self._delete(USERS_COLLECTION, raw_id, "User not found")

    async def delete_pet(self, raw_id: str) -> None:
        await self._delete(PETS_COLLECTION, raw_id, "Pet not found")

    async def status(self) -> Tuple[bool, str]:
        try:
            await self.store.ping()
        except Exception as e:
            # any failure here means "not connected", never an error response
            logger.warning("Store ping failed: %s", e)
            return False, "MongoDB connection failed"
        return True, "MongoDB connection active"
