# api/routes_pets.py
from fastapi import APIRouter, Depends

from api.deps import get_record_service
from core.response import ok
from models.pet import PETS_COLLECTION
from models.schemas import PetCreate, serialize_document
from services.record_service import RecordService

router = APIRouter()


@router.get("/pets")
async def list_pets(service: RecordService = Depends(get_record_service)):
    """All pets, newest first."""
    pets = await service.list_records(PETS_COLLECTION)
    return ok(pets=[serialize_document(p) for p in pets])


@router.post("/pets")
async def add_pet(payload: PetCreate, service: RecordService = Depends(get_record_service)):
    pet_id = await service.create_pet(payload)
    return ok(message="Pet added successfully", petId=pet_id)


@router.delete("/pets/{pet_id}")
async def delete_pet(pet_id: str, service: RecordService = Depends(get_record_service)):
    await service.delete_pet(pet_id)
    return ok(message="Pet deleted successfully")
