# api/routes_users.py
from fastapi import APIRouter, Depends

from api.deps import get_record_service
from core.response import ok
from models.schemas import UserCreate, serialize_document
from models.user import USERS_COLLECTION
from services.record_service import RecordService

router = APIRouter()


@router.get("/users")
async def list_users(service: RecordService = Depends(get_record_service)):
    """All users, newest first."""
    users = await service.list_records(USERS_COLLECTION)
    return ok(users=[serialize_document(u) for u in users])


@router.post("/users")
async def add_user(payload: UserCreate, service: RecordService = Depends(get_record_service)):
    user_id = await service.create_user(payload)
    return ok(message="User added successfully", userId=user_id)


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, service: RecordService = Depends(get_record_service)):
    await service.delete_user(user_id)
    return ok(message="User deleted successfully")
