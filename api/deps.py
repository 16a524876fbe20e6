# api/deps.py
from fastapi import Request

from services.record_service import RecordService


def get_record_service(request: Request) -> RecordService:
    """The service is built once in create_app and kept on app.state."""
    return request.app.state.record_service
