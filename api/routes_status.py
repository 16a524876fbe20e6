# api/routes_status.py
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from api.deps import get_record_service
from services.record_service import RecordService

router = APIRouter()


@router.get("/api/status")
async def store_status(service: RecordService = Depends(get_record_service)):
    """Store reachability. Always 200; failures show up as connected=false."""
    connected, message = await service.status()
    return {"connected": connected, "message": message}


@router.get("/health")
async def health(request: Request):
    """Simple liveness endpoint used by load balancers and orchestrators."""
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": request.app.state.settings.APP_ENV,
    }
