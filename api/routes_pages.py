# api/routes_pages.py
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter()


def _page(request: Request, filename: str) -> FileResponse:
    path = Path(request.app.state.settings.STATIC_DIR) / filename
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"{filename} not found")
    return FileResponse(path, media_type="text/html")


@router.get("/", include_in_schema=False)
async def users_page(request: Request):
    return _page(request, "index.html")


@router.get("/pets", include_in_schema=False)
async def pets_page(request: Request):
    return _page(request, "pets.html")
