"""
Main FastAPI application (entrypoint).

Responsibilities:
- Build the document store once and inject it into the record service
- Wire API routers (users / pets / status) and the two static pages
- Register centralized exception handlers ({"success": false, "error": ...})
- Provide middleware: CORS (outermost), request-id logging + error boundary
- Connect to the store on startup, close it on graceful shutdown
Notes:
- A failed initial MongoDB connection does not stop the server; /api/status
  keeps reporting connected=false until the store is reachable.
- An unhandled error in a background asyncio task terminates the process.
"""
import asyncio
import logging
import os
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api import routes_pages, routes_pets, routes_status, routes_users
from config.settings import Settings, settings as default_settings
from core.db import DocumentStore, build_store
from core.exception_handlers import register_exception_handlers
from core.logging import request_logging_middleware, setup_logging
from services.record_service import RecordService

logger = logging.getLogger(__name__)

ENDPOINTS = (
    "GET    /api/users - Get all users",
    "POST   /api/users - Add new user",
    "DELETE /api/users/{id} - Delete user",
    "GET    /api/pets - Get all pets",
    "POST   /api/pets - Add new pet",
    "DELETE /api/pets/{id} - Delete pet",
    "GET    /api/status - Check MongoDB status",
)


def _fatal_async_error(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    """Loop exception handler: nothing supervises background tasks, so exit."""
    logger.critical(
        "Unhandled asynchronous error: %s",
        context.get("message"),
        exc_info=context.get("exception"),
    )
    logging.shutdown()
    os._exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    store: DocumentStore = app.state.store

    loop = asyncio.get_running_loop()
    previous_handler = loop.get_exception_handler()
    loop.set_exception_handler(_fatal_async_error)

    connected = await store.connect()
    base_url = f"http://localhost:{cfg.PORT}"
    logger.info("Server running at %s (env=%s)", base_url, cfg.APP_ENV)
    if connected:
        logger.info("MongoDB connected - ready to save data")
    else:
        logger.warning("MongoDB not connected - check your MongoDB service")
    logger.info("Pages: users %s/  pets %s/pets", base_url, base_url)
    for line in ENDPOINTS:
        logger.info("Endpoint: %s", line)

    yield

    logger.info("Shutting down server...")
    try:
        await store.close()
    finally:
        loop.set_exception_handler(previous_handler)


def create_app(cfg: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Build the application. Tests pass their own store (e.g. MemoryStore);
    otherwise one is chosen from MONGO_URI.
    """
    cfg = cfg or default_settings
    setup_logging(cfg.LOG_LEVEL)

    app = FastAPI(title=cfg.API_TITLE, version=cfg.API_VERSION, lifespan=lifespan)

    app.state.settings = cfg
    app.state.store = store if store is not None else build_store(cfg)
    app.state.record_service = RecordService(app.state.store)
    app.state.started_at = time.monotonic()

    # Adds X-Request-ID header and access logs, and turns unexpected errors
    # into the 500 envelope. Registered before CORS so CORS wraps it and
    # error responses still carry CORS headers.
    app.middleware("http")(request_logging_middleware)

    # Open CORS, same as the browser pages expect
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(routes_users.router, prefix="/api", tags=["users"])
    app.include_router(routes_pets.router, prefix="/api", tags=["pets"])
    app.include_router(routes_status.router, tags=["status"])
    app.include_router(routes_pages.router, tags=["pages"])

    static_dir = Path(cfg.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")
    else:
        logger.warning("Static directory %s not found; pages will return 404", static_dir)

    register_exception_handlers(app)

    return app


app = create_app()

if __name__ == "__main__":
    # Run with: python main.py for local dev. For production use uvicorn/gunicorn directly.
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
