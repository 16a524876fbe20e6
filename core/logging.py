"""
Logging setup and request logging middleware.

- setup_logging configures the root logger once (console handler).
- request_logging_middleware adds an X-Request-ID header (UUID4) to each
  response and request.state, and logs method, path, status, latency.
  It is also the last error boundary: an exception no handler claimed
  becomes a 500 {"success": false, "error": ...} response here, inside
  the CORS middleware.
"""
import logging
import time
import uuid
from typing import Callable

from starlette.requests import Request
from starlette.responses import JSONResponse

from .response import error as resp_error

logger = logging.getLogger("record_service.access")


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        # already configured (uvicorn, pytest or a repeated create_app call)
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)


async def request_logging_middleware(request: Request, call_next: Callable):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = JSONResponse(status_code=500, content=resp_error(str(exc) or "Internal server error"))
    latency = (time.time() - start) * 1000.0
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "id=%s method=%s path=%s status=%s latency_ms=%.2f",
        request_id, request.method, request.url.path, response.status_code, latency,
    )
    return response
