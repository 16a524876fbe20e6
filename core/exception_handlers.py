import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import MISSING_FIELDS, RecordServiceError
from .response import error as resp_error

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(RecordServiceError)
    async def record_error_handler(request: Request, exc: RecordServiceError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=resp_error(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected body on %s %s: %s", request.method, request.url.path, exc.errors())
        # A field present with a non-text value (list, object, boolean) is named.
        for err in exc.errors():
            loc = err.get("loc", ())
            if err.get("type") == "string_type" and len(loc) == 2 and loc[0] == "body":
                return JSONResponse(status_code=400, content=resp_error(f"{loc[1]} must be text"))
        # A body that is missing, not JSON, or not an object carries no usable fields.
        return JSONResponse(status_code=400, content=resp_error(MISSING_FIELDS))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content=resp_error(str(exc.detail)))
