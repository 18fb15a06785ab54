"""
Mapping of service exceptions to HTTP responses
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from coffee_pos.exceptions import (
    AuthError,
    ConflictError,
    CoffeePosError,
    NotFoundError,
    StoreError,
    ValidationError
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    StoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def handle_service_error(request: Request, exc: CoffeePosError) -> JSONResponse:
    status_code = next(
        (code for error_type, code in STATUS_CODES.items() if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CoffeePosError, handle_service_error)
