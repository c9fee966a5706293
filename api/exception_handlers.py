"""
Exception handlers turning gateway errors into `{"error": ...}` responses
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.errors import ClientInputError, GatewayError

logger = logging.getLogger(__name__)


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.status_code >= 500:
        cause = exc.__cause__
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}"
            + (f" ({type(cause).__name__}: {cause})" if cause else "")
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and parameters are client input errors, not framework 422s"""
    logger.info(f"Rejected input for {request.method} {request.url.path}: {exc.errors()}")
    return await gateway_error_handler(request, ClientInputError())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception in {request.method} {request.url.path}: {exc}",
        exc_info=exc
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application"""
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
