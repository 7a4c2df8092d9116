"""
Exception handlers mapping Cluster Service errors onto HTTP responses.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from hcpfrontend.common.errors import (
    ClusterServiceError,
    EmptyResponseBodyError,
    InternalIDFormatError,
    InternalIDKindError,
    NotFoundError,
)
from hcpfrontend.common.http_client import request_id_ctx
from hcpfrontend.common.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InternalIDFormatError, status.HTTP_400_BAD_REQUEST),
    (InternalIDKindError, status.HTTP_400_BAD_REQUEST),
    (EmptyResponseBodyError, status.HTTP_502_BAD_GATEWAY),
)


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(
        request_id=request_id_ctx.get(),
        error=ErrorDetail(code=code, message=message, details=details),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def cluster_service_error_handler(request: Request, exc: ClusterServiceError):
    """Handler for errors raised by the Cluster Service clients."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_cls, mapped in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            status_code = mapped
            break

    details = {"path": exc.path} if exc.path else None
    return _error_response(status_code, exc.code, exc.message, details)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unhandled exceptions (500 Internal Server Error)."""
    logger.exception(f"Unhandled exception occurred: {str(exc)}")

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred on the server",
        {"type": exc.__class__.__name__} if request.app.debug else None,
    )


def register_exception_handlers(app: FastAPI):
    """Register all standard exception handlers to the FastAPI app."""
    app.add_exception_handler(ClusterServiceError, cluster_service_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.info("Standard exception handlers registered")
