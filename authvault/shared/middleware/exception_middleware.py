# authvault/shared/middleware/exception_middleware.py

"""
Middleware for centralized exception handling.

This module defines middleware that intercepts exceptions and formats
error responses as ``{"error": <message>, "code": <code>}``.
"""

import logging
from typing import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from authvault.domain.exceptions import DomainException

# Configure logger
logger = logging.getLogger(__name__)

# Domain error codes that do not map to 400 Bad Request
STATUS_BY_CODE = {
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "INSUFFICIENT_SCOPE": status.HTTP_403_FORBIDDEN,
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DATABASE_OPERATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: DomainException) -> int:
    return STATUS_BY_CODE.get(exc.internal_code, status.HTTP_400_BAD_REQUEST)


def domain_error_response(exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None

    # Database failure details are only logged
    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        content = {"error": "Internal server error", "code": exc.internal_code}
    else:
        content = exc.to_dict()
    return JSONResponse(status_code=status_code, content=content, headers=headers)


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized exception handling.
    Captures specific exceptions and formats the response accordingly.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        try:
            return await call_next(request)

        except DomainException as exc:
            # Domain exceptions: mapping from pure exception to HTTP code based on 'internal_code'
            if status_for(exc) >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.error(
                    f"Domain exception: {str(exc)} | Code: {exc.internal_code} | "
                    f"Cause: {getattr(exc, 'original_error', None)!r} | Path: {request.url.path}"
                )
            else:
                logger.warning(
                    f"Domain exception: {str(exc)} | Code: {exc.internal_code} | "
                    f"Path: {request.url.path}"
                )
            return domain_error_response(exc)

        except SQLAlchemyError as exc:
            logger.exception(
                f"Database error: Type={type(exc).__name__} | "
                f"Path: {request.url.path} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "code": "DATABASE_ERROR"
                }
            )

        except Exception as exc:
            # Unhandled exceptions
            logger.exception(
                f"Unhandled exception: Type={type(exc).__name__} | "
                f"Path: {request.url.path} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "code": "INTERNAL_SERVER_ERROR"
                }
            )
