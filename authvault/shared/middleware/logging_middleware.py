# authvault/shared/middleware/logging_middleware.py

"""
Middleware for HTTP request logging.

This module implements a middleware that logs every request and
appends it to the ``api_logs`` audit table.
"""

import time
import logging
from typing import Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from authvault.adapters.configuration.config import settings
from authvault.adapters.outbound.persistence.database import get_db_context
from authvault.adapters.outbound.persistence.repositories import api_log_repository

# Configure logger
logger = logging.getLogger(__name__)


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request logging.
    Logs information about each received request and records it in the
    audit trail. A failing audit write never changes the response.
    """

    async def dispatch(self, request: Request, call_next):
        # Log the request - with limited information in production
        if settings.ENVIRONMENT == "production":
            logger.info(f"Request: {request.method} {request.url.path}")
        else:
            query_params = dict(request.query_params)
            logger.info(
                f"Request: {request.method} {request.url.path} | "
                f"Query: {query_params if query_params else 'N/A'} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )

        # Process the request
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path} | "
            f"Time: {elapsed_ms}ms"
        )

        if settings.API_LOG_ENABLED:
            await self._record(request, response.status_code, elapsed_ms)

        return response

    async def _record(self, request: Request, status_code: int, elapsed_ms: int) -> None:
        client_id: Optional[str] = getattr(request.state, "client_id", None)
        try:
            async with get_db_context() as db:
                await api_log_repository.record(
                    db,
                    endpoint=request.url.path,
                    method=request.method,
                    client_id=client_id,
                    status_code=status_code,
                    response_time_ms=elapsed_ms,
                    user_agent=request.headers.get("user-agent"),
                    ip_address=request.client.host if request.client else None,
                )
        except Exception:
            logger.exception(f"Failed to record audit entry for {request.method} {request.url.path}")
