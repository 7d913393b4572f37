# authvault/main.py

import logging
import asyncio
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from authvault.adapters.configuration.config import settings
from authvault.adapters.outbound.persistence.database import create_tables

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager to handle startup and shutdown events.
    """
    # Startup
    logger.info("AuthVault starting up...")

    # Create database tables if they don't exist
    await create_tables()

    # Start background tasks
    app.state.sweep_task = asyncio.create_task(periodic_rate_limit_sweep())

    yield

    # Shutdown
    logger.info("AuthVault shutting down...")
    app.state.sweep_task.cancel()
    try:
        await app.state.sweep_task
    except asyncio.CancelledError:
        pass


# Create FastAPI instance
app = FastAPI(
    title="AuthVault",
    description="Token lifecycle engine for three-party transaction handoffs",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


# ── ERROR ENVELOPE ────────────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request on {request.url.path}: {len(exc.errors())} error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors(), exclude={"input", "ctx"}),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail, "code": f"HTTP_{exc.status_code}"}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


# Middlewares
from authvault.shared.middleware import (
    AsyncExceptionMiddleware,
    AsyncRequestLoggingMiddleware,
    AsyncRateLimitingMiddleware,
)

app.add_middleware(AsyncExceptionMiddleware)
app.add_middleware(AsyncRateLimitingMiddleware)
app.add_middleware(AsyncRequestLoggingMiddleware)

# Routers
from authvault.adapters.inbound.api.v1.router import api_router

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok"}


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    spec = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # Request validation errors are rendered as 400, never 422
    for schema in ("HTTPValidationError", "ValidationError"):
        spec.get("components", {}).get("schemas", {}).pop(schema, None)

    for path in spec.get("paths", {}).values():
        for op in path.values():
            op.get("responses", {}).pop("422", None)

    app.openapi_schema = spec
    return spec


app.openapi = custom_openapi


# ── RATE LIMITER SWEEP TASK ───────────────────────────────────────────────────
async def periodic_rate_limit_sweep():
    """Background task that drops expired rate limit windows."""
    from authvault.shared.middleware.rate_limiting_middleware import async_rate_limiter

    while True:
        try:
            await asyncio.sleep(settings.RATE_LIMIT_SWEEP_INTERVAL_SECONDS)
            removed = await async_rate_limiter.sweep()
            if removed:
                logger.debug(f"Swept {removed} expired rate limit windows")
        except asyncio.CancelledError:
            logger.info("Rate limit sweep task cancelled")
            break
        except Exception as e:
            logger.exception(f"Error in rate limit sweep: {e}")


def run():
    import uvicorn

    uvicorn.run("authvault.main:app", host="0.0.0.0", port=8000, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
