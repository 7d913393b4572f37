# authvault/shared/middleware/__init__.py

from authvault.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from authvault.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware
from authvault.shared.middleware.rate_limiting_middleware import AsyncRateLimitingMiddleware

# Export all for easy imports
__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
    "AsyncRateLimitingMiddleware",
]
