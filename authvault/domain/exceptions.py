# authvault/domain/exceptions.py

"""
Domain exceptions for the token lifecycle.

Every exception carries a human readable ``detail`` and a stable
``internal_code``. The HTTP layer maps the code to a status code
(see ``AsyncExceptionMiddleware``); the domain itself knows nothing
about HTTP.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all AuthVault domain errors."""

    default_detail = "Domain error"
    default_code = "DOMAIN_ERROR"

    def __init__(self, detail: Optional[str] = None, internal_code: Optional[str] = None):
        self.detail = detail or self.default_detail
        self.internal_code = internal_code or self.default_code
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.detail, "code": self.internal_code}


# ─── Token issuance ──────────────────────────────────────────────────────────

class InvalidCredentialsException(DomainException):
    """Unknown client id or wrong secret. Both cases are indistinguishable."""

    default_detail = "Invalid client credentials"
    default_code = "INVALID_CREDENTIALS"


class ClientInactiveException(DomainException):
    default_detail = "Client is inactive"
    default_code = "CLIENT_INACTIVE"


class ScopeMismatchException(DomainException):
    default_detail = "Invalid scope for client"
    default_code = "SCOPE_MISMATCH"


# ─── Transaction tokens ──────────────────────────────────────────────────────

class UnknownClientException(DomainException):
    default_detail = "Invalid client"
    default_code = "UNKNOWN_CLIENT"


class NotAuthorizedToInitiateException(DomainException):
    default_detail = "Client does not have permission to initiate transactions"
    default_code = "NOT_AUTHORIZED_TO_INITIATE"


class TransactionTokenNotFoundException(DomainException):
    default_detail = "Invalid transaction token"
    default_code = "TRANSACTION_TOKEN_NOT_FOUND"


class TransactionTokenAlreadyUsedException(DomainException):
    default_detail = "Transaction token has already been used"
    default_code = "TRANSACTION_TOKEN_ALREADY_USED"


class TransactionTokenExpiredException(DomainException):
    default_detail = "Transaction token has expired"
    default_code = "TRANSACTION_TOKEN_EXPIRED"


# ─── Access control ──────────────────────────────────────────────────────────

class InvalidOrExpiredTokenException(DomainException):
    default_detail = "Invalid or expired token"
    default_code = "INVALID_TOKEN"


class UnauthorizedException(DomainException):
    """Missing, malformed, invalid or expired bearer credential."""

    default_detail = "Invalid or expired token"
    default_code = "UNAUTHORIZED"


class InsufficientScopeException(DomainException):
    """A valid token whose scope does not allow the requested operation."""

    default_code = "INSUFFICIENT_SCOPE"

    def __init__(self, required_scope: str, detail: Optional[str] = None):
        self.required_scope = required_scope
        super().__init__(detail or f"Token scope does not allow this operation (required: {required_scope})")


class PermissionDeniedException(DomainException):
    default_detail = "Permission denied"
    default_code = "PERMISSION_DENIED"


# ─── Generic resources ───────────────────────────────────────────────────────

class ResourceNotFoundException(DomainException):
    """Resource not found."""

    default_detail = "Resource not found"
    default_code = "RESOURCE_NOT_FOUND"

    def __init__(self, detail: Optional[str] = None, resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(f"{detail or self.default_detail}{resource_info}")


class InvalidInputException(DomainException):
    """Invalid input data."""

    default_detail = "Invalid input data"
    default_code = "VALIDATION_ERROR"

    def __init__(self, detail: Optional[str] = None, fields: Optional[Dict[str, str]] = None):
        field_errors = ""
        if fields:
            field_errors = ": " + ", ".join([f"{field}: {error}" for field, error in fields.items()])
        super().__init__(f"{detail or self.default_detail}{field_errors}")


class DatabaseOperationException(DomainException):
    """Database operation failed. The original error is kept for logging only."""

    default_detail = "Error executing database operation"
    default_code = "DATABASE_OPERATION_ERROR"

    def __init__(self, detail: Optional[str] = None, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(detail)
