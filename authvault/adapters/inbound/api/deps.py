# authvault/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends() for database access, bearer token authorization
and the administrative password check.
"""

import logging
from typing import Callable, Optional
from fastapi import Depends, Header, Request
from fastapi.security import HTTPBearer

from authvault.adapters.outbound.persistence.database import get_db
from authvault.adapters.outbound.security import access_gate
from authvault.application.use_cases.client_use_cases import AsyncClientAdminService
from authvault.domain.models.client_domain_model import Scope
from authvault.domain.models.token_domain_model import AccessClaims

# Configure logger
logger = logging.getLogger(__name__)

# Bearer scheme for the OpenAPI docs of gated routers; the header itself is parsed by the gate
bearer_scheme = HTTPBearer(auto_error=False)

########################################################################
# Database Session Management
########################################################################

get_db_session = get_db


########################################################################
# Access Token Authorization
########################################################################

async def get_access_claims(request: Request) -> AccessClaims:
    """
    Authorize the request through the Access Control Gate.

    The authorized client id is stored on ``request.state`` so the
    request audit trail can attribute the call.

    Raises:
        UnauthorizedException: Missing, malformed, invalid or expired token
    """
    claims = access_gate.authorize(request.headers)
    request.state.client_id = claims.client_id
    return claims


def require_scope(scope: Scope) -> Callable:
    """
    Build a dependency that only admits access tokens carrying ``scope``.

    Usage:
        @router.post("/initiate")
        async def initiate(claims: AccessClaims = Depends(require_scope(Scope.INITIATE_TRANSACTION))):
            ...
    """

    async def scope_checker(claims: AccessClaims = Depends(get_access_claims)) -> AccessClaims:
        return access_gate.ensure_scope(claims, scope)

    return scope_checker


########################################################################
# Client Administration
########################################################################

async def require_admin(
        x_admin_password: Optional[str] = Header(None, description="Administrative password"),
) -> None:
    """
    Raises:
        InvalidCredentialsException: If the administrative password is missing or wrong
    """
    AsyncClientAdminService.authenticate_admin(x_admin_password)
