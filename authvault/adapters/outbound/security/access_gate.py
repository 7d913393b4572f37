# authvault/adapters/outbound/security/access_gate.py

"""
Access Control Gate.

Turns the Authorization header of a request into verified access
claims. Every failure is reported as the same generic
``UnauthorizedException`` so callers learn nothing about why a token
was refused.
"""

import logging
from typing import Mapping

from authvault.adapters.outbound.security.access_token_manager import AccessTokenManager
from authvault.domain.exceptions import (
    InvalidOrExpiredTokenException,
    InsufficientScopeException,
    UnauthorizedException,
)
from authvault.domain.models.client_domain_model import Scope
from authvault.domain.models.token_domain_model import AccessClaims

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """
    Return the bearer credential from the Authorization header.

    Raises:
        UnauthorizedException: If the header is missing or malformed
    """
    authorization = headers.get("authorization") or headers.get("Authorization")
    if not authorization:
        raise UnauthorizedException(detail="Missing or invalid authorization header")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token or " " in token:
        raise UnauthorizedException(detail="Missing or invalid authorization header")
    return token


def authorize(headers: Mapping[str, str]) -> AccessClaims:
    """
    Authorize a request from its headers.

    Returns:
        The (client_id, scope) asserted by a valid access token

    Raises:
        UnauthorizedException: Missing, malformed, invalid or expired token
    """
    token = extract_bearer_token(headers)
    try:
        return AccessTokenManager.verify_access_token(token)
    except InvalidOrExpiredTokenException as e:
        logger.warning(f"Rejected access token: {e.detail}")
        raise UnauthorizedException()


def ensure_scope(claims: AccessClaims, required_scope: Scope) -> AccessClaims:
    """
    Raises:
        InsufficientScopeException: If the token carries another scope
    """
    if claims.scope != required_scope:
        logger.warning(
            f"Client {claims.client_id} with scope '{claims.scope.value}' "
            f"attempted an operation requiring '{required_scope.value}'"
        )
        raise InsufficientScopeException(required_scope=required_scope.value)
    return claims
