from datetime import datetime, timedelta, timezone

import pytest

from authvault.adapters.outbound.security import access_gate
from authvault.adapters.outbound.security.access_token_manager import AccessTokenManager
from authvault.domain.exceptions import InsufficientScopeException, UnauthorizedException
from authvault.domain.models.client_domain_model import Scope
from authvault.domain.models.token_domain_model import AccessClaims


def _token(scope=Scope.INITIATE_TRANSACTION, issued_at=None):
    token, _ = AccessTokenManager.create_access_token("client-1", scope, issued_at=issued_at)
    return token


def test_authorize_returns_claims_for_valid_token():
    claims = access_gate.authorize({"authorization": f"Bearer {_token()}"})

    assert claims == AccessClaims(client_id="client-1", scope=Scope.INITIATE_TRANSACTION)


def test_bearer_scheme_is_case_insensitive():
    claims = access_gate.authorize({"authorization": f"bearer {_token()}"})

    assert claims.client_id == "client-1"


@pytest.mark.parametrize("headers", [
    {},
    {"authorization": ""},
    {"authorization": "Bearer"},
    {"authorization": "Bearer "},
    {"authorization": "Basic dXNlcjpwYXNz"},
    {"authorization": "Bearer one two"},
])
def test_missing_or_malformed_header(headers):
    with pytest.raises(UnauthorizedException) as exc_info:
        access_gate.authorize(headers)

    assert exc_info.value.detail == "Missing or invalid authorization header"


def test_invalid_and_expired_tokens_fail_alike():
    expired = _token(issued_at=datetime.now(timezone.utc) - timedelta(hours=2))

    with pytest.raises(UnauthorizedException) as invalid_info:
        access_gate.authorize({"authorization": "Bearer not-a-jwt"})
    with pytest.raises(UnauthorizedException) as expired_info:
        access_gate.authorize({"authorization": f"Bearer {expired}"})

    assert invalid_info.value.detail == expired_info.value.detail == "Invalid or expired token"


def test_ensure_scope():
    claims = AccessClaims(client_id="client-1", scope=Scope.EXECUTE_TRANSACTION)

    assert access_gate.ensure_scope(claims, Scope.EXECUTE_TRANSACTION) is claims
    with pytest.raises(InsufficientScopeException):
        access_gate.ensure_scope(claims, Scope.INITIATE_TRANSACTION)


@pytest.mark.parametrize("field, value", [
    ("type", "refresh_token"),
    ("iss", "someone-else"),
    ("aud", "another-api"),
])
def test_correctly_signed_foreign_token_is_unauthorized(field, value):
    from jose import jwt
    from authvault.adapters.outbound.security.access_token_manager import ALGORITHM, SECRET_KEY
    from authvault.domain.services.auth_service import AuthService

    payload = AuthService.create_token_payload("client-1", Scope.INITIATE_TRANSACTION)
    payload[field] = value
    token = jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

    with pytest.raises(UnauthorizedException) as exc_info:
        access_gate.authorize({"authorization": f"Bearer {token}"})

    assert exc_info.value.detail == "Invalid or expired token"
