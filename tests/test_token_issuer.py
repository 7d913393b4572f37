from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from authvault.adapters.outbound.persistence.database import AsyncSessionLocal
from authvault.adapters.outbound.persistence.models import AccessTokenAudit, Client
from authvault.adapters.outbound.security.access_token_manager import AccessTokenManager
from authvault.application.use_cases.token_use_cases import AsyncTokenIssuerService
from authvault.domain.exceptions import (
    ClientInactiveException,
    InvalidCredentialsException,
    InvalidOrExpiredTokenException,
    ScopeMismatchException,
)
from authvault.domain.models.client_domain_model import Scope


@pytest.mark.asyncio
async def test_issue_token_for_valid_client(db_session, make_client):
    client_id, secret = await make_client(Scope.INITIATE_TRANSACTION)

    result = await AsyncTokenIssuerService(db_session).issue_access_token(
        client_id, secret, Scope.INITIATE_TRANSACTION
    )

    assert result.token_type == "Bearer"
    assert result.expires_in == 3600

    claims = AccessTokenManager.verify_access_token(result.access_token)
    assert claims.client_id == client_id
    assert claims.scope == Scope.INITIATE_TRANSACTION


@pytest.mark.asyncio
async def test_issue_token_records_audit_row_and_activity(db_session, make_client):
    client_id, secret = await make_client(Scope.EXECUTE_TRANSACTION)

    await AsyncTokenIssuerService(db_session).issue_access_token(client_id, secret, Scope.EXECUTE_TRANSACTION)

    audits = (await db_session.execute(select(AccessTokenAudit))).scalars().all()
    assert len(audits) == 1
    assert audits[0].client_id == client_id
    assert audits[0].scope == Scope.EXECUTE_TRANSACTION
    assert audits[0].jti

    async with AsyncSessionLocal() as fresh:
        db_client = (await fresh.execute(select(Client).where(Client.client_id == client_id))).scalar_one()
    assert db_client.last_activity is not None


@pytest.mark.asyncio
async def test_unknown_client_and_wrong_secret_fail_alike(db_session, make_client):
    client_id, _ = await make_client(Scope.INITIATE_TRANSACTION)
    service = AsyncTokenIssuerService(db_session)

    with pytest.raises(InvalidCredentialsException) as unknown:
        await service.issue_access_token("no-such-client", "whatever", Scope.INITIATE_TRANSACTION)
    with pytest.raises(InvalidCredentialsException) as wrong_secret:
        await service.issue_access_token(client_id, "wrong-secret", Scope.INITIATE_TRANSACTION)

    assert unknown.value.detail == wrong_secret.value.detail == "Invalid client credentials"


@pytest.mark.asyncio
async def test_inactive_client_is_rejected(db_session, make_client):
    client_id, secret = await make_client(Scope.INITIATE_TRANSACTION, is_active=False)

    with pytest.raises(ClientInactiveException):
        await AsyncTokenIssuerService(db_session).issue_access_token(client_id, secret, Scope.INITIATE_TRANSACTION)


@pytest.mark.asyncio
async def test_inactive_client_with_wrong_secret_reports_invalid_credentials(db_session, make_client):
    client_id, _ = await make_client(Scope.INITIATE_TRANSACTION, is_active=False)

    with pytest.raises(InvalidCredentialsException):
        await AsyncTokenIssuerService(db_session).issue_access_token(
            client_id, "wrong-secret", Scope.INITIATE_TRANSACTION
        )


@pytest.mark.asyncio
async def test_scope_mismatch_is_rejected(db_session, make_client):
    client_id, secret = await make_client(Scope.INITIATE_TRANSACTION)

    with pytest.raises(ScopeMismatchException):
        await AsyncTokenIssuerService(db_session).issue_access_token(client_id, secret, Scope.EXECUTE_TRANSACTION)

    audits = (await db_session.execute(select(AccessTokenAudit))).scalars().all()
    assert audits == []


def test_token_verifies_before_expiry_and_not_after():
    issued_at = datetime.now(timezone.utc) - timedelta(minutes=59)
    token, _ = AccessTokenManager.create_access_token("client-1", Scope.EXECUTE_TRANSACTION, issued_at=issued_at)
    assert AccessTokenManager.verify_access_token(token).client_id == "client-1"

    expired, _ = AccessTokenManager.create_access_token(
        "client-1", Scope.EXECUTE_TRANSACTION, issued_at=datetime.now(timezone.utc) - timedelta(hours=2)
    )
    with pytest.raises(InvalidOrExpiredTokenException) as exc_info:
        AccessTokenManager.verify_access_token(expired)
    assert exc_info.value.detail == "Token has expired"


def test_tampered_token_is_rejected():
    token, _ = AccessTokenManager.create_access_token("client-1", Scope.INITIATE_TRANSACTION)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])

    with pytest.raises(InvalidOrExpiredTokenException):
        AccessTokenManager.verify_access_token(tampered)


def test_token_signed_with_another_key_is_rejected():
    from jose import jwt
    from authvault.domain.services.auth_service import AuthService

    payload = AuthService.create_token_payload("client-1", Scope.INITIATE_TRANSACTION)
    forged = jwt.encode(payload, "another-key", algorithm="HS256")

    with pytest.raises(InvalidOrExpiredTokenException):
        AccessTokenManager.verify_access_token(forged)


def test_payload_carries_standard_claims():
    from authvault.domain.services.auth_service import AuthService

    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    payload = AuthService.create_token_payload("client-1", Scope.EXECUTE_TRANSACTION, issued_at=now)

    assert payload["sub"] == "client-1"
    assert payload["scope"] == "execute_transaction"
    assert payload["type"] == "access_token"
    assert payload["iss"] == "authvault"
    assert payload["aud"] == "authvault-api"
    assert payload["exp"] - payload["iat"] == 3600


def test_claims_with_unknown_scope_are_rejected():
    from authvault.domain.services.auth_service import AuthService

    payload = AuthService.create_token_payload("client-1", Scope.EXECUTE_TRANSACTION)
    payload["scope"] = "admin"

    with pytest.raises(InvalidOrExpiredTokenException):
        AuthService.claims_from_payload(payload)


@pytest.mark.parametrize("field, value", [
    ("type", "refresh_token"),
    ("iss", "someone-else"),
    ("aud", "another-api"),
])
def test_token_with_foreign_claims_is_rejected(field, value):
    from jose import jwt
    from authvault.adapters.outbound.security.access_token_manager import ALGORITHM, SECRET_KEY
    from authvault.domain.services.auth_service import AuthService

    payload = AuthService.create_token_payload("client-1", Scope.INITIATE_TRANSACTION)
    payload[field] = value
    token = jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

    with pytest.raises(InvalidOrExpiredTokenException):
        AccessTokenManager.verify_access_token(token)
