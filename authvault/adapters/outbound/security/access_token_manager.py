# authvault/adapters/outbound/security/access_token_manager.py

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from jose import jwt, JWTError, ExpiredSignatureError

from authvault.adapters.configuration.config import settings
from authvault.domain.exceptions import InvalidOrExpiredTokenException
from authvault.domain.models.client_domain_model import Scope
from authvault.domain.models.token_domain_model import AccessClaims
from authvault.domain.services.auth_service import (
    AuthService,
    ACCESS_TOKEN_LIFETIME,
    TOKEN_AUDIENCE,
    TOKEN_ISSUER,
)

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM


class AccessTokenManager:
    """
    Signs and verifies client access tokens (JWT).

    Verification is stateless: signature, issuer, audience, expiry and
    the AuthVault claims are checked without touching the database.
    """

    @classmethod
    def create_access_token(
            cls,
            client_id: str,
            scope: Scope,
            expires_delta: timedelta = ACCESS_TOKEN_LIFETIME,
            issued_at: Optional[datetime] = None,
    ) -> Tuple[str, Dict[str, Any]]:
        """
        Create a signed access token bound to (client_id, scope).

        Returns:
            The encoded token and its payload
        """
        payload = AuthService.create_token_payload(
            client_id=client_id,
            scope=scope,
            expires_delta=expires_delta,
            issued_at=issued_at or datetime.now(timezone.utc),
        )
        return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM), payload

    @classmethod
    def verify_access_token(cls, token: str) -> AccessClaims:
        """
        Decode and validate an access token.

        Raises:
            InvalidOrExpiredTokenException: If the token is invalid, expired
                or not an AuthVault access token
        """
        try:
            payload = jwt.decode(
                token,
                SECRET_KEY,
                algorithms=[ALGORITHM],
                audience=TOKEN_AUDIENCE,
                issuer=TOKEN_ISSUER,
            )
        except ExpiredSignatureError:
            raise InvalidOrExpiredTokenException(detail="Token has expired")
        except JWTError:
            raise InvalidOrExpiredTokenException()

        return AuthService.claims_from_payload(payload)
