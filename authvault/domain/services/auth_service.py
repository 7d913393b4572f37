# authvault/domain/services/auth_service.py

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import uuid

from authvault.domain.exceptions import InvalidOrExpiredTokenException
from authvault.domain.models.client_domain_model import Scope
from authvault.domain.models.token_domain_model import AccessClaims

TOKEN_ISSUER = "authvault"
TOKEN_AUDIENCE = "authvault-api"
ACCESS_TOKEN_TYPE = "access_token"

ACCESS_TOKEN_LIFETIME = timedelta(hours=1)
TRANSACTION_TOKEN_LIFETIME = timedelta(minutes=10)


class AuthService:
    """
    Domain service for access token claims.
    """

    @staticmethod
    def create_token_payload(
            client_id: str,
            scope: Scope,
            expires_delta: timedelta = ACCESS_TOKEN_LIFETIME,
            issued_at: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Create an access token payload with standard claims.

        Args:
            client_id: Public identifier of the client (becomes 'sub')
            scope: The client's scope
            expires_delta: Token lifetime
            issued_at: Issue time, defaults to now

        Returns:
            Dict with all token claims
        """
        issued_at = issued_at or datetime.now(timezone.utc)
        expire = issued_at + expires_delta

        return {
            "sub": str(client_id),
            "scope": Scope(scope).value,
            "type": ACCESS_TOKEN_TYPE,
            "iss": TOKEN_ISSUER,
            "aud": TOKEN_AUDIENCE,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
            "jti": str(uuid.uuid4()),
        }

    @staticmethod
    def claims_from_payload(token_payload: Dict[str, Any]) -> AccessClaims:
        """
        Turn a signature-checked payload into access claims.

        Signature, expiry, issuer and audience are checked by the JWT
        library; this checks the claims AuthVault itself adds.

        Raises:
            InvalidOrExpiredTokenException: If type, subject or scope are wrong
        """
        if token_payload.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidOrExpiredTokenException(detail="Invalid token type")

        client_id = token_payload.get("sub")
        if not client_id:
            raise InvalidOrExpiredTokenException(detail="Token has no subject")

        try:
            scope = Scope(token_payload.get("scope"))
        except ValueError:
            raise InvalidOrExpiredTokenException(detail="Token has an unknown scope")

        return AccessClaims(client_id=client_id, scope=scope)
