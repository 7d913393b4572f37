# authvault/application/use_cases/token_use_cases.py

"""
Token Issuer.

Exchanges client credentials for a short-lived access token bound to
the client's registered scope.
"""

import logging
from datetime import timezone
from sqlalchemy.ext.asyncio import AsyncSession

from authvault.adapters.outbound.persistence.repositories import (
    access_token_repository,
    client_repository,
)
from authvault.adapters.outbound.security.access_token_manager import AccessTokenManager
from authvault.application.dtos.oauth_dto import TokenResponse
from authvault.application.ports.inbound import ITokenIssuerUseCase
from authvault.domain.exceptions import ClientInactiveException, ScopeMismatchException
from authvault.domain.models.client_domain_model import Scope
from authvault.domain.services.auth_service import ACCESS_TOKEN_LIFETIME
from authvault.shared.utils.clock import utcnow

logger = logging.getLogger(__name__)


class AsyncTokenIssuerService(ITokenIssuerUseCase):
    """
    Service for access token issuance.

    Credentials are always checked before the client state, so a wrong
    secret for an inactive client is still reported as invalid
    credentials.
    """

    def __init__(self, db_session: AsyncSession):
        """
        Initialize the service with a database session.

        Args:
            db_session: Active SQLAlchemy session
        """
        self.db = db_session

    async def issue_access_token(self, client_id: str, client_secret: str, scope: Scope) -> TokenResponse:
        """
        Authenticate a client and issue an access token.

        Args:
            client_id: Public client identifier
            client_secret: Plain client secret
            scope: Requested scope, must equal the registered one

        Returns:
            Access token response

        Raises:
            InvalidCredentialsException: Unknown client or wrong secret
            ClientInactiveException: If the client is inactive
            ScopeMismatchException: If the requested scope is not the client's
            DatabaseOperationException: If the audit or activity write fails
        """
        client = client_repository.to_domain(
            await client_repository.authenticate(self.db, client_id, client_secret)
        )

        if not client.is_active:
            logger.warning(f"Token request for inactive client: {client_id}")
            raise ClientInactiveException()

        if Scope(scope) != client.scope:
            logger.warning(
                f"Token request with scope '{Scope(scope).value}' for client {client_id} "
                f"registered with '{client.scope.value}'"
            )
            raise ScopeMismatchException()

        now = utcnow()
        access_token, payload = AccessTokenManager.create_access_token(
            client_id=client.client_id,
            scope=client.scope,
            issued_at=now.replace(tzinfo=timezone.utc),
        )

        await access_token_repository.record(
            self.db,
            jti=payload["jti"],
            client_id=client.client_id,
            scope=client.scope,
            expires_at=now + ACCESS_TOKEN_LIFETIME,
        )
        await client_repository.touch_last_activity(self.db, client.client_id, now)
        await self.db.commit()

        logger.info(f"Access token issued to client {client.client_id} (scope: {client.scope.value})")
        return TokenResponse(
            access_token=access_token,
            token_type="Bearer",
            expires_in=int(ACCESS_TOKEN_LIFETIME.total_seconds()),
        )
