# authvault/adapters/outbound/persistence/repositories/access_token_repository.py

from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession

from authvault.adapters.outbound.persistence.models import AccessTokenAudit
from authvault.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from authvault.application.ports.outbound import IAccessTokenAuditRepository
from authvault.domain.models.client_domain_model import Scope


class AsyncAccessTokenAuditRepository(AsyncCRUDBase[AccessTokenAudit], IAccessTokenAuditRepository):
    """
    Append-only audit of issued access tokens.

    Nothing reads these rows to authorize a request.
    """

    async def record(
            self, db: AsyncSession, *, jti: str, client_id: str, scope: Scope, expires_at: datetime
    ) -> None:
        await self.create(db, obj_in={
            "jti": jti,
            "client_id": client_id,
            "scope": Scope(scope),
            "expires_at": expires_at,
        })


access_token_repository = AsyncAccessTokenAuditRepository(AccessTokenAudit)
