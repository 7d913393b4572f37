# authvault/adapters/outbound/persistence/repositories/transaction_token_repository.py

"""
Repository for single-use transaction tokens.

Consumption is a single conditional UPDATE: the ``is_used`` and expiry
checks are part of the statement's WHERE clause, so of any number of
concurrent validators of one token at most one sees its update applied.
"""

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from authvault.adapters.outbound.persistence.models import TransactionToken
from authvault.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from authvault.application.ports.outbound import ITransactionTokenRepository
from authvault.domain.exceptions import DatabaseOperationException
from authvault.domain.models.token_domain_model import TransactionToken as DomainTransactionToken


class AsyncTransactionTokenRepository(AsyncCRUDBase[TransactionToken], ITransactionTokenRepository):

    async def create(self, db: AsyncSession, *, client_id: str, expires_at: datetime) -> DomainTransactionToken:
        """
        Create an unused token for the initiating client.
        """
        db_obj = await super().create(db, obj_in={
            "token": str(uuid.uuid4()),
            "client_id": client_id,
            "is_used": False,
            "expires_at": expires_at,
            "used_at": None,
        })
        return self.to_domain(db_obj)

    async def get_by_token(self, db: AsyncSession, token: str) -> Optional[DomainTransactionToken]:
        db_obj = await self.get_by_field(db, "token", token)
        return self.to_domain(db_obj) if db_obj else None

    async def consume(self, db: AsyncSession, token: str, now: datetime) -> bool:
        """
        Mark the token as used if, and only if, it is unused and not expired.

        Args:
            db: Async database session
            token: Transaction token
            now: Validation time, also recorded as used_at

        Returns:
            True if this call consumed the token

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            result = await db.execute(
                update(TransactionToken)
                .where(
                    TransactionToken.token == token,
                    TransactionToken.is_used.is_(False),
                    TransactionToken.expires_at >= now,
                )
                .values(is_used=True, used_at=now)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1
        except SQLAlchemyError as e:
            self.logger.error(f"Error consuming transaction token: {str(e)}")
            raise DatabaseOperationException(
                detail="Error consuming transaction token",
                original_error=e
            )

    def to_domain(self, db_model: TransactionToken) -> DomainTransactionToken:
        return DomainTransactionToken(
            token=db_model.token,
            client_id=db_model.client_id,
            is_used=db_model.is_used,
            expires_at=db_model.expires_at,
            created_at=db_model.created_at,
            used_at=db_model.used_at,
        )


transaction_token_repository = AsyncTransactionTokenRepository(TransactionToken)
