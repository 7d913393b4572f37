# authvault/adapters/outbound/persistence/repositories/transaction_repository.py

"""
Repository for the transaction ledger.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Select

from authvault.adapters.outbound.persistence.models import Client, Transaction
from authvault.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from authvault.application.ports.outbound import ITransactionRepository
from authvault.domain.exceptions import DatabaseOperationException
from authvault.domain.models.token_domain_model import (
    Transaction as DomainTransaction,
    TransactionStatus,
)

SUCCESSFUL_STATUSES = (TransactionStatus.VALIDATED, TransactionStatus.COMPLETED)


class AsyncTransactionRepository(AsyncCRUDBase[Transaction], ITransactionRepository):

    async def create(self, db: AsyncSession, *, transaction_token: str, initiator_client_id: str) -> DomainTransaction:
        db_obj = await super().create(db, obj_in={
            "transaction_token": transaction_token,
            "initiator_client_id": initiator_client_id,
            "status": TransactionStatus.INITIATED,
            "executor_client_id": None,
            "completed_at": None,
        })
        return self.to_domain(db_obj)

    async def mark_validated(
            self, db: AsyncSession, transaction_token: str, executor_client_id: Optional[str] = None
    ) -> None:
        """
        Move the transaction created with this token to ``validated``.

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            await db.execute(
                update(Transaction)
                .where(Transaction.transaction_token == transaction_token)
                .values(status=TransactionStatus.VALIDATED, executor_client_id=executor_client_id)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error validating transaction: {str(e)}")
            raise DatabaseOperationException(
                detail="Error updating transaction",
                original_error=e
            )

    def _scoped(self, query: Select, owner: Optional[str]) -> Select:
        if owner:
            query = query.join(Client, Client.client_id == Transaction.initiator_client_id).where(
                Client.owner == owner
            )
        return query

    def recent_query(self, owner: Optional[str] = None) -> Select:
        """Query for the paginated ledger listing, newest first."""
        query = self._scoped(select(Transaction), owner)
        return query.order_by(Transaction.created_at.desc(), Transaction.id.desc())

    async def count_for(
            self,
            db: AsyncSession,
            *,
            owner: Optional[str] = None,
            since: Optional[datetime] = None,
            successful_only: bool = False,
    ) -> int:
        """
        Count ledger entries, optionally restricted to an owner's clients,
        to entries created at or after ``since``, or to successful ones.
        """
        try:
            query = self._scoped(select(func.count(Transaction.id)), owner)
            if since is not None:
                query = query.where(Transaction.created_at >= since)
            if successful_only:
                query = query.where(Transaction.status.in_(SUCCESSFUL_STATUSES))
            result = await db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting transactions: {str(e)}")
            raise DatabaseOperationException(
                detail="Error counting transactions",
                original_error=e
            )

    def to_domain(self, db_model: Transaction) -> DomainTransaction:
        return DomainTransaction(
            id=db_model.id,
            transaction_token=db_model.transaction_token,
            initiator_client_id=db_model.initiator_client_id,
            status=TransactionStatus(db_model.status),
            created_at=db_model.created_at,
            executor_client_id=db_model.executor_client_id,
            completed_at=db_model.completed_at,
        )


transaction_repository = AsyncTransactionRepository(Transaction)
