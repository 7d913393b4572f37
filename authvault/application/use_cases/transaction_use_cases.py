# authvault/application/use_cases/transaction_use_cases.py

"""
Transaction Token Engine.

Creates single-use transaction tokens for initiator clients and consumes
them on behalf of executor clients, keeping the transaction ledger in
step with every token state change.
"""

import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from authvault.adapters.outbound.persistence.repositories import (
    client_repository,
    transaction_repository,
    transaction_token_repository,
)
from authvault.application.dtos.transaction_dto import InitiateResponse, ValidateResponse
from authvault.application.ports.inbound import ITransactionUseCase
from authvault.domain.exceptions import (
    ClientInactiveException,
    NotAuthorizedToInitiateException,
    TransactionTokenAlreadyUsedException,
    TransactionTokenExpiredException,
    TransactionTokenNotFoundException,
    UnknownClientException,
)
from authvault.domain.services.auth_service import TRANSACTION_TOKEN_LIFETIME
from authvault.shared.utils.clock import utcnow

logger = logging.getLogger(__name__)


class AsyncTransactionService(ITransactionUseCase):

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def initiate(self, client_id: str) -> InitiateResponse:
        """
        Create a transaction token and its ledger entry in one commit.

        The persisted client is checked again here; what the access
        token claims about its scope is not trusted on its own.

        Raises:
            UnknownClientException: If the client does not exist
            ClientInactiveException: If the client is inactive
            NotAuthorizedToInitiateException: If the client is not an initiator
        """
        db_client = await client_repository.get_by_client_id(self.db, client_id)
        if not db_client:
            logger.warning(f"Transaction initiation for unknown client: {client_id}")
            raise UnknownClientException()

        client = client_repository.to_domain(db_client)
        if not client.is_active:
            logger.warning(f"Transaction initiation for inactive client: {client_id}")
            raise ClientInactiveException()

        if not client.can_initiate():
            logger.warning(f"Client {client_id} with scope '{client.scope.value}' attempted to initiate")
            raise NotAuthorizedToInitiateException()

        token = await transaction_token_repository.create(
            self.db,
            client_id=client.client_id,
            expires_at=utcnow() + TRANSACTION_TOKEN_LIFETIME,
        )
        await transaction_repository.create(
            self.db,
            transaction_token=token.token,
            initiator_client_id=client.client_id,
        )
        await self.db.commit()

        logger.info(f"Transaction initiated by client {client.client_id}")
        return InitiateResponse(transaction_token=token.token)

    async def validate(self, transaction_token: str, executor_client_id: Optional[str] = None) -> ValidateResponse:
        """
        Consume a transaction token.

        The token is consumed by a single conditional update; only when
        that update did not apply is the row read back to tell the
        caller why.

        Args:
            transaction_token: Token to consume
            executor_client_id: Client redeeming the token, recorded on the ledger

        Returns:
            Validation result carrying the initiating client id

        Raises:
            TransactionTokenNotFoundException: If the token does not exist
            TransactionTokenAlreadyUsedException: If the token was consumed before
            TransactionTokenExpiredException: If the token is past its expiry
        """
        now = utcnow()

        if not await transaction_token_repository.consume(self.db, transaction_token, now):
            token = await transaction_token_repository.get_by_token(self.db, transaction_token)
            if token is None:
                logger.warning("Validation of unknown transaction token")
                raise TransactionTokenNotFoundException()
            if token.is_used:
                logger.warning(f"Replay of transaction token issued to client {token.client_id}")
                raise TransactionTokenAlreadyUsedException()
            logger.warning(f"Validation of expired transaction token issued to client {token.client_id}")
            raise TransactionTokenExpiredException()

        await transaction_repository.mark_validated(self.db, transaction_token, executor_client_id)
        token = await transaction_token_repository.get_by_token(self.db, transaction_token)
        await self.db.commit()

        logger.info(f"Transaction token of client {token.client_id} validated by {executor_client_id or 'unknown'}")
        return ValidateResponse(
            valid=True,
            transaction_token=token.token,
            client_id=token.client_id,
        )
