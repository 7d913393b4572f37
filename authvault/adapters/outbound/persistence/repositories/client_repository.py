# authvault/adapters/outbound/persistence/repositories/client_repository.py

"""
Repository for client operations.

This module implements the credential store: lookups by client_id,
credential checks and credential generation, implementing the
IClientRepository interface.
"""

import secrets
import uuid
from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Select

from authvault.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from authvault.adapters.outbound.persistence.models import Client
from authvault.adapters.outbound.security.secret_hasher import SecretHasher
from authvault.application.ports.outbound import IClientRepository
from authvault.domain.models.client_domain_model import Client as DomainClient, Scope
from authvault.domain.exceptions import (
    ResourceNotFoundException,
    DatabaseOperationException,
    InvalidCredentialsException
)


class AsyncClientRepository(AsyncCRUDBase[Client], IClientRepository):
    """
    Async implementation of the repository for the Client entity.

    Extends AsyncCRUDBase with client-specific operations,
    such as lookup by client_id and credential generation.
    """

    async def get_by_client_id(self, db: AsyncSession, client_id: str) -> Optional[Client]:
        """
        Find a client by client_id.

        Args:
            db: Async database session
            client_id: Client identifier

        Returns:
            Client found or None if it doesn't exist

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            query = select(Client).where(Client.client_id == client_id)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching client by client_id '{client_id}': {str(e)}")
            raise DatabaseOperationException(
                detail="Error fetching client by client_id",
                original_error=e
            )

    async def get_or_404(self, db: AsyncSession, client_id: str) -> Client:
        client = await self.get_by_client_id(db, client_id)
        if not client:
            raise ResourceNotFoundException(
                detail="Client not found",
                resource_id=client_id
            )
        return client

    async def authenticate(self, db: AsyncSession, client_id: str, client_secret: str) -> Client:
        """
        Find the client that owns the (client_id, client_secret) pair.

        Unknown ids and wrong secrets raise the same exception so that
        callers cannot enumerate client ids.

        Raises:
            InvalidCredentialsException: If credentials are invalid
            DatabaseOperationException: In case of database error
        """
        client = await self.get_by_client_id(db, client_id)
        if not client:
            await SecretHasher.dummy_verify()
            self.logger.warning(f"Authentication attempt with non-existent client_id: {client_id}")
            raise InvalidCredentialsException()

        if not await SecretHasher.verify_secret(client_secret, client.client_secret):
            self.logger.warning(f"Authentication attempt with incorrect secret: {client_id}")
            raise InvalidCredentialsException()

        return client

    async def create_with_credentials(
            self, db: AsyncSession, *, name: str, scope: Scope, owner: str
    ) -> Tuple[Client, str]:
        """
        Create a new client with automatically generated credentials.

        Returns:
            The new client and its plain text secret. This is the only
            time the secret is available; only its hash is stored.

        Raises:
            DatabaseOperationException: In case of database error
        """
        client_secret_plain = secrets.token_urlsafe(32)
        client = await self.create(db, obj_in={
            "client_id": str(uuid.uuid4()),
            "client_secret": await SecretHasher.hash_secret(client_secret_plain),
            "name": name,
            "scope": Scope(scope),
            "owner": owner,
            "is_active": True,
            "last_activity": None,
        })

        self.logger.info(f"Client created: {client.id} (client_id: {client.client_id}, scope: {client.scope.value})")
        return client, client_secret_plain

    async def update_secret(self, db: AsyncSession, client_id: str) -> str:
        """
        Replace the secret key of an existing client.

        Returns:
            The new plain text secret

        Raises:
            ResourceNotFoundException: If the client doesn't exist
            DatabaseOperationException: In case of database error
        """
        client = await self.get_or_404(db, client_id)

        new_secret_plain = secrets.token_urlsafe(32)
        await self.update(db, db_obj=client, obj_in={
            "client_secret": await SecretHasher.hash_secret(new_secret_plain)
        })

        self.logger.info(f"Secret key updated for client {client_id}")
        return new_secret_plain

    async def touch_last_activity(self, db: AsyncSession, client_id: str, when: datetime) -> None:
        try:
            await db.execute(
                update(Client)
                .where(Client.client_id == client_id)
                .values(last_activity=when)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating last activity of client {client_id}: {str(e)}")
            raise DatabaseOperationException(
                detail="Error updating client activity",
                original_error=e
            )

    async def count_active(self, db: AsyncSession, owner: Optional[str] = None) -> int:
        criteria = [Client.is_active.is_(True)]
        if owner:
            criteria.append(Client.owner == owner)
        return await self.count(db, *criteria)

    def list_query(self, owner: Optional[str] = None) -> Select:
        """Query for the paginated client listing, newest first."""
        query = select(Client)
        if owner:
            query = query.where(Client.owner == owner)
        return query.order_by(Client.created_at.desc(), Client.id.desc())

    def to_domain(self, db_model: Client) -> DomainClient:
        """
        Convert database model to domain model.
        """
        return DomainClient(
            id=db_model.id,
            client_id=db_model.client_id,
            client_secret=db_model.client_secret,
            name=db_model.name,
            scope=Scope(db_model.scope),
            is_active=db_model.is_active,
            owner=db_model.owner,
            created_at=db_model.created_at,
            last_activity=db_model.last_activity,
        )


# Public instance to be used by use cases
client_repository = AsyncClientRepository(Client)
