# authvault/application/use_cases/client_use_cases.py

"""
Service for client administration.

This module implements the operations available to administrators:
registering clients, rotating their secrets, toggling their state and
inspecting the transaction ledger.
"""

import logging
from datetime import datetime, time
from typing import Optional
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import apaginate
from sqlalchemy.ext.asyncio import AsyncSession

from authvault.adapters.outbound.persistence.repositories import (
    api_log_repository,
    client_repository,
    transaction_repository,
)
from authvault.adapters.outbound.security.admin_credential_store import AdminCredentialStore
from authvault.application.dtos.client_dto import (
    ClientCreate,
    ClientCreateResponse,
    ClientOutput,
    ClientSecretUpdateResponse,
    ClientUpdate,
    DashboardStats,
    TransactionOutput,
)
from authvault.application.ports.inbound import IClientAdminUseCase
from authvault.domain.exceptions import InvalidCredentialsException, InvalidInputException
from authvault.shared.utils.clock import utcnow

logger = logging.getLogger(__name__)


class AsyncClientAdminService(IClientAdminUseCase):
    """
    Service for client administration.

    Every operation assumes the administrative password was already
    checked with ``authenticate_admin``.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    @staticmethod
    def authenticate_admin(admin_password: Optional[str]) -> None:
        """
        Validates the administrative password that allows client
        management operations.

        Raises:
            InvalidCredentialsException: If the password is missing or wrong
        """
        if not AdminCredentialStore.validate(admin_password):
            logger.warning("Attempt with invalid administrative password")
            raise InvalidCredentialsException(detail="Invalid administrative password")

    async def create_client(self, data: ClientCreate) -> ClientCreateResponse:
        """
        Register a client. The plain secret is returned only here.
        """
        client, client_secret = await client_repository.create_with_credentials(
            self.db, name=data.name, scope=data.scope, owner=data.owner
        )
        await self.db.commit()

        output = ClientOutput.model_validate(client)
        return ClientCreateResponse(**output.model_dump(), client_secret=client_secret)

    async def list_clients(self, params: Params, owner: Optional[str] = None) -> Page[ClientOutput]:
        return await apaginate(
            self.db,
            client_repository.list_query(owner),
            params,
            transformer=lambda items: [ClientOutput.model_validate(item) for item in items],
        )

    async def get_client(self, client_id: str) -> ClientOutput:
        """
        Raises:
            ResourceNotFoundException: If the client doesn't exist
        """
        client = await client_repository.get_or_404(self.db, client_id)
        return ClientOutput.model_validate(client)

    async def update_client(self, client_id: str, data: ClientUpdate) -> ClientOutput:
        """
        Rename, deactivate or reactivate a client.

        Raises:
            ResourceNotFoundException: If the client doesn't exist
            InvalidInputException: If no field was supplied
        """
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise InvalidInputException(detail="No fields to update")

        client = await client_repository.get_or_404(self.db, client_id)
        client = await client_repository.update(self.db, db_obj=client, obj_in=changes)
        await self.db.commit()

        logger.info(f"Client {client_id} updated: {', '.join(sorted(changes))}")
        return ClientOutput.model_validate(client)

    async def rotate_secret(self, client_id: str) -> ClientSecretUpdateResponse:
        """
        Raises:
            ResourceNotFoundException: If the client doesn't exist
        """
        new_secret = await client_repository.update_secret(self.db, client_id)
        await self.db.commit()
        return ClientSecretUpdateResponse(client_id=client_id, new_client_secret=new_secret)

    async def delete_client(self, client_id: str) -> None:
        """
        Remove a client. Its transaction tokens and ledger entries stay.

        Raises:
            ResourceNotFoundException: If the client doesn't exist
        """
        client = await client_repository.get_or_404(self.db, client_id)
        await client_repository.remove(self.db, db_obj=client)
        await self.db.commit()
        logger.info(f"Client {client_id} deleted")

    async def list_transactions(self, params: Params, owner: Optional[str] = None) -> Page[TransactionOutput]:
        return await apaginate(
            self.db,
            transaction_repository.recent_query(owner),
            params,
            transformer=lambda items: [TransactionOutput.model_validate(item) for item in items],
        )

    async def dashboard_stats(self, owner: Optional[str] = None) -> DashboardStats:
        """
        Aggregate figures for the admin dashboard.

        ``transactions_today`` counts from midnight UTC; ``success_rate``
        is the percentage of validated or completed transactions.
        """
        start_of_day = datetime.combine(utcnow().date(), time.min)

        active_clients = await client_repository.count_active(self.db, owner)
        transactions_today = await transaction_repository.count_for(self.db, owner=owner, since=start_of_day)
        total = await transaction_repository.count_for(self.db, owner=owner)
        successful = await transaction_repository.count_for(self.db, owner=owner, successful_only=True)
        avg_response_ms = await api_log_repository.average_response_ms(self.db, owner)

        return DashboardStats(
            active_clients=active_clients,
            transactions_today=transactions_today,
            success_rate=round(successful / total * 100, 2) if total else 0.0,
            avg_response_ms=avg_response_ms,
        )
