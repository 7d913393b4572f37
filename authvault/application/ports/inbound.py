# authvault/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import Optional

from fastapi_pagination import Page, Params

from authvault.application.dtos.client_dto import (
    ClientCreate,
    ClientCreateResponse,
    ClientOutput,
    ClientSecretUpdateResponse,
    ClientUpdate,
    DashboardStats,
    TransactionOutput,
)
from authvault.application.dtos.oauth_dto import TokenResponse
from authvault.application.dtos.transaction_dto import InitiateResponse, ValidateResponse
from authvault.domain.models.client_domain_model import Scope


class ITokenIssuerUseCase(ABC):
    """Interface for access token issuance."""

    @abstractmethod
    async def issue_access_token(self, client_id: str, client_secret: str, scope: Scope) -> TokenResponse:
        """Authenticate a client and issue an access token for its scope."""
        pass


class ITransactionUseCase(ABC):
    """Interface for the transaction token lifecycle."""

    @abstractmethod
    async def initiate(self, client_id: str) -> InitiateResponse:
        """Create a single-use transaction token for an initiator client."""
        pass

    @abstractmethod
    async def validate(self, transaction_token: str, executor_client_id: Optional[str] = None) -> ValidateResponse:
        """Consume a transaction token."""
        pass


class IClientAdminUseCase(ABC):
    """Interface for client administration."""

    @abstractmethod
    async def create_client(self, data: ClientCreate) -> ClientCreateResponse:
        pass

    @abstractmethod
    async def list_clients(self, params: Params, owner: Optional[str] = None) -> Page[ClientOutput]:
        pass

    @abstractmethod
    async def get_client(self, client_id: str) -> ClientOutput:
        pass

    @abstractmethod
    async def update_client(self, client_id: str, data: ClientUpdate) -> ClientOutput:
        pass

    @abstractmethod
    async def rotate_secret(self, client_id: str) -> ClientSecretUpdateResponse:
        pass

    @abstractmethod
    async def delete_client(self, client_id: str) -> None:
        pass

    @abstractmethod
    async def list_transactions(self, params: Params, owner: Optional[str] = None) -> Page[TransactionOutput]:
        pass

    @abstractmethod
    async def dashboard_stats(self, owner: Optional[str] = None) -> DashboardStats:
        pass
