# authvault/application/ports/outbound.py

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from authvault.domain.models.client_domain_model import Client, Scope
from authvault.domain.models.token_domain_model import Transaction, TransactionToken


class IClientRepository(ABC):
    """Credential store interface."""

    @abstractmethod
    async def get_by_client_id(self, db: AsyncSession, client_id: str) -> Optional[Any]:
        """Get client by client_id."""
        pass

    @abstractmethod
    async def authenticate(self, db: AsyncSession, client_id: str, client_secret: str) -> Any:
        """Return the client owning these credentials or raise InvalidCredentialsException."""
        pass

    @abstractmethod
    async def create_with_credentials(
            self, db: AsyncSession, *, name: str, scope: Scope, owner: str
    ) -> Tuple[Any, str]:
        """Create client with generated credentials, returning it with the plain secret."""
        pass

    @abstractmethod
    async def update_secret(self, db: AsyncSession, client_id: str) -> str:
        """Replace the client secret, returning the new plain secret."""
        pass

    @abstractmethod
    async def touch_last_activity(self, db: AsyncSession, client_id: str, when: datetime) -> None:
        """Record the time of the latest successful issuance."""
        pass

    @abstractmethod
    def to_domain(self, db_model: Any) -> Client:
        pass


class IAccessTokenAuditRepository(ABC):
    """Append-only log of issued access tokens."""

    @abstractmethod
    async def record(
            self, db: AsyncSession, *, jti: str, client_id: str, scope: Scope, expires_at: datetime
    ) -> None:
        pass


class ITransactionTokenRepository(ABC):
    """Persistence for single-use transaction tokens."""

    @abstractmethod
    async def create(self, db: AsyncSession, *, client_id: str, expires_at: datetime) -> TransactionToken:
        pass

    @abstractmethod
    async def get_by_token(self, db: AsyncSession, token: str) -> Optional[TransactionToken]:
        pass

    @abstractmethod
    async def consume(self, db: AsyncSession, token: str, now: datetime) -> bool:
        """
        Atomically mark an unused, unexpired token as used.

        Returns True only for the single caller whose update applied.
        """
        pass


class ITransactionRepository(ABC):
    """Transaction ledger."""

    @abstractmethod
    async def create(self, db: AsyncSession, *, transaction_token: str, initiator_client_id: str) -> Transaction:
        pass

    @abstractmethod
    async def mark_validated(
            self, db: AsyncSession, transaction_token: str, executor_client_id: Optional[str] = None
    ) -> None:
        pass


class IApiLogRepository(ABC):
    """Request audit sink."""

    @abstractmethod
    async def record(
            self,
            db: AsyncSession,
            *,
            endpoint: str,
            method: str,
            client_id: Optional[str],
            status_code: int,
            response_time_ms: int,
            user_agent: Optional[str],
            ip_address: Optional[str],
    ) -> None:
        pass
