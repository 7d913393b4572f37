# authvault/domain/models/token_domain_model.py

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from authvault.domain.models.client_domain_model import Scope


class TransactionStatus(str, Enum):
    INITIATED = "initiated"
    VALIDATED = "validated"
    # Reserved for downstream business completion, never set by AuthVault
    FAILED = "failed"
    COMPLETED = "completed"


@dataclass(frozen=True)
class AccessClaims:
    """Verified identity extracted from an access token."""
    client_id: str
    scope: Scope


@dataclass
class TransactionToken:
    """Single-use credential representing one pending handoff."""
    token: str
    client_id: str
    is_used: bool
    expires_at: datetime
    created_at: datetime
    used_at: Optional[datetime] = None


@dataclass
class Transaction:
    """Ledger entry linking initiator and executor of one handoff."""
    id: int
    transaction_token: str
    initiator_client_id: str
    status: TransactionStatus
    created_at: datetime
    executor_client_id: Optional[str] = None
    completed_at: Optional[datetime] = None
