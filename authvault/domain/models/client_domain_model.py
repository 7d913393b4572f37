# authvault/domain/models/client_domain_model.py

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Scope(str, Enum):
    """The two capabilities a client can be registered with."""
    INITIATE_TRANSACTION = "initiate_transaction"
    EXECUTE_TRANSACTION = "execute_transaction"


@dataclass
class Client:
    """Domain model for API client entity."""
    id: int
    client_id: str  # Public identifier
    client_secret: str  # Hashed secret
    name: str
    scope: Scope
    is_active: bool
    owner: str
    created_at: datetime
    last_activity: Optional[datetime] = None

    def can_initiate(self) -> bool:
        return self.scope == Scope.INITIATE_TRANSACTION
