# authvault/adapters/outbound/persistence/models/transaction_token_model.py

"""
Single-use transaction tokens.

A row is created by an initiator and consumed exactly once by an
executor. Rows are never deleted so that a second redemption can be
reported as "already used".
"""

from sqlalchemy import Column, String, Boolean, DateTime

from authvault.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK
from authvault.shared.utils.clock import utcnow


class TransactionToken(Base):
    """
    Attributes:
        token: Opaque UUID4 handed to the executor
        client_id: Initiator that created the token
        is_used: Flips to True exactly once
        expires_at: Creation time plus ten minutes
        created_at: Creation time
        used_at: Time of the successful validation
    """
    __tablename__ = "transaction_tokens"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    client_id = Column(String(64), nullable=False, index=True)
    is_used = Column(Boolean, default=False, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    used_at = Column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<TransactionToken(token={self.token}, used={self.is_used})>"
