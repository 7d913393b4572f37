# authvault/adapters/outbound/persistence/models/transaction_model.py

"""
Transaction ledger.

One row per attempted handoff, created together with its transaction
token and moved to ``validated`` when the token is consumed.
"""

from sqlalchemy import Column, String, DateTime, Enum

from authvault.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK
from authvault.domain.models.token_domain_model import TransactionStatus
from authvault.shared.utils.clock import utcnow


class Transaction(Base):
    """
    Attributes:
        transaction_token: Token this transaction was created with
        initiator_client_id: Client that initiated the handoff
        executor_client_id: Client that redeemed the token, if any
        status: initiated, validated, failed or completed
        created_at: Creation time
        completed_at: Set by downstream business completion
    """
    __tablename__ = "transactions"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    transaction_token = Column(String(64), nullable=False, index=True)
    initiator_client_id = Column(String(64), nullable=False, index=True)
    executor_client_id = Column(String(64), nullable=True)
    status = Column(
        Enum(TransactionStatus, name="transaction_status", native_enum=False, length=16,
             values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
        default=TransactionStatus.INITIATED,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    completed_at = Column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, status={self.status})>"
