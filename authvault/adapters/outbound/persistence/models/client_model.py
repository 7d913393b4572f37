# authvault/adapters/outbound/persistence/models/client_model.py

"""
Client model for authentication and API access.

This module defines the Client model that represents applications
taking part in a transaction handoff, either as initiator or executor.
"""

from sqlalchemy import Column, String, Boolean, DateTime, Enum

from authvault.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK
from authvault.domain.models.client_domain_model import Scope
from authvault.shared.utils.clock import utcnow


class Client(Base):
    """
    Model representing a client application that accesses the API.

    Attributes:
        id: Internal identifier
        client_id: Public client identifier (UUID)
        client_secret: Hash of the client secret
        name: Human readable name
        scope: Fixed capability, set at creation
        is_active: Whether the client may obtain tokens
        owner: Owning principal
        created_at: Creation timestamp
        last_activity: Last successful token issuance
    """
    __tablename__ = "clients"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    client_id = Column(String(64), unique=True, nullable=False, index=True)
    client_secret = Column(String, nullable=False)
    name = Column(String, nullable=False)
    scope = Column(
        Enum(Scope, name="client_scope", native_enum=False, length=32,
             values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    owner = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    last_activity = Column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<Client(client_id={self.client_id}, scope={self.scope}, active={self.is_active})>"
