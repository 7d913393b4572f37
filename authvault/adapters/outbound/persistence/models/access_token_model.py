# authvault/adapters/outbound/persistence/models/access_token_model.py

"""
Append-only audit trail of issued access tokens.

Rows are written on issuance and never read back when a token is
verified; verification is a signature and claims check.
"""

from sqlalchemy import Column, String, DateTime, Enum

from authvault.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK
from authvault.domain.models.client_domain_model import Scope
from authvault.shared.utils.clock import utcnow


class AccessTokenAudit(Base):
    """
    Attributes:
        jti: JWT ID of the issued token
        client_id: Client the token was issued to
        scope: Scope asserted by the token
        expires_at: Token expiry
        created_at: Issue time
    """
    __tablename__ = "access_token_audit"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    jti = Column(String(64), unique=True, nullable=False)
    client_id = Column(String(64), nullable=False, index=True)
    scope = Column(
        Enum(Scope, name="access_token_scope", native_enum=False, length=32,
             values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
    )
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
