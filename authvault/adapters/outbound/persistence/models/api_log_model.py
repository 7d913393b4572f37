# authvault/adapters/outbound/persistence/models/api_log_model.py

from sqlalchemy import Column, Integer, String, DateTime

from authvault.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK
from authvault.shared.utils.clock import utcnow


class ApiLog(Base):
    """One row per handled HTTP request."""
    __tablename__ = "api_logs"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    endpoint = Column(String, nullable=False)
    method = Column(String(16), nullable=False)
    client_id = Column(String(64), nullable=True, index=True)
    status_code = Column(Integer, nullable=False)
    response_time_ms = Column(Integer, nullable=False)
    user_agent = Column(String, nullable=True)
    ip_address = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
