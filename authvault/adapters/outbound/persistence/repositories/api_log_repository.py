# authvault/adapters/outbound/persistence/repositories/api_log_repository.py

from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from authvault.adapters.outbound.persistence.models import ApiLog, Client
from authvault.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from authvault.application.ports.outbound import IApiLogRepository
from authvault.domain.exceptions import DatabaseOperationException


class AsyncApiLogRepository(AsyncCRUDBase[ApiLog], IApiLogRepository):

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
        await self.create(db, obj_in={
            "endpoint": endpoint,
            "method": method,
            "client_id": client_id,
            "status_code": status_code,
            "response_time_ms": response_time_ms,
            "user_agent": user_agent,
            "ip_address": ip_address,
        })

    async def average_response_ms(self, db: AsyncSession, owner: Optional[str] = None) -> float:
        """Mean response time of logged requests, 0.0 when nothing is logged."""
        try:
            query = select(func.avg(ApiLog.response_time_ms))
            if owner:
                query = query.join(Client, Client.client_id == ApiLog.client_id).where(Client.owner == owner)
            result = await db.execute(query)
            average = result.scalar_one_or_none()
            return round(float(average), 2) if average is not None else 0.0
        except SQLAlchemyError as e:
            self.logger.error(f"Error computing average response time: {str(e)}")
            raise DatabaseOperationException(
                detail="Error computing average response time",
                original_error=e
            )


api_log_repository = AsyncApiLogRepository(ApiLog)
