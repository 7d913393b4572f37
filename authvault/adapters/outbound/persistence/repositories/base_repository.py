# authvault/adapters/outbound/persistence/repositories/base_repository.py

from typing import Any, Dict, Generic, Optional, Type, TypeVar
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
import logging

from authvault.adapters.outbound.persistence.models.base_model import Base
from authvault.domain.exceptions import DatabaseOperationException, InvalidInputException

# Define generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)

# Configure logger
logger = logging.getLogger(__name__)


class AsyncCRUDBase(Generic[ModelType]):
    """
    Async base class for implementing the Repository pattern.

    Provides generic operations that can be used by any entity, with
    consistent error handling and logging. Methods only flush: the
    calling use case owns the transaction and commits once, so a
    multi-row change is applied entirely or not at all.

    Attributes:
        model: SQLAlchemy model class
        logger: Configured logger for the class
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize the repository with an SQLAlchemy model.

        Args:
            model: SQLAlchemy model class associated with this repository
        """
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get_by_field(self, db: AsyncSession, field_name: str, value: Any) -> Optional[ModelType]:
        """
        Get an entity by the value of a specific field.

        Args:
            db: Async database session
            field_name: Name of the field/column to filter
            value: Value to filter

        Returns:
            Entity found or None if it doesn't exist

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(self.model).where(getattr(self.model, field_name) == value)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with {field_name}={value}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__}",
                original_error=e
            )

    async def count(self, db: AsyncSession, *criteria) -> int:
        """
        Count the entities matching the given SQL criteria.

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(func.count()).select_from(self.model)
            for criterion in criteria:
                query = query.where(criterion)
            result = await db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error counting {self.model.__name__}s",
                original_error=e
            )

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new entity.

        Args:
            db: Async database session
            obj_in: Column values of the new entity

        Returns:
            Newly created entity

        Raises:
            InvalidInputException: If the entity violates a constraint
            DatabaseOperationException: If another database error occurs
        """
        try:
            db_obj = self.model(**obj_in)
            db.add(db_obj)
            await db.flush()
            return db_obj

        except IntegrityError as e:
            self.logger.warning(f"Integrity error creating {self.model.__name__}: {str(e)}")
            raise InvalidInputException(
                detail=f"{self.model.__name__} with these data already exists"
            )

        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error creating {self.model.__name__}",
                original_error=e
            )

    async def update(self, db: AsyncSession, *, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """
        Update an existing entity with the given column values.

        Raises:
            DatabaseOperationException: If a database error occurs
        """
        try:
            for field, value in obj_in.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)

            db.add(db_obj)
            await db.flush()
            return db_obj

        except SQLAlchemyError as e:
            self.logger.error(f"Error updating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error updating {self.model.__name__}",
                original_error=e
            )

    async def remove(self, db: AsyncSession, *, db_obj: ModelType) -> ModelType:
        """
        Remove an entity.

        Raises:
            DatabaseOperationException: If an error occurs during removal
        """
        try:
            await db.delete(db_obj)
            await db.flush()
            return db_obj

        except SQLAlchemyError as e:
            self.logger.error(f"Error removing {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error removing {self.model.__name__}",
                original_error=e
            )
