"""
Base repository with common CRUD operations.

The Repository pattern separates data access logic from business logic,
making it easier to test and maintain. Repositories encapsulate all
database operations for a specific entity.

Repositories never commit: they flush so generated values are available
and leave transaction boundaries to the session dependency or the
transaction coordinator that owns the session.

Example:
    ```python
    from quotes_api.repositories.base import BaseRepository
    from quotes_api.models.author import Author


    class AuthorRepository(BaseRepository[Author]):
        not_found_message = "author not found"
        not_found_code = "AUTHOR_NOT_FOUND"

        def __init__(self, session: AsyncSession):
            super().__init__(session, Author)
    ```
"""

from typing import Generic, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from quotes_api.constants import MAX_ENTITY_ID
from quotes_api.exceptions import NotFoundError
from quotes_api.logging import logger
from quotes_api.schemas.pagination import ListParams

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Type Parameters:
        T: The SQLModel type this repository manages.

    Attributes:
        session: The database session for executing queries.
        model: The SQLModel class this repository manages.
        not_found_message: Message of the NotFoundError raised for a
            missing primary key.
        not_found_code: Code of that NotFoundError.
    """

    not_found_message: str = "entity not found"
    not_found_code: str = "NOT_FOUND"

    def __init__(self, session: AsyncSession, model: Type[T]):
        """
        Initialize repository with session and model.

        Args:
            session: Database session for executing queries.
            model: The SQLModel class to manage.
        """
        self.session = session
        self.model = model

    def not_found(self) -> NotFoundError:
        return NotFoundError(self.not_found_message, code=self.not_found_code)

    def check_id(self, id: int) -> None:
        """Raise NotFoundError for IDs the primary key column cannot hold."""
        if not 1 <= id <= MAX_ENTITY_ID:
            raise self.not_found()

    async def _get_entity(self, id: int) -> T:
        """
        Load a row by primary key.

        Raises:
            NotFoundError: If no row has this ID.
        """
        self.check_id(id)
        entity = await self.session.get(self.model, id)
        if entity is None:
            raise self.not_found()
        return entity

    async def get_all(self, params: ListParams) -> list[T]:
        """
        Get one page of entities ordered by primary key.

        Args:
            params: Pagination window.

        Returns:
            At most params.limit entities starting at params.offset.

        Raises:
            SQLAlchemyError: If database query fails.
        """
        try:
            stmt = (
                select(self.model)
                .order_by(self.model.id)  # type: ignore[attr-defined]
                .offset(params.offset)
                .limit(params.limit)
            )
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing {self.model.__name__}: {e}")
            raise

    async def count(self) -> int:
        """
        Count all rows of the model, ignoring pagination.

        Raises:
            SQLAlchemyError: If database query fails.
        """
        stmt = select(func.count(self.model.id))  # type: ignore[attr-defined]
        result = await self.session.exec(stmt)
        return int(result.one())

    async def add(self, entity: T) -> T:
        """
        Insert or update an entity and load server-generated values.

        Args:
            entity: The entity instance to persist.

        Returns:
            The entity with id and timestamps populated.

        Raises:
            SQLAlchemyError: If database operation fails.
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            logger.error(f"Error saving {self.model.__name__}: {e}")
            raise

    async def delete(self, id: int) -> None:
        """
        Delete entity by primary key.

        Args:
            id: Primary key value.

        Raises:
            NotFoundError: If no row has this ID.
            SQLAlchemyError: If database operation fails.
        """
        entity = await self._get_entity(id)
        try:
            await self.session.delete(entity)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Error deleting {self.model.__name__}: {e}")
            raise

    @staticmethod
    def like_pattern(query: str) -> str:
        """Wrap a user query for ILIKE, escaping its own wildcards."""
        escaped = (
            query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        )
        return f"%{escaped}%"
