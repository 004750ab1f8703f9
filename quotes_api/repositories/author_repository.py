"""
Repository for Author entity with specialized query methods.

This repository extends BaseRepository with Author-specific operations
like name search and the exact-name lookup used for duplicate checks.

Example:
    ```python
    from quotes_api.repositories.author_repository import AuthorRepository
    from quotes_api.storage.db import async_session

    async with async_session() as session:
        repo = AuthorRepository(session)
        authors = await repo.get_all(ListParams())
        specific = await repo.get_by_name("Mark Twain")
        search_results = await repo.search("twain", ListParams(limit=5))
    ```
"""

from sqlalchemy.exc import IntegrityError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from quotes_api.exceptions import ConflictError
from quotes_api.logging import logger
from quotes_api.models.author import Author
from quotes_api.repositories.base import BaseRepository
from quotes_api.schemas.author import CreateAuthorInput, UpdateAuthorInput
from quotes_api.schemas.pagination import ListParams


class AuthorRepository(BaseRepository[Author]):
    """
    Repository for Author entity operations.

    Provides CRUD operations inherited from BaseRepository plus
    Author-specific query methods.
    """

    not_found_message = "author not found"
    not_found_code = "AUTHOR_NOT_FOUND"

    def __init__(self, session: AsyncSession):
        """
        Initialize Author repository.

        Args:
            session: Database session for executing queries.
        """
        super().__init__(session, Author)

    async def get_by_id(self, id: int) -> Author:
        return await self._get_entity(id)

    async def create(self, params: CreateAuthorInput) -> Author:
        """
        Insert a new author.

        Args:
            params: Validated author fields.

        Returns:
            Created author with id and timestamps populated.
        """
        return await self.add(Author(name=params.name, bio=params.bio))

    async def update(self, id: int, params: UpdateAuthorInput) -> Author:
        """
        Replace an author's name and bio.

        Raises:
            NotFoundError: If no author has this ID.
        """
        author = await self._get_entity(id)
        author.name = params.name
        author.bio = params.bio
        return await self.add(author)

    async def delete(self, id: int) -> None:
        """
        Delete an author.

        The quote.author_id foreign key restricts deletes, so a quote
        written concurrently after the service-level guard still blocks
        the delete here.

        Raises:
            NotFoundError: If no author has this ID.
            ConflictError: If quotes still reference the author.
        """
        try:
            await super().delete(id)
        except IntegrityError as e:
            logger.warning(f"Delete of author {id} blocked by quotes: {e}")
            raise ConflictError(
                "cannot delete author with existing quotes",
                code="AUTHOR_HAS_QUOTES",
            ) from e

    async def get_by_name(self, name: str) -> Author | None:
        """
        Get author by exact name match.

        Args:
            name: Exact author name to search for (case-sensitive).

        Returns:
            Author if found, None otherwise.
        """
        stmt = select(Author).where(Author.name == name).order_by(Author.id)
        result = await self.session.exec(stmt)
        return result.first()

    async def search(self, query: str, params: ListParams) -> list[Author]:
        """
        Search authors by name pattern (case-insensitive).

        Args:
            query: Substring to look for in author names.
            params: Pagination window.

        Returns:
            One page of matching authors ordered by ID.
        """
        stmt = (
            select(Author)
            .where(Author.name.ilike(self.like_pattern(query), escape="\\"))  # type: ignore[attr-defined]
            .order_by(Author.id)
            .offset(params.offset)
            .limit(params.limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_search(self, query: str) -> int:
        stmt = select(func.count(Author.id)).where(
            Author.name.ilike(self.like_pattern(query), escape="\\")  # type: ignore[attr-defined]
        )
        result = await self.session.exec(stmt)
        return int(result.one())
