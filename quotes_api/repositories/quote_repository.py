"""
Repository for Quote entity.

Every read joins the author row so callers get a QuoteWithAuthor without
a second round trip. Writes return the plain Quote row.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from quotes_api.exceptions import NotFoundError
from quotes_api.logging import logger
from quotes_api.models.author import Author
from quotes_api.models.quote import Quote
from quotes_api.repositories.base import BaseRepository
from quotes_api.schemas.pagination import ListParams
from quotes_api.schemas.quote import (
    CreateQuoteInput,
    QuoteWithAuthor,
    UpdateQuoteInput,
)


class QuoteRepository(BaseRepository[Quote]):
    """
    Repository for Quote entity operations.

    Read methods return QuoteWithAuthor; create and update return Quote.
    """

    not_found_message = "quote not found"
    not_found_code = "QUOTE_NOT_FOUND"

    def __init__(self, session: AsyncSession):
        """
        Initialize Quote repository.

        Args:
            session: Database session for executing queries.
        """
        super().__init__(session, Quote)

    @staticmethod
    def _joined() -> Any:
        return select(Quote, Author.name, Author.bio).join(
            Author,
            Quote.author_id == Author.id,  # type: ignore[arg-type]
        )

    async def _fetch_page(self, stmt: Any, params: ListParams) -> list[QuoteWithAuthor]:
        stmt = stmt.order_by(Quote.id).offset(params.offset).limit(params.limit)
        result = await self.session.exec(stmt)
        return [
            QuoteWithAuthor.from_quote(quote, name, bio)
            for quote, name, bio in result.all()
        ]

    async def _save(self, quote: Quote) -> Quote:
        try:
            return await self.add(quote)
        except IntegrityError as e:
            logger.warning(
                f"Quote write rejected, author {quote.author_id} missing: {e}"
            )
            raise NotFoundError(
                "author not found", code="AUTHOR_NOT_FOUND"
            ) from e

    async def create(self, params: CreateQuoteInput) -> Quote:
        """
        Insert a new quote.

        Raises:
            NotFoundError: If the author was deleted concurrently and the
                foreign key rejected the insert.
        """
        return await self._save(
            Quote(
                content=params.content,
                author_id=params.author_id,
                source=params.source,
                tags=list(params.tags),
            )
        )

    async def get_by_id(self, id: int) -> QuoteWithAuthor:
        """
        Get a quote with its author's name and bio.

        Raises:
            NotFoundError: If no quote has this ID.
        """
        self.check_id(id)
        stmt = self._joined().where(Quote.id == id)
        result = await self.session.exec(stmt)
        row = result.first()
        if row is None:
            raise self.not_found()
        quote, name, bio = row
        return QuoteWithAuthor.from_quote(quote, name, bio)

    async def get_all(self, params: ListParams) -> list[QuoteWithAuthor]:  # type: ignore[override]
        return await self._fetch_page(self._joined(), params)

    async def list_by_author(
        self, author_id: int, params: ListParams
    ) -> list[QuoteWithAuthor]:
        stmt = self._joined().where(Quote.author_id == author_id)
        return await self._fetch_page(stmt, params)

    async def count_by_author(self, author_id: int) -> int:
        stmt = select(func.count(Quote.id)).where(Quote.author_id == author_id)
        result = await self.session.exec(stmt)
        return int(result.one())

    async def update(self, id: int, params: UpdateQuoteInput) -> Quote:
        """
        Replace a quote's fields.

        Raises:
            NotFoundError: If the quote does not exist, or the new author
                was deleted concurrently.
        """
        quote = await self._get_entity(id)
        quote.content = params.content
        quote.author_id = params.author_id
        quote.source = params.source
        quote.tags = list(params.tags)
        return await self._save(quote)

    async def search(
        self, query: str, params: ListParams
    ) -> list[QuoteWithAuthor]:
        """
        Search quotes by content (case-insensitive substring).

        Args:
            query: Substring to look for in quote content.
            params: Pagination window.

        Returns:
            One page of matching quotes ordered by ID.
        """
        stmt = self._joined().where(
            Quote.content.ilike(self.like_pattern(query), escape="\\")  # type: ignore[attr-defined]
        )
        return await self._fetch_page(stmt, params)

    async def count_search(self, query: str) -> int:
        stmt = select(func.count(Quote.id)).where(
            Quote.content.ilike(self.like_pattern(query), escape="\\")  # type: ignore[attr-defined]
        )
        result = await self.session.exec(stmt)
        return int(result.one())

    async def get_random(self) -> QuoteWithAuthor:
        """
        Pick one quote uniformly at random.

        Raises:
            NotFoundError: If there are no quotes.
        """
        stmt = self._joined().order_by(func.random()).limit(1)
        result = await self.session.exec(stmt)
        row = result.first()
        if row is None:
            raise NotFoundError("no quotes found", code="NO_QUOTES_FOUND")
        quote, name, bio = row
        return QuoteWithAuthor.from_quote(quote, name, bio)
