"""
Catalog business operations over authors and quotes.

The service enforces the rules storage alone does not express: author
names are unique, quotes must reference an existing author and an author
cannot be deleted while quotes reference it. Every compound check+write
runs inside one transaction coordinator scope.

Errors keep their kind on the way up. A NotFoundError raised by a
repository is re-raised as a NotFoundError with the operation prefixed to
its message; storage failures become DependencyFailure.

Example:
    ```python
    service = CatalogService(
        AuthorRepository(session),
        QuoteRepository(session),
        SqlTransactionCoordinator(async_session),
    )
    author = await service.create_author(CreateAuthorInput(name="Seneca"))
    quotes, total = await service.list_quotes_by_author(author.id, ListParams())
    ```
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from quotes_api.exceptions import AppException, ConflictError, DependencyFailure
from quotes_api.logging import logger as app_logger
from quotes_api.models.author import Author
from quotes_api.models.quote import Quote
from quotes_api.protocols import (
    AuthorRepositoryProtocol,
    QuoteRepositoryProtocol,
)
from quotes_api.schemas.author import CreateAuthorInput, UpdateAuthorInput
from quotes_api.schemas.pagination import ListParams
from quotes_api.schemas.quote import (
    CreateQuoteInput,
    QuoteWithAuthor,
    UpdateQuoteInput,
)
from quotes_api.storage.transactions import (
    TransactionCoordinator,
    TransactionScope,
)

DUPLICATE_AUTHOR_NAME = "DUPLICATE_AUTHOR_NAME"
AUTHOR_HAS_QUOTES = "AUTHOR_HAS_QUOTES"


class CatalogService:
    """
    Orchestrates the author and quote repositories.

    Attributes:
        authors: Author repository used for plain reads.
        quotes: Quote repository used for plain reads.
        transactions: Coordinator providing atomic scopes for writes.
        logger: Logger receiving failure records.
    """

    def __init__(
        self,
        authors: AuthorRepositoryProtocol,
        quotes: QuoteRepositoryProtocol,
        transactions: TransactionCoordinator,
        logger: logging.Logger | None = None,
    ):
        self.authors = authors
        self.quotes = quotes
        self.transactions = transactions
        self.logger = logger or app_logger

    @contextmanager
    def _operation(self, action: str, code: str) -> Iterator[None]:
        """
        Attach operation context to anything raised inside the block.

        Args:
            action: Lower-case description, e.g. "create author".
            code: Operation code, e.g. "CREATE_AUTHOR".

        Raises:
            AppException: Same class and code, message prefixed.
            DependencyFailure: For storage and connection errors.
        """
        try:
            yield
        except AppException as ex:
            raise ex.with_context(f"failed to {action}") from ex
        except (SQLAlchemyError, OSError) as ex:
            self.logger.error(
                f"Storage failure during {action}: {ex}",
                extra={"operation": code},
            )
            raise DependencyFailure(
                f"failed to {action}: {ex}", code=f"{code}_ERROR"
            ) from ex

    # ========================================================================
    # Authors
    # ========================================================================

    async def create_author(self, params: CreateAuthorInput) -> Author:
        """
        Create an author whose name is not taken yet.

        Raises:
            ConflictError: An author with exactly this name exists.
        """

        async def work(tx: TransactionScope) -> Author:
            if await tx.authors.get_by_name(params.name) is not None:
                raise ConflictError(
                    "author with this name already exists",
                    code=DUPLICATE_AUTHOR_NAME,
                )
            return await tx.authors.create(params)

        with self._operation("create author", "CREATE_AUTHOR"):
            return await self.transactions.run(work)

    async def get_author(self, id: int) -> Author:
        with self._operation("get author", "GET_AUTHOR"):
            return await self.authors.get_by_id(id)

    async def list_authors(self, params: ListParams) -> tuple[list[Author], int]:
        """
        Get one page of authors and the total number of authors.

        The two reads are independent, so the total may drift from the
        page under concurrent writes.
        """
        with self._operation("list authors", "LIST_AUTHORS"):
            total = await self.authors.count()
            authors = await self.authors.get_all(params)
        return authors, total

    async def update_author(self, id: int, params: UpdateAuthorInput) -> Author:
        """
        Replace an author's name and bio.

        Raises:
            NotFoundError: No author has this ID.
            ConflictError: Another author already uses the new name.
        """

        async def work(tx: TransactionScope) -> Author:
            await tx.authors.get_by_id(id)
            holder = await tx.authors.get_by_name(params.name)
            if holder is not None and holder.id != id:
                raise ConflictError(
                    "author with this name already exists",
                    code=DUPLICATE_AUTHOR_NAME,
                )
            return await tx.authors.update(id, params)

        with self._operation("update author", "UPDATE_AUTHOR"):
            return await self.transactions.run(work)

    async def delete_author(self, id: int) -> None:
        """
        Delete an author that has no quotes.

        Raises:
            NotFoundError: No author has this ID.
            ConflictError: At least one quote references the author.
        """

        async def work(tx: TransactionScope) -> None:
            if await tx.quotes.list_by_author(id, ListParams(limit=1)):
                raise ConflictError(
                    "cannot delete author with existing quotes",
                    code=AUTHOR_HAS_QUOTES,
                )
            await tx.authors.delete(id)

        with self._operation("delete author", "DELETE_AUTHOR"):
            await self.transactions.run(work)

    async def search_authors(
        self, query: str, params: ListParams
    ) -> tuple[list[Author], int]:
        with self._operation("search authors", "SEARCH_AUTHORS"):
            authors = await self.authors.search(query, params)
            total = await self.authors.count_search(query)
        return authors, total

    # ========================================================================
    # Quotes
    # ========================================================================

    async def create_quote(self, params: CreateQuoteInput) -> Quote:
        """
        Create a quote for an existing author.

        Raises:
            NotFoundError: The referenced author does not exist; nothing
                is written.
        """

        async def work(tx: TransactionScope) -> Quote:
            await tx.authors.get_by_id(params.author_id)
            return await tx.quotes.create(params)

        with self._operation("create quote", "CREATE_QUOTE"):
            return await self.transactions.run(work)

    async def get_quote(self, id: int) -> QuoteWithAuthor:
        with self._operation("get quote", "GET_QUOTE"):
            return await self.quotes.get_by_id(id)

    async def list_quotes(
        self, params: ListParams
    ) -> tuple[list[QuoteWithAuthor], int]:
        with self._operation("list quotes", "LIST_QUOTES"):
            total = await self.quotes.count()
            quotes = await self.quotes.get_all(params)
        return quotes, total

    async def list_quotes_by_author(
        self, author_id: int, params: ListParams
    ) -> tuple[list[QuoteWithAuthor], int]:
        """
        Get one page of an author's quotes and how many they have.

        Raises:
            NotFoundError: The author does not exist, as opposed to
                existing without quotes.
        """
        with self._operation("list quotes by author", "LIST_QUOTES_BY_AUTHOR"):
            await self.authors.get_by_id(author_id)
            quotes = await self.quotes.list_by_author(author_id, params)
            total = await self.quotes.count_by_author(author_id)
        return quotes, total

    async def update_quote(self, id: int, params: UpdateQuoteInput) -> Quote:
        """
        Replace a quote's fields, re-validating its author.

        Raises:
            NotFoundError: The quote or the (possibly new) author does not
                exist; the stored quote is left unchanged.
        """

        async def work(tx: TransactionScope) -> Quote:
            await tx.quotes.get_by_id(id)
            await tx.authors.get_by_id(params.author_id)
            return await tx.quotes.update(id, params)

        with self._operation("update quote", "UPDATE_QUOTE"):
            return await self.transactions.run(work)

    async def delete_quote(self, id: int) -> None:
        with self._operation("delete quote", "DELETE_QUOTE"):
            await self.transactions.run(lambda tx: tx.quotes.delete(id))

    async def search_quotes(
        self, query: str, params: ListParams
    ) -> tuple[list[QuoteWithAuthor], int]:
        with self._operation("search quotes", "SEARCH_QUOTES"):
            quotes = await self.quotes.search(query, params)
            total = await self.quotes.count_search(query)
        return quotes, total

    async def get_random_quote(self) -> QuoteWithAuthor:
        with self._operation("get random quote", "GET_RANDOM_QUOTE"):
            return await self.quotes.get_random()
