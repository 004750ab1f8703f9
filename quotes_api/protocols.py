"""
Protocol classes for structural subtyping (duck typing with type safety).

The catalog service depends on these contracts, never on a concrete
storage engine. Two implementations exist: the SQLModel repositories in
quotes_api.repositories and the in-memory ones in
quotes_api.repositories.memory.

Every operation is a coroutine, so request cancellation or a deadline
aborts the outstanding storage call.

Example:
    ```python
    from quotes_api.protocols import AuthorRepositoryProtocol


    async def first_author(repo: AuthorRepositoryProtocol) -> Author:
        # Works with any repository implementation
        return await repo.get_by_id(1)
    ```
"""

from typing import Protocol, TypeVar, runtime_checkable

from quotes_api.models.author import Author
from quotes_api.models.quote import Quote
from quotes_api.schemas.author import CreateAuthorInput, UpdateAuthorInput
from quotes_api.schemas.pagination import ListParams
from quotes_api.schemas.quote import (
    CreateQuoteInput,
    QuoteWithAuthor,
    UpdateQuoteInput,
)

T = TypeVar("T", covariant=True)


@runtime_checkable
class Repository(Protocol[T]):
    """
    Operations shared by every catalog repository.

    Type Parameters:
        T: The entity type returned by reads.
    """

    async def get_by_id(self, id: int) -> T:
        """
        Get entity by primary key ID.

        Raises:
            NotFoundError: If no row has this ID.
        """
        ...

    async def get_all(self, params: ListParams) -> list[T]:
        """Get one page of entities ordered by creation (ID)."""
        ...

    async def delete(self, id: int) -> None:
        """
        Delete entity by primary key ID.

        Raises:
            NotFoundError: If no row has this ID.
        """
        ...

    async def count(self) -> int:
        """Total number of rows, ignoring pagination."""
        ...

    async def search(self, query: str, params: ListParams) -> list[T]:
        """Case-insensitive substring match on the primary text field."""
        ...

    async def count_search(self, query: str) -> int:
        """Number of rows matched by search(query) across all pages."""
        ...


@runtime_checkable
class AuthorRepositoryProtocol(Repository[Author], Protocol):
    """Data access contract for authors."""

    async def create(self, params: CreateAuthorInput) -> Author:
        """Insert an author; id and timestamps are assigned by storage."""
        ...

    async def update(self, id: int, params: UpdateAuthorInput) -> Author:
        """
        Replace an author's name and bio.

        Raises:
            NotFoundError: If no row has this ID.
        """
        ...

    async def get_by_name(self, name: str) -> Author | None:
        """Exact, case-sensitive name lookup."""
        ...


@runtime_checkable
class QuoteRepositoryProtocol(Repository[QuoteWithAuthor], Protocol):
    """Data access contract for quotes. Reads join the author's columns."""

    async def create(self, params: CreateQuoteInput) -> Quote:
        """
        Insert a quote.

        Raises:
            NotFoundError: If storage rejects the author reference.
        """
        ...

    async def update(self, id: int, params: UpdateQuoteInput) -> Quote:
        """
        Replace a quote's fields.

        Raises:
            NotFoundError: If the quote is missing or storage rejects the
                author reference.
        """
        ...

    async def list_by_author(
        self, author_id: int, params: ListParams
    ) -> list[QuoteWithAuthor]:
        """Get one page of an author's quotes ordered by ID."""
        ...

    async def count_by_author(self, author_id: int) -> int:
        """Number of quotes referencing the author."""
        ...

    async def get_random(self) -> QuoteWithAuthor:
        """
        Get a uniformly chosen quote.

        Raises:
            NotFoundError: If there are no quotes at all.
        """
        ...
