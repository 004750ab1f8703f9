"""
In-memory repositories and transaction coordinator.

These implement the same contracts as the SQLModel repositories over a
plain dictionary store. They back the service and HTTP tests and are handy
for local experiments without PostgreSQL.

The store mimics the schema constraints: quotes must reference an existing
author and an author with quotes cannot be deleted.
"""

import asyncio
import copy
import random
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, AsyncIterator

from quotes_api.exceptions import ConflictError, NotFoundError
from quotes_api.models.author import Author
from quotes_api.models.quote import Quote
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


@dataclass
class InMemoryStore:
    """Rows keyed by ID, kept in insertion (= ID) order."""

    authors: dict[int, dict[str, Any]] = field(default_factory=dict)
    quotes: dict[int, dict[str, Any]] = field(default_factory=dict)
    next_author_id: int = 1
    next_quote_id: int = 1

    def snapshot(self) -> "InMemoryStore":
        return copy.deepcopy(self)

    def restore(self, snapshot: "InMemoryStore") -> None:
        self.authors = snapshot.authors
        self.quotes = snapshot.quotes
        self.next_author_id = snapshot.next_author_id
        self.next_quote_id = snapshot.next_quote_id


def _now() -> datetime:
    return datetime.now(UTC)


def _page(rows: list[Any], params: ListParams) -> list[Any]:
    return rows[params.offset : params.offset + params.limit]


def _matches(text: str, query: str) -> bool:
    return query.casefold() in text.casefold()


class InMemoryAuthorRepository:
    """AuthorRepositoryProtocol over an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def _row(self, id: int) -> dict[str, Any]:
        row = self.store.authors.get(id)
        if row is None:
            raise NotFoundError("author not found", code="AUTHOR_NOT_FOUND")
        return row

    async def create(self, params: CreateAuthorInput) -> Author:
        now = _now()
        id = self.store.next_author_id
        self.store.next_author_id += 1
        self.store.authors[id] = {
            "id": id,
            "name": params.name,
            "bio": params.bio,
            "created_at": now,
            "updated_at": now,
        }
        return Author(**self.store.authors[id])

    async def get_by_id(self, id: int) -> Author:
        return Author(**self._row(id))

    async def get_by_name(self, name: str) -> Author | None:
        for row in self.store.authors.values():
            if row["name"] == name:
                return Author(**row)
        return None

    async def get_all(self, params: ListParams) -> list[Author]:
        rows = list(self.store.authors.values())
        return [Author(**row) for row in _page(rows, params)]

    async def update(self, id: int, params: UpdateAuthorInput) -> Author:
        row = self._row(id)
        row.update(name=params.name, bio=params.bio, updated_at=_now())
        return Author(**row)

    async def delete(self, id: int) -> None:
        self._row(id)
        if any(q["author_id"] == id for q in self.store.quotes.values()):
            raise ConflictError(
                "cannot delete author with existing quotes",
                code="AUTHOR_HAS_QUOTES",
            )
        del self.store.authors[id]

    async def count(self) -> int:
        return len(self.store.authors)

    def _search_rows(self, query: str) -> list[dict[str, Any]]:
        return [
            row
            for row in self.store.authors.values()
            if _matches(row["name"], query)
        ]

    async def search(self, query: str, params: ListParams) -> list[Author]:
        return [Author(**row) for row in _page(self._search_rows(query), params)]

    async def count_search(self, query: str) -> int:
        return len(self._search_rows(query))


class InMemoryQuoteRepository:
    """QuoteRepositoryProtocol over an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def _row(self, id: int) -> dict[str, Any]:
        row = self.store.quotes.get(id)
        if row is None:
            raise NotFoundError("quote not found", code="QUOTE_NOT_FOUND")
        return row

    def _require_author(self, author_id: int) -> None:
        if author_id not in self.store.authors:
            raise NotFoundError("author not found", code="AUTHOR_NOT_FOUND")

    def _with_author(self, row: dict[str, Any]) -> QuoteWithAuthor:
        author = self.store.authors[row["author_id"]]
        return QuoteWithAuthor(
            **copy.deepcopy(row),
            author_name=author["name"],
            author_bio=author["bio"],
        )

    async def create(self, params: CreateQuoteInput) -> Quote:
        self._require_author(params.author_id)
        now = _now()
        id = self.store.next_quote_id
        self.store.next_quote_id += 1
        self.store.quotes[id] = {
            "id": id,
            "content": params.content,
            "author_id": params.author_id,
            "source": params.source,
            "tags": list(params.tags),
            "created_at": now,
            "updated_at": now,
        }
        return Quote(**copy.deepcopy(self.store.quotes[id]))

    async def get_by_id(self, id: int) -> QuoteWithAuthor:
        return self._with_author(self._row(id))

    async def get_all(self, params: ListParams) -> list[QuoteWithAuthor]:
        rows = list(self.store.quotes.values())
        return [self._with_author(row) for row in _page(rows, params)]

    def _author_rows(self, author_id: int) -> list[dict[str, Any]]:
        return [
            row
            for row in self.store.quotes.values()
            if row["author_id"] == author_id
        ]

    async def list_by_author(
        self, author_id: int, params: ListParams
    ) -> list[QuoteWithAuthor]:
        rows = self._author_rows(author_id)
        return [self._with_author(row) for row in _page(rows, params)]

    async def count_by_author(self, author_id: int) -> int:
        return len(self._author_rows(author_id))

    async def update(self, id: int, params: UpdateQuoteInput) -> Quote:
        row = self._row(id)
        self._require_author(params.author_id)
        row.update(
            content=params.content,
            author_id=params.author_id,
            source=params.source,
            tags=list(params.tags),
            updated_at=_now(),
        )
        return Quote(**copy.deepcopy(row))

    async def delete(self, id: int) -> None:
        self._row(id)
        del self.store.quotes[id]

    async def count(self) -> int:
        return len(self.store.quotes)

    def _search_rows(self, query: str) -> list[dict[str, Any]]:
        return [
            row
            for row in self.store.quotes.values()
            if _matches(row["content"], query)
        ]

    async def search(
        self, query: str, params: ListParams
    ) -> list[QuoteWithAuthor]:
        rows = _page(self._search_rows(query), params)
        return [self._with_author(row) for row in rows]

    async def count_search(self, query: str) -> int:
        return len(self._search_rows(query))

    async def get_random(self) -> QuoteWithAuthor:
        if not self.store.quotes:
            raise NotFoundError("no quotes found", code="NO_QUOTES_FOUND")
        return self._with_author(random.choice(list(self.store.quotes.values())))


class InMemoryTransactionCoordinator(TransactionCoordinator):
    """
    Transaction coordinator over an InMemoryStore.

    Scopes are serialized with a lock; the store is snapshotted on entry
    and restored if the scope exits with an exception.
    """

    def __init__(self, store: InMemoryStore):
        self.store = store
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[TransactionScope]:
        async with self._lock:
            snapshot = self.store.snapshot()
            try:
                yield TransactionScope(
                    authors=InMemoryAuthorRepository(self.store),
                    quotes=InMemoryQuoteRepository(self.store),
                )
            except BaseException:
                self.store.restore(snapshot)
                raise
