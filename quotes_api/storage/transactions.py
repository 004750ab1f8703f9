"""
Transaction coordinator: atomic scopes spanning both repositories.

A scope hands out an AuthorRepository and a QuoteRepository bound to the
same transaction. Leaving the scope normally commits; leaving it through
any exception, cancellation included, rolls back.

Example:
    ```python
    coordinator = SqlTransactionCoordinator(async_session)

    async with coordinator.begin() as tx:
        author = await tx.authors.get_by_id(author_id)
        quote = await tx.quotes.create(params)
    ```
"""

import abc
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, TypeVar

from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from quotes_api.logging import logger
from quotes_api.protocols import (
    AuthorRepositoryProtocol,
    QuoteRepositoryProtocol,
)
from quotes_api.repositories.author_repository import AuthorRepository
from quotes_api.repositories.quote_repository import QuoteRepository

R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class TransactionScope:
    """Repositories bound to one transaction."""

    authors: AuthorRepositoryProtocol
    quotes: QuoteRepositoryProtocol


class TransactionCoordinator(abc.ABC):
    """Contract for atomic multi-repository execution scopes."""

    @abc.abstractmethod
    def begin(self) -> AbstractAsyncContextManager[TransactionScope]:
        """Open a transaction and yield its transaction-bound repositories."""

    async def run(self, work: Callable[[TransactionScope], Awaitable[R]]) -> R:
        """
        Execute a unit of work atomically.

        Args:
            work: Coroutine function receiving the transaction scope.

        Returns:
            Whatever work returns, after the commit succeeded.
        """
        async with self.begin() as tx:
            return await work(tx)


class SqlTransactionCoordinator(TransactionCoordinator):
    """
    Transaction coordinator backed by SQLAlchemy sessions.

    Each scope gets its own session (and therefore its own pooled
    connection), which is always closed on exit.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Args:
            session_factory: Factory producing AsyncSession instances.
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[TransactionScope]:
        async with self.session_factory() as session:
            try:
                yield TransactionScope(
                    authors=AuthorRepository(session),
                    quotes=QuoteRepository(session),
                )
                await session.commit()
            except BaseException as ex:
                await session.rollback()
                logger.debug(f"Transaction rolled back: {ex!r}")
                raise
