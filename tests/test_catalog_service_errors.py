"""
Tests for CatalogService failure surfacing.

Repositories are replaced with mocks so storage failures, cancellation
and logging can be triggered deterministically.
"""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from quotes_api.exceptions import (
    ConflictError,
    DependencyFailure,
    NotFoundError,
)
from quotes_api.protocols import (
    AuthorRepositoryProtocol,
    QuoteRepositoryProtocol,
)
from quotes_api.repositories.memory import InMemoryTransactionCoordinator
from quotes_api.schemas.author import CreateAuthorInput
from quotes_api.schemas.pagination import ListParams
from quotes_api.services.catalog_service import CatalogService
from quotes_api.storage.transactions import TransactionScope


@pytest.fixture
def mock_authors():
    return AsyncMock(spec=AuthorRepositoryProtocol)


@pytest.fixture
def mock_quotes():
    return AsyncMock(spec=QuoteRepositoryProtocol)


@pytest.fixture
def mock_logger():
    return MagicMock()


@pytest.fixture
def mock_service(mock_authors, mock_quotes, mock_logger, store):
    """Service whose repositories are mocks, also inside transactions."""
    coordinator = InMemoryTransactionCoordinator(store)
    scope = TransactionScope(authors=mock_authors, quotes=mock_quotes)

    @asynccontextmanager
    async def begin():
        yield scope

    coordinator.begin = begin
    return CatalogService(
        mock_authors, mock_quotes, coordinator, logger=mock_logger
    )


def db_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestDependencyFailures:
    """Storage errors become DependencyFailure with an operation code."""

    @pytest.mark.asyncio
    async def test_read_failure(self, mock_service, mock_authors, mock_logger):
        mock_authors.count.side_effect = db_error()

        with pytest.raises(DependencyFailure) as exc_info:
            await mock_service.list_authors(ListParams())

        assert exc_info.value.code == "LIST_AUTHORS_ERROR"
        assert exc_info.value.message.startswith("failed to list authors: ")
        assert exc_info.value.http_status == 500
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_write_failure(self, mock_service, mock_authors):
        mock_authors.get_by_name.return_value = None
        mock_authors.create.side_effect = db_error()

        with pytest.raises(DependencyFailure) as exc_info:
            await mock_service.create_author(CreateAuthorInput(name="X"))

        assert exc_info.value.code == "CREATE_AUTHOR_ERROR"

    @pytest.mark.asyncio
    async def test_connection_error(self, mock_service, mock_quotes):
        mock_quotes.get_random.side_effect = ConnectionRefusedError("refused")

        with pytest.raises(DependencyFailure) as exc_info:
            await mock_service.get_random_quote()

        assert exc_info.value.code == "GET_RANDOM_QUOTE_ERROR"

    @pytest.mark.asyncio
    async def test_cause_is_preserved(self, mock_service, mock_quotes):
        error = db_error()
        mock_quotes.search.side_effect = error

        with pytest.raises(DependencyFailure) as exc_info:
            await mock_service.search_quotes("x", ListParams())

        assert exc_info.value.__cause__ is error


class TestErrorKindPreserved:
    """Domain errors keep class and code, gaining operation context."""

    @pytest.mark.asyncio
    async def test_not_found_stays_not_found(
        self, mock_service, mock_quotes, mock_logger
    ):
        mock_quotes.get_by_id.side_effect = NotFoundError(
            "quote not found", code="QUOTE_NOT_FOUND"
        )

        with pytest.raises(NotFoundError) as exc_info:
            await mock_service.get_quote(1)

        assert exc_info.value.code == "QUOTE_NOT_FOUND"
        assert exc_info.value.message == "failed to get quote: quote not found"
        mock_logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_guard_skips_storage_delete(
        self, mock_service, mock_authors, mock_quotes
    ):
        mock_quotes.list_by_author.return_value = [MagicMock()]

        with pytest.raises(ConflictError) as exc_info:
            await mock_service.delete_author(1)

        assert exc_info.value.code == "AUTHOR_HAS_QUOTES"
        mock_authors.delete.assert_not_called()
        args = mock_quotes.list_by_author.call_args.args
        assert args[0] == 1
        assert args[1].limit == 1


class TestCancellation:
    """Cancellation passes through the service untouched."""

    @pytest.mark.asyncio
    async def test_cancelled_error_propagates(
        self, mock_service, mock_authors, mock_logger
    ):
        mock_authors.get_by_id.side_effect = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await mock_service.get_author(1)

        mock_logger.error.assert_not_called()


class TestDefaultLogger:
    def test_falls_back_to_application_logger(
        self, mock_authors, mock_quotes, coordinator
    ):
        service = CatalogService(mock_authors, mock_quotes, coordinator)

        assert service.logger.name == "quotes_api"
