"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for the in-memory catalog, mocked
database sessions and an HTTP test client.
"""

import logging
import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Database credentials must exist before importing quotes_api modules
os.environ.setdefault("DB_USER", "test-user")
os.environ.setdefault("DB_PASSWORD", "test-password")

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from quotes_api.repositories.memory import (  # noqa: E402
    InMemoryAuthorRepository,
    InMemoryQuoteRepository,
    InMemoryStore,
    InMemoryTransactionCoordinator,
)
from quotes_api.schemas.author import CreateAuthorInput  # noqa: E402
from quotes_api.schemas.quote import CreateQuoteInput  # noqa: E402
from quotes_api.services.catalog_service import CatalogService  # noqa: E402


@pytest.fixture
def store():
    """Empty in-memory store shared by repositories and coordinator."""
    return InMemoryStore()


@pytest.fixture
def author_repo(store):
    return InMemoryAuthorRepository(store)


@pytest.fixture
def quote_repo(store):
    return InMemoryQuoteRepository(store)


@pytest.fixture
def coordinator(store):
    return InMemoryTransactionCoordinator(store)


@pytest.fixture
def service(author_repo, quote_repo, coordinator):
    """
    Provides a CatalogService over the in-memory store.

    Returns:
        CatalogService: Service with an injected test logger.
    """
    return CatalogService(
        author_repo,
        quote_repo,
        coordinator,
        logger=logging.getLogger("tests.catalog"),
    )


@pytest.fixture
def make_author(service):
    """Factory creating an author through the service."""

    async def factory(name: str = "Seneca", bio: str | None = None):
        return await service.create_author(CreateAuthorInput(name=name, bio=bio))

    return factory


@pytest.fixture
def make_quote(service):
    """Factory creating a quote through the service."""

    async def factory(
        author_id: int,
        content: str = "Luck is what happens when preparation meets opportunity.",
        tags: list[str] | None = None,
    ):
        return await service.create_quote(
            CreateQuoteInput(
                content=content, author_id=author_id, tags=tags or []
            )
        )

    return factory


@pytest.fixture
def mock_session():
    """
    Provides a mock AsyncSession for testing.

    Returns:
        AsyncMock: Mocked database session
    """
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.commit = AsyncMock()
    session.exec = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def exec_result():
    """Factory building a MagicMock that mimics the result of session.exec()."""

    def factory(*, first=None, one=None, all=None):
        result = MagicMock()
        result.first.return_value = first
        result.one.return_value = one
        result.all.return_value = all if all is not None else []
        return result

    return factory


@pytest.fixture
def client(service):
    """
    Create a test client whose catalog service is the in-memory one.

    The lifespan is not entered, so no database is touched.

    Returns:
        TestClient: FastAPI test client instance.
    """
    from quotes_api import app
    from quotes_api.dependencies import get_catalog_service

    app.dependency_overrides[get_catalog_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
