"""
Dependency injection configuration for FastAPI.

This module provides the database session, the catalog service and the
pagination parameters to endpoints. Tests replace the service with an
in-memory one through app.dependency_overrides.

Example:
    ```python
    from fastapi import APIRouter
    from quotes_api.dependencies import CatalogServiceDep, ListParamsDep

    router = APIRouter()

    @router.get("/authors")
    async def list_authors(service: CatalogServiceDep, params: ListParamsDep):
        authors, total = await service.list_authors(params)
        return PaginatedResponse.build(authors, total, params)
    ```
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from quotes_api.logging import logger
from quotes_api.repositories.author_repository import AuthorRepository
from quotes_api.repositories.quote_repository import QuoteRepository
from quotes_api.schemas.pagination import ListParams
from quotes_api.services.catalog_service import CatalogService
from quotes_api.storage.db import async_session, get_session
from quotes_api.storage.transactions import SqlTransactionCoordinator

# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# Service Dependencies
# ============================================================================


def get_catalog_service(session: SessionDep) -> CatalogService:
    """
    Build the catalog service for one request.

    Plain reads go through the request session; compound writes open
    their own transaction scopes from the session factory.

    Returns:
        CatalogService backed by PostgreSQL.
    """
    return CatalogService(
        AuthorRepository(session),
        QuoteRepository(session),
        SqlTransactionCoordinator(async_session),
        logger=logger,
    )


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


# ============================================================================
# Pagination Dependencies
# ============================================================================


def get_list_params(
    limit: str | None = None, offset: str | None = None
) -> ListParams:
    """
    Parse limit/offset query parameters leniently.

    Query values are taken as strings so garbage falls back to defaults
    instead of failing validation.
    """
    return ListParams.from_query(limit, offset)


ListParamsDep = Annotated[ListParams, Depends(get_list_params)]
