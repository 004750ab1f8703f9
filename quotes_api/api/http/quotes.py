"""
Quote endpoints.

Literal paths (/search, /random) are declared before /{id} so they are
not captured as IDs.
"""

from fastapi import APIRouter, Response, status

from quotes_api.dependencies import CatalogServiceDep, ListParamsDep
from quotes_api.exceptions import ValidationError
from quotes_api.models.quote import Quote
from quotes_api.schemas.quote import (
    CreateQuoteInput,
    QuoteWithAuthor,
    UpdateQuoteInput,
)
from quotes_api.schemas.response import ErrorResponse, PaginatedResponse
from quotes_api.utils.error_handler import handle_http_errors

router = APIRouter(
    prefix="/quotes",
    tags=["quotes"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


def _parse_author_id(raw: str) -> int:
    """Numeric IDs pass through; unknown ones end up as AUTHOR_NOT_FOUND."""
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(
            "author_id must be an integer", code="INVALID_AUTHOR_ID"
        ) from None


@router.get(
    "",
    response_model=PaginatedResponse[QuoteWithAuthor],
    summary="List quotes",
)
@handle_http_errors("LIST_QUOTES")
async def list_quotes(
    service: CatalogServiceDep,
    params: ListParamsDep,
    author_id: str | None = None,
) -> PaginatedResponse[QuoteWithAuthor]:
    """
    Get one page of quotes, optionally only those of one author.

    Example:
        GET /quotes?limit=5
        GET /quotes?author_id=3

    An empty author_id is the same as no filter.
    """
    if author_id:
        quotes, total = await service.list_quotes_by_author(
            _parse_author_id(author_id), params
        )
    else:
        quotes, total = await service.list_quotes(params)
    return PaginatedResponse.build(quotes, total, params)


@router.post(
    "",
    response_model=Quote,
    status_code=status.HTTP_201_CREATED,
    summary="Create a quote",
)
@handle_http_errors("CREATE_QUOTE")
async def create_quote(
    quote_data: CreateQuoteInput, service: CatalogServiceDep
) -> Quote:
    """
    Create a quote for an existing author.

    Returns 404 AUTHOR_NOT_FOUND if author_id does not exist.

    Example:
        POST /quotes
        {
            "content": "Waste no more time arguing what a good man should be.",
            "author_id": 1,
            "source": "Meditations",
            "tags": ["virtue"]
        }
    """
    return await service.create_quote(quote_data)


@router.get(
    "/search",
    response_model=PaginatedResponse[QuoteWithAuthor],
    summary="Search quotes by content",
)
@handle_http_errors("SEARCH_QUOTES")
async def search_quotes(
    service: CatalogServiceDep,
    params: ListParamsDep,
    q: str | None = None,
) -> PaginatedResponse[QuoteWithAuthor]:
    if not q or not q.strip():
        raise ValidationError("search query 'q' is required")
    quotes, total = await service.search_quotes(q, params)
    return PaginatedResponse.build(quotes, total, params)


@router.get(
    "/random", response_model=QuoteWithAuthor, summary="Get a random quote"
)
@handle_http_errors("GET_RANDOM_QUOTE")
async def get_random_quote(service: CatalogServiceDep) -> QuoteWithAuthor:
    return await service.get_random_quote()


@router.get("/{id}", response_model=QuoteWithAuthor, summary="Get a quote")
@handle_http_errors("GET_QUOTE")
async def get_quote(id: int, service: CatalogServiceDep) -> QuoteWithAuthor:
    return await service.get_quote(id)


@router.put("/{id}", response_model=Quote, summary="Replace a quote")
@handle_http_errors("UPDATE_QUOTE")
async def update_quote(
    id: int, quote_data: UpdateQuoteInput, service: CatalogServiceDep
) -> Quote:
    return await service.update_quote(id, quote_data)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a quote",
)
@handle_http_errors("DELETE_QUOTE")
async def delete_quote(id: int, service: CatalogServiceDep) -> Response:
    await service.delete_quote(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
