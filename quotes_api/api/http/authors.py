"""
Author endpoints.

Each endpoint is a thin adapter: parse the request, call one
CatalogService operation, wrap the result. Errors are rendered by
handle_http_errors.
"""

from fastapi import APIRouter, Response, status

from quotes_api.dependencies import CatalogServiceDep, ListParamsDep
from quotes_api.exceptions import ValidationError
from quotes_api.models.author import Author
from quotes_api.schemas.author import CreateAuthorInput, UpdateAuthorInput
from quotes_api.schemas.response import ErrorResponse, PaginatedResponse
from quotes_api.utils.error_handler import handle_http_errors

router = APIRouter(
    prefix="/authors",
    tags=["authors"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=PaginatedResponse[Author],
    summary="List authors",
)
@handle_http_errors("LIST_AUTHORS")
async def list_authors(
    service: CatalogServiceDep, params: ListParamsDep
) -> PaginatedResponse[Author]:
    """
    Get one page of authors ordered by ID.

    Example:
        GET /authors?limit=10&offset=20
    """
    authors, total = await service.list_authors(params)
    return PaginatedResponse.build(authors, total, params)


@router.post(
    "",
    response_model=Author,
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
)
@handle_http_errors("CREATE_AUTHOR")
async def create_author(
    author_data: CreateAuthorInput, service: CatalogServiceDep
) -> Author:
    """
    Create a new author.

    Returns 400 DUPLICATE_AUTHOR_NAME if the name is already taken.

    Example:
        POST /authors
        {
            "name": "Marcus Aurelius",
            "bio": "Roman emperor"
        }
    """
    return await service.create_author(author_data)


@router.get(
    "/search",
    response_model=PaginatedResponse[Author],
    summary="Search authors by name",
)
@handle_http_errors("SEARCH_AUTHORS")
async def search_authors(
    service: CatalogServiceDep,
    params: ListParamsDep,
    q: str | None = None,
) -> PaginatedResponse[Author]:
    """
    Case-insensitive substring search on author names.

    Example:
        GET /authors/search?q=aurel
    """
    if not q or not q.strip():
        raise ValidationError("search query 'q' is required")
    authors, total = await service.search_authors(q, params)
    return PaginatedResponse.build(authors, total, params)


@router.get("/{id}", response_model=Author, summary="Get an author")
@handle_http_errors("GET_AUTHOR")
async def get_author(id: int, service: CatalogServiceDep) -> Author:
    return await service.get_author(id)


@router.put("/{id}", response_model=Author, summary="Replace an author")
@handle_http_errors("UPDATE_AUTHOR")
async def update_author(
    id: int, author_data: UpdateAuthorInput, service: CatalogServiceDep
) -> Author:
    return await service.update_author(id, author_data)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an author without quotes",
)
@handle_http_errors("DELETE_AUTHOR")
async def delete_author(id: int, service: CatalogServiceDep) -> Response:
    """
    Delete an author.

    Returns 400 AUTHOR_HAS_QUOTES while quotes still reference the author.
    """
    await service.delete_author(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
