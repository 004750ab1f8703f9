from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, Field

from quotes_api.schemas.pagination import ListParams

T = TypeVar("T")


class PaginationMeta(BaseModel):  # type: ignore[misc]
    total: Annotated[int, Field(ge=0)]
    limit: Annotated[int, Field(ge=1)]
    offset: Annotated[int, Field(ge=0)]


class PaginatedResponse(BaseModel, Generic[T]):  # type: ignore[misc]
    data: list[T]
    meta: PaginationMeta

    @classmethod
    def build(
        cls, items: list[T], total: int, params: ListParams
    ) -> "PaginatedResponse[T]":
        return cls(
            data=items,
            meta=PaginationMeta(
                total=total, limit=params.limit, offset=params.offset
            ),
        )


class ErrorResponse(BaseModel):  # type: ignore[misc]
    """
    Error body returned by every failing endpoint.

    Attributes:
        error: HTTP reason phrase, e.g. "Not Found".
        message: Human-readable description including operation context.
        code: Stable machine-readable code, e.g. "AUTHOR_NOT_FOUND".
    """

    error: str
    message: str
    code: str
