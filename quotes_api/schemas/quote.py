from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field

from quotes_api.constants import QUOTE_SOURCE_MAX_LENGTH
from quotes_api.models.quote import Quote


class CreateQuoteInput(BaseModel):  # type: ignore[misc]
    """Input model for creating a quote."""

    content: str = Field(..., min_length=1, description="Quote text")
    author_id: int = Field(..., ge=1, description="ID of an existing author")
    source: str | None = Field(
        default=None,
        max_length=QUOTE_SOURCE_MAX_LENGTH,
        description="Where the quote comes from",
    )
    tags: list[str] = Field(
        default_factory=list, description="Tags, kept in the given order"
    )


class UpdateQuoteInput(CreateQuoteInput):  # type: ignore[misc]
    """Input model for replacing a quote's fields (PUT semantics)."""


class QuoteWithAuthor(BaseModel):  # type: ignore[misc]
    """
    Read model joining a quote with its author's name and bio.

    Every read-side quote response uses this shape so clients never need
    a second request to display the author.
    """

    id: int
    content: str
    author_id: int
    source: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    author_name: str
    author_bio: str | None = None

    @classmethod
    def from_quote(
        cls, quote: Quote, author_name: str, author_bio: str | None
    ) -> Self:
        """Build the read model from a Quote row and its author's columns."""
        return cls(
            id=quote.id,
            content=quote.content,
            author_id=quote.author_id,
            source=quote.source,
            tags=list(quote.tags or []),
            created_at=quote.created_at,
            updated_at=quote.updated_at,
            author_name=author_name,
            author_bio=author_bio,
        )
