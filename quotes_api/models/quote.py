from datetime import datetime

from sqlalchemy import JSON, Column, ForeignKey, Integer
from sqlmodel import Field

from quotes_api.constants import QUOTE_SOURCE_MAX_LENGTH
from quotes_api.models.base import BaseModel, timestamp_field


class Quote(BaseModel, table=True):
    """
    SQLModel representing a quote attributed to an author.

    The author_id foreign key uses ON DELETE RESTRICT, so the database
    refuses to delete an author that is still referenced even if a
    concurrent request slipped past the service-level guard.

    Attributes:
        id: Server-assigned primary key
        content: Quote text
        author_id: Referenced author
        source: Optional origin of the quote (book, speech, ...)
        tags: Ordered list of free-form tags
        created_at: Set by the database on insert
        updated_at: Set by the database on insert and every update
    """

    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    content: str
    author_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("author.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )
    )
    source: str | None = Field(default=None, max_length=QUOTE_SOURCE_MAX_LENGTH)
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
    )
    created_at: datetime | None = timestamp_field()
    updated_at: datetime | None = timestamp_field(on_update=True)
