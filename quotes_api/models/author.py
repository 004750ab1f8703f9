from datetime import datetime

from sqlmodel import Field

from quotes_api.constants import AUTHOR_NAME_MAX_LENGTH
from quotes_api.models.base import BaseModel, timestamp_field


class Author(BaseModel, table=True):
    """
    SQLModel representing an author entity in the database.

    This is a clean data model without Active Record methods.
    Use AuthorRepository for all database operations.

    Names are unique by business rule only; the catalog service checks
    for duplicates before writing, the schema does not.

    Attributes:
        id: Server-assigned primary key
        name: Display name of the author
        bio: Optional biography
        created_at: Set by the database on insert
        updated_at: Set by the database on insert and every update
    """

    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=AUTHOR_NAME_MAX_LENGTH)
    bio: str | None = Field(default=None)
    created_at: datetime | None = timestamp_field()
    updated_at: datetime | None = timestamp_field(on_update=True)
