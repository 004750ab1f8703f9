from pydantic import BaseModel, Field

from quotes_api.constants import AUTHOR_NAME_MAX_LENGTH


class CreateAuthorInput(BaseModel):  # type: ignore[misc]
    """Input model for creating an author."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=AUTHOR_NAME_MAX_LENGTH,
        description="Author name",
    )
    bio: str | None = Field(default=None, description="Short biography")


class UpdateAuthorInput(CreateAuthorInput):  # type: ignore[misc]
    """Input model for replacing an author's fields (PUT semantics)."""
