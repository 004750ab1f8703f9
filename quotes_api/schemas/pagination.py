"""
Offset pagination parameters.

Out-of-range or non-numeric values coming from the query string never
produce an error: an oversized limit is clamped to MAX_PAGE_SIZE, an
offset beyond what storage accepts falls back to DEFAULT_OFFSET and
anything unparseable falls back to the default.
"""

from typing import Annotated, Self

from pydantic import BaseModel, Field

from quotes_api.constants import DEFAULT_OFFSET, MAX_OFFSET, MAX_PAGE_SIZE
from quotes_api.settings import app_settings


class ListParams(BaseModel):  # type: ignore[misc]
    """Limit/offset window over an ordered collection."""

    limit: Annotated[int, Field(ge=1, le=MAX_PAGE_SIZE)] = (
        app_settings.DEFAULT_PAGE_SIZE
    )
    offset: Annotated[int, Field(ge=0, le=MAX_OFFSET)] = DEFAULT_OFFSET

    @classmethod
    def from_query(
        cls, limit: str | None = None, offset: str | None = None
    ) -> Self:
        """
        Build parameters from raw query-string values.

        Args:
            limit: Raw "limit" value, may be missing or garbage.
            offset: Raw "offset" value, may be missing or garbage.

        Returns:
            Valid ListParams.

        Example:
            >>> ListParams.from_query("150", "-5")
            ListParams(limit=100, offset=0)
        """
        parsed_limit = _parse_int(limit)
        if parsed_limit is None or parsed_limit <= 0:
            parsed_limit = app_settings.DEFAULT_PAGE_SIZE
        parsed_limit = min(parsed_limit, MAX_PAGE_SIZE)

        parsed_offset = _parse_int(offset)
        if parsed_offset is None or not 0 <= parsed_offset <= MAX_OFFSET:
            parsed_offset = DEFAULT_OFFSET

        return cls(limit=parsed_limit, offset=parsed_offset)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None
