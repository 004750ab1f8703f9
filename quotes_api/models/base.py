"""
Base model for all database tables with async relationship support.

This module provides the BaseModel class that all SQLModel table models
inherit from, plus the shared server-managed timestamp column definition.
"""

from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlmodel import Field, SQLModel


class BaseModel(SQLModel, AsyncAttrs):  # type: ignore[misc]
    """
    Base model for all database tables with async relationship support.

    Combines SQLModel with SQLAlchemy's AsyncAttrs mixin so lazy-loaded
    attributes can be awaited instead of raising MissingGreenlet errors in
    async contexts.
    """

    pass


def timestamp_field(*, on_update: bool = False) -> Any:
    """
    Build a timezone-aware timestamp column set by the database.

    The value is None until the row is flushed and refreshed, after which
    it holds the server clock at insert (and, with on_update, at every
    UPDATE).

    Args:
        on_update: Also refresh the value on every UPDATE statement.

    Returns:
        SQLModel Field definition.
    """
    column_kwargs: dict[str, Any] = {
        "server_default": func.now(),
        "nullable": False,
    }
    if on_update:
        column_kwargs["onupdate"] = func.now()

    return Field(
        default=None,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs=column_kwargs,
    )
