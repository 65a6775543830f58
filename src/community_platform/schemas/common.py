"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field

# Highest page a search accepts; keeps OFFSET inside a signed 64-bit integer.
MAX_PAGE = 1_000_000


class Pagination(BaseModel):
    """Page metadata returned alongside every search result."""

    current: int = Field(..., description="Current page number (1-based)")
    limit: int = Field(..., description="Page size actually applied")
    records: int = Field(..., description="Total number of matching records")
    pages: int = Field(..., description="ceil(records / limit)")
