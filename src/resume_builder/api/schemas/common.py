"""Shared Pydantic schemas for API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# Default pagination values
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class PaginationMeta(BaseModel):
    """Pagination metadata for list responses."""

    total: int = Field(description="Total number of items available")
    page: int = Field(description="Current page, starting at 1")
    limit: int = Field(description="Maximum number of items per page")
    total_pages: int = Field(description="Number of pages at this limit")


class TemplateSummary(BaseModel):
    id: str
    name: str
    category: str | None = None
    color: str | None = None
    gradient: str | None = None


class PrivacyConsent(BaseModel):
    given: bool = False
    given_at: datetime | None = None
    ip_address: str | None = None


class ShareSettings(BaseModel):
    allow_download: bool = True
    has_password: bool = False
    expires_at: datetime | None = None
    view_count: int = 0
