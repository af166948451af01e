"""Pydantic schemas for résumé document endpoints.

``content`` and ``customization`` are accepted as plain objects and
validated by the service layer, so schema violations surface as 400
``ValidationFailed`` rather than FastAPI's generic 422.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from resume_builder.api.schemas.common import (
    PaginationMeta,
    PrivacyConsent,
    ShareSettings,
    TemplateSummary,
)


class ResumeCreateRequest(BaseModel):
    """Request schema for creating a résumé."""

    title: str | None = Field(None, description="Display title, defaults to 'Untitled Resume'")
    template_id: str | None = Field(None, description="Template reference")
    content: dict[str, Any] | None = Field(None, description="Résumé content")
    customization: dict[str, Any] | None = Field(None, description="Presentation settings")


class ResumeUpdateRequest(BaseModel):
    """Request schema for partially updating a résumé.

    All fields are optional; only provided fields are updated.
    """

    title: str | None = None
    template_id: str | None = None
    content: dict[str, Any] | None = None
    customization: dict[str, Any] | None = None


class ResumeResponse(BaseModel):
    """A résumé with its personal data decrypted."""

    id: str
    owner_id: str
    title: str
    template_id: str | None = None
    template: TemplateSummary | None = None
    content: dict[str, Any]
    customization: dict[str, Any]
    version: int
    total_versions: int = 0
    share_id: str | None = None
    is_public: bool = False
    privacy_consent: PrivacyConsent
    share_settings: ShareSettings
    created_at: datetime
    updated_at: datetime


class ResumeListItem(BaseModel):
    id: str
    title: str
    template_id: str | None = None
    template_name: str | None = None
    version: int
    is_public: bool
    created_at: datetime
    updated_at: datetime


class ResumeListResponse(BaseModel):
    data: list[ResumeListItem]
    pagination: PaginationMeta


class ResumeStatsResponse(BaseModel):
    total: int
    recent_updates: int = Field(description="Résumés updated in the last 7 days")
    downloads: int


class SectionOrderRequest(BaseModel):
    """Explicit order for an ordered section, as entry ids."""

    ordered_ids: list[str]


class EntryMoveRequest(BaseModel):
    """Move one entry, with array-move semantics."""

    old_index: int = Field(..., ge=0)
    new_index: int = Field(..., ge=0)
