"""Pydantic schemas for share-link endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from resume_builder.api.schemas.common import PrivacyConsent, ShareSettings, TemplateSummary


class ShareCreateRequest(BaseModel):
    """Publish a résumé. ``consent`` must be true."""

    # Anything but a literal true is refused with ConsentRequired.
    consent: Any = Field(False, description="Explicit consent to make the résumé public")
    allow_download: bool = True
    password: str | None = None
    expires_in: float | None = Field(
        None, allow_inf_nan=False, description="Lifetime of the link in days"
    )


class ShareUpdateRequest(BaseModel):
    """Partial update of the share state; only provided fields change."""

    is_public: bool | None = None
    allow_download: bool | None = None
    password: str | None = None
    expires_in: float | None = Field(None, allow_inf_nan=False)
    consent: Any = False


class ShareResponse(BaseModel):
    share_id: str | None = None
    share_url: str | None = None
    is_public: bool
    settings: ShareSettings
    privacy_consent: PrivacyConsent


class SharedResumeResponse(BaseModel):
    """Public view of a shared résumé."""

    title: str
    content: dict[str, Any]
    customization: dict[str, Any]
    template: TemplateSummary | None = None
    allow_download: bool
    view_count: int
    created_at: datetime
    updated_at: datetime
