"""Pydantic schemas for version history endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from resume_builder.api.schemas.common import TemplateSummary


class SaveVersionRequest(BaseModel):
    comment: str | None = Field(None, description="Defaults to 'Version {n}'")


class SaveVersionResponse(BaseModel):
    current_version: int
    saved_version: int
    comment: str
    total_versions: int


class VersionSummary(BaseModel):
    version: int
    comment: str | None = None
    created_at: datetime | None = None


class VersionHistoryResponse(BaseModel):
    current_version: int
    versions: list[VersionSummary]


class RestoreVersionResponse(BaseModel):
    current_version: int
    restored_version: int
    content: dict[str, Any]
    customization: dict[str, Any]


class VersionDetail(BaseModel):
    version: int
    content: dict[str, Any]
    customization: dict[str, Any]
    created_at: datetime | None = None


class CompareVersionsResponse(BaseModel):
    version1: VersionDetail
    version2: VersionDetail
    template: TemplateSummary | None = None
