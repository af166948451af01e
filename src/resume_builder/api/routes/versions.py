"""Version history routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi import Path as PathParam

from resume_builder.api.dependencies import get_current_username
from resume_builder.api.schemas.versions import (
    CompareVersionsResponse,
    RestoreVersionResponse,
    SaveVersionRequest,
    SaveVersionResponse,
    VersionHistoryResponse,
)
from resume_builder.services.versions import (
    compare_versions,
    get_version_history,
    restore_version,
    save_version,
)

router = APIRouter(prefix="/resumes", tags=["versions"])

ResumeId = Annotated[str, PathParam(description="Resume ID")]
VersionRef = Annotated[str, PathParam(description="Version number or 'current'")]
Username = Annotated[str, Depends(get_current_username)]


@router.post("/{resume_id}/version", response_model=SaveVersionResponse)
def save_version_endpoint(
    resume_id: ResumeId,
    current_username: Username,
    data: SaveVersionRequest | None = None,
) -> SaveVersionResponse:
    """Snapshot the current state and bump the version number."""
    comment = data.comment if data else None
    return SaveVersionResponse(**save_version(current_username, resume_id, comment))


@router.get("/{resume_id}/versions", response_model=VersionHistoryResponse)
def version_history_endpoint(
    resume_id: ResumeId, current_username: Username
) -> VersionHistoryResponse:
    return VersionHistoryResponse(**get_version_history(current_username, resume_id))


@router.post("/{resume_id}/restore/{version}", response_model=RestoreVersionResponse)
def restore_version_endpoint(
    resume_id: ResumeId, version: VersionRef, current_username: Username
) -> RestoreVersionResponse:
    """Restore a snapshot. The state before the restore is saved first."""
    return RestoreVersionResponse(**restore_version(current_username, resume_id, version))


@router.get("/{resume_id}/compare/{v1}/{v2}", response_model=CompareVersionsResponse)
def compare_versions_endpoint(
    resume_id: ResumeId, v1: VersionRef, v2: VersionRef, current_username: Username
) -> CompareVersionsResponse:
    return CompareVersionsResponse(**compare_versions(current_username, resume_id, v1, v2))
