"""Résumé document routes for the API."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi import Path as PathParam

from resume_builder.api.dependencies import get_current_username
from resume_builder.api.schemas.common import DEFAULT_LIMIT, MAX_LIMIT
from resume_builder.api.schemas.resumes import (
    EntryMoveRequest,
    ResumeCreateRequest,
    ResumeListResponse,
    ResumeResponse,
    ResumeStatsResponse,
    ResumeUpdateRequest,
    SectionOrderRequest,
)
from resume_builder.services.resume import (
    create_resume,
    delete_resume,
    duplicate_resume,
    get_resume,
    get_resume_stats,
    list_resumes,
    move_resume_entry,
    reorder_resume_section,
    update_resume,
)

router = APIRouter(prefix="/resumes", tags=["resumes"])

ResumeId = Annotated[str, PathParam(description="Resume ID")]
Username = Annotated[str, Depends(get_current_username)]
OrderedSection = Literal["experience", "education", "projects", "certificates", "activities"]


@router.get("", response_model=ResumeListResponse)
def list_resumes_endpoint(
    current_username: Username,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_LIMIT)] = DEFAULT_LIMIT,
    sort: Annotated[Literal["updated_at", "created_at", "title"], Query()] = "updated_at",
    order: Annotated[Literal["asc", "desc"], Query()] = "desc",
    search: Annotated[str, Query(max_length=200)] = "",
) -> ResumeListResponse:
    """List the caller's résumés, newest first by default."""
    result = list_resumes(
        current_username, page=page, limit=limit, sort=sort, order=order, search=search
    )
    return ResumeListResponse(**result)


# --- /stats MUST come before /{resume_id} to avoid path conflicts ---


@router.get("/stats", response_model=ResumeStatsResponse)
def resume_stats_endpoint(current_username: Username) -> ResumeStatsResponse:
    return ResumeStatsResponse(**get_resume_stats(current_username))


@router.post("", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
def create_resume_endpoint(data: ResumeCreateRequest, current_username: Username) -> ResumeResponse:
    """Create a résumé. Returns 404/400 for an unknown/malformed template."""
    result = create_resume(
        current_username,
        title=data.title,
        template_id=data.template_id,
        content=data.content,
        customization=data.customization,
    )
    return ResumeResponse(**result)


@router.get("/{resume_id}", response_model=ResumeResponse)
def get_resume_endpoint(resume_id: ResumeId, current_username: Username) -> ResumeResponse:
    return ResumeResponse(**get_resume(current_username, resume_id))


@router.put("/{resume_id}", response_model=ResumeResponse)
def update_resume_endpoint(
    resume_id: ResumeId, data: ResumeUpdateRequest, current_username: Username
) -> ResumeResponse:
    """Partially update a résumé. An empty body is rejected with 400."""
    updates = {
        name: value
        for name, value in data.model_dump(exclude_unset=True).items()
        if value is not None or name == "template_id"
    }
    return ResumeResponse(**update_resume(current_username, resume_id, updates))


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resume_endpoint(resume_id: ResumeId, current_username: Username) -> Response:
    """Soft-delete a résumé; later calls return 404."""
    delete_resume(current_username, resume_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{resume_id}/duplicate",
    response_model=ResumeResponse,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_resume_endpoint(resume_id: ResumeId, current_username: Username) -> ResumeResponse:
    return ResumeResponse(**duplicate_resume(current_username, resume_id))


@router.put("/{resume_id}/sections/{section}/order", response_model=ResumeResponse)
def reorder_section_endpoint(
    resume_id: ResumeId,
    section: OrderedSection,
    data: SectionOrderRequest,
    current_username: Username,
) -> ResumeResponse:
    """Arrange a section by entry ids; must be a permutation of the current ids."""
    result = reorder_resume_section(current_username, resume_id, section, data.ordered_ids)
    return ResumeResponse(**result)


@router.post("/{resume_id}/sections/{section}/move", response_model=ResumeResponse)
def move_entry_endpoint(
    resume_id: ResumeId,
    section: OrderedSection,
    data: EntryMoveRequest,
    current_username: Username,
) -> ResumeResponse:
    result = move_resume_entry(
        current_username, resume_id, section, data.old_index, data.new_index
    )
    return ResumeResponse(**result)
