"""Share-link routes for the API.

Owner routes live under ``/resumes/{resume_id}/share``; the public read path
is ``/resumes/share/{share_id}`` and needs no username.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi import Path as PathParam

from resume_builder.api.dependencies import get_client_ip, get_current_username
from resume_builder.api.schemas.sharing import (
    ShareCreateRequest,
    SharedResumeResponse,
    ShareResponse,
    ShareUpdateRequest,
)
from resume_builder.services.sharing import (
    generate_share_link,
    get_shared_resume,
    unpublish,
    update_share_settings,
)

router = APIRouter(prefix="/resumes", tags=["sharing"])

ResumeId = Annotated[str, PathParam(description="Resume ID")]
Username = Annotated[str, Depends(get_current_username)]
ClientIp = Annotated[str | None, Depends(get_client_ip)]


@router.post("/{resume_id}/share", response_model=ShareResponse)
def share_resume_endpoint(
    resume_id: ResumeId,
    data: ShareCreateRequest,
    current_username: Username,
    client_ip: ClientIp,
) -> ShareResponse:
    """Publish a résumé. Fails with 400 unless ``consent`` is true."""
    result = generate_share_link(
        current_username,
        resume_id,
        consent=data.consent,
        allow_download=data.allow_download,
        password=data.password,
        expires_in=data.expires_in,
        ip_address=client_ip,
    )
    return ShareResponse(**result)


@router.put("/{resume_id}/share", response_model=ShareResponse)
def update_share_endpoint(
    resume_id: ResumeId,
    data: ShareUpdateRequest,
    current_username: Username,
    client_ip: ClientIp,
) -> ShareResponse:
    changes = data.model_dump(exclude_unset=True, exclude={"consent"})
    result = update_share_settings(
        current_username, resume_id, changes, consent=data.consent, ip_address=client_ip
    )
    return ShareResponse(**result)


@router.delete("/{resume_id}/share", response_model=ShareResponse)
def unpublish_endpoint(
    resume_id: ResumeId, current_username: Username, client_ip: ClientIp
) -> ShareResponse:
    """Make a résumé private again. The share id is kept for re-publishing."""
    return ShareResponse(**unpublish(current_username, resume_id, ip_address=client_ip))


@router.get("/share/{share_id}", response_model=SharedResumeResponse)
def shared_resume_endpoint(
    share_id: Annotated[str, PathParam(description="Public share token")],
    password: Annotated[str | None, Query()] = None,
) -> SharedResumeResponse:
    """Public view: 404 if private or missing, 410 if expired, 401 on bad password."""
    return SharedResumeResponse(**get_shared_resume(share_id, password))
