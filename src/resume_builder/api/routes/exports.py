"""Export routes for the API.

DOCX routes are synchronous and run in the threadpool like every other
route; PDF routes are async because they await the shared render engine.
"""

from __future__ import annotations

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response
from fastapi import Path as PathParam

from resume_builder.api.dependencies import get_current_username, get_pdf_renderer
from resume_builder.api.schemas.exports import PdfFromHtmlRequest
from resume_builder.export.engine import PdfRenderer
from resume_builder.services.export import (
    ExportResult,
    export_docx,
    export_pdf,
    export_pdf_from_html,
    export_shared_docx,
    export_shared_pdf,
)

router = APIRouter(prefix="/resumes", tags=["exports"])

ResumeId = Annotated[str, PathParam(description="Resume ID")]
ShareId = Annotated[str, PathParam(description="Public share token")]
Username = Annotated[str, Depends(get_current_username)]
Renderer = Annotated[PdfRenderer, Depends(get_pdf_renderer)]
SharePassword = Annotated[str | None, Query()]

_PDF = {200: {"content": {"application/pdf": {}}}}
_DOCX = {
    200: {
        "content": {
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document": {}
        }
    }
}


def _attachment(result: ExportResult) -> Response:
    disposition = f'attachment; filename="{result.filename}"'
    if not result.filename.isascii():
        fallback = result.filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
        disposition = (
            f'attachment; filename="{fallback}"; filename*=UTF-8\'\'{quote(result.filename)}'
        )
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": disposition},
    )


@router.get("/{resume_id}/export/pdf", responses=_PDF)
async def export_pdf_endpoint(
    resume_id: ResumeId, current_username: Username, renderer: Renderer
) -> Response:
    return _attachment(await export_pdf(current_username, resume_id, renderer))


@router.post("/{resume_id}/export/pdf-html", responses=_PDF)
async def export_pdf_from_html_endpoint(
    resume_id: ResumeId,
    data: PdfFromHtmlRequest,
    current_username: Username,
    renderer: Renderer,
) -> Response:
    """Print the exact markup the preview rendered."""
    result = await export_pdf_from_html(
        current_username, resume_id, data.html, data.css, renderer
    )
    return _attachment(result)


@router.get("/{resume_id}/export/docx", responses=_DOCX)
def export_docx_endpoint(resume_id: ResumeId, current_username: Username) -> Response:
    return _attachment(export_docx(current_username, resume_id))


@router.get("/share/{share_id}/export/pdf", responses=_PDF)
async def export_shared_pdf_endpoint(
    share_id: ShareId, renderer: Renderer, password: SharePassword = None
) -> Response:
    """Shared download: gated like the shared view, plus ``allow_download``."""
    return _attachment(await export_shared_pdf(share_id, renderer, password))


@router.get("/share/{share_id}/export/docx", responses=_DOCX)
def export_shared_docx_endpoint(share_id: ShareId, password: SharePassword = None) -> Response:
    return _attachment(export_shared_docx(share_id, password))
