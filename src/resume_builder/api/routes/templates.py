"""Template catalog routes for the API."""

from __future__ import annotations

from fastapi import APIRouter

from resume_builder.api.schemas.common import TemplateSummary
from resume_builder.services.templates import list_stored_templates

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=list[TemplateSummary])
def list_templates_endpoint() -> list[TemplateSummary]:
    """List the templates documents can reference."""
    return [TemplateSummary(**item) for item in list_stored_templates()]
