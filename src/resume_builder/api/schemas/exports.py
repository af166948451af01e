"""Pydantic schemas for export endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class PdfFromHtmlRequest(BaseModel):
    """Markup and stylesheet produced by the client preview."""

    html: str = ""
    css: str = ""
