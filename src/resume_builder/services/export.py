"""Export pipeline: a stored document to PDF or DOCX bytes.

Both formats go through the same steps.  The document is resolved (owner or
share-link gating), its personal data decrypted, its template loaded with a
fallback to ``DEFAULT_TEMPLATE``, and a ``LayoutTree`` built.  The tree is
then encoded by the DOCX writer or by the HTML renderer plus the headless
browser.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from starlette.concurrency import run_in_threadpool

from resume_builder.data.db import get_session
from resume_builder.errors import ExportFailed, ResumeError, ValidationFailed
from resume_builder.export.docx_writer import DOCX_MEDIA_TYPE, write_docx
from resume_builder.export.engine import PdfRenderer
from resume_builder.models.template import TemplateConfig
from resume_builder.rendering.contract import LayoutTree, render
from resume_builder.rendering.html import render_markup
from resume_builder.services.resume import get_owned_document, read_content, read_customization
from resume_builder.services.sharing import check_share_access, find_shared_document
from resume_builder.services.templates import load_template_config

logger = logging.getLogger(__name__)

__all__ = [
    "PDF_MEDIA_TYPE",
    "ExportResult",
    "ExportSource",
    "build_export_filename",
    "export_docx",
    "export_pdf",
    "export_pdf_from_html",
    "export_shared_docx",
    "export_shared_pdf",
    "load_owned_source",
    "load_shared_source",
]

PDF_MEDIA_TYPE = "application/pdf"
_UNSAFE_FILENAME_CHARS = re.compile(r"[\"\\/]")


@dataclass(slots=True)
class ExportSource:
    """Everything an encoder needs, with personal data already decrypted."""

    title: str
    content: dict[str, Any]
    customization: dict[str, Any]
    template: TemplateConfig

    def layout(self) -> LayoutTree:
        return render(self.content, self.customization, self.template)


@dataclass(slots=True)
class ExportResult:
    content: bytes
    filename: str
    media_type: str


def build_export_filename(content: dict[str, Any], title: str, extension: str) -> str:
    """``{full name or "Resume"}_{title}.{ext}`` with whitespace runs as underscores.

    Quotes, backslashes and slashes are dropped so the name is safe inside a
    quoted ``Content-Disposition`` parameter.
    """
    full_name = (content.get("personal") or {}).get("full_name") or "Resume"
    stem = _UNSAFE_FILENAME_CHARS.sub("", f"{full_name}_{title}")
    return re.sub(r"\s+", "_", f"{stem}.{extension}")


def load_owned_source(owner_id: str, resume_id: str) -> ExportSource:
    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        return ExportSource(
            title=doc.title,
            content=read_content(doc.content),
            customization=read_customization(doc.customization),
            template=load_template_config(session, doc.template_id),
        )


def load_shared_source(share_id: str, password: str | None) -> ExportSource:
    """Resolve a shared document for download.

    Raises:
        NotFound, Expired, Unauthorized, Forbidden: Share gating, in that order.
    """
    with get_session() as session:
        doc = find_shared_document(session, share_id)
        check_share_access(doc, password, download=True)
        return ExportSource(
            title=doc.title,
            content=read_content(doc.content),
            customization=read_customization(doc.customization),
            template=load_template_config(session, doc.template_id),
        )


def _encode_docx(source: ExportSource) -> ExportResult:
    try:
        payload = write_docx(source.layout())
    except ResumeError:
        raise
    except Exception as exc:
        logger.exception("DOCX generation failed")
        raise ExportFailed("Failed to generate DOCX file") from exc
    return ExportResult(
        content=payload,
        filename=build_export_filename(source.content, source.title, "docx"),
        media_type=DOCX_MEDIA_TYPE,
    )


async def _encode_pdf(source: ExportSource, engine: PdfRenderer) -> ExportResult:
    markup = render_markup(source.layout(), title=source.title)
    payload = await engine.html_to_pdf(markup.html, markup.css)
    return ExportResult(
        content=payload,
        filename=build_export_filename(source.content, source.title, "pdf"),
        media_type=PDF_MEDIA_TYPE,
    )


def export_docx(owner_id: str, resume_id: str) -> ExportResult:
    return _encode_docx(load_owned_source(owner_id, resume_id))


def export_shared_docx(share_id: str, password: str | None = None) -> ExportResult:
    return _encode_docx(load_shared_source(share_id, password))


async def export_pdf(owner_id: str, resume_id: str, engine: PdfRenderer) -> ExportResult:
    source = await run_in_threadpool(load_owned_source, owner_id, resume_id)
    return await _encode_pdf(source, engine)


async def export_shared_pdf(
    share_id: str, engine: PdfRenderer, password: str | None = None
) -> ExportResult:
    source = await run_in_threadpool(load_shared_source, share_id, password)
    return await _encode_pdf(source, engine)


async def export_pdf_from_html(
    owner_id: str, resume_id: str, html: str, css: str, engine: PdfRenderer
) -> ExportResult:
    """Print markup the client preview already rendered.

    The document is still loaded so ownership is checked and the file name
    matches the other export paths.
    """
    if not html or not css:
        raise ValidationFailed("HTML and CSS content are required")
    source = await run_in_threadpool(load_owned_source, owner_id, resume_id)
    payload = await engine.html_to_pdf(html, css)
    return ExportResult(
        content=payload,
        filename=build_export_filename(source.content, source.title, "pdf"),
        media_type=PDF_MEDIA_TYPE,
    )
