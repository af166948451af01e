"""Encoders that turn a layout tree into downloadable files."""

from resume_builder.export.docx_writer import DOCX_MEDIA_TYPE, write_docx
from resume_builder.export.engine import (
    PdfRenderer,
    RenderEngine,
    get_render_engine,
    shutdown_render_engine,
)

__all__ = [
    "DOCX_MEDIA_TYPE",
    "PdfRenderer",
    "RenderEngine",
    "get_render_engine",
    "shutdown_render_engine",
    "write_docx",
]
