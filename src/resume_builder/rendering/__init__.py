"""Rendering contract and the server-side HTML renderer."""

from resume_builder.rendering.contract import (
    LayoutTree,
    Region,
    SectionBlock,
    render,
    resolve_layout,
    resolve_section_order,
)
from resume_builder.rendering.html import RenderedMarkup, render_markup, wrap_document
from resume_builder.rendering.theme import Theme, resolve_theme, scale_font_size

__all__ = [
    "LayoutTree",
    "Region",
    "RenderedMarkup",
    "SectionBlock",
    "Theme",
    "render",
    "render_markup",
    "resolve_layout",
    "resolve_section_order",
    "resolve_theme",
    "scale_font_size",
    "wrap_document",
]
