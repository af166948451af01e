"""DOCX encoder for a ``LayoutTree``.

Sections are written in tree order.  Side-by-side variants (two-column and
two-column-equal) become a one-row table with one cell per region; every
other variant is written top to bottom.  Section titles use the
``Heading 2`` style and the name uses ``Title``, so the document outline
mirrors the tree.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from docx import Document
from docx.enum.section import WD_ORIENT
from docx.shared import Emu, Inches, Pt, RGBColor

from resume_builder.rendering.contract import LayoutTree, Region, SectionBlock
from resume_builder.rendering.theme import Theme

logger = logging.getLogger(__name__)

__all__ = ["DOCX_MEDIA_TYPE", "write_docx"]

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_SIDE_BY_SIDE = ("two-column", "two-column-equal")
_A4_WIDTH_INCHES = 8.27
_SKILL_GROUPS = (("technical", "Technical"), ("soft", "Soft Skills"), ("languages", "Languages"))


def _pt(px: float) -> Pt:
    # CSS px to points, rounded to the half point Word stores.
    return Pt(round(px * 0.75 * 2) / 2)


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor.from_string(hex_color.lstrip("#").upper())


def _percent(width: str | None, default: float) -> float:
    if not width or not width.endswith("%"):
        return default
    try:
        return float(width[:-1]) / 100
    except ValueError:
        return default


def _dates(entry: dict[str, Any]) -> str:
    start = entry.get("start_date") or ""
    end = "Present" if entry.get("current") else entry.get("end_date") or ""
    if start and end:
        return f"{start} - {end}"
    return start or end


class _SectionWriter:
    """Writes section blocks into a document or a table cell."""

    def __init__(self, container, theme: Theme) -> None:
        self.container = container
        self.theme = theme

    def write(self, block: SectionBlock) -> None:
        if block.key == "personal":
            self._personal(block.data)
            return
        heading = self.container.add_paragraph(block.title, style="Heading 2")
        for run in heading.runs:
            run.font.color.rgb = _rgb(self.theme.primary)
            run.font.name = self.theme.heading_font
            run.font.size = _pt(self.theme.font_sizes["heading"])
        getattr(self, f"_{block.key}")(block.data)

    def _line(self, text: str, *, bold: bool = False, light: bool = False, size: str = "body"):
        paragraph = self.container.add_paragraph()
        run = paragraph.add_run(text)
        run.bold = bold
        run.font.size = _pt(self.theme.font_sizes[size])
        if light:
            run.font.color.rgb = _rgb(self.theme.text_light)
        return paragraph

    def _entry_head(self, title: str, when: str) -> None:
        paragraph = self._line(title, bold=True, size="subheading")
        if when:
            run = paragraph.add_run(f"  {when}")
            run.font.size = _pt(self.theme.font_sizes["small"])
            run.font.color.rgb = _rgb(self.theme.text_light)

    def _bullets(self, items: list[str]) -> None:
        for item in items:
            if item:
                self.container.add_paragraph(item, style="List Bullet")

    def _personal(self, data: dict[str, Any]) -> None:
        name = self.container.add_paragraph(data.get("full_name") or "", style="Title")
        for run in name.runs:
            run.font.size = _pt(self.theme.font_sizes["name"])
            run.font.color.rgb = _rgb(self.theme.primary)
        contact = [
            data.get(field)
            for field in ("email", "phone", "location", "linkedin", "website")
            if data.get(field)
        ]
        if contact:
            self._line(" | ".join(contact), light=True, size="small")

    def _summary(self, text: str) -> None:
        self._line(text, size="large")

    def _experience(self, entries: list[dict[str, Any]]) -> None:
        for entry in entries:
            self._entry_head(entry.get("job_title", ""), _dates(entry))
            sub = ", ".join(part for part in (entry.get("company"), entry.get("location")) if part)
            if sub:
                self._line(sub, light=True, size="small")
            if entry.get("description"):
                self._line(entry["description"])
            self._bullets(entry.get("achievements") or [])
            self._bullets(
                [
                    f"{metric.get('value', '')} {metric.get('description', '')}".strip()
                    for metric in entry.get("metrics") or []
                ]
            )

    def _education(self, entries: list[dict[str, Any]]) -> None:
        for entry in entries:
            self._entry_head(entry.get("degree", ""), _dates(entry))
            sub = ", ".join(part for part in (entry.get("school"), entry.get("location")) if part)
            if entry.get("gpa"):
                sub = f"{sub} - GPA {entry['gpa']}" if sub else f"GPA {entry['gpa']}"
            if sub:
                self._line(sub, light=True, size="small")
            if entry.get("description"):
                self._line(entry["description"])

    def _projects(self, entries: list[dict[str, Any]]) -> None:
        for entry in entries:
            self._entry_head(entry.get("name", ""), _dates(entry))
            if entry.get("technologies"):
                self._line(entry["technologies"], light=True, size="small")
            if entry.get("description"):
                self._line(entry["description"])
            if entry.get("link"):
                self._line(entry["link"], light=True, size="small")

    def _certificates(self, entries: list[dict[str, Any]]) -> None:
        for entry in entries:
            self._entry_head(entry.get("name", ""), entry.get("date", ""))
            if entry.get("issuer"):
                self._line(entry["issuer"], light=True, size="small")
            if entry.get("description"):
                self._line(entry["description"])

    def _activities(self, entries: list[dict[str, Any]]) -> None:
        for entry in entries:
            self._entry_head(entry.get("title", ""), _dates(entry))
            if entry.get("organization"):
                self._line(entry["organization"], light=True, size="small")
            if entry.get("description"):
                self._line(entry["description"])

    def _skills(self, data: dict[str, Any]) -> None:
        rated = data.get("rated") or []
        if rated:
            self._line(
                ", ".join(f"{skill['name']} ({skill['proficiency']}/5)" for skill in rated)
            )
        for group, label in _SKILL_GROUPS:
            if data.get(group):
                paragraph = self.container.add_paragraph()
                label_run = paragraph.add_run(f"{label}: ")
                label_run.bold = True
                paragraph.add_run(", ".join(data[group]))


def _write_regions(container, regions: list[Region], theme: Theme) -> None:
    writer = _SectionWriter(container, theme)
    for region in regions:
        for block in region.sections:
            writer.write(block)


def write_docx(tree: LayoutTree) -> bytes:
    """Encode *tree* as a DOCX file and return its bytes."""
    theme = tree.theme
    document = Document()

    normal = document.styles["Normal"]
    normal.font.name = theme.body_font
    normal.font.size = _pt(theme.font_sizes["body"])
    normal.font.color.rgb = _rgb(theme.text)

    section = document.sections[0]
    section.orientation = WD_ORIENT.PORTRAIT
    section.page_width = Inches(_A4_WIDTH_INCHES)
    section.page_height = Inches(11.69)
    margin = _pt(theme.margins)
    section.left_margin = section.right_margin = margin
    section.top_margin = section.bottom_margin = margin

    if tree.variant in _SIDE_BY_SIDE and len(tree.regions) == 2:
        usable = section.page_width - section.left_margin - section.right_margin
        table = document.add_table(rows=1, cols=2)
        table.autofit = False
        defaults = (0.3, 0.7) if tree.variant == "two-column" else (0.5, 0.5)
        for cell, region, default in zip(table.rows[0].cells, tree.regions, defaults, strict=True):
            cell.width = Emu(int(usable * _percent(region.width, default)))
            _write_regions(cell, [region], theme)
    else:
        _write_regions(document, tree.regions, theme)

    buffer = io.BytesIO()
    document.save(buffer)
    logger.debug("Encoded DOCX with sections %s", tree.section_keys())
    return buffer.getvalue()
