"""Tests for the DOCX encoder.

Documents are read back with python-docx and reduced to the same
region -> sections outline the layout tree exposes.
"""

from __future__ import annotations

from io import BytesIO

import pytest
from docx import Document
from docx.table import Table
from docx.text.paragraph import Paragraph

from resume_builder.export.docx_writer import write_docx
from resume_builder.models.template import TemplateConfig
from resume_builder.rendering import render
from resume_builder.rendering.contract import SECTION_TITLES
from resume_builder.templates import DEFAULT_TEMPLATE

_KEY_BY_TITLE = {title: key for key, title in SECTION_TITLES.items() if title}


def _section_keys(container) -> list[str]:
    keys = []
    for block in container.iter_inner_content():
        if not isinstance(block, Paragraph):
            continue
        if block.style.name == "Title":
            keys.append("personal")
        elif block.style.name == "Heading 2":
            keys.append(_KEY_BY_TITLE[block.text])
    return keys


def _open(payload: bytes):
    return Document(BytesIO(payload))


@pytest.fixture
def golden_template(layout_golden: dict) -> TemplateConfig:
    config = dict(layout_golden["template"])
    return TemplateConfig.from_config(config.pop("name"), config)


def test_linear_variants_follow_tree_order(
    layout_golden: dict, golden_template: TemplateConfig
) -> None:
    for variant in ("single-column", "timeline", "modern-blocks", "infographic", "grid"):
        tree = render(layout_golden["content"], {"layout": variant}, golden_template)

        document = _open(write_docx(tree))

        assert document.tables == []
        assert _section_keys(document) == tree.section_keys()


@pytest.mark.parametrize("variant", ["two-column", "two-column-equal"])
def test_side_by_side_variants_use_a_table(
    layout_golden: dict, golden_template: TemplateConfig, variant: str
) -> None:
    expected = [r["sections"] for r in layout_golden["variants"][variant]]
    tree = render(layout_golden["content"], {"layout": variant}, golden_template)

    document = _open(write_docx(tree))

    blocks = list(document.iter_inner_content())
    tables = [block for block in blocks if isinstance(block, Table)]
    assert len(tables) == 1
    cells = tables[0].rows[0].cells
    assert [_section_keys(cell) for cell in cells] == expected


def test_content_is_written(layout_golden: dict) -> None:
    tree = render(layout_golden["content"], {}, DEFAULT_TEMPLATE)

    text = "\n".join(p.text for p in _open(write_docx(tree)).paragraphs)

    assert "Jane Doe" in text
    assert "jane@example.com | +1 555 0100" in text
    assert "2021-03 - Present" in text
    assert "Cut batch latency by 40%" in text
    assert "Python, SQL, Kafka" in text


def test_achievements_are_bullets(layout_golden: dict) -> None:
    tree = render(layout_golden["content"], {}, DEFAULT_TEMPLATE)

    bullets = [
        p.text for p in _open(write_docx(tree)).paragraphs if p.style.name == "List Bullet"
    ]

    assert "Led migration to event streaming" in bullets


def test_theme_applied() -> None:
    tree = render(
        {"personal": {"full_name": "Jane"}, "projects": [{"name": "X"}]},
        {"font_size": 18, "primary_color": "#123456"},
        DEFAULT_TEMPLATE,
    )

    document = _open(write_docx(tree))

    heading = next(p for p in document.paragraphs if p.style.name == "Heading 2")
    assert str(heading.runs[0].font.color.rgb) == "123456"
    # 18px body scales the 20px heading to 26px, i.e. 19.5pt.
    assert heading.runs[0].font.size.pt == 19.5
    assert document.styles["Normal"].font.size.pt == 13.5


def test_empty_document_still_encodes() -> None:
    tree = render({}, {}, DEFAULT_TEMPLATE)

    document = _open(write_docx(tree))

    assert _section_keys(document) == ["personal"]
