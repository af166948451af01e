"""Content + customization + template -> ``LayoutTree``.

``render`` is pure.  Both the HTML renderer (preview and PDF) and the DOCX
writer walk the tree it returns, so the two outputs always agree on which
sections appear, in which order and in which region.

Every layout variant places the same set of sections: each visible section
with content appears in exactly one region.  Switching variant only moves
sections between regions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from resume_builder.models.content import ResumeContent, validate_content
from resume_builder.models.customization import (
    Customization,
    LayoutVariant,
    canonical_layout,
    validate_customization,
)
from resume_builder.models.template import DEFAULT_SECTION_ORDER, TemplateConfig
from resume_builder.rendering.theme import Theme, resolve_theme

__all__ = [
    "SECTION_TITLES",
    "LayoutTree",
    "Region",
    "SectionBlock",
    "render",
    "resolve_layout",
    "resolve_section_order",
]

SECTION_TITLES = {
    "personal": "",
    "summary": "Professional Summary",
    "experience": "Experience",
    "education": "Education",
    "skills": "Skills",
    "projects": "Projects",
    "certificates": "Certifications",
    "activities": "Activities",
}

_DEFAULT_SIDEBAR_WIDTH = "30%"
_DEFAULT_MAIN_WIDTH = "70%"


@dataclass(slots=True)
class SectionBlock:
    key: str
    title: str
    data: Any


@dataclass(slots=True)
class Region:
    name: str
    sections: list[SectionBlock] = field(default_factory=list)
    width: str | None = None

    @property
    def keys(self) -> list[str]:
        return [section.key for section in self.sections]


@dataclass(slots=True)
class LayoutTree:
    """Structural description of a rendered résumé."""

    variant: str
    theme: Theme
    regions: list[Region]
    show_photo: bool = False
    column_gap: str = "0px"

    def region(self, name: str) -> Region | None:
        for region in self.regions:
            if region.name == name:
                return region
        return None

    def section_keys(self) -> list[str]:
        """All placed sections in reading order."""
        return [key for region in self.regions for key in region.keys]

    def outline(self) -> dict[str, list[str]]:
        return {region.name: region.keys for region in self.regions}


def resolve_layout(customization: Customization, template: TemplateConfig) -> LayoutVariant:
    return (
        canonical_layout(customization.layout)
        or canonical_layout(template.layout.type)
        or LayoutVariant.SINGLE_COLUMN
    )


def _dedupe_known(keys) -> list[str]:
    seen: list[str] = []
    for key in keys or ():
        if key in SECTION_TITLES and key not in seen:
            seen.append(key)
    return seen


def resolve_section_order(template: TemplateConfig, override: list[str] | None = None) -> list[str]:
    """Return visible section keys in display order.

    An override wins over the template order.  Unknown keys are ignored and
    sections the override leaves out follow in template order.  Visibility
    always applies.
    """
    base = _dedupe_known(template.sections.order)
    base += [key for key in DEFAULT_SECTION_ORDER if key not in base]
    ordered = _dedupe_known(override)
    ordered += [key for key in base if key not in ordered]
    return [key for key in ordered if template.sections.is_visible(key)]


def _section_data(content: ResumeContent, key: str) -> Any:
    if key == "personal":
        return content.personal.model_dump(mode="json")
    if key == "summary":
        return content.personal.summary.strip() or None
    if key == "skills":
        legacy = content.skills.model_dump(mode="json")
        rated = [entry.model_dump(mode="json") for entry in content.skills_with_proficiency]
        if not rated and not any(legacy.values()):
            return None
        return {**legacy, "rated": rated}
    entries = getattr(content, key)
    return [entry.model_dump(mode="json") for entry in entries] or None


def _blocks(content: ResumeContent, order: list[str]) -> list[SectionBlock]:
    blocks = []
    for key in order:
        data = _section_data(content, key)
        if data is None:
            continue
        blocks.append(SectionBlock(key=key, title=SECTION_TITLES[key], data=data))
    return blocks


def _split(blocks: list[SectionBlock], keys: tuple[str, ...]):
    picked = [block for block in blocks if block.key in keys]
    rest = [block for block in blocks if block.key not in keys]
    return picked, rest


def _arrange(
    variant: LayoutVariant, blocks: list[SectionBlock], template: TemplateConfig
) -> list[Region]:
    if variant == LayoutVariant.TWO_COLUMN:
        positions = template.sections.config
        sidebar = [b for b in blocks if b.key in positions and positions[b.key].position == "sidebar"]
        main = [b for b in blocks if b not in sidebar]
        widths = template.layout.columns.widths
        if len(widths) >= 2:
            sidebar_width, main_width = widths[0], widths[1]
        else:
            sidebar_width, main_width = _DEFAULT_SIDEBAR_WIDTH, _DEFAULT_MAIN_WIDTH
        return [
            Region("sidebar", sidebar, sidebar_width),
            Region("main", main, main_width),
        ]

    if variant == LayoutVariant.TWO_COLUMN_EQUAL:
        middle = math.ceil(len(blocks) / 2)
        return [Region("left", blocks[:middle], "50%"), Region("right", blocks[middle:], "50%")]

    if variant == LayoutVariant.TIMELINE:
        header, rest = _split(blocks, ("personal", "summary"))
        timeline, rest = _split(rest, ("experience", "education"))
        return [Region("header", header), Region("timeline", timeline), Region("main", rest)]

    if variant == LayoutVariant.MODERN_BLOCKS:
        header, rest = _split(blocks, ("personal",))
        return [Region("header", header), Region("blocks", rest)]

    if variant == LayoutVariant.INFOGRAPHIC:
        header, rest = _split(blocks, ("personal", "summary"))
        return [Region("header", header), Region("cards", rest)]

    if variant == LayoutVariant.GRID:
        return [Region("grid", blocks)]

    return [Region("main", blocks)]


def render(
    content: ResumeContent | dict[str, Any],
    customization: Customization | dict[str, Any] | None,
    template: TemplateConfig,
    section_order: list[str] | None = None,
) -> LayoutTree:
    """Build the layout tree for a résumé.

    Args:
        content: Decrypted content.
        customization: User presentation choices.
        template: Resolved template descriptor.
        section_order: Optional user ordering; falls back to
            ``customization.section_order`` and then the template order.
    """
    content = validate_content(content)
    customization = validate_customization(customization)

    variant = resolve_layout(customization, template)
    order = resolve_section_order(template, section_order or customization.section_order)
    regions = [
        region
        for region in _arrange(variant, _blocks(content, order), template)
        if region.sections or region.name in ("main", "sidebar")
    ]

    return LayoutTree(
        variant=variant.value,
        theme=resolve_theme(customization, template),
        regions=regions,
        show_photo=bool(template.features.has_photo and content.personal.photo),
        column_gap=template.layout.columns.gap,
    )
