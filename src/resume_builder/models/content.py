"""Canonical résumé content schema.

``ResumeContent`` is the versionable body of a document.  Every entry inside
an ordered section carries a client-assigned ``id`` that survives
reordering; reordering is always a permutation of those ids.
"""

from __future__ import annotations

import uuid
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from resume_builder.errors import ValidationFailed

__all__ = [
    "ORDERED_SECTIONS",
    "ActivityEntry",
    "CertificateEntry",
    "EducationEntry",
    "ExperienceEntry",
    "LegacySkills",
    "Metric",
    "PersonalInfo",
    "ProjectEntry",
    "ResumeContent",
    "SkillCategory",
    "SkillEntry",
    "move_entry",
    "reorder_section",
    "validate_content",
]

# Sections whose entries can be reordered by the user.
ORDERED_SECTIONS = ("experience", "education", "projects", "certificates", "activities")


def _entry_id(prefix: str):
    def factory() -> str:
        return f"{prefix}-{uuid.uuid4().hex[:12]}"

    return factory


class _ContentModel(BaseModel):
    # Accepts both snake_case and the camelCase keys older clients send.
    model_config = ConfigDict(
        extra="ignore",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PersonalInfo(_ContentModel):
    """Personally identifying subtree; encrypted at rest."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""
    summary: str = ""
    photo: str | None = None


class Metric(_ContentModel):
    type: str = Field("number", pattern=r"^(percentage|number|currency|time)$")
    value: str = ""
    description: str = ""


class ExperienceEntry(_ContentModel):
    id: str = Field(default_factory=_entry_id("exp"), min_length=1)
    job_title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    achievements: list[str] = Field(default_factory=list)
    metrics: list[Metric] = Field(default_factory=list)


class EducationEntry(_ContentModel):
    id: str = Field(default_factory=_entry_id("edu"), min_length=1)
    degree: str = ""
    school: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    description: str = ""


class ProjectEntry(_ContentModel):
    id: str = Field(default_factory=_entry_id("proj"), min_length=1)
    name: str = ""
    description: str = ""
    technologies: str = ""
    link: str = ""
    start_date: str = ""
    end_date: str = ""


class CertificateEntry(_ContentModel):
    id: str = Field(default_factory=_entry_id("cert"), min_length=1)
    name: str = ""
    issuer: str = ""
    date: str = ""
    link: str = ""
    description: str = ""


class ActivityEntry(_ContentModel):
    id: str = Field(default_factory=_entry_id("act"), min_length=1)
    title: str = ""
    organization: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


class LegacySkills(_ContentModel):
    """Original flat skill lists, kept for backward compatibility."""

    technical: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)


class SkillCategory(StrEnum):
    TECHNICAL = "technical"
    SOFT = "soft"
    LANGUAGE = "language"
    TOOL = "tool"


class SkillEntry(_ContentModel):
    id: str = Field(default_factory=_entry_id("skill"), min_length=1)
    name: str = ""
    category: SkillCategory = SkillCategory.TECHNICAL
    proficiency: int = Field(3, ge=1, le=5)


class ResumeContent(_ContentModel):
    """Structured résumé data, excluding presentation."""

    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: LegacySkills = Field(default_factory=LegacySkills)
    skills_with_proficiency: list[SkillEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    certificates: list[CertificateEntry] = Field(default_factory=list)
    activities: list[ActivityEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_entry_ids(self) -> ResumeContent:
        for section in (*ORDERED_SECTIONS, "skills_with_proficiency"):
            ids = [entry.id for entry in getattr(self, section)]
            if len(ids) != len(set(ids)):
                msg = f"Duplicate entry ids in {section}"
                raise ValueError(msg)
        return self

    def entry_ids(self, section: str) -> list[str]:
        return [entry.id for entry in _section_entries(self, section)]


def _section_entries(content: ResumeContent, section: str) -> list[Any]:
    if section not in ORDERED_SECTIONS:
        msg = f"Section {section!r} cannot be reordered"
        raise ValidationFailed(msg)
    return getattr(content, section)


def validate_content(raw: dict[str, Any] | ResumeContent | None) -> ResumeContent:
    """Parse raw content into a ``ResumeContent``.

    Raises:
        ValidationFailed: If the payload does not match the schema.
    """
    if isinstance(raw, ResumeContent):
        return raw
    try:
        return ResumeContent.model_validate(raw or {})
    except ValidationError as exc:
        msg = f"Invalid resume content: {exc.errors(include_url=False)[0]['msg']}"
        raise ValidationFailed(msg) from exc


def move_entry(content: ResumeContent, section: str, old_index: int, new_index: int) -> ResumeContent:
    """Return a copy of *content* with one entry of *section* moved.

    Same semantics as an array move: the entry at ``old_index`` is removed and
    re-inserted at ``new_index``.
    """
    entries = list(_section_entries(content, section))
    if not (0 <= old_index < len(entries)) or not (0 <= new_index < len(entries)):
        msg = f"Index out of range for {section} (size {len(entries)})"
        raise ValidationFailed(msg)
    entries.insert(new_index, entries.pop(old_index))
    return content.model_copy(update={section: entries})


def reorder_section(content: ResumeContent, section: str, ordered_ids: list[str]) -> ResumeContent:
    """Return a copy of *content* with *section* arranged as *ordered_ids*.

    Raises:
        ValidationFailed: Unless ``ordered_ids`` is a permutation of the
            section's current entry ids.
    """
    entries = _section_entries(content, section)
    by_id = {entry.id: entry for entry in entries}
    if len(ordered_ids) != len(entries) or set(ordered_ids) != set(by_id):
        msg = f"Order for {section} must be a permutation of its entry ids"
        raise ValidationFailed(msg)
    return content.model_copy(update={section: [by_id[entry_id] for entry_id in ordered_ids]})
