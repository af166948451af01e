"""Domain models: résumé content, customization and template descriptors."""

from resume_builder.models.content import (
    ORDERED_SECTIONS,
    PersonalInfo,
    ResumeContent,
    move_entry,
    reorder_section,
    validate_content,
)
from resume_builder.models.customization import (
    Customization,
    LayoutVariant,
    canonical_layout,
    normalize_customization,
    validate_customization,
)
from resume_builder.models.template import DEFAULT_SECTION_ORDER, TemplateConfig

__all__ = [
    "DEFAULT_SECTION_ORDER",
    "ORDERED_SECTIONS",
    "Customization",
    "LayoutVariant",
    "PersonalInfo",
    "ResumeContent",
    "TemplateConfig",
    "canonical_layout",
    "move_entry",
    "normalize_customization",
    "reorder_section",
    "validate_content",
    "validate_customization",
]
