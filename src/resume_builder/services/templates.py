"""Template lookup for documents and exports."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from resume_builder.data.db import get_session
from resume_builder.data.models import ResumeTemplate
from resume_builder.errors import NotFound, ValidationFailed
from resume_builder.models.template import TemplateConfig
from resume_builder.templates import DEFAULT_TEMPLATE
from resume_builder.templates.presets import BUILTIN_PRESETS

logger = logging.getLogger(__name__)

__all__ = [
    "list_stored_templates",
    "load_template_config",
    "require_template",
    "seed_builtin_templates",
    "template_summary",
]


def _parse_template_id(template_id: str) -> str:
    try:
        return str(uuid.UUID(str(template_id)))
    except ValueError:
        raise ValidationFailed("Invalid template ID format") from None


def require_template(session: Session, template_id: str) -> ResumeTemplate:
    """Resolve a template reference supplied by a client.

    Raises:
        ValidationFailed: If the reference is not a well-formed id.
        NotFound: If no template has that id.
    """
    template = session.get(ResumeTemplate, _parse_template_id(template_id))
    if template is None:
        raise NotFound("Template not found")
    return template


def _to_config(template: ResumeTemplate) -> TemplateConfig:
    return TemplateConfig.from_config(
        template.name,
        template.config,
        category=template.category,
        color=template.color,
        gradient=template.gradient,
    )


def load_template_config(session: Session, template_id: str | None) -> TemplateConfig:
    """Return the descriptor a document renders with.

    Missing or dangling references fall back to ``DEFAULT_TEMPLATE``;
    exports never fail because a template was deleted.
    """
    if template_id is None:
        return DEFAULT_TEMPLATE
    template = session.get(ResumeTemplate, template_id)
    if template is None:
        logger.warning("Template %s not found, rendering with defaults", template_id)
        return DEFAULT_TEMPLATE
    return _to_config(template)


def _summary(template: ResumeTemplate) -> dict:
    return {
        "id": template.id,
        "name": template.name,
        "category": template.category,
        "color": template.color,
        "gradient": template.gradient,
    }


def template_summary(session: Session, template_id: str | None) -> dict | None:
    """Short description of a document's template for API responses."""
    if template_id is None:
        return None
    template = session.get(ResumeTemplate, template_id)
    if template is None:
        return None
    return _summary(template)


def list_stored_templates() -> list[dict]:
    """Summaries of every stored template, by name."""
    with get_session() as session:
        templates = session.query(ResumeTemplate).order_by(ResumeTemplate.name).all()
        return [_summary(template) for template in templates]


def seed_builtin_templates() -> list[str]:
    """Insert any built-in preset missing from the store.

    Returns:
        Names of the presets that were inserted.
    """
    inserted: list[str] = []
    with get_session() as session:
        existing = {name for (name,) in session.query(ResumeTemplate.name).all()}
        for preset in BUILTIN_PRESETS:
            if preset.name in existing:
                continue
            config = preset.model_dump(
                mode="json", exclude={"name", "category", "color", "gradient"}
            )
            session.add(
                ResumeTemplate(
                    name=preset.name,
                    category=preset.category,
                    color=preset.color,
                    gradient=preset.gradient,
                    config=config,
                )
            )
            inserted.append(preset.name)
    if inserted:
        logger.info("Seeded built-in templates: %s", ", ".join(inserted))
    return inserted
