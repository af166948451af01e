"""ORM model for stored résumé templates."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from resume_builder.data.db import Base


class ResumeTemplate(Base):
    """A template preset.

    Attributes:
        id: UUID string primary key.
        name: Display name, unique.
        category: Grouping used by the catalog (e.g. "professional").
        color: Representative color shown in pickers.
        gradient: CSS gradient used for header backgrounds.
        config: JSON descriptor (layout, sections, typography, colors,
            features, photo_config) validated by ``TemplateConfig``.
    """

    __tablename__ = "resume_templates"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    gradient: Mapped[str | None] = mapped_column(String(255), nullable=True)
    config: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
