"""ORM model for the résumé aggregate.

The whole document lives in one row: content, customization and the version
history are JSON columns, sharing state is flattened into plain columns so
the view counter can be incremented atomically.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from resume_builder.data.db import Base


class ResumeDocument(Base):
    """A user's résumé.

    Attributes:
        id: UUID string primary key, immutable.
        owner_id: Identifier of the owning user, immutable.
        template_id: Non-owning template reference; may dangle.
        title: Display title.
        content: Résumé content; the ``personal`` subtree is encrypted.
        customization: Normalized presentation settings.
        version: Current version number, starts at 1.  Also the mapper's
            version counter, so every ORM update is conditional on it.
        version_history: Append-only list of snapshot dicts.
        share_id: Public token, generated once and kept across toggles.
        is_public: Whether the share link currently resolves.
        consent_*: Audit record of the last publish/unpublish decision.
        share_*: Share-link settings; the password is a PBKDF2 hash.
        deleted_at: Soft-delete marker.
    """

    __tablename__ = "resume_documents"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    template_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="Untitled Resume")

    content: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    customization: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    version_history: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )

    share_id: Mapped[str | None] = mapped_column(String(36), unique=True, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    consent_given: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    consent_given_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    consent_ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)

    share_allow_download: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    share_password_hash: Mapped[str | None] = mapped_column(String(256), nullable=True)
    share_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    share_view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    __table_args__ = (
        Index("ix_resume_documents_owner_updated", "owner_id", "updated_at"),
        Index("ix_resume_documents_deleted_at", "deleted_at"),
    )
    __mapper_args__ = {"version_id_col": version, "version_id_generator": False}
