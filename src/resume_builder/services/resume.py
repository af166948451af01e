"""Résumé document service.

CRUD over the ``ResumeDocument`` aggregate.  Content is validated, then its
personal subtree is encrypted before it reaches the store; every read path
decrypts before handing content back.  Soft-deleted documents are invisible
to every function here and surface as ``NotFound``.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, TypedDict

from sqlalchemy import func
from sqlalchemy.orm import Session

from resume_builder.cache import get_cache
from resume_builder.data.db import get_session
from resume_builder.data.models import ResumeDocument, ResumeTemplate
from resume_builder.errors import NotFound, ValidationFailed
from resume_builder.models.content import (
    ResumeContent,
    move_entry,
    reorder_section,
    validate_content,
)
from resume_builder.models.customization import (
    Customization,
    normalize_customization,
    validate_customization,
)
from resume_builder.services.personal_data import decrypt_personal_data, encrypt_personal_data
from resume_builder.services.templates import require_template, template_summary
from resume_builder.utils.time import ensure_utc, utcnow

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_TITLE",
    "ResumeUpdate",
    "create_resume",
    "delete_resume",
    "duplicate_resume",
    "get_owned_document",
    "get_resume",
    "get_resume_stats",
    "invalidate_resume_cache",
    "list_resumes",
    "move_resume_entry",
    "read_content",
    "read_customization",
    "reorder_resume_section",
    "serialize_document",
    "store_content",
    "store_customization",
    "update_resume",
]

DEFAULT_TITLE = "Untitled Resume"

_SORT_FIELDS = {
    "updated_at": ResumeDocument.updated_at,
    "created_at": ResumeDocument.created_at,
    "title": ResumeDocument.title,
}
_UPDATABLE_FIELDS = ("title", "template_id", "content", "customization")

_DOCUMENT_TTL = 600
_LIST_TTL = 300


class ResumeUpdate(TypedDict, total=False):
    """Fields accepted by ``update_resume``."""

    title: str
    template_id: str | None
    content: dict[str, Any]
    customization: dict[str, Any]


# -----------------------------------------------------------------------
# Storage boundary


def store_content(content: ResumeContent | dict[str, Any] | None) -> dict[str, Any]:
    """Validate content and seal its personal subtree for storage."""
    validated = validate_content(content)
    return encrypt_personal_data(validated.model_dump(mode="json"))


def read_content(stored: dict[str, Any]) -> dict[str, Any]:
    """Decrypt stored content. Raises ``DecryptionFailed`` on bad ciphertext."""
    return decrypt_personal_data(stored or {})


def store_customization(customization: Customization | dict[str, Any] | None) -> dict[str, Any]:
    validated = validate_customization(customization)
    return validated.model_dump(mode="json", exclude_none=True)


def read_customization(stored: dict[str, Any] | None) -> dict[str, Any]:
    return normalize_customization(stored)


# -----------------------------------------------------------------------
# Cache keys


def _document_key(resume_id: str, owner_id: str) -> str:
    return f"resume:{resume_id}:user:{owner_id}"


def _list_key(owner_id: str, **query: Any) -> str:
    parts = ":".join(f"{name}:{query[name]}" for name in sorted(query))
    return f"resumes:user:{owner_id}:{parts}"


def _stats_key(owner_id: str) -> str:
    return f"resume:stats:user:{owner_id}"


def invalidate_resume_cache(owner_id: str, resume_id: str | None = None) -> None:
    cache = get_cache()
    if resume_id is not None:
        cache.delete(_document_key(resume_id, owner_id))
    cache.delete_pattern(f"resumes:user:{owner_id}:*")
    cache.delete(_stats_key(owner_id))


# -----------------------------------------------------------------------
# Serialization


def _iso(value: Any) -> str | None:
    value = ensure_utc(value)
    return value.isoformat() if value is not None else None


def serialize_document(session: Session, doc: ResumeDocument) -> dict[str, Any]:
    """Return the stored (still encrypted) form of *doc* as a JSON-safe dict."""
    template = template_summary(session, doc.template_id)
    return {
        "id": doc.id,
        "owner_id": doc.owner_id,
        "template_id": doc.template_id,
        "template_name": template["name"] if template else None,
        "template": template,
        "title": doc.title,
        "content": doc.content,
        "customization": read_customization(doc.customization),
        "version": doc.version,
        "total_versions": len(doc.version_history or []),
        "share_id": doc.share_id,
        "is_public": doc.is_public,
        "privacy_consent": {
            "given": doc.consent_given,
            "given_at": _iso(doc.consent_given_at),
            "ip_address": doc.consent_ip_address,
        },
        "share_settings": {
            "allow_download": doc.share_allow_download,
            "has_password": doc.share_password_hash is not None,
            "expires_at": _iso(doc.share_expires_at),
            "view_count": doc.share_view_count,
        },
        "created_at": _iso(doc.created_at),
        "updated_at": _iso(doc.updated_at),
    }


def _present(stored: dict[str, Any]) -> dict[str, Any]:
    return {**stored, "content": read_content(stored["content"])}


def get_owned_document(session: Session, owner_id: str, resume_id: str) -> ResumeDocument:
    """Load a live document owned by *owner_id*.

    Raises:
        NotFound: If absent, soft-deleted or owned by someone else.
    """
    doc = (
        session.query(ResumeDocument)
        .filter(
            ResumeDocument.id == resume_id,
            ResumeDocument.owner_id == owner_id,
            ResumeDocument.deleted_at.is_(None),
        )
        .first()
    )
    if doc is None:
        raise NotFound()
    return doc


# -----------------------------------------------------------------------
# CRUD


def create_resume(
    owner_id: str,
    *,
    title: str | None = None,
    template_id: str | None = None,
    content: dict[str, Any] | None = None,
    customization: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create a document and return it with content decrypted.

    Raises:
        ValidationFailed: Malformed template reference, content or customization.
        NotFound: If ``template_id`` does not resolve.
    """
    stored_content = store_content(content)
    stored_customization = store_customization(customization)

    with get_session() as session:
        if template_id:
            template_id = require_template(session, template_id).id

        doc = ResumeDocument(
            owner_id=owner_id,
            template_id=template_id or None,
            title=title or DEFAULT_TITLE,
            content=stored_content,
            customization=stored_customization,
            version=1,
            version_history=[],
        )
        session.add(doc)
        session.flush()
        result = serialize_document(session, doc)

    invalidate_resume_cache(owner_id)
    logger.info("Created resume %s for %s", result["id"], owner_id)
    return _present(result)


def get_resume(owner_id: str, resume_id: str) -> dict[str, Any]:
    """Return a document with content decrypted.

    Raises:
        NotFound: If absent, soft-deleted or not owned by ``owner_id``.
        DecryptionFailed: If the personal data cannot be decrypted.
    """
    cache = get_cache()
    key = _document_key(resume_id, owner_id)
    stored = cache.get(key)
    if stored is None:
        with get_session() as session:
            stored = serialize_document(session, get_owned_document(session, owner_id, resume_id))
        cache.set(key, stored, _DOCUMENT_TTL)
    return _present(stored)


def list_resumes(
    owner_id: str,
    *,
    page: int = 1,
    limit: int = 10,
    sort: str = "updated_at",
    order: str = "desc",
    search: str = "",
) -> dict[str, Any]:
    """Return one page of the owner's live documents (without content)."""
    if page < 1 or limit < 1:
        raise ValidationFailed("page and limit must be positive")
    if sort not in _SORT_FIELDS:
        raise ValidationFailed(f"Cannot sort by {sort!r}")

    cache = get_cache()
    key = _list_key(owner_id, page=page, limit=limit, sort=sort, order=order, search=search)
    cached = cache.get(key)
    if cached is not None:
        return cached

    with get_session() as session:
        query = session.query(ResumeDocument).filter(
            ResumeDocument.owner_id == owner_id,
            ResumeDocument.deleted_at.is_(None),
        )
        if search:
            query = query.filter(ResumeDocument.title.ilike(f"%{search}%"))
        total = query.count()

        column = _SORT_FIELDS[sort]
        query = query.order_by(column.asc() if order.lower() == "asc" else column.desc())
        docs = query.offset((page - 1) * limit).limit(limit).all()

        template_ids = {doc.template_id for doc in docs if doc.template_id}
        names = {}
        if template_ids:
            names = dict(
                session.query(ResumeTemplate.id, ResumeTemplate.name)
                .filter(ResumeTemplate.id.in_(template_ids))
                .all()
            )

        items = [
            {
                "id": doc.id,
                "title": doc.title,
                "template_id": doc.template_id,
                "template_name": names.get(doc.template_id),
                "version": doc.version,
                "is_public": doc.is_public,
                "created_at": _iso(doc.created_at),
                "updated_at": _iso(doc.updated_at),
            }
            for doc in docs
        ]

    result = {
        "data": items,
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": -(-total // limit),
        },
    }
    cache.set(key, result, _LIST_TTL)
    return result


def update_resume(owner_id: str, resume_id: str, updates: ResumeUpdate) -> dict[str, Any]:
    """Apply a partial update.

    Raises:
        ValidationFailed: If no updatable field is supplied or a value is invalid.
        NotFound: If the document (or a new template reference) does not exist.
    """
    fields = {name: updates[name] for name in _UPDATABLE_FIELDS if name in updates}
    if not fields:
        raise ValidationFailed("No fields to update")

    if "content" in fields:
        fields["content"] = store_content(fields["content"])
    if "customization" in fields:
        fields["customization"] = store_customization(fields["customization"])

    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        if fields.get("template_id"):
            fields["template_id"] = require_template(session, fields["template_id"]).id
        for name, value in fields.items():
            if name == "title" and not value:
                raise ValidationFailed("Title cannot be empty")
            setattr(doc, name, value)
        session.flush()
        result = serialize_document(session, doc)

    invalidate_resume_cache(owner_id, resume_id)
    return _present(result)


def delete_resume(owner_id: str, resume_id: str) -> None:
    """Soft-delete a document. A second call raises ``NotFound``."""
    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        doc.deleted_at = utcnow()
    invalidate_resume_cache(owner_id, resume_id)
    logger.info("Soft-deleted resume %s", resume_id)


def duplicate_resume(owner_id: str, resume_id: str) -> dict[str, Any]:
    """Copy a document's template, content and customization into a new private one."""
    with get_session() as session:
        original = get_owned_document(session, owner_id, resume_id)
        copy = ResumeDocument(
            owner_id=owner_id,
            template_id=original.template_id,
            title=f"{original.title} (Copy)",
            content=dict(original.content),
            customization=dict(original.customization),
            version=1,
            version_history=[],
        )
        session.add(copy)
        session.flush()
        result = serialize_document(session, copy)

    invalidate_resume_cache(owner_id)
    return _present(result)


def get_resume_stats(owner_id: str) -> dict[str, int]:
    """Return ``{total, recent_updates, downloads}`` for the owner."""
    cache = get_cache()
    key = _stats_key(owner_id)
    cached = cache.get(key)
    if cached is not None:
        return cached

    week_ago = utcnow() - timedelta(days=7)
    with get_session() as session:
        live = session.query(func.count(ResumeDocument.id)).filter(
            ResumeDocument.owner_id == owner_id,
            ResumeDocument.deleted_at.is_(None),
        )
        total = live.scalar() or 0
        recent = live.filter(ResumeDocument.updated_at >= week_ago).scalar() or 0

    # No download log exists yet.
    stats = {"total": total, "recent_updates": recent, "downloads": 0}
    cache.set(key, stats, _LIST_TTL)
    return stats


# -----------------------------------------------------------------------
# Entry reordering


def _rewrite_content(owner_id: str, resume_id: str, transform) -> dict[str, Any]:
    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        content = validate_content(read_content(doc.content))
        doc.content = store_content(transform(content))
        session.flush()
        result = serialize_document(session, doc)
    invalidate_resume_cache(owner_id, resume_id)
    return _present(result)


def move_resume_entry(
    owner_id: str, resume_id: str, section: str, old_index: int, new_index: int
) -> dict[str, Any]:
    """Move one entry of an ordered section and persist the result."""
    return _rewrite_content(
        owner_id, resume_id, lambda content: move_entry(content, section, old_index, new_index)
    )


def reorder_resume_section(
    owner_id: str, resume_id: str, section: str, ordered_ids: list[str]
) -> dict[str, Any]:
    """Arrange an ordered section by entry ids and persist the result."""
    return _rewrite_content(
        owner_id, resume_id, lambda content: reorder_section(content, section, ordered_ids)
    )
