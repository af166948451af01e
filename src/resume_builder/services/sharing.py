"""Share-link access control.

A document is either Private (``is_public`` false) or Public (``is_public``
true with a ``share_id``).  Going public needs explicit consent and stamps a
consent record; going private stamps a revocation but keeps the share id and
settings so the same link can be published again later.

Viewing through a share link is gated, in this order, by: existence and
visibility, expiry, password.  Downloads additionally need
``allow_download``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import timedelta
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from resume_builder.config import get_settings
from resume_builder.data.db import get_session
from resume_builder.data.models import ResumeDocument
from resume_builder.errors import (
    ConsentRequired,
    Expired,
    Forbidden,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from resume_builder.services.resume import (
    get_owned_document,
    invalidate_resume_cache,
    read_content,
    read_customization,
)
from resume_builder.services.templates import template_summary
from resume_builder.utils.passwords import hash_password, verify_password
from resume_builder.utils.time import ensure_utc, utcnow

logger = logging.getLogger(__name__)

__all__ = [
    "check_share_access",
    "find_shared_document",
    "generate_share_link",
    "get_shared_resume",
    "share_url",
    "unpublish",
    "update_share_settings",
]

_SHARE_FIELDS = ("is_public", "allow_download", "password", "expires_in")
_MAX_EXPIRY_DAYS = 36500


def share_url(share_id: str) -> str:
    return f"{get_settings().client_url}/share/{share_id}"


def _expiry(expires_in: float | None):
    if not expires_in:
        return None
    if not 0 < expires_in <= _MAX_EXPIRY_DAYS:
        msg = f"expires_in must be between 0 and {_MAX_EXPIRY_DAYS} days"
        raise ValidationFailed(msg)
    try:
        return utcnow() + timedelta(days=expires_in)
    except (OverflowError, ValueError) as exc:
        raise ValidationFailed("expires_in is not a valid number of days") from exc


def _stamp_consent(doc: ResumeDocument, given: bool, ip_address: str | None) -> None:
    doc.consent_given = given
    doc.consent_given_at = utcnow()
    doc.consent_ip_address = ip_address


def _publish(doc: ResumeDocument, ip_address: str | None) -> None:
    if doc.share_id is None:
        doc.share_id = str(uuid.uuid4())
    doc.is_public = True
    _stamp_consent(doc, True, ip_address)


def _share_state(doc: ResumeDocument) -> dict[str, Any]:
    expires_at = ensure_utc(doc.share_expires_at)
    consent_at = ensure_utc(doc.consent_given_at)
    return {
        "share_id": doc.share_id,
        "share_url": share_url(doc.share_id) if doc.share_id else None,
        "is_public": doc.is_public,
        "settings": {
            "allow_download": doc.share_allow_download,
            "has_password": doc.share_password_hash is not None,
            "expires_at": expires_at.isoformat() if expires_at else None,
            "view_count": doc.share_view_count,
        },
        "privacy_consent": {
            "given": doc.consent_given,
            "given_at": consent_at.isoformat() if consent_at else None,
            "ip_address": doc.consent_ip_address,
        },
    }


def generate_share_link(
    owner_id: str,
    resume_id: str,
    *,
    consent: bool,
    allow_download: bool = True,
    password: str | None = None,
    expires_in: float | None = None,
    ip_address: str | None = None,
) -> dict[str, Any]:
    """Publish a document and replace its share settings.

    The view count survives re-publication; everything else in the share
    settings is overwritten.

    Raises:
        ConsentRequired: If ``consent`` is not true. Nothing is changed.
    """
    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        if consent is not True:
            raise ConsentRequired()

        expires_at = _expiry(expires_in)
        _publish(doc, ip_address)
        doc.share_allow_download = allow_download
        doc.share_password_hash = hash_password(password) if password else None
        doc.share_expires_at = expires_at
        session.flush()
        result = _share_state(doc)

    invalidate_resume_cache(owner_id, resume_id)
    logger.info("Published resume %s", resume_id)
    return result


def update_share_settings(
    owner_id: str,
    resume_id: str,
    changes: dict[str, Any],
    *,
    consent: bool = False,
    ip_address: str | None = None,
) -> dict[str, Any]:
    """Apply a partial update to the share state.

    Only keys present in *changes* are touched.  An empty or falsy
    ``password`` clears it, as does a falsy ``expires_in`` for the expiry.

    Raises:
        ConsentRequired: When moving Private to Public without consent.
    """
    changes = {name: changes[name] for name in _SHARE_FIELDS if name in changes}
    if changes.get("is_public") is None:
        changes.pop("is_public", None)

    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        going_public = changes.get("is_public") is True and not doc.is_public
        if going_public and consent is not True:
            raise ConsentRequired()

        expires_at = _expiry(changes["expires_in"]) if "expires_in" in changes else None

        if "is_public" in changes and changes["is_public"] != doc.is_public:
            if changes["is_public"]:
                _publish(doc, ip_address)
            else:
                doc.is_public = False
                _stamp_consent(doc, False, ip_address)
        if "allow_download" in changes and changes["allow_download"] is not None:
            doc.share_allow_download = bool(changes["allow_download"])
        if "password" in changes:
            password = changes["password"]
            doc.share_password_hash = hash_password(password) if password else None
        if "expires_in" in changes:
            doc.share_expires_at = expires_at
        session.flush()
        result = _share_state(doc)

    invalidate_resume_cache(owner_id, resume_id)
    return result


def unpublish(owner_id: str, resume_id: str, *, ip_address: str | None = None) -> dict[str, Any]:
    """Public to Private. Consent is revoked; the share id is kept."""
    return update_share_settings(
        owner_id, resume_id, {"is_public": False}, ip_address=ip_address
    )


def find_shared_document(session: Session, share_id: str) -> ResumeDocument:
    """Load a public, live document by its share id.

    Raises:
        NotFound: If no such document exists, it is private or soft-deleted.
    """
    doc = (
        session.query(ResumeDocument)
        .filter(
            ResumeDocument.share_id == share_id,
            ResumeDocument.is_public.is_(True),
            ResumeDocument.deleted_at.is_(None),
        )
        .first()
    )
    if doc is None:
        raise NotFound("Resume not found or not public")
    return doc


def check_share_access(
    doc: ResumeDocument, password: str | None, *, download: bool = False
) -> None:
    """Apply the expiry, password and (optionally) download gates in order.

    Raises:
        Expired: If the link has an expiry in the past.
        Unauthorized: If a password is set and *password* does not match.
        Forbidden: If *download* is requested but downloads are disabled.
    """
    expires_at = ensure_utc(doc.share_expires_at)
    if expires_at is not None and expires_at <= utcnow():
        raise Expired()
    if doc.share_password_hash is not None and not verify_password(
        password, doc.share_password_hash
    ):
        raise Unauthorized()
    if download and not doc.share_allow_download:
        raise Forbidden()


def get_shared_resume(share_id: str, password: str | None = None) -> dict[str, Any]:
    """Return the public view of a shared document and count the view."""
    with get_session() as session:
        doc = find_shared_document(session, share_id)
        check_share_access(doc, password)
        content = read_content(doc.content)

        session.execute(
            update(ResumeDocument)
            .where(ResumeDocument.id == doc.id)
            .values(
                share_view_count=ResumeDocument.share_view_count + 1,
                updated_at=ResumeDocument.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        created_at = ensure_utc(doc.created_at)
        updated_at = ensure_utc(doc.updated_at)
        result = {
            "title": doc.title,
            "content": content,
            "customization": read_customization(doc.customization),
            "template": template_summary(session, doc.template_id),
            "allow_download": doc.share_allow_download,
            "view_count": doc.share_view_count + 1,
            "created_at": created_at.isoformat(),
            "updated_at": updated_at.isoformat(),
        }

    invalidate_resume_cache(doc.owner_id, doc.id)
    return result
