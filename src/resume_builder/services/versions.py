"""Version history engine.

Snapshots are plain dicts appended to ``ResumeDocument.version_history``::

    {"version": 3, "content": {...}, "customization": {...},
     "created_at": "2025-01-01T00:00:00+00:00", "comment": "Version 3"}

``content`` is kept in its stored form, so personal data stays encrypted
inside the history too.  The log is append-only: snapshots are never edited
or removed, and the history list is always reassigned rather than mutated in
place so the JSON column change is tracked.

Every write bumps ``version``, which is also the mapper's version counter;
two writers racing on the same document end with one ``VersionConflict``.
"""

from __future__ import annotations

import logging
from typing import Any

from resume_builder.data.db import get_session
from resume_builder.data.models import ResumeDocument
from resume_builder.errors import NotFound
from resume_builder.services.resume import (
    get_owned_document,
    invalidate_resume_cache,
    read_content,
    read_customization,
)
from resume_builder.services.templates import template_summary
from resume_builder.utils.time import ensure_utc, utcnow

logger = logging.getLogger(__name__)

__all__ = [
    "CURRENT",
    "compare_versions",
    "find_snapshot",
    "get_version_history",
    "make_snapshot",
    "resolve_version",
    "restore_version",
    "save_version",
]

# Sentinel accepted by restore and compare in place of a version number.
CURRENT = "current"


def make_snapshot(
    version: int,
    content: dict[str, Any],
    customization: dict[str, Any],
    comment: str | None = None,
) -> dict[str, Any]:
    return {
        "version": version,
        "content": dict(content),
        "customization": dict(customization),
        "created_at": utcnow().isoformat(),
        "comment": comment or f"Version {version}",
    }


def find_snapshot(history: list[dict[str, Any]], version: int) -> dict[str, Any] | None:
    """Return the first snapshot recorded for *version*, if any."""
    for snapshot in history:
        if snapshot.get("version") == version:
            return snapshot
    return None


def resolve_version(doc: ResumeDocument, target: str | int) -> dict[str, Any]:
    """Resolve a version reference against a document.

    ``"current"`` resolves to the live state.  Anything else must name a
    snapshot in the history.

    Raises:
        NotFound: If the reference is not a number or no snapshot matches.
    """
    if target == CURRENT:
        return {
            "version": doc.version,
            "content": doc.content,
            "customization": doc.customization,
            "created_at": ensure_utc(doc.updated_at).isoformat(),
            "comment": None,
        }
    try:
        number = int(target)
    except (TypeError, ValueError):
        raise NotFound("Version not found") from None
    snapshot = find_snapshot(doc.version_history or [], number)
    if snapshot is None:
        raise NotFound("Version not found")
    return snapshot


def _append(doc: ResumeDocument, snapshot: dict[str, Any]) -> None:
    doc.version_history = [*(doc.version_history or []), snapshot]
    doc.version = doc.version + 1


def save_version(owner_id: str, resume_id: str, comment: str | None = None) -> dict[str, Any]:
    """Snapshot the live state under its current version number, then bump it."""
    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        snapshot = make_snapshot(doc.version, doc.content, doc.customization, comment)
        _append(doc, snapshot)
        session.flush()
        result = {
            "current_version": doc.version,
            "saved_version": snapshot["version"],
            "comment": snapshot["comment"],
            "total_versions": len(doc.version_history),
        }

    invalidate_resume_cache(owner_id, resume_id)
    logger.info("Saved version %s of resume %s", result["saved_version"], resume_id)
    return result


def get_version_history(owner_id: str, resume_id: str) -> dict[str, Any]:
    """Return ``{current_version, versions}`` in insertion order, without content."""
    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        versions = [
            {
                "version": snapshot["version"],
                "comment": snapshot.get("comment"),
                "created_at": snapshot.get("created_at"),
            }
            for snapshot in doc.version_history or []
        ]
        return {"current_version": doc.version, "versions": versions}


def restore_version(owner_id: str, resume_id: str, target: str | int) -> dict[str, Any]:
    """Make a snapshot the live state again.

    The live state is checkpointed first, so the pre-restore content is
    always recoverable.  Restoring the current version is allowed and still
    bumps the version.

    Raises:
        NotFound: If the document or the target version does not exist.
    """
    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        restored = resolve_version(doc, target)
        restored_version = restored["version"]
        content = dict(restored["content"])
        customization = dict(restored["customization"])

        checkpoint = make_snapshot(
            doc.version,
            doc.content,
            doc.customization,
            f"Auto-save before restoring to v{restored_version}",
        )
        doc.content = content
        doc.customization = customization
        _append(doc, checkpoint)
        session.flush()
        result = {
            "current_version": doc.version,
            "restored_version": restored_version,
            "content": doc.content,
            "customization": read_customization(doc.customization),
        }

    invalidate_resume_cache(owner_id, resume_id)
    logger.info("Restored resume %s to version %s", resume_id, restored_version)
    return {**result, "content": read_content(result["content"])}


def _present_snapshot(snapshot: dict[str, Any]) -> dict[str, Any]:
    return {
        "version": snapshot["version"],
        "content": read_content(snapshot["content"]),
        "customization": read_customization(snapshot["customization"]),
        "created_at": snapshot.get("created_at"),
    }


def compare_versions(
    owner_id: str, resume_id: str, first: str | int, second: str | int
) -> dict[str, Any]:
    """Return two resolved versions side by side with personal data decrypted.

    Raises:
        NotFound: If either side does not resolve.
    """
    with get_session() as session:
        doc = get_owned_document(session, owner_id, resume_id)
        version1 = resolve_version(doc, first)
        version2 = resolve_version(doc, second)
        template = template_summary(session, doc.template_id)

    return {
        "version1": _present_snapshot(version1),
        "version2": _present_snapshot(version2),
        "template": template,
    }
