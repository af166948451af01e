"""Typed error taxonomy raised by the resume services.

Every error carries the HTTP status it maps to at the API boundary, but the
services themselves never build HTTP responses.
"""

from __future__ import annotations

__all__ = [
    "ConsentRequired",
    "DecryptionFailed",
    "Expired",
    "ExportFailed",
    "Forbidden",
    "NotFound",
    "PersonalDataError",
    "ResumeError",
    "Unauthorized",
    "ValidationFailed",
    "VersionConflict",
]


class ResumeError(Exception):
    """Base class for all domain errors.

    Attributes:
        detail: Human-readable message safe to return to the caller.
        status_code: HTTP status used when the error crosses the API boundary.
    """

    status_code: int = 500
    default_detail: str = "Resume operation failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(ResumeError):
    """Document, version or shared resource is absent or not visible."""

    status_code = 404
    default_detail = "Resume not found"


class ValidationFailed(ResumeError):
    """Malformed input: bad reference, empty update, out-of-range values."""

    status_code = 400
    default_detail = "Invalid input"


class ConsentRequired(ResumeError):
    status_code = 400
    default_detail = (
        "You must provide explicit consent to make your resume public. "
        "Please confirm you understand your resume will be publicly accessible."
    )


class Expired(ResumeError):
    status_code = 410
    default_detail = "This share link has expired"


class Unauthorized(ResumeError):
    status_code = 401
    default_detail = "Invalid password"


class Forbidden(ResumeError):
    status_code = 403
    default_detail = "Download is not allowed for this resume"


class VersionConflict(ResumeError):
    """Another writer changed the document since it was read."""

    status_code = 409
    default_detail = "Resume was modified concurrently, reload and retry"


class PersonalDataError(ResumeError):
    """Personal data could not be encrypted (e.g. no key configured)."""

    status_code = 500
    default_detail = "Personal data protection failed"


class DecryptionFailed(PersonalDataError):
    """Stored personal data could not be decrypted. Always fatal."""

    default_detail = "Failed to decrypt personal data"


class ExportFailed(ResumeError):
    """The PDF/DOCX encoder or the render engine failed."""

    status_code = 500
    default_detail = "Failed to generate export file"
