"""Route handlers for the API."""

from resume_builder.api.routes import exports, health, resumes, sharing, templates, versions

__all__ = [
    "exports",
    "health",
    "resumes",
    "sharing",
    "templates",
    "versions",
]
