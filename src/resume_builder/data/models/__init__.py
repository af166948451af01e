"""ORM models for the document store.

- ResumeDocument: the résumé aggregate (content, customization, history, sharing)
- ResumeTemplate: stored template presets referenced by documents

All models inherit from the shared Base declarative class defined in data.db.
"""

from resume_builder.data.db import Base
from resume_builder.data.models.resume_document import ResumeDocument
from resume_builder.data.models.template import ResumeTemplate

__all__ = ["Base", "ResumeDocument", "ResumeTemplate"]
