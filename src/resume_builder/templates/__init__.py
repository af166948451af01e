"""Built-in template presets.

These seed the template store and provide ``DEFAULT_TEMPLATE``, the
descriptor used whenever a document has no template or its template no
longer exists.
"""

from __future__ import annotations

from resume_builder.models.template import TemplateConfig

__all__ = ["DEFAULT_TEMPLATE"]

DEFAULT_TEMPLATE = TemplateConfig(
    name="Default",
    category="professional",
    color="#3B82F6",
    gradient="linear-gradient(135deg, #3B82F6 0%, #1E40AF 100%)",
)
