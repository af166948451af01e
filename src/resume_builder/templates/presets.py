"""Descriptors for the built-in template catalog."""

from __future__ import annotations

from resume_builder.models.template import TemplateConfig

__all__ = ["BUILTIN_PRESETS"]

_CLASSIC = TemplateConfig.model_validate(
    {
        "name": "Classic",
        "category": "professional",
        "color": "#1F2937",
        "gradient": "linear-gradient(135deg, #374151 0%, #111827 100%)",
        "layout": {"type": "single-column"},
        "typography": {"heading_font": "Georgia", "body_font": "Georgia"},
        "colors": {"primary": "#1F2937", "secondary": "#4B5563"},
        "features": {"ats_friendly": True},
    }
)

_MODERN = TemplateConfig.model_validate(
    {
        "name": "Modern",
        "category": "creative",
        "color": "#8B5CF6",
        "gradient": "linear-gradient(135deg, #8B5CF6 0%, #6D28D9 100%)",
        "layout": {"type": "modern-blocks"},
        "typography": {"heading_font": "Poppins", "body_font": "Inter"},
        "colors": {"primary": "#8B5CF6", "secondary": "#6D28D9"},
        "features": {"has_icons": True, "ats_friendly": False},
    }
)

_SIDEBAR = TemplateConfig.model_validate(
    {
        "name": "Sidebar",
        "category": "professional",
        "color": "#0D9488",
        "gradient": "linear-gradient(135deg, #14B8A6 0%, #0D9488 100%)",
        "layout": {
            "type": "two-column",
            "columns": {"count": 2, "widths": ["32%", "68%"], "gap": "24px"},
        },
        "sections": {
            "config": {
                "personal": {"position": "sidebar"},
                "skills": {"position": "sidebar"},
                "certificates": {"position": "sidebar"},
            }
        },
        "colors": {"primary": "#14B8A6", "secondary": "#0D9488", "sidebar_bg": "#F0FDFA"},
        "features": {"has_photo": True},
        "photo_config": {"style": "circle", "position": "sidebar"},
    }
)

_TIMELINE = TemplateConfig.model_validate(
    {
        "name": "Timeline",
        "category": "modern",
        "color": "#F59E0B",
        "gradient": "linear-gradient(135deg, #F59E0B 0%, #D97706 100%)",
        "layout": {"type": "timeline"},
        "colors": {"primary": "#F59E0B", "secondary": "#D97706"},
        "features": {"has_photo": True},
        "photo_config": {"style": "rounded", "position": "header"},
    }
)

BUILTIN_PRESETS: tuple[TemplateConfig, ...] = (_CLASSIC, _MODERN, _SIDEBAR, _TIMELINE)
