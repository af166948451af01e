"""Resolution of presentation values from customization and template.

Precedence, highest first: the user's customization, the palette derived from
the chosen color scheme, the template's declared default, a fixed fallback.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from resume_builder.models.customization import Customization
from resume_builder.models.template import TemplateConfig

__all__ = [
    "COLOR_SCHEMES",
    "REFERENCE_BODY_SIZE",
    "REFERENCE_SIZES",
    "Theme",
    "resolve_theme",
    "scale_font_size",
]

REFERENCE_BODY_SIZE = 14

# Typographic scale at the reference body size.
REFERENCE_SIZES = {
    "name": 36,
    "heading": 20,
    "subheading": 17,
    "body": 14,
    "small": 13,
    "large": 16,
    "xlarge": 24,
}

COLOR_SCHEMES = {
    "blue": ("#3B82F6", "#1E40AF"),
    "purple": ("#8B5CF6", "#6D28D9"),
    "green": ("#10B981", "#059669"),
    "red": ("#EF4444", "#DC2626"),
    "orange": ("#F59E0B", "#D97706"),
    "teal": ("#14B8A6", "#0D9488"),
    "pink": ("#EC4899", "#DB2777"),
    "gray": ("#6B7280", "#4B5563"),
}

_FALLBACK_COLORS = {
    "primary": "#3B82F6",
    "secondary": "#1E40AF",
    "text": "#111827",
    "text_light": "#6B7280",
    "background": "#FFFFFF",
    "sidebar_bg": "#F3F4F6",
}
_FALLBACK_FONT = "Inter"
_DEFAULT_LINE_HEIGHT = 1.6
_DEFAULT_MARGINS = 40
_DEFAULT_SPACING = 20


def scale_font_size(reference: int, base: int) -> int:
    """Scale a reference size to *base*, rounding halves up."""
    return math.floor(reference * base / REFERENCE_BODY_SIZE + 0.5)


@dataclass(slots=True)
class Theme:
    primary: str
    secondary: str
    text: str
    text_light: str
    background: str
    sidebar_bg: str
    heading_font: str
    body_font: str
    font_sizes: dict[str, int]
    line_height: float
    margins: int
    spacing: int
    photo_style: str
    photo_position: str

    @property
    def spacing_scale(self) -> float:
        return self.spacing / _DEFAULT_SPACING


def _first(*values):
    for value in values:
        if value:
            return value
    return None


def resolve_theme(customization: Customization, template: TemplateConfig) -> Theme:
    scheme = COLOR_SCHEMES.get((customization.color_scheme or "").lower(), (None, None))
    colors = template.colors
    typography = template.typography

    base = customization.font_size or REFERENCE_BODY_SIZE
    sizes = {name: scale_font_size(size, base) for name, size in REFERENCE_SIZES.items()}

    return Theme(
        primary=_first(customization.primary_color, scheme[0], colors.primary)
        or _FALLBACK_COLORS["primary"],
        secondary=_first(customization.accent_color, scheme[1], colors.secondary)
        or _FALLBACK_COLORS["secondary"],
        text=colors.text or _FALLBACK_COLORS["text"],
        text_light=colors.text_light or _FALLBACK_COLORS["text_light"],
        background=colors.background or _FALLBACK_COLORS["background"],
        sidebar_bg=colors.sidebar_bg or _FALLBACK_COLORS["sidebar_bg"],
        heading_font=_first(customization.font, typography.heading_font) or _FALLBACK_FONT,
        body_font=_first(customization.font, typography.body_font) or _FALLBACK_FONT,
        font_sizes=sizes,
        line_height=customization.line_height or _DEFAULT_LINE_HEIGHT,
        margins=customization.margins if customization.margins is not None else _DEFAULT_MARGINS,
        spacing=customization.spacing if customization.spacing is not None else _DEFAULT_SPACING,
        photo_style=_first(customization.photo_style, template.photo_config.style) or "circle",
        photo_position=_first(customization.photo_position, template.photo_config.position)
        or "header",
    )
