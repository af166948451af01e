"""Presentation customization and its storage-boundary normalization.

Every customization field is optional: ``None`` means "not chosen by the
user" and lets the rendering contract fall back to template defaults.

Older documents stored ``font_size`` and ``spacing`` as string presets.
``normalize_customization`` maps those to numbers and is applied both when
documents are written and when they are read, so rendering code only ever
sees numbers.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from resume_builder.errors import ValidationFailed

__all__ = [
    "CANONICAL_LAYOUTS",
    "LEGACY_LAYOUT_ALIASES",
    "Customization",
    "LayoutVariant",
    "PhotoPosition",
    "PhotoStyle",
    "canonical_layout",
    "normalize_customization",
    "validate_customization",
]

_FONT_SIZE_PRESETS = {"small": 12, "medium": 14, "large": 16}
_SPACING_PRESETS = {"compact": 15, "normal": 20, "relaxed": 25}
_DEFAULT_FONT_SIZE = 14
_DEFAULT_SPACING = 20

# camelCase keys written by older clients.
_LEGACY_KEYS = {
    "fontSize": "font_size",
    "primaryColor": "primary_color",
    "accentColor": "accent_color",
    "colorScheme": "color_scheme",
    "lineHeight": "line_height",
    "photoStyle": "photo_style",
    "photoPosition": "photo_position",
    "sectionOrder": "section_order",
}


class PhotoStyle(StrEnum):
    CIRCLE = "circle"
    ROUNDED = "rounded"
    SQUARE = "square"


class PhotoPosition(StrEnum):
    HEADER = "header"
    SIDEBAR = "sidebar"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"


class LayoutVariant(StrEnum):
    SINGLE_COLUMN = "single-column"
    TWO_COLUMN = "two-column"
    TWO_COLUMN_EQUAL = "two-column-equal"
    TIMELINE = "timeline"
    MODERN_BLOCKS = "modern-blocks"
    INFOGRAPHIC = "infographic"
    GRID = "grid"
    # legacy names, resolved through LEGACY_LAYOUT_ALIASES
    MODERN = "modern"
    ACADEMIC = "academic"
    CREATIVE_GRID = "creative-grid"
    TRADITIONAL = "traditional"
    PORTFOLIO_STYLE = "portfolio-style"
    DYNAMIC = "dynamic"
    MINIMAL = "minimal"
    MARKETING_FOCUSED = "marketing-focused"
    DATA_FOCUSED = "data-focused"


CANONICAL_LAYOUTS = (
    LayoutVariant.SINGLE_COLUMN,
    LayoutVariant.TWO_COLUMN,
    LayoutVariant.TWO_COLUMN_EQUAL,
    LayoutVariant.TIMELINE,
    LayoutVariant.MODERN_BLOCKS,
    LayoutVariant.INFOGRAPHIC,
    LayoutVariant.GRID,
)

LEGACY_LAYOUT_ALIASES: dict[LayoutVariant, LayoutVariant] = {
    LayoutVariant.MODERN: LayoutVariant.TWO_COLUMN,
    LayoutVariant.ACADEMIC: LayoutVariant.SINGLE_COLUMN,
    LayoutVariant.CREATIVE_GRID: LayoutVariant.GRID,
    LayoutVariant.TRADITIONAL: LayoutVariant.SINGLE_COLUMN,
    LayoutVariant.PORTFOLIO_STYLE: LayoutVariant.GRID,
    LayoutVariant.DYNAMIC: LayoutVariant.MODERN_BLOCKS,
    LayoutVariant.MINIMAL: LayoutVariant.SINGLE_COLUMN,
    LayoutVariant.MARKETING_FOCUSED: LayoutVariant.TWO_COLUMN,
    LayoutVariant.DATA_FOCUSED: LayoutVariant.INFOGRAPHIC,
}


def canonical_layout(value: str | None) -> LayoutVariant | None:
    """Resolve a stored layout name to one of the seven canonical variants.

    Unknown names resolve to ``None`` so the caller can fall back.
    """
    if value is None:
        return None
    try:
        variant = LayoutVariant(value)
    except ValueError:
        return None
    return LEGACY_LAYOUT_ALIASES.get(variant, variant)


def _preset(value: Any, presets: dict[str, int], default: int) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        try:
            return int(stripped)
        except ValueError:
            return presets.get(stripped.lower(), default)
    return value


def normalize_customization(raw: dict[str, Any] | None) -> dict[str, Any]:
    """Map a stored customization payload to the current numeric shape.

    Pure function: the input is not mutated.  Applied on read and on write.
    """
    if not raw:
        return {}
    normalized = {_LEGACY_KEYS.get(key, key): value for key, value in raw.items()}
    if normalized.get("font_size") is not None:
        normalized["font_size"] = _preset(
            normalized["font_size"], _FONT_SIZE_PRESETS, _DEFAULT_FONT_SIZE
        )
    if normalized.get("spacing") is not None:
        normalized["spacing"] = _preset(normalized["spacing"], _SPACING_PRESETS, _DEFAULT_SPACING)
    return normalized


class Customization(BaseModel):
    """Presentation parameters chosen by the user."""

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    font: str | None = None
    font_size: int | None = Field(None, ge=12, le=18)
    primary_color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    accent_color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    color_scheme: str | None = None
    spacing: int | None = Field(None, ge=0, le=40)
    line_height: float | None = Field(None, ge=1.3, le=2.0)
    margins: int | None = Field(None, ge=10, le=60)
    photo_style: PhotoStyle | None = None
    photo_position: PhotoPosition | None = None
    layout: LayoutVariant | None = None
    section_order: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return normalize_customization(data)
        return data


def validate_customization(raw: dict[str, Any] | Customization | None) -> Customization:
    """Parse raw customization, raising ``ValidationFailed`` on bad values."""
    if isinstance(raw, Customization):
        return raw
    try:
        return Customization.model_validate(raw or {})
    except ValidationError as exc:
        first = exc.errors(include_url=False)[0]
        field = ".".join(str(part) for part in first["loc"]) or "customization"
        msg = f"Invalid customization {field}: {first['msg']}"
        raise ValidationFailed(msg) from exc
