"""Read-only template descriptor consumed by the rendering contract."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DEFAULT_SECTION_ORDER",
    "LayoutColumns",
    "SectionPlacement",
    "TemplateColors",
    "TemplateConfig",
    "TemplateFeatures",
    "TemplateLayout",
    "TemplatePhotoConfig",
    "TemplateSections",
    "TemplateTypography",
]

DEFAULT_SECTION_ORDER = (
    "personal",
    "summary",
    "experience",
    "education",
    "skills",
    "projects",
    "certificates",
    "activities",
)


class _TemplateModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class LayoutColumns(_TemplateModel):
    count: int = 1
    widths: list[str] = Field(default_factory=lambda: ["100%"])
    gap: str = "0px"


class TemplateLayout(_TemplateModel):
    type: str | None = None
    columns: LayoutColumns = Field(default_factory=LayoutColumns)


class SectionPlacement(_TemplateModel):
    position: str = "main"


class TemplateSections(_TemplateModel):
    order: list[str] = Field(default_factory=lambda: list(DEFAULT_SECTION_ORDER))
    visible: dict[str, bool] = Field(
        default_factory=lambda: {name: True for name in DEFAULT_SECTION_ORDER}
    )
    config: dict[str, SectionPlacement] = Field(default_factory=dict)

    def is_visible(self, section: str) -> bool:
        return bool(self.visible.get(section, True))


class TemplateTypography(_TemplateModel):
    heading_font: str | None = None
    body_font: str | None = None


class TemplateColors(_TemplateModel):
    primary: str | None = None
    secondary: str | None = None
    text: str | None = None
    text_light: str | None = None
    background: str | None = None
    sidebar_bg: str | None = None


class TemplateFeatures(_TemplateModel):
    has_photo: bool = False
    has_icons: bool = False
    ats_friendly: bool = True
    multi_page: bool = False


class TemplatePhotoConfig(_TemplateModel):
    style: str | None = None
    position: str | None = None


class TemplateConfig(_TemplateModel):
    """A named layout/style preset.

    Documents hold a non-owning reference to a template.  When the reference
    is absent or dangling, ``DEFAULT_TEMPLATE`` is used instead.
    """

    name: str = "Default"
    category: str | None = None
    color: str | None = None
    gradient: str | None = None
    layout: TemplateLayout = Field(default_factory=TemplateLayout)
    sections: TemplateSections = Field(default_factory=TemplateSections)
    typography: TemplateTypography = Field(default_factory=TemplateTypography)
    colors: TemplateColors = Field(default_factory=TemplateColors)
    features: TemplateFeatures = Field(default_factory=TemplateFeatures)
    photo_config: TemplatePhotoConfig = Field(default_factory=TemplatePhotoConfig)

    @classmethod
    def from_config(cls, name: str, config: dict[str, Any] | None, **extra: Any) -> TemplateConfig:
        return cls.model_validate({**(config or {}), **extra, "name": name})
