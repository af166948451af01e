"""Tests for customization normalization and validation."""

from __future__ import annotations

import pytest

from resume_builder.errors import ValidationFailed
from resume_builder.models.customization import (
    LayoutVariant,
    canonical_layout,
    normalize_customization,
    validate_customization,
)


class TestNormalizeCustomization:
    @pytest.mark.parametrize(
        ("preset", "expected"), [("small", 12), ("medium", 14), ("large", 16), ("huge", 14)]
    )
    def test_font_size_presets(self, preset: str, expected: int) -> None:
        assert normalize_customization({"font_size": preset})["font_size"] == expected

    @pytest.mark.parametrize(
        ("preset", "expected"), [("compact", 15), ("normal", 20), ("relaxed", 25), ("?", 20)]
    )
    def test_spacing_presets(self, preset: str, expected: int) -> None:
        assert normalize_customization({"spacing": preset})["spacing"] == expected

    def test_numeric_strings_become_numbers(self) -> None:
        result = normalize_customization({"font_size": "16", "spacing": " 30 "})

        assert result == {"font_size": 16, "spacing": 30}

    def test_legacy_camel_case_keys(self) -> None:
        result = normalize_customization(
            {"fontSize": "large", "primaryColor": "#112233", "sectionOrder": ["skills"]}
        )

        assert result == {"font_size": 16, "primary_color": "#112233", "section_order": ["skills"]}

    def test_does_not_mutate_input(self) -> None:
        raw = {"fontSize": "small", "spacing": "compact"}
        normalize_customization(raw)

        assert raw == {"fontSize": "small", "spacing": "compact"}

    def test_numbers_pass_through(self) -> None:
        assert normalize_customization({"font_size": 13, "spacing": 0}) == {
            "font_size": 13,
            "spacing": 0,
        }

    def test_empty(self) -> None:
        assert normalize_customization(None) == {}


class TestValidateCustomization:
    def test_all_fields_optional(self) -> None:
        customization = validate_customization({})

        assert customization.font_size is None
        assert customization.layout is None

    def test_legacy_strings_accepted(self) -> None:
        customization = validate_customization({"fontSize": "medium", "spacing": "relaxed"})

        assert customization.font_size == 14
        assert customization.spacing == 25

    @pytest.mark.parametrize(
        "raw",
        [
            {"font_size": 11},
            {"font_size": 19},
            {"spacing": 41},
            {"line_height": 1.2},
            {"line_height": 2.1},
            {"margins": 9},
            {"margins": 61},
            {"primary_color": "blue"},
            {"accent_color": "#12345"},
            {"photo_style": "hexagon"},
            {"layout": "zigzag"},
        ],
    )
    def test_out_of_range_rejected(self, raw: dict) -> None:
        with pytest.raises(ValidationFailed, match="Invalid customization"):
            validate_customization(raw)

    def test_enums_stored_as_values(self) -> None:
        customization = validate_customization({"layout": "timeline", "photo_style": "rounded"})

        dumped = customization.model_dump(mode="json", exclude_none=True)
        assert dumped == {"layout": "timeline", "photo_style": "rounded"}


class TestCanonicalLayout:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("two-column", LayoutVariant.TWO_COLUMN),
            ("modern", LayoutVariant.TWO_COLUMN),
            ("academic", LayoutVariant.SINGLE_COLUMN),
            ("creative-grid", LayoutVariant.GRID),
            ("dynamic", LayoutVariant.MODERN_BLOCKS),
            ("data-focused", LayoutVariant.INFOGRAPHIC),
        ],
    )
    def test_resolves_aliases(self, name: str, expected: LayoutVariant) -> None:
        assert canonical_layout(name) == expected

    def test_unknown_is_none(self) -> None:
        assert canonical_layout("zigzag") is None
        assert canonical_layout(None) is None
