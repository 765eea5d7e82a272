"""Tests for mockupforge.core.prompt_composer — enhanced prompt composition.

Tests cover:
- Detail band selection, including the exclusive lower bound at each
  threshold.
- Section order and verbatim style/colour values.
- Determinism for identical inputs.
- Empty prompts (reference-image-only requests).
"""

from __future__ import annotations

import pytest

from mockupforge.core.models import GenerationSettings
from mockupforge.core.prompt_composer import compose, detail_band


class TestDetailBand:
    """Test detail_band threshold banding."""

    @pytest.mark.parametrize(
        ("level", "band"),
        [
            (0, "minimally"),
            (26, "somewhat"),
            (51, "moderately"),
            (76, "highly"),
            (100, "highly"),
        ],
    )
    def test_representative_levels(self, level, band):
        """Each band should be selected for a level inside it."""
        assert detail_band(level) == band

    @pytest.mark.parametrize(
        ("level", "band"),
        [
            (25, "minimally"),
            (50, "somewhat"),
            (75, "moderately"),
        ],
    )
    def test_threshold_is_exclusive(self, level, band):
        """A level equal to a threshold stays in the lower band."""
        assert detail_band(level) == band


class TestCompose:
    """Test compose() output."""

    def test_full_prompt(self):
        """All five sections should be joined verbatim."""
        settings = GenerationSettings(detail_level=80, style_preference="stylized", color_scheme="muted")

        result = compose("A ceramic mug", settings)

        assert result == (
            "Create a photorealistic 3D mockup of the following: A ceramic mug. "
            "Make it highly detailed. "
            "Use a stylized style. "
            "Use a muted color scheme. "
            "Create a high-quality 3D render without any text. High resolution, photorealistic."
        )

    def test_section_order(self, default_settings):
        """Sections should appear in a fixed order."""
        result = compose("A tote bag", default_settings)

        positions = [
            result.index("A tote bag"),
            result.index("somewhat detailed"),
            result.index("realistic style"),
            result.index("vibrant color scheme"),
            result.index("without any text"),
        ]
        assert positions == sorted(positions)

    def test_zero_detail_still_adds_clause(self):
        """Level 0 should still add a detail clause."""
        result = compose("A lamp", GenerationSettings(detail_level=0))
        assert "Make it minimally detailed." in result

    @pytest.mark.parametrize("scheme", ["vibrant", "muted", "monochrome"])
    def test_color_scheme_verbatim(self, scheme):
        """The color scheme should be inserted verbatim."""
        result = compose("A poster", GenerationSettings(color_scheme=scheme))
        assert f"Use a {scheme} color scheme." in result

    @pytest.mark.parametrize("style", ["realistic", "stylized", "abstract"])
    def test_style_verbatim(self, style):
        """The style preference should be inserted verbatim."""
        result = compose("A poster", GenerationSettings(style_preference=style))
        assert f"Use a {style} style." in result

    def test_deterministic(self, default_settings):
        """Identical inputs always produce the identical instruction."""
        first = compose("A glass bottle", default_settings)
        second = compose("A glass bottle", GenerationSettings(**default_settings.model_dump()))
        assert first == second
        assert compose("A glass bottle", default_settings) == first

    def test_empty_prompt_allowed(self, default_settings):
        """An empty prompt should still compose."""
        result = compose("", default_settings)
        assert result.startswith("Create a photorealistic 3D mockup of the following: . ")
