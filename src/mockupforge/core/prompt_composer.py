"""Enhanced prompt composition for mockup generation.

The composer merges the user's free-text description with their
:class:`~mockupforge.core.models.GenerationSettings` into one natural-language
instruction for the upstream model.  Sections always appear in the same
order and the output depends only on the inputs, so identical requests send
identical instructions upstream.

Template Structure::

    Create a photorealistic 3D mockup of the following: [Prompt].
    Make it [Detail Band] detailed.
    Use a [Style] style.
    Use a [Colour Scheme] color scheme.
    [Fixed: text-free photorealistic render directive]

Sections are joined by single spaces on one line.

Usage
-----
::

    enhanced = compose(
        "A ceramic coffee mug with a fox logo",
        GenerationSettings(detail_level=80, style_preference="stylized"),
    )
"""

from __future__ import annotations

from .models import GenerationSettings

# ---------------------------------------------------------------------------
# Detail bands.  Each entry is (exclusive lower bound, band word); the first
# bound the level exceeds wins, so 75 is "moderately" and 76 is "highly".
# ---------------------------------------------------------------------------

_DETAIL_BANDS: tuple[tuple[int, str], ...] = (
    (75, "highly"),
    (50, "moderately"),
    (25, "somewhat"),
)
_LOWEST_DETAIL_BAND = "minimally"

_CLOSING_DIRECTIVE = (
    "Create a high-quality 3D render without any text. High resolution, photorealistic."
)


def detail_band(detail_level: int) -> str:
    """Return the detail band word for a 0-100 detail level.

    Args:
        detail_level: Slider value from the settings record.

    Returns:
        One of ``"highly"``, ``"moderately"``, ``"somewhat"``, ``"minimally"``.
    """
    for lower_bound, band in _DETAIL_BANDS:
        if detail_level > lower_bound:
            return band
    return _LOWEST_DETAIL_BAND


def compose(prompt: str, settings: GenerationSettings) -> str:
    """Compose the enhanced prompt sent to the upstream model.

    The prompt is embedded verbatim; an empty prompt is allowed because the
    caller may be relying on a reference image instead.

    Args:
        prompt: Free-text description of the desired image.
        settings: Detail level, style, and colour scheme.

    Returns:
        The complete instruction string.
    """
    sections = [
        f"Create a photorealistic 3D mockup of the following: {prompt}.",
        f"Make it {detail_band(settings.detail_level)} detailed.",
        f"Use a {settings.style_preference} style.",
        f"Use a {settings.color_scheme} color scheme.",
        _CLOSING_DIRECTIVE,
    ]
    return " ".join(sections)
