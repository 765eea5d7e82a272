"""Pydantic data models for prompt-to-image generation.

These models describe the values that cross the gateway boundary.  Every
model serialises to camelCase JSON (``detailLevel``, ``referenceImage``,
``imageUrl``) while Python code uses snake_case attribute names.

Models
------
GenerationSettings
    Immutable settings record chosen by the user (detail level, style,
    colour scheme).
GenerationRequest
    Prompt, settings, and an optional reference image data URL.
GenerationResult
    Outcome of one generation: a usable image URL, or an error plus a
    placeholder image URL.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

StylePreference = Literal["realistic", "stylized", "abstract"]
ColorScheme = Literal["vibrant", "muted", "monochrome"]

STYLE_PREFERENCES: tuple[str, ...] = ("realistic", "stylized", "abstract")
COLOR_SCHEMES: tuple[str, ...] = ("vibrant", "muted", "monochrome")


class ErrorKind(str, Enum):
    """Classification of a failed generation."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_FAILURE = "upstream_failure"
    TRANSPORT = "transport"
    EXTRACTION = "extraction"
    INTERNAL = "internal"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class GenerationSettings(_WireModel):
    """User-selected generation settings.

    Attributes:
        detail_level: Detail slider value, 0-100 inclusive.
        style_preference: One of ``realistic``, ``stylized``, ``abstract``.
        color_scheme: One of ``vibrant``, ``muted``, ``monochrome``.
    """

    model_config = ConfigDict(frozen=True)

    detail_level: int = Field(default=50, ge=0, le=100)
    style_preference: StylePreference = "realistic"
    color_scheme: ColorScheme = "vibrant"


class GenerationRequest(_WireModel):
    """A single generation request.

    The prompt may be blank when a reference image is supplied.  Requests
    with neither are accepted here and rejected by the gateway, so that the
    rejection is reported in the uniform result shape.

    Attributes:
        prompt: Free-text description of the desired image.
        settings: The user's generation settings.
        reference_image: Optional ``data:<mime>;base64,<data>`` URL.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = ""
    settings: GenerationSettings = Field(default_factory=GenerationSettings)
    reference_image: str | None = None

    def has_content(self) -> bool:
        """Return ``True`` if the prompt is non-blank or an image is attached."""
        return bool(self.prompt.strip()) or bool(self.reference_image)


class GenerationResult(_WireModel):
    """Outcome of one call to the gateway.

    Exactly one of a usable ``image_url`` or an ``error`` describes the
    outcome.  On failure ``image_url`` holds a placeholder image URL so the
    caller can always render something.

    Attributes:
        image_url: Data URL of the generated image, or a placeholder URL.
        original_prompt: The prompt as received.
        enhanced_prompt: The instruction sent upstream, when composed.
        error: Human-readable failure reason, ``None`` on success.
        error_type: Failure classification, ``None`` on success.
        response_status: Upstream HTTP status, when a response was received.
        api_error_details: Upstream error text (truncated), when available.
        response_data: Upstream body with inline data redacted, returned
            when a successful response carried no usable image.
    """

    image_url: str
    original_prompt: str = ""
    enhanced_prompt: str | None = None
    error: str | None = None
    error_type: ErrorKind | None = None
    response_status: int | None = None
    api_error_details: str | None = None
    response_data: Any = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_payload(self) -> dict[str, Any]:
        """Serialise to the camelCase JSON body returned by the API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
