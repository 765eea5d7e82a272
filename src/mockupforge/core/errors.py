"""Error taxonomy for the generation gateway.

Every exception here is raised inside
:meth:`~mockupforge.core.gateway.GenerationGateway.generate` and converted
into a :class:`~mockupforge.core.models.GenerationResult` before it returns.
None of them is meant to reach the HTTP layer.
"""

from __future__ import annotations

from typing import Any

from .models import ErrorKind


class GenerationError(Exception):
    """Base class for classified generation failures.

    The message is intended to be displayed directly to the user.

    Attributes:
        kind: Classification reported as ``errorType``.
        details: Optional upstream error text.
        status_code: Upstream HTTP status, when a response was received.
        response_data: Redacted upstream body, when one was received but
            could not be used.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    placeholder_text: str | None = None

    def __init__(
        self,
        message: str,
        *,
        details: str | None = None,
        status_code: int | None = None,
        response_data: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code
        self.response_data = response_data

    @property
    def placeholder_label(self) -> str:
        """Short text rendered on the placeholder image."""
        return self.placeholder_text or self.message


class ConfigurationError(GenerationError):
    """The service is missing its upstream credential."""

    kind = ErrorKind.CONFIGURATION
    placeholder_text = "API key not found"


class ValidationError(GenerationError):
    """The request cannot be sent upstream as given."""

    kind = ErrorKind.VALIDATION


class ExtractionError(GenerationError):
    """The upstream answered successfully but carried no usable image."""

    kind = ErrorKind.EXTRACTION


def classify_status(status_code: int | None) -> ErrorKind:
    """Map an upstream HTTP status onto an error classification.

    Args:
        status_code: Upstream status, or ``None`` when no response arrived.

    Returns:
        ``RATE_LIMITED`` for 429, ``BAD_REQUEST`` for other 4xx,
        ``UPSTREAM_FAILURE`` for 5xx, ``TRANSPORT`` for everything else.
    """
    if status_code is None:
        return ErrorKind.TRANSPORT
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if 400 <= status_code < 500:
        return ErrorKind.BAD_REQUEST
    if 500 <= status_code < 600:
        return ErrorKind.UPSTREAM_FAILURE
    return ErrorKind.TRANSPORT


class TransportError(GenerationError):
    """The upstream call failed or answered with a non-success status.

    Attributes:
        status_code: Upstream HTTP status, ``None`` for network failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details=details, status_code=status_code)
        self.kind = classify_status(status_code)

    @property
    def placeholder_label(self) -> str:
        if self.status_code is None:
            return "Network Error"
        return f"API Error: {self.status_code}"
