"""Helpers for ``data:`` URLs carrying base64 images."""

from __future__ import annotations

import base64
import binascii
from typing import NamedTuple

from .errors import ValidationError

_DATA_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


class InlineImage(NamedTuple):
    """An image split out of a data URL.

    ``data`` stays base64-encoded exactly as it appeared in the URL.
    """

    mime_type: str
    data: str

    def as_part(self) -> dict:
        """Return the provider's inline binary part for this image."""
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}


def to_data_url(mime_type: str, data: str) -> str:
    return f"{_DATA_PREFIX}{mime_type}{_BASE64_MARKER}{data}"


def parse_data_url(value: str, *, max_bytes: int | None = None) -> InlineImage:
    """Split a base64 image data URL into MIME type and payload.

    Args:
        value: A ``data:<mime>;base64,<data>`` string.
        max_bytes: Largest decoded size accepted, or ``None`` for no limit.

    Returns:
        The MIME type and the untouched base64 payload.

    Raises:
        ValidationError: If the value is not a base64 image data URL, is not
            valid base64, or decodes to more than ``max_bytes``.
    """
    if not value.startswith(_DATA_PREFIX) or _BASE64_MARKER not in value:
        raise ValidationError("Reference image must be a base64 data URL")

    header, data = value.split(_BASE64_MARKER, 1)
    # Parameters such as ";charset=..." may sit between the type and ";base64".
    mime_type = header[len(_DATA_PREFIX):].split(";", 1)[0]

    if not mime_type.startswith("image/"):
        raise ValidationError(f"Unsupported reference image type: {mime_type or 'unknown'}")
    if not data:
        raise ValidationError("Reference image is empty")

    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Reference image is not valid base64") from e

    if max_bytes is not None and len(decoded) > max_bytes:
        limit_mib = max_bytes / (1024 * 1024)
        raise ValidationError(f"Reference image is too large (max {limit_mib:g} MiB)")

    return InlineImage(mime_type=mime_type, data=data)
