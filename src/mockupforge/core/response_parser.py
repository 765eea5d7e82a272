"""Tolerant reader for upstream generation responses.

The upstream response envelope has not been stable: revisions of the
integration have seen camelCase and snake_case inline parts, images at
different positions among text parts, and a flat ``media`` field instead of
candidates.  Every shape the gateway understands is handled here, so a new
upstream shape means adding one reader to :data:`_READERS`.

Readers are tried in order and the first one that finds an image wins:

1. ``candidates[0].content.parts[*].inlineData`` (or ``inline_data``)
2. a flat ``media`` field (data URL, http(s) URL, or ``{mimeType, data}``)

If no reader finds an image, :class:`~mockupforge.core.errors.ExtractionError`
is raised.  Malformed structures never surface as ``KeyError`` or
``TypeError``.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Callable
from typing import Any

from .data_urls import to_data_url
from .errors import ExtractionError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"
REDACTED = "[REDACTED]"


def _inline_blob(part: Any) -> dict | None:
    """Return the inline binary blob of a content part, if it has one."""
    if not isinstance(part, dict):
        return None
    blob = part.get("inlineData") or part.get("inline_data")
    if isinstance(blob, dict) and blob.get("data"):
        return blob
    return None


def _blob_to_data_url(blob: dict) -> str:
    mime_type = blob.get("mimeType") or blob.get("mime_type") or DEFAULT_MIME_TYPE
    return to_data_url(mime_type, blob["data"])


def _read_candidates(payload: dict) -> str | None:
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None

    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return None
    logger.debug(f"Candidate finish reason: {candidate.get('finishReason')}")

    content = candidate.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None

    for part in parts:
        blob = _inline_blob(part)
        if blob is not None:
            return _blob_to_data_url(blob)
    return None


def _read_media(payload: dict) -> str | None:
    media = payload.get("media")
    if isinstance(media, str):
        if media.startswith(("data:", "http://", "https://")):
            return media
        return None
    if isinstance(media, dict) and media.get("data"):
        return _blob_to_data_url(media)
    return None


_READERS: tuple[Callable[[dict], str | None], ...] = (
    _read_candidates,
    _read_media,
)


def extract_image(payload: Any) -> str:
    """Extract the generated image from a decoded response body.

    Args:
        payload: The decoded JSON body of a successful upstream response.

    Returns:
        A ``data:`` URL (or an external image URL from a ``media`` field).

    Raises:
        ExtractionError: If no reader finds an image.
    """
    if not isinstance(payload, dict):
        raise ExtractionError("Upstream response is not a JSON object")

    for reader in _READERS:
        image_url = reader(payload)
        if image_url:
            return image_url

    logger.debug(f"No image found; response keys: {sorted(payload.keys())}")
    raise ExtractionError("No image data found in upstream response")


def extract_error_detail(body_text: str, limit: int = 200) -> str:
    """Pull a readable message out of an upstream error body.

    Args:
        body_text: Raw response body.
        limit: Maximum length of the returned text.

    Returns:
        ``error.message`` (or a string ``error``) when the body is JSON,
        otherwise the raw body, truncated to ``limit`` characters.
    """
    try:
        body = json.loads(body_text)
    except ValueError:
        return body_text[:limit]

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])[:limit]
        if isinstance(error, str) and error:
            return error[:limit]
    return body_text[:limit]


def redact_payload(payload: Any) -> Any:
    """Return a copy of a request or response body safe to log.

    Every inline binary ``data`` value is replaced with ``"[REDACTED]"``.
    """
    redacted = copy.deepcopy(payload)

    def _walk(node: Any) -> None:
        if isinstance(node, dict):
            blob = node.get("inlineData") or node.get("inline_data")
            if isinstance(blob, dict) and "data" in blob:
                blob["data"] = REDACTED
            for value in node.values():
                _walk(value)
        elif isinstance(node, list):
            for item in node:
                _walk(item)

    _walk(redacted)
    return redacted
