"""Placeholder image URLs for failed generations.

Failure responses always carry an image URL so the calling UI can render
something.  The failure reason is printed on the placeholder itself, which
makes it visible in screenshots and browser dev tools without log access.
"""

from __future__ import annotations

from urllib.parse import quote

DEFAULT_PLACEHOLDER_BASE_URL = "https://placehold.co"
MAX_PLACEHOLDER_TEXT = 60


def placeholder_url(
    message: str,
    *,
    base_url: str = DEFAULT_PLACEHOLDER_BASE_URL,
    size: str = "800x600",
    background: str = "FF5555",
    foreground: str = "FFFFFF",
) -> str:
    """Build a placeholder image URL that displays ``message``.

    Args:
        message: Failure reason; truncated to 60 characters.
        base_url: Placeholder service root.
        size: ``WIDTHxHEIGHT`` of the image.
        background: Background colour as hex without ``#``.
        foreground: Text colour as hex without ``#``.

    Returns:
        Absolute URL of the placeholder image.
    """
    text = (message.strip() or "Generation failed")[:MAX_PLACEHOLDER_TEXT]
    return f"{base_url.rstrip('/')}/{size}/{background}/{foreground}?text={quote(text, safe='')}"
