"""Generation gateway: one prompt in, one upstream call, one result out.

The gateway is the only component that talks to the external
generative-image API (Google Gemini ``generateContent``).  Each call to
:meth:`GenerationGateway.generate` walks the same fixed path::

    validating-config -> composing-prompt -> calling-external-api
        -> parsing-response -> done (success | failure)

There are no retries and no loops back; every path ends in a
:class:`~mockupforge.core.models.GenerationResult`.  ``generate`` never
raises: configuration, validation, transport, and extraction failures, and
any unexpected exception, are all turned into a result carrying a
human-readable ``error`` and a placeholder ``image_url``.

The gateway holds no mutable state.  The credential and the
``httpx.AsyncClient`` are injected by the caller, so many overlapping calls
can share one gateway, and tests can swap in ``httpx.MockTransport``.

Usage
-----
::

    async with httpx.AsyncClient(timeout=config.request_timeout) as client:
        gateway = GenerationGateway.from_config(config, client)
        result = await gateway.generate(
            GenerationRequest(prompt="A glass water bottle on a desk")
        )
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .config import FOUR_MIB, MockupForgeConfig
from .data_urls import InlineImage, parse_data_url
from .errors import (
    ConfigurationError,
    ExtractionError,
    GenerationError,
    TransportError,
    ValidationError,
)
from .models import GenerationRequest, GenerationResult
from .placeholders import DEFAULT_PLACEHOLDER_BASE_URL, placeholder_url
from .prompt_composer import compose
from .response_parser import extract_error_detail, extract_image, redact_payload

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash-preview-image-generation"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

EXTRACTION_FAILED_MESSAGE = "Failed to generate image. Please try a different prompt or settings."
MISSING_CONTENT_MESSAGE = "Please enter a prompt or attach a reference image."
ERROR_DETAIL_LIMIT = 200


class GenerationGateway:
    """Stateless request handler for the upstream image-generation API.

    Attributes:
        model: Upstream model name.
        base_url: Root of the upstream API.
        generation_config: ``generationConfig`` block sent with every call.
        max_reference_image_bytes: Largest decoded reference image accepted.
        placeholder_base_url: Placeholder service used on failure.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        client: httpx.AsyncClient,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        generation_config: dict[str, Any] | None = None,
        max_reference_image_bytes: int = FOUR_MIB,
        placeholder_base_url: str = DEFAULT_PLACEHOLDER_BASE_URL,
    ) -> None:
        self._api_key = api_key
        self._client = client
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.generation_config = dict(generation_config or {})
        self.max_reference_image_bytes = max_reference_image_bytes
        self.placeholder_base_url = placeholder_base_url

    @classmethod
    def from_config(cls, config: MockupForgeConfig, client: httpx.AsyncClient) -> GenerationGateway:
        """Build a gateway from application configuration.

        Args:
            config: Loaded configuration.
            client: Shared async HTTP client.

        Returns:
            A gateway wired to the configured model and credential.
        """
        return cls(
            config.gemini_api_key,
            client=client,
            model=config.gemini_model,
            base_url=config.gemini_base_url,
            generation_config=config.generation_config(),
            max_reference_image_bytes=config.max_reference_image_bytes,
            placeholder_base_url=config.placeholder_base_url,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key and self._api_key.strip())

    def build_request_body(
        self,
        enhanced_prompt: str,
        reference: InlineImage | None = None,
    ) -> dict[str, Any]:
        """Build the upstream ``contents``/``parts``/``generationConfig`` body.

        Args:
            enhanced_prompt: Instruction text for the model.
            reference: Optional reference image, appended as an inline part.

        Returns:
            JSON-serialisable request body.
        """
        parts: list[dict[str, Any]] = [{"text": enhanced_prompt}]
        if reference is not None:
            parts.append(reference.as_part())
        return {
            "contents": [{"parts": parts}],
            "generationConfig": dict(self.generation_config),
        }

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate one image for ``request``.

        Args:
            request: Prompt, settings, and optional reference image.

        Returns:
            A result with a data URL on success, or an error and a
            placeholder image URL on any failure.  Never raises.
        """
        enhanced_prompt: str | None = None
        try:
            if not self.has_credential:
                raise ConfigurationError("API key is not configured")
            if not request.has_content():
                raise ValidationError(MISSING_CONTENT_MESSAGE)

            enhanced_prompt = compose(request.prompt, request.settings)
            logger.info(f"Enhanced prompt: {enhanced_prompt}")

            reference = None
            if request.reference_image:
                reference = parse_data_url(
                    request.reference_image,
                    max_bytes=self.max_reference_image_bytes,
                )
                logger.info(f"Using reference image ({reference.mime_type})")

            body = self.build_request_body(enhanced_prompt, reference)
            image_url, status_code = await self._request_image(body)

        except GenerationError as e:
            return self._failure(request, e, enhanced_prompt)
        except httpx.HTTPError as e:
            logger.error(f"Upstream request failed: {e!r}")
            error = TransportError(f"Could not reach Gemini API: {e}")
            return self._failure(request, error, enhanced_prompt)
        except Exception as e:
            logger.error(f"Unexpected error during generation: {e}", exc_info=True)
            error = GenerationError(f"Error: {str(e) or 'Unknown error occurred'}")
            return self._failure(request, error, enhanced_prompt)

        logger.info("Image generated successfully")
        return GenerationResult(
            image_url=image_url,
            original_prompt=request.prompt,
            enhanced_prompt=enhanced_prompt,
            response_status=status_code,
        )

    async def _request_image(self, body: dict[str, Any]) -> tuple[str, int]:
        """Send the single upstream call and extract the image.

        Returns:
            Tuple of ``(image_url, status_code)``.

        Raises:
            TransportError: On a non-success status.
            ExtractionError: On a success status without a usable image.
            httpx.HTTPError: On network failure.
        """
        logger.debug(f"Request payload: {json.dumps(redact_payload(body))}")
        logger.info(f"Calling Gemini model {self.model}")

        response = await self._client.post(
            self.endpoint,
            json=body,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self._api_key or "",
            },
        )
        status_code = response.status_code
        logger.info(f"Response status: {status_code}")

        if not response.is_success:
            detail = extract_error_detail(response.text, limit=ERROR_DETAIL_LIMIT)
            logger.error(f"Gemini API error {status_code}: {detail}")
            raise TransportError(
                f"Gemini API error {status_code}: {detail}",
                status_code=status_code,
                details=detail,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ExtractionError(
                EXTRACTION_FAILED_MESSAGE,
                details="Upstream returned malformed JSON",
                status_code=status_code,
            ) from e

        try:
            return extract_image(payload), status_code
        except ExtractionError as e:
            logger.error(
                f"Could not extract image from response: {e}; "
                f"response: {json.dumps(redact_payload(payload))[:1000]}"
            )
            raise ExtractionError(
                EXTRACTION_FAILED_MESSAGE,
                details=str(e),
                status_code=status_code,
                response_data=redact_payload(payload),
            ) from e

    def _failure(
        self,
        request: GenerationRequest,
        error: GenerationError,
        enhanced_prompt: str | None,
    ) -> GenerationResult:
        logger.warning(f"Generation failed ({error.kind.value}): {error.message}")
        return GenerationResult(
            image_url=placeholder_url(error.placeholder_label, base_url=self.placeholder_base_url),
            original_prompt=request.prompt,
            enhanced_prompt=enhanced_prompt,
            error=error.message,
            error_type=error.kind,
            response_status=error.status_code,
            api_error_details=error.details,
            response_data=error.response_data,
        )
