"""MockupForge — FastAPI Application.

This module is the single entry point for the web service.  It defines the
``create_app()`` factory, the module-level ``app`` instance, all REST API
routes, and the ``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The service is stateless:

- **Configuration** comes from :data:`~mockupforge.core.config.config`
  (``MOCKUPFORGE_*`` environment variables) unless one is passed to
  ``create_app()``.
- **Image generation** is delegated to
  :class:`~mockupforge.core.gateway.GenerationGateway`, which makes exactly
  one upstream call per request and never raises.
- **Failures** are returned with a usable body (``error`` plus a placeholder
  ``imageUrl``) rather than an opaque status, so the calling UI can always
  display something.
- **CORS** headers are attached to every response and any ``OPTIONS``
  request is answered immediately with an empty body.

Endpoints
---------
========  ==================================  ================================
Method    Path                                Purpose
========  ==================================  ================================
POST      ``/api/generate``                   Generate one image
POST      ``/functions/v1/generate-mockup``   Same, at the legacy client path
POST      ``/api/prompt/compile``             Preview the enhanced prompt
GET       ``/api/config``                     Options, defaults, and limits
OPTIONS   any path                            CORS preflight
========  ==================================  ================================

Usage
-----
CLI (installed entry point)::

    mockupforge

Direct invocation::

    python -m mockupforge.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from mockupforge import __version__
from mockupforge.api.models import CompileRequest
from mockupforge.core.config import MockupForgeConfig, config as default_config
from mockupforge.core.gateway import GenerationGateway
from mockupforge.core.models import (
    COLOR_SCHEMES,
    STYLE_PREFERENCES,
    ErrorKind,
    GenerationRequest,
    GenerationResult,
    GenerationSettings,
)
from mockupforge.core.placeholders import placeholder_url
from mockupforge.core.prompt_composer import compose

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
}

GENERATE_PATHS: frozenset[str] = frozenset({"/api/generate", "/functions/v1/generate-mockup"})

# Failure kinds that indicate a fault in this service rather than in the
# request or upstream; these are reported with a 5xx status.
_SERVER_FAULT_KINDS: frozenset[ErrorKind] = frozenset({ErrorKind.CONFIGURATION, ErrorKind.INTERNAL})

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_gateway(request: Request) -> GenerationGateway:
    """Return the gateway created by the application lifespan."""
    return request.app.state.gateway


def get_config(request: Request) -> MockupForgeConfig:
    """Return the configuration the application was built with."""
    return request.app.state.config


# ---------------------------------------------------------------------------
# Response helpers.
# ---------------------------------------------------------------------------


def _result_response(result: GenerationResult) -> JSONResponse:
    """Render a gateway result with the status its outcome calls for."""
    status_code = 200
    if result.error_type in _SERVER_FAULT_KINDS:
        status_code = 500
    return JSONResponse(content=result.to_payload(), status_code=status_code)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic validation errors into one readable sentence."""
    messages = []
    for err in exc.errors():
        # Drop the leading "body" segment; callers only see their own fields.
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        message = err.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(messages or ["malformed body"])


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@router.post("/api/generate")
@router.post("/functions/v1/generate-mockup")
async def generate_mockup(
    req: GenerationRequest,
    gateway: GenerationGateway = Depends(get_gateway),
) -> JSONResponse:
    """Generate one image from a prompt, settings, and optional reference.

    Success returns ``200 {imageUrl, originalPrompt, enhancedPrompt}``.
    Failures return ``{error, errorType, imageUrl}`` with a placeholder
    image, plus whatever context is available (``enhancedPrompt``,
    ``responseStatus``, ``apiErrorDetails``, and ``responseData``
    when an upstream reply held no usable image).  Configuration and internal
    failures use status 500; all others use 200.

    Args:
        req: Validated :class:`GenerationRequest` payload.
        gateway: Gateway from application state.

    Returns:
        JSON response with the generation result.
    """
    logger.info(
        f"Received generation request (prompt={len(req.prompt)} chars, "
        f"reference_image={'yes' if req.reference_image else 'no'})"
    )
    result = await gateway.generate(req)
    return _result_response(result)


@router.post("/api/prompt/compile")
async def compile_prompt(req: CompileRequest) -> dict:
    """Preview the enhanced prompt without calling the upstream API.

    Args:
        req: Validated :class:`CompileRequest` payload.

    Returns:
        Dictionary with a single ``enhancedPrompt`` key.
    """
    return {"enhancedPrompt": compose(req.prompt, req.settings)}


@router.get("/api/config")
async def get_service_config(cfg: MockupForgeConfig = Depends(get_config)) -> dict:
    """Return the options and limits the frontend needs to build its form.

    The response reports whether a credential is configured, but never the
    credential itself.

    Returns:
        Dictionary with keys ``version``, ``model``, ``stylePreferences``,
        ``colorSchemes``, ``defaultSettings``, ``maxReferenceImageBytes``,
        and ``configured``.
    """
    return {
        "version": __version__,
        "model": cfg.gemini_model,
        "stylePreferences": list(STYLE_PREFERENCES),
        "colorSchemes": list(COLOR_SCHEMES),
        "defaultSettings": GenerationSettings().model_dump(by_alias=True),
        "maxReferenceImageBytes": cfg.max_reference_image_bytes,
        "configured": cfg.has_credential,
    }


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(
    config: MockupForgeConfig | None = None,
    *,
    gateway: GenerationGateway | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Configuration to use.  Defaults to the global instance.
        gateway: Pre-built gateway.  When omitted, the lifespan creates an
            ``httpx.AsyncClient`` and a gateway from ``config`` on startup
            and closes the client on shutdown.

    Returns:
        The configured application.
    """
    cfg = config or default_config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Create the shared HTTP client and gateway for the app lifetime."""
        client: httpx.AsyncClient | None = None
        if app.state.gateway is None:
            client = httpx.AsyncClient(timeout=cfg.request_timeout)
            app.state.gateway = GenerationGateway.from_config(cfg, client)
            logger.info(f"GenerationGateway initialised (model={cfg.gemini_model}).")
        if not cfg.has_credential:
            logger.warning("No Gemini API key configured; generation requests will fail.")

        yield  # Application runs here.

        if client is not None:
            await client.aclose()
            logger.info("Upstream HTTP client closed on shutdown.")

    app = FastAPI(
        title="MockupForge",
        description="Prompt-to-image mockup generation backed by the Gemini API.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = cfg
    app.state.gateway = gateway

    @app.middleware("http")
    async def cors(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Answer preflights and stamp CORS headers on every response."""
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> Response:
        """Report invalid generate bodies in the uniform failure shape."""
        if request.url.path not in GENERATE_PATHS:
            return await request_validation_exception_handler(request, exc)

        message = _describe_validation_errors(exc)
        logger.warning(message)
        result = GenerationResult(
            image_url=placeholder_url("Invalid request", base_url=cfg.placeholder_base_url),
            error=message,
            error_type=ErrorKind.VALIDATION,
        )
        return _result_response(result)

    app.include_router(router)
    return app


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port, and log level from
    :data:`~mockupforge.core.config.config` (``MOCKUPFORGE_SERVER_HOST``,
    ``MOCKUPFORGE_SERVER_PORT``, ``MOCKUPFORGE_LOG_LEVEL``).  Defaults to
    ``0.0.0.0:8000``.

    This function is registered as the ``mockupforge`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=default_config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "mockupforge.api.main:app",
        host=default_config.server_host,
        port=default_config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
