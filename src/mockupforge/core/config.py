"""Configuration management for MockupForge.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the MOCKUPFORGE_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (MOCKUPFORGE_* prefix)
2. .env file in the project root
3. Default values defined in MockupForgeConfig

The Gemini credential is additionally accepted from the bare ``GEMINI_API_KEY``
variable so existing deployments keep working without renaming their secret.

Example .env file:
    MOCKUPFORGE_GEMINI_API_KEY=AIza...
    MOCKUPFORGE_GEMINI_MODEL=gemini-2.0-flash-preview-image-generation
    MOCKUPFORGE_SERVER_PORT=8000
    MOCKUPFORGE_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Application code should still pass the configuration (and in particular the
credential) into :class:`~mockupforge.core.gateway.GenerationGateway`
explicitly, so tests can build gateways with fake keys and transports.

Usage Example
-------------
    from mockupforge.core.config import config

    print(config.gemini_model)
    print(config.generation_config())
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FOUR_MIB = 4 * 1024 * 1024


class MockupForgeConfig(BaseSettings):
    """Main configuration for the MockupForge generation service.

    Attributes
    ----------
    Upstream Settings:
        gemini_api_key : str | None
            Secret key for the Gemini API. ``None`` or blank means the
            gateway answers every request with a configuration error.
        gemini_model : str
            Model name used in the ``generateContent`` path.
        gemini_base_url : str
            Base URL of the Generative Language API.
        request_timeout : float
            Transport timeout in seconds for the single upstream call.

    Generation Settings:
        temperature, top_k, top_p, max_output_tokens, response_modalities
            Values sent verbatim in the ``generationConfig`` envelope.

    Request Limits:
        max_reference_image_bytes : int
            Largest decoded reference image accepted (4 MiB).

    Failure Rendering:
        placeholder_base_url : str
            Placeholder image service used for failure responses.

    Server Settings:
        server_host : str
            Bind address for uvicorn.
        server_port : int
            Port for uvicorn (1024-65535).
        log_level : str
            Root logging level applied by ``main()``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MOCKUPFORGE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "gemini_api_key",
            "MOCKUPFORGE_GEMINI_API_KEY",
            "GEMINI_API_KEY",
        ),
        description="Gemini API key (never logged)",
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash-preview-image-generation",
        description="Gemini model used for image generation",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language API",
    )
    request_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Timeout in seconds for the upstream call",
    )

    # generationConfig envelope
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    top_k: int = Field(default=32, ge=1)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=2048, ge=1)
    response_modalities: list[str] = Field(default_factory=lambda: ["TEXT", "IMAGE"])

    # Request limits
    max_reference_image_bytes: int = Field(
        default=FOUR_MIB,
        ge=1,
        description="Largest decoded reference image accepted, in bytes",
    )

    # Failure rendering
    placeholder_base_url: str = Field(
        default="https://placehold.co",
        description="Placeholder image service for failure responses",
    )

    # Server
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )

    @property
    def has_credential(self) -> bool:
        """Whether a non-blank Gemini API key is configured."""
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    def generation_config(self) -> dict:
        """Return the ``generationConfig`` block sent with every request.

        Returns:
            Dictionary using the provider's camelCase key names.
        """
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
            "responseModalities": list(self.response_modalities),
        }


# Global configuration instance
config = MockupForgeConfig()
