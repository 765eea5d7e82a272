"""Core functionality for prompt-to-image generation.

- **compose**: Prompt Composer; merges prompt and settings into one instruction
- **GenerationGateway**: single-call client for the upstream image API
- **extract_image**: tolerant reader for upstream response shapes
- **MockupForgeConfig** / **config**: Pydantic Settings configuration
"""

from mockupforge.core.config import MockupForgeConfig, config
from mockupforge.core.errors import (
    ConfigurationError,
    ExtractionError,
    GenerationError,
    TransportError,
    ValidationError,
)
from mockupforge.core.gateway import GenerationGateway
from mockupforge.core.models import (
    ErrorKind,
    GenerationRequest,
    GenerationResult,
    GenerationSettings,
)
from mockupforge.core.prompt_composer import compose, detail_band
from mockupforge.core.response_parser import extract_image

__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "ExtractionError",
    "GenerationError",
    "GenerationGateway",
    "GenerationRequest",
    "GenerationResult",
    "GenerationSettings",
    "MockupForgeConfig",
    "TransportError",
    "ValidationError",
    "compose",
    "config",
    "detail_band",
    "extract_image",
]
