"""MockupForge - prompt-to-image mockup generation service."""

__version__ = "0.1.0"

from mockupforge.core import (
    GenerationGateway,
    GenerationRequest,
    GenerationResult,
    GenerationSettings,
    MockupForgeConfig,
    compose,
    config,
)

__all__ = [
    "GenerationGateway",
    "GenerationRequest",
    "GenerationResult",
    "GenerationSettings",
    "MockupForgeConfig",
    "compose",
    "config",
]
