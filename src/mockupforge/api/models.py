"""Pydantic request models for the MockupForge API.

``POST /api/generate`` accepts
:class:`~mockupforge.core.models.GenerationRequest` directly; the models here
cover the auxiliary endpoints.

Models
------
CompileRequest
    Payload for ``POST /api/prompt/compile`` — prompt and settings only.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mockupforge.core.models import GenerationSettings


class CompileRequest(BaseModel):
    """Request body for the ``POST /api/prompt/compile`` endpoint.

    Attributes:
        prompt: Free-text description.  May be empty.
        settings: Generation settings; defaults match the creator form.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prompt: str = Field(
        default="",
        description="Free-text description of the desired image.",
    )
    settings: GenerationSettings = Field(
        default_factory=GenerationSettings,
        description="Detail level, style preference, and colour scheme.",
    )
