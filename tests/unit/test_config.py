"""Tests for mockupforge.core.config — configuration management.

Tests cover:
- Default values for upstream, generation, and server settings.
- Environment variable overrides via the MOCKUPFORGE_ prefix.
- The bare GEMINI_API_KEY fallback.
- The generationConfig block.
- Pydantic validation constraints.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mockupforge.core.config import FOUR_MIB, MockupForgeConfig


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable that could leak into a config under test."""
    for name in (
        "GEMINI_API_KEY",
        "MOCKUPFORGE_GEMINI_API_KEY",
        "MOCKUPFORGE_GEMINI_MODEL",
        "MOCKUPFORGE_SERVER_PORT",
        "MOCKUPFORGE_TEMPERATURE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigDefaults:
    """Verify that MockupForgeConfig provides sensible defaults."""

    def test_no_credential_by_default(self, clean_env):
        """No API key is configured unless the environment provides one."""
        cfg = MockupForgeConfig(_env_file=None)
        assert cfg.gemini_api_key is None
        assert cfg.has_credential is False

    def test_default_server(self, clean_env):
        """Server binds to 0.0.0.0:8000 by default."""
        cfg = MockupForgeConfig(_env_file=None)
        assert cfg.server_host == "0.0.0.0"
        assert cfg.server_port == 8000

    def test_default_reference_limit_is_four_mib(self, clean_env):
        """Reference images are capped at 4 MiB by default."""
        cfg = MockupForgeConfig(_env_file=None)
        assert cfg.max_reference_image_bytes == FOUR_MIB == 4 * 1024 * 1024

    def test_default_placeholder_service(self, clean_env):
        """Placeholders are served from placehold.co by default."""
        cfg = MockupForgeConfig(_env_file=None)
        assert cfg.placeholder_base_url == "https://placehold.co"


class TestConfigEnvironment:
    """Verify environment variable loading."""

    def test_prefixed_key(self, clean_env):
        """MOCKUPFORGE_GEMINI_API_KEY should set the credential."""
        clean_env.setenv("MOCKUPFORGE_GEMINI_API_KEY", "prefixed")
        cfg = MockupForgeConfig(_env_file=None)
        assert cfg.gemini_api_key == "prefixed"

    def test_bare_gemini_key(self, clean_env):
        """The unprefixed GEMINI_API_KEY should also be accepted."""
        clean_env.setenv("GEMINI_API_KEY", "bare")
        cfg = MockupForgeConfig(_env_file=None)
        assert cfg.gemini_api_key == "bare"
        assert cfg.has_credential is True

    def test_model_override(self, clean_env):
        """MOCKUPFORGE_GEMINI_MODEL should override the model name."""
        clean_env.setenv("MOCKUPFORGE_GEMINI_MODEL", "other-model")
        cfg = MockupForgeConfig(_env_file=None)
        assert cfg.gemini_model == "other-model"

    def test_port_override(self, clean_env):
        """MOCKUPFORGE_SERVER_PORT should be coerced to an integer."""
        clean_env.setenv("MOCKUPFORGE_SERVER_PORT", "9001")
        cfg = MockupForgeConfig(_env_file=None)
        assert cfg.server_port == 9001


class TestCredential:
    """Verify has_credential semantics."""

    @pytest.mark.parametrize("key", ["", "   "])
    def test_blank_key_is_not_a_credential(self, clean_env, key):
        """Empty or whitespace-only keys should not count as configured."""
        cfg = MockupForgeConfig(_env_file=None, gemini_api_key=key)
        assert cfg.has_credential is False


class TestGenerationConfig:
    """Verify the generationConfig block sent upstream."""

    def test_defaults(self, test_config: MockupForgeConfig):
        """generation_config() should emit the camelCase upstream block."""
        assert test_config.generation_config() == {
            "temperature": 0.4,
            "topK": 32,
            "topP": 1.0,
            "maxOutputTokens": 2048,
            "responseModalities": ["TEXT", "IMAGE"],
        }

    def test_returns_copy_of_modalities(self, test_config: MockupForgeConfig):
        """Mutating the returned block must not change the config."""
        block = test_config.generation_config()
        block["responseModalities"].append("AUDIO")
        assert test_config.response_modalities == ["TEXT", "IMAGE"]


class TestConfigValidation:
    """Verify Pydantic constraints."""

    def test_port_below_range(self, clean_env):
        """Ports below 1024 should be rejected."""
        with pytest.raises(ValidationError):
            MockupForgeConfig(_env_file=None, server_port=80)

    def test_invalid_log_level(self, clean_env):
        """Unknown log levels should be rejected."""
        with pytest.raises(ValidationError):
            MockupForgeConfig(_env_file=None, log_level="VERBOSE")

    def test_non_positive_timeout(self, clean_env):
        """A zero timeout should be rejected."""
        with pytest.raises(ValidationError):
            MockupForgeConfig(_env_file=None, request_timeout=0)
