"""Tests for bridge_enrichment.config."""

from __future__ import annotations

from bridge_schema import ThumbnailSize

from bridge_enrichment.config import (
    DEFAULT_CODE_CONTEXT_WORDS,
    EnrichmentConfig,
    ProcessorConfig,
    ThumbnailConfig,
)


class TestProcessorConfig:
    def test_defaults(self):
        config = ProcessorConfig()
        assert config.phone_region == "US"
        assert config.phone_leniency == "possible"
        assert config.emoji_max_count == 5
        assert config.code_context_words == DEFAULT_CODE_CONTEXT_WORDS

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PROCESSOR_PHONE_REGION", "GB")
        monkeypatch.setenv("PROCESSOR_CODE_CONTEXT_WORDS", '["pin", "token"]')
        config = ProcessorConfig()
        assert config.phone_region == "GB"
        assert config.code_context_words == ["pin", "token"]


class TestThumbnailConfig:
    def test_defaults(self):
        config = ThumbnailConfig()
        assert config.default_size == ThumbnailSize(width=300, height=300)
        assert config.quality == 70
        assert config.allow_upscale is False
        assert config.cache_max_age_seconds == 86400

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("THUMBNAIL_MAX_WIDTH", "640")
        monkeypatch.setenv("THUMBNAIL_ALLOW_UPSCALE", "true")
        config = ThumbnailConfig()
        assert config.max_width == 640
        assert config.allow_upscale is True


class TestEnrichmentConfig:
    def test_defaults(self):
        config = EnrichmentConfig()
        assert config.port == 8080
        assert config.log_json is True
        assert isinstance(config.processors, ProcessorConfig)
        assert isinstance(config.thumbnail, ThumbnailConfig)

    def test_nested_sections_read_their_own_prefix(self, monkeypatch):
        monkeypatch.setenv("ENRICHMENT_PORT", "9000")
        monkeypatch.setenv("THUMBNAIL_QUALITY", "85")
        config = EnrichmentConfig()
        assert config.port == 9000
        assert config.thumbnail.quality == 85
