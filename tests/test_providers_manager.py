"""
Tests for providers/manager.py.

Covers:
  - config.provider_order(): primary first, fallbacks after, de-duplicated
  - build_providers(): order, adapter classes, keys from env, unknown names
"""
from __future__ import annotations

import config
from providers.anthropic_provider import AnthropicProvider
from providers.gemini_provider import GeminiProvider
from providers.manager import build_providers
from providers.openai_provider import OpenAIProvider
from providers.openrouter_provider import OpenRouterProvider


class TestProviderOrder:
    def test_primary_then_fallbacks(self, monkeypatch):
        monkeypatch.setattr(config, "PRIMARY_PROVIDER", "google")
        monkeypatch.setattr(config, "FALLBACK_PROVIDERS", ["anthropic", "openai"])
        assert config.provider_order() == ["google", "anthropic", "openai"]

    def test_duplicates_removed(self, monkeypatch):
        monkeypatch.setattr(config, "PRIMARY_PROVIDER", "google")
        monkeypatch.setattr(config, "FALLBACK_PROVIDERS", ["google", "openai", "openai"])
        assert config.provider_order() == ["google", "openai"]

    def test_empty(self, monkeypatch):
        monkeypatch.setattr(config, "PRIMARY_PROVIDER", "")
        monkeypatch.setattr(config, "FALLBACK_PROVIDERS", [])
        assert config.provider_order() == []

    def test_split_helper(self):
        assert config._split(" Google, ,OpenAI ") == ["google", "openai"]


class TestBuildProviders:
    def test_default_order_from_config(self):
        providers = build_providers()
        assert [type(p) for p in providers] == [AnthropicProvider, GeminiProvider]

    def test_explicit_order(self):
        providers = build_providers(["openrouter", "openai", "google", "anthropic"])
        assert [p.name for p in providers] == ["openrouter", "openai", "google", "anthropic"]
        assert isinstance(providers[0], OpenRouterProvider)
        assert isinstance(providers[1], OpenAIProvider)

    def test_keys_read_from_env(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        anthropic_p, google_p = build_providers(["anthropic", "google"])
        assert anthropic_p.has_credentials
        assert anthropic_p.api_key == "sk-ant-test"
        assert not google_p.has_credentials

    def test_gemini_alias_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "g-key")
        (google_p,) = build_providers(["google"])
        assert google_p.api_key == "g-key"

    def test_models_and_timeout_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "GEMINI_MODEL", "gemini-2.0-flash")
        monkeypatch.setattr(config, "PROVIDER_TIMEOUT_SECS", 12.5)
        (google_p,) = build_providers(["google"])
        assert google_p.full_name == "google/gemini-2.0-flash"
        assert google_p.timeout == 12.5

    def test_unknown_name_ignored(self):
        providers = build_providers(["nope", "openai"])
        assert [p.name for p in providers] == ["openai"]

    def test_openrouter_full_name_drops_vendor(self, monkeypatch):
        monkeypatch.setattr(config, "OPENROUTER_MODEL", "anthropic/claude-3-haiku")
        (p,) = build_providers(["openrouter"])
        assert p.full_name == "openrouter/claude-3-haiku"
