"""
Tests for key_store.py.

Covers:
  - get(): env var lookup, aliases, blank values
  - get_all_keys(): returns all known key names
  - mask(): various masking scenarios
"""
from __future__ import annotations

import key_store


class TestGet:
    def test_env_var_name_is_uppercased(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
        assert key_store.get("openai_api_key") == "sk-from-env"

    def test_returns_none_when_not_set(self):
        assert key_store.get("openai_api_key") is None

    def test_blank_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "   ")
        assert key_store.get("openai_api_key") is None

    def test_value_is_stripped(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "  sk-ant \n")
        assert key_store.get("anthropic_api_key") == "sk-ant"

    def test_alias_used_as_fallback(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
        assert key_store.get("google_api_key") == "gem-key"

    def test_canonical_name_wins_over_alias(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
        monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
        assert key_store.get("google_api_key") == "google-key"


class TestGetAllKeys:
    def test_returns_all_known_keys(self):
        keys = key_store.get_all_keys()
        for k in ["anthropic_api_key", "google_api_key", "openai_api_key", "openrouter_api_key"]:
            assert k in keys

    def test_set_key_appears(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "or-key")
        assert key_store.get_all_keys()["openrouter_api_key"] == "or-key"


class TestMask:
    def test_none_shows_not_set(self):
        assert key_store.mask(None) == "not set"

    def test_empty_shows_not_set(self):
        assert key_store.mask("") == "not set"

    def test_short_key_fully_hidden(self):
        assert key_store.mask("sk-ab") == "****"

    def test_exactly_8_chars_fully_hidden(self):
        assert key_store.mask("abcdefgh") == "****"

    def test_long_key_shows_partial(self):
        result = key_store.mask("sk-1234567890abcdef")
        assert result.startswith("sk-1")
        assert result.endswith("cdef")
        assert "***" in result
        assert "567890" not in result
