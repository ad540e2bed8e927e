"""
key_store.py — single source of truth for all provider API keys.

Keys are read from the environment (or .env, loaded by config.py) on every
call, so changing a key in the deployment environment takes effect on the
NEXT request.

Key names (env vars are the uppercase equivalent):
  anthropic_api_key   →  ANTHROPIC_API_KEY
  google_api_key      →  GOOGLE_API_KEY   (also GEMINI_API_KEY)
  openai_api_key      →  OPENAI_API_KEY
  openrouter_api_key  →  OPENROUTER_API_KEY
"""
from __future__ import annotations

import os
from typing import Optional

import config  # noqa: F401  (loads .env before the first lookup)

KNOWN_KEYS = [
    "anthropic_api_key",
    "google_api_key",
    "openai_api_key",
    "openrouter_api_key",
]

# Extra env var names accepted for a key, checked after the canonical one
_ALIASES: dict[str, list[str]] = {
    "google_api_key": ["GEMINI_API_KEY"],
}


def get(key_name: str) -> Optional[str]:
    """
    Return the value for key_name from the environment.
    Returns None if not set anywhere (empty / whitespace counts as unset).
    """
    for env_name in [key_name.upper(), *_ALIASES.get(key_name, [])]:
        value = os.getenv(env_name, "").strip()
        if value:
            return value
    return None


def get_all_keys() -> dict[str, Optional[str]]:
    """Return all known keys with their current values."""
    return {name: get(name) for name in KNOWN_KEYS}


def mask(value: Optional[str]) -> str:
    """Return a masked version safe to write to logs."""
    if not value:
        return "not set"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}{'*' * (len(value) - 8)}{value[-4:]}"
