"""
Provider Manager — turns configuration + API keys into the ordered adapter list.

Order comes from config.provider_order(): PRIMARY_PROVIDER first, then
FALLBACK_PROVIDERS in declared order. Keys are read from key_store on every
call so a rotated key is picked up by the next request.

Providers are returned even when their key is missing; deciding whether to
skip them belongs to the pipeline.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import config
import key_store
from providers.base import VisionProvider

logger = logging.getLogger(__name__)


def _anthropic(key: Optional[str]) -> VisionProvider:
    from providers.anthropic_provider import AnthropicProvider
    return AnthropicProvider(key, config.ANTHROPIC_MODEL, config.PROVIDER_TIMEOUT_SECS)


def _google(key: Optional[str]) -> VisionProvider:
    from providers.gemini_provider import GeminiProvider
    return GeminiProvider(key, config.GEMINI_MODEL, config.PROVIDER_TIMEOUT_SECS)


def _openai(key: Optional[str]) -> VisionProvider:
    from providers.openai_provider import OpenAIProvider
    return OpenAIProvider(key, config.OPENAI_MODEL, config.PROVIDER_TIMEOUT_SECS)


def _openrouter(key: Optional[str]) -> VisionProvider:
    from providers.openrouter_provider import OpenRouterProvider
    return OpenRouterProvider(key, config.OPENROUTER_MODEL, config.PROVIDER_TIMEOUT_SECS)


# name → (key_store key, factory)
REGISTRY: dict[str, tuple[str, Callable[[Optional[str]], VisionProvider]]] = {
    "anthropic":  ("anthropic_api_key",  _anthropic),
    "google":     ("google_api_key",     _google),
    "openai":     ("openai_api_key",     _openai),
    "openrouter": ("openrouter_api_key", _openrouter),
}


def build_providers(order: Optional[Sequence[str]] = None) -> list[VisionProvider]:
    """Instantiate one adapter per configured provider name, in priority order."""
    names = list(order) if order is not None else config.provider_order()
    providers: list[VisionProvider] = []

    for name in names:
        entry = REGISTRY.get(name)
        if entry is None:
            logger.warning("Unknown provider %r in configuration — ignored", name)
            continue
        key_name, factory = entry
        key = key_store.get(key_name)
        provider = factory(key)
        providers.append(provider)
        logger.debug("Configured provider %s (key %s)", provider.full_name, key_store.mask(key))

    return providers
