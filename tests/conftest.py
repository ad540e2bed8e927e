"""
Shared pytest fixtures.

Every test gets a clean provider environment: all API-key env vars are
removed and config is reset to its defaults, so nothing from a developer's
real .env leaks into the results.
"""
from __future__ import annotations

import base64
import sys
from pathlib import Path
from typing import Optional, Sequence

import pytest

# ── Make the project root importable without installing the package ────────────
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import config  # noqa: E402
from listing import AnalysisRequest, ImageInput  # noqa: E402
from providers.base import VisionProvider  # noqa: E402

_KEY_ENV_VARS = [
    "ANTHROPIC_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "OPENROUTER_API_KEY",
]

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
PNG_B64 = base64.b64encode(PNG_BYTES).decode()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "PRIMARY_PROVIDER", "anthropic")
    monkeypatch.setattr(config, "FALLBACK_PROVIDERS", ["google"])
    monkeypatch.setattr(config, "PRICE_ADJUSTMENT_PCT", 0.0)
    monkeypatch.setattr(config, "DEFAULT_REGION", "UK")
    yield


def make_request(**kwargs) -> AnalysisRequest:
    defaults = dict(
        images=(ImageInput(data=PNG_B64, mime_type="image/png"),),
        extra_info=None,
        region="UK",
        spicy_mode=False,
        premium_mode=False,
    )
    defaults.update(kwargs)
    return AnalysisRequest(**defaults)


class FakeProvider(VisionProvider):
    """In-memory provider: returns `text` or raises `error` from _request."""

    def __init__(self, name: str, text: str = "{}", error: Optional[Exception] = None,
                 api_key: Optional[str] = "test-key"):
        self.name = name
        super().__init__(api_key, "model")
        self.text = text
        self.error = error
        self.calls: list[tuple[Sequence[ImageInput], str]] = []

    async def _request(self, images, instruction):
        self.calls.append((images, instruction))
        if self.error is not None:
            raise self.error
        return self.text

    def _translate_error(self, exc):
        return None

