"""
Central configuration — reads from .env file.

All values are plain module attributes so tests (and anything else that needs
to) can override them with monkeypatch.setattr(config, "X", ...).

API keys are NOT read here — key_store.py looks them up on every request so a
rotated key takes effect without restarting the server.
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _split(raw: str) -> list[str]:
    return [x.strip().lower() for x in raw.split(",") if x.strip()]


# ── AI Vision providers ────────────────────────────────────────────────────────
# Providers are tried in order: PRIMARY_PROVIDER first, then each entry of
# FALLBACK_PROVIDERS. Known names: anthropic, google, openai, openrouter.
# A provider whose key is missing is skipped (see pipeline.analyze_listing).
PRIMARY_PROVIDER: str         = os.getenv("PRIMARY_PROVIDER", "anthropic").strip().lower()
FALLBACK_PROVIDERS: list[str] = _split(os.getenv("FALLBACK_PROVIDERS", "google"))

ANTHROPIC_MODEL: str  = os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022")
GEMINI_MODEL: str     = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
OPENAI_MODEL: str     = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")

# Per-call timeout handed to each SDK client. There is no retry: a timeout
# simply moves the pipeline on to the next provider.
PROVIDER_TIMEOUT_SECS: float = float(os.getenv("PROVIDER_TIMEOUT_SECS", "60"))
MAX_OUTPUT_TOKENS: int       = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))

# ── Listing behaviour ─────────────────────────────────────────────────────────
DEFAULT_REGION: str = os.getenv("DEFAULT_REGION", "UK").strip().upper() or "UK"

# Optional across-the-board price bump applied after validation, in percent.
# 0 disables it (default). e.g. 10 → prices × 1.10
PRICE_ADJUSTMENT_PCT: float = float(os.getenv("PRICE_ADJUSTMENT_PCT", "0"))

# ── HTTP server ───────────────────────────────────────────────────────────────
SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8080"))

# Log file lives here
DATA_DIR: str = os.getenv("DATA_DIR", "data")


def provider_order() -> list[str]:
    """Primary provider followed by the fallbacks, duplicates removed."""
    order: list[str] = []
    for name in [PRIMARY_PROVIDER, *FALLBACK_PROVIDERS]:
        if name and name not in order:
            order.append(name)
    return order
