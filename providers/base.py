"""
Shared types and base class for all vision providers.

An adapter's only job is: images + instruction in, the provider's raw text
out. It never looks at listing semantics. Every failure it knows about leaves
as a ProviderError with one of the ErrorKind values below.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from listing import ImageInput

logger = logging.getLogger(__name__)


# ── Error taxonomy ────────────────────────────────────────────────────────────

class ErrorKind(str, Enum):
    AUTH           = "auth"
    RATE_LIMIT     = "rate_limit"
    NETWORK        = "network"
    BAD_STATUS     = "bad_status"
    MALFORMED_BODY = "malformed_body"


class ProviderError(Exception):
    """One provider attempt failed. The pipeline moves on to the next provider."""

    def __init__(
        self,
        kind: ErrorKind,
        detail: str,
        provider: str = "",
        status_code: Optional[int] = None,
    ):
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.provider = provider
        self.status_code = status_code

    def summary(self) -> str:
        return f"{self.provider or 'unknown'}: {self.kind.value} — {self.detail}"

    def __str__(self) -> str:
        return self.summary()


def error_for_status(status_code: int, body: str, provider: str) -> ProviderError:
    """Map a non-2xx HTTP status onto the error taxonomy."""
    body = (body or "")[:500]
    detail = f"HTTP {status_code}: {body}" if body else f"HTTP {status_code}"
    if status_code in (401, 403):
        kind = ErrorKind.AUTH
    elif status_code == 429:
        kind = ErrorKind.RATE_LIMIT
    else:
        kind = ErrorKind.BAD_STATUS
    return ProviderError(kind, detail, provider, status_code=status_code)


# ── Shared result type ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RawProviderResponse:
    """Unparsed text from one successful provider call."""
    provider: str          # e.g. "anthropic/claude-3-5-sonnet-20241022"
    text: str
    latency_ms: int = 0


# ── Abstract base ──────────────────────────────────────────────────────────────

class VisionProvider(ABC):
    """Base class all vision providers must implement."""

    name: str           # e.g. "anthropic"
    model_id: str       # e.g. "claude-3-5-sonnet-20241022"

    def __init__(self, api_key: Optional[str], model: str, timeout: float = 60.0):
        self.api_key = api_key
        self.model_id = model
        self.timeout = timeout

    @property
    def full_name(self) -> str:
        return f"{self.name}/{self.model_id}"

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    async def analyze(self, images: Sequence[ImageInput], instruction: str) -> RawProviderResponse:
        """
        Run one vision call. Raises ProviderError for every classified failure;
        anything the adapter cannot classify propagates unchanged.
        """
        if not self.has_credentials:
            raise ProviderError(ErrorKind.AUTH, "API key not configured", self.full_name)

        t0 = time.monotonic()
        try:
            text = await self._request(images, instruction)
        except ProviderError:
            raise
        except Exception as exc:
            translated = self._translate_error(exc)
            if translated is None:
                raise
            raise translated from exc

        if not text or not text.strip():
            raise ProviderError(ErrorKind.MALFORMED_BODY, "Empty response text", self.full_name)

        latency_ms = int((time.monotonic() - t0) * 1000)
        return RawProviderResponse(provider=self.full_name, text=text, latency_ms=latency_ms)

    @abstractmethod
    async def _request(self, images: Sequence[ImageInput], instruction: str) -> str:
        """Perform the provider call and return its text (transport framing removed)."""
        ...

    @abstractmethod
    def _translate_error(self, exc: Exception) -> Optional[ProviderError]:
        """Classify an SDK / transport exception, or return None if unknown."""
        ...
