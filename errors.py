"""
Pipeline-level exceptions.

Every error the caller can see derives from ListingError, whose to_dict()
gives the wire failure shape:  {"error": str, "details"?: str}

Per-attempt provider failures (ProviderError) live in providers/base.py; they
are recovered inside the pipeline and only surface aggregated through
AllProvidersFailedError.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from providers.base import ProviderError


class ListingError(Exception):
    """Base class for all errors returned to the caller."""

    http_status: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        result = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InputError(ListingError):
    """The request itself is unusable (e.g. no images). No provider is contacted."""

    http_status = 400


class NoProviderConfiguredError(ListingError):
    """No vision provider can be attempted. No provider is contacted."""

    http_status = 500

    def __init__(self, message: str = "No AI provider configured", details: Optional[str] = None):
        super().__init__(message, details)


class AllProvidersFailedError(ListingError):
    """Every attempted provider failed; details list each attempt in order."""

    http_status = 502

    def __init__(self, attempts: list["ProviderError"]):
        self.attempts = list(attempts)
        details = "; ".join(a.summary() for a in self.attempts)
        super().__init__("AI analysis failed: all providers failed", details or None)
